"""Tests for the per-type block editors and the editor registry."""
import pytest
from memoryboard.block import Block, BlockType, create_block
from memoryboard.editor import (
    ChecklistEditor,
    DividerEditor,
    EditorMeta,
    ImageEditor,
    MoodEditor,
    TextEditor,
    UnknownBlockTypeEditor,
    checklist_stats,
    get_intensity_color,
    get_intensity_label,
    render_editor,
    split_emotion,
)
from memoryboard.editor.checklist import toggle_checklist_item
from memoryboard.editor.mood import MAX_NOTE_LENGTH


@pytest.fixture
def changes():
    return []


class TestDispatch:
    """Tests for picking an editor by block type."""

    @pytest.mark.parametrize("block_type,editor_cls", [
        ("paragraph", TextEditor),
        ("checklist", ChecklistEditor),
        ("image", ImageEditor),
        ("mood", MoodEditor),
        ("divider", DividerEditor),
    ])
    def test_each_type_has_an_editor(self, block_type, editor_cls):
        assert isinstance(render_editor(create_block(block_type)), editor_cls)

    def test_every_registered_type_is_covered(self):
        assert set(EditorMeta.list_editors().keys()) == set(BlockType)

    def test_unknown_type_gets_placeholder(self, changes):
        block = Block(id="b1", type="video", props={"src": "x"})
        editor = render_editor(block, on_change=changes.append)
        assert isinstance(editor, UnknownBlockTypeEditor)
        assert editor.notice == "Unknown block type"
        assert editor.disabled
        editor.update_props(src="y")
        assert changes == []
        assert editor.block.props == {"src": "x"}


class TestTextEditor:
    """Tests for rich text editing commands."""

    def make(self, markup, changes, **kwargs):
        block = create_block("paragraph", [{"type": "text", "text": markup}])
        return TextEditor(block, on_change=changes.append, **kwargs)

    def test_bold_is_stored_as_markup(self, changes):
        editor = self.make("<p>Hello world</p>", changes)
        editor.apply_mark("bold", 0, 5)
        assert len(changes) == 1
        assert changes[0].content == [{"type": "text", "text": "<p><strong>Hello</strong> world</p>"}]
        assert editor.markup == "<p><strong>Hello</strong> world</p>"

    def test_original_block_is_untouched(self, changes):
        editor = self.make("<p>Hello</p>", changes)
        original = editor.block
        editor.insert_text("!", 5)
        assert original.content == [{"type": "text", "text": "<p>Hello</p>"}]
        assert changes[-1].id == original.id
        assert changes[-1].content[0]["text"] == "<p>Hello!</p>"

    def test_alignment(self, changes):
        editor = self.make("<p>x</p>", changes)
        assert editor.alignment == "left"
        editor.run("set-alignment", alignment="center")
        assert changes[-1].props["textAlignment"] == "center"
        with pytest.raises(ValueError):
            editor.set_alignment("right")

    def test_headings_and_lists(self, changes):
        editor = self.make("<p>Title</p><p>one</p><p>two</p>", changes)
        editor.set_heading_level(1, 0)
        editor.toggle_list("bullet", 6, 13)
        assert editor.markup == "<h1>Title</h1><ul><li>one</li><li>two</li></ul>"

    def test_set_markup_sanitizes(self, changes):
        editor = self.make("", changes)
        editor.set_markup('<p onclick="x()">Hi<script>bad()</script></p>')
        assert changes[-1].content == [{"type": "text", "text": "<p>Hi</p>"}]

    def test_counts(self, changes):
        editor = self.make("<p>We went <em>out</em></p>", changes)
        assert editor.word_count == 3
        assert editor.char_count == 11

    def test_disabled_editor_does_not_emit(self, changes):
        editor = self.make("<p>Hello</p>", changes, disabled=True)
        editor.apply_mark("bold", 0, 5)
        assert changes == []

    def test_delete_range(self, changes):
        editor = self.make("<p>Hello world</p>", changes)
        editor.delete_range(5, 11)
        assert editor.markup == "<p>Hello</p>"


class TestChecklistEditor:
    """Tests for checklist item editing."""

    def test_add_items(self, changes):
        editor = ChecklistEditor(create_block("checklist"), on_change=changes.append)
        first = editor.add_item(text="pack")
        editor.add_item(text="drive")
        editor.add_item(after_index=0, text="eat")
        assert [item.text for item in editor.items] == ["pack", "eat", "drive"]
        assert isinstance(first.id, str)
        assert len(changes) == 3

    def test_last_item_cannot_be_removed(self, changes):
        editor = ChecklistEditor(create_block("checklist"), on_change=changes.append)
        only = editor.add_item(text="one")
        assert editor.remove_item(only.id) is False
        second = editor.add_item(text="two")
        assert editor.remove_item(second.id) is True
        assert [item.text for item in editor.items] == ["one"]
        assert editor.remove_item("missing") is False

    def test_toggle_stamps_completion(self, changes):
        editor = ChecklistEditor(create_block("checklist"), on_change=changes.append)
        item = editor.add_item(text="one")
        editor.toggle_item(item.id, now="2024-05-01T10:00:00.000Z")
        stored = changes[-1].content[0]
        assert stored["checked"] is True
        assert stored["completedAt"] == "2024-05-01T10:00:00.000Z"
        editor.toggle_item(item.id)
        assert changes[-1].content[0]["checked"] is False
        assert changes[-1].content[0]["completedAt"] is None

    def test_update_item(self, changes):
        editor = ChecklistEditor(create_block("checklist"), on_change=changes.append)
        item = editor.add_item(text="one")
        editor.update_item(item.id, "uno")
        assert editor.items[0].text == "uno"

    def test_stats(self):
        block = create_block("checklist", [
            {"id": "1", "text": "a", "checked": True},
            {"id": "2", "text": "b", "checked": True},
            {"id": "3", "text": "c", "checked": False},
        ])
        stats = checklist_stats(block.checklist_items())
        assert (stats.completed, stats.total, stats.percentage) == (2, 3, 67)
        assert checklist_stats([]).percentage == 0

    def test_toggle_out_of_range(self):
        with pytest.raises(IndexError):
            toggle_checklist_item(create_block("checklist"), 0)


class TestMoodEditor:
    """Tests for the mood tracker editor and intensity scale."""

    @pytest.mark.parametrize("value,label,color", [
        (1, "Very Low", "#EF4444"),
        (3, "Low", "#F97316"),
        (5, "Moderate", "#EAB308"),
        (8, "High", "#22C55E"),
        (10, "Very High", "#8B5CF6"),
    ])
    def test_intensity_scale(self, value, label, color):
        assert get_intensity_label(value) == label
        assert get_intensity_color(value) == color

    def test_setters(self, changes):
        editor = MoodEditor(create_block("mood"), on_change=changes.append)
        editor.set_emotion("😊 Happy")
        editor.set_intensity(42)
        editor.set_note("x" * (MAX_NOTE_LENGTH + 20))
        props = changes[-1].props
        assert props["emotion"] == "😊 Happy"
        assert props["intensity"] == 10
        assert len(props["note"]) == MAX_NOTE_LENGTH
        assert editor.intensity_label == "Very High"

    def test_intensity_lower_bound(self, changes):
        editor = MoodEditor(create_block("mood"), on_change=changes.append)
        editor.set_intensity(-3)
        assert changes[-1].props["intensity"] == 1

    @pytest.mark.parametrize("emotion,expected", [
        ("😊 Happy", ("😊", "Happy")),
        ("Happy", ("", "Happy")),
        ("", ("", "")),
    ])
    def test_split_emotion(self, emotion, expected):
        assert split_emotion(emotion) == expected


class TestDividerEditor:
    """Tests for divider style and color."""

    def test_style_and_color(self, changes):
        editor = DividerEditor(create_block("divider"), on_change=changes.append)
        editor.set_style("stars")
        editor.set_color("#3B82F6")
        assert changes[-1].props == {"style": "stars", "color": "#3B82F6"}

    def test_unknown_style(self):
        editor = DividerEditor(create_block("divider"))
        with pytest.raises(ValueError):
            editor.set_style("zigzag")


class TestDisabledEditors:
    """Disabled editors keep their block and never call on_change."""

    def test_mood(self, changes):
        editor = MoodEditor(create_block("mood"), on_change=changes.append, disabled=True)
        editor.set_emotion("😊 Happy")
        editor.set_intensity(8)
        editor.set_note("calm")
        assert changes == []
        assert editor.emotion == ""

    def test_divider(self, changes):
        block = create_block("divider")
        editor = DividerEditor(block, on_change=changes.append, disabled=True)
        editor.set_style("stars")
        assert changes == []
        assert editor.block is block

    def test_checklist(self, changes):
        block = create_block("checklist", [
            {"id": "1", "text": "a", "checked": False},
            {"id": "2", "text": "b", "checked": False},
        ])
        editor = ChecklistEditor(block, on_change=changes.append, disabled=True)
        editor.add_item(text="c")
        editor.toggle_item("1")
        editor.update_item("2", "bee")
        assert editor.remove_item("2") is False
        assert changes == []
        assert [item.text for item in editor.items] == ["a", "b"]

    def test_image(self, changes):
        block = create_block("image").with_props(images=[
            {"id": "img_0", "url": "data:image/png;base64,AAAA", "name": "a.png"},
        ])
        editor = ImageEditor(block, on_change=changes.append, disabled=True)
        editor.remove_image("img_0")
        editor.update_metadata("img_0", "caption", "Sunset")
        editor.flush()
        assert changes == []
        assert [img.id for img in editor.images] == ["img_0"]
