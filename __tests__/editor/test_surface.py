"""Tests for the document host (BlockEditor) and the block type selector."""
import pytest
from memoryboard.block import BlockType, create_block
from memoryboard.editor import BlockEditor, BlockTypeSelector, DragEvent, MoodEditor, TextEditor


def types(blocks):
    return [b.type for b in blocks]


@pytest.fixture
def changes():
    return []


@pytest.fixture
def document():
    return [create_block("mood"), create_block("paragraph"), create_block("image")]


class TestHostMutations:
    """Tests for adding, removing and moving blocks through the host."""

    def test_add_block_type(self, changes):
        host = BlockEditor([create_block("mood")], on_change=changes.append)
        block = host.add_block_type("paragraph")
        assert block is not None
        assert types(host.blocks) == ["mood", "paragraph"]
        assert len(changes) == 1
        assert changes[0][1].id == block.id

    def test_type_limit_is_enforced(self, changes):
        host = BlockEditor([create_block("mood")], on_change=changes.append)
        assert host.add_block_type("mood") is None
        assert host.add_block_type("paragraph") is not None
        assert host.add_block_type("paragraph") is None
        assert len(changes) == 1

    def test_max_blocks(self, changes):
        host = BlockEditor([create_block("mood"), create_block("divider")], on_change=changes.append, max_blocks=2)
        assert host.is_full
        assert host.add_block_type("paragraph") is None
        assert changes == []

    def test_max_blocks_from_settings(self, monkeypatch):
        from memoryboard import config
        monkeypatch.setenv("MEMORYBOARD_MAX_BLOCKS", "1")
        config.reset_settings()
        host = BlockEditor([create_block("mood")])
        assert host.max_blocks == 1
        assert host.is_full

    def test_pinned_block_cannot_be_deleted(self, document, changes):
        host = BlockEditor(document, on_change=changes.append)
        assert host.delete_block(document[0].id) is False
        assert host.delete_block(document[1].id) is True
        assert types(host.blocks) == ["mood", "image"]
        assert len(changes) == 1

    def test_last_block_is_kept(self, changes):
        paragraph = create_block("paragraph")
        host = BlockEditor([paragraph], on_change=changes.append)
        assert host.delete_block(paragraph.id) is False
        assert changes == []

    def test_insert_block_type(self, document):
        host = BlockEditor(document)
        host.insert_block_type("divider", 0)
        assert types(host.blocks) == ["mood", "divider", "paragraph", "image"]

    def test_move(self, document):
        host = BlockEditor(document)
        assert host.can_move_down(document[1].id)
        assert not host.can_move_up(document[1].id)
        host.move_down(document[1].id)
        assert types(host.blocks) == ["mood", "image", "paragraph"]
        host.move_up(document[1].id)
        assert types(host.blocks) == ["mood", "paragraph", "image"]

    def test_disabled_host_refuses_changes(self, document, changes):
        host = BlockEditor(document, on_change=changes.append, disabled=True)
        assert host.add_block_type("divider") is None
        assert host.delete_block(document[1].id) is False
        assert host.update_block(document[1].with_props(textAlignment="center")) is False
        assert host.reorder(0, 1) is False
        assert host.move_down(document[1].id) is False
        assert host.move_up(document[2].id) is False
        assert host.drag_end(DragEvent(active_id=document[2].id, over_id=document[1].id)) is False
        assert host.blocks == document
        assert changes == []

    def test_set_blocks_does_not_emit(self, document, changes):
        host = BlockEditor([], on_change=changes.append)
        host.set_blocks(document)
        assert host.pinned_block.id == document[0].id
        assert [b.id for b in host.sortable_blocks] == [document[1].id, document[2].id]
        assert changes == []

    def test_unchanged_result_does_not_emit(self, document, changes):
        host = BlockEditor(document, on_change=changes.append)
        host.reorder(0, 0)
        assert changes == []


class TestDragAndDrop:
    """Tests for drag gestures over the document."""

    def test_reorder_by_drag(self, document, changes):
        host = BlockEditor(document, on_change=changes.append)
        host.drag_start(document[2].id)
        assert host.active_id == document[2].id
        assert host.drag_end(DragEvent(active_id=document[2].id, over_id=document[1].id))
        assert types(host.blocks) == ["mood", "image", "paragraph"]
        assert host.active_id is None

    def test_drop_outside_is_noop(self, document, changes):
        host = BlockEditor(document, on_change=changes.append)
        assert host.drag_end(DragEvent(active_id=document[2].id)) is False
        assert changes == []

    def test_drop_on_pinned_is_noop(self, document, changes):
        host = BlockEditor(document, on_change=changes.append)
        assert host.drag_end(DragEvent(active_id=document[2].id, over_id=document[0].id)) is False
        assert host.blocks[0].id == document[0].id

    def test_block_type_dropped_after_target(self, document):
        host = BlockEditor(document)
        event = DragEvent(active_id="palette-divider", over_id=document[1].id, block_type="divider")
        assert host.drag_over(event) == 1
        assert host.drag_end(event)
        assert types(host.blocks) == ["mood", "paragraph", "divider", "image"]
        assert host.drag_over_index is None

    def test_block_type_dropped_on_unknown_target_appends(self, document):
        host = BlockEditor(document)
        event = DragEvent(active_id="palette-divider", over_id="elsewhere", block_type="divider")
        assert host.drag_over(event) == 3
        host.drag_end(event)
        assert types(host.blocks) == ["mood", "paragraph", "image", "divider"]

    def test_exhausted_block_type_is_not_dropped(self, document):
        host = BlockEditor(document)
        event = DragEvent(active_id="palette-mood", over_id=document[1].id, block_type="mood")
        assert host.drag_end(event) is False
        assert len(host.blocks) == 3


class TestChildControllers:
    """Tests for per-block editors created by the host."""

    def test_editor_updates_flow_to_host(self, document, changes):
        host = BlockEditor(document, on_change=changes.append)
        editor = host.editor_for(document[0].id)
        assert isinstance(editor, MoodEditor)
        editor.set_emotion("😊 Happy")
        assert host.pinned_block.props["emotion"] == "😊 Happy"
        assert len(changes) == 1

    def test_editors_for_every_block(self, document):
        host = BlockEditor(document)
        editors = host.editors()
        assert len(editors) == 3
        assert isinstance(editors[1], TextEditor)
        assert host.editor_for("missing") is None

    def test_selector_adds_through_host(self, document):
        host = BlockEditor(document)
        selector = host.selector()
        assert BlockType.MOOD not in [d.id for d in selector.available]
        block = selector.select("divider")
        assert block is not None
        assert host.blocks[-1].id == block.id

    def test_selector_hidden_when_full(self, document):
        host = BlockEditor(document, max_blocks=3)
        assert not host.selector().is_visible


class TestBlockTypeSelector:
    """Tests for the block type palette."""

    def test_open_close_toggle(self):
        selector = BlockTypeSelector([], on_add_block=lambda b: None)
        selector.toggle()
        assert selector.is_open
        selector.toggle()
        assert not selector.is_open

    def test_disabled_selector_stays_closed(self):
        selector = BlockTypeSelector([], on_add_block=lambda b: None, disabled=True)
        selector.open()
        assert not selector.is_open
        assert selector.select("divider") is None

    def test_rotate_wraps(self):
        selector = BlockTypeSelector([], on_add_block=lambda b: None)
        count = len(selector.available)
        assert selector.rotate("previous") == count - 1
        assert selector.rotate("next") == 0

    def test_exhausted_type_is_refused(self):
        added = []
        selector = BlockTypeSelector([create_block("mood")], on_add_block=added.append)
        assert selector.select("mood") is None
        assert added == []

    def test_drop_inserts_after_target(self):
        paragraph = create_block("paragraph")
        inserted = []
        selector = BlockTypeSelector(
            [create_block("mood"), paragraph],
            on_add_block=lambda b: None,
            on_insert_block=lambda b, i: inserted.append((b.type, i)),
        )
        selector.drop("divider", paragraph.id)
        assert inserted == [("divider", 1)]

    def test_by_category(self):
        selector = BlockTypeSelector([create_block("mood")], on_add_block=lambda b: None)
        assert selector.by_category
