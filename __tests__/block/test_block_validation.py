"""Tests for per-block and per-document validation."""
import pytest
from memoryboard.block import (
    Block,
    BlockValidationError,
    create_block,
    validate_block,
    validate_document,
    validate_document_errors,
)


class TestGenericChecks:
    """Tests for checks shared by every block type."""

    def test_missing_id_short_circuits(self):
        result = validate_block({"type": "mood", "props": {}})
        assert not result.valid
        assert result.errors == ["Block must have id and type"]

    def test_missing_type(self):
        result = validate_block({"id": "1"})
        assert result.errors == ["Block must have id and type"]

    def test_unregistered_type(self):
        result = validate_block({"id": "1", "type": "video"})
        assert result.errors == ["Invalid block type: video"]

    def test_result_is_falsy_when_invalid(self):
        assert not validate_block({"id": "1", "type": "video"})
        assert validate_block(create_block("divider"))


class TestTypeRules:
    """Tests for per-type validation rules."""

    def test_mood_reports_both_errors(self):
        result = validate_block({"id": "1", "type": "mood", "props": {"emotion": "", "intensity": 11}})
        assert not result.valid
        assert result.errors == [
            "Mood blocks must have an emotion selected",
            "Mood intensity must be between 1 and 10",
        ]

    def test_new_mood_block_needs_emotion(self):
        block = create_block("mood")
        assert validate_block(block).errors == ["Mood blocks must have an emotion selected"]
        assert validate_block(block.with_props(emotion="😊 Happy")).valid

    @pytest.mark.parametrize("intensity", [0, 11, 5.5, "5", True, None])
    def test_bad_intensity(self, intensity):
        block = create_block("mood").with_props(emotion="😊 Happy", intensity=intensity)
        assert validate_block(block).errors == ["Mood intensity must be between 1 and 10"]

    @pytest.mark.parametrize("intensity", [1, 5, 10])
    def test_good_intensity(self, intensity):
        block = create_block("mood").with_props(emotion="😊 Happy", intensity=intensity)
        assert validate_block(block).valid

    def test_paragraph_needs_content(self):
        assert validate_block(create_block("paragraph")).errors == ["Text blocks must have content"]
        assert validate_block(create_block("paragraph", [{"type": "text", "text": "x"}])).valid

    def test_image_needs_images(self):
        block = create_block("image")
        assert validate_block(block).errors == ["Image blocks must have at least one image"]
        assert validate_block(block.with_props(images=[{"id": "i", "url": "data:image/png;base64,"}])).valid

    def test_checklist_and_divider_have_no_rules(self):
        assert validate_block(create_block("checklist")).valid
        assert validate_block(create_block("divider")).valid


class TestDocumentValidation:
    """Tests for validating a whole document."""

    def test_only_failures_are_reported(self):
        blocks = [
            create_block("mood").with_props(emotion="😊 Happy"),
            create_block("paragraph"),
            create_block("divider"),
        ]
        failures = validate_document(blocks)
        assert list(failures.keys()) == [1]

    def test_errors_carry_index(self):
        blocks = [create_block("divider"), Block(id="x", type="mood", props={"emotion": "", "intensity": 3})]
        errors = validate_document_errors(blocks)
        assert len(errors) == 1
        assert isinstance(errors[0], BlockValidationError)
        assert errors[0].index == 1
        assert str(errors[0]) == "Block 2: Mood blocks must have an emotion selected"
