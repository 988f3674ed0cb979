"""
Per-block validation.

validate_block runs the generic checks first (id/type present, type
registered), which short-circuit, then the rules of the block's type. Type
rules are looked up by BlockType; types without rules always pass.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Mapping

from ..errors import MemoryBoardError
from .block import Block
from .types import BlockType


logger = logging.getLogger(__name__)


MIN_INTENSITY = 1
MAX_INTENSITY = 10


class BlockValidationError(MemoryBoardError):
    """A block at a given document index broke one or more rules."""

    def __init__(self, index: int, errors: list[str]):
        self.index = index
        self.errors = list(errors)
        super().__init__(f"Block {index + 1}: {', '.join(self.errors)}")


@dataclass
class ValidationResult:
    valid: bool
    errors: list[str] = field(default_factory=list)

    def __bool__(self) -> bool:
        return self.valid


def _as_mapping(block: Block | Mapping[str, Any]) -> Mapping[str, Any]:
    if isinstance(block, Block):
        return {"id": block.id, "type": block.type, "props": block.props, "content": block.content}
    return block


def _validate_paragraph(block: Mapping[str, Any]) -> list[str]:
    content = block.get("content")
    if not isinstance(content, list) or len(content) == 0:
        return ["Text blocks must have content"]
    return []


def _validate_image(block: Mapping[str, Any]) -> list[str]:
    images = (block.get("props") or {}).get("images")
    if not isinstance(images, list) or len(images) == 0:
        return ["Image blocks must have at least one image"]
    return []


def is_valid_intensity(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and MIN_INTENSITY <= value <= MAX_INTENSITY


def _validate_mood(block: Mapping[str, Any]) -> list[str]:
    props = block.get("props") or {}
    errors = []
    if not props.get("emotion"):
        errors.append("Mood blocks must have an emotion selected")
    if not is_valid_intensity(props.get("intensity")):
        errors.append(f"Mood intensity must be between {MIN_INTENSITY} and {MAX_INTENSITY}")
    return errors


_TYPE_RULES: dict[BlockType, Callable[[Mapping[str, Any]], list[str]]] = {
    BlockType.PARAGRAPH: _validate_paragraph,
    BlockType.IMAGE: _validate_image,
    BlockType.MOOD: _validate_mood,
}


def validate_block(block: Block | Mapping[str, Any]) -> ValidationResult:
    """
    Validate a single block against its type's rules.

    Args:
        block: A Block or its serialized dict form

    Returns:
        ValidationResult with every rule violation found
    """
    data = _as_mapping(block)
    if not data.get("id") or not data.get("type"):
        return ValidationResult(valid=False, errors=["Block must have id and type"])

    block_type = BlockType.try_parse(data["type"])
    if block_type is None:
        return ValidationResult(valid=False, errors=[f"Invalid block type: {data['type']}"])

    rule = _TYPE_RULES.get(block_type)
    errors = rule(data) if rule else []
    return ValidationResult(valid=not errors, errors=errors)


def validate_document(blocks: Iterable[Block | Mapping[str, Any]]) -> dict[int, ValidationResult]:
    """Validate every block; returns only the failing ones, keyed by index."""
    failures = {}
    for index, block in enumerate(blocks):
        result = validate_block(block)
        if not result.valid:
            failures[index] = result
    return failures


def validate_document_errors(blocks: Iterable[Block | Mapping[str, Any]]) -> list[BlockValidationError]:
    """Per-index validation errors, ready to be batched for the user."""
    errors = [BlockValidationError(index, result.errors) for index, result in validate_document(blocks).items()]
    if errors:
        logger.debug(f"Document has {len(errors)} invalid block(s)")
    return errors
