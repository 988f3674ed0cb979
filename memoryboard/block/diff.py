"""
Document Diff - Compare two content documents and identify block changes.

Blocks are matched by id, so a reorder shows up as "moved" rather than as a
remove/add pair.

Usage:
    from memoryboard.block.diff import diff_documents

    diff = diff_documents(saved_blocks, edited_blocks)

    if not diff.is_identical:
        print(diff.summary())
        for change in diff.iter_changes():
            print(f"{change.block_id}: {change.status}")
"""

from __future__ import annotations
import hashlib
import json
from typing import Any, Iterable, Iterator, Literal

from pydantic import BaseModel, Field

from .block import Block


# =============================================================================
# Diff Models
# =============================================================================

class FieldChange(BaseModel):
    """Represents a change in a single field."""
    field: str
    old_value: Any
    new_value: Any

    def __repr__(self) -> str:
        return f"{self.field}: {self.old_value!r} → {self.new_value!r}"


class BlockChange(BaseModel):
    """Diff for a single block, matched across both documents by id."""
    block_id: str
    block_type: str
    status: Literal["unchanged", "modified", "moved", "added", "removed"] = "unchanged"

    index_change: tuple[int | None, int | None] = (None, None)
    props_change: tuple[dict, dict] | None = None
    content_change: tuple[list, list] | None = None

    @property
    def has_field_changes(self) -> bool:
        return self.props_change is not None or self.content_change is not None

    @property
    def field_changes(self) -> list[FieldChange]:
        changes = []
        if self.props_change:
            changes.append(FieldChange(field="props", old_value=self.props_change[0], new_value=self.props_change[1]))
        if self.content_change:
            changes.append(FieldChange(field="content", old_value=self.content_change[0], new_value=self.content_change[1]))
        return changes

    def __repr__(self) -> str:
        if self.status in ("unchanged", "added", "removed", "moved"):
            return f"BlockChange(id={self.block_id!r}, {self.status})"
        fields = [fc.field for fc in self.field_changes]
        return f"BlockChange(id={self.block_id!r}, modified: {fields})"


class DocumentDiff(BaseModel):
    """Complete diff between two content documents."""

    hash_a: str
    hash_b: str
    changes: list[BlockChange] = Field(default_factory=list)

    @property
    def is_identical(self) -> bool:
        return self.hash_a == self.hash_b

    @property
    def change_count(self) -> int:
        return sum(1 for _ in self.iter_changes())

    @property
    def has_structural_changes(self) -> bool:
        """True if blocks were added, removed or moved."""
        return any(c.status in ("added", "removed", "moved") for c in self.iter_changes())

    def iter_changes(self) -> Iterator[BlockChange]:
        for change in self.changes:
            if change.status != "unchanged":
                yield change

    def get_changes_by_status(self) -> dict[str, list[BlockChange]]:
        result: dict[str, list[BlockChange]] = {
            "added": [],
            "removed": [],
            "modified": [],
            "moved": [],
        }
        for change in self.iter_changes():
            result[change.status].append(change)
        return result

    def summary(self) -> str:
        if self.is_identical:
            return "Documents are identical"
        by_status = self.get_changes_by_status()
        parts = [f"{len(items)} {status}" for status, items in by_status.items() if items]
        return ", ".join(parts)

    def __bool__(self) -> bool:
        return self.change_count > 0

    def __repr__(self) -> str:
        return f"DocumentDiff({self.summary()})"


# =============================================================================
# Diff Computation
# =============================================================================

def compute_document_hash(blocks: Iterable[Block]) -> str:
    payload = json.dumps([b.to_dict() for b in blocks], sort_keys=True, default=str)
    return hashlib.sha256(payload.encode("utf-8")).hexdigest()


def _compute_block_change(
    block_a: Block | None,
    block_b: Block | None,
    index_a: int | None,
    index_b: int | None,
) -> BlockChange:
    if block_a is None and block_b is not None:
        return BlockChange(block_id=block_b.id, block_type=block_b.type, status="added", index_change=(None, index_b))
    if block_b is None and block_a is not None:
        return BlockChange(block_id=block_a.id, block_type=block_a.type, status="removed", index_change=(index_a, None))

    assert block_a is not None and block_b is not None
    change = BlockChange(block_id=block_a.id, block_type=block_b.type, index_change=(index_a, index_b))

    if block_a.props != block_b.props:
        change.props_change = (dict(block_a.props), dict(block_b.props))
    if block_a.content != block_b.content:
        change.content_change = (list(block_a.content), list(block_b.content))

    if change.has_field_changes:
        change.status = "modified"
    elif index_a != index_b:
        change.status = "moved"
    return change


def diff_documents(blocks_a: Iterable[Block], blocks_b: Iterable[Block]) -> DocumentDiff:
    """
    Compute the diff between two content documents.

    Args:
        blocks_a: Original document
        blocks_b: New document

    Returns:
        DocumentDiff with one BlockChange per block id found in either document,
        in the order of blocks_b followed by blocks removed from blocks_a.
    """
    blocks_a = list(blocks_a)
    blocks_b = list(blocks_b)
    hash_a = compute_document_hash(blocks_a)
    hash_b = compute_document_hash(blocks_b)

    if hash_a == hash_b:
        return DocumentDiff(hash_a=hash_a, hash_b=hash_b)

    index_a = {b.id: i for i, b in enumerate(blocks_a)}
    by_id_a = {b.id: b for b in blocks_a}
    seen = set()
    changes = []
    for i, block_b in enumerate(blocks_b):
        seen.add(block_b.id)
        changes.append(_compute_block_change(by_id_a.get(block_b.id), block_b, index_a.get(block_b.id), i))
    for block_a in blocks_a:
        if block_a.id not in seen:
            changes.append(_compute_block_change(block_a, None, index_a[block_a.id], None))

    return DocumentDiff(hash_a=hash_a, hash_b=hash_b, changes=changes)


def format_diff(diff: DocumentDiff) -> str:
    """Format a diff as one line per block."""
    lines = []
    for change in diff.changes:
        status_char = {
            "unchanged": " ",
            "modified": "~",
            "moved": ">",
            "added": "+",
            "removed": "-",
        }[change.status]
        line = f"{status_char} {change.block_type} {change.block_id}"
        if change.status == "modified":
            line += f" [{', '.join(fc.field for fc in change.field_changes)}]"
        elif change.status == "moved":
            line += f" {change.index_change[0]} -> {change.index_change[1]}"
        lines.append(line)
    return "\n".join(lines)
