"""
Checklist block editor and completion statistics.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Iterable
from uuid import uuid4

from ..block.block import Block, ChecklistItem
from ..block.types import BlockType
from .base import BlockEditorBase


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ChecklistStats:
    completed: int
    total: int
    percentage: int


def checklist_stats(items: Iterable[ChecklistItem]) -> ChecklistStats:
    """Completed/total counts; percentage is rounded, 0 for an empty list."""
    items = list(items)
    total = len(items)
    completed = sum(1 for item in items if item.checked)
    percentage = int(completed / total * 100 + 0.5) if total else 0
    return ChecklistStats(completed=completed, total=total, percentage=percentage)


def toggle_checklist_item(block: Block, item_index: int, now: str | None = None) -> Block:
    """
    Copy of a checklist block with one item toggled.

    Raises:
        IndexError: if item_index is out of range
    """
    items = block.checklist_items()
    if not 0 <= item_index < len(items):
        raise IndexError(f"Checklist item {item_index} out of range")
    items[item_index] = items[item_index].toggled(now)
    return block.with_content([item.to_dict() for item in items])


class ChecklistEditor(BlockEditorBase):
    block_types = [BlockType.CHECKLIST]

    @property
    def items(self) -> list[ChecklistItem]:
        return self.block.checklist_items()

    @property
    def stats(self) -> ChecklistStats:
        return checklist_stats(self.items)

    def _index_of(self, item_id) -> int:
        for i, item in enumerate(self.items):
            if item.id == item_id:
                return i
        return -1

    def _commit(self, items: list[ChecklistItem]) -> Block:
        return self.emit(self.block.with_content([item.to_dict() for item in items]))

    def add_item(self, after_index: int | None = None, text: str = "") -> ChecklistItem:
        """Add an unchecked item after `after_index`, or at the end."""
        item = ChecklistItem(id=str(uuid4()), text=text, checked=False, completed_at=None)
        items = self.items
        if after_index is None or after_index < 0 or after_index >= len(items):
            items.append(item)
        else:
            items.insert(after_index + 1, item)
        self._commit(items)
        return item

    def update_item(self, item_id, text: str) -> Block:
        items = [item.model_copy(update={"text": text}) if item.id == item_id else item for item in self.items]
        return self._commit(items)

    def remove_item(self, item_id) -> bool:
        """Remove an item. The last remaining item is kept."""
        if self.disabled:
            return False
        items = self.items
        if len(items) <= 1 or self._index_of(item_id) == -1:
            return False
        self._commit([item for item in items if item.id != item_id])
        return True

    def toggle_item(self, item_id, now: str | None = None) -> Block:
        index = self._index_of(item_id)
        if index == -1:
            logger.debug(f"Toggle ignored, no checklist item {item_id!r}")
            return self.block
        return self.emit(toggle_checklist_item(self.block, index, now))
