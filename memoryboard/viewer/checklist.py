from __future__ import annotations
import logging

from ..block.block import Block, ChecklistItem
from ..block.types import BlockType
from ..editor.checklist import ChecklistStats, checklist_stats, toggle_checklist_item
from ..utils.sanitization import strip_html
from .base import BlockView, escape, register_view


logger = logging.getLogger(__name__)


@register_view(BlockType.CHECKLIST)
class ChecklistBlockView(BlockView):
    """
    Checklist view. When an update callback is supplied the items can be
    toggled; each toggle hands the whole updated block to the callback.
    """

    interactive = True

    @property
    def items(self) -> list[ChecklistItem]:
        return self.block.checklist_items()

    @property
    def stats(self) -> ChecklistStats:
        return checklist_stats(self.items)

    def toggle(self, item_index: int, now: str | None = None) -> Block | None:
        """Toggle an item. Read-only views and out-of-range indices do nothing."""
        if self.on_block_update is None:
            return None
        if not 0 <= item_index < len(self.items):
            logger.debug(f"Toggle ignored, no checklist item at {item_index}")
            return None
        updated = toggle_checklist_item(self.block, item_index, now)
        self.block = updated
        self.on_block_update(updated)
        return updated

    def render_inner(self) -> str:
        items = self.items
        if not items:
            return ""
        stats = self.stats
        rows = []
        for i, item in enumerate(items):
            state = "checked" if item.checked else "unchecked"
            rows.append(
                f'<li class="checklist-item {state}" data-item-index="{i}">'
                f'<span class="checkbox" aria-checked="{str(item.checked).lower()}"></span>'
                f"<span>{escape(strip_html(item.text))}</span></li>"
            )
        return (
            '<div class="list-block-viewer">'
            f'<h3>Todo List <span class="completion">{stats.completed}/{stats.total}</span></h3>'
            f'<div class="progress" style="width: {stats.percentage}%; background-color: {escape(self.accent_color)}"></div>'
            f'<ul>{"".join(rows)}</ul>'
            "</div>"
        )
