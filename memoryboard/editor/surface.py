"""
BlockEditor - the host that owns a content document while it is edited.

The host keeps the ordered block list, applies placement operations to it and
reports every resulting document through `on_change`. Per-block editors are
created with `editor_for`, bound so their updates flow back through
`update_block`.

    host = BlockEditor(blocks, on_change=save_draft)
    host.add_block_type("paragraph")
    host.drag_end(DragEvent(active_id=a.id, over_id=b.id))
"""

from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Callable, Iterable

from ..block import placement
from ..block.block import Block
from ..block.placement import Partition
from ..block.registry import can_add_block_type, create_block
from ..block.types import BlockType
from ..config import get_settings
from .base import BlockEditorBase, render_editor
from .selector import BlockTypeSelector


logger = logging.getLogger(__name__)


DocumentChange = Callable[[list[Block]], None]


@dataclass(frozen=True)
class DragEvent:
    """
    End (or hover) of a drag gesture.

    active_id: id of the dragged block, or of the palette entry
    over_id: id of the block under the pointer, None when dropped outside
    block_type: set when a block type is dragged out of the selector
    """
    active_id: str
    over_id: str | None = None
    block_type: str | None = None

    @property
    def is_block_type(self) -> bool:
        return self.block_type is not None


class BlockEditor:

    def __init__(
        self,
        blocks: Iterable[Block] | None = None,
        on_change: DocumentChange | None = None,
        max_blocks: int | None = None,
        disabled: bool = False,
        require_content: bool = True,
        placeholder: str = "Start writing your memory...",
    ):
        self._blocks: list[Block] = list(blocks or [])
        self.on_change = on_change
        self.max_blocks = max_blocks if max_blocks is not None else get_settings().max_blocks
        self.disabled = disabled
        self.require_content = require_content
        self.placeholder = placeholder
        self.active_id: str | None = None
        self.drag_over_index: int | None = None

    # =========================================================================
    # State
    # =========================================================================

    @property
    def blocks(self) -> list[Block]:
        return list(self._blocks)

    @property
    def partition(self) -> Partition:
        return placement.partition(self._blocks)

    @property
    def pinned_block(self) -> Block | None:
        pinned = self.partition.pinned
        return pinned.block if pinned is not None else None

    @property
    def sortable_blocks(self) -> list[Block]:
        return self.partition.sortable_blocks

    @property
    def is_empty(self) -> bool:
        return len(self._blocks) == 0

    @property
    def is_full(self) -> bool:
        return len(self._blocks) >= self.max_blocks

    def get_block(self, block_id: str) -> Block | None:
        for block in self._blocks:
            if block.id == block_id:
                return block
        return None

    def _commit(self, blocks: list[Block]) -> bool:
        if blocks == self._blocks:
            return False
        self._blocks = blocks
        if self.on_change is not None:
            self.on_change(list(blocks))
        return True

    def set_blocks(self, blocks: Iterable[Block]) -> None:
        """Adopt a document from the owner without emitting a change."""
        self._blocks = list(blocks)

    def _can_add(self, block: Block) -> bool:
        if self.disabled:
            return False
        if self.is_full:
            logger.warning(f"Maximum {self.max_blocks} blocks allowed")
            return False
        if not can_add_block_type(block.type, self._blocks):
            logger.warning(f"Block type {block.type!r} is at its limit or unknown")
            return False
        return True

    # =========================================================================
    # Mutations
    # =========================================================================

    def add_block(self, block: Block) -> bool:
        """Append a block. Refused when the document is full or the type is exhausted."""
        if not self._can_add(block):
            return False
        return self._commit(placement.append_block(self._blocks, block))

    def insert_block(self, block: Block, target_index: int | None) -> bool:
        """Insert at a sortable position; None appends."""
        if not self._can_add(block):
            return False
        return self._commit(placement.insert_block(self._blocks, block, target_index))

    def add_block_type(self, block_type: BlockType | str) -> Block | None:
        block = create_block(block_type)
        return block if self.add_block(block) else None

    def insert_block_type(self, block_type: BlockType | str, target_index: int | None) -> Block | None:
        block = create_block(block_type)
        return block if self.insert_block(block, target_index) else None

    def delete_block(self, block_id: str) -> bool:
        if self.disabled:
            return False
        return self._commit(placement.delete_block(self._blocks, block_id, require_content=self.require_content))

    def update_block(self, updated: Block) -> bool:
        if self.disabled:
            return False
        return self._commit(placement.replace_block(self._blocks, updated))

    def reorder(self, source_index: int, target_index: int) -> bool:
        if self.disabled:
            return False
        return self._commit(placement.reorder(self._blocks, source_index, target_index))

    def move_up(self, block_id: str) -> bool:
        if self.disabled:
            return False
        return self._commit(placement.move_up(self._blocks, block_id))

    def move_down(self, block_id: str) -> bool:
        if self.disabled:
            return False
        return self._commit(placement.move_down(self._blocks, block_id))

    def can_move_up(self, block_id: str) -> bool:
        return placement.can_move_up(self._blocks, block_id)

    def can_move_down(self, block_id: str) -> bool:
        return placement.can_move_down(self._blocks, block_id)

    # =========================================================================
    # Drag and drop
    # =========================================================================

    def drag_start(self, active_id: str) -> None:
        self.active_id = active_id

    def drag_over(self, event: DragEvent) -> int | None:
        """
        Track where a dragged block type would land, as a 1-based slot in the
        sortable list. None when the pointer is outside the document.
        """
        if event.over_id is None:
            self.drag_over_index = None
        elif event.is_block_type:
            index = self.partition.index_of(event.over_id)
            self.drag_over_index = index + 1 if index >= 0 else len(self.sortable_blocks) + 1
        return self.drag_over_index

    def drag_end(self, event: DragEvent) -> bool:
        """
        Finish a drag. A block type dropped on a block is inserted after it,
        dropped elsewhere it is appended. A block dropped on another sortable
        block takes its position.
        """
        self.active_id = None
        self.drag_over_index = None
        if event.over_id is None or self.disabled:
            return False

        if event.is_block_type:
            over_index = self.partition.index_of(event.over_id)
            target = over_index + 1 if over_index >= 0 else None
            return self.insert_block_type(event.block_type, target) is not None

        return self._commit(placement.reorder_by_id(self._blocks, event.active_id, event.over_id))

    # =========================================================================
    # Child controllers
    # =========================================================================

    def editor_for(self, block_id: str) -> BlockEditorBase | None:
        block = self.get_block(block_id)
        if block is None:
            return None
        return render_editor(block, on_change=self.update_block, disabled=self.disabled)

    def editors(self) -> list[BlockEditorBase]:
        return [render_editor(b, on_change=self.update_block, disabled=self.disabled) for b in self._blocks]

    def selector(self) -> BlockTypeSelector:
        return BlockTypeSelector(
            self._blocks,
            on_add_block=self.add_block,
            disabled=self.disabled or self.is_full,
            on_insert_block=self.insert_block,
        )
