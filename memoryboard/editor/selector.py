"""
Block type selector - the "add block" palette.

Only types that can still be added are offered. Choosing one creates the
block and hands it to the host; dropping one over an existing block inserts
it right after that block.
"""

from __future__ import annotations
import logging
from typing import Callable, Iterable

from ..block.block import Block
from ..block.placement import partition
from ..block.registry import (
    can_add_block_type,
    create_block,
    get_available_block_types,
    get_blocks_by_category,
)
from ..block.types import BlockCategory, BlockType, BlockTypeDef


logger = logging.getLogger(__name__)


class BlockTypeSelector:

    def __init__(
        self,
        existing_blocks: Iterable[Block],
        on_add_block: Callable[[Block], object],
        disabled: bool = False,
        on_insert_block: Callable[[Block, int | None], object] | None = None,
    ):
        self.existing_blocks = list(existing_blocks)
        self.on_add_block = on_add_block
        self.on_insert_block = on_insert_block
        self.disabled = disabled
        self.is_open = False
        self.active_index = 0

    @property
    def available(self) -> list[BlockTypeDef]:
        return get_available_block_types(self.existing_blocks)

    @property
    def by_category(self) -> dict[BlockCategory, list[BlockTypeDef]]:
        return get_blocks_by_category(self.available)

    @property
    def is_visible(self) -> bool:
        return not self.disabled and len(self.available) > 0

    def open(self) -> None:
        if self.is_visible:
            self.is_open = True

    def close(self) -> None:
        self.is_open = False

    def toggle(self) -> None:
        if self.is_open:
            self.close()
        else:
            self.open()

    def rotate(self, direction: str = "next") -> int:
        """Move the carousel highlight, wrapping at both ends."""
        count = len(self.available)
        if count == 0:
            self.active_index = 0
        elif direction == "next":
            self.active_index = (self.active_index + 1) % count
        else:
            self.active_index = count - 1 if self.active_index == 0 else self.active_index - 1
        return self.active_index

    def _create(self, block_type: BlockType | str) -> Block | None:
        if not self.is_visible:
            return None
        if not can_add_block_type(block_type, self.existing_blocks):
            logger.debug(f"Block type {block_type} is not available")
            return None
        return create_block(block_type)

    def select(self, block_type: BlockType | str) -> Block | None:
        """Create a block of this type and append it through the host."""
        block = self._create(block_type)
        if block is None:
            return None
        self.on_add_block(block)
        self.close()
        return block

    def drop(self, block_type: BlockType | str, over_block_id: str | None) -> Block | None:
        """Create a block of this type and insert it after the block it was dropped on."""
        block = self._create(block_type)
        if block is None:
            return None
        over_index = partition(self.existing_blocks).index_of(over_block_id) if over_block_id else -1
        if over_index >= 0 and self.on_insert_block is not None:
            self.on_insert_block(block, over_index + 1)
        else:
            self.on_add_block(block)
        self.close()
        return block
