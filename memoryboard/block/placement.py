"""
Placement - ordering, insertion and deletion of blocks in a content document.

A document is split into an optional pinned head and the sortable remainder:

    [mood, paragraph, image]
     └─ PinnedBlock  └─ SortableBlock, SortableBlock

Only a mood block found at index 0 is pinned. Once partitioned, the pinned
block is carried as its own variant, so reorders operate on the sortable list
alone and the pinned block cannot be moved by index arithmetic.

Every operation is a pure function: it returns a new list and never mutates
its input. Refused operations return an unchanged copy of the document.

Usage:
    blocks = reorder(blocks, 0, 1)
    blocks = insert_block(blocks, create_block("divider"), target_index=None)
    blocks = delete_block(blocks, block_id, require_content=True)
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Iterable, Union

from ..errors import MemoryBoardError
from .block import Block


logger = logging.getLogger(__name__)


class StructuralInvariantViolation(MemoryBoardError):
    """An operation would move or remove the pinned block, or empty a document that needs content."""
    pass


@dataclass(frozen=True)
class PinnedBlock:
    """The leading mood block. Immovable and undeletable."""
    block: Block

    @property
    def id(self) -> str:
        return self.block.id


@dataclass(frozen=True)
class SortableBlock:
    """A block that may be reordered, moved and deleted."""
    block: Block

    @property
    def id(self) -> str:
        return self.block.id


PlacedBlock = Union[PinnedBlock, SortableBlock]


@dataclass
class Partition:
    pinned: PinnedBlock | None = None
    sortable: list[SortableBlock] = field(default_factory=list)

    @property
    def offset(self) -> int:
        """Index shift between sortable positions and document positions."""
        return 1 if self.pinned is not None else 0

    @property
    def sortable_blocks(self) -> list[Block]:
        return [item.block for item in self.sortable]

    def index_of(self, block_id: str) -> int:
        """Sortable index of a block id, or -1."""
        for i, item in enumerate(self.sortable):
            if item.id == block_id:
                return i
        return -1

    def items(self) -> list[PlacedBlock]:
        head: list[PlacedBlock] = [self.pinned] if self.pinned is not None else []
        return head + list(self.sortable)

    def assemble(self) -> list[Block]:
        """Reassemble the document as pinned head ++ sortable."""
        return [item.block for item in self.items()]


def partition(blocks: Iterable[Block]) -> Partition:
    """Split a document into its pinned head (if any) and the sortable remainder."""
    blocks = list(blocks)
    if blocks and blocks[0].is_mood:
        return Partition(
            pinned=PinnedBlock(blocks[0]),
            sortable=[SortableBlock(b) for b in blocks[1:]],
        )
    return Partition(pinned=None, sortable=[SortableBlock(b) for b in blocks])


def is_pinned(blocks: list[Block], block_id: str) -> bool:
    part = partition(blocks)
    return part.pinned is not None and part.pinned.id == block_id


def _move(items: list, source: int, target: int) -> list:
    items = list(items)
    item = items.pop(source)
    items.insert(target, item)
    return items


# =========================================================================
# Reorder
# =========================================================================

def reorder(blocks: Iterable[Block], source_index: int, target_index: int) -> list[Block]:
    """
    Move a sortable block from source_index to target_index.

    Indices are positions within the sortable set, not the document. A target
    beyond the end moves the block to the end. Dragging onto itself, or a
    source outside the sortable set, leaves the document unchanged.
    """
    part = partition(blocks)
    count = len(part.sortable)
    if source_index < 0 or source_index >= count or target_index < 0:
        return part.assemble()
    target_index = min(target_index, count - 1)
    if source_index == target_index:
        return part.assemble()
    part.sortable = _move(part.sortable, source_index, target_index)
    logger.debug(f"Reordered sortable block {source_index} -> {target_index}")
    return part.assemble()


def reorder_by_id(blocks: Iterable[Block], active_id: str, over_id: str) -> list[Block]:
    """Reorder by dragging the block `active_id` onto the block `over_id`."""
    part = partition(blocks)
    source = part.index_of(active_id)
    target = part.index_of(over_id)
    if source == -1 or target == -1:
        return part.assemble()
    return reorder(part.assemble(), source, target)


# =========================================================================
# Insert / replace
# =========================================================================

def insert_block(blocks: Iterable[Block], new_block: Block, target_index: int | None = None) -> list[Block]:
    """
    Insert a block at a sortable position, or append when target_index is None.

    The block is spliced into the document at target_index + 1 when a pinned
    head is present, so it can never land in front of the pinned block.
    A target beyond the end appends. A block whose id is already in the
    document is refused.
    """
    part = partition(blocks)
    document = part.assemble()
    if any(b.id == new_block.id for b in document):
        logger.warning(f"Refused to insert block {new_block.id}: id already present")
        return document
    if target_index is None or target_index >= len(part.sortable):
        document.append(new_block)
        return document
    position = max(target_index, 0) + part.offset
    document.insert(position, new_block)
    return document


def append_block(blocks: Iterable[Block], new_block: Block) -> list[Block]:
    return insert_block(blocks, new_block, None)


def replace_block(blocks: Iterable[Block], updated: Block) -> list[Block]:
    """Replace the block carrying updated.id. Unknown ids leave the document unchanged."""
    return [updated if b.id == updated.id else b for b in blocks]


# =========================================================================
# Delete
# =========================================================================

def check_delete(blocks: list[Block], block_id: str, require_content: bool = False) -> None:
    """
    Raises:
        StructuralInvariantViolation: if block_id is pinned, or removing it
            would empty a document that requires content
    """
    if is_pinned(blocks, block_id):
        raise StructuralInvariantViolation(f"Block {block_id} is pinned and cannot be deleted")
    remaining = [b for b in blocks if b.id != block_id]
    if require_content and len(remaining) == 0 and len(blocks) > 0:
        raise StructuralInvariantViolation("A document being edited must keep at least one block")


def delete_block(blocks: Iterable[Block], block_id: str, require_content: bool = False, strict: bool = False) -> list[Block]:
    """
    Remove a block by id.

    Deleting the pinned block, or the last block when require_content is set,
    is refused and returns the document unchanged. Pass strict=True to get
    the StructuralInvariantViolation instead.
    """
    blocks = list(blocks)
    try:
        check_delete(blocks, block_id, require_content)
    except StructuralInvariantViolation as e:
        if strict:
            raise
        logger.debug(f"Delete refused: {e}")
        return blocks
    return [b for b in blocks if b.id != block_id]


# =========================================================================
# Move up / down
# =========================================================================

def can_move_up(blocks: list[Block], block_id: str) -> bool:
    part = partition(blocks)
    return part.index_of(block_id) > 0


def can_move_down(blocks: list[Block], block_id: str) -> bool:
    part = partition(blocks)
    index = part.index_of(block_id)
    return index != -1 and index < len(part.sortable) - 1


def move_up(blocks: Iterable[Block], block_id: str) -> list[Block]:
    """Swap a sortable block with its predecessor; never passes the pinned head."""
    part = partition(blocks)
    index = part.index_of(block_id)
    if index <= 0:
        return part.assemble()
    return reorder(part.assemble(), index, index - 1)


def move_down(blocks: Iterable[Block], block_id: str) -> list[Block]:
    """Swap a sortable block with its successor."""
    part = partition(blocks)
    index = part.index_of(block_id)
    if index == -1 or index >= len(part.sortable) - 1:
        return part.assemble()
    return reorder(part.assemble(), index, index + 1)
