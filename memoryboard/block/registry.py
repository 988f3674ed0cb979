"""
Block factory and usage-limit queries over the block type registry.
"""

from __future__ import annotations
import copy
import logging
from typing import Any, Iterable

from .block import Block
from .types import (
    BLOCK_TYPES,
    BlockCategory,
    BlockType,
    BlockTypeDef,
    UnknownBlockTypeError,
    get_block_type,
)


logger = logging.getLogger(__name__)


def create_block(block_type: BlockType | str, initial_content: list[Any] | None = None) -> Block:
    """
    Create a new block instance with a fresh id and the type's default props.

    Args:
        block_type: The type of block to create
        initial_content: Optional initial content items

    Raises:
        UnknownBlockTypeError: if the type is not registered
    """
    block_def = get_block_type(block_type)
    block = Block(
        type=block_def.id.value,
        props=copy.deepcopy(block_def.default_props),
        content=copy.deepcopy(initial_content) if initial_content else [],
    )
    logger.debug(f"Created {block.type} block {block.id}")
    return block


def count_blocks_of_type(block_type: BlockType | str, blocks: Iterable[Block]) -> int:
    target = BlockType.try_parse(block_type)
    if target is None:
        return 0
    return sum(1 for block in blocks if block.block_type == target)


def can_add_block_type(block_type: BlockType | str, existing_blocks: Iterable[Block]) -> bool:
    """True iff another block of this type stays within its max uses."""
    try:
        block_def = get_block_type(block_type)
    except UnknownBlockTypeError:
        return False
    return count_blocks_of_type(block_def.id, existing_blocks) < block_def.max_uses


def get_available_block_types(existing_blocks: Iterable[Block]) -> list[BlockTypeDef]:
    """Definitions of the types that can still be added, in registry order."""
    existing_blocks = list(existing_blocks)
    return [
        block_def for block_def in BLOCK_TYPES.values()
        if can_add_block_type(block_def.id, existing_blocks)
    ]


def get_blocks_by_category(available: Iterable[BlockTypeDef]) -> dict[BlockCategory, list[BlockTypeDef]]:
    """Group definitions by category. Every category is present, possibly empty."""
    categories: dict[BlockCategory, list[BlockTypeDef]] = {category: [] for category in BlockCategory}
    for block_def in available:
        categories[block_def.category].append(block_def)
    return categories


def get_available_block_types_by_category(existing_blocks: Iterable[Block]) -> dict[BlockCategory, list[BlockTypeDef]]:
    return get_blocks_by_category(get_available_block_types(existing_blocks))
