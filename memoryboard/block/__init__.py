"""
Block content model.

This module provides:
- BlockType / BlockTypeDef: the closed block type registry
- Block: a typed content unit and its wire form
- create_block / can_add_block_type / get_available_block_types: factory and limits
- validate_block: per-block validation
- partition / reorder / insert_block / delete_block: placement engine
- diff_documents: block-level document diff
"""

from .types import (
    BlockType,
    BlockCategory,
    BlockTypeDef,
    BLOCK_TYPES,
    BLOCK_LIMITS,
    UnknownBlockTypeError,
    get_block_type,
    list_block_types,
)
from .block import (
    Block,
    ChecklistItem,
    ImageDescriptor,
    TextContent,
    load_document,
    dump_document,
)
from .registry import (
    create_block,
    can_add_block_type,
    count_blocks_of_type,
    get_available_block_types,
    get_blocks_by_category,
    get_available_block_types_by_category,
)
from .validation import (
    ValidationResult,
    BlockValidationError,
    validate_block,
    validate_document,
    validate_document_errors,
)
from .placement import (
    Partition,
    PinnedBlock,
    SortableBlock,
    StructuralInvariantViolation,
    partition,
    reorder,
    reorder_by_id,
    insert_block,
    append_block,
    replace_block,
    delete_block,
    move_up,
    move_down,
    can_move_up,
    can_move_down,
)
from .diff import DocumentDiff, BlockChange, diff_documents, format_diff

__all__ = [
    "BlockType",
    "BlockCategory",
    "BlockTypeDef",
    "BLOCK_TYPES",
    "BLOCK_LIMITS",
    "UnknownBlockTypeError",
    "get_block_type",
    "list_block_types",
    "Block",
    "ChecklistItem",
    "ImageDescriptor",
    "TextContent",
    "load_document",
    "dump_document",
    "create_block",
    "can_add_block_type",
    "count_blocks_of_type",
    "get_available_block_types",
    "get_blocks_by_category",
    "get_available_block_types_by_category",
    "ValidationResult",
    "BlockValidationError",
    "validate_block",
    "validate_document",
    "validate_document_errors",
    "Partition",
    "PinnedBlock",
    "SortableBlock",
    "StructuralInvariantViolation",
    "partition",
    "reorder",
    "reorder_by_id",
    "insert_block",
    "append_block",
    "replace_block",
    "delete_block",
    "move_up",
    "move_down",
    "can_move_up",
    "can_move_down",
    "DocumentDiff",
    "BlockChange",
    "diff_documents",
    "format_diff",
]
