from .errors import MemoryBoardError
from .config import EditorSettings, get_settings, reset_settings
from .block import (
    Block,
    BlockType,
    create_block,
    can_add_block_type,
    get_available_block_types,
    validate_block,
)
from .editor import BlockEditor, BlockTypeSelector, render_editor
from .viewer import render_block, render_document
from .memory import Memory, MemoryDraft, MemoryComposer, MemoryViewerSession

__all__ = [
    "MemoryBoardError",
    "EditorSettings",
    "get_settings",
    "reset_settings",
    "Block",
    "BlockType",
    "create_block",
    "can_add_block_type",
    "get_available_block_types",
    "validate_block",
    "BlockEditor",
    "BlockTypeSelector",
    "render_editor",
    "render_block",
    "render_document",
    "Memory",
    "MemoryDraft",
    "MemoryComposer",
    "MemoryViewerSession",
]
