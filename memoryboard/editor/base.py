"""
Editor base class and the type -> editor registry.

Every editor is a controller bound to one block. User-level commands build an
updated copy of the block and hand it to `on_change`; the editor never
mutates the block it was given.

Editors register themselves through EditorMeta by listing the block types
they handle:

    class MoodEditor(BlockEditorBase):
        block_types = [BlockType.MOOD]

    editor = render_editor(block, on_change=host.update_block)
"""

from __future__ import annotations
import logging
from typing import Any, Callable

from ..block.block import Block
from ..block.types import BlockType


logger = logging.getLogger(__name__)


OnChange = Callable[[Block], None]


_editor_registry: dict[BlockType, type["BlockEditorBase"]] = {}


class EditorMeta(type):
    """Registers BlockEditorBase subclasses by their block_types."""

    def __new__(mcs, name: str, bases: tuple, attrs: dict):
        new_cls = super().__new__(mcs, name, bases, attrs)
        if block_types := attrs.get("block_types"):
            for block_type in block_types:
                _editor_registry[BlockType.parse(block_type)] = new_cls
        return new_cls

    @classmethod
    def get_editor(mcs, block_type: BlockType | str | None) -> type["BlockEditorBase"]:
        """The editor registered for a type; UnknownBlockTypeEditor otherwise."""
        resolved = BlockType.try_parse(block_type) if block_type is not None else None
        if resolved is None or resolved not in _editor_registry:
            return UnknownBlockTypeEditor
        return _editor_registry[resolved]

    @classmethod
    def list_editors(mcs) -> dict[BlockType, type["BlockEditorBase"]]:
        return dict(_editor_registry)


class BlockEditorBase(metaclass=EditorMeta):
    block_types: list[BlockType] = []

    def __init__(self, block: Block, on_change: OnChange | None = None, disabled: bool = False):
        self.block = block
        self.on_change = on_change
        self.disabled = disabled

    @property
    def block_id(self) -> str:
        return self.block.id

    def emit(self, block: Block) -> Block:
        """Adopt the updated block and pass it to the owner. A disabled editor keeps its block."""
        if self.disabled:
            return self.block
        self.block = block
        if self.on_change is not None:
            self.on_change(block)
        return block

    def update_props(self, **updates: Any) -> Block:
        return self.emit(self.block.with_props(**updates))

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(block={self.block!r})"


class UnknownBlockTypeEditor(BlockEditorBase):
    """Placeholder for blocks whose type has no editor. Never emits."""

    notice = "Unknown block type"

    def __init__(self, block: Block, on_change: OnChange | None = None, disabled: bool = True):
        super().__init__(block, on_change, disabled=True)
        logger.warning(f"No editor for block type {block.type!r} (block {block.id})")

    def emit(self, block: Block) -> Block:
        return self.block


def render_editor(block: Block, on_change: OnChange | None = None, **kwargs: Any) -> BlockEditorBase:
    """Build the editor for a block, dispatching on its type."""
    editor_cls = EditorMeta.get_editor(block.type)
    return editor_cls(block, on_change, **kwargs)
