"""
Read-only rendering of content documents.

render_block picks the view registered for the block's type and returns it;
`view.render()` produces an HTML fragment. Interactive state (checklist
toggles, the image lightbox) lives on the view objects.

    views = render_document(memory.content, accent_color=memory.color,
                            on_block_update=session.on_block_update)
    html = "".join(view.render() for view in views)
"""

from __future__ import annotations
import html
import logging
from typing import Callable, Iterable

from ..block.block import Block
from ..block.types import BlockType
from ..config import get_settings
from ..richtext.commands import is_safe_color


logger = logging.getLogger(__name__)


BlockUpdate = Callable[[Block], object]


_view_registry: dict[BlockType, type["BlockView"]] = {}


def register_view(*block_types: BlockType):
    """Class decorator registering a view for one or more block types."""
    def decorator(cls: type["BlockView"]) -> type["BlockView"]:
        for block_type in block_types:
            _view_registry[block_type] = cls
        return cls
    return decorator


def escape(value: object) -> str:
    return html.escape(str(value), quote=True)


class BlockView:
    """Base view. Subclasses implement render_inner."""

    interactive = False

    def __init__(
        self,
        block: Block,
        index: int = 0,
        is_first_block: bool = False,
        accent_color: str | None = None,
        on_block_update: BlockUpdate | None = None,
    ):
        self.block = block
        self.index = index
        self.is_first_block = is_first_block
        self.accent_color = accent_color if is_safe_color(accent_color) else get_settings().accent_color
        self.on_block_update = on_block_update if self.interactive else None

    @property
    def is_read_only(self) -> bool:
        return self.on_block_update is None

    def render_inner(self) -> str:
        return ""

    def render(self) -> str:
        inner = self.render_inner()
        if not inner:
            return ""
        classes = "block-viewer-item first-block" if self.is_first_block else "block-viewer-item"
        return (
            f'<div class="{classes}" data-block-type="{escape(self.block.type)}" '
            f'data-block-index="{self.index}">{inner}</div>'
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(block={self.block!r}, index={self.index})"


class UnknownBlockView(BlockView):

    @property
    def notice(self) -> str:
        return f"Unknown content type: {self.block.type}"

    def render_inner(self) -> str:
        return (
            '<div class="unknown-block-notice"><p>Unknown content type: '
            f"<code>{escape(self.block.type)}</code></p></div>"
        )


def get_view_class(block_type: str) -> type[BlockView]:
    resolved = BlockType.try_parse(block_type)
    if resolved is None or resolved not in _view_registry:
        return UnknownBlockView
    return _view_registry[resolved]


def render_block(
    block: Block,
    index: int = 0,
    is_first_block: bool = False,
    accent_color: str | None = None,
    on_interactive_update: BlockUpdate | None = None,
) -> BlockView:
    """
    Build the view for a block. Only views that accept interaction (the
    checklist) keep `on_interactive_update`; for the rest it is dropped.
    """
    view_cls = get_view_class(block.type)
    if view_cls is UnknownBlockView:
        logger.warning(f"Unknown block type in viewer: {block.type}")
    return view_cls(
        block,
        index=index,
        is_first_block=is_first_block,
        accent_color=accent_color,
        on_block_update=on_interactive_update,
    )


def render_document(
    blocks: Iterable[Block],
    accent_color: str | None = None,
    on_block_update: BlockUpdate | None = None,
) -> list[BlockView]:
    return [
        render_block(block, index=i, is_first_block=(i == 0), accent_color=accent_color, on_interactive_update=on_block_update)
        for i, block in enumerate(blocks)
    ]


def render_document_html(blocks: Iterable[Block], accent_color: str | None = None) -> str:
    return "".join(view.render() for view in render_document(blocks, accent_color=accent_color))
