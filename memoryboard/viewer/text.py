from __future__ import annotations

from ..block.types import BlockType
from ..richtext.commands import is_safe_color
from ..richtext.markup import sanitize_markup
from .base import BlockView, escape, register_view


@register_view(BlockType.PARAGRAPH)
class TextBlockView(BlockView):

    @property
    def alignment(self) -> str:
        alignment = self.block.props.get("textAlignment") or "left"
        return alignment if alignment in ("left", "center") else "left"

    @property
    def background(self) -> str:
        color = self.block.props.get("backgroundColor") or "transparent"
        return color if is_safe_color(color) else "transparent"

    @property
    def safe_markup(self) -> str:
        markup = self.block.text_markup()
        if not markup.strip():
            return ""
        return sanitize_markup(markup)

    def render_inner(self) -> str:
        safe = self.safe_markup
        if not safe.strip():
            return ""
        return (
            f'<div class="text-block-viewer" style="background-color: {escape(self.background)}">'
            f'<div class="rich-text-content" style="text-align: {self.alignment}">{safe}</div>'
            "</div>"
        )
