from __future__ import annotations

from ..block.types import BlockType
from ..editor.divider import DIVIDER_STYLES
from ..richtext.commands import is_safe_color
from .base import BlockView, escape, register_view


_DIVIDER_MARKUP = {
    "line": '<div class="divider-line" style="background-color: {color}"></div>',
    "dashed": '<div class="divider-dashed" style="border-top: 2px dashed {color}"></div>',
    "dotted": '<div class="divider-dotted" style="color: {color}">' + "•" * 15 + "</div>",
    "double": '<div class="divider-double" style="border-top: 3px double {color}"></div>',
    "stars": '<div class="divider-stars" style="color: {color}">✦ ✦ ✦ ✦ ✦</div>',
    "wave": '<div class="divider-wave" style="color: {color}">∿∿∿∿∿∿∿∿∿∿</div>',
}


@register_view(BlockType.DIVIDER)
class DividerBlockView(BlockView):

    @property
    def style(self) -> str:
        style = self.block.props.get("style") or "line"
        return style if style in DIVIDER_STYLES else "line"

    @property
    def color(self) -> str:
        color = self.block.props.get("color") or "#E5E7EB"
        return color if is_safe_color(color) else "#E5E7EB"

    def render_inner(self) -> str:
        inner = _DIVIDER_MARKUP[self.style].format(color=escape(self.color))
        return f'<div class="divider-block-viewer" aria-hidden="true">{inner}</div>'
