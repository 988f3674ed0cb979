from __future__ import annotations

from ..block.block import Block
from ..block.types import BlockType
from .base import BlockEditorBase


DIVIDER_STYLES = ("line", "dashed", "dotted", "double", "stars", "wave")

DIVIDER_COLORS = {
    "Light Gray": "#E5E7EB",
    "Gray": "#9CA3AF",
    "Purple": "#8B5CF6",
    "Blue": "#3B82F6",
    "Green": "#10B981",
    "Pink": "#EC4899",
}


class DividerEditor(BlockEditorBase):
    block_types = [BlockType.DIVIDER]

    @property
    def style(self) -> str:
        return self.block.props.get("style", "line")

    @property
    def color(self) -> str:
        return self.block.props.get("color", "#E5E7EB")

    def set_style(self, style: str) -> Block:
        if style not in DIVIDER_STYLES:
            raise ValueError(f"Unknown divider style: {style!r}")
        return self.update_props(style=style)

    def set_color(self, color: str) -> Block:
        return self.update_props(color=color)
