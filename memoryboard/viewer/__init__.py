"""
Read-only block views.
"""

from .base import (
    BlockView,
    UnknownBlockView,
    get_view_class,
    register_view,
    render_block,
    render_document,
    render_document_html,
)
from .text import TextBlockView
from .checklist import ChecklistBlockView
from .image import ImageBlockView, Lightbox, grid_class
from .mood import MoodBlockView
from .divider import DividerBlockView

__all__ = [
    "BlockView",
    "UnknownBlockView",
    "get_view_class",
    "register_view",
    "render_block",
    "render_document",
    "render_document_html",
    "TextBlockView",
    "ChecklistBlockView",
    "ImageBlockView",
    "Lightbox",
    "grid_class",
    "MoodBlockView",
    "DividerBlockView",
]
