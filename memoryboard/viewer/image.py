from __future__ import annotations
import logging
import re

from ..block.block import ImageDescriptor
from ..block.types import BlockType
from .base import BlockView, escape, register_view


logger = logging.getLogger(__name__)


_SAFE_URL = re.compile(r"^(data:image/(jpeg|png|webp|gif);base64,|https?://)", re.IGNORECASE)


def grid_class(count: int) -> str:
    if count <= 1:
        return "grid-cols-1"
    if count == 2:
        return "grid-cols-1 sm:grid-cols-2"
    return "grid-cols-1 sm:grid-cols-2 lg:grid-cols-3"


class Lightbox:
    """Full-size image navigation. Previous/next wrap around."""

    def __init__(self, count: int):
        self.count = count
        self.current_index: int | None = None

    @property
    def is_open(self) -> bool:
        return self.current_index is not None

    def open(self, index: int) -> None:
        if not 0 <= index < self.count:
            raise IndexError(f"Image {index} out of range")
        self.current_index = index

    def close(self) -> None:
        self.current_index = None

    def next(self) -> int | None:
        if self.current_index is not None and self.count:
            self.current_index = (self.current_index + 1) % self.count
        return self.current_index

    def previous(self) -> int | None:
        if self.current_index is not None and self.count:
            self.current_index = (self.current_index - 1) % self.count
        return self.current_index

    @property
    def position_label(self) -> str:
        if self.current_index is None:
            return ""
        return f"{self.current_index + 1} of {self.count}"


@register_view(BlockType.IMAGE)
class ImageBlockView(BlockView):

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.images: list[ImageDescriptor] = self.block.images()
        self.lightbox = Lightbox(len(self.images))
        self.failed: set[int] = set()

    @property
    def grid_class(self) -> str:
        return grid_class(len(self.images))

    @property
    def current_image(self) -> ImageDescriptor | None:
        if self.lightbox.current_index is None:
            return None
        return self.images[self.lightbox.current_index]

    def mark_failed(self, index: int) -> None:
        """The image at index could not be loaded; its tile degrades to a notice."""
        if 0 <= index < len(self.images):
            self.failed.add(index)

    def _render_tile(self, index: int, image: ImageDescriptor) -> str:
        if index in self.failed or not _SAFE_URL.match(image.url or ""):
            return f'<div class="image-tile image-error" data-image-index="{index}">Failed to load</div>'
        alt = image.alt or f"Image {index + 1}"
        caption = f"<figcaption>{escape(image.caption)}</figcaption>" if image.caption else ""
        return (
            f'<figure class="image-tile" data-image-index="{index}">'
            f'<img src="{escape(image.url)}" alt="{escape(alt)}" loading="lazy">{caption}</figure>'
        )

    def render_inner(self) -> str:
        if not self.images:
            return '<div class="image-block-viewer empty"><p>No images to display</p></div>'
        tiles = "".join(self._render_tile(i, img) for i, img in enumerate(self.images))
        return f'<div class="image-block-viewer"><div class="grid {self.grid_class}">{tiles}</div></div>'
