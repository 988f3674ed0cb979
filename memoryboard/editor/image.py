"""
Image block editor.

Uploads go through validate_image_file, then are decoded concurrently into
data-URL descriptors. A file that fails validation or decoding produces an
error string for the user; the rest of the batch still lands.

    editor = ImageEditor(block, on_change=host.update_block)
    result = await editor.add_files([ImageFile("cat.png", "image/png", data)])
    result.errors  # ["File 2 (notes.bin): File type ... is not allowed. ..."]

Alt/caption edits are propagated to the owner through a Debouncer so a burst
of keystrokes results in one on_change call.
"""

from __future__ import annotations
import asyncio
import base64
import logging
import mimetypes
import random
import string
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable

from ..block.block import Block, ImageDescriptor, utc_now_iso
from ..block.types import BlockType
from ..config import EditorSettings, get_settings
from ..errors import MemoryBoardError
from ..utils.sanitization import sanitize_text_input
from .base import BlockEditorBase, OnChange
from .debounce import Debouncer
from .image_validation import FileValidationError, validate_image_file


logger = logging.getLogger(__name__)


METADATA_FIELDS = ("alt", "caption")


class ImageProcessingError(MemoryBoardError):
    """A file passed validation but could not be decoded into an image."""
    pass


@dataclass
class ImageFile:
    """An uploaded file: its name, declared MIME type and bytes."""
    name: str
    type: str
    data: bytes = b""
    size: int | None = None

    def __post_init__(self):
        if self.size is None:
            self.size = len(self.data)

    async def read(self) -> bytes:
        await asyncio.sleep(0)
        return self.data

    @classmethod
    def from_path(cls, path: str | Path, mime_type: str | None = None) -> "ImageFile":
        path = Path(path)
        if mime_type is None:
            mime_type, _ = mimetypes.guess_type(path.name)
        return cls(name=path.name, type=mime_type or "application/octet-stream", data=path.read_bytes())


def _matches_signature(data: bytes, mime_type: str) -> bool:
    if mime_type == "image/jpeg":
        return data[:3] == b"\xff\xd8\xff"
    if mime_type == "image/png":
        return data[:8] == b"\x89PNG\r\n\x1a\n"
    if mime_type == "image/gif":
        return data[:6] in (b"GIF87a", b"GIF89a")
    if mime_type == "image/webp":
        return data[:4] == b"RIFF" and data[8:12] == b"WEBP"
    return False


def _generate_image_id() -> str:
    suffix = "".join(random.choices(string.ascii_lowercase + string.digits, k=9))
    return f"img_{int(time.time() * 1000)}_{suffix}"


async def process_file_to_image(file: ImageFile) -> ImageDescriptor:
    """
    Decode a file into an image descriptor with a base64 data URL.

    Raises:
        ImageProcessingError: if the file is empty or its bytes do not match its MIME type
    """
    data = await file.read()
    if not data:
        raise ImageProcessingError("Failed to read file")
    if not _matches_signature(data, file.type):
        raise ImageProcessingError("Invalid image data")
    url = f"data:{file.type};base64,{base64.b64encode(data).decode('ascii')}"
    return ImageDescriptor(
        id=_generate_image_id(),
        url=url,
        name=sanitize_text_input(file.name),
        alt="",
        caption="",
        size=file.size,
        type=file.type,
        uploaded_at=utc_now_iso(),
    )


@dataclass
class UploadResult:
    images: list[ImageDescriptor] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)


class ImageEditor(BlockEditorBase):
    block_types = [BlockType.IMAGE]

    def __init__(
        self,
        block: Block,
        on_change: OnChange | None = None,
        disabled: bool = False,
        settings: EditorSettings | None = None,
    ):
        super().__init__(block, on_change, disabled)
        self.settings = settings or get_settings()
        self.images: list[ImageDescriptor] = block.images()
        self.upload_errors: list[str] = []
        self.uploading = False
        self._debouncer = Debouncer(self._propagate, self.settings.debounce_seconds)

    @property
    def remaining_slots(self) -> int:
        return max(0, self.settings.max_images_per_block - len(self.images))

    def _propagate(self) -> Block:
        return self.emit(self.block.with_props(images=[img.to_dict() for img in self.images]))

    def _propagate_now(self) -> Block:
        self._debouncer.cancel()
        return self._propagate()

    async def add_files(self, files: Iterable[ImageFile]) -> UploadResult:
        """
        Validate and decode a batch of files, then append the decoded images.

        Returns the images added and one message per rejected file.
        """
        files = list(files)
        result = UploadResult()
        if self.disabled or not files:
            return result

        self.uploading = True
        self.upload_errors = []
        accepted: list[ImageFile] = []
        slots = self.remaining_slots
        for index, file in enumerate(files):
            validation = validate_image_file(file)
            if not validation.valid:
                result.errors.append(str(FileValidationError(index, file.name, validation.errors)))
            elif len(accepted) >= slots:
                limit = self.settings.max_images_per_block
                result.errors.append(str(FileValidationError(index, file.name, [f"Image limit of {limit} reached"])))
            else:
                accepted.append(file)

        try:
            decoded = await asyncio.gather(*(process_file_to_image(f) for f in accepted), return_exceptions=True)
        finally:
            self.uploading = False

        for file, outcome in zip(accepted, decoded):
            if isinstance(outcome, BaseException):
                logger.warning(f"File processing error for {file.name!r}: {outcome}")
                result.errors.append(f"Failed to process {file.name}: {outcome}")
            else:
                result.images.append(outcome)

        self.upload_errors = list(result.errors)
        if result.images:
            self.images = self.images + result.images
            self._propagate_now()
        return result

    def remove_image(self, image_id: str) -> Block:
        if self.disabled:
            return self.block
        self.images = [img for img in self.images if img.id != image_id]
        return self._propagate_now()

    def update_metadata(self, image_id: str, field_name: str, value: str) -> None:
        """Set alt or caption on an image. Propagation to the owner is debounced."""
        if field_name not in METADATA_FIELDS:
            raise ValueError(f"Unsupported image field: {field_name!r}")
        if self.disabled:
            return
        clean = sanitize_text_input(value)
        self.images = [
            img.model_copy(update={field_name: clean}) if img.id == image_id else img
            for img in self.images
        ]
        self._debouncer()

    def flush(self) -> None:
        """Propagate any pending metadata edit now."""
        self._debouncer.flush()

    def dismiss_errors(self) -> None:
        self.upload_errors = []
