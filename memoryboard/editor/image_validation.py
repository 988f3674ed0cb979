"""
Upload validation for image files.

Each file is checked on its own; every rule that fails is reported, and a
batch keeps going past invalid files. Limits come from EditorSettings.
"""

from __future__ import annotations
import logging
import re
from dataclasses import dataclass, field
from typing import Protocol

from ..config import get_settings
from ..errors import MemoryBoardError


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FileTypeRule:
    extensions: tuple[str, ...]
    max_size: int | None = None


ALLOWED_FILE_TYPES: dict[str, FileTypeRule] = {
    "image/jpeg": FileTypeRule(extensions=("jpg", "jpeg")),
    "image/png": FileTypeRule(extensions=("png",)),
    "image/webp": FileTypeRule(extensions=("webp",)),
    "image/gif": FileTypeRule(extensions=("gif",)),
}


SUSPICIOUS_PATTERNS = [
    re.compile(r"\.php\.", re.IGNORECASE),
    re.compile(r"\.asp\.", re.IGNORECASE),
    re.compile(r"\.jsp\.", re.IGNORECASE),
    re.compile(r"\.exe\.", re.IGNORECASE),
    re.compile(r"script", re.IGNORECASE),
    re.compile(r"javascript", re.IGNORECASE),
    re.compile(r"vbscript", re.IGNORECASE),
    re.compile(r"<script", re.IGNORECASE),
    re.compile(r"javascript:", re.IGNORECASE),
]


class UploadedFile(Protocol):
    name: str
    type: str
    size: int


class FileValidationError(MemoryBoardError):
    """One file of a batch was rejected. `index` is zero-based."""

    def __init__(self, index: int, filename: str, errors: list[str]):
        self.index = index
        self.filename = filename
        self.errors = list(errors)
        super().__init__(f"File {index + 1} ({filename}): {', '.join(self.errors)}")


@dataclass
class FileValidationResult:
    valid: bool
    errors: list[str] = field(default_factory=list)

    def __bool__(self) -> bool:
        return self.valid


def file_extension(filename: str) -> str:
    return filename.lower().rsplit(".", 1)[-1]


def validate_image_file(file: UploadedFile) -> FileValidationResult:
    """Check MIME type, size, extension, filename length and suspicious names."""
    settings = get_settings()
    errors: list[str] = []

    rule = ALLOWED_FILE_TYPES.get(file.type)
    if rule is None:
        errors.append(f"File type {file.type} is not allowed. Use JPG, PNG, WebP, or GIF.")

    if rule is not None:
        max_size = rule.max_size or settings.max_image_size
        if file.size > max_size:
            errors.append(
                f"File size ({round(file.size / 1024)}KB) exceeds limit ({round(max_size / 1024)}KB)"
            )

    filename = file.name.lower()
    extension = file_extension(filename)
    if rule is not None and extension not in rule.extensions:
        errors.append(f"File extension .{extension} doesn't match file type")

    if len(filename) > settings.max_filename_length:
        errors.append("Filename is too long")

    if any(pattern.search(filename) for pattern in SUSPICIOUS_PATTERNS):
        errors.append("Filename contains suspicious content")

    if errors:
        logger.info(f"Rejected upload {file.name!r}: {', '.join(errors)}")
    return FileValidationResult(valid=not errors, errors=errors)
