"""
Editor settings loaded from the environment.

Values are read once from `MEMORYBOARD_*` variables (a local `.env` file is
loaded first) and cached. Tests call `reset_settings()` after patching the
environment.
"""

import os
from pydantic import BaseModel, Field
import dotenv


dotenv.load_dotenv()


class EditorSettings(BaseModel):
    max_blocks: int = Field(default=10, ge=1, description="Total block ceiling for a content document")
    max_image_size: int = Field(default=1024 * 1024, ge=1, description="Per-file image size limit in bytes")
    max_images_per_block: int = Field(default=5, ge=1, description="Images accepted by a single image block")
    max_filename_length: int = Field(default=255, ge=1, description="Longest accepted upload filename")
    debounce_ms: int = Field(default=100, ge=0, description="Quiescence window for image metadata edits")
    accent_color: str = Field(default="#8B5CF6", description="Default viewer accent color")
    log_level: str = Field(default="INFO", description="Root log level for configure_logging")

    @property
    def debounce_seconds(self) -> float:
        return self.debounce_ms / 1000

    @classmethod
    def from_env(cls) -> "EditorSettings":
        return cls(
            max_blocks=int(os.getenv("MEMORYBOARD_MAX_BLOCKS", "10")),
            max_image_size=int(os.getenv("MEMORYBOARD_MAX_IMAGE_SIZE", str(1024 * 1024))),
            max_images_per_block=int(os.getenv("MEMORYBOARD_MAX_IMAGES_PER_BLOCK", "5")),
            max_filename_length=int(os.getenv("MEMORYBOARD_MAX_FILENAME_LENGTH", "255")),
            debounce_ms=int(os.getenv("MEMORYBOARD_DEBOUNCE_MS", "100")),
            accent_color=os.getenv("MEMORYBOARD_ACCENT_COLOR", "#8B5CF6"),
            log_level=os.getenv("MEMORYBOARD_LOG_LEVEL", "INFO"),
        )


_settings: EditorSettings | None = None


def get_settings() -> EditorSettings:
    global _settings
    if _settings is None:
        _settings = EditorSettings.from_env()
    return _settings


def reset_settings() -> None:
    global _settings
    _settings = None
