"""
Memory record flow: models, form validation, statistics, the persistence
protocol, the composer state machine and the viewer session.
"""

from .models import Memory, MemoryDraft, get_emotion_from_mood_blocks
from .validation import validate_memory_form
from .stats import (
    ContentStats,
    calculate_content_stats,
    calculate_reading_time,
    extract_text_from_blocks,
    count_images_in_blocks,
    calculate_image_size_total,
)
from .client import MemoryClient
from .composer import MemoryComposer, ComposerState, MemoryValidationError, ComposerClosedError
from .session import MemoryViewerSession, MemoryNotLoadedError

__all__ = [
    "Memory",
    "MemoryDraft",
    "get_emotion_from_mood_blocks",
    "validate_memory_form",
    "ContentStats",
    "calculate_content_stats",
    "calculate_reading_time",
    "extract_text_from_blocks",
    "count_images_in_blocks",
    "calculate_image_size_total",
    "MemoryClient",
    "MemoryComposer",
    "ComposerState",
    "MemoryValidationError",
    "ComposerClosedError",
    "MemoryViewerSession",
    "MemoryNotLoadedError",
]
