"""
Mood tracker block editor and the intensity scale helpers shared with the viewer.
"""

from __future__ import annotations
import re

from ..block.block import Block
from ..block.types import BlockType
from ..block.validation import MAX_INTENSITY, MIN_INTENSITY
from .base import BlockEditorBase


MAX_NOTE_LENGTH = 500


_INTENSITY_SCALE = [
    (2, "Very Low", "#EF4444"),
    (4, "Low", "#F97316"),
    (6, "Moderate", "#EAB308"),
    (8, "High", "#22C55E"),
    (MAX_INTENSITY, "Very High", "#8B5CF6"),
]


def get_intensity_label(value: int) -> str:
    for upper, label, _ in _INTENSITY_SCALE:
        if value <= upper:
            return label
    return _INTENSITY_SCALE[-1][1]


def get_intensity_color(value: int) -> str:
    for upper, _, color in _INTENSITY_SCALE:
        if value <= upper:
            return color
    return _INTENSITY_SCALE[-1][2]


def clamp_intensity(value: int) -> int:
    return max(MIN_INTENSITY, min(MAX_INTENSITY, int(value)))


def coerce_intensity(value, default: int = 5) -> int:
    """Stored intensity as an int on the 1-10 scale; unreadable values give the default."""
    try:
        return clamp_intensity(value)
    except (TypeError, ValueError, OverflowError):
        return default


EMOTION_COLORS = {
    "Happy": "#10B981",
    "Sad": "#3B82F6",
    "Angry": "#EF4444",
    "Surprised": "#F59E0B",
    "Calm": "#8B5CF6",
    "Nostalgic": "#EC4899",
    "All": "#6B7280",
    "Unknown": "#9CA3AF",
}


def get_emotion_color(label: str) -> str:
    """Color for an emotion label, matched case-insensitively."""
    label = (label or "").strip().lower()
    for name, color in EMOTION_COLORS.items():
        if name.lower() == label:
            return color
    return EMOTION_COLORS["Unknown"]


_EMOJI_PREFIX = re.compile(
    "^[\U0001F000-\U0001FAFF\u2600-\u27BF\u2B00-\u2BFF\uFE0F\u200D]+"
)


def split_emotion(emotion: str) -> tuple[str, str]:
    """Split "😊 Happy" into ("😊", "Happy"). Either part may be empty."""
    emotion = (emotion or "").strip()
    match = _EMOJI_PREFIX.match(emotion)
    if not match:
        return "", emotion
    return match.group(0), emotion[match.end():].strip()


class MoodEditor(BlockEditorBase):
    block_types = [BlockType.MOOD]

    @property
    def emotion(self) -> str:
        return self.block.props.get("emotion", "")

    @property
    def intensity(self) -> int:
        return coerce_intensity(self.block.props.get("intensity", 5))

    @property
    def note(self) -> str:
        return self.block.props.get("note", "")

    @property
    def intensity_label(self) -> str:
        return get_intensity_label(self.intensity)

    @property
    def intensity_color(self) -> str:
        return get_intensity_color(self.intensity)

    def set_emotion(self, emotion: str) -> Block:
        return self.update_props(emotion=emotion)

    def set_intensity(self, intensity: int) -> Block:
        return self.update_props(intensity=clamp_intensity(intensity))

    def set_note(self, note: str) -> Block:
        return self.update_props(note=(note or "")[:MAX_NOTE_LENGTH])

    def set_color(self, color: str) -> Block:
        return self.update_props(color=color)
