from __future__ import annotations

from ..block.types import BlockType
from ..editor.mood import coerce_intensity, get_emotion_color, get_intensity_color, get_intensity_label, split_emotion
from ..richtext.commands import is_safe_color
from ..utils.sanitization import strip_html
from .base import BlockView, escape, register_view


DEFAULT_MOOD_EMOJI = "🎭"


@register_view(BlockType.MOOD)
class MoodBlockView(BlockView):

    @property
    def emotion(self) -> str:
        emotion = self.block.props.get("emotion")
        return emotion if isinstance(emotion, str) else ""

    @property
    def emoji(self) -> str:
        emoji, _ = split_emotion(self.emotion)
        return emoji or DEFAULT_MOOD_EMOJI

    @property
    def emotion_text(self) -> str:
        _, text = split_emotion(self.emotion)
        return text

    @property
    def intensity(self) -> int:
        return coerce_intensity(self.block.props.get("intensity") or 5)

    @property
    def intensity_label(self) -> str:
        return get_intensity_label(self.intensity)

    @property
    def intensity_color(self) -> str:
        return get_intensity_color(self.intensity)

    @property
    def display_color(self) -> str:
        """Emotion color when the mood names one, the block color otherwise."""
        if self.emotion_text:
            return get_emotion_color(self.emotion_text)
        color = self.block.props.get("color")
        return color if is_safe_color(color) else self.accent_color

    @property
    def header(self) -> str:
        return "Current Mood" if self.is_first_block else "Mood Update"

    @property
    def note(self) -> str:
        return strip_html(self.block.props.get("note") or "")

    def render_inner(self) -> str:
        color = escape(self.display_color)
        text = f'<p class="emotion" style="color: {color}">{escape(self.emotion_text)}</p>' if self.emotion_text else ""
        note = f'<p class="mood-note">{escape(self.note)}</p>' if self.note else ""
        classes = "mood-block-viewer first-mood-block" if self.is_first_block else "mood-block-viewer"
        return (
            f'<div class="{classes}" style="border-color: {color}">'
            f'<div class="mood-header"><span class="emoji">{escape(self.emoji)}</span>'
            f"<h3>{self.header}</h3>{text}</div>"
            f'<div class="intensity"><span>{self.intensity}/10 ({self.intensity_label})</span>'
            f'<div class="intensity-bar" style="width: {self.intensity * 10}%; '
            f'background-color: {self.intensity_color}"></div></div>'
            f"{note}</div>"
        )
