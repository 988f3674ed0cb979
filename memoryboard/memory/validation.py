"""
Memory form validation.

validate_memory_form returns a dict of field -> message; an empty dict means
the form can be submitted. Block errors are keyed `block_<index>`.
"""

from __future__ import annotations
import re
from datetime import date, datetime
from typing import Iterable

from ..block.block import Block
from ..block.validation import validate_document_errors
from .models import get_emotion_from_mood_blocks


TITLE_MIN_LENGTH = 3
TITLE_MAX_LENGTH = 100

_COLOR = re.compile(r"^#[0-9A-F]{6}$", re.IGNORECASE)


def validate_memory_form(
    title: str,
    blocks: Iterable[Block],
    color: str | None,
    memory_date: date | datetime | None,
    today: date | None = None,
) -> dict[str, str]:
    blocks = list(blocks)
    today = today or date.today()
    errors: dict[str, str] = {}

    title = (title or "").strip()
    if not title:
        errors["title"] = "Please enter a title for your memory."
    elif len(title) < TITLE_MIN_LENGTH:
        errors["title"] = f"Title must be at least {TITLE_MIN_LENGTH} characters long."
    elif len(title) > TITLE_MAX_LENGTH:
        errors["title"] = f"Title must be at most {TITLE_MAX_LENGTH} characters long."

    if not get_emotion_from_mood_blocks(blocks).strip():
        errors["emotion"] = "Please select your emotion in the mood tracker block."

    if not color or not _COLOR.match(color):
        errors["color"] = "Please select a valid color."

    if memory_date is None:
        errors["memoryDate"] = "Please select when this memory happened."
    else:
        day = memory_date.date() if isinstance(memory_date, datetime) else memory_date
        if day > today:
            errors["memoryDate"] = "Memory date cannot be in the future."

    for error in validate_document_errors(blocks):
        errors[f"block_{error.index}"] = str(error)

    return errors
