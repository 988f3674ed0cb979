"""
Input sanitization for user supplied strings and stored documents.

Two levels are offered:
- strip_html: drop every tag and keep the visible text (used for props and
  non-paragraph content)
- sanitize_markup (from richtext.markup): keep the safe formatting subset
  (used for paragraph content)
"""

from __future__ import annotations
import copy
import logging
import re
from typing import Any, Iterable

from ..block.block import Block
from ..block.types import BlockType
from ..richtext.markup import sanitize_markup, strip_markup


logger = logging.getLogger(__name__)


_TEXT_INPUT_PATTERNS = [
    re.compile(r"[<>]"),
    re.compile(r"javascript:", re.IGNORECASE),
    re.compile(r"vbscript:", re.IGNORECASE),
    re.compile(r"data:", re.IGNORECASE),
    re.compile(r"on\w+=", re.IGNORECASE),
]

STRICT_PROPS = ("note", "caption", "alt", "emotion")


def sanitize_text_input(value: Any) -> str:
    """
    Clean a single-line form input: angle brackets, script protocols and
    inline event handlers are removed, then the result is trimmed.
    Non-strings give "".
    """
    if not value or not isinstance(value, str):
        return ""
    for pattern in _TEXT_INPUT_PATTERNS:
        value = pattern.sub("", value)
    return value.strip()


def strip_html(value: Any) -> str:
    """Remove all markup, keeping only the text content."""
    if not value or not isinstance(value, str):
        return ""
    if "<" not in value and "&" not in value:
        return value.strip()
    return strip_markup(value)


def _sanitize_item(item: Any, rich: bool) -> Any:
    clean = sanitize_markup if rich else strip_html
    if isinstance(item, str):
        return clean(item)
    if isinstance(item, dict) and item.get("text"):
        item = dict(item)
        item["text"] = clean(item["text"])
    return item


def sanitize_block(block: Block) -> Block:
    """
    Sanitize the user supplied parts of a block. Paragraph content keeps its
    safe formatting; other content items and the free-text props are reduced
    to plain text.
    """
    rich = block.block_type == BlockType.PARAGRAPH
    content = [_sanitize_item(item, rich) for item in block.content]
    props = copy.deepcopy(block.props)
    for key in STRICT_PROPS:
        if isinstance(props.get(key), str):
            props[key] = strip_html(props[key])
    images = props.get("images")
    if isinstance(images, list):
        props["images"] = [
            {**img, **{k: strip_html(img[k]) for k in ("alt", "caption", "name") if isinstance(img.get(k), str)}}
            if isinstance(img, dict) else img
            for img in images
        ]
    return block.model_copy(update={"content": content, "props": props})


def sanitize_blocks(blocks: Iterable[Block]) -> list[Block]:
    """Sanitize a whole content document before it is stored or rendered."""
    return [sanitize_block(block) for block in blocks]
