"""
Content statistics for memories: counts, reading time, and the plain text
used for search indexing.
"""

from __future__ import annotations
import math
from dataclasses import dataclass
from typing import Iterable

from ..block.block import Block, content_item_text
from ..block.types import BlockType
from ..utils.sanitization import strip_html


WORDS_PER_MINUTE = 200
SEARCH_TEXT_LIMIT = 2000


@dataclass(frozen=True)
class ContentStats:
    characters: int
    words: int
    reading_time: int


def block_text(block: Block) -> str:
    """Visible text of a block's content items, markup removed."""
    parts = [strip_html(content_item_text(item)) for item in block.content]
    return " ".join(part for part in parts if part)


def calculate_reading_time(words: int) -> int:
    return max(1, math.ceil(words / WORDS_PER_MINUTE))


def calculate_content_stats(title: str, blocks: Iterable[Block]) -> ContentStats:
    title = title or ""
    characters = len(title)
    words = len(title.split())
    for block in blocks:
        text = block_text(block)
        characters += len(text)
        words += len(text.split())
    return ContentStats(characters=characters, words=words, reading_time=calculate_reading_time(words))


def extract_text_from_blocks(blocks: Iterable[Block], limit: int = SEARCH_TEXT_LIMIT) -> str:
    """Plain text of a document for search indexing, mood notes included."""
    texts = []
    for block in blocks:
        text = block_text(block)
        if block.block_type == BlockType.MOOD and block.props.get("note"):
            text = f"{text} {strip_html(block.props['note'])}"
        if text.strip():
            texts.append(text.strip())
    return "\n".join(texts)[:limit]


def count_images_in_blocks(blocks: Iterable[Block]) -> int:
    return sum(len(block.props.get("images") or []) for block in blocks if block.block_type == BlockType.IMAGE)


def calculate_image_size_total(blocks: Iterable[Block]) -> int:
    return sum(img.size for block in blocks if block.block_type == BlockType.IMAGE for img in block.images())
