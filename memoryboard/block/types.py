"""
Block type registry - the closed set of block types a memory may contain.

Each BlockType has exactly one BlockTypeDef holding its display metadata,
category, document-wide usage cap and default props. The registry is a plain
lookup map keyed by the enum; it is not extended at runtime.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from ..errors import MemoryBoardError


class UnknownBlockTypeError(MemoryBoardError):
    """Raised when a block type is not part of the registry."""

    def __init__(self, block_type: Any):
        self.block_type = block_type
        super().__init__(f"Unknown block type: {block_type}")


class BlockType(str, Enum):
    PARAGRAPH = "paragraph"
    CHECKLIST = "checklist"
    IMAGE = "image"
    MOOD = "mood"
    DIVIDER = "divider"

    @classmethod
    def parse(cls, value: "BlockType | str") -> "BlockType":
        """
        Resolve a wire value to a BlockType.

        Accepts the enum itself, its value, or the legacy "checkList" spelling.

        Raises:
            UnknownBlockTypeError: if the value names no registered type
        """
        if isinstance(value, BlockType):
            return value
        if isinstance(value, str):
            value = _ALIASES.get(value, value)
            try:
                return cls(value)
            except ValueError:
                pass
        raise UnknownBlockTypeError(value)

    @classmethod
    def try_parse(cls, value: Any) -> "BlockType | None":
        try:
            return cls.parse(value)
        except UnknownBlockTypeError:
            return None

    def __str__(self) -> str:
        return self.value


_ALIASES = {
    "checkList": "checklist",
}


class BlockCategory(str, Enum):
    TEXT = "text"
    LIST = "list"
    MEDIA = "media"
    SPECIAL = "special"
    LAYOUT = "layout"


@dataclass(frozen=True)
class BlockTypeDef:
    """
    Definition of a block type.

    Attributes:
        id: The block type
        name: Display name shown in the selector
        icon: Emoji shown in the selector
        description: One-line help text
        category: Grouping used by the selector
        max_uses: How many blocks of this type a document may hold
        default_props: Props copied into every new block of this type
    """
    id: BlockType
    name: str
    icon: str
    description: str
    category: BlockCategory
    max_uses: int
    default_props: dict[str, Any] = field(default_factory=dict)


BLOCK_LIMITS: dict[BlockType, int] = {
    BlockType.PARAGRAPH: 1,
    BlockType.CHECKLIST: 1,
    BlockType.IMAGE: 3,
    BlockType.MOOD: 1,
    BlockType.DIVIDER: 2,
}


BLOCK_TYPES: dict[BlockType, BlockTypeDef] = {
    BlockType.PARAGRAPH: BlockTypeDef(
        id=BlockType.PARAGRAPH,
        name="Text",
        icon="📝",
        description="Add rich text with formatting",
        category=BlockCategory.TEXT,
        max_uses=BLOCK_LIMITS[BlockType.PARAGRAPH],
        default_props={
            "textAlignment": "left",
            "textColor": "#000000",
            "backgroundColor": "transparent",
        },
    ),
    BlockType.CHECKLIST: BlockTypeDef(
        id=BlockType.CHECKLIST,
        name="Todo List",
        icon="✅",
        description="Track tasks and mark them complete",
        category=BlockCategory.LIST,
        max_uses=BLOCK_LIMITS[BlockType.CHECKLIST],
        default_props={
            "textColor": "#000000",
        },
    ),
    BlockType.IMAGE: BlockTypeDef(
        id=BlockType.IMAGE,
        name="Images",
        icon="🖼️",
        description="Add one or more images",
        category=BlockCategory.MEDIA,
        max_uses=BLOCK_LIMITS[BlockType.IMAGE],
        default_props={
            "alt": "",
            "caption": "",
            "width": None,
            "images": [],
        },
    ),
    BlockType.MOOD: BlockTypeDef(
        id=BlockType.MOOD,
        name="Mood Tracker",
        icon="🎭",
        description="Track emotion with intensity",
        category=BlockCategory.SPECIAL,
        max_uses=BLOCK_LIMITS[BlockType.MOOD],
        default_props={
            "emotion": "",
            "intensity": 5,
            "color": "#8B5CF6",
            "note": "",
        },
    ),
    BlockType.DIVIDER: BlockTypeDef(
        id=BlockType.DIVIDER,
        name="Divider",
        icon="➖",
        description="Add visual separation",
        category=BlockCategory.LAYOUT,
        max_uses=BLOCK_LIMITS[BlockType.DIVIDER],
        default_props={
            "style": "line",
            "color": "#E5E7EB",
        },
    ),
}


def get_block_type(block_type: BlockType | str) -> BlockTypeDef:
    """
    Look up the definition of a block type.

    Raises:
        UnknownBlockTypeError: if the type is not registered
    """
    return BLOCK_TYPES[BlockType.parse(block_type)]


def list_block_types() -> list[BlockTypeDef]:
    """All definitions, in registry order."""
    return list(BLOCK_TYPES.values())
