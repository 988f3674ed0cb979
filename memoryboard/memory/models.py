"""
Memory records as exchanged with the persistence collaborator.

A memory is a title, a content document and some metadata. Its emotion is not
stored separately by the editor: it is derived from the first mood block when
the payload is built.
"""

from __future__ import annotations
from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..block.block import Block, dump_document
from ..block.types import BlockType


DEFAULT_MEMORY_COLOR = "#8B5CF6"


def get_emotion_from_mood_blocks(blocks: list[Block]) -> str:
    """Emotion of the first mood block, or "" when there is none."""
    for block in blocks:
        if block.block_type == BlockType.MOOD:
            emotion = block.props.get("emotion")
            return emotion if isinstance(emotion, str) else ""
    return ""


class MemoryDraft(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    title: str = ""
    content: list[Block] = Field(default_factory=list)
    color: str = DEFAULT_MEMORY_COLOR
    memory_date: date | None = Field(default=None, alias="memoryDate")
    is_public: bool = Field(default=False, alias="isPublic")

    @field_validator("memory_date", mode="before")
    @classmethod
    def _coerce_memory_date(cls, value: Any) -> Any:
        if isinstance(value, datetime):
            return value.date()
        if isinstance(value, str) and len(value) > 10 and value[10] in "T ":
            return value[:10]
        return value

    @property
    def emotion(self) -> str:
        return get_emotion_from_mood_blocks(self.content)

    def to_payload(self) -> dict[str, Any]:
        """The `data` object sent to create_memory / update_memory."""
        return {
            "title": self.title.strip(),
            "content": dump_document(self.content),
            "emotion": self.emotion,
            "color": self.color,
            "memoryDate": self.memory_date.isoformat() if self.memory_date else None,
            "isPublic": self.is_public,
        }


class Memory(MemoryDraft):
    id: str

    @classmethod
    def from_payload(cls, data: dict[str, Any]) -> "Memory":
        """Build from a collaborator response; accepts `_id` as the id key."""
        data = dict(data)
        if "id" not in data and "_id" in data:
            data["id"] = str(data.pop("_id"))
        return cls.model_validate(data)

    def to_draft(self) -> MemoryDraft:
        return MemoryDraft.model_validate(self.model_dump(exclude={"id"}))
