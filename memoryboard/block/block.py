"""
Block - a single typed unit of memory content.

The serialized form of a block is the wire contract shared by the editor, the
viewer and the persistence collaborator:

    {"id": str, "type": str, "props": dict, "content": list}

`type` stays a plain string so documents holding types this build does not
know about still load and render (the viewer shows a notice for them).

Typed views over `content` and `props` are exposed as pydantic models
(ChecklistItem, ImageDescriptor, TextContent) but the block itself stores the
plain dict form so that dumps round-trip losslessly.
"""

from __future__ import annotations
import copy
from datetime import datetime, timezone
from typing import Any, Iterable
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field

from .types import BlockType


def _generate_id() -> str:
    """Generate a unique block ID."""
    return str(uuid4())


def utc_now_iso() -> str:
    """ISO-8601 UTC timestamp with millisecond precision and a Z suffix."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class ChecklistItem(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    id: str | int | None = None
    text: str = ""
    checked: bool = False
    completed_at: str | None = Field(default=None, alias="completedAt")

    def toggled(self, now: str | None = None) -> "ChecklistItem":
        """Return a copy with `checked` flipped and `completedAt` stamped or cleared."""
        checked = not self.checked
        return self.model_copy(update={
            "checked": checked,
            "completed_at": (now or utc_now_iso()) if checked else None,
        })

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=False)


class ImageDescriptor(BaseModel):
    """A stored image: a data URL plus the metadata the viewer needs."""
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    id: str
    url: str
    name: str = ""
    alt: str = ""
    caption: str = ""
    size: int = 0
    type: str = ""
    uploaded_at: str | None = Field(default=None, alias="uploadedAt")

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)


class TextContent(BaseModel):
    """The single content item of a paragraph block."""
    type: str = "text"
    text: str = ""


def content_item_text(item: Any) -> str:
    """Text of a content item, whether stored as a plain string or as {text: ...}."""
    if isinstance(item, str):
        return item
    if isinstance(item, dict):
        text = item.get("text")
        return text if isinstance(text, str) else ""
    return ""


class Block(BaseModel):
    """
    A block instance.

    Blocks are treated as values: editors never mutate a block in place, they
    build an updated copy (see `with_props` / `with_content`) and hand it to
    their owner, which replaces the old block by id.
    """
    model_config = ConfigDict(extra="allow")

    id: str = Field(default_factory=_generate_id)
    type: str
    props: dict[str, Any] = Field(default_factory=dict)
    content: list[Any] = Field(default_factory=list)

    @property
    def block_type(self) -> BlockType | None:
        """The registered type, or None for types unknown to this build."""
        return BlockType.try_parse(self.type)

    def is_type(self, block_type: BlockType | str) -> bool:
        return self.block_type is not None and self.block_type == BlockType.try_parse(block_type)

    @property
    def is_mood(self) -> bool:
        return self.block_type == BlockType.MOOD

    # =========================================================================
    # Copy helpers
    # =========================================================================

    def with_props(self, **updates: Any) -> "Block":
        """Copy of the block with props merged with `updates`."""
        props = copy.deepcopy(self.props)
        props.update(updates)
        return self.model_copy(update={"props": props}, deep=True)

    def with_content(self, content: Iterable[Any]) -> "Block":
        """Copy of the block with its content replaced."""
        return self.model_copy(update={"content": [copy.deepcopy(c) for c in content]}, deep=True)

    def clone(self) -> "Block":
        return self.model_copy(deep=True)

    # =========================================================================
    # Typed views
    # =========================================================================

    def checklist_items(self) -> list[ChecklistItem]:
        return [ChecklistItem.model_validate(item) for item in self.content if isinstance(item, dict)]

    def images(self) -> list[ImageDescriptor]:
        images = self.props.get("images") or []
        return [ImageDescriptor.model_validate(img) for img in images if isinstance(img, dict)]

    def text_markup(self) -> str:
        """Joined markup of a text block's content items."""
        return "".join(content_item_text(item) for item in self.content)

    # =========================================================================
    # Serialization
    # =========================================================================

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the wire contract."""
        return self.model_dump(mode="json")

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Block":
        return cls.model_validate(data)

    def __repr__(self) -> str:
        return f"Block(id={self.id!r}, type={self.type!r})"


def load_document(data: Iterable[dict[str, Any] | Block]) -> list[Block]:
    """Load a content document from its serialized form."""
    return [item if isinstance(item, Block) else Block.from_dict(item) for item in data]


def dump_document(blocks: Iterable[Block]) -> list[dict[str, Any]]:
    """Serialize a content document."""
    return [block.to_dict() for block in blocks]
