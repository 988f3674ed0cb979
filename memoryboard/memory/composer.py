"""
MemoryComposer - the create/edit flow for a single memory.

States:

    EMPTY -> HAS_PINNED_MOOD -> EDITING -> VALIDATING -> VALID | INVALID
    VALID -> SUBMITTED
    any open state -> DISCARDED

A new memory starts with a pinned mood block. Editing an existing memory
starts in EDITING. SUBMITTED and DISCARDED are final; further edits raise
ComposerClosedError.
"""

from __future__ import annotations
import logging
from datetime import date
from enum import Enum
from typing import Any

from ..block.block import Block
from ..block.diff import DocumentDiff, diff_documents
from ..block.registry import create_block
from ..block.types import BlockType
from ..editor.surface import BlockEditor
from ..errors import MemoryBoardError
from ..utils.sanitization import sanitize_blocks, sanitize_text_input
from .client import MemoryClient
from .models import Memory, MemoryDraft
from .stats import ContentStats, calculate_content_stats
from .validation import validate_memory_form


logger = logging.getLogger(__name__)


class ComposerState(str, Enum):
    EMPTY = "empty"
    HAS_PINNED_MOOD = "has_pinned_mood"
    EDITING = "editing"
    VALIDATING = "validating"
    VALID = "valid"
    INVALID = "invalid"
    SUBMITTED = "submitted"
    DISCARDED = "discarded"


FINAL_STATES = {ComposerState.SUBMITTED, ComposerState.DISCARDED}


class MemoryValidationError(MemoryBoardError):
    """The form failed validation. `errors` maps field (or block_<i>) to message."""

    def __init__(self, errors: dict[str, str]):
        self.errors = dict(errors)
        super().__init__("; ".join(self.errors.values()))


class ComposerClosedError(MemoryBoardError):
    pass


class MemoryComposer:

    def __init__(
        self,
        client: MemoryClient,
        memory: Memory | None = None,
        max_blocks: int | None = None,
        today: date | None = None,
    ):
        self.client = client
        self.memory_id: str | None = memory.id if memory is not None else None
        self.draft: MemoryDraft = memory.to_draft() if memory is not None else MemoryDraft()
        self._baseline: MemoryDraft | None = self.draft.model_copy(deep=True) if memory is not None else None
        self.today = today
        self.errors: dict[str, str] = {}
        self.state = ComposerState.EDITING if memory is not None else ComposerState.EMPTY
        self.editor = BlockEditor(self.draft.content, on_change=self._on_blocks_change, max_blocks=max_blocks)

    @property
    def is_editing_existing(self) -> bool:
        return self.memory_id is not None

    @property
    def blocks(self) -> list[Block]:
        return list(self.draft.content)

    @property
    def stats(self) -> ContentStats:
        return calculate_content_stats(self.draft.title, self.draft.content)

    @property
    def content_diff(self) -> DocumentDiff:
        """Block changes since the memory was loaded or started."""
        baseline = self._baseline.content if self._baseline is not None else []
        return diff_documents(baseline, self.draft.content)

    @property
    def changed_fields(self) -> list[str]:
        if self._baseline is None:
            return []
        fields = [
            name for name in ("title", "color", "memory_date", "is_public")
            if getattr(self.draft, name) != getattr(self._baseline, name)
        ]
        if self.content_diff:
            fields.append("content")
        return fields

    @property
    def has_changes(self) -> bool:
        return bool(self.changed_fields)

    def _ensure_open(self) -> None:
        if self.state in FINAL_STATES:
            raise ComposerClosedError(f"Composer is {self.state.value}")

    def _touch(self) -> None:
        self._ensure_open()
        self.state = ComposerState.EDITING

    def _on_blocks_change(self, blocks: list[Block]) -> None:
        self._touch()
        self.draft.content = list(blocks)

    # =========================================================================
    # Editing
    # =========================================================================

    def start(self) -> Block:
        """Begin a new memory with a pinned mood block."""
        self._ensure_open()
        if self.state != ComposerState.EMPTY:
            raise ComposerClosedError(f"Cannot start a composer in state {self.state.value}")
        mood = create_block(BlockType.MOOD)
        self.draft.content = [mood]
        self.editor.set_blocks(self.draft.content)
        self._baseline = self.draft.model_copy(deep=True)
        self.state = ComposerState.HAS_PINNED_MOOD
        logger.debug(f"Started new memory with mood block {mood.id}")
        return mood

    def set_title(self, title: str) -> None:
        self._touch()
        self.draft.title = sanitize_text_input(title)

    def set_color(self, color: str) -> None:
        self._touch()
        self.draft.color = color

    def set_memory_date(self, memory_date: date | None) -> None:
        self._touch()
        self.draft.memory_date = memory_date

    def set_public(self, is_public: bool) -> None:
        self._touch()
        self.draft.is_public = is_public

    # =========================================================================
    # Validation / submission
    # =========================================================================

    def validate(self) -> dict[str, str]:
        self._ensure_open()
        self.state = ComposerState.VALIDATING
        self.errors = validate_memory_form(
            self.draft.title,
            self.draft.content,
            self.draft.color,
            self.draft.memory_date,
            today=self.today,
        )
        self.state = ComposerState.INVALID if self.errors else ComposerState.VALID
        return self.errors

    async def submit(self) -> Memory:
        """
        Validate, sanitize and send the memory to the collaborator.

        Raises:
            MemoryValidationError: if the form is invalid
        """
        errors = self.validate()
        if errors:
            raise MemoryValidationError(errors)

        draft = self.draft.model_copy(update={"content": sanitize_blocks(self.draft.content)})
        payload: dict[str, Any] = draft.to_payload()
        try:
            if self.memory_id is None:
                response = await self.client.create_memory(payload)
            else:
                logger.debug(f"Updating memory {self.memory_id}: {self.content_diff.summary()}")
                response = await self.client.update_memory(self.memory_id, payload)
        except Exception:
            self.state = ComposerState.EDITING
            raise

        memory = Memory.from_payload(response)
        self.memory_id = memory.id
        self.state = ComposerState.SUBMITTED
        logger.info(f"Saved memory {memory.id}")
        return memory

    def discard(self) -> None:
        self._ensure_open()
        self.state = ComposerState.DISCARDED
