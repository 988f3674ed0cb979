"""
Text block editor.

The block's single content item holds HTML markup. The editor keeps the
parsed RichText document, applies toolbar commands to it and stores the
re-serialized markup back into the block after every change.
"""

from __future__ import annotations
import logging
from typing import Any

from ..block.block import Block
from ..block.types import BlockType
from ..richtext.commands import run_command
from ..richtext.markup import from_html, to_html
from ..richtext.spans import RichText
from .base import BlockEditorBase, OnChange


logger = logging.getLogger(__name__)


ALIGNMENTS = ("left", "center")


class TextEditor(BlockEditorBase):
    block_types = [BlockType.PARAGRAPH]

    def __init__(self, block: Block, on_change: OnChange | None = None, disabled: bool = False):
        super().__init__(block, on_change, disabled)
        self.doc: RichText = from_html(block.text_markup())

    @property
    def markup(self) -> str:
        return to_html(self.doc)

    @property
    def alignment(self) -> str:
        return self.block.props.get("textAlignment", "left")

    @property
    def char_count(self) -> int:
        return self.doc.char_count

    @property
    def word_count(self) -> int:
        return self.doc.word_count

    def _commit(self, doc: RichText) -> Block:
        self.doc = doc
        updated = self.block.with_content([{"type": "text", "text": to_html(doc)}])
        return self.emit(updated)

    def run(self, name: str, **kwargs: Any) -> Block:
        """
        Apply a named command. "set-alignment" updates the block props, every
        other name is a rich text command applied to the document.
        """
        if self.disabled:
            return self.block
        if name == "set-alignment":
            return self.set_alignment(kwargs["alignment"])
        return self._commit(run_command(self.doc, name, **kwargs))

    def set_alignment(self, alignment: str) -> Block:
        if alignment not in ALIGNMENTS:
            raise ValueError(f"Unsupported alignment: {alignment!r}")
        return self.update_props(textAlignment=alignment)

    def set_markup(self, markup: str) -> Block:
        """Replace the whole document, e.g. from pasted or typed HTML."""
        return self._commit(from_html(markup))

    def apply_mark(self, mark: str, start: int, end: int) -> Block:
        return self.run("apply-mark", mark=mark, start=start, end=end)

    def set_text_color(self, color: str | None, start: int, end: int) -> Block:
        return self.run("set-text-color", color=color, start=start, end=end)

    def set_background_color(self, color: str | None, start: int, end: int) -> Block:
        return self.run("set-background-color", color=color, start=start, end=end)

    def set_heading_level(self, level: int, start: int, end: int | None = None) -> Block:
        return self.run("set-heading-level", level=level, start=start, end=end)

    def toggle_list(self, kind: str, start: int, end: int | None = None) -> Block:
        return self.run("toggle-list", kind=kind, start=start, end=end)

    def insert_text(self, text: str, position: int) -> Block:
        return self.run("insert-text", text=text, start=position)

    def delete_range(self, start: int, end: int) -> Block:
        return self.run("delete-range", start=start, end=end)
