"""
Rich text commands.

A command is a named, parameterised edit of a RichText document over a
character range. Command classes register themselves by name through
CommandMeta, so the editor can dispatch toolbar actions it receives as
strings:

    doc = run_command(doc, "apply-mark", start=0, end=5, mark="bold")
    doc = run_command(doc, "set-heading-level", start=0, end=0, level=2)

Every command returns a new document; the input is left untouched.
"""

from __future__ import annotations
import logging
import re
from typing import Any

from ..errors import MemoryBoardError
from .spans import MAX_HEADING_LEVEL, Line, LineKind, Mark, RichText, Span


logger = logging.getLogger(__name__)


class CommandError(MemoryBoardError):
    """Raised for unknown commands or invalid command arguments."""
    pass


_HEX_COLOR = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")
_RGB_COLOR = re.compile(r"^rgb\(\s*\d{1,3}\s*,\s*\d{1,3}\s*,\s*\d{1,3}\s*\)$")
_NAMED_COLOR = re.compile(r"^[a-zA-Z]+$")


def is_safe_color(value: str | None) -> bool:
    """Colors accepted in markup: #rgb, #rrggbb, rgb(r, g, b) or a plain color name."""
    if not value:
        return False
    value = value.strip()
    return bool(_HEX_COLOR.match(value) or _RGB_COLOR.match(value) or _NAMED_COLOR.match(value))


def _normalize_color(value: str | None) -> str | None:
    """None, "" and "transparent" clear a color; anything else must be safe."""
    if value is None:
        return None
    value = value.strip()
    if value == "" or value.lower() == "transparent":
        return None
    if not is_safe_color(value):
        raise CommandError(f"Unsupported color: {value!r}")
    return value


_command_registry: dict[str, type["Command"]] = {}


class CommandMeta(type):
    """
    Metaclass that registers Command subclasses by their `name`.

    Subclasses without a name are treated as abstract and not registered.
    """

    def __new__(mcs, name: str, bases: tuple, attrs: dict):
        new_cls = super().__new__(mcs, name, bases, attrs)
        if command_name := attrs.get("name"):
            _command_registry[command_name] = new_cls
        return new_cls

    @classmethod
    def get_command(mcs, name: str) -> type["Command"]:
        try:
            return _command_registry[name]
        except KeyError:
            raise CommandError(f"Unknown command: {name}") from None

    @classmethod
    def list_commands(mcs) -> list[str]:
        return list(_command_registry.keys())


class Command(metaclass=CommandMeta):
    """
    Base class for rich text commands.

    Subclasses set `name` and implement `apply`. The range is given in
    document positions; start and end may come in either order.
    """
    name: str | None = None

    def __init__(self, start: int = 0, end: int | None = None):
        self.start = start
        self.end = start if end is None else end

    def range_in(self, doc: RichText) -> tuple[int, int]:
        start, end = doc.clamp(self.start), doc.clamp(self.end)
        return (start, end) if start <= end else (end, start)

    def apply(self, doc: RichText) -> RichText:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.start}, {self.end})"


# =========================================================================
# Inline commands
# =========================================================================

class ApplyMark(Command):
    """
    Toggle a mark over a range. If every character in the range already
    carries the mark it is removed, otherwise it is added to all of them.
    """
    name = "apply-mark"

    def __init__(self, mark: Mark | str, start: int = 0, end: int | None = None):
        super().__init__(start, end)
        try:
            self.mark = Mark(mark)
        except ValueError:
            raise CommandError(f"Unknown mark: {mark}") from None

    def apply(self, doc: RichText) -> RichText:
        start, end = self.range_in(doc)
        if start == end:
            return doc.copy()
        spans = doc.spans_in_range(start, end)
        remove = bool(spans) and all(self.mark in span.marks for span in spans)

        def toggle(span: Span) -> Span:
            marks = span.marks - {self.mark} if remove else span.marks | {self.mark}
            return Span(span.text, frozenset(marks), span.color, span.background)

        return doc.map_range(start, end, toggle)


class SetTextColor(Command):
    name = "set-text-color"

    def __init__(self, color: str | None, start: int = 0, end: int | None = None):
        super().__init__(start, end)
        self.color = _normalize_color(color)

    def apply(self, doc: RichText) -> RichText:
        start, end = self.range_in(doc)
        return doc.map_range(start, end, lambda s: Span(s.text, s.marks, self.color, s.background))


class SetBackgroundColor(Command):
    name = "set-background-color"

    def __init__(self, color: str | None, start: int = 0, end: int | None = None):
        super().__init__(start, end)
        self.color = _normalize_color(color)

    def apply(self, doc: RichText) -> RichText:
        start, end = self.range_in(doc)
        return doc.map_range(start, end, lambda s: Span(s.text, s.marks, s.color, self.color))


# =========================================================================
# Line commands
# =========================================================================

class SetHeadingLevel(Command):
    """Level 1-6 turns every touched line into a heading; level 0 back into paragraphs."""
    name = "set-heading-level"

    def __init__(self, level: int, start: int = 0, end: int | None = None):
        super().__init__(start, end)
        if not isinstance(level, int) or not 0 <= level <= MAX_HEADING_LEVEL:
            raise CommandError(f"Heading level must be between 0 and {MAX_HEADING_LEVEL}")
        self.level = level

    def apply(self, doc: RichText) -> RichText:
        start, end = self.range_in(doc)
        if self.level == 0:
            return doc.map_lines(start, end, lambda line: line.with_kind(LineKind.PARAGRAPH))
        return doc.map_lines(start, end, lambda line: line.with_kind(LineKind.HEADING, self.level))


class ToggleList(Command):
    """
    Turn the touched lines into bullet or numbered items. When they all are
    already items of that kind they revert to paragraphs.
    """
    name = "toggle-list"

    def __init__(self, kind: LineKind | str, start: int = 0, end: int | None = None):
        super().__init__(start, end)
        try:
            self.kind = LineKind(kind)
        except ValueError:
            raise CommandError(f"Unknown list kind: {kind}") from None
        if not self.kind.is_list:
            raise CommandError(f"Not a list kind: {kind}")

    def apply(self, doc: RichText) -> RichText:
        start, end = self.range_in(doc)
        indices = doc.lines_in_range(start, end)
        already = all(doc.lines[i].kind == self.kind for i in indices)
        target = LineKind.PARAGRAPH if already else self.kind

        def convert(line: Line) -> Line:
            return line.with_kind(target)

        return doc.map_lines(start, end, convert)


# =========================================================================
# Text commands
# =========================================================================

class InsertText(Command):
    name = "insert-text"

    def __init__(self, text: str, start: int = 0, end: int | None = None):
        super().__init__(start, end)
        self.text = text

    def apply(self, doc: RichText) -> RichText:
        start, end = self.range_in(doc)
        if start != end:
            doc = doc.delete_range(start, end)
        return doc.insert_text(start, self.text)


class DeleteRange(Command):
    name = "delete-range"

    def apply(self, doc: RichText) -> RichText:
        start, end = self.range_in(doc)
        return doc.delete_range(start, end)


def run_command(doc: RichText, name: str, **kwargs: Any) -> RichText:
    """
    Build the command registered under `name` and apply it to `doc`.

    Raises:
        CommandError: for unknown commands or invalid arguments
    """
    command_cls = CommandMeta.get_command(name)
    try:
        command = command_cls(**kwargs)
    except TypeError as e:
        raise CommandError(f"Invalid arguments for {name}: {e}") from e
    logger.debug(f"Applying {command!r}")
    return command.apply(doc)
