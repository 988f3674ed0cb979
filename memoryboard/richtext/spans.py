"""
Span and Line - the structured model behind the rich text editor.

A RichText document is a list of Lines. Each Line has a kind (paragraph,
heading, bullet item, numbered item) and a list of Spans. A Span is a run of
text sharing one set of marks and colors.

Positions are offsets into the document's plain text, where lines are joined
with "\n". Position 0 is the start of the first line; the newline between two
lines occupies one position.

    RichText([Line([Span("Hello ", {BOLD}), Span("world")])])
    plain_text -> "Hello world"
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Callable, Iterator


class Mark(str, Enum):
    BOLD = "bold"
    ITALIC = "italic"
    UNDERLINE = "underline"
    STRIKETHROUGH = "strikethrough"


class LineKind(str, Enum):
    PARAGRAPH = "paragraph"
    HEADING = "heading"
    BULLET = "bullet"
    NUMBERED = "numbered"

    @property
    def is_list(self) -> bool:
        return self in (LineKind.BULLET, LineKind.NUMBERED)


MAX_HEADING_LEVEL = 6


@dataclass(frozen=True)
class Span:
    """
    A run of text with uniform formatting.

    Attributes:
        text: The text content
        marks: Decorations applied to the whole run
        color: Text color, or None for the inherited color
        background: Background color, or None for transparent
    """
    text: str
    marks: frozenset[Mark] = frozenset()
    color: str | None = None
    background: str | None = None

    @property
    def length(self) -> int:
        return len(self.text)

    def same_style(self, other: "Span") -> bool:
        return self.marks == other.marks and self.color == other.color and self.background == other.background

    def with_text(self, text: str) -> "Span":
        return replace(self, text=text)

    def split(self, position: int) -> tuple["Span", "Span"]:
        """
        Split the span at a position relative to its start.

        Returns (left, right); either side may be empty when position falls
        on a boundary.
        """
        if position <= 0:
            return self.with_text(""), self
        if position >= len(self.text):
            return self, self.with_text("")
        return self.with_text(self.text[:position]), self.with_text(self.text[position:])

    def __repr__(self) -> str:
        preview = self.text if len(self.text) <= 20 else self.text[:17] + "..."
        parts = [repr(preview)]
        if self.marks:
            parts.append("marks=" + ",".join(sorted(m.value for m in self.marks)))
        if self.color:
            parts.append(f"color={self.color}")
        if self.background:
            parts.append(f"bg={self.background}")
        return f"Span({', '.join(parts)})"


def split_spans(spans: list[Span], start: int, end: int) -> tuple[list[Span], list[Span], list[Span]]:
    """
    Split a list of spans at the given position range.

    Args:
        spans: Spans of a single line
        start: Start of the range, relative to the line (inclusive)
        end: End of the range, relative to the line (exclusive)

    Returns: (before, inside, after)
    """
    pos = 0
    before: list[Span] = []
    inside: list[Span] = []
    after: list[Span] = []

    for span in spans:
        span_start = pos
        span_end = pos + span.length

        if span_end <= start:
            before.append(span)
        elif span_start >= end:
            after.append(span)
        elif span_start >= start and span_end <= end:
            inside.append(span)
        else:
            if span_start < start:
                left, right = span.split(start - span_start)
                if left.text:
                    before.append(left)
                if span_end <= end:
                    if right.text:
                        inside.append(right)
                else:
                    middle, tail = right.split(end - start)
                    if middle.text:
                        inside.append(middle)
                    if tail.text:
                        after.append(tail)
            else:
                middle, tail = span.split(end - span_start)
                if middle.text:
                    inside.append(middle)
                if tail.text:
                    after.append(tail)

        pos = span_end

    return before, inside, after


def merge_spans(spans: list[Span]) -> list[Span]:
    """Drop empty spans and join neighbours that share a style."""
    merged: list[Span] = []
    for span in spans:
        if not span.text:
            continue
        if merged and merged[-1].same_style(span):
            merged[-1] = merged[-1].with_text(merged[-1].text + span.text)
        else:
            merged.append(span)
    return merged


@dataclass
class Line:
    spans: list[Span] = field(default_factory=list)
    kind: LineKind = LineKind.PARAGRAPH
    level: int = 0

    def __post_init__(self):
        if self.kind == LineKind.HEADING and not 1 <= self.level <= MAX_HEADING_LEVEL:
            raise ValueError(f"heading level must be between 1 and {MAX_HEADING_LEVEL}, got {self.level}")
        if self.kind != LineKind.HEADING:
            self.level = 0

    @property
    def text(self) -> str:
        return "".join(span.text for span in self.spans)

    @property
    def length(self) -> int:
        return sum(span.length for span in self.spans)

    @property
    def is_empty(self) -> bool:
        return self.length == 0

    @property
    def heading_level(self) -> int:
        return self.level if self.kind == LineKind.HEADING else 0

    def copy(self) -> "Line":
        return Line(spans=list(self.spans), kind=self.kind, level=self.level)

    def with_kind(self, kind: LineKind, level: int = 0) -> "Line":
        return Line(spans=list(self.spans), kind=kind, level=level)

    def style_at(self, offset: int) -> Span:
        """An empty span carrying the style that text typed at offset inherits."""
        pos = 0
        last = None
        for span in self.spans:
            if pos < offset <= pos + span.length:
                return span.with_text("")
            if offset == 0 and pos == 0:
                return span.with_text("")
            pos += span.length
            last = span
        return last.with_text("") if last is not None else Span("")


class RichText:
    """
    A rich text document.

    RichText is treated as a value by the command layer: commands copy the
    document, edit the copy, and return it.
    """

    def __init__(self, lines: list[Line] | None = None):
        self.lines: list[Line] = lines if lines else [Line()]

    @classmethod
    def from_plain_text(cls, text: str) -> "RichText":
        return cls([Line([Span(part)] if part else []) for part in text.split("\n")])

    # =========================================================================
    # Properties
    # =========================================================================

    @property
    def plain_text(self) -> str:
        return "\n".join(line.text for line in self.lines)

    @property
    def length(self) -> int:
        return len(self.plain_text)

    @property
    def char_count(self) -> int:
        """Characters of visible text, excluding line separators."""
        return sum(line.length for line in self.lines)

    @property
    def word_count(self) -> int:
        return len(self.plain_text.split())

    @property
    def is_blank(self) -> bool:
        return not self.plain_text.strip()

    def copy(self) -> "RichText":
        return RichText([line.copy() for line in self.lines])

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RichText):
            return NotImplemented
        return [(l.kind, l.level, merge_spans(l.spans)) for l in self.lines] == \
            [(l.kind, l.level, merge_spans(l.spans)) for l in other.lines]

    def __repr__(self) -> str:
        return f"RichText(lines={len(self.lines)}, text={self.plain_text[:30]!r})"

    # =========================================================================
    # Position helpers
    # =========================================================================

    def clamp(self, position: int) -> int:
        return max(0, min(position, self.length))

    def iter_line_ranges(self) -> Iterator[tuple[int, int, int]]:
        """Yield (line_index, start, end) of every line in document positions."""
        pos = 0
        for i, line in enumerate(self.lines):
            yield i, pos, pos + line.length
            pos += line.length + 1

    def locate(self, position: int) -> tuple[int, int]:
        """Map a document position to (line_index, offset_in_line)."""
        position = self.clamp(position)
        for i, start, end in self.iter_line_ranges():
            if position <= end:
                return i, position - start
        last = len(self.lines) - 1
        return last, self.lines[last].length

    def lines_in_range(self, start: int, end: int) -> list[int]:
        """Indices of the lines touched by [start, end]. A collapsed range touches one line."""
        start, end = sorted((self.clamp(start), self.clamp(end)))
        first, _ = self.locate(start)
        last, _ = self.locate(end)
        return list(range(first, last + 1))

    # =========================================================================
    # Span mapping
    # =========================================================================

    def spans_in_range(self, start: int, end: int) -> list[Span]:
        start, end = sorted((self.clamp(start), self.clamp(end)))
        result = []
        for i, line_start, line_end in self.iter_line_ranges():
            lo, hi = max(start, line_start), min(end, line_end)
            if lo >= hi:
                continue
            _, inside, _ = split_spans(self.lines[i].spans, lo - line_start, hi - line_start)
            result.extend(inside)
        return result

    def map_range(self, start: int, end: int, fn: Callable[[Span], Span]) -> "RichText":
        """Return a copy with fn applied to every span inside [start, end)."""
        start, end = sorted((self.clamp(start), self.clamp(end)))
        doc = self.copy()
        for i, line_start, line_end in self.iter_line_ranges():
            lo, hi = max(start, line_start), min(end, line_end)
            if lo >= hi:
                continue
            line = doc.lines[i]
            before, inside, after = split_spans(line.spans, lo - line_start, hi - line_start)
            line.spans = merge_spans(before + [fn(span) for span in inside] + after)
        return doc

    def map_lines(self, start: int, end: int, fn: Callable[[Line], Line]) -> "RichText":
        doc = self.copy()
        for i in self.lines_in_range(start, end):
            doc.lines[i] = fn(doc.lines[i])
        return doc

    # =========================================================================
    # Editing
    # =========================================================================

    def insert_text(self, position: int, text: str) -> "RichText":
        """
        Insert text at a position. Newlines start new lines; a new line after
        a list item continues the list, after anything else it is a paragraph.
        """
        doc = self.copy()
        line_index, offset = doc.locate(position)
        line = doc.lines[line_index]
        style = line.style_at(offset)
        before, _, after = split_spans(line.spans, offset, offset)

        parts = text.split("\n")
        new_lines: list[Line] = []
        for n, part in enumerate(parts):
            spans = [style.with_text(part)] if part else []
            if n == 0:
                current = Line(merge_spans(before + spans), line.kind, line.level)
            else:
                kind = line.kind if line.kind.is_list else LineKind.PARAGRAPH
                current = Line(merge_spans(spans), kind)
            new_lines.append(current)
        new_lines[-1].spans = merge_spans(new_lines[-1].spans + after)
        doc.lines[line_index:line_index + 1] = new_lines
        return doc

    def delete_range(self, start: int, end: int) -> "RichText":
        """Delete [start, end). Lines spanned by the range are joined into the first."""
        start, end = sorted((self.clamp(start), self.clamp(end)))
        if start == end:
            return self.copy()
        doc = self.copy()
        first, first_offset = doc.locate(start)
        last, last_offset = doc.locate(end)
        head, _, _ = split_spans(doc.lines[first].spans, first_offset, doc.lines[first].length)
        _, _, tail = split_spans(doc.lines[last].spans, 0, last_offset)
        merged = doc.lines[first]
        merged.spans = merge_spans(head + tail)
        doc.lines[first:last + 1] = [merged]
        return doc

    def normalized(self) -> "RichText":
        doc = self.copy()
        for line in doc.lines:
            line.spans = merge_spans(line.spans)
        return doc
