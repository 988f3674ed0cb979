"""
HTML markup for RichText documents.

Paragraph content is stored as an HTML fragment. This module converts between
that fragment and the RichText model:

    from_html(markup) -> RichText      parse, dropping anything not representable
    to_html(doc) -> str                canonical serialization
    sanitize_markup(markup) -> str     from_html followed by to_html

Because serialization only ever emits the canonical tag set (p, h1-h6, ul, ol,
li, br, strong, em, u, del, span with a color style), sanitizing is a parse
and re-serialize round: scripts, event handlers, unknown tags and unsafe CSS
never survive it. Legacy `<font color>` and `<strike>` are read as a color
span and a strikethrough mark.
"""

from __future__ import annotations
import html
import logging
from html.parser import HTMLParser

from .commands import is_safe_color
from .spans import Line, LineKind, Mark, RichText, Span, merge_spans


logger = logging.getLogger(__name__)


BLOCK_TAGS = {"p", "div", "blockquote", "pre", "li", "h1", "h2", "h3", "h4", "h5", "h6"}
LIST_TAGS = {"ul", "ol"}

# content of these tags is dropped entirely
SKIP_TAGS = {"script", "style", "object", "embed", "iframe", "form", "textarea", "select", "noscript", "template", "svg", "math", "title", "head"}

VOID_TAGS = {"br", "img", "input", "hr", "meta", "link", "wbr", "source", "area", "base", "col", "embed", "param", "track"}

INLINE_MARKS = {
    "strong": Mark.BOLD,
    "b": Mark.BOLD,
    "em": Mark.ITALIC,
    "i": Mark.ITALIC,
    "u": Mark.UNDERLINE,
    "ins": Mark.UNDERLINE,
    "del": Mark.STRIKETHROUGH,
    "s": Mark.STRIKETHROUGH,
    "strike": Mark.STRIKETHROUGH,
}

TEXT_DECORATIONS = {"none", "underline", "line-through", "overline"}

MARK_HIGHLIGHT = "yellow"


def parse_style(style: str | None) -> dict[str, str]:
    """
    Parse an inline style attribute, keeping only properties that map to the
    span model and carry safe values.
    """
    result: dict[str, str] = {}
    if not style:
        return result
    for declaration in style.split(";"):
        if ":" not in declaration:
            continue
        key, value = declaration.split(":", 1)
        key, value = key.strip().lower(), value.strip()
        if not value:
            continue
        lowered = value.lower()
        if "javascript:" in lowered or "expression(" in lowered or "url(" in lowered or "data:" in lowered:
            continue
        if key in ("color", "background-color", "background"):
            if is_safe_color(value) and lowered != "transparent":
                result["background-color" if key == "background" else key] = value
        elif key == "text-decoration" or key == "text-decoration-line":
            decorations = [d for d in lowered.split() if d in TEXT_DECORATIONS]
            if decorations:
                result["text-decoration"] = " ".join(decorations)
        elif key == "font-weight":
            if lowered in ("bold", "bolder") or (lowered.isdigit() and int(lowered) >= 600):
                result["font-weight"] = "bold"
        elif key == "font-style":
            if lowered == "italic":
                result["font-style"] = "italic"
    return result


class _Format:
    """Formatting contributed by one open inline tag."""
    __slots__ = ("tag", "marks", "removed", "color", "background")

    def __init__(self, tag: str):
        self.tag = tag
        self.marks: set[Mark] = set()
        self.removed: set[Mark] = set()
        self.color: str | None = None
        self.background: str | None = None


class RichTextParser(HTMLParser):
    """
    Streaming parser from an HTML fragment into Lines.

    Block-level tags open lines, `<br>` breaks a line, inline tags push
    formatting onto a stack. Text outside any block tag lands in an implicit
    paragraph line.
    """

    def __init__(self):
        super().__init__(convert_charrefs=True)
        self.lines: list[Line] = []
        self._format_stack: list[_Format] = []
        self._list_stack: list[LineKind] = []
        self._block_stack: list[str] = []
        self._line_open = False
        self._opened_by_break = False
        self._skip_depth = 0

    # =========================================================================
    # Lines
    # =========================================================================

    def _current_kind(self) -> tuple[LineKind, int]:
        for tag in reversed(self._block_stack):
            if tag in ("h1", "h2", "h3", "h4", "h5", "h6"):
                return LineKind.HEADING, int(tag[1])
            if tag == "li":
                kind = self._list_stack[-1] if self._list_stack else LineKind.BULLET
                return kind, 0
        return LineKind.PARAGRAPH, 0

    def _open_line(self, by_break: bool = False) -> None:
        kind, level = self._current_kind()
        self.lines.append(Line(kind=kind, level=level))
        self._line_open = True
        self._opened_by_break = by_break

    def _close_line(self) -> None:
        if self._line_open and self._opened_by_break and self.lines and self.lines[-1].is_empty:
            self.lines.pop()
        self._line_open = False
        self._opened_by_break = False

    def _current_span(self, text: str) -> Span:
        marks: set[Mark] = set()
        color = None
        background = None
        for fmt in self._format_stack:
            marks -= fmt.removed
            marks |= fmt.marks
            if fmt.color is not None:
                color = fmt.color
            if fmt.background is not None:
                background = fmt.background
        return Span(text, frozenset(marks), color, background)

    # =========================================================================
    # HTMLParser hooks
    # =========================================================================

    def handle_starttag(self, tag, attrs):
        if self._skip_depth:
            if tag in SKIP_TAGS:
                self._skip_depth += 1
            return
        if tag in SKIP_TAGS:
            self._skip_depth = 1
            logger.debug(f"Dropped <{tag}> from markup")
            return

        attributes = dict(attrs)
        if tag == "br":
            if not self._line_open:
                self._open_line()
            self._line_open = True
            self._open_line(by_break=True)
            return
        if tag in LIST_TAGS:
            self._close_line()
            self._list_stack.append(LineKind.NUMBERED if tag == "ol" else LineKind.BULLET)
            return
        if tag in BLOCK_TAGS:
            reuse = self._line_open and not self._opened_by_break and self.lines and self.lines[-1].is_empty
            self._block_stack.append(tag)
            if reuse:
                kind, level = self._current_kind()
                self.lines[-1] = Line(kind=kind, level=level)
            else:
                self._close_line()
                self._open_line()
            self._push_format(tag, attributes)
            return
        if tag in VOID_TAGS:
            return
        self._push_format(tag, attributes)

    def handle_startendtag(self, tag, attrs):
        self.handle_starttag(tag, attrs)
        if tag not in VOID_TAGS:
            self.handle_endtag(tag)

    def handle_endtag(self, tag):
        if self._skip_depth:
            if tag in SKIP_TAGS:
                self._skip_depth -= 1
            return
        if tag in LIST_TAGS:
            self._close_line()
            if self._list_stack:
                self._list_stack.pop()
            return
        if tag in BLOCK_TAGS:
            self._pop_format(tag)
            if tag in self._block_stack:
                while self._block_stack:
                    if self._block_stack.pop() == tag:
                        break
            self._close_line()
            return
        if tag in VOID_TAGS:
            return
        self._pop_format(tag)

    def handle_data(self, data):
        if self._skip_depth:
            return
        text = data.replace("\r", "").replace("\n", " ")
        if not self._line_open:
            if not text.strip():
                return
            self._open_line()
        if not text:
            return
        line = self.lines[-1]
        line.spans = merge_spans(line.spans + [self._current_span(text)])
        self._opened_by_break = False

    # =========================================================================
    # Formatting stack
    # =========================================================================

    def _push_format(self, tag: str, attributes: dict) -> None:
        fmt = _Format(tag)
        if tag in INLINE_MARKS:
            fmt.marks.add(INLINE_MARKS[tag])
        if tag == "mark":
            fmt.background = MARK_HIGHLIGHT
        if tag == "font":
            color = attributes.get("color")
            if color and is_safe_color(color):
                fmt.color = color.strip()
        styles = parse_style(attributes.get("style"))
        if "color" in styles:
            fmt.color = styles["color"]
        if "background-color" in styles:
            fmt.background = styles["background-color"]
        decoration = styles.get("text-decoration", "")
        if "underline" in decoration:
            fmt.marks.add(Mark.UNDERLINE)
        if "line-through" in decoration:
            fmt.marks.add(Mark.STRIKETHROUGH)
        if decoration == "none":
            fmt.removed |= {Mark.UNDERLINE, Mark.STRIKETHROUGH}
        if styles.get("font-weight") == "bold":
            fmt.marks.add(Mark.BOLD)
        if styles.get("font-style") == "italic":
            fmt.marks.add(Mark.ITALIC)
        self._format_stack.append(fmt)

    def _pop_format(self, tag: str) -> None:
        for i in range(len(self._format_stack) - 1, -1, -1):
            if self._format_stack[i].tag == tag:
                del self._format_stack[i:]
                return

    def result(self) -> RichText:
        self.close()
        self._close_line()
        return RichText(self.lines)


def from_html(markup: str | None) -> RichText:
    """Parse an HTML fragment into a RichText document. Non-strings give an empty document."""
    if not markup or not isinstance(markup, str):
        return RichText()
    parser = RichTextParser()
    parser.feed(markup)
    return parser.result()


# =========================================================================
# Serialization
# =========================================================================

_MARK_TAGS = [
    (Mark.BOLD, "strong"),
    (Mark.ITALIC, "em"),
    (Mark.UNDERLINE, "u"),
    (Mark.STRIKETHROUGH, "del"),
]


def _span_to_html(span: Span) -> str:
    out = html.escape(span.text, quote=False)
    for mark, tag in reversed(_MARK_TAGS):
        if mark in span.marks:
            out = f"<{tag}>{out}</{tag}>"
    styles = []
    if span.color:
        styles.append(f"color: {span.color}")
    if span.background:
        styles.append(f"background-color: {span.background}")
    if styles:
        out = f'<span style="{html.escape("; ".join(styles))}">{out}</span>'
    return out


def _line_inner(line: Line) -> str:
    return "".join(_span_to_html(span) for span in merge_spans(line.spans))


def to_html(doc: RichText) -> str:
    """
    Serialize a document to its canonical markup.

    A document with a single empty paragraph serializes to "".
    """
    if doc.is_blank and len(doc.lines) == 1 and doc.lines[0].kind == LineKind.PARAGRAPH:
        return ""
    parts: list[str] = []
    open_list: LineKind | None = None
    for line in doc.lines:
        if line.kind.is_list:
            if open_list != line.kind:
                if open_list is not None:
                    parts.append("</ol>" if open_list == LineKind.NUMBERED else "</ul>")
                parts.append("<ol>" if line.kind == LineKind.NUMBERED else "<ul>")
                open_list = line.kind
            parts.append(f"<li>{_line_inner(line) or '<br>'}</li>")
            continue
        if open_list is not None:
            parts.append("</ol>" if open_list == LineKind.NUMBERED else "</ul>")
            open_list = None
        inner = _line_inner(line) or "<br>"
        if line.kind == LineKind.HEADING:
            parts.append(f"<h{line.level}>{inner}</h{line.level}>")
        else:
            parts.append(f"<p>{inner}</p>")
    if open_list is not None:
        parts.append("</ol>" if open_list == LineKind.NUMBERED else "</ul>")
    return "".join(parts)


def sanitize_markup(markup: str | None) -> str:
    """Reduce arbitrary HTML to the safe canonical subset."""
    return to_html(from_html(markup))


def strip_markup(markup: str | None) -> str:
    """Visible text of a fragment, one line per block, trimmed."""
    return from_html(markup).plain_text.strip()


def is_blank_markup(markup: str | None) -> bool:
    return from_html(markup).is_blank


def count_characters(markup: str | None) -> int:
    return from_html(markup).char_count


def count_words(markup: str | None) -> int:
    return from_html(markup).word_count
