"""
Rich text for paragraph blocks.

- spans: Span / Line / RichText, the structured document model
- commands: named edit commands (apply-mark, set-text-color, ...) registered by name
- markup: HTML parse/serialize, which doubles as the markup sanitizer
"""

from .spans import Mark, LineKind, Span, Line, RichText, split_spans, merge_spans
from .commands import (
    Command,
    CommandMeta,
    CommandError,
    ApplyMark,
    SetTextColor,
    SetBackgroundColor,
    SetHeadingLevel,
    ToggleList,
    InsertText,
    DeleteRange,
    run_command,
    is_safe_color,
)
from .markup import (
    from_html,
    to_html,
    sanitize_markup,
    strip_markup,
    is_blank_markup,
    count_characters,
    count_words,
)

__all__ = [
    "Mark",
    "LineKind",
    "Span",
    "Line",
    "RichText",
    "split_spans",
    "merge_spans",
    "Command",
    "CommandMeta",
    "CommandError",
    "ApplyMark",
    "SetTextColor",
    "SetBackgroundColor",
    "SetHeadingLevel",
    "ToggleList",
    "InsertText",
    "DeleteRange",
    "run_command",
    "is_safe_color",
    "from_html",
    "to_html",
    "sanitize_markup",
    "strip_markup",
    "is_blank_markup",
    "count_characters",
    "count_words",
]
