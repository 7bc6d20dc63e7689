"""ANSI styling and width-aware clipping for display lines.

Turns ``DisplayLine`` records into terminal strings. Wide characters count as
two columns so clipping lines up with what the terminal draws.
"""

from __future__ import annotations

import re
import unicodedata

from ..ui_theme import UITheme
from .tree_lines import DisplayLine, LineStyle, StyleSpan

ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;?]*[ -/]*[@-~]")


def char_display_width(ch: str) -> int:
    """Return terminal column width for one character.

    Combining marks consume no columns, and East Asian wide/fullwidth
    characters consume two.
    """
    if unicodedata.combining(ch):
        return 0
    if unicodedata.east_asian_width(ch) in {"W", "F"}:
        return 2
    return 1


def display_width(text: str) -> int:
    """Return terminal column width for (possibly ANSI-styled) text."""
    plain = ANSI_ESCAPE_RE.sub("", text)
    return sum(char_display_width(ch) for ch in plain)


def clip_index(text: str, max_cols: int) -> int:
    """Return how many characters of plain ``text`` fit in ``max_cols`` columns."""
    col = 0
    for idx, ch in enumerate(text):
        width = char_display_width(ch)
        if col + width > max_cols:
            return idx
        col += width
    return len(text)


def clip_line(line: DisplayLine, max_cols: int) -> DisplayLine:
    """Trim ``line`` to at most ``max_cols`` columns, cutting spans to match."""
    if max_cols <= 0:
        return DisplayLine("", (), line.node_id, line.is_cursor)
    cut = clip_index(line.text, max_cols)
    if cut == len(line.text):
        return line
    spans = tuple(
        StyleSpan(span.start, min(span.end, cut), span.style)
        for span in line.spans
        if span.start < cut
    )
    return DisplayLine(line.text[:cut], spans, line.node_id, line.is_cursor)


def style_line(line: DisplayLine, theme: UITheme, max_cols: int | None = None) -> str:
    """Render one display line as ANSI text using ``theme``.

    Later spans override earlier ones, except ``CURSOR`` which is layered on
    top of whatever color the character already has.
    """
    if max_cols is not None:
        line = clip_line(line, max_cols)
    text = line.text
    if not text:
        return ""
    base: list[str] = [""] * len(text)
    cursor: list[bool] = [False] * len(text)
    for span in line.spans:
        if span.style is LineStyle.CURSOR:
            for idx in range(span.start, span.end):
                cursor[idx] = True
            continue
        code = theme.code_for(span.style.value)
        for idx in range(span.start, span.end):
            base[idx] = code

    out: list[str] = []
    idx = 0
    while idx < len(text):
        end = idx + 1
        while end < len(text) and base[end] == base[idx] and cursor[end] == cursor[idx]:
            end += 1
        code = base[idx] + (theme.cursor if cursor[idx] else "")
        if code:
            out.append(code + text[idx:end] + theme.reset)
        else:
            out.append(text[idx:end])
        idx = end
    return "".join(out)


__all__ = [
    "ANSI_ESCAPE_RE",
    "char_display_width",
    "display_width",
    "clip_index",
    "clip_line",
    "style_line",
]
