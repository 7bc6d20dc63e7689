"""Tree rendering: pure line projection, viewport windowing, ANSI styling.

``render_tree`` is the single renderer shared by interactive and print-once
modes; ``style_line`` turns its records into terminal text.
"""

from __future__ import annotations

from .ansi import ANSI_ESCAPE_RE, char_display_width, clip_index, clip_line, display_width, style_line
from .tree_lines import (
    BAR_INDENT,
    BLANK_INDENT,
    DIR_MARK,
    END_BRANCH,
    FOLD_MARK,
    LINK_MARK,
    MID_BRANCH,
    RESTRICTED_MARK,
    DisplayLine,
    LineStyle,
    StyleSpan,
    name_segments,
    render_text,
    render_tree,
)
from .viewport import viewport_bounds

__all__ = [
    "ANSI_ESCAPE_RE",
    "BAR_INDENT",
    "BLANK_INDENT",
    "DIR_MARK",
    "END_BRANCH",
    "FOLD_MARK",
    "LINK_MARK",
    "MID_BRANCH",
    "RESTRICTED_MARK",
    "DisplayLine",
    "LineStyle",
    "StyleSpan",
    "char_display_width",
    "clip_index",
    "clip_line",
    "display_width",
    "name_segments",
    "render_text",
    "render_tree",
    "style_line",
    "viewport_bounds",
]
