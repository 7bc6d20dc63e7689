"""Frame composition and drawing for the interactive browser.

``build_screen`` is pure so frames can be checked in tests; ``draw_screen``
only adds the write to the terminal.
"""

from __future__ import annotations

import os
import sys

from ..render import DisplayLine, clip_index, display_width, style_line, viewport_bounds
from ..tree_model import TreeModel
from ..ui_theme import UITheme

KEY_HINTS = "↑↓/jk move  ←→/hl in/out  space fold  q quit"


def build_status_line(tree: TreeModel, cursor: int, width: int) -> str:
    """Return the plain status text: cursor path, totals, and key hints."""
    node = tree.node(cursor)
    location = tree.root.name if node.id == tree.root_id else node.path.as_posix()
    text = f" {location}  |  {tree.summary()}  |  {KEY_HINTS}"
    if display_width(text) > width:
        text = f" {location}  |  {tree.summary()}"
    return text


def _cursor_row(lines: list[DisplayLine]) -> int:
    for idx, line in enumerate(lines):
        if line.is_cursor:
            return idx
    return 0


def build_screen(
    lines: list[DisplayLine],
    theme: UITheme,
    width: int,
    height: int,
    status: str = "",
) -> str:
    """Compose one full frame.

    The tree takes ``height - 1`` rows around the cursor line; the last row is
    the status line in the theme's status style.
    """
    width = max(1, width)
    rows = max(1, height - 1)
    start, end = viewport_bounds(len(lines), _cursor_row(lines), rows)
    out: list[str] = ["\033[H\033[J"]
    body = [style_line(line, theme, width) for line in lines[start:end]]
    body.extend("" for _ in range(rows - len(body)))

    status_text = status[: clip_index(status, width)]
    status_text += " " * max(0, width - display_width(status_text))
    if theme.status:
        status_text = f"{theme.status}{status_text}{theme.reset}"

    out.append("\r\n".join(body))
    out.append("\r\n")
    out.append(status_text)
    return "".join(out)


def draw_screen(
    lines: list[DisplayLine],
    theme: UITheme,
    width: int,
    height: int,
    status: str = "",
) -> None:
    """Write one frame to stdout."""
    frame = build_screen(lines, theme, width, height, status)
    os.write(sys.stdout.fileno(), frame.encode("utf-8", errors="replace"))


__all__ = ["KEY_HINTS", "build_screen", "build_status_line", "draw_screen"]
