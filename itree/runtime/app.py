"""Runtime composition layer for itree.

Walks and builds the tree, picks the output mode, wires callbacks, and starts
the loop. Construction errors propagate from here before the terminal is
touched.
"""

from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass, field
from pathlib import Path, PurePath

from ..errors import PathEscapesRoot
from ..navigation import FoldState, Navigator
from ..render import render_text, render_tree, style_line
from ..tree_model import TreeModel, build_tree, relative_parts
from ..ui_theme import resolve_theme
from ..walker import WalkOptions, walk
from .loop import RuntimeLoopCallbacks, run_main_loop
from .screen import build_status_line, draw_screen
from .terminal import TerminalController

logger = logging.getLogger(__name__)

MODE_INTERACTIVE = "interactive"
MODE_PRINT = "print"
MODE_QUIET = "quiet"
MODES = (MODE_INTERACTIVE, MODE_PRINT, MODE_QUIET)


@dataclass(frozen=True)
class BrowserOptions:
    """Everything ``run_browser`` needs besides the root path."""

    walk: WalkOptions = field(default_factory=WalkOptions)
    fold_depth: int | None = None
    dirs_first: bool = True
    case_sensitive: bool = False
    theme: str | None = None
    no_color: bool = False
    fg_color: str | None = None
    bg_color: str | None = None
    mode: str = MODE_INTERACTIVE
    focus: str | None = None


def load_tree(root: Path, options: BrowserOptions) -> TreeModel:
    """Walk ``root`` and build the full tree before any navigation starts."""
    return build_tree(
        root,
        walk(root, options.walk),
        dirs_first=options.dirs_first,
        case_sensitive=options.case_sensitive,
    )


def resolve_focus(tree: TreeModel, root: Path, focus: str) -> int | None:
    """Return the node id for ``focus`` (relative to ``root`` or absolute)."""
    focus_path = PurePath(focus)
    if focus_path.is_absolute():
        try:
            parts = relative_parts(root.absolute(), focus_path)
        except PathEscapesRoot:
            return None
        return tree.find(PurePath(*parts)) if parts else tree.root_id
    return tree.find(focus_path)


def _print_tree(tree: TreeModel, options: BrowserOptions) -> None:
    fold_state = FoldState(tree)
    if options.no_color or not os.isatty(sys.stdout.fileno()):
        sys.stdout.write(render_text(tree, fold_state))
        return
    theme = resolve_theme(options.theme, fg_color=options.fg_color, bg_color=options.bg_color)
    out = [style_line(line, theme) for line in render_tree(tree, fold_state)]
    out.extend(["", tree.summary()])
    sys.stdout.write("\n".join(out) + "\n")


def run_browser(root: Path | str, options: BrowserOptions | None = None) -> None:
    """Run one browsing session over ``root``.

    Falls back to print-once output when stdin or stdout is not a terminal.
    """
    options = options or BrowserOptions()
    if options.mode not in MODES:
        raise ValueError(f"unknown mode: {options.mode!r}")
    root_path = Path(root)
    tree = load_tree(root_path, options)

    focus_id = None
    if options.focus is not None:
        focus_id = resolve_focus(tree, root_path, options.focus)
        if focus_id is None:
            raise SystemExit(f"Focus path not in tree: {options.focus}")

    if options.mode == MODE_QUIET:
        sys.stdout.write(tree.summary() + "\n")
        return

    stdin_fd = sys.stdin.fileno()
    stdout_fd = sys.stdout.fileno()
    if options.mode == MODE_PRINT or not (os.isatty(stdin_fd) and os.isatty(stdout_fd)):
        _print_tree(tree, options)
        return

    theme = resolve_theme(
        options.theme,
        no_color=options.no_color,
        fg_color=options.fg_color,
        bg_color=options.bg_color,
    )
    navigator = Navigator(tree, fold_depth=options.fold_depth, cursor=focus_id)
    logger.debug("starting interactive session on %s (%d nodes)", root_path, len(tree))

    callbacks = RuntimeLoopCallbacks(
        render_lines=lambda: render_tree(tree, navigator.fold_state, navigator.cursor),
        status_line=lambda width: build_status_line(tree, navigator.cursor, width),
        draw=lambda lines, width, height, status: draw_screen(lines, theme, width, height, status),
    )
    run_main_loop(navigator, TerminalController(stdin_fd, stdout_fd), stdin_fd, callbacks)


__all__ = [
    "BrowserOptions",
    "MODES",
    "MODE_INTERACTIVE",
    "MODE_PRINT",
    "MODE_QUIET",
    "load_tree",
    "resolve_focus",
    "run_browser",
]
