"""Main interactive event loop for the tree browser.

Redraws when something changed, decodes one key per iteration, and routes it
through the key map into the navigator. Drawing is injected via callbacks.
"""

from __future__ import annotations

import logging
import shutil
from collections.abc import Callable
from dataclasses import dataclass

from ..input import default_key_bindings, read_key
from ..navigation import Navigator
from ..render import DisplayLine
from .terminal import TerminalController

logger = logging.getLogger(__name__)

# Polling keeps terminal resizes visible without a SIGWINCH handler.
KEY_POLL_TIMEOUT_MS = 120


@dataclass(frozen=True)
class RuntimeLoopCallbacks:
    """Injected operations used by ``run_main_loop``."""

    render_lines: Callable[[], list[DisplayLine]]
    status_line: Callable[[int], str]
    draw: Callable[[list[DisplayLine], int, int, str], None]


def run_main_loop(
    navigator: Navigator,
    terminal: TerminalController,
    stdin_fd: int,
    callbacks: RuntimeLoopCallbacks,
) -> None:
    """Run the interactive loop until the navigator reports quit."""
    ops = callbacks
    bindings = default_key_bindings(navigator.handle)
    dirty = True
    last_size: tuple[int, int] | None = None

    with terminal.raw_mode():
        while not navigator.finished:
            term = shutil.get_terminal_size((80, 24))
            size = (term.columns, term.lines)
            if size != last_size:
                last_size = size
                dirty = True

            if dirty:
                ops.draw(ops.render_lines(), term.columns, term.lines, ops.status_line(term.columns))
                dirty = False

            key = read_key(stdin_fd, timeout_ms=KEY_POLL_TIMEOUT_MS)
            if not key:
                continue
            result = bindings.dispatch(key)
            if result is None:
                logger.debug("unbound key %r", key)
                continue
            if result is False:
                break
            dirty = True


__all__ = ["KEY_POLL_TIMEOUT_MS", "RuntimeLoopCallbacks", "run_main_loop"]
