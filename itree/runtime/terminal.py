"""Raw-mode and alternate-screen control for the interactive session."""

from __future__ import annotations

import contextlib
import os
import termios
import tty

ENTER_SCREEN = b"\x1b[?1049h\x1b[?25l"
LEAVE_SCREEN = b"\x1b[?25h\x1b[?1049l"


class TerminalController:
    """Switch the terminal into browsing mode and back.

    The tty attributes are captured at construction so ``disable_tui_mode``
    restores exactly what the shell had.
    """

    def __init__(self, stdin_fd: int, stdout_fd: int) -> None:
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd
        self._saved_tty_state = termios.tcgetattr(stdin_fd)

    def enable_tui_mode(self) -> None:
        tty.setraw(self.stdin_fd, termios.TCSAFLUSH)
        os.write(self.stdout_fd, ENTER_SCREEN)

    def disable_tui_mode(self) -> None:
        os.write(self.stdout_fd, LEAVE_SCREEN)
        termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, self._saved_tty_state)

    @contextlib.contextmanager
    def raw_mode(self):
        """Run the enclosed block in browsing mode; always restores on exit."""
        self.enable_tui_mode()
        try:
            yield
        finally:
            self.disable_tui_mode()


__all__ = ["ENTER_SCREEN", "LEAVE_SCREEN", "TerminalController"]
