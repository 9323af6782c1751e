"""Terminal control helpers for the TUI session.

Owns raw-mode lifecycle, alternate-screen switching, and frame output.
Frames are whole-screen redraws; a frame identical to the last one written
is not sent again.
"""

from __future__ import annotations

import contextlib
import os
import termios
import tty

ENTER_TUI = b"\x1b[?1049h\x1b[?25l"
LEAVE_TUI = b"\x1b[?25h\x1b[?1049l"
HOME_AND_CLEAR = "\033[H\033[J"


class TerminalController:
    """Raw-mode owner for the key fd and frame writer for the output fd."""

    def __init__(self, stdin_fd: int, stdout_fd: int) -> None:
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd
        self._saved_tty_state = termios.tcgetattr(stdin_fd)
        self._last_frame: tuple[str, ...] | None = None

    def enable_tui_mode(self) -> None:
        """Enter raw alternate-screen mode with the cursor hidden."""
        tty.setraw(self.stdin_fd, termios.TCSAFLUSH)
        os.write(self.stdout_fd, ENTER_TUI)
        self._last_frame = None

    def disable_tui_mode(self) -> None:
        """Show the cursor and restore the main screen buffer and tty state."""
        os.write(self.stdout_fd, LEAVE_TUI)
        termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, self._saved_tty_state)

    def write_frame(self, lines: list[str]) -> bool:
        """Redraw the screen with ``lines``; return ``False`` if nothing changed."""
        frame = tuple(lines)
        if frame == self._last_frame:
            return False
        self._last_frame = frame
        payload = HOME_AND_CLEAR + "\r\n".join(frame)
        os.write(self.stdout_fd, payload.encode("utf-8", errors="replace"))
        return True

    @contextlib.contextmanager
    def raw_mode(self):
        try:
            self.enable_tui_mode()
            yield
        finally:
            self.disable_tui_mode()


__all__ = [
    "TerminalController",
]
