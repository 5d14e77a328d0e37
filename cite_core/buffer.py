"""
Result buffer and display seam.

A ResultBuffer holds the text produced by one search invocation together with
a line cursor ("point"). A Display decides how buffers are shown: it keeps
track of which buffers are visible and the last one-line message. The curses
view in cite_core.tui is one Display; tests use the base class directly.
"""

import logging
from typing import List, Optional

logger = logging.getLogger(__name__)


class ResultBuffer:
    """Named text buffer with a 1-based line cursor."""

    def __init__(self, name: str) -> None:
        self.name = name
        self.lines: List[str] = []
        self.point = 1
        self.truncate_lines = False

    @property
    def line_count(self) -> int:
        return len(self.lines)

    @property
    def text(self) -> str:
        return "\n".join(self.lines)

    def replace_contents(self, text: str) -> None:
        """Replace the whole buffer and move point to the first line."""
        self.lines = text.splitlines()
        self.point = 1

    def line(self, number: int) -> str:
        """Text of a 1-based line, or "" outside the buffer."""
        if 1 <= number <= len(self.lines):
            return self.lines[number - 1]
        return ""

    def goto_line(self, number: int) -> None:
        self.point = self._clamp(number)

    def forward_line(self, count: int) -> int:
        """
        Move point by count lines (negative moves up).

        Point stops on the first or last line when the motion runs past the
        buffer. Returns the number of lines that could not be moved.
        """
        target = self.point + count
        self.point = self._clamp(target)
        return abs(target - self.point)

    def _clamp(self, number: int) -> int:
        return max(1, min(number, max(1, len(self.lines))))

    def __repr__(self) -> str:
        return f"ResultBuffer({self.name!r}, lines={len(self.lines)}, point={self.point})"


class Display:
    """
    Base display: tracks visible buffers and the last status message.

    Showing a buffer never hides other visible buffers, and closing a buffer
    that is not visible does nothing.
    """

    def __init__(self) -> None:
        self.visible: List[ResultBuffer] = []
        self.last_message: Optional[str] = None

    def show_buffer(self, buffer: ResultBuffer) -> None:
        if buffer not in self.visible:
            self.visible.append(buffer)
        self._on_show(buffer)

    def close_buffer(self, buffer: ResultBuffer) -> bool:
        """Close the window showing buffer. Returns False if it was not shown."""
        if buffer not in self.visible:
            return False
        self.visible.remove(buffer)
        self._on_close(buffer)
        return True

    def is_visible(self, buffer: ResultBuffer) -> bool:
        return buffer in self.visible

    def message(self, text: str) -> None:
        """Show a one-line status message."""
        self.last_message = text
        logger.debug(f"Message: {text}")
        self._on_message(text)

    def refresh(self) -> None:
        """Redraw after the buffer changed; no-op for non-interactive displays."""

    # Hooks for concrete views
    def _on_show(self, buffer: ResultBuffer) -> None:
        pass

    def _on_close(self, buffer: ResultBuffer) -> None:
        pass

    def _on_message(self, text: str) -> None:
        pass
