"""
Terminal view for search results.

Shows the search output without line wrapping, highlights the selected record
and reads keys until the navigator closes the view (quit or fetch).
"""

import time
import curses
import logging
from typing import List, Optional

from cite_core.buffer import Display, ResultBuffer
from cite_core.config import CiteConfig
from cite_core.keymap import KeyMap
from cite_core.navigator import ResultNavigator
from cite_core.records import iter_records
from cite_core.session import CiteSession

logger = logging.getLogger(__name__)

MIN_HEIGHT = 6
MIN_WIDTH = 30
STATUS_TIMEOUT = 5  # seconds


def key_name(key: int) -> Optional[str]:
    """Translate a curses key code into the names used by KeyMap."""
    if key == curses.KEY_UP:
        return "up"
    if key == curses.KEY_DOWN:
        return "down"
    if key in (10, 13, curses.KEY_ENTER):
        return "enter"
    if 32 <= key < 127:
        return chr(key)
    return None


class CursesDisplay(Display):
    """Display drawing the visible result buffer on a curses screen."""

    def __init__(self, stdscr, keymap: KeyMap) -> None:
        super().__init__()
        self.stdscr = stdscr
        self.keymap = keymap
        self.navigator: Optional[ResultNavigator] = None
        self.view_start = 0  # index of the first buffer line on screen
        self.status = ""
        self.status_time = 0.0

    def show_status(self, text: str) -> None:
        """Transient status line text that is not kept as the last message."""
        self.status = text
        self.status_time = time.time()
        self.refresh()

    def _on_show(self, buffer: ResultBuffer) -> None:
        self.view_start = 0
        self.status = ""
        self.refresh()

    def _on_message(self, text: str) -> None:
        self.show_status(text)

    def refresh(self) -> None:
        try:
            self._draw()
        except curses.error as e:
            logger.debug(f"Draw failed: {e}")

    def _draw(self) -> None:
        stdscr = self.stdscr
        stdscr.erase()
        height, width = stdscr.getmaxyx()

        if height < MIN_HEIGHT or width < MIN_WIDTH:
            msg = f"Terminal too small! (min: {MIN_WIDTH}x{MIN_HEIGHT}, current: {width}x{height})"
            stdscr.addnstr(0, 0, msg, width - 1, curses.A_BOLD)
            stdscr.refresh()
            return

        buffer = self.visible[-1] if self.visible else None
        body_height = height - 2

        # --- Header ---
        header = " No results"
        if buffer is not None:
            header = f" {buffer.name}"
            if self.navigator is not None and self.navigator.record_height:
                total = len(list(iter_records(buffer.lines, self.navigator.record_height)))
                current = (buffer.point - 1) // self.navigator.record_height + 1
                header += f" | Record {min(current, total)}/{total}"
        header += " | Press '?' for help"
        stdscr.addnstr(0, 0, header.ljust(width), width - 1, curses.color_pair(1) | curses.A_BOLD)

        # --- Result lines ---
        if buffer is not None:
            highlight = self.navigator.highlight_range if self.navigator else None
            self._scroll_to(highlight, body_height)
            for row in range(body_height):
                line_number = self.view_start + row + 1
                if line_number > buffer.line_count:
                    break
                attr = curses.A_NORMAL
                if highlight and highlight[0] <= line_number <= highlight[1]:
                    attr = curses.color_pair(2) | curses.A_BOLD
                # Lines are truncated to the window width, never wrapped
                stdscr.addnstr(row + 1, 0, buffer.line(line_number), width - 1, attr)

        # --- Status bar ---
        if self.status and time.time() - self.status_time < STATUS_TIMEOUT:
            status = self.status
        else:
            status = "n/j: Next  |  p/k: Previous  |  Enter: Fetch  |  q: Quit"
        stdscr.addnstr(height - 1, 0, status, width - 1, curses.color_pair(3) | curses.A_BOLD)
        stdscr.refresh()

    def _scroll_to(self, highlight, body_height: int) -> None:
        """Adjust view_start so the highlighted record is on screen."""
        if not highlight:
            return
        start, end = highlight
        if start - 1 < self.view_start:
            self.view_start = start - 1
        elif end > self.view_start + body_height:
            self.view_start = max(0, min(start - 1, end - body_height))


def draw_help_overlay(stdscr, keymap: KeyMap) -> None:
    """Draw a help overlay with key bindings."""
    height, width = stdscr.getmaxyx()
    overlay_win = curses.newwin(height, width, 0, 0)
    overlay_win.bkgd(' ', curses.color_pair(3))
    overlay_text: List[str] = ["Help - Available Commands:", ""]
    overlay_text.extend(keymap.help_lines())
    overlay_text.extend(["?        : Toggle this help overlay", "", "Press any key to dismiss help..."])

    start_y = max(0, (height - len(overlay_text)) // 2)
    for idx, line in enumerate(overlay_text):
        try:
            overlay_win.addnstr(start_y + idx, 2, line, max(0, width - 3), curses.A_BOLD)
        except curses.error:
            pass
    overlay_win.refresh()
    overlay_win.getch()  # Wait for any key press


def _init_colors() -> None:
    if not curses.has_colors():
        return
    curses.start_color()
    curses.use_default_colors()
    curses.init_pair(1, curses.COLOR_CYAN, -1)      # Header
    curses.init_pair(2, curses.COLOR_GREEN, -1)     # Selected record
    curses.init_pair(3, curses.COLOR_MAGENTA, -1)   # Status / help overlay


def run_tui(stdscr, settings: CiteConfig, keymap: KeyMap, query: str,
            engines: Optional[List[str]] = None) -> CiteSession:
    """
    Run a search and the interactive result view.

    Intended to be called through curses.wrapper.

    Returns:
        The finished session (its last_message holds the fetch confirmation)
    """
    try:
        curses.curs_set(0)  # Hide cursor
    except curses.error:
        pass
    _init_colors()

    display = CursesDisplay(stdscr, keymap)
    session = CiteSession(settings, display)
    display.navigator = session.navigator

    display.show_status(f"Searching for \"{query}\"...")
    session.search(query, engines)

    while session.active:
        key = stdscr.getch()
        if key == curses.KEY_RESIZE:
            display.refresh()
            continue

        name = key_name(key)
        if name == "?":
            draw_help_overlay(stdscr, keymap)
            display.refresh()
            continue

        command = keymap.lookup(name) if name else None
        if command is None:
            continue
        session.handle(command)

    return session
