#!/usr/bin/env python3
"""
Tests for the curses result view, driven through a fake screen.
"""

import curses
from unittest.mock import MagicMock, patch

import pytest

from cite_core.buffer import ResultBuffer
from cite_core.commands import CommandExecutor
from cite_core.keymap import default_keymap
from cite_core.tui import CursesDisplay, key_name, run_tui

from conftest import SAMPLE_OUTPUT


def test_key_name():
    assert key_name(curses.KEY_UP) == "up"
    assert key_name(curses.KEY_DOWN) == "down"
    assert key_name(10) == "enter"
    assert key_name(13) == "enter"
    assert key_name(curses.KEY_ENTER) == "enter"
    assert key_name(ord("q")) == "q"
    assert key_name(ord("?")) == "?"
    assert key_name(-1) is None
    assert key_name(curses.KEY_F1) is None


def _display():
    stdscr = MagicMock()
    stdscr.getmaxyx.return_value = (24, 80)
    display = CursesDisplay(stdscr, default_keymap())
    display.refresh = MagicMock()
    return display


def test_scroll_keeps_highlight_visible():
    display = _display()

    display._scroll_to((25, 28), body_height=10)
    assert display.view_start == 18

    display._scroll_to((5, 8), body_height=10)
    assert display.view_start == 4

    display._scroll_to((9, 12), body_height=10)
    assert display.view_start == 4


def test_show_buffer_resets_view():
    display = _display()
    display.view_start = 12
    display.show_status("Searching...")

    display.show_buffer(ResultBuffer("*pyopl*"))

    assert display.view_start == 0
    assert display.status == ""


def test_message_sets_status():
    display = _display()
    display.message("Fetching 2103.00020")
    assert display.status == "Fetching 2103.00020"
    assert display.last_message == "Fetching 2103.00020"


HIGHLIGHT = (2 << 8) | curses.A_BOLD


@pytest.fixture
def screen():
    """A fake stdscr plus the curses calls that need a real terminal patched out."""
    stdscr = MagicMock()
    stdscr.getmaxyx.return_value = (24, 80)
    with patch("cite_core.tui.curses.curs_set"), \
         patch("cite_core.tui.curses.has_colors", return_value=False), \
         patch("cite_core.tui.curses.color_pair", side_effect=lambda n: n << 8):
        yield stdscr


@pytest.fixture
def pyopl():
    """CommandExecutor with the search answering SAMPLE_OUTPUT and fetches recorded."""
    process = MagicMock()
    process.poll.return_value = None
    with patch.object(CommandExecutor, "run", return_value=(0, SAMPLE_OUTPUT, "")) as mock_run, \
         patch.object(CommandExecutor, "spawn", return_value=process) as mock_spawn:
        yield mock_run, mock_spawn


def _highlighted(stdscr):
    return [c[0][2] for c in stdscr.addnstr.call_args_list if c[0][4] == HIGHLIGHT]


def test_run_tui_fetches_selected_record(screen, pyopl, settings):
    """Unbound keys are ignored; j moves to the second record and Enter fetches it."""
    mock_run, mock_spawn = pyopl
    screen.getch.side_effect = [ord("x"), ord("j"), 10]

    session = run_tui(screen, settings, default_keymap(), "transformer", ["arxiv"])

    mock_run.assert_called_once_with('pyopl --search --engines=arxiv "transformer"', merge_stderr=True)
    mock_spawn.assert_called_once_with(
        'pyopl --fetch --engines="arxiv" --bib="/home/u/refs.bib" "2103.00020"'
    )
    assert session.last_message.startswith("Fetching 2103.00020")
    assert not session.active
    assert screen.getch.call_count == 3


def test_run_tui_quit_without_fetching(screen, pyopl, settings):
    mock_run, mock_spawn = pyopl
    screen.getch.side_effect = [curses.KEY_DOWN, curses.KEY_UP, ord("q")]

    session = run_tui(screen, settings, default_keymap(), "transformer")

    mock_spawn.assert_not_called()
    assert not session.active
    assert session.navigator.last_outcome is None
    assert session.last_message is None


def test_draw_highlights_selected_record(screen, pyopl, settings):
    screen.getch.side_effect = [ord("j"), ord("q")]

    run_tui(screen, settings, default_keymap(), "transformer", ["arxiv"])

    highlighted = _highlighted(screen)
    # First record on entry, second record after moving down
    assert highlighted[:4] == SAMPLE_OUTPUT.splitlines()[:4]
    assert highlighted[-4:] == SAMPLE_OUTPUT.splitlines()[4:]
    rows = [c[0][0] for c in screen.addnstr.call_args_list if c[0][4] == HIGHLIGHT]
    assert rows[-4:] == [5, 6, 7, 8]

    headers = [c[0][2] for c in screen.addnstr.call_args_list if c[0][0] == 0]
    assert any(h.startswith(" *pyopl* | Record 1/2") for h in headers)
    assert any(h.startswith(" *pyopl* | Record 2/2") for h in headers)


def test_help_overlay_then_quit(screen, pyopl, settings):
    _, mock_spawn = pyopl
    screen.getch.side_effect = [ord("?"), ord("q")]

    with patch("cite_core.tui.curses.newwin") as mock_newwin:
        session = run_tui(screen, settings, default_keymap(), "transformer")

    overlay = mock_newwin.return_value
    lines = [c[0][2] for c in overlay.addnstr.call_args_list]
    assert lines[0] == "Help - Available Commands:"
    assert "enter    : Fetch the selected citation into the bibliography" in lines
    overlay.getch.assert_called_once()
    mock_spawn.assert_not_called()
    assert not session.active


def test_draw_small_terminal(screen):
    screen.getmaxyx.return_value = (4, 20)
    display = CursesDisplay(screen, default_keymap())

    display.refresh()

    text = screen.addnstr.call_args[0][2]
    assert text.startswith("Terminal too small!")
