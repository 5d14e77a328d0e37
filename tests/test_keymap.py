#!/usr/bin/env python3
"""
Tests for key bindings.
"""

from cite_core.keymap import KeyBinding, KeyMap, default_keymap, colorize
from cite_core.navigator import NavCommand


def test_default_keymap_lookup():
    keymap = default_keymap()
    assert keymap.lookup("q") is NavCommand.QUIT
    assert keymap.lookup("p") is NavCommand.MOVE_UP
    assert keymap.lookup("up") is NavCommand.MOVE_UP
    assert keymap.lookup("n") is NavCommand.MOVE_DOWN
    assert keymap.lookup("down") is NavCommand.MOVE_DOWN
    assert keymap.lookup("enter") is NavCommand.CONFIRM
    assert keymap.lookup("x") is None


def test_every_command_has_a_key():
    keymap = default_keymap()
    for command in NavCommand:
        assert keymap.keys_for(command)


def test_rebinding_replaces_previous_binding():
    keymap = KeyMap()
    keymap.add_binding(KeyBinding("x", NavCommand.QUIT, "Quit", "Actions"))
    keymap.add_binding(KeyBinding("x", NavCommand.CONFIRM, "Fetch", "Actions"))

    assert keymap.lookup("x") is NavCommand.CONFIRM
    assert len(keymap.bindings) == 1
    assert keymap.categories["Actions"] == keymap.bindings


def test_custom_category():
    keymap = KeyMap()
    keymap.add_binding(KeyBinding("z", NavCommand.QUIT, "Quit", "Extra"))
    assert keymap.get_hotkeys_info() == [("z", "Quit", "Extra")]
    assert "Extra" in keymap.categories


def test_help_lines():
    lines = default_keymap().help_lines()
    assert any(line.startswith("q ") and "without fetching" in line for line in lines)


def test_print_help(capsys):
    default_keymap().print_help("TEST SHORTCUTS")
    output = capsys.readouterr().out
    assert "TEST SHORTCUTS" in output
    assert "Navigation" in output
    assert "enter" in output


def test_colorize():
    assert colorize("x", "green") == "\033[32mx\033[0m"
    assert colorize("x", "unknown") == "x"
