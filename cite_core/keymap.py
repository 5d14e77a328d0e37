"""
Key bindings for the result view.

Bindings map key names (as produced by cite_core.tui.key_name) to navigator
commands, and carry a description and category for the hotkey help.
"""

import logging
from typing import Dict, List, Optional, Tuple

from cite_core.navigator import NavCommand

logger = logging.getLogger(__name__)

# ANSI Colors for UI formatting
COLORS = {
    'reset': "\033[0m",
    'bold': "\033[1m",
    'green': "\033[32m",
    'yellow': "\033[33m",
    'cyan': "\033[36m",
}

def colorize(text: str, color: str) -> str:
    """Apply ANSI color to text."""
    if color in COLORS:
        return f"{COLORS[color]}{text}{COLORS['reset']}"
    return text


class KeyBinding:
    """A class representing a single key binding."""

    def __init__(self, key: str, command: NavCommand, description: str, category: str = "Other"):
        """
        Initialize a new key binding.

        Args:
            key: Key name (e.g., "q", "down", "enter")
            command: Navigator command triggered by the key
            description: A human-readable description of what the binding does
            category: Category for organizing bindings in help menus
        """
        self.key = key
        self.command = command
        self.desc = description
        self.category = category

    def __repr__(self) -> str:
        return f"KeyBinding({self.key!r}, {self.command.value})"


class KeyMap:
    """A class for managing key bindings."""

    def __init__(self) -> None:
        self.bindings: List[KeyBinding] = []
        self.categories: Dict[str, List[KeyBinding]] = {
            "Navigation": [],
            "Actions": [],
            "Other": []
        }

    def add_binding(self, binding: KeyBinding) -> None:
        """
        Add a binding; a later binding for the same key replaces the earlier one.

        Args:
            binding: The KeyBinding to add
        """
        existing = self.binding_for(binding.key)
        if existing is not None:
            logger.debug(f"Rebinding {binding.key}: {existing.command.value} -> {binding.command.value}")
            self.bindings.remove(existing)
            self.categories[existing.category].remove(existing)

        self.bindings.append(binding)
        if binding.category not in self.categories:
            self.categories[binding.category] = []
        self.categories[binding.category].append(binding)

    def add_bindings(self, bindings: List[KeyBinding]) -> None:
        for binding in bindings:
            self.add_binding(binding)

    def binding_for(self, key: str) -> Optional[KeyBinding]:
        for binding in self.bindings:
            if binding.key == key:
                return binding
        return None

    def lookup(self, key: str) -> Optional[NavCommand]:
        """Command bound to key, or None."""
        binding = self.binding_for(key)
        return binding.command if binding else None

    def keys_for(self, command: NavCommand) -> List[str]:
        return [b.key for b in self.bindings if b.command is command]

    def get_hotkeys_info(self) -> List[Tuple[str, str, str]]:
        """
        Get a list of hotkeys and their descriptions.

        Returns:
            List of tuples containing (key, description, category)
        """
        return [(b.key, b.desc, b.category) for b in self.bindings]

    def help_lines(self) -> List[str]:
        """Plain help text, one line per binding."""
        lines = []
        for bindings in self.categories.values():
            for binding in bindings:
                lines.append(f"{binding.key:<8} : {binding.desc}")
        return lines

    def print_help(self, title: str = "KEYBOARD SHORTCUTS") -> None:
        """Print a formatted list of hotkeys and their descriptions."""
        print(colorize(f"=== {title} ===", 'cyan'))
        for category_name, bindings in self.categories.items():
            if bindings:  # Only print categories with bindings
                print(f"\n{colorize(category_name + ':', 'yellow')}")
                for binding in bindings:
                    print(f"  {colorize(f'{binding.key:<8}', 'green')} : {binding.desc}")
        print(f"\n  {colorize('?'.ljust(8), 'green')} : Show this help inside the result view")


def default_keymap() -> KeyMap:
    """Key map used by the result view."""
    keymap = KeyMap()
    keymap.add_bindings([
        KeyBinding("p", NavCommand.MOVE_UP, "Select the previous record", "Navigation"),
        KeyBinding("k", NavCommand.MOVE_UP, "Select the previous record", "Navigation"),
        KeyBinding("up", NavCommand.MOVE_UP, "Select the previous record", "Navigation"),
        KeyBinding("n", NavCommand.MOVE_DOWN, "Select the next record", "Navigation"),
        KeyBinding("j", NavCommand.MOVE_DOWN, "Select the next record", "Navigation"),
        KeyBinding("down", NavCommand.MOVE_DOWN, "Select the next record", "Navigation"),
        KeyBinding("enter", NavCommand.CONFIRM, "Fetch the selected citation into the bibliography", "Actions"),
        KeyBinding("q", NavCommand.QUIT, "Close the result view without fetching", "Actions"),
    ])
    return keymap
