"""
Result navigator.

A small state machine over a ResultBuffer:

    IDLE --enter--> SHOWING_RESULTS
    SHOWING_RESULTS --MOVE_UP / MOVE_DOWN--> SHOWING_RESULTS
    SHOWING_RESULTS --QUIT--> IDLE                      (window closed)
    SHOWING_RESULTS --CONFIRM, no citation--> SHOWING_RESULTS
    SHOWING_RESULTS --CONFIRM--> DISPATCHING --> IDLE   (fetch sent, window closed)

Every command received while IDLE is ignored.
"""

import logging
from enum import Enum
from typing import Callable, Dict, Optional, Tuple

from cite_core.buffer import Display, ResultBuffer
from cite_core.fetch import FetchDispatcher
from cite_core.models import FetchOutcome
from cite_core.records import citation_at, record_line_range

logger = logging.getLogger(__name__)


class NavState(str, Enum):
    IDLE = "idle"
    SHOWING_RESULTS = "showing-results"
    DISPATCHING = "dispatching"


class NavCommand(str, Enum):
    QUIT = "quit"
    MOVE_UP = "move-up"
    MOVE_DOWN = "move-down"
    CONFIRM = "confirm"


class ResultNavigator:
    """Moves a selection over fixed-height records and dispatches fetches."""

    def __init__(self, display: Display, dispatcher: FetchDispatcher, record_height: int) -> None:
        self.display = display
        self.dispatcher = dispatcher
        self.record_height = record_height
        self.state = NavState.IDLE
        self.buffer: Optional[ResultBuffer] = None
        self.last_outcome: Optional[FetchOutcome] = None
        self._handlers: Dict[NavCommand, Callable[[], None]] = {
            NavCommand.QUIT: self.quit,
            NavCommand.MOVE_UP: self.move_up,
            NavCommand.MOVE_DOWN: self.move_down,
            NavCommand.CONFIRM: self.confirm,
        }

    @property
    def active(self) -> bool:
        return self.state is not NavState.IDLE

    @property
    def highlight_range(self) -> Optional[Tuple[int, int]]:
        """Inclusive line range of the selected record, None when idle."""
        if not self.active or self.buffer is None:
            return None
        return record_line_range(self.buffer.point, self.record_height)

    def enter(self, buffer: ResultBuffer) -> None:
        """Start navigating buffer from its first line."""
        self.buffer = buffer
        buffer.goto_line(1)
        buffer.truncate_lines = True
        self.state = NavState.SHOWING_RESULTS
        logger.debug(f"Navigating {buffer.name} ({buffer.line_count} lines)")
        self.display.refresh()

    def handle(self, command: NavCommand) -> None:
        if not self.active:
            logger.debug(f"Ignoring {command.value}: navigator is idle")
            return
        self._handlers[command]()
        self.display.refresh()

    def move_up(self) -> None:
        if self.state is NavState.SHOWING_RESULTS:
            self.buffer.forward_line(-self.record_height)

    def move_down(self) -> None:
        if self.state is NavState.SHOWING_RESULTS:
            self.buffer.forward_line(self.record_height)

    def confirm(self) -> None:
        if self.state is not NavState.SHOWING_RESULTS:
            return
        citation = citation_at(self.buffer, self.record_height)
        if citation is None:
            logger.debug(f"No citation on line {self.buffer.point}")
            return
        self.state = NavState.DISPATCHING
        self.last_outcome = self.dispatcher.dispatch(citation)
        self.quit()

    def quit(self) -> None:
        if not self.active:
            return
        if self.buffer is not None:
            self.buffer.truncate_lines = False
            self.display.close_buffer(self.buffer)
        self.state = NavState.IDLE
