"""
Search session: wires the command builder, process runner, navigator and
fetch dispatcher together around one result buffer.
"""

import logging
from typing import List, Optional

from cite_core.buffer import Display, ResultBuffer
from cite_core.config import CiteConfig
from cite_core.fetch import FetchDispatcher
from cite_core.invocation import search_command_for
from cite_core.navigator import NavCommand, ResultNavigator
from cite_core.runner import ProcessRunner

logger = logging.getLogger(__name__)


class CiteSession:
    """One interactive search-and-fetch workflow."""

    def __init__(self, settings: CiteConfig, display: Display,
                 runner: Optional[ProcessRunner] = None) -> None:
        self.settings = settings
        self.display = display
        self.runner = runner or ProcessRunner(display)
        self.buffer = ResultBuffer(settings.results.buffer_name)
        self.dispatcher = FetchDispatcher(settings, self.runner, display)
        self.navigator = ResultNavigator(display, self.dispatcher, settings.results.record_height)

    @property
    def active(self) -> bool:
        return self.navigator.active

    @property
    def last_message(self) -> Optional[str]:
        return self.display.last_message

    def search(self, query: str, engines: Optional[List[str]] = None) -> str:
        """
        Run a search and start navigating its output.

        Blocks until the external program exits.

        Args:
            query: Free-text query
            engines: Engines to search; the configured selection when omitted

        Returns:
            The command that was run
        """
        command = search_command_for(self.settings, query, engines)
        logger.debug(f"Search command: {command}")
        rc = self.runner.run_to_buffer(command, self.buffer)
        logger.debug(f"Search finished with exit code {rc}, {self.buffer.line_count} lines")
        self.navigator.enter(self.buffer)
        return command

    def handle(self, command: NavCommand) -> None:
        self.navigator.handle(command)
        if not self.navigator.active:
            self.runner.reap()

    def quit(self) -> None:
        self.handle(NavCommand.QUIT)
