"""Process runner: executes command strings for the search and fetch paths."""

import logging
import subprocess
from typing import List, Tuple, Type

from cite_core.buffer import Display, ResultBuffer
from cite_core.commands import CommandExecutor

logger = logging.getLogger(__name__)


class ProcessRunner:
    """Runs external commands and routes their output to a display."""

    def __init__(self, display: Display, executor: Type[CommandExecutor] = CommandExecutor) -> None:
        self.display = display
        self.executor = executor
        self.children: List[subprocess.Popen] = []  # dispatched, not yet reaped

    def run_to_buffer(self, command: str, buffer: ResultBuffer) -> int:
        """
        Run command synchronously and show its output in buffer.

        stdout and stderr are captured together and replace the buffer's
        contents. The exit code is returned for logging only; a failing
        command simply leaves whatever it printed in the buffer.

        Args:
            command: Shell command string
            buffer: Buffer that receives the output

        Returns:
            Exit code of the command
        """
        rc, output, _ = self.executor.run(command, merge_stderr=True)
        if rc != 0:
            logger.debug(f"Command exited with {rc}: {command}")
        buffer.replace_contents(output)
        self.display.show_buffer(buffer)
        return rc

    def dispatch(self, command: str) -> bool:
        """Start command without waiting for it. Returns False if it could not be started."""
        self.reap()
        process = self.executor.spawn(command)
        if process is None:
            return False
        self.children.append(process)
        return True

    def reap(self) -> int:
        """
        Collect dispatched commands that have exited.

        Returns:
            Number of commands still running
        """
        running = []
        for process in self.children:
            rc = process.poll()
            if rc is None:
                running.append(process)
            else:
                logger.debug(f"Dispatched command exited with {rc}")
        self.children = running
        return len(running)

    def run_blocking(self, command: str) -> Tuple[int, str]:
        """Run command to completion and return (exit code, combined output)."""
        rc, output, _ = self.executor.run(command, merge_stderr=True)
        return rc, output
