"""
Command execution utilities for citeview.

This module provides utilities for running external commands with standardized
error handling and output processing. Commands given as a string are run
through the shell, commands given as a list are executed directly.
"""

import shutil
import logging
import subprocess
from typing import List, Optional, Tuple, Union

logger = logging.getLogger(__name__)

Command = Union[str, List[str]]


def _describe(cmd: Command) -> str:
    return cmd if isinstance(cmd, str) else ' '.join(cmd)


class CommandExecutor:
    """Class for executing external commands with proper error handling."""

    @staticmethod
    def run(cmd: Command, merge_stderr: bool = False) -> Tuple[int, str, str]:
        """
        Run a command and return the return code, stdout, and stderr.

        Args:
            cmd: Command to run, a shell string or a list of strings
            merge_stderr: Send stderr into stdout (stderr is then "")

        Returns:
            Tuple containing (return_code, stdout, stderr)
        """
        try:
            logger.debug(f"Running command: {_describe(cmd)}")
            proc = subprocess.run(
                cmd,
                text=True,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT if merge_stderr else subprocess.PIPE,
                shell=isinstance(cmd, str)
            )
            return proc.returncode, proc.stdout or "", proc.stderr or ""
        except Exception as e:
            logger.error(f"Error running command {_describe(cmd)}: {e}")
            return 1, "", f"Error executing command: {e}"

    @staticmethod
    def spawn(cmd: Command) -> Optional[subprocess.Popen]:
        """
        Start a command without waiting for it or capturing its output.

        Args:
            cmd: Command to run, a shell string or a list of strings

        Returns:
            The running process, or None if it could not be started
        """
        try:
            logger.debug(f"Spawning command: {_describe(cmd)}")
            return subprocess.Popen(
                cmd,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                shell=isinstance(cmd, str),
                start_new_session=True
            )
        except Exception as e:
            logger.error(f"Error spawning command {_describe(cmd)}: {e}")
            return None

    @staticmethod
    def check_exists(command: str) -> bool:
        """
        Check if a command exists in the PATH.

        Args:
            command: Name of the command to check

        Returns:
            True if command exists, False otherwise
        """
        return shutil.which(command) is not None

