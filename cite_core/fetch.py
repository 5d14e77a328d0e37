"""Fetch dispatcher: asks the external program to save one citation."""

import logging

from cite_core.buffer import Display
from cite_core.config import CiteConfig
from cite_core.invocation import fetch_command_for
from cite_core.models import CitationId, FetchOutcome
from cite_core.runner import ProcessRunner

logger = logging.getLogger(__name__)


class FetchDispatcher:
    """
    Builds and runs fetch commands.

    By default the command is started in the background and the confirmation
    message is shown without knowing whether the fetch worked. With
    ``fetch.wait`` enabled the dispatcher waits for the program and reports
    success or failure instead.
    """

    def __init__(self, settings: CiteConfig, runner: ProcessRunner, display: Display) -> None:
        self.settings = settings
        self.runner = runner
        self.display = display

    def dispatch(self, citation: CitationId) -> FetchOutcome:
        command = fetch_command_for(self.settings, citation)
        outcome = FetchOutcome(citation=citation, command=command)
        target = self.settings.bibliography.file or ""

        if self.settings.fetch.wait:
            rc, output = self.runner.run_blocking(command)
            outcome.dispatched = True
            outcome.returncode = rc
            if rc == 0:
                outcome.message = f"Saved {citation.identifier} from {citation.engine} into {target}"
            else:
                logger.error(f"Fetch command failed ({rc}): {output.strip()}")
                outcome.message = f"Fetch of {citation.identifier} failed (exit {rc})"
        else:
            outcome.dispatched = self.runner.dispatch(command)
            outcome.message = f"Fetching {citation.identifier} from {citation.engine} into {target}"

        self.display.message(outcome.message)
        return outcome
