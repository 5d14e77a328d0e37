"""Data models for citeview."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class CitationId:
    """Identifier and engine recovered from the first line of a citation record."""
    identifier: str
    engine: str

    def __str__(self) -> str:
        return f"[{self.identifier}] ({self.engine})"


@dataclass
class FetchOutcome:
    """Result of dispatching a fetch command for one citation."""
    citation: CitationId
    command: str
    dispatched: bool = False
    returncode: Optional[int] = None  # None when the fetch was not waited on
    message: str = ""

    @property
    def succeeded(self) -> bool:
        """True when the fetch was dispatched and did not report a failure."""
        if not self.dispatched:
            return False
        return self.returncode is None or self.returncode == 0
