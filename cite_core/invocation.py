"""
Command line construction for the external citation program.

Argument order and flag names are part of the program's interface:

    <exe> --search --engines=<e1,e2,...> "<query>"
    <exe> --fetch --engines="<engine>" --bib="<bib>" [--secondary-bib="<dir>"] "<identifier>"

Values are placed inside double quotes without escaping, so a query that
contains a double quote produces a broken command line.
"""

import logging
from typing import List, Optional

from cite_core.config import CiteConfig
from cite_core.constants import SEARCH_FLAG, FETCH_FLAG
from cite_core.models import CitationId

logger = logging.getLogger(__name__)


def build_search_command(executable: str, engines: List[str], query: str) -> str:
    """
    Build the search-mode command line.

    Args:
        executable: Program to invoke (may contain its own arguments)
        engines: Ordered engine names, joined with commas
        query: Free-text query

    Returns:
        Shell command string
    """
    return f'{executable} {SEARCH_FLAG} --engines={",".join(engines)} "{query}"'


def build_fetch_command(
    executable: str,
    engine: str,
    bibliography: Optional[str],
    identifier: str,
    secondary_bibliography: Optional[str] = None
) -> str:
    """
    Build the fetch-mode command line.

    The --secondary-bib flag is emitted whenever secondary_bibliography is not
    None, including when it is an empty string.

    Args:
        executable: Program to invoke
        engine: Engine the identifier belongs to
        bibliography: Primary bibliography file (None renders as "")
        identifier: Citation identifier to fetch
        secondary_bibliography: Optional secondary bibliography folder

    Returns:
        Shell command string
    """
    parts = [
        executable,
        FETCH_FLAG,
        f'--engines="{engine}"',
        f'--bib="{bibliography or ""}"',
    ]
    if secondary_bibliography is not None:
        parts.append(f'--secondary-bib="{secondary_bibliography}"')
    parts.append(f'"{identifier}"')
    return " ".join(parts)


def search_command_for(settings: CiteConfig, query: str, engines: Optional[List[str]] = None) -> str:
    """Search command for a query using the configured executable and engine selection."""
    selected = list(engines) if engines else settings.resolve_engines()
    if not selected:
        logger.warning("No engines selected; the search command will have an empty engine list")
    return build_search_command(settings.executable, selected, query)


def fetch_command_for(settings: CiteConfig, citation: CitationId) -> str:
    """Fetch command for a citation using the configured bibliography targets."""
    if settings.bibliography.file is None:
        logger.warning("No bibliography file configured (bibliography.file)")
    return build_fetch_command(
        settings.executable,
        citation.engine,
        settings.bibliography.file,
        citation.identifier,
        settings.bibliography.secondary_folder,
    )
