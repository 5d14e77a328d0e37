"""
Command line interface for citeview.

Search citation engines through the external citation program, pick a result in
an interactive view and fetch its BibTeX entry into the configured bibliography.

Usage examples:

  Search the favorite engines and browse the results:
      citeview search "transformer"

  Search specific engines and print the raw output:
      citeview search "neural nets" -e arxiv -e crossref --print

  Show the command line that would be run:
      citeview search "neural nets" --dry-run

  Fetch a known identifier directly:
      citeview fetch 2103.00020 --engine arxiv
"""

import sys
import shlex
import curses
import logging
from typing import List, Optional

import typer

from cite_core.buffer import Display, ResultBuffer
from cite_core.commands import CommandExecutor
from cite_core.config import CiteConfig, load_settings, resolve_path
from cite_core.fetch import FetchDispatcher
from cite_core.invocation import search_command_for, fetch_command_for
from cite_core.keymap import default_keymap
from cite_core.models import CitationId
from cite_core.runner import ProcessRunner

logging.basicConfig(level=logging.INFO, format='%(levelname)s: %(message)s')
logger = logging.getLogger(__name__)

app = typer.Typer(help="Search citation engines and fetch BibTeX entries into your bibliography.")

CONFIG_OPTION_HELP = "Path to config file (default: ~/.config/citeview/config.yaml)"


def setup(config_file: Optional[str], debug: bool) -> CiteConfig:
    """Load settings and configure logging from them."""
    if debug:
        logging.getLogger().setLevel(logging.DEBUG)
    settings = load_settings(config_file)

    root = logging.getLogger()
    if not debug:
        root.setLevel(settings.logging.level)
    if settings.logging.file:
        file_handler = logging.FileHandler(resolve_path(settings.logging.file))
        file_handler.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(message)s"))
        root.addHandler(file_handler)
    return settings


def warn_if_missing_executable(settings: CiteConfig) -> None:
    try:
        program = shlex.split(settings.executable)[0]
    except (ValueError, IndexError):
        program = settings.executable
    if not CommandExecutor.check_exists(program):
        logger.warning(f"'{program}' was not found on PATH; commands will fail")


@app.command()
def search(
    query: str = typer.Argument(..., help="Search query"),
    engines: Optional[List[str]] = typer.Option(
        None, "--engine", "-e",
        help="Engine to search (repeatable). Defaults to favorites, then all available engines."
    ),
    all_engines: bool = typer.Option(False, "--all-engines", "-a",
                                     help="Search every available engine"),
    print_output: bool = typer.Option(False, "--print", "-p",
                                      help="Print the search output instead of opening the result view"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Print the command without running it"),
    config_file: Optional[str] = typer.Option(None, "--config", "-c", help=CONFIG_OPTION_HELP),
    debug: bool = typer.Option(False, "--debug", "-d", help="Enable debug output"),
) -> None:
    """
    Search citation engines and browse the results.

    In the result view each record is a fixed number of lines; move between
    records and press Enter to fetch the selected citation.
    """
    settings = setup(config_file, debug)
    selected = list(settings.engines.available) if all_engines else engines

    if dry_run:
        typer.echo(search_command_for(settings, query, selected))
        return

    warn_if_missing_executable(settings)

    if not print_output and not sys.stdout.isatty():
        logger.warning("Output is not a terminal; printing results instead of opening the result view")
        print_output = True

    if print_output:
        display = Display()
        buffer = ResultBuffer(settings.results.buffer_name)
        ProcessRunner(display).run_to_buffer(search_command_for(settings, query, selected), buffer)
        if buffer.lines:
            typer.echo(buffer.text)
        return

    from cite_core.tui import run_tui

    session = curses.wrapper(run_tui, settings, default_keymap(), query, selected)
    outcome = session.navigator.last_outcome
    if outcome is None:
        logger.debug("Result view closed without fetching")
        return
    typer.echo(outcome.message)
    if not outcome.succeeded:
        raise typer.Exit(1)


@app.command()
def fetch(
    identifier: str = typer.Argument(..., help="Citation identifier, e.g. an arXiv id or DOI"),
    engine: str = typer.Option(..., "--engine", "-e", help="Engine the identifier belongs to"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Print the command without running it"),
    config_file: Optional[str] = typer.Option(None, "--config", "-c", help=CONFIG_OPTION_HELP),
    debug: bool = typer.Option(False, "--debug", "-d", help="Enable debug output"),
) -> None:
    """Fetch one citation into the bibliography without searching first."""
    settings = setup(config_file, debug)
    citation = CitationId(identifier=identifier, engine=engine)

    if dry_run:
        typer.echo(fetch_command_for(settings, citation))
        return

    warn_if_missing_executable(settings)
    display = Display()
    outcome = FetchDispatcher(settings, ProcessRunner(display), display).dispatch(citation)
    typer.echo(outcome.message)
    if not outcome.succeeded:
        logger.error(f"Could not run: {outcome.command}")
        raise typer.Exit(1)


@app.command("engines")
def list_engines(
    config_file: Optional[str] = typer.Option(None, "--config", "-c", help=CONFIG_OPTION_HELP),
    debug: bool = typer.Option(False, "--debug", "-d", help="Enable debug output"),
) -> None:
    """List available engines; favorites are marked with '*'."""
    settings = setup(config_file, debug)
    favorites = set(settings.engines.favorites)
    for name in settings.engines.available:
        marker = "*" if name in favorites else " "
        typer.echo(f"{marker} {name}")
    extra = [name for name in settings.engines.favorites if name not in settings.engines.available]
    for name in extra:
        typer.echo(f"* {name} (not in available engines)")
    typer.echo(f"\nDefault search engines: {','.join(settings.resolve_engines())}")


@app.command()
def hotkeys() -> None:
    """Print the key bindings of the result view."""
    default_keymap().print_help("CITEVIEW KEYBOARD SHORTCUTS")


def main() -> None:
    """Entry point for the citeview script."""
    app()


if __name__ == "__main__":
    main()
