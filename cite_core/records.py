"""
Citation record parsing.

Search output is a sequence of fixed-height records. The first line of each
record names the citation:

    [2103.00020] (arxiv)
    Learning Transferable Visual Models From Natural Language Supervision
    Radford, Kim, Hallacy, ...
    2021

Both capture groups of RECORD_HEADER_RE are greedy, so an identifier that
contains "]" or an engine that contains ")" is not split correctly.
"""

from typing import Iterator, List, Optional, Tuple

from cite_core.buffer import ResultBuffer
from cite_core.constants import RECORD_HEADER_RE
from cite_core.models import CitationId


def record_start_line(line: int, height: int) -> int:
    """
    First line of the record containing a 1-based line.

    Walks backwards one line at a time until (line - 1) is a multiple of height.
    """
    while line > 1 and (line - 1) % height != 0:
        line -= 1
    return line


def record_line_range(line: int, height: int) -> Tuple[int, int]:
    """Inclusive (start, end) line range of the record containing line."""
    start = record_start_line(line, height)
    return start, start + height - 1


def parse_record_header(text: str) -> Optional[CitationId]:
    """
    Recover identifier and engine from a record's text.

    Only the first line is examined. Returns None when it does not match.
    """
    first_line = text.split("\n", 1)[0]
    match = RECORD_HEADER_RE.search(first_line)
    if not match:
        return None
    return CitationId(identifier=match.group(1), engine=match.group(2))


def citation_at(buffer: ResultBuffer, height: int) -> Optional[CitationId]:
    """Citation of the record under the buffer's point."""
    start = record_start_line(buffer.point, height)
    return parse_record_header(buffer.line(start))


def iter_records(lines: List[str], height: int) -> Iterator[Tuple[int, List[str]]]:
    """Yield (start line, record lines) for each record in lines."""
    for offset in range(0, len(lines), height):
        yield offset + 1, lines[offset:offset + height]
