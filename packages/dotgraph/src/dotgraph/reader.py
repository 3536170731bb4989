"""Read GraphViz DOT text into a graph trace and attribute index."""

from __future__ import annotations

from pathlib import Path

from dotgraph.files import read_text
from dotgraph.parser.parser import ParsedDot, parse_dot


def from_dot(source: str | Path) -> ParsedDot:
    """Parse a DOT file or DOT text.

    A ``Path`` is always read from disk. A string is treated as DOT text
    when it contains ``{`` or a newline, otherwise as a file path.

    Raises ``SourceNotFound`` for a missing file, ``DotSyntaxError`` for
    malformed input and ``UnsupportedConstruct`` for DOT outside the
    supported subset.
    """
    if isinstance(source, str) and _looks_like_dot(source):
        return parse_dot(source)
    return parse_dot(read_text(source))


def _looks_like_dot(text: str) -> bool:
    return "{" in text or "\n" in text
