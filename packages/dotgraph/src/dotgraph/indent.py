"""Immutable indented text buffer.

Every operation returns a new buffer, so a partially built document can be
kept and extended in more than one direction. Written parts are held as a
linked list of ``(parts, previous)`` cells, newest first, so appending never
copies what is already written.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional

INDENT = "  "
NEWLINE = "\n"

Chunks = Optional[tuple[tuple[str, ...], "Chunks"]]


@dataclass(frozen=True, slots=True)
class Indent:
    chunks: Chunks = None
    depth: int = 0
    unit: str = INDENT

    def push(self) -> Indent:
        return replace(self, depth=self.depth + 1)

    def pop(self) -> Indent:
        if self.depth == 0:
            raise ValueError("Cannot pop indent below zero")
        return replace(self, depth=self.depth - 1)

    def newl(self) -> Indent:
        """Start a new line at the current indentation."""
        return self.txt(self.unit * self.depth)

    def txt(self, *parts: str) -> Indent:
        return replace(self, chunks=(parts, self.chunks))

    def endl(self) -> Indent:
        return self.txt(NEWLINE)

    def txtl(self, *parts: str) -> Indent:
        """Write one complete line."""
        return self.newl().txt(*parts).endl()

    def to_text(self) -> str:
        cells = []
        chunks = self.chunks
        while chunks is not None:
            parts, chunks = chunks
            cells.append(parts)
        return "".join(part for parts in reversed(cells) for part in parts)
