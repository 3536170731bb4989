"""Shared data model for DOT graphs.

A graph is an ordered trace of elements: a vertex id standing alone, or a
``(tail, head)`` edge pair. Attributes live beside the trace in an index
keyed by vertex id, edge pair, or scope name. Default attributes for a
scope ``N`` are kept under the synthetic keys ``N_node`` and ``N_edge``
and are never merged into individual vertex or edge attributes.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Union

Vertex = int
EdgeKey = tuple[int, int]
GraphElement = Union[Vertex, EdgeKey]
GraphKey = Union[Vertex, EdgeKey, str]

AttrList = Sequence[tuple[str, str]]
AttrIndex = Mapping[GraphKey, AttrList]
Aliases = Mapping[str, Vertex]

# attribute key carrying the identifier used in the DOT text
ALIAS = "alias"

NODE_SUFFIX = "_node"
EDGE_SUFFIX = "_edge"


def node_key(scope: str) -> str:
    return scope + NODE_SUFFIX


def edge_key(scope: str) -> str:
    return scope + EDGE_SUFFIX


def is_edge(element: GraphElement) -> bool:
    return isinstance(element, tuple)


@dataclass(frozen=True, slots=True)
class ScopeDefaults:
    """Structured view of one scope's entries in an attribute index."""

    name: str
    graph: tuple[tuple[str, str], ...] = ()
    node: tuple[tuple[str, str], ...] = ()
    edge: tuple[tuple[str, str], ...] = ()


def scope_defaults(index: AttrIndex, name: str) -> ScopeDefaults:
    return ScopeDefaults(
        name=name,
        graph=tuple(index.get(name, ())),
        node=tuple(index.get(node_key(name), ())),
        edge=tuple(index.get(edge_key(name), ())),
    )


@dataclass(slots=True)
class AttrIndexBuilder:
    """Append-only attribute index used while a graph is being read."""

    entries: dict[GraphKey, list[tuple[str, str]]] = field(default_factory=dict)

    def extend(self, key: GraphKey, attrs: Sequence[tuple[str, str]]) -> None:
        if attrs:
            self.entries.setdefault(key, []).extend(attrs)

    def snapshot(self) -> dict[GraphKey, tuple[tuple[str, str], ...]]:
        return {key: tuple(attrs) for key, attrs in self.entries.items()}


# ----------------------------
# attribute value enumerations
# ----------------------------


class Rankdir(str, Enum):
    TB = "TB"
    LR = "LR"
    BT = "BT"
    RL = "RL"


class Direction(str, Enum):
    FORWARD = "forward"
    BACK = "back"
    BOTH = "both"
    NONE = "none"


class Style(str, Enum):
    SOLID = "solid"
    DASHED = "dashed"
    DOTTED = "dotted"
    BOLD = "bold"
    INVIS = "invis"
    FILLED = "filled"
    DIAGONALS = "diagonals"
    ROUNDED = "rounded"


class Rank(str, Enum):
    SAME = "same"
    MIN = "min"
    MAX = "max"
    SOURCE = "source"
    SINK = "sink"


class ClusterRank(str, Enum):
    GLOBAL = "global"
    NONE = "none"


class Orientation(str, Enum):
    LANDSCAPE = "landscape"
    PORTRAIT = "portrait"


class Align(str, Enum):
    """Horizontal justification (labeljust) and vertical location (labelloc)."""

    C = "c"
    L = "l"
    R = "r"
    T = "t"
    B = "b"


class AttachPort(str, Enum):
    N = "n"
    NE = "ne"
    E = "e"
    SE = "se"
    S = "s"
    SW = "sw"
    W = "w"
    NW = "nw"


class Shape(str, Enum):
    BOX = "box"
    POLYGON = "polygon"
    ELLIPSE = "ellipse"
    CIRCLE = "circle"
    POINT = "point"
    EGG = "egg"
    TRIANGLE = "triangle"
    DIAMOND = "diamond"
    TRAPEZIUM = "trapezium"
    PARALLELOGRAM = "parallelogram"
    HOUSE = "house"
    HEXAGON = "hexagon"
    OCTAGON = "octagon"
    DOUBLECIRCLE = "doublecircle"
    DOUBLEOCTAGON = "doubleoctagon"
    TRIPLEOCTAGON = "tripleoctagon"
    INVTRIANGLE = "invtriangle"
    INVTRAPEZIUM = "invtrapezium"
    INVHOUSE = "invhouse"
    NONE = "none"
    MDIAMOND = "Mdiamond"
    MSQUARE = "Msquare"
    MCIRCLE = "Mcircle"
    RECORD = "record"
    MRECORD = "Mrecord"
