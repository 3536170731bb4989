"""Write directed graphs in GraphViz DOT format.

The writer is a value: every call returns a new ``DotWriter`` and leaves
the receiver untouched, so builds read as a method chain::

    text = (
        new_dot("simple")
        .global_("node", [("penwidth", 1)])
        .node(1, [("label", "one")])
        .edge(1, 2)
        .end_dot()
    )
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import NoReturn, Union

from dotgraph.errors import IdentifierError
from dotgraph.files import write_text
from dotgraph.indent import Indent
from dotgraph.types import ALIAS, GraphKey, Rankdir
from dotgraph.values import (
    AttrKey,
    AttrValue,
    Pair,
    encode_attr,
    encode_attrs,
    is_alias_name,
    is_valid_name,
    key_text,
)

logger = logging.getLogger(__name__)

DEFAULT_NAME = "mydot"
GLOBAL_KINDS = ("node", "edge")

NodeId = Union[int, str]
Attrs = Sequence[tuple[AttrKey, AttrValue]]
GraphAttrs = Mapping[GraphKey, Attrs]

# an alias string, element attributes, or a whole attribute index
AliasSource = Union[None, str, Attrs, GraphAttrs]


@dataclass(frozen=True, slots=True)
class DotWriter:
    io: Indent = field(default_factory=Indent)

    # graph and subgraph ----------

    def open_graph(self, name: str) -> DotWriter:
        _check_name(name)
        return self._io(self.io.txtl("digraph ", name, " {").push())

    def open_subgraph(self, name: str | None = None) -> DotWriter:
        if name is None:
            return self._io(self.io.txtl("{").push())
        _check_name(name)
        return self._io(self.io.txtl("subgraph ", name, " {").push())

    def close_graph(self) -> DotWriter:
        return self._io(self.io.pop().txtl("}"))

    def end_dot(self) -> str:
        """Close the document and return the DOT text."""
        if self.io.depth != 1:
            raise ValueError(f"Cannot end document with {self.io.depth - 1} open subgraph(s)")
        return self.close_graph().io.to_text()

    # attributes ----------

    def attribute(self, key: AttrKey, value: AttrValue) -> DotWriter:
        """A standalone attribute statement, outside any node or edge."""
        return self._io(self.io.txtl(encode_attr(key, value), ";"))

    def rankdir(self, rankdir: Rankdir | str) -> DotWriter:
        return self.attribute("rankdir", Rankdir(rankdir))

    def size(self, width: int | float, height: int | float) -> DotWriter:
        """Width and height in inches."""
        return self.attribute("size", Pair(width, height))

    def fixedsize(self, fixed: bool) -> DotWriter:
        return self.attribute("fixedsize", bool(fixed))

    def fontname(self, font: str) -> DotWriter:
        return self.attribute("fontname", font)

    # nodes ----------

    def global_(self, kind: str, source: AliasSource = None) -> DotWriter:
        """Default attributes for all nodes or all edges.

        Defaults share the node statement format: ``node [shape=box];``.
        """
        if kind not in GLOBAL_KINDS:
            raise ValueError(f"Unknown default kind: {kind!r}")
        return self.node(kind, source)

    def node(self, node_id: NodeId, source: AliasSource = None) -> DotWriter:
        token, attrs = id_attrs(node_id, source)
        return self._statement(token, encode_attrs(attrs))

    def nodes(self, node_ids: Iterable[NodeId], gattrs: GraphAttrs | None = None) -> DotWriter:
        """A compact list of nodes on one line; attributes only supply aliases."""
        node_ids = list(node_ids)
        if not node_ids:
            raise ValueError("nodes requires at least one id")
        io = self.io.newl()
        for node_id in node_ids:
            token, _ = id_attrs(node_id, gattrs)
            io = io.txt(token, "; ")
        return self._io(io.endl())

    # edges ----------

    def edge(self, tail: NodeId, head: NodeId, attrs: Attrs | GraphAttrs = ()) -> DotWriter:
        """One edge with optional attributes.

        A plain attribute list is written as the edge attributes. An
        attribute index supplies both endpoint aliases and the edge
        attributes stored under ``(tail, head)``.
        """
        if isinstance(attrs, Mapping):
            i, _ = id_attrs(tail, attrs)
            j, _ = id_attrs(head, attrs)
            eattrs = attrs.get((tail, head), ())
        else:
            i, _ = id_attrs(tail)
            j, _ = id_attrs(head)
            eattrs = attrs
        return self._statement(f"{i} -> {j}", encode_attrs(list(eattrs)))

    def edges(
        self, pairs: Iterable[tuple[NodeId, NodeId]], gattrs: GraphAttrs | None = None
    ) -> DotWriter:
        """A compact list of edges on one line, without attributes."""
        pairs = list(pairs)
        if not pairs:
            raise ValueError("edges requires at least one pair")
        io = self.io.newl()
        for tail, head in pairs:
            i, _ = id_attrs(tail, gattrs)
            j, _ = id_attrs(head, gattrs)
            io = io.txt(i, " -> ", j, "; ")
        return self._io(io.endl())

    def chain(self, node_ids: Iterable[NodeId], gattrs: GraphAttrs | None = None) -> DotWriter:
        """A path of edges on one line: ``1 -> 2 -> 3;``."""
        tokens = [id_attrs(node_id, gattrs)[0] for node_id in node_ids]
        if len(tokens) < 2:
            raise ValueError("chain requires at least two ids")
        return self._statement(" -> ".join(tokens), "")

    # internals ----------

    def _statement(self, body: str, attrs: str) -> DotWriter:
        return self._io(self.io.txtl(body, attrs, ";"))

    def _io(self, io: Indent) -> DotWriter:
        return replace(self, io=io)


def new_dot(name: str = DEFAULT_NAME) -> DotWriter:
    """Create a new DOT document holding one open digraph."""
    return DotWriter().open_graph(name)


def to_file(text: str, path: str | Path) -> str:
    write_text(text, path)
    return text


def id_attrs(
    node_id: NodeId, source: AliasSource = None
) -> tuple[str, list[tuple[AttrKey, AttrValue]]]:
    """Resolve the token written for ``node_id`` and the attributes left to render."""
    if isinstance(node_id, bool) or not isinstance(node_id, (int, str)):
        _illegal(node_id)
    if isinstance(node_id, int) and node_id < 1:
        _illegal(node_id)
    alias, attrs = _alias(node_id, source)
    if alias is None:
        token = str(node_id)
        if not is_valid_name(token):
            _illegal(token)
        return token, attrs
    if not isinstance(alias, str) or not is_alias_name(alias):
        _illegal(alias)
    return alias, attrs


def _alias(
    node_id: NodeId, source: AliasSource
) -> tuple[str | None, list[tuple[AttrKey, AttrValue]]]:
    if source is None:
        return None, []
    if isinstance(source, str):
        return source, []
    if isinstance(source, Mapping):
        return _alias(node_id, source.get(node_id))

    attrs = list(source)
    aliases = [value for key, value in attrs if key_text(key) == ALIAS]
    if not aliases:
        return None, attrs
    rest = [(key, value) for key, value in attrs if key_text(key) != ALIAS]
    return aliases[0], rest


def _check_name(name: str) -> None:
    if not isinstance(name, str) or not is_valid_name(name):
        _illegal(name)


def _illegal(name: object) -> NoReturn:
    error = IdentifierError(name)
    logger.error(str(error))
    raise error
