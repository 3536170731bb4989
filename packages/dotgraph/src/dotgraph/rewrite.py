from collections import ChainMap

from dotgraph.parser.parser import ParsedDot
from dotgraph.types import ALIAS, is_edge, scope_defaults
from dotgraph.writer import DotWriter, new_dot


def write_parsed(parsed: ParsedDot, name: str | None = None) -> str:
    """Write a parsed graph back to DOT text.

    Top-level graph attributes and defaults come first, then one statement
    per trace element in trace order. Attributes are written with the first
    occurrence of each vertex or edge. Subgraph scopes are flattened.
    """
    defaults = scope_defaults(parsed.attrs, parsed.name)
    writer = new_dot(name or parsed.name)
    if defaults.node:
        writer = writer.global_("node", defaults.node)
    if defaults.edge:
        writer = writer.global_("edge", defaults.edge)
    for key, value in defaults.graph:
        writer = writer.attribute(key, value)
    return _write_trace(writer, parsed).end_dot()


def _write_trace(writer: DotWriter, parsed: ParsedDot) -> DotWriter:
    aliases = {vertex: [(ALIAS, alias)] for alias, vertex in parsed.aliases.items()}
    written: set = set()

    for element in parsed.graph:
        first = element not in written
        written.add(element)
        if is_edge(element):
            tail, head = element
            eattrs = parsed.attrs.get(element, ()) if first else ()
            writer = writer.edge(tail, head, ChainMap({element: eattrs}, aliases))
        elif first:
            writer = writer.node(element, parsed.attrs.get(element))
        else:
            writer = writer.node(element, aliases)
    return writer
