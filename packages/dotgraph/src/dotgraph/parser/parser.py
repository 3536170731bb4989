import logging
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from dotgraph.errors import DotSyntaxError, UnsupportedConstruct
from dotgraph.parser.lexer import Token, is_digit, lex
from dotgraph.types import (
    ALIAS,
    AttrIndexBuilder,
    EdgeKey,
    GraphElement,
    GraphKey,
    Vertex,
    edge_key,
    node_key,
)

logger = logging.getLogger(__name__)

DEFAULT_GRAPH_NAME = "graph"
# value recorded for an attribute written without '=value'
FLAG_VALUE = "true"

ID_KINDS = {"IDENT", "STRING", "NUMBER"}
EDGE_KINDS = {"ARROW", "LINE"}
SEPARATORS = {"SEMICOLON", "COMMA"}
DESCRIPTIONS = {
    "LBRACE": "'{'",
    "RBRACE": "'}'",
    "LBRACKET": "'['",
    "RBRACKET": "']'",
    "STRING": "a quoted string",
}


@dataclass(frozen=True, slots=True)
class ParsedDot:
    """A parsed graph; unpacks as ``trace, attrs``."""

    name: str
    graph: tuple[GraphElement, ...]
    attrs: Mapping[GraphKey, tuple[tuple[str, str], ...]]
    aliases: Mapping[str, Vertex] = field(default_factory=dict)

    def __iter__(self) -> Iterator:
        return iter((self.graph, self.attrs))


class DotParser:
    def __init__(self, source: str):
        self._tokens = lex(source)
        self._index = 0
        self._edge_kind = "ARROW"
        self._trace: list[GraphElement] = []
        self._attrs = AttrIndexBuilder()
        self._aliases: dict[str, Vertex] = {}
        self._alias_ids: set[Vertex] = set()
        self._used: set[Vertex] = set()
        self._next_id = 1

    def parse(self) -> ParsedDot:
        if self._is_keyword(self._peek(), "strict"):
            self._consume()
        if self._is_keyword(self._peek(), "digraph"):
            self._edge_kind = "ARROW"
        elif self._is_keyword(self._peek(), "graph"):
            self._edge_kind = "LINE"
        else:
            raise self._error("'digraph' or 'graph'")
        self._consume()

        name = DEFAULT_GRAPH_NAME
        if self._peek().kind in ID_KINDS:
            name = self._consume().value
        self._expect("LBRACE")
        self._parse_statements(name)
        self._expect("RBRACE")

        if self._peek().kind != "EOF":
            token = self._peek()
            if self._is_keyword(token, "strict", "digraph", "graph"):
                raise UnsupportedConstruct(
                    "multiple graphs in one source", line=token.line, column=token.column
                )
            raise self._error("end of input")

        logger.debug(
            "Parsed DOT graph %s: %d elements, %d aliases",
            name,
            len(self._trace),
            len(self._aliases),
        )
        return ParsedDot(
            name=name,
            graph=tuple(self._trace),
            attrs=MappingProxyType(self._attrs.snapshot()),
            aliases=MappingProxyType(dict(self._aliases)),
        )

    def _parse_statements(self, scope: str) -> None:
        while self._peek().kind != "RBRACE":
            if self._peek().kind == "EOF":
                raise self._error("'}'")
            self._parse_statement(scope)
            while self._peek().kind in SEPARATORS:
                self._consume()

    def _parse_statement(self, scope: str) -> None:
        token = self._peek()
        if token.kind == "LBRACE" or self._is_keyword(token, "subgraph"):
            self._parse_subgraph(scope)
            return

        if token.kind not in ID_KINDS:
            raise self._error("a statement")

        if self._is_keyword(token, "graph", "node", "edge"):
            self._consume()
            if self._peek().kind != "LBRACKET":
                raise self._error("'['")
            attrs = self._parse_attr_list()
            kind = token.value.lower()
            if kind == "graph":
                self._attrs.extend(scope, attrs)
            elif kind == "node":
                self._attrs.extend(node_key(scope), attrs)
            else:
                self._attrs.extend(edge_key(scope), attrs)
            return

        if self._is_keyword(token, "digraph", "strict"):
            raise self._error("a statement")

        lead = self._consume()
        if self._peek().kind == "EQUALS":
            self._consume()
            self._attrs.extend(scope, [(lead.value, self._expect_value())])
            return

        self._reject_port()
        if self._peek().kind in EDGE_KINDS:
            self._parse_edge_statement(lead)
            return

        vertex = self._vertex(lead)
        attrs = self._parse_attr_list(optional=True)
        self._trace.append(vertex)
        self._attrs.extend(vertex, attrs)

    def _parse_subgraph(self, scope: str) -> None:
        name = None
        if self._is_keyword(self._peek(), "subgraph"):
            self._consume()
            if self._peek().kind in ID_KINDS:
                name = self._consume().value
        self._expect("LBRACE")
        self._parse_statements(name or scope)
        self._expect("RBRACE")
        if self._peek().kind in EDGE_KINDS:
            self._unsupported("subgraph as edge endpoint")

    def _parse_edge_statement(self, first: Token) -> None:
        chain = [self._vertex(first)]
        while self._peek().kind in EDGE_KINDS:
            if self._peek().kind != self._edge_kind:
                raise self._error(repr("->" if self._edge_kind == "ARROW" else "--"))
            self._consume()
            if self._peek().kind == "LBRACE" or self._is_keyword(self._peek(), "subgraph"):
                self._unsupported("subgraph as edge endpoint")
            chain.append(self._vertex(self._expect_id()))
            self._reject_port()

        attrs = self._parse_attr_list(optional=True)

        pairs: list[EdgeKey] = list(zip(chain, chain[1:]))
        self._trace.extend(pairs)
        # a trailing attribute block binds to the final edge of the chain
        self._attrs.extend(pairs[-1], attrs)

    def _parse_attr_list(self, optional: bool = False) -> list[tuple[str, str]]:
        if optional and self._peek().kind != "LBRACKET":
            return []

        attrs: list[tuple[str, str]] = []
        self._expect("LBRACKET")
        while True:
            while self._peek().kind != "RBRACKET":
                key = self._expect_value()
                value = FLAG_VALUE
                if self._peek().kind == "EQUALS":
                    self._consume()
                    value = self._expect_value()
                attrs.append((key, value))
                if self._peek().kind in SEPARATORS:
                    self._consume()
            self._expect("RBRACKET")
            if self._peek().kind != "LBRACKET":
                return attrs
            self._consume()

    def _vertex(self, token: Token) -> Vertex:
        if token.kind == "NUMBER" and _is_unsigned(token.value) and int(token.value) > 0:
            vertex = int(token.value)
            if vertex in self._alias_ids:
                logger.warning(
                    "Vertex %d at line %d was already assigned to an alias", vertex, token.line
                )
            self._used.add(vertex)
            return vertex

        vertex = self._aliases.get(token.value)
        if vertex is None:
            while self._next_id in self._used:
                self._next_id += 1
            vertex = self._next_id
            self._aliases[token.value] = vertex
            self._alias_ids.add(vertex)
            self._used.add(vertex)
            self._attrs.extend(vertex, [(ALIAS, token.value)])
        return vertex

    def _expect_value(self) -> str:
        token = self._expect_id()
        if token.kind != "STRING":
            return token.value
        parts = [token.value]
        while self._peek().kind == "PLUS":
            self._consume()
            parts.append(self._expect("STRING").value)
        return "".join(parts)

    def _expect_id(self) -> Token:
        if self._peek().kind not in ID_KINDS:
            raise self._error("an identifier")
        return self._consume()

    def _expect(self, kind: str) -> Token:
        if self._peek().kind != kind:
            raise self._error(DESCRIPTIONS.get(kind, kind.lower()))
        return self._consume()

    def _reject_port(self) -> None:
        if self._peek().kind == "COLON":
            self._unsupported("node port")

    def _unsupported(self, construct: str) -> None:
        token = self._peek()
        raise UnsupportedConstruct(construct, line=token.line, column=token.column)

    def _error(self, expected: str) -> DotSyntaxError:
        token = self._peek()
        return DotSyntaxError(
            line=token.line, column=token.column, expected=expected, found=token.describe()
        )

    @staticmethod
    def _is_keyword(token: Token, *words: str) -> bool:
        return token.kind == "IDENT" and token.value.lower() in words

    def _peek(self) -> Token:
        return self._tokens[self._index]

    def _consume(self) -> Token:
        token = self._tokens[self._index]
        self._index += 1
        return token


def parse_dot(source: str) -> ParsedDot:
    return DotParser(source).parse()


def _is_unsigned(text: str) -> bool:
    return bool(text) and all(is_digit(char) for char in text)
