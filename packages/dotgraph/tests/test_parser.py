from pathlib import Path

import pytest

from dotgraph.errors import DotSyntaxError, UnsupportedConstruct
from dotgraph.parser.parser import ParsedDot, parse_dot
from dotgraph.types import scope_defaults

DATA = Path(__file__).parent / "data"


def test_parser_supports_nodes_edges_defaults_and_chains():
    dot = """
    digraph Flow {
      graph [rankdir=LR];
      node [shape=box];
      edge [color=gray];
      start [type=start, class=entry];
      step;
      finish [type=exit];
      start -> step -> finish [label=next, when="context.ok = yes"];
    }
    """

    parsed = parse_dot(dot)

    assert isinstance(parsed, ParsedDot)
    assert parsed.name == "Flow"
    assert parsed.graph == (1, 2, 3, (1, 2), (2, 3))
    assert dict(parsed.aliases) == {"start": 1, "step": 2, "finish": 3}
    assert parsed.attrs["Flow"] == (("rankdir", "LR"),)
    assert parsed.attrs["Flow_node"] == (("shape", "box"),)
    assert parsed.attrs["Flow_edge"] == (("color", "gray"),)
    assert parsed.attrs[1] == (("alias", "start"), ("type", "start"), ("class", "entry"))
    assert parsed.attrs[2] == (("alias", "step"),)
    assert parsed.attrs[(2, 3)] == (("label", "next"), ("when", "context.ok = yes"))
    assert (1, 2) not in parsed.attrs


def test_parse_result_unpacks_as_trace_and_index():
    trace, attrs = parse_dot("digraph g { 1 -> 2; }")

    assert trace == ((1, 2),)
    assert dict(attrs) == {}


def test_small_file_assigns_alias_ids_in_order():
    trace, attrs = parse_dot((DATA / "small.dot").read_text(encoding="utf-8"))

    assert trace == (
        (1, 2),
        (2, 3),
        (1, 4),
        (1, 5),
        (3, 6),
        (3, 7),
        (4, 6),
        (1, 7),
        (3, 8),
    )
    assert attrs[2] == (("alias", "parse"),)
    assert attrs[3] == (("alias", "execute"),)


def test_test123_file():
    trace, attrs = parse_dot((DATA / "test123.dot").read_text(encoding="utf-8"))

    assert trace == ((1, 2), (2, 3), (1, 4), 2, 3, (1, 5), (4, 5), (2, 4), 6, 8, 9, (8, 9))
    assert attrs[2] == (("alias", "b"), ("shape", "box"))
    assert attrs[3] == (
        ("alias", "c"),
        ("style", "filled"),
        ("fontcolor", "red"),
        ("fontname", "Palatino-Italic"),
        ("fontsize", "24"),
        ("color", "blue"),
        ("label", "hello world"),
    )
    assert attrs[(1, 5)] == (("weight", "100"), ("label", "hi"))
    assert attrs[(4, 5)] == (("label", "multi-line\\nlabel"),)
    assert attrs["test123_node"] == (("fontname", "Helvetica"),)
    assert attrs["test123_edge"] == (("style", "dashed"),)
    assert attrs["test123"] == (("penwidth", "2.0"),)


def test_defaults_are_not_merged_into_elements():
    parsed = parse_dot(
        """
        digraph G {
          node [fontname="Helvetica"];
          edge [style="dashed"];
          1 -> 2;
          3 [color=red];
        }
        """
    )

    assert parsed.attrs["G_node"] == (("fontname", "Helvetica"),)
    assert parsed.attrs["G_edge"] == (("style", "dashed"),)
    assert parsed.attrs[3] == (("color", "red"),)
    assert (1, 2) not in parsed.attrs
    defaults = scope_defaults(parsed.attrs, "G")
    assert defaults.node == (("fontname", "Helvetica"),)
    assert defaults.edge == (("style", "dashed"),)
    assert defaults.graph == ()


def test_subgraphs_fold_into_one_trace_with_their_own_scopes():
    trace, attrs = parse_dot((DATA / "clusters.dot").read_text(encoding="utf-8"))

    assert trace == ((1, 2), (3, 4), 5, 6, (2, 3))
    assert attrs["clusters"] == (("rankdir", "LR"),)
    assert attrs["clusters_node"] == (("shape", "circle"),)
    assert attrs["cluster_left"] == (("label", "left"),)
    assert attrs["cluster_left_node"] == (("style", "filled"),)
    assert attrs["cluster_right_edge"] == (("color", "red"),)
    assert attrs["cluster_right"] == (("rank", "same"),)
    assert attrs[(2, 3)] == (("weight", "2"),)


def test_chain_attributes_bind_to_the_last_pair():
    trace, attrs = parse_dot("digraph g { a -> b -> c -> d [color=red]; }")

    assert trace == ((1, 2), (2, 3), (3, 4))
    assert attrs[(3, 4)] == (("color", "red"),)
    assert (1, 2) not in attrs
    assert (2, 3) not in attrs


def test_parallel_edges_and_repeated_vertices_are_all_traced():
    trace, attrs = parse_dot(
        """
        digraph g {
          1; 1 -> 2 [w=1]; 1 -> 2 [w=2]; 1;
          2 [a=x]; 2 [a=y];
        }
        """
    )

    assert trace == (1, (1, 2), (1, 2), 1, 2, 2)
    assert attrs[(1, 2)] == (("w", "1"), ("w", "2"))
    assert attrs[2] == (("a", "x"), ("a", "y"))


def test_attribute_lists_keep_order_and_duplicates():
    _, attrs = parse_dot(
        'digraph g { n [style=bold; style=dashed, color="red" penwidth=2][filled]; }'
    )

    assert attrs[1] == (
        ("alias", "n"),
        ("style", "bold"),
        ("style", "dashed"),
        ("color", "red"),
        ("penwidth", "2"),
        ("filled", "true"),
    )


def test_quoted_identifiers_and_numerals_are_aliases():
    parsed = parse_dot('digraph g { "hello world" -> 0 -> 7 -> "7" -> -1 -> 1.5; }')

    assert parsed.graph == ((1, 2), (2, 7), (7, 3), (3, 4), (4, 5))
    assert dict(parsed.aliases) == {"hello world": 1, "0": 2, "7": 3, "-1": 4, "1.5": 5}
    assert parsed.attrs[1] == (("alias", "hello world"),)


def test_integer_literal_after_synthesized_id_warns(caplog):
    parsed = parse_dot("digraph g { a -> b; 1 -> 3; }")

    assert parsed.graph == ((1, 2), (1, 3))
    assert "already assigned to an alias" in caplog.text


def test_string_concatenation_and_keyword_case():
    parsed = parse_dot('STRICT DiGraph g { Node [label="a" + "b"]; x = "1" + "2"; }')

    assert parsed.attrs["g_node"] == (("label", "ab"),)
    assert parsed.attrs["g"] == (("x", "12"),)


def test_undirected_graph_uses_double_dash():
    parsed = parse_dot("graph { a -- b -- c }")

    assert parsed.name == "graph"
    assert parsed.graph == ((1, 2), (2, 3))


def test_wrong_edge_operator_is_a_syntax_error():
    with pytest.raises(DotSyntaxError) as info:
        parse_dot("digraph g { a -- b }")

    assert info.value.expected == "'->'"
    assert info.value.found == "'--'"


def test_anonymous_subgraph_keeps_parent_scope():
    parsed = parse_dot("digraph top { { node [shape=point]; 1; } subgraph { 2; } }")

    assert parsed.graph == (1, 2)
    assert parsed.attrs["top_node"] == (("shape", "point"),)


class TestSyntaxErrors:
    def test_missing_header(self):
        with pytest.raises(DotSyntaxError) as info:
            parse_dot("a -> b;")

        assert info.value.expected == "'digraph' or 'graph'"
        assert (info.value.line, info.value.column) == (1, 1)

    def test_unterminated_block_reports_position(self):
        with pytest.raises(DotSyntaxError) as info:
            parse_dot("digraph g {\n  a -> b;\n")

        assert info.value.expected == "'}'"
        assert info.value.found == "end of input"
        assert info.value.line == 3
        assert "line 3, column 1: expected '}', found end of input" in str(info.value)

    def test_unterminated_attribute_list(self):
        with pytest.raises(DotSyntaxError) as info:
            parse_dot("digraph g { a [color=red }")

        assert info.value.expected == "an identifier"
        assert info.value.found == "'}'"

    def test_missing_edge_target(self):
        with pytest.raises(DotSyntaxError) as info:
            parse_dot("digraph g { a -> ; }")

        assert info.value.found == "';'"

    def test_default_without_attribute_list(self):
        with pytest.raises(DotSyntaxError) as info:
            parse_dot("digraph g { node; }")

        assert info.value.expected == "'['"

    def test_non_ascii_digit_vertex(self):
        with pytest.raises(DotSyntaxError) as info:
            parse_dot("digraph g { \u00b2 -> a; }")

        assert (info.value.line, info.value.column) == (1, 13)

    def test_trailing_tokens(self):
        with pytest.raises(DotSyntaxError) as info:
            parse_dot("digraph g { } extra")

        assert info.value.expected == "end of input"


class TestUnsupportedConstructs:
    def test_ports(self):
        with pytest.raises(UnsupportedConstruct) as info:
            parse_dot("digraph g { a:n -> b; }")

        assert info.value.construct == "node port"

    def test_subgraph_as_edge_endpoint(self):
        with pytest.raises(UnsupportedConstruct):
            parse_dot("digraph g { a -> { b c }; }")

    def test_subgraph_as_edge_tail(self):
        with pytest.raises(UnsupportedConstruct):
            parse_dot("digraph g { { a b } -> c; }")

    def test_multiple_graphs(self):
        with pytest.raises(UnsupportedConstruct) as info:
            parse_dot("digraph a { } digraph b { }")

        assert info.value.construct == "multiple graphs in one source"

    def test_html_label(self):
        with pytest.raises(UnsupportedConstruct):
            parse_dot("digraph g { a [label=<<i>x</i>>]; }")
