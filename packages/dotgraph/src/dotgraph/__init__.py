"""Read and write GraphViz DOT text."""

from dotgraph.errors import (
    DotError,
    DotSyntaxError,
    IdentifierError,
    RendererNotInstalled,
    RenderError,
    SourceNotFound,
    UnsupportedConstruct,
)
from dotgraph.parser.parser import ParsedDot, parse_dot
from dotgraph.reader import from_dot
from dotgraph.render import RenderConfig, RenderFormat, render_dot
from dotgraph.values import Color3b, Color3f, Keyword, Pair
from dotgraph.writer import DotWriter, new_dot, to_file

__version__ = "0.1.0"

__all__ = [
    "Color3b",
    "Color3f",
    "DotError",
    "DotSyntaxError",
    "DotWriter",
    "IdentifierError",
    "Keyword",
    "Pair",
    "ParsedDot",
    "RenderConfig",
    "RenderError",
    "RenderFormat",
    "RendererNotInstalled",
    "SourceNotFound",
    "UnsupportedConstruct",
    "from_dot",
    "new_dot",
    "parse_dot",
    "render_dot",
    "to_file",
]
