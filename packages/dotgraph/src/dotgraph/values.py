"""Attribute value encoding for DOT output.

Values are a closed set of variants. Plain Python scalars cover the common
cases: ``str`` is quoted, ``int``/``float`` are written verbatim, ``bool``
is ``true``/``false`` and enum members are written as bare words. Colors,
coordinate pairs and arbitrary bare words use the tagged types below.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Union

LABEL = "label"

# characters escaped inside quoted labels
LABEL_ESCAPES = "\"'"

_NAME = re.compile(r"[A-Za-z_][A-Za-z0-9_]*|-?(?:\.[0-9]+|[0-9]+(?:\.[0-9]*)?)")
_UNSIGNED = re.compile(r"[0-9]+")

# words the reader treats as statements, in any letter case
KEYWORDS = frozenset({"strict", "graph", "digraph", "subgraph", "node", "edge"})


@dataclass(frozen=True, slots=True)
class Keyword:
    """A bare word written without quotes, e.g. ``Keyword("LR")``."""

    word: str


@dataclass(frozen=True, slots=True)
class Color3f:
    """RGB color with fractional components in ``[0.0, 1.0]``."""

    r: float
    g: float
    b: float

    def __post_init__(self) -> None:
        for component in (self.r, self.g, self.b):
            if isinstance(component, bool) or not 0.0 <= component <= 1.0:
                raise ValueError(f"Color3f component out of range: {component!r}")


@dataclass(frozen=True, slots=True)
class Color3b:
    """RGB color with byte components in ``[0, 255]``."""

    r: int
    g: int
    b: int

    def __post_init__(self) -> None:
        for component in (self.r, self.g, self.b):
            if not isinstance(component, int) or isinstance(component, bool):
                raise ValueError(f"Color3b component must be an int: {component!r}")
            if not 0 <= component <= 255:
                raise ValueError(f"Color3b component out of range: {component!r}")

    def to_hex(self) -> str:
        return f"#{self.r:02X}{self.g:02X}{self.b:02X}"


@dataclass(frozen=True, slots=True)
class Pair:
    """Two numbers written as one quoted ``"x,y"`` value, e.g. a size."""

    x: int | float
    y: int | float


Scalar = Union[str, int, float, bool, Enum, Keyword]
AttrValue = Union[Scalar, Color3f, Color3b, Pair, tuple]
AttrKey = Union[str, Enum]


def is_valid_name(name: str) -> bool:
    """True if ``name`` can be written as a bare DOT identifier or numeral."""
    return _NAME.fullmatch(name) is not None


def is_alias_name(name: str) -> bool:
    """True if ``name`` reads back as the alias of a vertex.

    Keywords and unsigned integers are legal tokens but read back as a
    statement or a literal vertex id.
    """
    return (
        is_valid_name(name)
        and name.lower() not in KEYWORDS
        and _UNSIGNED.fullmatch(name) is None
    )


def quote(text: str) -> str:
    return '"' + text.replace('"', '\\"') + '"'


def escape_label(value: AttrValue) -> str:
    text = _text(value)
    for char in LABEL_ESCAPES:
        text = text.replace(char, "\\" + char)
    return f'"{text}"'


def encode_value(value: AttrValue) -> str:
    if isinstance(value, Color3f):
        return '"' + ",".join(_text(c) for c in (value.r, value.g, value.b)) + '"'
    if isinstance(value, Color3b):
        return '"' + value.to_hex() + '"'
    if isinstance(value, tuple) and len(value) == 2:
        value = Pair(*value)
    if isinstance(value, Pair):
        return f'"{_text(value.x)},{_text(value.y)}"'
    if isinstance(value, Enum) or isinstance(value, Keyword):
        return _text(value)
    if isinstance(value, str):
        return quote(value)
    return _text(value)


def key_text(key: AttrKey) -> str:
    return _text(key)


def encode_attr(key: AttrKey, value: AttrValue) -> str:
    name = key_text(key)
    if name == LABEL:
        return f"{LABEL}={escape_label(value)}"
    return f"{name}={encode_value(value)}"


def encode_attrs(attrs: Sequence[tuple[AttrKey, AttrValue]]) -> str:
    """Render an attribute list as `` [k1=v1, k2=v2]``, or nothing if empty."""
    if not attrs:
        return ""
    return " [" + ", ".join(encode_attr(key, value) for key, value in attrs) + "]"


def _text(value: object) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, Keyword):
        return value.word
    if isinstance(value, (str, int, float)):
        return str(value)
    raise TypeError(f"Unsupported attribute value: {value!r}")
