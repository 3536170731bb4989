from dataclasses import dataclass

from dotgraph.errors import DotSyntaxError, UnsupportedConstruct


@dataclass(slots=True, frozen=True)
class Token:
    kind: str
    value: str
    line: int
    column: int

    def describe(self) -> str:
        if self.kind == "EOF":
            return "end of input"
        if self.kind == "STRING":
            return f'"{self.value}"'
        return repr(self.value)


SINGLE_CHAR_TOKENS = {
    "{": "LBRACE",
    "}": "RBRACE",
    "[": "LBRACKET",
    "]": "RBRACKET",
    "=": "EQUALS",
    ",": "COMMA",
    ";": "SEMICOLON",
    ":": "COLON",
    "+": "PLUS",
}

EDGE_OPS = {"->": "ARROW", "--": "LINE"}


class _Cursor:
    def __init__(self, source: str):
        self.source = source
        self.index = 0
        self.line = 1
        self.line_start = 0

    @property
    def column(self) -> int:
        return self.index - self.line_start + 1

    def at_end(self) -> bool:
        return self.index >= len(self.source)

    def peek(self, offset: int = 0) -> str:
        position = self.index + offset
        return self.source[position] if position < len(self.source) else ""

    def startswith(self, text: str) -> bool:
        return self.source.startswith(text, self.index)

    def at_line_start(self) -> bool:
        """True if only blanks precede the cursor on its line."""
        return not self.source[self.line_start : self.index].strip()

    def advance(self, count: int = 1) -> None:
        for _ in range(count):
            if self.source[self.index] == "\n":
                self.line += 1
                self.line_start = self.index + 1
            self.index += 1


def lex(source: str) -> list[Token]:
    tokens: list[Token] = []
    cursor = _Cursor(source)

    while not cursor.at_end():
        char = cursor.peek()
        line, column = cursor.line, cursor.column

        if char.isspace():
            cursor.advance()
            continue

        if cursor.startswith("//") or (char == "#" and cursor.at_line_start()):
            _skip_to_line_end(cursor)
            continue

        if cursor.startswith("/*"):
            _skip_block_comment(cursor)
            continue

        if char == '"':
            tokens.append(Token("STRING", _read_string(cursor), line, column))
            continue

        edge_op = EDGE_OPS.get(source[cursor.index : cursor.index + 2])
        if edge_op is not None:
            tokens.append(Token(edge_op, source[cursor.index : cursor.index + 2], line, column))
            cursor.advance(2)
            continue

        token_kind = SINGLE_CHAR_TOKENS.get(char)
        if token_kind is not None:
            tokens.append(Token(token_kind, char, line, column))
            cursor.advance()
            continue

        if _is_numeral_start(cursor):
            tokens.append(Token("NUMBER", _read_numeral(cursor), line, column))
            continue

        if _is_identifier_start(char):
            tokens.append(Token("IDENT", _read_identifier(cursor), line, column))
            continue

        if char == "<":
            raise UnsupportedConstruct("HTML-like label", line=line, column=column)

        raise DotSyntaxError(line=line, column=column, expected="a token", found=repr(char))

    tokens.append(Token("EOF", "", cursor.line, cursor.column))
    return tokens


def _skip_to_line_end(cursor: _Cursor) -> None:
    while not cursor.at_end() and cursor.peek() != "\n":
        cursor.advance()


def _skip_block_comment(cursor: _Cursor) -> None:
    line, column = cursor.line, cursor.column
    cursor.advance(2)
    while not cursor.at_end():
        if cursor.startswith("*/"):
            cursor.advance(2)
            return
        cursor.advance()
    raise DotSyntaxError(line=line, column=column, expected="'*/'", found="end of input")


def _read_string(cursor: _Cursor) -> str:
    line, column = cursor.line, cursor.column
    cursor.advance()
    result: list[str] = []

    while not cursor.at_end():
        char = cursor.peek()
        if char == '"':
            cursor.advance()
            return "".join(result)
        if char == "\\" and cursor.peek(1) in ('"', "'"):
            result.append(cursor.peek(1))
            cursor.advance(2)
            continue
        if char == "\\" and cursor.peek(1) == "\n":
            cursor.advance(2)
            continue
        if char == "\\" and cursor.peek(1):
            # other escapes, such as \n, stay as written
            result.append(char + cursor.peek(1))
            cursor.advance(2)
            continue
        result.append(char)
        cursor.advance()

    raise DotSyntaxError(line=line, column=column, expected="closing '\"'", found="end of input")


def _read_identifier(cursor: _Cursor) -> str:
    start = cursor.index
    while not cursor.at_end() and _is_identifier_part(cursor.peek()):
        cursor.advance()
    return cursor.source[start : cursor.index]


def _read_numeral(cursor: _Cursor) -> str:
    start = cursor.index
    if cursor.peek() == "-":
        cursor.advance()
    while is_digit(cursor.peek()):
        cursor.advance()
    if cursor.peek() == ".":
        cursor.advance()
        while is_digit(cursor.peek()):
            cursor.advance()
    return cursor.source[start : cursor.index]


def _is_numeral_start(cursor: _Cursor) -> bool:
    offset = 1 if cursor.peek() == "-" else 0
    char = cursor.peek(offset)
    return is_digit(char) or (char == "." and is_digit(cursor.peek(offset + 1)))


def is_digit(char: str) -> bool:
    return len(char) == 1 and "0" <= char <= "9"


def _is_identifier_start(char: str) -> bool:
    return char.isalpha() or char == "_"


def _is_identifier_part(char: str) -> bool:
    return char.isalnum() or char == "_"
