"""Error hierarchy for reading, writing and rendering DOT text."""

from __future__ import annotations


class DotError(Exception):
    """Base error for all dotgraph errors."""

    def __init__(self, message: str, *, cause: Exception | None = None):
        super().__init__(message)
        self.cause = cause


# --- Writer errors ---


class IdentifierError(DotError):
    """A node or graph token that cannot be written as a bare DOT identifier."""

    def __init__(self, name: object, *, cause: Exception | None = None):
        super().__init__(f"Illegal node identifier: '{name}'", cause=cause)
        self.name = name


# --- Reader errors ---


class SourceNotFound(DotError):
    """The DOT file to read does not exist."""

    def __init__(self, path: str, *, cause: Exception | None = None):
        super().__init__(f"File does not exist: {path}", cause=cause)
        self.path = path


class DotSyntaxError(DotError):
    """Unexpected token, unterminated string or unterminated block."""

    def __init__(
        self,
        *,
        line: int,
        column: int,
        expected: str,
        found: str,
        cause: Exception | None = None,
    ):
        super().__init__(
            f"line {line}, column {column}: expected {expected}, found {found}",
            cause=cause,
        )
        self.line = line
        self.column = column
        self.expected = expected
        self.found = found


class UnsupportedConstruct(DotError):
    """Valid DOT that falls outside the supported subset."""

    def __init__(self, construct: str, *, line: int, column: int):
        super().__init__(f"line {line}, column {column}: unsupported {construct}")
        self.construct = construct
        self.line = line
        self.column = column


# --- Render errors ---


class RenderError(DotError):
    """The external renderer failed."""

    def __init__(
        self,
        message: str,
        *,
        exit_code: int | None = None,
        output: str = "",
        cause: Exception | None = None,
    ):
        super().__init__(message, cause=cause)
        self.exit_code = exit_code
        self.output = output


class RendererNotInstalled(RenderError):
    """The GraphViz executable is not on the PATH."""

    def __init__(self, executable: str):
        super().__init__(f"GraphViz '{executable}' not installed")
        self.executable = executable
