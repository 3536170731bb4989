"""Render DOT files to images with the GraphViz ``dot`` executable.

Rendering only works when GraphViz is installed; see
https://graphviz.org/docs/layouts/dot/.
"""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from dotgraph.errors import RenderError, RendererNotInstalled, SourceNotFound
from dotgraph.files import ensure_suffix

logger = logging.getLogger(__name__)

DEFAULT_EXECUTABLE = "dot"
DEFAULT_TIMEOUT_MS = 30_000


class RenderFormat(str, Enum):
    BMP = "bmp"
    DOT = "dot"
    FIG = "fig"
    GIF = "gif"
    PDF = "pdf"
    PS = "ps"
    PS2 = "ps2"
    PLAIN = "plain"
    PNG = "png"
    SVG = "svg"


@dataclass(frozen=True, slots=True)
class RenderConfig:
    executable: str = DEFAULT_EXECUTABLE
    timeout_ms: int = DEFAULT_TIMEOUT_MS

    @classmethod
    def from_env(cls, *, environ: Mapping[str, str] | None = None) -> RenderConfig:
        """Build a config from ``DOTGRAPH_EXECUTABLE`` and ``DOTGRAPH_TIMEOUT_MS``."""
        env = os.environ if environ is None else environ
        executable = env.get("DOTGRAPH_EXECUTABLE") or DEFAULT_EXECUTABLE
        timeout = env.get("DOTGRAPH_TIMEOUT_MS")
        if not timeout:
            return cls(executable=executable)
        try:
            timeout_ms = int(timeout)
        except ValueError as exc:
            raise ValueError(f"DOTGRAPH_TIMEOUT_MS must be an integer: {timeout!r}") from exc
        return cls(executable=executable, timeout_ms=timeout_ms)


def output_path(
    in_path: str | Path,
    fmt: RenderFormat | str = RenderFormat.PNG,
    out_dir: str | Path | None = None,
) -> Path:
    """Where ``render_dot`` writes: the input base name with the format suffix."""
    fmt = _format(fmt)
    source = ensure_suffix(in_path)
    name = source.name.split(".")[0]
    directory = source.parent if out_dir is None else Path(out_dir)
    return directory / f"{name}.{fmt.value}"


def render_dot(
    in_path: str | Path,
    fmt: RenderFormat | str = RenderFormat.PNG,
    out_dir: str | Path | None = None,
    *,
    config: RenderConfig | None = None,
) -> Path:
    """Render a DOT file and return the path of the image.

    A path without a suffix gets ``.dot`` appended. Without ``out_dir``
    the image is written beside the input.
    """
    config = config or RenderConfig.from_env()
    fmt = _format(fmt)
    source = ensure_suffix(in_path)
    target = output_path(source, fmt, out_dir)
    if not source.is_file():
        raise SourceNotFound(str(source))

    executable = shutil.which(config.executable)
    if executable is None:
        error = RendererNotInstalled(config.executable)
        logger.error(str(error))
        raise error

    target.parent.mkdir(parents=True, exist_ok=True)
    logger.info("Write %s file: %s", fmt.value.upper(), target)

    try:
        completed = subprocess.run(
            [executable, f"-T{fmt.value}", str(source), "-o", str(target)],
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
            timeout=config.timeout_ms / 1000,
            check=False,
        )
    except subprocess.TimeoutExpired as exc:
        error = RenderError(f"Rendering {source} timed out after {config.timeout_ms}ms", cause=exc)
        logger.error(str(error))
        raise error from exc

    if completed.returncode != 0:
        error = RenderError(
            f"Rendering {source} failed with exit code {completed.returncode}",
            exit_code=completed.returncode,
            output=completed.stdout or "",
        )
        logger.error(str(error))
        raise error

    return target


def _format(fmt: RenderFormat | str) -> RenderFormat:
    if isinstance(fmt, RenderFormat):
        return fmt
    return RenderFormat(fmt.lower())
