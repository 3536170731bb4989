"""Click CLI entry point for dotgraph."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import click

from dotgraph import __version__
from dotgraph.errors import DotError
from dotgraph.parser.parser import ParsedDot
from dotgraph.reader import from_dot
from dotgraph.render import RenderConfig, RenderFormat, render_dot
from dotgraph.rewrite import write_parsed
from dotgraph.types import GraphKey
from dotgraph.writer import to_file


@click.group()
@click.version_option(version=__version__, prog_name="dotgraph")
@click.option("--verbose", is_flag=True, default=False, help="Log at DEBUG level")
def cli(verbose: bool) -> None:
    """Read, rewrite and render GraphViz DOT files."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@cli.command()
@click.argument("path", type=click.Path(path_type=Path))
@click.option("--json", "as_json", is_flag=True, default=False, help="Print JSON")
def parse(path: Path, as_json: bool) -> None:
    """Print the graph trace and attribute index of a DOT file."""
    parsed = _read(path)
    if as_json:
        click.echo(json.dumps(_to_json(parsed), indent=2))
        return

    click.echo(f"graph {parsed.name}: {len(parsed.graph)} elements")
    for element in parsed.graph:
        click.echo(f"  {_key_text(element)}")
    if parsed.attrs:
        click.echo("attributes:")
        for key, attrs in parsed.attrs.items():
            pairs = ", ".join(f"{k}={v}" for k, v in attrs)
            click.echo(f"  {_key_text(key)}: {pairs}")


@cli.command()
@click.argument("path", type=click.Path(path_type=Path))
@click.option(
    "--format",
    "fmt",
    type=click.Choice([f.value for f in RenderFormat]),
    default=RenderFormat.PNG.value,
    show_default=True,
)
@click.option("--out-dir", type=click.Path(path_type=Path), default=None)
def render(path: Path, fmt: str, out_dir: Path | None) -> None:
    """Render a DOT file with GraphViz."""
    try:
        target = render_dot(path, fmt, out_dir, config=RenderConfig.from_env())
    except DotError as exc:
        raise click.ClickException(str(exc)) from exc
    click.echo(str(target))


@cli.command()
@click.argument("path", type=click.Path(path_type=Path))
@click.option("-o", "--output", type=click.Path(path_type=Path), default=None)
@click.option("--name", default=None, help="Graph name for the rewritten document")
def roundtrip(path: Path, output: Path | None, name: str | None) -> None:
    """Read a DOT file and write it back out through the writer."""
    parsed = _read(path)
    try:
        text = write_parsed(parsed, name)
    except DotError as exc:
        raise click.ClickException(str(exc)) from exc
    if output is None:
        click.echo(text, nl=False)
        return
    to_file(text, output)
    click.echo(f"Wrote {output}")


def _read(path: Path) -> ParsedDot:
    try:
        return from_dot(path)
    except DotError as exc:
        raise click.ClickException(str(exc)) from exc


def _key_text(key: GraphKey) -> str:
    if isinstance(key, tuple):
        return f"{key[0]}->{key[1]}"
    return str(key)


def _to_json(parsed: ParsedDot) -> dict:
    return {
        "name": parsed.name,
        "graph": [
            list(element) if isinstance(element, tuple) else element for element in parsed.graph
        ],
        "attrs": {
            _key_text(key): [list(pair) for pair in attrs] for key, attrs in parsed.attrs.items()
        },
        "aliases": dict(parsed.aliases),
    }


def main() -> None:
    cli()
