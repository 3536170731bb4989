import json
import subprocess
from pathlib import Path

import pytest
from click.testing import CliRunner

from dotgraph import render
from dotgraph.cli import cli

DATA = Path(__file__).parent / "data"


def test_parse_prints_trace_and_attributes():
    runner = CliRunner()
    result = runner.invoke(cli, ["parse", str(DATA / "clusters.dot")])

    assert result.exit_code == 0, result.output
    lines = result.output.splitlines()
    assert lines[0] == "graph clusters: 5 elements"
    assert lines[1:6] == ["  1->2", "  3->4", "  5", "  6", "  2->3"]
    assert "  cluster_left: label=left" in lines
    assert "  2->3: weight=2" in lines


def test_parse_json():
    runner = CliRunner()
    result = runner.invoke(cli, ["parse", "--json", str(DATA / "small.dot")])

    assert result.exit_code == 0, result.output
    payload = json.loads(result.output)
    assert payload["name"] == "small"
    assert payload["graph"][0] == [1, 2]
    assert payload["attrs"]["2"] == [["alias", "parse"]]
    assert payload["aliases"]["execute"] == 3


def test_parse_missing_file_fails():
    runner = CliRunner()
    result = runner.invoke(cli, ["parse", str(DATA / "xyz.dot")])

    assert result.exit_code == 1
    assert "File does not exist" in result.output


def test_parse_syntax_error_fails(tmp_path: Path):
    bad = tmp_path / "bad.dot"
    bad.write_text("digraph g { a -> }\n", encoding="utf-8")

    runner = CliRunner()
    result = runner.invoke(cli, ["parse", str(bad)])

    assert result.exit_code == 1
    assert "line 1, column 18" in result.output


def test_parse_undecodable_file_fails(tmp_path: Path):
    bad = tmp_path / "bad.dot"
    bad.write_bytes(b"digraph g { \xff }\n")

    runner = CliRunner()
    result = runner.invoke(cli, ["parse", str(bad)])

    assert result.exit_code == 1
    assert "expected UTF-8 text, found byte 0xff" in result.output


def test_roundtrip_refuses_numeric_alias(tmp_path: Path):
    source = tmp_path / "numeric.dot"
    source.write_text('digraph g { a -> "7"; }\n', encoding="utf-8")

    runner = CliRunner()
    result = runner.invoke(cli, ["roundtrip", str(source)])

    assert result.exit_code == 1
    assert "Illegal node identifier: '7'" in result.output


def test_roundtrip_writes_file(tmp_path: Path):
    out_file = tmp_path / "out" / "copy.dot"

    runner = CliRunner()
    result = runner.invoke(cli, ["roundtrip", str(DATA / "small.dot"), "-o", str(out_file)])

    assert result.exit_code == 0, result.output
    text = out_file.read_text(encoding="utf-8")
    assert text.startswith("digraph small {\n  main -> parse;\n")
    assert text.endswith("  execute -> compare;\n}\n")


def test_roundtrip_prints_with_new_name():
    runner = CliRunner()
    result = runner.invoke(cli, ["roundtrip", str(DATA / "small.dot"), "--name", "renamed"])

    assert result.exit_code == 0, result.output
    assert result.output.startswith("digraph renamed {\n")


def test_render_reports_output_path(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    dot_file = tmp_path / "g.dot"
    dot_file.write_text("digraph g { 1 -> 2; }\n", encoding="utf-8")
    monkeypatch.setattr(render.shutil, "which", lambda name: "/usr/bin/dot")
    monkeypatch.setattr(
        render.subprocess, "run", lambda args, **kwargs: subprocess.CompletedProcess(args, 0, "")
    )

    runner = CliRunner()
    result = runner.invoke(cli, ["render", str(dot_file), "--format", "svg"])

    assert result.exit_code == 0, result.output
    assert result.output.strip() == str(tmp_path / "g.svg")


def test_render_without_graphviz(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    dot_file = tmp_path / "g.dot"
    dot_file.write_text("digraph g { 1 -> 2; }\n", encoding="utf-8")
    monkeypatch.setattr(render.shutil, "which", lambda name: None)

    runner = CliRunner()
    result = runner.invoke(cli, ["render", str(dot_file)])

    assert result.exit_code == 1
    assert "not installed" in result.output
