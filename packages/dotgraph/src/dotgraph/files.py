from pathlib import Path

from dotgraph.errors import DotSyntaxError, SourceNotFound

DOT_SUFFIX = ".dot"


def read_text(path: str | Path) -> str:
    source = Path(path)
    if not source.is_file():
        raise SourceNotFound(str(path))
    data = source.read_bytes()
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise _decode_error(data, exc) from exc


def write_text(text: str, path: str | Path) -> Path:
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(text, encoding="utf-8")
    return target


def ensure_suffix(path: str | Path, suffix: str = DOT_SUFFIX) -> Path:
    target = Path(path)
    if target.suffix:
        return target
    return target.with_suffix(suffix)


def _decode_error(data: bytes, exc: UnicodeDecodeError) -> DotSyntaxError:
    before = data[: exc.start]
    line_start = before.rfind(b"\n") + 1
    column = len(before[line_start:].decode("utf-8", errors="replace")) + 1
    return DotSyntaxError(
        line=before.count(b"\n") + 1,
        column=column,
        expected="UTF-8 text",
        found=f"byte 0x{data[exc.start]:02x}",
        cause=exc,
    )
