"""
Loading SQL scripts from disk, either fully or as a stream of lines.
"""
from __future__ import annotations
import pathlib
import typing as t
from contextlib import contextmanager

from sqlimport.constants import DEFAULT_ENCODING
from sqlimport.errors import SourceUnreadable
from sqlimport.scanner import physical_lines


class ScriptSource:
    """An ordered sequence of physical lines and the short name of their origin."""

    def __init__(self, name: str, lines: t.Iterable[str]) -> None:
        self.name: str = name
        self.lines: t.Iterable[str] = lines

    def __iter__(self) -> t.Iterator[str]:
        return iter(self.lines)

    @classmethod
    def from_text(cls, text: str, name: str = "<string>") -> "ScriptSource":
        return cls(name, physical_lines(text))


def _check_path(path: pathlib.Path) -> None:
    if not path.is_file():
        raise SourceUnreadable(path.name, f"File does not exist: {path}")
    try:
        size = path.stat().st_size
    except OSError as exc:
        raise SourceUnreadable(path.name, f"Could not open {path}: {exc}") from exc
    if size == 0:
        raise SourceUnreadable(path.name, f"Could not open {path}: file is empty")


def read_script(
    path: pathlib.Path | str,
    encoding: str = DEFAULT_ENCODING,
) -> ScriptSource:
    """
    Read *path* into memory in one go.  Lines break exactly where
    :func:`open_script` breaks them, line endings kept.
    """
    path = pathlib.Path(path)
    _check_path(path)
    try:
        with path.open("r", encoding=encoding, newline="") as fh:
            lines = tuple(fh)
    except (OSError, UnicodeDecodeError) as exc:
        raise SourceUnreadable(path.name, f"Could not open {path}: {exc}") from exc
    return ScriptSource(path.name, lines)


def _stream(fh: t.TextIO, path: pathlib.Path) -> t.Iterator[str]:
    try:
        yield from fh
    except (OSError, UnicodeDecodeError) as exc:
        raise SourceUnreadable(path.name, f"Could not read {path}: {exc}") from exc


@contextmanager
def open_script(
    path: pathlib.Path | str,
    encoding: str = DEFAULT_ENCODING,
) -> t.Iterator[ScriptSource]:
    """
    Context-manager yielding a :class:`ScriptSource` that reads *path* line by
    line.  The file is closed on every exit path, including an aborted run.
    """
    path = pathlib.Path(path)
    _check_path(path)
    try:
        fh = path.open("r", encoding=encoding, newline="")
    except OSError as exc:
        raise SourceUnreadable(path.name, f"Could not open {path}: {exc}") from exc

    with fh:
        yield ScriptSource(path.name, _stream(fh, path))
