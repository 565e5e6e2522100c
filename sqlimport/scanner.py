"""
Line-oriented splitting of SQL scripts into statements.

The scanner is deliberately *not* SQL aware: comment markers and the
terminator are found with plain substring search, so a ``;``, ``#``,
``-- `` or ``/*`` inside a quoted literal is treated like any other.
"""
from __future__ import annotations
import io
import typing as t

from sqlimport.constants import (
    BLOCK_CLOSE,
    BLOCK_OPEN,
    LINE_COMMENT_MARKERS,
    TERMINATOR,
)

_ALL_MARKERS = (BLOCK_OPEN, *LINE_COMMENT_MARKERS)


class Statement(t.NamedTuple):
    line: int
    text: str


class ScanState:
    """
    Mutable state of one scan.  Never shared between runs: every import
    creates its own instance.
    """

    def __init__(self) -> None:
        self.in_block_comment: bool = False
        self.pending: list[str] = []
        self.start_line: int | None = None
        self.statements_executed: int = 0

    def append(self, fragment: str, line: int) -> None:
        fragment = fragment.strip()
        if not fragment:
            return
        if not self.pending:
            self.start_line = line
        self.pending.append(fragment)

    def take(self) -> Statement | None:
        """Return the buffered statement (if any) and clear the buffer."""
        text = "\n".join(self.pending).strip()
        line = self.start_line
        self.pending = []
        self.start_line = None
        if not text or line is None:
            return None
        return Statement(line, text)


def _earliest_marker(text: str) -> tuple[str | None, int]:
    found: tuple[str | None, int] = (None, -1)
    for marker in _ALL_MARKERS:
        pos = text.find(marker)
        if pos != -1 and (found[0] is None or pos < found[1]):
            found = (marker, pos)
    return found


def strip_comments(line: str, in_block_comment: bool) -> tuple[str, bool]:
    """
    Remove comments from one physical *line*.

    Returns the remaining content and whether a ``/*`` comment is still
    open at the end of the line.  Inside a block comment everything up to
    ``*/`` is dropped and the rest of the line is scanned again; outside,
    whichever of ``/*``, ``-- `` and ``#`` occurs first wins.  A closed block
    comment leaves a single space behind, so the text on either side of it
    is not glued together.
    """
    content: list[str] = []
    rest = line
    while rest:
        if in_block_comment:
            end = rest.find(BLOCK_CLOSE)
            if end == -1:
                break
            content.append(" ")
            rest = rest[end + len(BLOCK_CLOSE):]
            in_block_comment = False
            continue

        marker, pos = _earliest_marker(rest)
        if marker is None:
            content.append(rest)
            break
        content.append(rest[:pos])
        if marker != BLOCK_OPEN:
            break
        rest = rest[pos + len(BLOCK_OPEN):]
        in_block_comment = True

    return "".join(content), in_block_comment


def iter_statements(
    lines: t.Iterable[str],
    state: ScanState | None = None,
) -> t.Iterator[Statement]:
    """
    Yield every ``;``-terminated statement in *lines* together with the
    1-based line its first character was found on.

    Anything after a terminator on the same physical line is dropped.  A
    trailing fragment without a terminator is never yielded; it is left in
    ``state.pending`` for the caller to inspect.  A terminator with nothing
    before it (a lone ``;``, or ``;;``) completes an empty statement, which
    is skipped rather than yielded.
    """
    if state is None:
        state = ScanState()

    for num, raw in enumerate(lines, start=1):
        content, state.in_block_comment = strip_comments(
            raw.rstrip("\r\n"), state.in_block_comment
        )
        end = content.find(TERMINATOR)
        if end == -1:
            state.append(content, num)
            continue

        state.append(content[:end], num)
        stmt = state.take()
        if stmt is not None:
            yield stmt


def physical_lines(text: str) -> tuple[str, ...]:
    """
    Split *text* the way a file opened with ``newline=""`` is iterated: only
    at ``\n``, ``\r\n`` and ``\r``, line endings kept.
    """
    return tuple(io.StringIO(text, newline=""))


def split_script(text: str) -> list[Statement]:
    return list(iter_statements(physical_lines(text)))
