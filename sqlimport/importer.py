"""
Run every statement of a SQL script through an executor.

The importer owns nothing but the scan state of the current run.  Talking
to a database is the job of the injected executor; reporting progress is
the job of the optional observer.
"""
from __future__ import annotations
import pathlib
import typing as t

from sqlimport.constants import DEFAULT_ENCODING
from sqlimport.errors import (
    InvalidCallback,
    ObserverFailure,
    StatementExecutionFailed,
)
from sqlimport.scanner import ScanState, iter_statements
from sqlimport.source import ScriptSource, open_script, read_script


class ExecutionResult(t.NamedTuple):
    success: bool
    error: str | None = None


class StatementExecutor(t.Protocol):
    def execute(self, statement: str) -> ExecutionResult:
        """Run *statement*; report failure in the result instead of raising."""


Observer = t.Callable[[int, str, bool], None]


def _check_observer(observer: t.Any, source: str) -> None:
    if observer is not None and not callable(observer):
        raise InvalidCallback(source, f"Invalid callback function: {observer!r}")


def import_script(
    source: ScriptSource,
    executor: StatementExecutor,
    observer: Observer | None = None,
    abort_on_error: bool = True,
) -> int:
    """
    Execute the statements of *source* in file order and return how many
    were attempted.

    With *abort_on_error* the first failing statement raises
    :class:`StatementExecutionFailed`; otherwise failures are only counted
    and passed to *observer*.  An unterminated trailing fragment is
    discarded, not executed.
    """
    _check_observer(observer, source.name)

    state = ScanState()
    for stmt in iter_statements(source, state):
        result = executor.execute(stmt.text)
        state.statements_executed += 1

        if observer is not None:
            try:
                observer(stmt.line, stmt.text, result.success)
            except Exception as exc:
                raise ObserverFailure(
                    source.name, f"Callback raised {exc!r}", stmt.line
                ) from exc

        if not result.success and abort_on_error:
            raise StatementExecutionFailed(
                source.name,
                result.error or "unknown error",
                stmt.line,
                statement=stmt.text,
            )

    return state.statements_executed


def import_lines(
    lines: t.Iterable[str],
    executor: StatementExecutor,
    observer: Observer | None = None,
    abort_on_error: bool = True,
    *,
    source: str = "<script>",
) -> int:
    return import_script(ScriptSource(source, lines), executor, observer, abort_on_error)


def import_sql_file(
    path: pathlib.Path | str,
    executor: StatementExecutor,
    observer: Observer | None = None,
    abort_on_error: bool = True,
    *,
    encoding: str = DEFAULT_ENCODING,
    stream: bool = True,
) -> int:
    """
    Import the script at *path*.  By default the file is streamed line by
    line; ``stream=False`` reads it into memory first.
    """
    path = pathlib.Path(path)
    _check_observer(observer, path.name)

    if not stream:
        return import_script(read_script(path, encoding), executor, observer, abort_on_error)

    with open_script(path, encoding) as source:
        return import_script(source, executor, observer, abort_on_error)
