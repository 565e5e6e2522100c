"""
Errors raised by an import run.

Every fatal condition surfaces as a :class:`ScriptImportError` subclass that
names the script it happened in and, where one was being assembled, the
line the offending statement started on.
"""
from __future__ import annotations


class ScriptImportError(RuntimeError):
    """Base class for everything that aborts an import run."""

    kind: str = "import-error"

    def __init__(
        self,
        source: str,
        description: str,
        line: int | None = None,
    ) -> None:
        self.source: str = source
        self.description: str = description
        self.line: int | None = line
        super().__init__(self._render())

    def _render(self) -> str:
        if self.line is None:
            return f"{self.source}: {self.description}"
        return f"Error in {self.source} on line {self.line}: {self.description}"


class SourceUnreadable(ScriptImportError):
    """The script file does not exist, is empty, or cannot be read."""

    kind = "source-unreadable"


class StatementExecutionFailed(ScriptImportError):
    """The executor reported a failure and the run aborts on errors."""

    kind = "statement-failed"

    def __init__(
        self,
        source: str,
        description: str,
        line: int | None = None,
        statement: str = "",
    ) -> None:
        self.statement: str = statement
        super().__init__(source, description, line)


class ObserverFailure(ScriptImportError):
    """The per-statement observer raised."""

    kind = "observer-failure"


class InvalidCallback(ScriptImportError):
    """An observer was supplied that cannot be called."""

    kind = "invalid-callback"
