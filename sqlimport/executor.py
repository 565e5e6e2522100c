"""
Statement executors handed to the importer.
"""
from __future__ import annotations
import mysql.connector

from sqlimport.importer import ExecutionResult


class CursorExecutor:
    """
    Run statements on a ``mysql.connector`` cursor, one at a time.

    Database errors are reported through the returned
    :class:`ExecutionResult`, never raised, so the importer can decide
    whether to continue.  Any rows a statement produces are consumed and
    thrown away.
    """

    def __init__(self, cursor) -> None:
        self.cursor = cursor
        self.last_error: str | None = None

    def execute(self, statement: str) -> ExecutionResult:
        try:
            self.cursor.execute(statement)
            if self.cursor.with_rows:
                self.cursor.fetchall()
        except mysql.connector.Error as err:
            self.last_error = str(err)
            return ExecutionResult(False, self.last_error)

        self.last_error = None
        return ExecutionResult(True)


class DryRunExecutor:
    """Record statements instead of running them."""

    def __init__(self) -> None:
        self.statements: list[str] = []

    def execute(self, statement: str) -> ExecutionResult:
        self.statements.append(statement)
        return ExecutionResult(True)
