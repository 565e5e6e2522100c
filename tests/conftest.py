import sys
from pathlib import Path

import pytest

# Ensure the project root is importable when running tests from within tests/.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from sqlimport.importer import ExecutionResult  # noqa: E402


class RecordingExecutor:
    """Executor double: succeeds unless the statement contains a failing marker."""

    def __init__(self, fail_on: tuple[str, ...] = ()) -> None:
        self.fail_on = fail_on
        self.calls: list[str] = []

    def execute(self, statement: str) -> ExecutionResult:
        self.calls.append(statement)
        for marker in self.fail_on:
            if marker in statement:
                return ExecutionResult(False, f"Table '{marker}' doesn't exist")
        return ExecutionResult(True)


@pytest.fixture
def executor():
    return RecordingExecutor()


@pytest.fixture
def failing_executor():
    return RecordingExecutor(fail_on=("missing",))


@pytest.fixture
def write_script(tmp_path):
    def _write(text: str, name: str = "script.sql") -> Path:
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def make_executor():
    return RecordingExecutor
