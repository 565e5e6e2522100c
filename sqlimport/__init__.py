"""
sqlimport – split SQL scripts into statements and run them one by one.
"""
from __future__ import annotations

__version__ = "0.1.0"

from sqlimport.errors import (
    InvalidCallback,
    ObserverFailure,
    ScriptImportError,
    SourceUnreadable,
    StatementExecutionFailed,
)
from sqlimport.importer import (
    ExecutionResult,
    StatementExecutor,
    import_lines,
    import_script,
    import_sql_file,
)
from sqlimport.scanner import ScanState, Statement, iter_statements, split_script, strip_comments
from sqlimport.source import ScriptSource, open_script, read_script

__all__ = [
    "__version__",
    "ExecutionResult",
    "InvalidCallback",
    "ObserverFailure",
    "ScanState",
    "ScriptImportError",
    "ScriptSource",
    "SourceUnreadable",
    "Statement",
    "StatementExecutionFailed",
    "StatementExecutor",
    "import_lines",
    "import_script",
    "import_sql_file",
    "iter_statements",
    "open_script",
    "read_script",
    "split_script",
    "strip_comments",
]
