from __future__ import annotations

import contextlib

import mysql.connector
import pytest
from click.testing import CliRunner

from sqlimport import __version__, cli

SCRIPT = (
    "-- seed data\n"
    "INSERT INTO t VALUES (1);\n"
    "INSERT INTO missing VALUES (2);\n"
    "INSERT INTO t VALUES (3);\n"
)

CONFIG = """\
default_env: dev
environments:
  dev:
    host: localhost
    database: shop
    user: app
    password: pw
"""


class FakeCursor:
    with_rows = False

    def __init__(self, executed):
        self.executed = executed

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def execute(self, sql):
        self.executed.append(sql)
        if "missing" in sql:
            raise mysql.connector.Error(msg="Table 'shop.missing' doesn't exist", errno=1146)


class FakeConnection:
    def __init__(self):
        self.executed: list[str] = []

    def cursor(self, **_kw):
        return FakeCursor(self.executed)

    def get_server_info(self):
        return "10.11.6-MariaDB"


@pytest.fixture
def fake_db(monkeypatch):
    conn = FakeConnection()

    @contextlib.contextmanager
    def fake_connection(env):
        yield conn

    monkeypatch.setattr(cli, "connection", fake_connection)
    return conn


@pytest.fixture
def files(tmp_path):
    script = tmp_path / "seed.sql"
    script.write_text(SCRIPT, encoding="utf-8")
    config = tmp_path / "sqlimport.config.yml"
    config.write_text(CONFIG, encoding="utf-8")
    return script, config


def test_version():
    result = CliRunner().invoke(cli.main, ["version"])
    assert result.exit_code == 0
    assert result.output.strip() == __version__


def test_run_aborts_on_first_error(files, fake_db):
    script, config = files
    result = CliRunner().invoke(cli.main, ["-c", str(config), "run", str(script)])
    assert result.exit_code == 1
    assert "Line 2: INSERT INTO t VALUES (1) (OK)" in result.output
    assert "Import failed: Error in seed.sql on line 3:" in result.output
    assert len(fake_db.executed) == 2


def test_run_continue_on_error(files, fake_db):
    script, config = files
    result = CliRunner().invoke(
        cli.main, ["-c", str(config), "run", str(script), "--continue-on-error"]
    )
    assert result.exit_code == 0, result.output
    assert "Line 3: INSERT INTO missing VALUES (2) (FAIL)" in result.output
    assert "3 statement(s) from seed.sql" in result.output
    assert "'shop' on 'app@localhost'" in result.output
    assert len(fake_db.executed) == 3


def test_run_quiet(files, fake_db):
    script, config = files
    result = CliRunner().invoke(
        cli.main, ["-c", str(config), "run", str(script), "-q", "--continue-on-error"]
    )
    assert result.exit_code == 0
    assert "Line " not in result.output


def test_dry_run_needs_no_config(files, monkeypatch):
    script, _ = files

    def no_db(env):
        raise AssertionError("dry run must not connect")

    monkeypatch.setattr(cli, "connection", no_db)
    result = CliRunner().invoke(cli.main, ["run", str(script), "--dry-run"])
    assert result.exit_code == 0, result.output
    assert "Line 3: INSERT INTO missing VALUES (2) (OK)" in result.output
    assert "3 statement(s)" in result.output


def test_run_missing_config(files, tmp_path):
    script, _ = files
    result = CliRunner().invoke(
        cli.main, ["-c", str(tmp_path / "nope.yml"), "run", str(script)]
    )
    assert result.exit_code == 1
    assert "Config error" in result.output


def test_run_missing_script(files, fake_db, tmp_path):
    _, config = files
    result = CliRunner().invoke(
        cli.main, ["-c", str(config), "run", str(tmp_path / "absent.sql")]
    )
    assert result.exit_code == 1
    assert "File does not exist" in result.output


def test_split_lists_statements_and_warns(tmp_path):
    script = tmp_path / "s.sql"
    script.write_text("/* header */\nSELECT 1;\n\nSELECT\n  2;\nSELECT 3\n", encoding="utf-8")
    result = CliRunner().invoke(cli.main, ["split", str(script)])
    assert result.exit_code == 0
    assert "-- line 2\nSELECT 1;\n" in result.output
    assert "-- line 4\nSELECT\n2;\n" in result.output
    assert "unterminated statement starting on line 6" in result.output


def test_split_pretty(tmp_path):
    script = tmp_path / "s.sql"
    script.write_text("select a, b from t where a = 1;\n", encoding="utf-8")
    result = CliRunner().invoke(cli.main, ["split", "--pretty", str(script)])
    assert result.exit_code == 0
    assert "SELECT a," in result.output
    assert "FROM t" in result.output
