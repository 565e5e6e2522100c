#!/usr/bin/env python3
"""
sqlimport – run SQL script files against MariaDB / MySQL.

• `sqlimport run schema.sql -e dev`          import, abort on the first error
• `sqlimport run seed.sql --continue-on-error`
• `sqlimport split schema.sql`               show statements, no database

Environments live in *sqlimport.config.yml* (or a TOML file given with
``-c``).
"""
from __future__ import annotations

import pathlib
import sys
import time

import click
import mysql.connector
import sqlparse

from sqlimport import __version__
from sqlimport.config import ConfigError, Environment, load
from sqlimport.constants import DEFAULT_ENCODING
from sqlimport.driver import connection, describe
from sqlimport.errors import ScriptImportError
from sqlimport.executor import CursorExecutor, DryRunExecutor
from sqlimport.importer import import_sql_file
from sqlimport.scanner import ScanState, iter_statements
from sqlimport.source import open_script


def _load_env(ctx, _param, value) -> Environment | None:
    if ctx.params.get("dry_run") and value is None:
        return None
    try:
        return load(ctx.obj["config_path"], value)
    except ConfigError as exc:
        click.echo(f"Config error: {exc}", err=True)
        sys.exit(1)


def _display(sql: str, pretty: bool) -> str:
    if not pretty:
        return sql
    return sqlparse.format(sql, reindent=True, keyword_case="upper")


def _echo_observer(pretty: bool):
    def observer(line: int, sql: str, ok: bool) -> None:
        click.echo(f"Line {line}: {_display(sql, pretty)} ({'OK' if ok else 'FAIL'})")

    return observer


@click.group()
@click.option(
    "-c", "--config", "config_path", type=click.Path(), help="env config YAML / TOML"
)
@click.pass_context
def main(ctx, config_path):
    ctx.obj = {"config_path": pathlib.Path(config_path) if config_path else None}


@main.command()
def version():
    click.echo(__version__)


@main.command("run")
@click.argument("script", type=click.Path(dir_okay=False))
@click.option("--dry-run", is_flag=True, is_eager=True, help="print, do not execute")
@click.option("-e", "--env", callback=_load_env, expose_value=True)
@click.option("--continue-on-error", is_flag=True, help="skip failing statements")
@click.option("-q", "--quiet", is_flag=True, help="no per‑statement output")
@click.option("--pretty", is_flag=True, help="reformat echoed statements")
def run_cmd(script, dry_run, env, continue_on_error, quiet, pretty):
    abort_on_error = not continue_on_error and (env.abort_on_error if env else True)
    encoding = env.encoding if env else DEFAULT_ENCODING
    observer = None if quiet else _echo_observer(pretty)

    start = time.perf_counter()
    try:
        if dry_run:
            target = "(DRY) no database"
            count = import_sql_file(
                script, DryRunExecutor(), observer, abort_on_error, encoding=encoding
            )
        else:
            with connection(env) as conn, conn.cursor(buffered=True) as cur:
                target = describe(conn, env)
                count = import_sql_file(
                    script, CursorExecutor(cur), observer, abort_on_error, encoding=encoding
                )
    except ScriptImportError as exc:
        click.echo(f"Import failed: {exc}", err=True)
        sys.exit(1)
    except mysql.connector.Error as exc:
        click.echo(f"Database error: {exc}", err=True)
        sys.exit(1)

    duration = int((time.perf_counter() - start) * 1000)
    click.echo(f"✅  {count} statement(s) from {pathlib.Path(script).name} → {target} in {duration} ms.")


@main.command("split")
@click.argument("script", type=click.Path(dir_okay=False))
@click.option("--pretty", is_flag=True, help="reformat statements")
@click.option("--encoding", default=DEFAULT_ENCODING, show_default=True)
def split_cmd(script, pretty, encoding):
    state = ScanState()
    try:
        with open_script(script, encoding) as source:
            for stmt in iter_statements(source, state):
                click.echo(f"-- line {stmt.line}")
                click.echo(f"{_display(stmt.text, pretty)};")
    except ScriptImportError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)

    if state.pending:
        click.echo(
            f"warning: unterminated statement starting on line {state.start_line} "
            "is ignored",
            err=True,
        )
