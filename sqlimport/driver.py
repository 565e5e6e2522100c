from __future__ import annotations
import mysql.connector
from mysql.connector import errorcode
from contextlib import contextmanager

from sqlimport.config import Environment


def _create_database(env: Environment) -> None:
    server_dsn = env.dsn()
    server_dsn.pop("database", None)
    with mysql.connector.connect(**server_dsn, autocommit=True) as server:
        with server.cursor() as cur:
            print(f"[sqlimport] Creating missing database {env.database!r} ...")
            cur.execute(
                f"CREATE DATABASE `{env.database}` "
                "DEFAULT CHARACTER SET utf8mb4 "
                "COLLATE utf8mb4_unicode_ci"
            )


def _open(env: Environment):
    return mysql.connector.connect(**env.dsn(), autocommit=True)


@contextmanager
def connection(env: Environment):
    """
    Yield the connection an import run executes its statements on.

    The session runs in autocommit mode: each statement of a script is
    committed as soon as it succeeds and an aborted import keeps whatever
    already ran.  An unknown database (error 1049) is only created on the
    fly for environments marked ``allow_destructive``; everywhere else the
    error reaches the caller.  The connection is closed however the run
    ends.
    """
    try:
        conn = _open(env)
    except mysql.connector.Error as err:
        unknown_db = err.errno == errorcode.ER_BAD_DB_ERROR
        if not (unknown_db and env.allow_destructive and env.database):
            raise
        _create_database(env)
        conn = _open(env)

    try:
        yield conn
    finally:
        conn.close()


def describe(conn, env: Environment) -> str:
    """Human readable description, e.g. ``'shop' on 'app@db1' (MySQL 10.11.6)``."""
    return (
        f"'{env.database or ''}' on '{env.user}@{env.host}' "
        f"(MySQL {conn.get_server_info()})"
    )
