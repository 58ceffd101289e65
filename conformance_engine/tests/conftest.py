"""Shared fixtures for conformance engine tests.

Builds small GeoPackage-shaped SQLite files in ``tmp_path`` and mock
connections for the cases a real SQLite build cannot produce (a corrupt
integrity report, omitted compile options, a failing catalog query).
"""

from __future__ import annotations

import sqlite3
from collections.abc import Callable, Iterator
from pathlib import Path
from typing import Any
from unittest.mock import MagicMock

import pytest

CONTENTS_DDL = """
CREATE TABLE gpkg_contents (
    table_name TEXT NOT NULL PRIMARY KEY,
    data_type TEXT NOT NULL,
    identifier TEXT UNIQUE,
    description TEXT DEFAULT '',
    last_change DATETIME NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%fZ','now')),
    min_x DOUBLE,
    min_y DOUBLE,
    max_x DOUBLE,
    max_y DOUBLE,
    srs_id INTEGER
)
"""


def build_geopackage(
    path: Path,
    tables: dict[str, list[tuple[str, str]]] | None = None,
    *,
    contents: list[str] | None = None,
    extra_sql: list[str] | None = None,
) -> Path:
    """Create a SQLite file with a ``gpkg_contents`` catalog.

    Parameters
    ----------
    tables:
        Mapping of table name to ``(column, declared type)`` pairs.
    contents:
        Table names to list in ``gpkg_contents``.  Defaults to the keys
        of *tables*.
    extra_sql:
        Statements executed after the tables are created.
    """
    tables = tables or {}
    contents = list(tables) if contents is None else contents

    conn = sqlite3.connect(path)
    try:
        conn.execute(CONTENTS_DDL)
        for name, columns in tables.items():
            cols = ", ".join(f'"{col}" {decl}'.rstrip() for col, decl in columns)
            conn.execute(f'CREATE TABLE "{name}" ({cols})')
        for name in contents:
            conn.execute(
                "INSERT INTO gpkg_contents (table_name, data_type, identifier) VALUES (?, 'features', ?)",
                (name, name),
            )
        for stmt in extra_sql or []:
            conn.execute(stmt)
        conn.commit()
    finally:
        conn.close()
    return path


@pytest.fixture
def make_geopackage(tmp_path: Path) -> Callable[..., Path]:
    """Factory fixture returning the path of a freshly built GeoPackage."""
    counter = iter(range(1000))

    def _make(tables: dict[str, list[tuple[str, str]]] | None = None, **kwargs: Any) -> Path:
        return build_geopackage(tmp_path / f"test_{next(counter)}.gpkg", tables, **kwargs)

    return _make


@pytest.fixture
def open_connection() -> Iterator[Callable[[Path], sqlite3.Connection]]:
    """Open connections to built files and close them after the test."""
    opened: list[sqlite3.Connection] = []

    def _open(path: Path) -> sqlite3.Connection:
        conn = sqlite3.connect(path)
        opened.append(conn)
        return conn

    yield _open
    for conn in opened:
        conn.close()


def mock_connection(
    rows: list[tuple[Any, ...]] | None = None,
    *,
    error: Exception | None = None,
) -> MagicMock:
    """Return a connection whose cursors yield *rows* or raise *error* on execute."""
    connection = MagicMock(spec=sqlite3.Connection)
    cursor = MagicMock(spec=sqlite3.Cursor)
    if error is not None:
        cursor.execute.side_effect = error
    cursor.fetchall.return_value = list(rows or [])
    connection.cursor.return_value = cursor
    return connection


@pytest.fixture
def fake_connection() -> Callable[..., MagicMock]:
    """Factory fixture exposing :func:`mock_connection` to test modules."""
    return mock_connection
