"""Read-only access to the SQLite store under test.

Opens GeoPackage files without ever writing to them and exposes the small
set of introspection helpers the checks rely on.  Every query goes through
:func:`query`, which owns the cursor and closes it on all exit paths.

INVARIANT: nothing in this module issues a statement that modifies the store.
"""

from __future__ import annotations

import logging
import sqlite3
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from conformance_engine.errors import StoreOpenError, StoreQueryError

logger = logging.getLogger(__name__)

CONTENTS_TABLE = "gpkg_contents"


@dataclass(frozen=True)
class ContentsEntry:
    """One row of the ``gpkg_contents`` catalog.

    ``table_name`` is ``None`` when the catalog row holds NULL.
    """

    table_name: str | None


@dataclass(frozen=True)
class ColumnDescriptor:
    """A column as recorded in the table's schema definition."""

    name: str
    declared_type: str


@dataclass(frozen=True)
class QueryOutcome:
    """Whether a query could be executed, captured as a value."""

    succeeded: bool
    row_count: int = 0
    error: str | None = None


@contextmanager
def open_store(path: Path | str, *, read_only: bool = True) -> Iterator[sqlite3.Connection]:
    """Open the SQLite file at *path* and close it on exit.

    Parameters
    ----------
    path:
        Path to an existing store file.  The file is never created.
    read_only:
        Open with ``mode=ro`` so the connection cannot write.  When
        ``False`` the file is opened ``mode=rw``; the checks still never
        write.

    Raises
    ------
    StoreOpenError
        If the file does not exist or SQLite refuses to open it.
    """
    path = Path(path)
    if not path.is_file():
        raise StoreOpenError(f"Store file does not exist: {path}")

    mode = "ro" if read_only else "rw"
    uri = f"{path.resolve().as_uri()}?mode={mode}"
    try:
        connection = sqlite3.connect(uri, uri=True)
    except sqlite3.Error as exc:
        raise StoreOpenError(f"Cannot open store {path}: {exc}") from exc

    logger.debug("Opened store %s (mode=%s)", path, mode)
    try:
        yield connection
    finally:
        connection.close()
        logger.debug("Closed store %s", path)


@contextmanager
def query(
    connection: sqlite3.Connection,
    sql: str,
    params: Sequence[Any] = (),
) -> Iterator[sqlite3.Cursor]:
    """Execute *sql* and yield the cursor, closing it on every exit path.

    Raises
    ------
    StoreQueryError
        If SQLite rejects or cannot execute the statement.
    """
    try:
        cursor = connection.cursor()
    except sqlite3.Error as exc:
        raise StoreQueryError(sql, str(exc)) from exc

    try:
        try:
            cursor.execute(sql, params)
        except sqlite3.Error as exc:
            raise StoreQueryError(sql, str(exc)) from exc
        yield cursor
    finally:
        cursor.close()


def fetch_all(connection: sqlite3.Connection, sql: str, params: Sequence[Any] = ()) -> list[tuple[Any, ...]]:
    """Run *sql* and return every row."""
    with query(connection, sql, params) as cursor:
        try:
            return list(cursor.fetchall())
        except sqlite3.Error as exc:
            raise StoreQueryError(sql, str(exc)) from exc


def fetch_scalar(connection: sqlite3.Connection, sql: str, params: Sequence[Any] = ()) -> Any:
    """Run *sql* and return the first column of the first row (``None`` if empty)."""
    rows = fetch_all(connection, sql, params)
    if not rows:
        return None
    return rows[0][0]


def try_query(connection: sqlite3.Connection, sql: str) -> QueryOutcome:
    """Attempt *sql* and report the attempt instead of raising."""
    try:
        rows = fetch_all(connection, sql)
    except StoreQueryError as exc:
        return QueryOutcome(succeeded=False, error=exc.reason)
    return QueryOutcome(succeeded=True, row_count=len(rows))


def list_contents(connection: sqlite3.Connection) -> list[ContentsEntry]:
    """Return every entry of the ``gpkg_contents`` catalog, in catalog order."""
    rows = fetch_all(connection, f"SELECT table_name FROM {CONTENTS_TABLE}")
    return [ContentsEntry(table_name=row[0]) for row in rows]


def table_or_view_exists(connection: sqlite3.Connection, name: str) -> bool:
    """Return True if a table or view called *name* exists (case-insensitive)."""
    count = fetch_scalar(
        connection,
        "SELECT COUNT(*) FROM sqlite_master WHERE type IN ('table', 'view') AND tbl_name = ? COLLATE NOCASE",
        (name,),
    )
    return bool(count)


def table_columns(connection: sqlite3.Connection, table_name: str) -> list[ColumnDescriptor]:
    """Return the columns of *table_name* with their declared types, in column order."""
    rows = fetch_all(connection, "SELECT name, type FROM pragma_table_info(?)", (table_name,))
    return [ColumnDescriptor(name=row[0], declared_type=row[1] or "") for row in rows]
