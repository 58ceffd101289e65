"""Shared fixtures for CLI tests."""

from __future__ import annotations

import logging
import sqlite3
from collections.abc import Callable
from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def _restore_logging(monkeypatch):
    """Undo the root logger changes made by the CLI callback."""
    for key in ("GPKG_CHECK_STRUCTURED_LOGGING", "GPKG_CHECK_STRICT_CONTENTS_REFERENCES", "GPKG_CHECK_DEBUG"):
        monkeypatch.delenv(key, raising=False)
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def gpkg_file(tmp_path: Path) -> Callable[..., Path]:
    """Build a GeoPackage with one feature table declared with *column_type*."""

    def _make(column_type: str = "TEXT", *, contents: tuple[str, ...] = ("places",)) -> Path:
        path = tmp_path / "sample.gpkg"
        conn = sqlite3.connect(path)
        try:
            conn.execute("CREATE TABLE gpkg_contents (table_name TEXT NOT NULL PRIMARY KEY, data_type TEXT NOT NULL)")
            conn.execute(f"CREATE TABLE places (fid INTEGER PRIMARY KEY, geom POINT, name {column_type})")
            conn.executemany(
                "INSERT INTO gpkg_contents (table_name, data_type) VALUES (?, 'features')",
                [(name,) for name in contents],
            )
            conn.commit()
        finally:
            conn.close()
        return path

    return _make
