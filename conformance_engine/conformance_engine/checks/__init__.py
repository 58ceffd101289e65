"""GeoPackage conformance check engine.

Provides a single interface for running the OGC 12-128r12 file-level
rules: column data types, integrity check, foreign key check, SQL access,
and SQLite compile options.

Quick start::

    from conformance_engine.checks import create_default_engine, CheckContext
    from conformance_engine.store import open_store

    engine = create_default_engine()
    with open_store("example.gpkg") as conn:
        summary = engine.run(CheckContext(connection=conn))
    print(summary.total, summary.passed, summary.failed)
"""

from conformance_engine.checks.base import BaseCheck
from conformance_engine.checks.engine import CheckEngine, create_default_engine
from conformance_engine.checks.models import (
    CheckContext,
    CheckResult,
    CheckSeverity,
    CheckStatus,
    CheckSummary,
    CheckType,
)
from conformance_engine.checks.registry import CheckRegistry
from conformance_engine.checks.type_classifier import is_allowed_type

__all__ = [
    "BaseCheck",
    "CheckContext",
    "CheckEngine",
    "CheckRegistry",
    "CheckResult",
    "CheckSeverity",
    "CheckStatus",
    "CheckSummary",
    "CheckType",
    "create_default_engine",
    "is_allowed_type",
]
