"""Exceptions raised by the conformance engine.

A rule that finds a non-conforming file does not raise: it returns a FAIL
:class:`~conformance_engine.checks.models.CheckResult`.  The exceptions here
describe faults in reaching the store at all.
"""

from __future__ import annotations


class ConformanceError(Exception):
    """Base class for conformance engine errors."""


class StoreOpenError(ConformanceError):
    """The store file does not exist or cannot be opened."""


class StoreQueryError(ConformanceError):
    """A required introspection query could not be executed."""

    def __init__(self, sql: str, reason: str) -> None:
        self.sql = sql
        self.reason = reason
        super().__init__(f"Query failed: {sql!r}: {reason}")
