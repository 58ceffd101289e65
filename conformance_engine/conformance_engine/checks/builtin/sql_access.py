"""Built-in check that the store answers SQL queries.

OGC 12-128r12 Requirement 8: a GeoPackage SQLite configuration SHALL
provide SQL access to GeoPackage contents via software APIs.
"""

from __future__ import annotations

from conformance_engine.checks.base import BaseCheck
from conformance_engine.checks.models import (
    CheckContext,
    CheckResult,
    CheckSeverity,
    CheckStatus,
    CheckType,
    Timer,
)
from conformance_engine.store import try_query

SQL_ACCESS_QUERY = "SELECT * FROM sqlite_master"


class SqlAccessCheck(BaseCheck):
    """The sqlite_master catalog can be queried with SQL."""

    @property
    def check_type(self) -> CheckType:
        return CheckType.SQL_ACCESS

    @property
    def requirement(self) -> str:
        return "Requirement 8"

    def execute(self, context: CheckContext) -> list[CheckResult]:
        """Attempt the catalog query; a query error is the failure under test."""
        timer = Timer()
        timer.start()

        outcome = try_query(context.connection, SQL_ACCESS_QUERY)
        elapsed = timer.elapsed_ms()

        if outcome.succeeded:
            return [
                CheckResult(
                    check_type=self.check_type,
                    requirement=self.requirement,
                    status=CheckStatus.PASS,
                    severity=CheckSeverity.LOW,
                    message=f"SQL access available ({outcome.row_count} sqlite_master rows).",
                    duration_ms=elapsed,
                )
            ]

        return [
            CheckResult(
                check_type=self.check_type,
                requirement=self.requirement,
                status=CheckStatus.FAIL,
                severity=CheckSeverity.CRITICAL,
                message="The store does not provide SQL access to its contents.",
                detail=outcome.error or "",
                duration_ms=elapsed,
            )
        ]
