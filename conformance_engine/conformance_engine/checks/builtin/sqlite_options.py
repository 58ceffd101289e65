"""Built-in check on the SQLite library's compile-time options.

OGC 12-128r12 Requirement 9: every GeoPackage SQLite configuration SHALL
have the default SQLite features, i.e. none of the ``SQLITE_OMIT_*``
options may have been used when building the library.
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
from conformance_engine.store import fetch_scalar

OMIT_OPTIONS_QUERY = "SELECT sqlite_compileoption_used('SQLITE_OMIT_*')"


class SqliteOptionsCheck(BaseCheck):
    """No SQLITE_OMIT_* compile option was used."""

    @property
    def check_type(self) -> CheckType:
        return CheckType.SQLITE_OPTIONS

    @property
    def requirement(self) -> str:
        return "Requirement 9"

    def execute(self, context: CheckContext) -> list[CheckResult]:
        timer = Timer()
        timer.start()

        omitted = int(fetch_scalar(context.connection, OMIT_OPTIONS_QUERY) or 0)
        elapsed = timer.elapsed_ms()

        if omitted == 0:
            return [
                CheckResult(
                    check_type=self.check_type,
                    requirement=self.requirement,
                    status=CheckStatus.PASS,
                    severity=CheckSeverity.LOW,
                    message="No SQLITE_OMIT_* compile options were used.",
                    duration_ms=elapsed,
                )
            ]

        return [
            CheckResult(
                check_type=self.check_type,
                requirement=self.requirement,
                status=CheckStatus.FAIL,
                severity=CheckSeverity.HIGH,
                message=f"SQLite was built with {omitted} SQLITE_OMIT_* option(s); required features are missing.",
                detail=OMIT_OPTIONS_QUERY,
                duration_ms=elapsed,
            )
        ]
