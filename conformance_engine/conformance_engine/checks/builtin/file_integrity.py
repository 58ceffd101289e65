"""Built-in checks for file integrity (OGC 12-128r12 Requirements 6 and 7).

Both rules delegate to SQLite's own verification pragmas and evaluate the
whole database file at once.
"""

from __future__ import annotations

import logging

from conformance_engine.checks.base import BaseCheck
from conformance_engine.checks.models import (
    CheckContext,
    CheckResult,
    CheckSeverity,
    CheckStatus,
    CheckType,
    Timer,
)
from conformance_engine.store import fetch_all

logger = logging.getLogger(__name__)

INTEGRITY_OK = "ok"


class IntegrityCheck(BaseCheck):
    """PRAGMA integrity_check returns "ok"."""

    @property
    def check_type(self) -> CheckType:
        return CheckType.INTEGRITY_CHECK

    @property
    def requirement(self) -> str:
        return "Requirement 6"

    def execute(self, context: CheckContext) -> list[CheckResult]:
        timer = Timer()
        timer.start()

        rows = fetch_all(context.connection, "PRAGMA integrity_check")
        values = [str(row[0]) for row in rows]
        elapsed = timer.elapsed_ms()

        if len(values) == 1 and values[0].lower() == INTEGRITY_OK:
            return [
                CheckResult(
                    check_type=self.check_type,
                    requirement=self.requirement,
                    status=CheckStatus.PASS,
                    severity=CheckSeverity.LOW,
                    message="PRAGMA integrity_check returned 'ok'.",
                    duration_ms=elapsed,
                )
            ]

        reported = "; ".join(values) if values else "<no rows>"
        return [
            CheckResult(
                check_type=self.check_type,
                requirement=self.requirement,
                status=CheckStatus.FAIL,
                severity=CheckSeverity.CRITICAL,
                message=f"PRAGMA integrity_check did not return 'ok': {reported}",
                detail="\n".join(values),
                duration_ms=elapsed,
            )
        ]


class ForeignKeyCheck(BaseCheck):
    """PRAGMA foreign_key_check returns no violations."""

    @property
    def check_type(self) -> CheckType:
        return CheckType.FOREIGN_KEY_CHECK

    @property
    def requirement(self) -> str:
        return "Requirement 7"

    def execute(self, context: CheckContext) -> list[CheckResult]:
        timer = Timer()
        timer.start()

        # No table argument: the whole database is checked.
        rows = fetch_all(context.connection, "PRAGMA foreign_key_check")
        elapsed = timer.elapsed_ms()

        if not rows:
            return [
                CheckResult(
                    check_type=self.check_type,
                    requirement=self.requirement,
                    status=CheckStatus.PASS,
                    severity=CheckSeverity.LOW,
                    message="PRAGMA foreign_key_check found no violations.",
                    duration_ms=elapsed,
                )
            ]

        # Each row is (table, rowid, parent, fkid).
        lines = [
            f"table={row[0]} rowid={row[1]} parent={row[2]} fkid={row[3]}"
            for row in rows
        ]
        logger.debug("Foreign key violations: %d", len(rows))
        return [
            CheckResult(
                check_type=self.check_type,
                requirement=self.requirement,
                status=CheckStatus.FAIL,
                severity=CheckSeverity.HIGH,
                message=f"PRAGMA foreign_key_check found {len(rows)} invalid foreign key value(s).",
                detail="\n".join(lines),
                duration_ms=elapsed,
            )
        ]
