"""Data models for the GeoPackage conformance checks.

Defines the core enums and Pydantic models used across all checks:
check categories, result statuses, severity levels, and summary aggregations.
"""

from __future__ import annotations

import sqlite3
import time
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class CheckType(str, Enum):
    """Conformance rule a check evaluates."""

    COLUMN_DATA_TYPES = "COLUMN_DATA_TYPES"
    INTEGRITY_CHECK = "INTEGRITY_CHECK"
    FOREIGN_KEY_CHECK = "FOREIGN_KEY_CHECK"
    SQL_ACCESS = "SQL_ACCESS"
    SQLITE_OPTIONS = "SQLITE_OPTIONS"


class CheckStatus(str, Enum):
    """Outcome of a single check execution."""

    PASS = "PASS"
    FAIL = "FAIL"
    ERROR = "ERROR"


class CheckSeverity(str, Enum):
    """How critical a check failure is."""

    CRITICAL = "CRITICAL"
    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"


# Target name used by rules that evaluate the file as a whole.
DATABASE_TARGET = "database"


class CheckResult(BaseModel):
    """The verdict of a single check against a single target."""

    check_type: CheckType = Field(..., description="Rule that produced this result.")
    requirement: str = Field(default="", description="Specification requirement the rule verifies.")
    target: str = Field(
        default=DATABASE_TARGET,
        description="Table the result refers to, or 'database' for file-wide rules.",
    )
    status: CheckStatus = Field(..., description="Outcome of the check execution.")
    severity: CheckSeverity = Field(
        default=CheckSeverity.MEDIUM,
        description="How critical this result is when status is FAIL.",
    )
    message: str = Field(default="", description="Human-readable description of the result.")
    detail: str = Field(default="", description="Additional context (e.g. column name, violation rows).")
    duration_ms: int = Field(default=0, description="Execution time in milliseconds.")


class CheckSummary(BaseModel):
    """Aggregated results across multiple check executions."""

    total: int = Field(default=0, description="Total number of results.")
    passed: int = Field(default=0, description="Number of results that passed.")
    failed: int = Field(default=0, description="Number of results that failed.")
    errored: int = Field(default=0, description="Number of results that encountered errors.")
    results: list[CheckResult] = Field(
        default_factory=list,
        description="All individual check results, sorted deterministically.",
    )
    duration_ms: int = Field(default=0, description="Total execution time in milliseconds.")

    @property
    def conformant(self) -> bool:
        """True when no rule failed and no rule errored."""
        return self.failed == 0 and self.errored == 0

    @staticmethod
    def from_results(results: list[CheckResult], duration_ms: int = 0) -> CheckSummary:
        """Build a summary from a list of check results.

        Results are sorted deterministically by (check_type, target, status).
        """
        sorted_results = sorted(
            results,
            key=lambda r: (r.check_type.value, r.target, r.status.value, r.message),
        )

        passed = sum(1 for r in sorted_results if r.status == CheckStatus.PASS)
        failed = sum(1 for r in sorted_results if r.status == CheckStatus.FAIL)
        errored = sum(1 for r in sorted_results if r.status == CheckStatus.ERROR)

        return CheckSummary(
            total=len(sorted_results),
            passed=passed,
            failed=failed,
            errored=errored,
            results=sorted_results,
            duration_ms=duration_ms,
        )


class CheckContext(BaseModel):
    """Context passed to check implementations during execution.

    Carries the open store connection shared by every check in a session.
    Checks only read through it.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    connection: sqlite3.Connection = Field(..., description="Open connection to the store under test.")
    check_types: list[CheckType] | None = Field(
        default=None,
        description="When set, only run checks of these types. None means run all.",
    )
    strict_contents_references: bool = Field(
        default=False,
        description="Report gpkg_contents entries naming missing tables as failures instead of skipping them.",
    )


class Timer:
    """Simple monotonic timer for measuring check execution duration."""

    def __init__(self) -> None:
        self._start: float = 0.0

    def start(self) -> None:
        self._start = time.monotonic()

    def elapsed_ms(self) -> int:
        return int((time.monotonic() - self._start) * 1000)
