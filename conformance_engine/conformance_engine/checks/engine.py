"""Check Engine -- orchestrator for the conformance rules.

The :class:`CheckEngine` discovers registered rules, filters by the
requested check types, executes each rule against the shared store
connection, and aggregates results into a :class:`CheckSummary`.
"""

from __future__ import annotations

import logging

from conformance_engine.checks.base import BaseCheck
from conformance_engine.checks.models import (
    CheckContext,
    CheckResult,
    CheckSeverity,
    CheckStatus,
    CheckSummary,
    Timer,
)
from conformance_engine.checks.registry import CheckRegistry
from conformance_engine.errors import StoreQueryError

logger = logging.getLogger(__name__)


class CheckEngine:
    """Runs conformance rules and collects their verdicts.

    Parameters
    ----------
    registry:
        Optional pre-configured registry.  When ``None``, a new
        empty registry is created.
    """

    def __init__(self, registry: CheckRegistry | None = None) -> None:
        self._registry = registry or CheckRegistry()

    @property
    def registry(self) -> CheckRegistry:
        return self._registry

    def register(self, check: BaseCheck) -> None:
        self._registry.register(check)

    def run(self, context: CheckContext, *, fail_fast: bool = False) -> CheckSummary:
        """Execute the rules and return an aggregated summary.

        Rules are independent: a rule that fails or errors does not stop
        the others.  A rule whose query cannot be executed is recorded as an
        ERROR result, never as a pass.

        Parameters
        ----------
        context:
            Execution context holding the store connection and an optional
            check type filter.
        fail_fast:
            Re-raise the first :class:`StoreQueryError` instead of recording
            it as an ERROR result.
        """
        timer = Timer()
        timer.start()

        all_results: list[CheckResult] = []

        checks_to_run = self._registry.get_all()
        if context.check_types is not None:
            requested_types = set(context.check_types)
            checks_to_run = [c for c in checks_to_run if c.check_type in requested_types]

        if not checks_to_run:
            logger.info("No checks to run (none registered or all filtered out).")
            return CheckSummary.from_results([], duration_ms=timer.elapsed_ms())

        for check in checks_to_run:
            logger.debug("Running check: %s", check.check_type.value)
            check_timer = Timer()
            check_timer.start()
            try:
                all_results.extend(check.execute(context))
            except StoreQueryError as exc:
                if fail_fast:
                    raise
                logger.error("Check %s could not query the store: %s", check.check_type.value, exc)
                all_results.append(
                    CheckResult(
                        check_type=check.check_type,
                        requirement=check.requirement,
                        status=CheckStatus.ERROR,
                        severity=CheckSeverity.HIGH,
                        message=f"Query failure in {check.check_type.value}: {exc.reason}",
                        detail=exc.sql,
                        duration_ms=check_timer.elapsed_ms(),
                    )
                )

        return CheckSummary.from_results(all_results, duration_ms=timer.elapsed_ms())


def create_default_engine() -> CheckEngine:
    """Create a :class:`CheckEngine` with the five built-in rules registered.

    Rules are registered in requirement order (5 through 9).
    """
    from conformance_engine.checks.builtin.column_data_types import ColumnDataTypesCheck
    from conformance_engine.checks.builtin.file_integrity import ForeignKeyCheck, IntegrityCheck
    from conformance_engine.checks.builtin.sql_access import SqlAccessCheck
    from conformance_engine.checks.builtin.sqlite_options import SqliteOptionsCheck

    engine = CheckEngine()
    engine.register(ColumnDataTypesCheck())
    engine.register(IntegrityCheck())
    engine.register(ForeignKeyCheck())
    engine.register(SqlAccessCheck())
    engine.register(SqliteOptionsCheck())
    return engine
