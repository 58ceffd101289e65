"""Unit tests for the conformance check engine.

Tests the framework: models, registry, engine orchestrator, and the
default engine run against real GeoPackage files.
"""

from __future__ import annotations

import sqlite3

import pytest

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
from conformance_engine.errors import StoreQueryError

# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


class _PassingCheck(BaseCheck):
    """A check that always passes."""

    @property
    def check_type(self) -> CheckType:
        return CheckType.SQL_ACCESS

    @property
    def requirement(self) -> str:
        return "Requirement 8"

    def execute(self, context: CheckContext) -> list[CheckResult]:
        return [CheckResult(check_type=self.check_type, requirement=self.requirement, status=CheckStatus.PASS)]


class _FailingCheck(BaseCheck):
    """A check that always fails."""

    @property
    def check_type(self) -> CheckType:
        return CheckType.INTEGRITY_CHECK

    @property
    def requirement(self) -> str:
        return "Requirement 6"

    def execute(self, context: CheckContext) -> list[CheckResult]:
        return [
            CheckResult(
                check_type=self.check_type,
                requirement=self.requirement,
                status=CheckStatus.FAIL,
                severity=CheckSeverity.CRITICAL,
                message="corrupt",
            )
        ]


class _QueryErrorCheck(BaseCheck):
    """A check whose query cannot run."""

    @property
    def check_type(self) -> CheckType:
        return CheckType.FOREIGN_KEY_CHECK

    @property
    def requirement(self) -> str:
        return "Requirement 7"

    def execute(self, context: CheckContext) -> list[CheckResult]:
        raise StoreQueryError("PRAGMA foreign_key_check", "database is locked")


@pytest.fixture
def memory_context():
    conn = sqlite3.connect(":memory:")
    yield CheckContext(connection=conn)
    conn.close()


# ---------------------------------------------------------------------------
# CheckSummary tests
# ---------------------------------------------------------------------------


class TestCheckSummary:
    def test_empty_results(self):
        summary = CheckSummary.from_results([])
        assert summary.total == 0
        assert summary.conformant

    def test_mixed_results(self):
        results = [
            CheckResult(check_type=CheckType.SQL_ACCESS, status=CheckStatus.PASS),
            CheckResult(
                check_type=CheckType.INTEGRITY_CHECK,
                status=CheckStatus.FAIL,
                severity=CheckSeverity.CRITICAL,
            ),
            CheckResult(check_type=CheckType.FOREIGN_KEY_CHECK, status=CheckStatus.ERROR),
        ]
        summary = CheckSummary.from_results(results)
        assert summary.total == 3
        assert summary.passed == 1
        assert summary.failed == 1
        assert summary.errored == 1
        assert not summary.conformant

    def test_low_severity_failure_is_not_conformant(self):
        results = [
            CheckResult(check_type=CheckType.SQLITE_OPTIONS, status=CheckStatus.FAIL, severity=CheckSeverity.LOW),
        ]
        summary = CheckSummary.from_results(results)
        assert summary.failed == 1
        assert not summary.conformant

    def test_error_alone_is_not_conformant(self):
        summary = CheckSummary.from_results(
            [CheckResult(check_type=CheckType.SQL_ACCESS, status=CheckStatus.ERROR)]
        )
        assert not summary.conformant

    def test_counts_cover_every_status(self):
        assert {s.value for s in CheckStatus} == {"PASS", "FAIL", "ERROR"}
        payload = CheckSummary.from_results([]).model_dump()
        assert set(payload) == {"total", "passed", "failed", "errored", "results", "duration_ms"}

    def test_deterministic_ordering(self):
        results = [
            CheckResult(check_type=CheckType.SQLITE_OPTIONS, status=CheckStatus.PASS),
            CheckResult(check_type=CheckType.COLUMN_DATA_TYPES, target="z", status=CheckStatus.FAIL),
            CheckResult(check_type=CheckType.COLUMN_DATA_TYPES, target="a", status=CheckStatus.FAIL),
        ]
        summary = CheckSummary.from_results(results)
        assert [(r.check_type, r.target) for r in summary.results] == [
            (CheckType.COLUMN_DATA_TYPES, "a"),
            (CheckType.COLUMN_DATA_TYPES, "z"),
            (CheckType.SQLITE_OPTIONS, "database"),
        ]


# ---------------------------------------------------------------------------
# CheckRegistry tests
# ---------------------------------------------------------------------------


class TestCheckRegistry:
    def test_register_and_get(self):
        registry = CheckRegistry()
        check = _PassingCheck()
        registry.register(check)
        assert registry.get(CheckType.SQL_ACCESS) is check
        assert CheckType.SQL_ACCESS in registry
        assert len(registry) == 1

    def test_duplicate_registration_raises(self):
        registry = CheckRegistry()
        registry.register(_PassingCheck())
        with pytest.raises(ValueError, match="already registered"):
            registry.register(_PassingCheck())

    def test_unregister(self):
        registry = CheckRegistry()
        registry.register(_PassingCheck())
        registry.unregister(CheckType.SQL_ACCESS)
        assert registry.get(CheckType.SQL_ACCESS) is None

    def test_unregister_unknown_raises(self):
        with pytest.raises(KeyError):
            CheckRegistry().unregister(CheckType.SQL_ACCESS)

    def test_registration_order_preserved(self):
        registry = CheckRegistry()
        registry.register(_PassingCheck())
        registry.register(_FailingCheck())
        assert registry.get_types() == [CheckType.SQL_ACCESS, CheckType.INTEGRITY_CHECK]


# ---------------------------------------------------------------------------
# CheckEngine tests
# ---------------------------------------------------------------------------


class TestCheckEngine:
    def test_no_checks(self, memory_context):
        summary = CheckEngine().run(memory_context)
        assert summary.total == 0

    def test_failure_does_not_stop_other_checks(self, memory_context):
        engine = CheckEngine()
        engine.register(_FailingCheck())
        engine.register(_PassingCheck())
        summary = engine.run(memory_context)
        assert summary.passed == 1
        assert summary.failed == 1

    def test_query_error_recorded_as_error(self, memory_context):
        engine = CheckEngine()
        engine.register(_QueryErrorCheck())
        engine.register(_PassingCheck())
        summary = engine.run(memory_context)
        assert summary.errored == 1
        assert summary.passed == 1
        error = next(r for r in summary.results if r.status == CheckStatus.ERROR)
        assert error.check_type == CheckType.FOREIGN_KEY_CHECK
        assert "database is locked" in error.message
        assert error.detail == "PRAGMA foreign_key_check"

    def test_fail_fast_reraises(self, memory_context):
        engine = CheckEngine()
        engine.register(_QueryErrorCheck())
        with pytest.raises(StoreQueryError):
            engine.run(memory_context, fail_fast=True)

    def test_unexpected_exceptions_propagate(self, memory_context):
        class _Broken(_PassingCheck):
            def execute(self, context: CheckContext) -> list[CheckResult]:
                raise RuntimeError("bug")

        engine = CheckEngine()
        engine.register(_Broken())
        with pytest.raises(RuntimeError):
            engine.run(memory_context)

    def test_filter_by_check_type(self):
        engine = CheckEngine()
        engine.register(_FailingCheck())
        engine.register(_PassingCheck())
        conn = sqlite3.connect(":memory:")
        try:
            summary = engine.run(CheckContext(connection=conn, check_types=[CheckType.SQL_ACCESS]))
        finally:
            conn.close()
        assert summary.total == 1
        assert summary.results[0].check_type == CheckType.SQL_ACCESS


class TestDefaultEngine:
    def test_registers_five_rules_in_requirement_order(self):
        engine = create_default_engine()
        assert [c.requirement for c in engine.registry.get_all()] == [
            "Requirement 5",
            "Requirement 6",
            "Requirement 7",
            "Requirement 8",
            "Requirement 9",
        ]

    def test_descriptions_present(self):
        for check in create_default_engine().registry.get_all():
            assert check.description

    def test_conformant_file(self, make_geopackage, open_connection):
        conn = open_connection(
            make_geopackage({"points": [("fid", "INTEGER PRIMARY KEY"), ("geom", "POINT"), ("name", "TEXT")]})
        )
        summary = create_default_engine().run(
            CheckContext(
                connection=conn,
                check_types=[
                    CheckType.COLUMN_DATA_TYPES,
                    CheckType.INTEGRITY_CHECK,
                    CheckType.FOREIGN_KEY_CHECK,
                    CheckType.SQL_ACCESS,
                ],
            )
        )
        assert summary.total == 4
        assert summary.conformant

    def test_non_conformant_file(self, make_geopackage, open_connection):
        conn = open_connection(make_geopackage({"points": [("fid", "INTEGER"), ("label", "VARCHAR(20)")]}))
        summary = create_default_engine().run(CheckContext(connection=conn))
        assert not summary.conformant
        failures = [r for r in summary.results if r.status == CheckStatus.FAIL]
        assert any("VARCHAR(20)" in r.message and "points" in r.message for r in failures)

    def test_missing_catalog_errors_only_column_rule(self, tmp_path, open_connection):
        path = tmp_path / "bare.sqlite"
        sqlite3.connect(path).close()
        conn = open_connection(path)
        summary = create_default_engine().run(
            CheckContext(
                connection=conn,
                check_types=[CheckType.COLUMN_DATA_TYPES, CheckType.INTEGRITY_CHECK],
            )
        )
        statuses = {r.check_type: r.status for r in summary.results}
        assert statuses[CheckType.COLUMN_DATA_TYPES] == CheckStatus.ERROR
        assert statuses[CheckType.INTEGRITY_CHECK] == CheckStatus.PASS
