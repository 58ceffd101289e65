"""Built-in check that every column of a contents table uses a GeoPackage data type.

OGC 12-128r12 Requirement 5: the columns of tables in a GeoPackage SHALL
only be declared using one of the data types in the "GeoPackage Data Types"
table.  Only tables listed in ``gpkg_contents`` are inspected.
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
from conformance_engine.checks.type_classifier import is_allowed_type
from conformance_engine.store import list_contents, table_columns, table_or_view_exists

logger = logging.getLogger(__name__)

# Target reported for catalog rows whose table_name is NULL.
NULL_TABLE_TARGET = "<NULL>"


class ColumnDataTypesCheck(BaseCheck):
    """Columns of contents tables are declared with GeoPackage data types."""

    @property
    def check_type(self) -> CheckType:
        return CheckType.COLUMN_DATA_TYPES

    @property
    def requirement(self) -> str:
        return "Requirement 5"

    def execute(self, context: CheckContext) -> list[CheckResult]:
        """Classify every declared column type of every contents table.

        All violations are reported, one FAIL result per offending column.
        Entries naming a table or view that does not exist, or holding a
        NULL name, are skipped unless ``context.strict_contents_references``
        is set.
        """
        timer = Timer()
        timer.start()

        results: list[CheckResult] = []
        columns_checked = 0

        for entry in list_contents(context.connection):
            if entry.table_name is None:
                if context.strict_contents_references:
                    results.append(
                        CheckResult(
                            check_type=self.check_type,
                            requirement=self.requirement,
                            target=NULL_TABLE_TARGET,
                            status=CheckStatus.FAIL,
                            severity=CheckSeverity.HIGH,
                            message="gpkg_contents has an entry with a NULL table_name.",
                        )
                    )
                else:
                    logger.debug("Skipping gpkg_contents entry with a NULL table_name")
                continue

            if not table_or_view_exists(context.connection, entry.table_name):
                if context.strict_contents_references:
                    results.append(
                        CheckResult(
                            check_type=self.check_type,
                            requirement=self.requirement,
                            target=entry.table_name,
                            status=CheckStatus.FAIL,
                            severity=CheckSeverity.HIGH,
                            message=f"gpkg_contents references missing table or view '{entry.table_name}'.",
                        )
                    )
                else:
                    logger.debug("Skipping %s: listed in gpkg_contents but not in the schema", entry.table_name)
                continue

            for column in table_columns(context.connection, entry.table_name):
                columns_checked += 1
                if is_allowed_type(column.declared_type):
                    continue
                results.append(
                    CheckResult(
                        check_type=self.check_type,
                        requirement=self.requirement,
                        target=entry.table_name,
                        status=CheckStatus.FAIL,
                        severity=CheckSeverity.HIGH,
                        message=(
                            f"Invalid data type '{column.declared_type}' "
                            f"for column '{column.name}' in table '{entry.table_name}'."
                        ),
                        detail=f"{column.name}: {column.declared_type}",
                    )
                )

        elapsed = timer.elapsed_ms()
        if not results:
            return [
                CheckResult(
                    check_type=self.check_type,
                    requirement=self.requirement,
                    status=CheckStatus.PASS,
                    severity=CheckSeverity.LOW,
                    message=f"All declared column types are valid ({columns_checked} columns).",
                    duration_ms=elapsed,
                )
            ]

        for result in results:
            result.duration_ms = elapsed
        return results
