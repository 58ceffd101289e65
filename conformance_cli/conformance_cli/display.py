"""Rich output formatting for the gpkg-check CLI.

All functions write to a :class:`rich.console.Console` instance (typically
bound to *stderr*) so that machine-readable output on *stdout* is never
polluted with human-readable decoration.
"""

from __future__ import annotations

from collections.abc import Sequence

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from conformance_engine.checks.base import BaseCheck
from conformance_engine.checks.models import CheckStatus, CheckSummary

_STATUS_COLOURS: dict[CheckStatus, str] = {
    CheckStatus.PASS: "green",
    CheckStatus.FAIL: "red",
    CheckStatus.ERROR: "bold red",
}


def _coloured_status(status: CheckStatus) -> str:
    colour = _STATUS_COLOURS.get(status, "white")
    return f"[{colour}]{status.value}[/{colour}]"


def display_check_summary(console: Console, summary: CheckSummary, store_path: str) -> None:
    """Render a :class:`CheckSummary` as a table followed by a summary line."""
    header = "[green]CONFORMANT[/green]" if summary.conformant else "[red]NOT CONFORMANT[/red]"
    console.print(f"\nGeoPackage check {escape(store_path)}: {header}  ({summary.duration_ms}ms)\n", soft_wrap=True)

    if not summary.results:
        console.print("  [dim]No checks were run.[/dim]\n")
        return

    table = Table(show_header=True, header_style="bold")
    table.add_column("Requirement", no_wrap=True)
    table.add_column("Check", no_wrap=True)
    table.add_column("Target")
    table.add_column("Status", no_wrap=True)
    table.add_column("Message")

    for result in summary.results:
        table.add_row(
            result.requirement,
            result.check_type.value,
            escape(result.target),
            _coloured_status(result.status),
            escape(result.message),
        )
    console.print(table)

    for result in summary.results:
        if result.detail and result.status in (CheckStatus.FAIL, CheckStatus.ERROR):
            console.print(f"\n  [bold]{result.check_type.value}[/bold] [dim]{escape(result.target)}[/dim]")
            for line in result.detail.splitlines():
                console.print(f"    [dim]{escape(line)}[/dim]")

    console.print(
        f"\n── {summary.passed} passed, {summary.failed} failed, "
        f"{summary.errored} error(s)\n"
    )


def display_check_list(console: Console, checks: Sequence[BaseCheck]) -> None:
    """Render the registered rules."""
    table = Table(show_header=True, header_style="bold")
    table.add_column("Check", no_wrap=True)
    table.add_column("Requirement", no_wrap=True)
    table.add_column("Description")
    for check in checks:
        table.add_row(check.check_type.value, check.requirement, check.description)
    console.print(table)
