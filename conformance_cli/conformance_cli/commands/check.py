"""``gpkg-check check`` and ``gpkg-check list``.

Opens the GeoPackage read-only, runs the conformance rules through the
check engine and reports the verdicts.  Exit codes:

* 0 -- every rule passed
* 1 -- at least one rule failed
* 2 -- at least one rule could not query the store
* 3 -- invalid invocation or unreadable file
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

import typer
from rich.console import Console

from conformance_cli.display import display_check_list, display_check_summary
from conformance_engine.checks import CheckContext, CheckType, create_default_engine
from conformance_engine.checks.models import CheckSummary
from conformance_engine.errors import StoreOpenError
from conformance_engine.store import open_store

logger = logging.getLogger(__name__)

console = Console(stderr=True)

EXIT_OK = 0
EXIT_NON_CONFORMANT = 1
EXIT_CHECK_ERROR = 2
EXIT_USAGE = 3


def _parse_select(select: str | None) -> list[CheckType] | None:
    """Parse ``--select`` into check types, exiting with code 3 on unknown names."""
    if select is None:
        return None
    names = [s.strip().upper() for s in select.split(",") if s.strip()]
    valid = {ct.value for ct in CheckType}
    unknown = [n for n in names if n not in valid]
    if unknown:
        console.print(
            f"[red]Unknown check type(s): {', '.join(unknown)}. "
            f"Valid types: {', '.join(sorted(valid))}.[/red]"
        )
        raise typer.Exit(code=EXIT_USAGE)
    return [CheckType(n) for n in names]


def _exit_code(summary: CheckSummary) -> int:
    if summary.errored:
        return EXIT_CHECK_ERROR
    if summary.failed:
        return EXIT_NON_CONFORMANT
    return EXIT_OK


def check_command(
    path: Path = typer.Argument(
        ...,
        help="Path to the GeoPackage file to check.",
    ),
    select: str | None = typer.Option(
        None,
        "--select",
        "-s",
        help="Comma-separated check types to run (default: all).",
    ),
    strict_contents: bool = typer.Option(
        False,
        "--strict-contents",
        help="Fail when gpkg_contents names a table that does not exist.",
    ),
) -> None:
    """Run the conformance checks against a GeoPackage file.

    Examples::

        gpkg-check check example.gpkg
        gpkg-check check example.gpkg --select INTEGRITY_CHECK,FOREIGN_KEY_CHECK
        gpkg-check --json check example.gpkg
    """
    from conformance_cli import app as cli_app

    settings = cli_app.get_settings()
    check_types = _parse_select(select)
    strict = strict_contents or settings.strict_contents_references

    engine = create_default_engine()
    try:
        with open_store(path, read_only=settings.read_only) as connection:
            context = CheckContext(
                connection=connection,
                check_types=check_types,
                strict_contents_references=strict,
            )
            summary = engine.run(context)
    except StoreOpenError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=EXIT_USAGE) from exc

    logger.info(
        "Checked %s: %d passed, %d failed, %d errored",
        path,
        summary.passed,
        summary.failed,
        summary.errored,
    )

    if cli_app._json_output:
        sys.stdout.write(summary.model_dump_json(indent=2) + "\n")
    else:
        display_check_summary(console, summary, str(path))

    code = _exit_code(summary)
    if code != EXIT_OK:
        raise typer.Exit(code=code)


def list_command() -> None:
    """List the available conformance checks."""
    from conformance_cli import app as cli_app

    checks = create_default_engine().registry.get_all()
    if cli_app._json_output:
        payload = [
            {
                "check_type": c.check_type.value,
                "requirement": c.requirement,
                "description": c.description,
            }
            for c in checks
        ]
        sys.stdout.write(json.dumps(payload, indent=2) + "\n")
        return
    display_check_list(console, checks)
