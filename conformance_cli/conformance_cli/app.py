"""gpkg-check CLI application -- Typer-based interface to the conformance checks.

Human-readable output goes to *stderr* via Rich; machine-readable output
(``--json``) goes to *stdout* so that pipelines can compose cleanly.
"""

from __future__ import annotations

import typer

from conformance_cli.json_formatter import configure_logging
from conformance_engine.config import Settings, load_settings

# ---------------------------------------------------------------------------
# App & global state
# ---------------------------------------------------------------------------

app = typer.Typer(
    name="gpkg-check",
    help="Verify GeoPackage files against OGC 12-128r12 file requirements.",
    no_args_is_help=True,
)

from conformance_cli.commands.check import check_command, list_command  # noqa: E402

app.command(name="check")(check_command)
app.command(name="list")(list_command)

# Mutable global options populated by the Typer callback.
_json_output: bool = False
_settings: Settings | None = None


# ---------------------------------------------------------------------------
# Callback -- global options
# ---------------------------------------------------------------------------


@app.callback()
def _global_options(
    json_mode: bool = typer.Option(
        False,
        "--json/--no-json",
        help="Emit structured JSON to stdout instead of human-readable output.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Log debug output to stderr.",
    ),
) -> None:
    """Global options applied to every command."""
    global _json_output, _settings  # noqa: PLW0603
    _json_output = json_mode

    overrides: dict[str, object] = {"debug": True} if verbose else {}
    _settings = load_settings(**overrides)
    configure_logging(
        _settings.effective_log_level(),
        structured=_settings.structured_logging,
    )


def get_settings() -> Settings:
    """Return the settings loaded by the callback, loading them if needed."""
    global _settings  # noqa: PLW0603
    if _settings is None:
        _settings = load_settings()
    return _settings
