"""Entry point for `python -m conformance_cli` and the `gpkg-check` console script."""

from __future__ import annotations

from conformance_cli.app import app


def main() -> None:
    app()


if __name__ == "__main__":
    main()
