"""Entry point for ``python -m confscan``."""

from __future__ import annotations

from confscan.cli import main


def run() -> None:
    raise SystemExit(main())


if __name__ == "__main__":
    run()
