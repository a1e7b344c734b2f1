"""Entry point for `python -m themelayers` and the `themelayers` script."""

from __future__ import annotations

import sys


def main(argv: list[str] | None = None) -> None:
    from themelayers.app import run_app
    sys.exit(run_app(argv))


if __name__ == "__main__":
    main()
