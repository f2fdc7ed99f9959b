"""Entry point for `python -m payref`."""

from __future__ import annotations

from payref.cli import main


if __name__ == "__main__":
    raise SystemExit(main())
