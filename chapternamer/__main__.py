"""Module execution support for ``python -m chapternamer``."""

from __future__ import annotations

from chapternamer.cli import main

if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
