"""Module executed when running ``python -m linfit``."""

from __future__ import annotations

from linfit.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
