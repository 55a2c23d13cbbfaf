#!/usr/bin/env python3
"""Allow ``python -m rdu``."""

from .cli import main

if __name__ == "__main__":
    raise SystemExit(main())
