#!/usr/bin/env python3
"""Entry point for the watchjs live-reload client."""

from __future__ import annotations

from watchjs import main

if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
