#!/usr/bin/env python3
"""Thin entrypoint for the admin dashboard TUI."""

from __future__ import annotations

from dash_core.app import main


if __name__ == "__main__":
    raise SystemExit(main())
