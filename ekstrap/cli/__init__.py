"""CLI entry point and error handling."""

from __future__ import annotations

from ekstrap.cli.main import main

__all__ = ["main"]
