"""Core ekstrap functionality."""

from __future__ import annotations

from ekstrap.core.config import ConfigLoader

__all__ = ["ConfigLoader"]
