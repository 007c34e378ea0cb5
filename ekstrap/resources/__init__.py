"""Instance capability table builder."""

from __future__ import annotations

from ekstrap.resources.builder import (
    apply_overrides,
    build_capability_tables,
    fetch_eni_table,
    fetch_pricing,
    filter_complete,
    generate,
)
from ekstrap.resources.models import CapabilityTables, InstanceTypeRecord

__all__ = [
    "CapabilityTables",
    "InstanceTypeRecord",
    "apply_overrides",
    "build_capability_tables",
    "fetch_eni_table",
    "fetch_pricing",
    "filter_complete",
    "generate",
]
