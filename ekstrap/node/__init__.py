"""Worker node helpers: instance metadata, tags and capacity limits."""

from __future__ import annotations

from ekstrap.node.capacity import max_pods, reserved_cpu, reserved_memory
from ekstrap.node.info import (
    MetadataClient,
    NodeInfo,
    needs_updating,
    validate_running_as_root,
    write_config,
)

__all__ = [
    "MetadataClient",
    "NodeInfo",
    "max_pods",
    "needs_updating",
    "reserved_cpu",
    "reserved_memory",
    "validate_running_as_root",
    "write_config",
]
