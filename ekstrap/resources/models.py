"""Data types for the instance capability table."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class InstanceTypeRecord:
    """Resource limits known for a single instance type.

    Parameters
    ----------
    type_id : str
        Instance type identifier (e.g., "m5.large", "i3.metal")
    eni_count : int | None
        Maximum number of network interfaces
    ip_count : int | None
        Maximum private IPv4 addresses per interface
    cpu_count : int | None
        Virtual CPU count, set when the price list is merged
    memory_mib : int | None
        Memory in MiB, set when the price list is merged
    """

    type_id: str
    eni_count: int | None = None
    ip_count: int | None = None
    cpu_count: int | None = None
    memory_mib: int | None = None


@dataclass(frozen=True)
class CapabilityTables:
    """The four per-instance-type lookup tables emitted by the builder.

    All mappings share the same keys in the same order.
    """

    instance_cores: dict[str, int | None] = field(default_factory=dict)
    instance_memory: dict[str, int | None] = field(default_factory=dict)
    instance_enis_available: dict[str, int | None] = field(default_factory=dict)
    instance_ips_available: dict[str, int | None] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.instance_cores)
