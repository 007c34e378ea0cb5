"""Pod capacity and kube-reserved calculations from the capability tables.

The reservation bands follow the GKE guidance on node allocatable resources,
which applies to EC2 workers just as well.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping

from ekstrap.node import resources

logger = logging.getLogger(__name__)

RESERVED_MEMORY_BANDS = (
    (4096, 0.25),
    (8192, 0.2),
    (16384, 0.1),
    (131072, 0.06),
)
"""Upper bound in MiB and reserved MiB per MiB for each memory band."""

RESERVED_MEMORY_RATE_ABOVE_BANDS = 0.02


def max_pods(
    instance_type: str,
    enis_available: Mapping[str, int | None] | None = None,
    ips_available: Mapping[str, int | None] | None = None,
) -> int:
    """Maximum number of pods schedulable on an instance type.

    Each ENI keeps its primary address for the node, so only ``ips - 1``
    addresses per ENI are available to pods.

    Parameters
    ----------
    instance_type : str
        EC2 instance type
    enis_available : Mapping[str, int | None] | None
        ENI table. If None, uses the generated table
    ips_available : Mapping[str, int | None] | None
        IP-per-ENI table. If None, uses the generated table

    Returns
    -------
    int
        Pod limit, or 0 if the instance type is unknown
    """
    if enis_available is None:
        enis_available = resources.INSTANCE_ENIS_AVAILABLE
    if ips_available is None:
        ips_available = resources.INSTANCE_IPS_AVAILABLE

    enis = enis_available.get(instance_type) or 0
    ips = ips_available.get(instance_type) or 0

    if ips == 0:
        return 0

    return enis * (ips - 1)


def reserved_cpu(instance_type: str, cores_table: Mapping[str, int | None] | None = None) -> str:
    """CPU to reserve for Kubernetes system daemons.

    Parameters
    ----------
    instance_type : str
        EC2 instance type
    cores_table : Mapping[str, int | None] | None
        vCPU table. If None, uses the generated table

    Returns
    -------
    str
        Millicores such as "70m", or "" if the core count is unknown
    """
    if cores_table is None:
        cores_table = resources.INSTANCE_CORES

    cores = cores_table.get(instance_type) or 0
    reserved = 0.0

    for core in range(1, cores + 1):
        if core == 1:
            reserved += 60.0
        elif core == 2:
            reserved += 10.0
        elif core <= 4:
            reserved += 5.0
        else:
            reserved += 2.5

    if reserved == 0.0:
        logger.info(
            "The number of CPU cores is unknown for the %s instance type, "
            "--kube-reserved will not be configured",
            instance_type,
        )
        return ""

    return f"{reserved:.0f}m"


def reserved_memory(instance_type: str, memory_table: Mapping[str, int | None] | None = None) -> str:
    """Memory to reserve for Kubernetes system daemons.

    Parameters
    ----------
    instance_type : str
        EC2 instance type
    memory_table : Mapping[str, int | None] | None
        Memory table in MiB. If None, uses the generated table

    Returns
    -------
    str
        Reservation such as "1843Mi", or "" if the memory size is unknown
    """
    if memory_table is None:
        memory_table = resources.INSTANCE_MEMORY

    memory = memory_table.get(instance_type) or 0
    reserved = 0.0
    lower = 0

    for upper, rate in RESERVED_MEMORY_BANDS:
        if memory <= lower:
            break
        reserved += (min(memory, upper) - lower) * rate
        lower = upper

    if memory > lower:
        reserved += (memory - lower) * RESERVED_MEMORY_RATE_ABOVE_BANDS

    if reserved == 0.0:
        logger.info(
            "The Memory of the %s instance type is unknown, "
            "--kube-reserved will not be configured",
            instance_type,
        )
        return ""

    return f"{reserved:.0f}Mi"
