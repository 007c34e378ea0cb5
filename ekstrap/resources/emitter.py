"""Rendering of the capability tables as an importable Python module."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from pathlib import Path

from ekstrap.resources.models import CapabilityTables, InstanceTypeRecord
from ekstrap.utils import atomic_file_write

logger = logging.getLogger(__name__)

MODULE_HEADER = '''"""Per-instance-type resource limits.

Code generated by ``ekstrap generate``. DO NOT EDIT.
"""
'''

TABLE_NAMES = (
    ("INSTANCE_CORES", "instance_cores"),
    ("INSTANCE_MEMORY", "instance_memory"),
    ("INSTANCE_ENIS_AVAILABLE", "instance_enis_available"),
    ("INSTANCE_IPS_AVAILABLE", "instance_ips_available"),
)


def build_tables(records: Iterable[InstanceTypeRecord]) -> CapabilityTables:
    """Split records into the four lookup tables, preserving record order.

    Parameters
    ----------
    records : Iterable[InstanceTypeRecord]
        Filtered and corrected records

    Returns
    -------
    CapabilityTables
        Cores, memory, ENI and IP tables keyed by type_id
    """
    tables = CapabilityTables()

    for record in records:
        tables.instance_cores[record.type_id] = record.cpu_count
        tables.instance_memory[record.type_id] = record.memory_mib
        tables.instance_enis_available[record.type_id] = record.eni_count
        tables.instance_ips_available[record.type_id] = record.ip_count

    return tables


def _render_table(name: str, table: dict[str, int | None]) -> list[str]:
    lines = [f"{name}: dict[str, int | None] = {{"]

    for type_id, value in table.items():
        lines.append(f"    {json.dumps(type_id)}: {value!r},")

    lines.append("}")
    return lines


def render_module(tables: CapabilityTables) -> str:
    """Render the tables as Python source.

    The output depends only on the table contents and their order, so the
    same inputs always produce byte-identical text.

    Parameters
    ----------
    tables : CapabilityTables
        Tables to render

    Returns
    -------
    str
        Module source ending in a single newline
    """
    lines = [MODULE_HEADER]

    for constant, attribute in TABLE_NAMES:
        lines.extend(_render_table(constant, getattr(tables, attribute)))
        lines.append("")

    return "\n".join(lines)


def write_module(path: Path | str, source: str) -> Path:
    """Atomically write rendered module source to disk.

    Parameters
    ----------
    path : Path | str
        Destination file
    source : str
        Rendered module text

    Returns
    -------
    Path
        The path that was written
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    atomic_file_write(path, source)
    logger.info("Wrote %s", path)
    return path
