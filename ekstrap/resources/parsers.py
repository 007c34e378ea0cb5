"""Parsers for the ENI limits table and the EC2 price list.

The documentation table is the authoritative set of instance types. The price
list only enriches types already known from the table.
"""

from __future__ import annotations

import logging
import warnings
from typing import Any

from bs4 import BeautifulSoup

from ekstrap.constants import (
    COMPUTE_INSTANCE_FAMILY,
    DEDICATED_HOST_FAMILY,
    ENI_TABLE_SELECTOR,
    METAL_SUFFIX,
)
from ekstrap.exceptions import MalformedRowWarning, ParseError

logger = logging.getLogger(__name__)


def parse_eni_table(html: str, selector: str = ENI_TABLE_SELECTOR) -> dict[str, dict[str, str]]:
    """Extract per-instance-type ENI and IP limits from the documentation page.

    Parameters
    ----------
    html : str
        Raw HTML of the ENI documentation page
    selector : str
        CSS selector identifying the limits table

    Returns
    -------
    dict[str, dict[str, str]]
        Mapping of type_id to ``{"eni": ..., "ip": ...}`` raw cell text, in
        table order

    Raises
    ------
    ParseError
        If no table matches the selector

    Notes
    -----
    Columns are type, ENI count, IPv4 addresses per ENI and IPv6 addresses
    per ENI. The IPv6 column is ignored. Rows without data cells or with an
    empty type cell are header or separator rows and are skipped. Rows with
    fewer than three cells are skipped with a MalformedRowWarning.
    """
    soup = BeautifulSoup(html, features="html.parser")
    tables = soup.select(selector)

    if not tables:
        raise ParseError(f"No table matching '{selector}' found in ENI documentation")

    limits: dict[str, dict[str, str]] = {}

    for table in tables:
        for row in table.find_all("tr"):
            cells = [cell.get_text().strip() for cell in row.find_all("td")]

            if not cells or not cells[0]:
                continue

            if len(cells) < 3:
                warnings.warn(
                    f"Skipping ENI table row with {len(cells)} cell(s): {cells!r}",
                    MalformedRowWarning,
                    stacklevel=2,
                )
                continue

            type_id, eni, ip = cells[:3]
            limits[type_id] = {"eni": eni, "ip": ip}

    logger.debug("Parsed %d instance types from ENI table", len(limits))
    return limits


def parse_memory_mib(memory: str | None) -> int | None:
    """Convert a price list memory attribute to whole MiB.

    Parameters
    ----------
    memory : str | None
        Memory attribute such as "16 GiB" or "1,952 GiB"

    Returns
    -------
    int | None
        Memory in MiB, truncated toward zero, or None if unparsable
    """
    if not memory:
        return None

    tokens = memory.split()

    if not tokens:
        return None

    try:
        return int(float(tokens[0].replace(",", "")) * 1024)
    except (OverflowError, ValueError):
        return None


def product_type_id(product: dict[str, Any]) -> str | None:
    """Resolve the type_id a price list product describes.

    Parameters
    ----------
    product : dict[str, Any]
        A single entry of the price list ``products`` mapping

    Returns
    -------
    str | None
        The instance type for compute instances, ``<type>.metal`` for
        dedicated hosts, None for any other product family
    """
    family = product.get("productFamily")
    instance_type = (product.get("attributes") or {}).get("instanceType")

    if not instance_type:
        return None

    if family == COMPUTE_INSTANCE_FAMILY:
        return instance_type
    elif family == DEDICATED_HOST_FAMILY:
        return instance_type + METAL_SUFFIX

    return None


def merge_pricing(records: dict[str, Any], document: dict[str, Any]) -> dict[str, Any]:
    """Enrich records with vCPU and memory from the price list.

    Parameters
    ----------
    records : dict[str, InstanceTypeRecord]
        Records keyed by type_id, modified in place
    document : dict[str, Any]
        Decoded price list offer file

    Returns
    -------
    dict[str, InstanceTypeRecord]
        The same mapping, for chaining

    Raises
    ------
    ParseError
        If the document has no ``products`` mapping
    """
    products = document.get("products") if isinstance(document, dict) else None

    if not isinstance(products, dict):
        raise ParseError("Pricing document has no 'products' mapping")

    matched = 0

    for product in products.values():
        type_id = product_type_id(product)

        if type_id is None:
            continue

        record = records.get(type_id)

        if record is None:
            continue

        attributes = product["attributes"]

        try:
            record.cpu_count = int(attributes.get("vcpu"))
        except (TypeError, ValueError):
            logger.debug("Ignoring vcpu %r for %s", attributes.get("vcpu"), type_id)

        memory_mib = parse_memory_mib(attributes.get("memory"))

        if memory_mib is None:
            logger.debug("Ignoring memory %r for %s", attributes.get("memory"), type_id)
        else:
            record.memory_mib = memory_mib

        matched += 1

    logger.debug("Merged %d price list products into %d records", matched, len(records))
    return records
