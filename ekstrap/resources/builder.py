"""Instance capability table builder.

Merges the EC2 ENI limits documentation table with the EC2 price list into one
record per instance type, applies manual corrections and emits the lookup
tables consumed by :mod:`ekstrap.node.capacity`.
"""

from __future__ import annotations

import logging
from typing import Any

import requests

from ekstrap.constants import (
    DEFAULT_OUTPUT_PATH,
    ENI_TABLE_URL,
    IP_PER_ENI_OVERRIDES,
    MEMORY_OVERRIDES_MIB,
    PRICING_URL,
    REQUEST_TIMEOUT_SECONDS,
)
from ekstrap.exceptions import FetchError, ParseError
from ekstrap.resources.emitter import build_tables, render_module, write_module
from ekstrap.resources.models import CapabilityTables, InstanceTypeRecord
from ekstrap.resources.parsers import merge_pricing, parse_eni_table

logger = logging.getLogger(__name__)


def _get(url: str, timeout: float) -> requests.Response:
    try:
        response = requests.get(url, timeout=timeout)
    except requests.RequestException as e:
        raise FetchError(f"Failed to fetch {url}: {e}", url) from e

    if not response.ok:
        raise FetchError(
            f"Failed to fetch {url}: HTTP {response.status_code}",
            url,
            status_code=response.status_code,
        )

    return response


def fetch_eni_table(url: str = ENI_TABLE_URL, timeout: float = REQUEST_TIMEOUT_SECONDS) -> str:
    """Download the ENI limits documentation page.

    Parameters
    ----------
    url : str
        Documentation page URL
    timeout : float
        Request timeout in seconds

    Returns
    -------
    str
        Page HTML

    Raises
    ------
    FetchError
        If the page is unreachable or returns a non-success status
    """
    logger.info("Fetching ENI limits from %s", url)
    return _get(url, timeout).text


def fetch_pricing(url: str = PRICING_URL, timeout: float = REQUEST_TIMEOUT_SECONDS) -> dict[str, Any]:
    """Download and decode the EC2 price list offer file.

    Parameters
    ----------
    url : str
        Offer file URL
    timeout : float
        Request timeout in seconds

    Returns
    -------
    dict[str, Any]
        Decoded offer file

    Raises
    ------
    FetchError
        If the file is unreachable or returns a non-success status
    ParseError
        If the body is not JSON
    """
    logger.info("Fetching EC2 price list from %s", url)
    response = _get(url, timeout)

    try:
        return response.json()
    except ValueError as e:
        raise ParseError(f"Price list at {url} is not valid JSON: {e}") from e


def _to_int(value: str | None) -> int | None:
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def records_from_limits(limits: dict[str, dict[str, str]]) -> dict[str, InstanceTypeRecord]:
    """Create records from parsed ENI table limits.

    Cell text that is not an integer leaves the field unset.
    """
    return {
        type_id: InstanceTypeRecord(
            type_id=type_id,
            eni_count=_to_int(values.get("eni")),
            ip_count=_to_int(values.get("ip")),
        )
        for type_id, values in limits.items()
    }


def filter_complete(records: dict[str, InstanceTypeRecord]) -> dict[str, InstanceTypeRecord]:
    """Drop records lacking a CPU count or an ENI count.

    Missing memory or IP counts do not exclude a record, so such records are
    emitted with None in the affected table unless an override fills them.

    Parameters
    ----------
    records : dict[str, InstanceTypeRecord]
        Merged records

    Returns
    -------
    dict[str, InstanceTypeRecord]
        Complete records, in their original order
    """
    complete = {
        type_id: record
        for type_id, record in records.items()
        if record.cpu_count is not None and record.eni_count is not None
    }
    logger.debug("Dropped %d incomplete records", len(records) - len(complete))
    return complete


def apply_overrides(records: dict[str, InstanceTypeRecord]) -> dict[str, InstanceTypeRecord]:
    """Apply the manual IP-per-ENI and metal memory corrections.

    Only types already present are corrected; no records are created.

    Parameters
    ----------
    records : dict[str, InstanceTypeRecord]
        Filtered records, modified in place

    Returns
    -------
    dict[str, InstanceTypeRecord]
        The same mapping, for chaining
    """
    for type_id, ip_count in IP_PER_ENI_OVERRIDES.items():
        if type_id in records:
            records[type_id].ip_count = ip_count

    for type_id, memory_mib in MEMORY_OVERRIDES_MIB.items():
        if type_id in records:
            records[type_id].memory_mib = memory_mib

    return records


def build_capability_tables(html: str, pricing_document: dict[str, Any]) -> CapabilityTables:
    """Build the capability tables from the two source documents.

    This is a pure function of its inputs: no network access and no global
    state.

    Parameters
    ----------
    html : str
        ENI limits documentation page
    pricing_document : dict[str, Any]
        Decoded EC2 price list offer file

    Returns
    -------
    CapabilityTables
        Cores, memory, ENI and IP tables in ENI table order

    Raises
    ------
    ParseError
        If either document lacks the expected structure
    """
    records = records_from_limits(parse_eni_table(html))
    merge_pricing(records, pricing_document)
    records = apply_overrides(filter_complete(records))
    return build_tables(records.values())


def generate(settings: dict[str, Any] | None = None) -> CapabilityTables:
    """Fetch both sources, build the tables and write the generated module.

    The module is written only after every previous step has succeeded.

    Parameters
    ----------
    settings : dict[str, Any] | None
        Configuration with ``eni_table_url``, ``pricing_url``,
        ``request_timeout`` and ``output_path``. Missing keys fall back to
        the built-in defaults.

    Returns
    -------
    CapabilityTables
        The tables that were written

    Raises
    ------
    FetchError
        If either source cannot be downloaded
    ParseError
        If either source lacks the expected structure
    """
    settings = settings or {}
    timeout = settings.get("request_timeout", REQUEST_TIMEOUT_SECONDS)

    html = fetch_eni_table(settings.get("eni_table_url", ENI_TABLE_URL), timeout)
    pricing_document = fetch_pricing(settings.get("pricing_url", PRICING_URL), timeout)

    tables = build_capability_tables(html, pricing_document)
    logger.info("Built capability tables for %d instance types", len(tables))

    write_module(settings.get("output_path", DEFAULT_OUTPUT_PATH), render_module(tables))
    return tables
