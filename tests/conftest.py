"""Pytest configuration and fixtures for ekstrap tests."""

import os
from collections.abc import Callable, Generator
from typing import Any

import pytest

ENI_TABLE_HEADER = (
    "<tr><th>Instance type</th><th>Maximum network interfaces</th>"
    "<th>Private IPv4 addresses per interface</th><th>IPv6 addresses per interface</th></tr>"
)


@pytest.fixture
def eni_html() -> Callable[..., str]:
    """Build an ENI documentation page around table rows.

    Returns
    -------
    Callable[..., str]
        Function taking a list of rows (each a list of cell strings) and
        returning the page HTML
    """

    def build(rows: list[list[str]], table_class: str = "table-contents") -> str:
        body = "".join(
            "<tr>" + "".join(f"<td>{cell}</td>" for cell in row) + "</tr>" for row in rows
        )
        return (
            "<html><body><h1>Elastic network interfaces</h1>"
            f'<div class="{table_class}"><table>{ENI_TABLE_HEADER}{body}</table></div>'
            "</body></html>"
        )

    return build


@pytest.fixture
def pricing_document() -> Callable[..., dict[str, Any]]:
    """Build a price list offer document from product tuples.

    Returns
    -------
    Callable[..., dict[str, Any]]
        Function taking ``(productFamily, instanceType, vcpu, memory)`` tuples
        and returning the decoded offer document
    """

    def build(products: list[tuple[str, str, str, str]]) -> dict[str, Any]:
        return {
            "formatVersion": "v1.0",
            "offerCode": "AmazonEC2",
            "products": {
                f"SKU{index:04d}": {
                    "sku": f"SKU{index:04d}",
                    "productFamily": family,
                    "attributes": {
                        "servicecode": "AmazonEC2",
                        "instanceType": instance_type,
                        "vcpu": vcpu,
                        "memory": memory,
                    },
                }
                for index, (family, instance_type, vcpu, memory) in enumerate(products)
            },
        }

    return build


@pytest.fixture
def aws_credentials() -> Generator[None, None, None]:
    """Fixture to set AWS credentials for testing with proper cleanup.

    Sets mock AWS credentials in environment variables for the duration of the test,
    then restores the original environment state.

    Yields
    ------
    None
        Control back to test after setting credentials
    """
    keys = ("AWS_ACCESS_KEY_ID", "AWS_SECRET_ACCESS_KEY", "AWS_DEFAULT_REGION")
    original = {key: os.environ.get(key) for key in keys}

    os.environ["AWS_ACCESS_KEY_ID"] = "testing"
    os.environ["AWS_SECRET_ACCESS_KEY"] = "testing"
    os.environ["AWS_DEFAULT_REGION"] = "us-east-1"

    yield

    for key, value in original.items():
        if value is None:
            os.environ.pop(key, None)
        else:
            os.environ[key] = value


@pytest.fixture(autouse=True)
def clean_ekstrap_env() -> Generator[None, None, None]:
    """Ensure EKSTRAP_* variables from the calling shell do not leak into tests."""
    original = {key: os.environ.pop(key) for key in list(os.environ) if key.startswith("EKSTRAP_")}

    yield

    for key in [key for key in os.environ if key.startswith("EKSTRAP_")]:
        del os.environ[key]

    os.environ.update(original)
