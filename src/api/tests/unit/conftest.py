"""Unit test fixtures with mocked dependencies."""

from typing import Any
from unittest.mock import MagicMock

import pytest

from sites.domain.value_objects import TenantId


@pytest.fixture
def tenant_id() -> TenantId:
    """Provide the tenant most tests operate on."""
    return TenantId(value="client-bob")


@pytest.fixture
def other_tenant_id() -> TenantId:
    """Provide a second tenant for isolation tests."""
    return TenantId(value="client-alice")


@pytest.fixture
def config_item() -> dict[str, Any]:
    """Provide a stored CONFIG record for client-bob as DynamoDB returns it."""
    return {
        "PK": "TENANT#client-bob",
        "SK": "CONFIG",
        "tenantId": "client-bob",
        "domain": "bob.example",
        "Domain": "bob.example",
        "status": "LIVE",
        "name": "Bob's Bakery",
        "description": "Fresh bread daily",
        "theme": {"primary": "#ff0000", "radius": "4px"},
        "countryCode": "DE",
    }


@pytest.fixture
def mock_table() -> MagicMock:
    """Provide a mocked boto3 DynamoDB Table resource."""
    table = MagicMock()
    table.name = "TenantSites"
    table.get_item.return_value = {}
    table.query.return_value = {"Items": []}
    table.put_item.return_value = {}
    table.delete_item.return_value = {}
    return table
