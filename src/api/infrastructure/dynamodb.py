"""Process-wide DynamoDB table handle.

Provides ONLY the raw boto3 resource for the single tenant table.
Does NOT import from bounded contexts to maintain DDD boundaries.

The handle is created lazily on first use and shared across requests
(boto3 resources are safe to share for the read/write calls we make).
``reset_dynamodb_table`` is the invalidation hook, e.g. after credential
rotation or in tests that change settings.
"""

from __future__ import annotations

import threading
from typing import Any

import boto3
from botocore.config import Config

from infrastructure.observability.probes import (
    DefaultDynamoDBTableProbe,
    DynamoDBTableProbe,
)
from infrastructure.settings import DynamoDBSettings, get_dynamodb_settings


_lock = threading.Lock()
_table: Any = None


def build_dynamodb_table(
    settings: DynamoDBSettings,
    probe: DynamoDBTableProbe | None = None,
) -> Any:
    """Create a boto3 Table resource for the configured table.

    Args:
        settings: DynamoDB settings
        probe: Optional observability probe

    Returns:
        boto3 DynamoDB Table resource
    """
    probe = probe or DefaultDynamoDBTableProbe()
    config = Config(
        retries={"max_attempts": settings.max_attempts, "mode": "standard"},
        connect_timeout=settings.connect_timeout_seconds,
        read_timeout=settings.read_timeout_seconds,
    )
    session = boto3.session.Session(region_name=settings.region)
    resource = session.resource(
        "dynamodb",
        endpoint_url=settings.endpoint_url,
        config=config,
    )
    probe.table_handle_created(
        table_name=settings.table_name,
        region=settings.region,
        endpoint_url=settings.endpoint_url,
    )
    return resource.Table(settings.table_name)


def get_dynamodb_table() -> Any:
    """Get the application-scoped DynamoDB table handle (singleton).

    Returns:
        boto3 DynamoDB Table resource
    """
    global _table
    if _table is None:
        with _lock:
            if _table is None:
                _table = build_dynamodb_table(get_dynamodb_settings())
    return _table


def reset_dynamodb_table(probe: DynamoDBTableProbe | None = None) -> None:
    """Drop the cached table handle so the next call rebuilds it."""
    global _table
    with _lock:
        if _table is not None:
            (probe or DefaultDynamoDBTableProbe()).table_handle_reset(
                table_name=_table.name
            )
        _table = None
