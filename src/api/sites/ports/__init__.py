"""Ports (interfaces) for the sites bounded context.

Ports define the contracts the application layer depends on; the
DynamoDB adapter in ``sites.infrastructure`` implements them.
"""

from sites.ports.exceptions import (
    InvalidKeySchemeError,
    InvalidPageTokenError,
    MalformedTenantRecordError,
    StoreUnavailableError,
)
from sites.ports.repositories import (
    CONTEXT_PREFIX,
    RESERVED_ATTRIBUTES,
    ITenantRecordStore,
)

__all__ = [
    "CONTEXT_PREFIX",
    "RESERVED_ATTRIBUTES",
    "ITenantRecordStore",
    "InvalidKeySchemeError",
    "InvalidPageTokenError",
    "MalformedTenantRecordError",
    "StoreUnavailableError",
]
