"""Domain-Oriented Observability for the sites infrastructure layer."""

from sites.infrastructure.observability.store_probe import (
    DefaultTenantRecordStoreProbe,
    TenantRecordStoreProbe,
)

__all__ = [
    "TenantRecordStoreProbe",
    "DefaultTenantRecordStoreProbe",
]
