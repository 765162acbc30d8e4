"""Repository protocols (ports) for the sites bounded context.

The tenant record store is a single keyed table holding, per tenant, one
configuration record and any number of context entries.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from sites.domain.value_objects import ContextEntry, ContextPage, TenantConfig, TenantId

CONTEXT_PREFIX = "CONTEXT#"

# Key attributes owned by the store; payloads may not set them.
RESERVED_ATTRIBUTES = frozenset({"PK", "SK"})


@runtime_checkable
class ITenantRecordStore(Protocol):
    """Store for tenant configuration records and context entries.

    Every query is scoped by the tenant's exact partition key; no operation
    scans across tenants.
    """

    def get_tenant_config(self, tenant_id: TenantId) -> TenantConfig | None:
        """Point lookup of a tenant's configuration record.

        Args:
            tenant_id: The tenant to look up

        Returns:
            The TenantConfig, or None if the tenant has no record

        Raises:
            StoreUnavailableError: If the store cannot be reached
            MalformedTenantRecordError: If the stored record cannot be parsed
        """
        ...

    def list_context_entries(
        self,
        tenant_id: TenantId,
        prefix: str = CONTEXT_PREFIX,
        page_token: str | None = None,
        limit: int | None = None,
    ) -> ContextPage:
        """List a tenant's context entries in sort-key order.

        Args:
            tenant_id: The tenant whose entries to list
            prefix: Sort-key prefix; must start with ``CONTEXT#``
            page_token: Token from a previous page, or None for the first page
            limit: Maximum number of entries in this page

        Returns:
            ContextPage (empty for an unknown tenant)

        Raises:
            InvalidPageTokenError: If the token is malformed or not this tenant's
            StoreUnavailableError: If the store cannot be reached
        """
        ...

    def get_context_entry(
        self, tenant_id: TenantId, entry_id: str
    ) -> ContextEntry | None:
        """Point lookup of one context entry, or None if absent."""
        ...

    def put_context_entry(
        self,
        tenant_id: TenantId,
        payload: dict[str, Any],
        entry_id: str | None = None,
    ) -> ContextEntry | None:
        """Create or replace a context entry.

        Replacing only succeeds while the entry still exists.

        Args:
            tenant_id: Owning tenant
            payload: Document to store verbatim
            entry_id: Existing id to replace, or None to generate one

        Returns:
            The stored ContextEntry, or None if ``entry_id`` names no
            stored entry

        Raises:
            InvalidKeySchemeError: If the payload tries to set key attributes
        """
        ...

    def delete_context_entry(self, tenant_id: TenantId, entry_id: str) -> bool:
        """Delete a context entry.

        Returns:
            True if deleted, False if it did not exist
        """
        ...

    def put_tenant_config(self, config: TenantConfig) -> None:
        """Create or replace a tenant's configuration record.

        Used by the administrative write path only; request handling never
        writes tenant records.
        """
        ...

    def find_tenant_id_by_domain(self, domain: str) -> TenantId | None:
        """Map a public hostname to its tenant via the domain index."""
        ...
