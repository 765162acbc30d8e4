"""Context entry application service.

Serves tenant-scoped content records. The tenant always comes from the
caller's resolved context, never from anything the client can put in a
query string or page token.
"""

from __future__ import annotations

from typing import Any

from sites.application.observability import (
    ContextQueryServiceProbe,
    DefaultContextQueryServiceProbe,
)
from sites.domain.value_objects import ContextEntry, ContextPage, TenantId
from sites.ports.exceptions import InvalidPageTokenError
from sites.ports.repositories import CONTEXT_PREFIX, ITenantRecordStore


class ContextQueryService:
    """Application service for context entry listing and maintenance."""

    def __init__(
        self,
        store: ITenantRecordStore,
        probe: ContextQueryServiceProbe | None = None,
        default_page_size: int = 50,
        max_page_size: int = 100,
    ):
        """Initialize the service.

        Args:
            store: Tenant record store
            probe: Optional domain probe for observability
            default_page_size: Page size when the caller gives none
            max_page_size: Upper bound on caller-supplied page sizes
        """
        self._store = store
        self._probe = probe or DefaultContextQueryServiceProbe()
        self._default_page_size = default_page_size
        self._max_page_size = max_page_size

    def list(
        self,
        tenant_id: TenantId,
        prefix: str = CONTEXT_PREFIX,
        page_token: str | None = None,
        limit: int | None = None,
    ) -> ContextPage:
        """List one page of a tenant's context entries.

        Args:
            tenant_id: Tenant whose partition is read
            prefix: Sort-key prefix to list under
            page_token: Token from a previous page of the same listing
            limit: Requested page size, capped at the maximum

        Returns:
            ContextPage with the entries and the next page token, if any

        Raises:
            InvalidPageTokenError: If the token is malformed or was issued
                for another tenant or prefix
            StoreUnavailableError: If the store cannot serve the request
        """
        if limit is not None and limit < 1:
            raise ValueError("limit must be at least 1")
        page_size = min(limit or self._default_page_size, self._max_page_size)

        try:
            page = self._store.list_context_entries(
                tenant_id, prefix=prefix, page_token=page_token, limit=page_size
            )
        except InvalidPageTokenError:
            self._probe.invalid_page_token(tenant_id.value)
            raise

        self._probe.context_listed(
            tenant_id.value,
            prefix=prefix,
            count=len(page.items),
            has_more=page.next_page_token is not None,
        )
        return page

    def get(self, tenant_id: TenantId, entry_id: str) -> ContextEntry | None:
        """Fetch one context entry, or None if the tenant has no such entry."""
        entry = self._store.get_context_entry(tenant_id, entry_id)
        if entry is None:
            self._probe.context_entry_not_found(tenant_id.value, entry_id)
            return None
        self._probe.context_entry_retrieved(tenant_id.value, entry_id)
        return entry

    def create(self, tenant_id: TenantId, payload: dict[str, Any]) -> ContextEntry:
        """Store a new context entry under a generated id."""
        entry = self._store.put_context_entry(tenant_id, payload)
        self._probe.context_entry_created(tenant_id.value, entry.entry_id)
        return entry

    def update(
        self, tenant_id: TenantId, entry_id: str, payload: dict[str, Any]
    ) -> ContextEntry | None:
        """Update an existing context entry.

        Fields in ``payload`` overwrite the stored ones; stored fields it
        leaves out are kept, as is the original ``createdAt``.

        Returns:
            The stored entry, or None if the entry does not exist
        """
        existing = self._store.get_context_entry(tenant_id, entry_id)
        if existing is None:
            self._probe.context_entry_not_found(tenant_id.value, entry_id)
            return None

        merged = {**existing.payload, **payload}
        created_at = existing.payload.get("createdAt")
        if created_at is not None:
            merged["createdAt"] = created_at

        entry = self._store.put_context_entry(tenant_id, merged, entry_id=entry_id)
        if entry is None:
            self._probe.context_entry_not_found(tenant_id.value, entry_id)
            return None
        self._probe.context_entry_updated(tenant_id.value, entry_id)
        return entry

    def delete(self, tenant_id: TenantId, entry_id: str) -> bool:
        """Delete a context entry.

        Returns:
            True if deleted, False if it did not exist
        """
        deleted = self._store.delete_context_entry(tenant_id, entry_id)
        if deleted:
            self._probe.context_entry_deleted(tenant_id.value, entry_id)
        else:
            self._probe.context_entry_not_found(tenant_id.value, entry_id)
        return deleted
