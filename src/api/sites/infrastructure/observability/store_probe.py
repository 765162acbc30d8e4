"""Domain probe for tenant record store operations.

Following Domain-Oriented Observability patterns, this probe captures
domain-significant events from the DynamoDB single-table adapter.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class TenantRecordStoreProbe(Protocol):
    """Domain probe for tenant record store operations."""

    def tenant_config_retrieved(self, tenant_id: str) -> None:
        """Record that a tenant configuration record was read."""
        ...

    def tenant_config_not_found(self, tenant_id: str) -> None:
        """Record that a tenant has no configuration record."""
        ...

    def tenant_config_saved(self, tenant_id: str) -> None:
        """Record that a tenant configuration record was written."""
        ...

    def context_entries_listed(
        self, tenant_id: str, count: int, has_more: bool
    ) -> None:
        """Record that a page of context entries was listed."""
        ...

    def context_entry_saved(self, tenant_id: str, entry_id: str) -> None:
        """Record that a context entry was written."""
        ...

    def context_entry_missing(self, tenant_id: str, entry_id: str) -> None:
        """Record that a conditional replace found no stored entry."""
        ...

    def context_entry_deleted(
        self, tenant_id: str, entry_id: str, existed: bool
    ) -> None:
        """Record that a context entry delete was issued."""
        ...

    def domain_not_found(self, domain: str) -> None:
        """Record that no tenant is mapped to a hostname."""
        ...

    def duplicate_domain(self, domain: str, tenant_ids: list[str]) -> None:
        """Record that several tenants claim the same hostname."""
        ...

    def store_unavailable(
        self, operation: str, error: Exception, tenant_id: str | None = None
    ) -> None:
        """Record that the store could not serve a request."""
        ...

    def with_context(self, context: ObservationContext) -> TenantRecordStoreProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultTenantRecordStoreProbe:
    """Default implementation of TenantRecordStoreProbe using structlog."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self) -> dict[str, Any]:
        """Get context metadata as kwargs for logging."""
        if self._context is None:
            return {}
        return self._context.as_dict()

    def with_context(
        self, context: ObservationContext
    ) -> DefaultTenantRecordStoreProbe:
        """Create a new probe with observation context bound."""
        return DefaultTenantRecordStoreProbe(logger=self._logger, context=context)

    def tenant_config_retrieved(self, tenant_id: str) -> None:
        """Record that a tenant configuration record was read."""
        self._logger.debug(
            "tenant_config_retrieved",
            tenant_id=tenant_id,
            **self._get_context_kwargs(),
        )

    def tenant_config_not_found(self, tenant_id: str) -> None:
        """Record that a tenant has no configuration record."""
        self._logger.debug(
            "tenant_config_not_found",
            tenant_id=tenant_id,
            **self._get_context_kwargs(),
        )

    def tenant_config_saved(self, tenant_id: str) -> None:
        """Record that a tenant configuration record was written."""
        self._logger.info(
            "tenant_config_saved",
            tenant_id=tenant_id,
            **self._get_context_kwargs(),
        )

    def context_entries_listed(
        self, tenant_id: str, count: int, has_more: bool
    ) -> None:
        """Record that a page of context entries was listed."""
        self._logger.debug(
            "context_entries_listed",
            tenant_id=tenant_id,
            count=count,
            has_more=has_more,
            **self._get_context_kwargs(),
        )

    def context_entry_saved(self, tenant_id: str, entry_id: str) -> None:
        """Record that a context entry was written."""
        self._logger.info(
            "context_entry_saved",
            tenant_id=tenant_id,
            entry_id=entry_id,
            **self._get_context_kwargs(),
        )

    def context_entry_missing(self, tenant_id: str, entry_id: str) -> None:
        """Record that a conditional replace found no stored entry."""
        self._logger.info(
            "context_entry_missing",
            tenant_id=tenant_id,
            entry_id=entry_id,
            **self._get_context_kwargs(),
        )

    def context_entry_deleted(
        self, tenant_id: str, entry_id: str, existed: bool
    ) -> None:
        """Record that a context entry delete was issued."""
        self._logger.info(
            "context_entry_deleted",
            tenant_id=tenant_id,
            entry_id=entry_id,
            existed=existed,
            **self._get_context_kwargs(),
        )

    def domain_not_found(self, domain: str) -> None:
        """Record that no tenant is mapped to a hostname."""
        self._logger.debug(
            "domain_not_found",
            domain=domain,
            **self._get_context_kwargs(),
        )

    def duplicate_domain(self, domain: str, tenant_ids: list[str]) -> None:
        """Record that several tenants claim the same hostname."""
        self._logger.warning(
            "duplicate_domain",
            domain=domain,
            tenant_ids=tenant_ids,
            **self._get_context_kwargs(),
        )

    def store_unavailable(
        self, operation: str, error: Exception, tenant_id: str | None = None
    ) -> None:
        """Record that the store could not serve a request."""
        self._logger.error(
            "tenant_store_unavailable",
            operation=operation,
            tenant_id=tenant_id,
            error=str(error),
            error_type=type(error).__name__,
            **self._get_context_kwargs(),
        )
