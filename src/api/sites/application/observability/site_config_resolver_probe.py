"""Domain probe for site configuration resolution.

Following Domain-Oriented Observability patterns, this probe captures
domain-significant events related to resolving tenant sites.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class SiteConfigResolverProbe(Protocol):
    """Domain probe for site configuration resolution."""

    def site_resolved(
        self, tenant_id: str, country_code: str, status: str, is_public: bool
    ) -> None:
        """Record that a site configuration was resolved."""
        ...

    def site_not_found(self, tenant_id: str) -> None:
        """Record that a tenant has no configuration record."""
        ...

    def domain_not_resolved(self, domain: str) -> None:
        """Record that no tenant is mapped to a hostname."""
        ...

    def country_pack_defaulted(
        self, tenant_id: str, requested_code: str | None, default_code: str
    ) -> None:
        """Record that a tenant fell back to the default country pack."""
        ...

    def resolve_retrying(
        self, subject: str, operation: str, attempt: int, error: str
    ) -> None:
        """Record that a store read is retried after a store failure.

        ``subject`` is the tenant id or hostname being looked up.
        """
        ...

    def store_unavailable(
        self, subject: str, operation: str, attempts: int, error: str
    ) -> None:
        """Record that resolution gave up because the store was unavailable."""
        ...

    def with_context(self, context: ObservationContext) -> SiteConfigResolverProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultSiteConfigResolverProbe:
    """Default implementation of SiteConfigResolverProbe using structlog."""

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
    ) -> DefaultSiteConfigResolverProbe:
        """Create a new probe with observation context bound."""
        return DefaultSiteConfigResolverProbe(logger=self._logger, context=context)

    def site_resolved(
        self, tenant_id: str, country_code: str, status: str, is_public: bool
    ) -> None:
        """Record that a site configuration was resolved."""
        self._logger.info(
            "site_resolved",
            tenant_id=tenant_id,
            country_code=country_code,
            status=status,
            is_public=is_public,
            **self._get_context_kwargs(),
        )

    def site_not_found(self, tenant_id: str) -> None:
        """Record that a tenant has no configuration record."""
        self._logger.info(
            "site_not_found",
            tenant_id=tenant_id,
            **self._get_context_kwargs(),
        )

    def domain_not_resolved(self, domain: str) -> None:
        """Record that no tenant is mapped to a hostname."""
        self._logger.info(
            "domain_not_resolved",
            domain=domain,
            **self._get_context_kwargs(),
        )

    def country_pack_defaulted(
        self, tenant_id: str, requested_code: str | None, default_code: str
    ) -> None:
        """Record that a tenant fell back to the default country pack."""
        self._logger.warning(
            "country_pack_defaulted",
            tenant_id=tenant_id,
            requested_code=requested_code,
            default_code=default_code,
            **self._get_context_kwargs(),
        )

    def resolve_retrying(
        self, subject: str, operation: str, attempt: int, error: str
    ) -> None:
        """Record that a store read is retried after a store failure."""
        self._logger.warning(
            "resolve_retrying",
            subject=subject,
            operation=operation,
            attempt=attempt,
            error=error,
            **self._get_context_kwargs(),
        )

    def store_unavailable(
        self, subject: str, operation: str, attempts: int, error: str
    ) -> None:
        """Record that resolution gave up because the store was unavailable."""
        self._logger.error(
            "site_resolution_store_unavailable",
            subject=subject,
            operation=operation,
            attempts=attempts,
            error=error,
            **self._get_context_kwargs(),
        )
