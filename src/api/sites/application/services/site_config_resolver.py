"""Site configuration resolution.

Merges a tenant's stored configuration with its country pack into the
request-scoped ResolvedSiteConfig consumed by the renderer and the
derived artifact generators.
"""

from __future__ import annotations

from typing import Callable, TypeVar

from sites.application.observability import (
    DefaultSiteConfigResolverProbe,
    SiteConfigResolverProbe,
)
from sites.domain.country_packs import CountryPackRegistry
from sites.domain.value_objects import (
    ResolvedSiteConfig,
    SiteNotFound,
    TenantId,
)
from sites.ports.exceptions import StoreUnavailableError
from sites.ports.repositories import ITenantRecordStore

T = TypeVar("T")


def normalize_host(host: str) -> str:
    """Lower-case a Host header value and drop any port suffix."""
    hostname = host.strip().lower()
    if hostname.startswith("["):
        # IPv6 literal, e.g. [::1]:8080
        return hostname.split("]", 1)[0] + "]"
    return hostname.rsplit(":", 1)[0] if ":" in hostname else hostname


class SiteConfigResolver:
    """Application service resolving tenant sites.

    Holds no per-tenant state: every call reads the store afresh, so two
    resolutions with no write in between return equal results.
    """

    def __init__(
        self,
        store: ITenantRecordStore,
        registry: CountryPackRegistry,
        probe: SiteConfigResolverProbe | None = None,
        max_attempts: int = 2,
    ):
        """Initialize the resolver.

        Args:
            store: Tenant record store
            registry: Country pack registry
            probe: Optional domain probe for observability
            max_attempts: Store reads per resolution before giving up on
                StoreUnavailableError (1 disables retrying)
        """
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self._store = store
        self._registry = registry
        self._probe = probe or DefaultSiteConfigResolverProbe()
        self._max_attempts = max_attempts

    def resolve(self, tenant_id: TenantId) -> ResolvedSiteConfig | SiteNotFound:
        """Resolve the full site configuration for a tenant.

        Args:
            tenant_id: The tenant to resolve

        Returns:
            ResolvedSiteConfig, or SiteNotFound if the tenant has no record

        Raises:
            StoreUnavailableError: If the store stays unavailable for every
                attempt. Never reported as SiteNotFound.
            MalformedTenantRecordError: If the stored record cannot be parsed
        """
        tenant = self._with_retry(
            "get_tenant_config",
            tenant_id.value,
            lambda: self._store.get_tenant_config(tenant_id),
        )
        if tenant is None:
            self._probe.site_not_found(tenant_id.value)
            return SiteNotFound(tenant_id=tenant_id.value)

        if tenant.country_code and not self._registry.is_supported(
            tenant.country_code
        ):
            self._probe.country_pack_defaulted(
                tenant_id.value, tenant.country_code, self._registry.default_code
            )
        pack = self._registry.get_pack(tenant.country_code)

        config = ResolvedSiteConfig.merge(tenant, pack)
        self._probe.site_resolved(
            tenant_id.value,
            country_code=config.country_code,
            status=config.status,
            is_public=config.is_public,
        )
        return config

    def resolve_by_domain(self, host: str) -> ResolvedSiteConfig | SiteNotFound:
        """Resolve a site from the hostname it is served on.

        Args:
            host: Request host, optionally with a port

        Returns:
            ResolvedSiteConfig, or SiteNotFound if no tenant owns the host

        Raises:
            StoreUnavailableError: If the domain lookup or the config read
                stays unavailable for every attempt
        """
        domain = normalize_host(host)
        tenant_id = self._with_retry(
            "find_tenant_id_by_domain",
            domain,
            lambda: self._store.find_tenant_id_by_domain(domain),
        )
        if tenant_id is None:
            self._probe.domain_not_resolved(domain)
            return SiteNotFound()
        return self.resolve(tenant_id)

    def _with_retry(self, operation: str, subject: str, read: Callable[[], T]) -> T:
        """Run a store read, retrying StoreUnavailableError up to max_attempts."""
        attempt = 1
        while True:
            try:
                return read()
            except StoreUnavailableError as e:
                if attempt >= self._max_attempts:
                    self._probe.store_unavailable(
                        subject, operation=operation, attempts=attempt, error=str(e)
                    )
                    raise
                self._probe.resolve_retrying(
                    subject, operation=operation, attempt=attempt, error=str(e)
                )
                attempt += 1
