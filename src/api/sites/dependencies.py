"""Dependency injection for the sites bounded context.

Composes infrastructure resources (the shared DynamoDB table handle,
settings) with sites-specific components (store, registry, services)
and resolves the tenant a request is scoped to.
"""

from functools import lru_cache
from typing import Annotated, Any, Literal

from fastapi import Depends, Header

from infrastructure.dynamodb import get_dynamodb_table
from infrastructure.settings import get_dynamodb_settings, get_sites_settings
from shared_kernel.middleware.observability import (
    DefaultTenantContextProbe,
    TenantContextProbe,
)
from shared_kernel.middleware.tenant_context import (
    TENANT_HEADER,
    TenantContext,
    TenantContextError,
)
from sites.application.observability import (
    ContextQueryServiceProbe,
    DefaultContextQueryServiceProbe,
    DefaultSiteConfigResolverProbe,
    SiteConfigResolverProbe,
)
from sites.application.services import ContextQueryService, SiteConfigResolver
from sites.domain.country_packs import CountryPackRegistry
from sites.domain.value_objects import TenantId
from sites.infrastructure.dynamodb_store import DynamoDBTenantRecordStore
from sites.infrastructure.observability import DefaultTenantRecordStoreProbe
from sites.ports.repositories import ITenantRecordStore


@lru_cache
def get_country_pack_registry() -> CountryPackRegistry:
    """Get the process-wide country pack registry.

    The default pack comes from TENANT_SITES_DEFAULT_COUNTRY_CODE.

    Raises:
        ValueError: If the configured default has no built-in pack
    """
    return CountryPackRegistry(default_code=get_sites_settings().default_country_code)


def get_tenant_context_probe() -> TenantContextProbe:
    """Get TenantContextProbe instance."""
    return DefaultTenantContextProbe()


def resolve_tenant_context(
    raw_value: str | None,
    source: Literal["header", "path"],
    probe: TenantContextProbe,
) -> TenantContext:
    """Validate a raw tenant identifier and wrap it in a TenantContext.

    Args:
        raw_value: Tenant id from the header or path, or None if absent
        source: 'header' or 'path'
        probe: Domain probe for observability

    Returns:
        TenantContext for the validated tenant

    Raises:
        TenantContextError: If the value is missing or cannot be a tenant id
    """
    if raw_value is None:
        probe.tenant_header_missing()
        raise TenantContextError(f"{TENANT_HEADER} header is required")

    try:
        tenant_id = TenantId.from_string(raw_value)
    except ValueError as e:
        probe.invalid_tenant_id_format(raw_value=raw_value, source=source)
        raise TenantContextError(f"Invalid tenant id: {raw_value!r}") from e

    probe.tenant_resolved(tenant_id.value, source=source)
    return TenantContext(tenant_id=tenant_id.value, source=source)


def get_tenant_context(
    probe: Annotated[TenantContextProbe, Depends(get_tenant_context_probe)],
    x_tenant_id: Annotated[str | None, Header(alias=TENANT_HEADER)] = None,
) -> TenantContext:
    """Resolve the tenant of a context API request from the X-Tenant-ID header.

    Raises:
        TenantContextError: If the header is missing or invalid (HTTP 400)
    """
    return resolve_tenant_context(x_tenant_id, "header", probe)


def get_site_tenant_id(
    tenant_id: str,
    probe: Annotated[TenantContextProbe, Depends(get_tenant_context_probe)],
) -> TenantId | None:
    """Resolve the tenant named by a ``/sites/{tenant_id}/...`` path.

    Returns:
        TenantId, or None if the segment cannot name any tenant (such
        requests are answered as "site not found")
    """
    try:
        context = resolve_tenant_context(tenant_id, "path", probe)
    except TenantContextError:
        return None
    return TenantId(value=context.tenant_id)


def get_tenant_record_store(
    table: Annotated[Any, Depends(get_dynamodb_table)],
) -> ITenantRecordStore:
    """Get the DynamoDB-backed tenant record store.

    Args:
        table: Application-scoped DynamoDB table handle

    Returns:
        DynamoDBTenantRecordStore instance
    """
    settings = get_dynamodb_settings()
    return DynamoDBTenantRecordStore(
        table=table,
        probe=DefaultTenantRecordStoreProbe(),
        consistent_reads=settings.consistent_reads,
        domain_index_name=settings.domain_index_name,
        domain_attribute=settings.domain_attribute,
    )


def get_site_config_resolver_probe() -> SiteConfigResolverProbe:
    """Get SiteConfigResolverProbe instance."""
    return DefaultSiteConfigResolverProbe()


def get_site_config_resolver(
    store: Annotated[ITenantRecordStore, Depends(get_tenant_record_store)],
    registry: Annotated[CountryPackRegistry, Depends(get_country_pack_registry)],
    probe: Annotated[SiteConfigResolverProbe, Depends(get_site_config_resolver_probe)],
) -> SiteConfigResolver:
    """Get SiteConfigResolver instance.

    Args:
        store: Tenant record store
        registry: Process-wide country pack registry
        probe: Resolver probe for observability

    Returns:
        SiteConfigResolver instance
    """
    return SiteConfigResolver(
        store=store,
        registry=registry,
        probe=probe,
        max_attempts=get_sites_settings().resolve_max_attempts,
    )


def get_context_query_service_probe() -> ContextQueryServiceProbe:
    """Get ContextQueryServiceProbe instance."""
    return DefaultContextQueryServiceProbe()


def get_context_query_service(
    store: Annotated[ITenantRecordStore, Depends(get_tenant_record_store)],
    probe: Annotated[
        ContextQueryServiceProbe, Depends(get_context_query_service_probe)
    ],
) -> ContextQueryService:
    """Get ContextQueryService instance.

    Args:
        store: Tenant record store
        probe: Context service probe for observability

    Returns:
        ContextQueryService instance
    """
    settings = get_sites_settings()
    return ContextQueryService(
        store=store,
        probe=probe,
        default_page_size=settings.context_page_size,
        max_page_size=settings.context_max_page_size,
    )
