"""Unit tests for sites dependency providers."""

from unittest.mock import MagicMock, patch

import pytest

from infrastructure.settings import DynamoDBSettings, SitesSettings
from shared_kernel.middleware.observability import TenantContextProbe
from shared_kernel.middleware.tenant_context import TenantContext, TenantContextError
from sites.application.services import ContextQueryService, SiteConfigResolver
from sites.dependencies import (
    get_context_query_service,
    get_site_config_resolver,
    get_site_tenant_id,
    get_tenant_record_store,
    resolve_tenant_context,
)
from sites.domain.country_packs import CountryPackRegistry
from sites.domain.value_objects import TenantId
from sites.infrastructure.dynamodb_store import DynamoDBTenantRecordStore


@pytest.fixture
def mock_probe() -> MagicMock:
    return MagicMock(spec=TenantContextProbe)


class TestResolveTenantContext:
    """Tests for resolve_tenant_context."""

    def test_valid_header(self, mock_probe):
        """A valid tenant id should produce a TenantContext."""
        context = resolve_tenant_context("client-bob", "header", mock_probe)

        assert context == TenantContext(tenant_id="client-bob", source="header")
        mock_probe.tenant_resolved.assert_called_once_with("client-bob", source="header")

    def test_missing_value(self, mock_probe):
        """A missing header should raise with a client-safe message."""
        with pytest.raises(TenantContextError, match="X-Tenant-ID header is required"):
            resolve_tenant_context(None, "header", mock_probe)

        mock_probe.tenant_header_missing.assert_called_once_with()

    @pytest.mark.parametrize("raw", ["", " client-bob", "client#bob"])
    def test_invalid_value(self, mock_probe, raw):
        """Values that cannot be key material should be rejected."""
        with pytest.raises(TenantContextError, match="Invalid tenant id"):
            resolve_tenant_context(raw, "header", mock_probe)

        mock_probe.invalid_tenant_id_format.assert_called_once_with(
            raw_value=raw, source="header"
        )


class TestGetSiteTenantId:
    """Tests for get_site_tenant_id."""

    def test_valid_segment(self, mock_probe):
        """A valid path segment should become a TenantId."""
        assert get_site_tenant_id("client-bob", mock_probe) == TenantId(
            value="client-bob"
        )

    def test_invalid_segment_is_none(self, mock_probe):
        """An invalid segment should be treated as naming no tenant."""
        assert get_site_tenant_id("a#b", mock_probe) is None
        mock_probe.invalid_tenant_id_format.assert_called_once_with(
            raw_value="a#b", source="path"
        )


class TestServiceProviders:
    """Tests for store and service composition."""

    @patch("sites.dependencies.get_dynamodb_settings")
    def test_store_uses_dynamodb_settings(self, mock_get_settings, mock_table):
        """The store should be configured from DynamoDB settings."""
        mock_get_settings.return_value = DynamoDBSettings(
            consistent_reads=True,
            domain_index_name="HostIndex",
            domain_attribute="Host",
        )

        store = get_tenant_record_store(table=mock_table)

        assert isinstance(store, DynamoDBTenantRecordStore)
        assert store._consistent_reads is True
        assert store._domain_index_name == "HostIndex"
        assert store._domain_attribute == "Host"

    @patch("sites.dependencies.get_sites_settings")
    def test_resolver_uses_configured_attempts(self, mock_get_settings):
        """The resolver should read its retry budget from settings."""
        mock_get_settings.return_value = SitesSettings(resolve_max_attempts=3)

        resolver = get_site_config_resolver(
            store=MagicMock(), registry=CountryPackRegistry(), probe=MagicMock()
        )

        assert isinstance(resolver, SiteConfigResolver)
        assert resolver._max_attempts == 3

    @patch("sites.dependencies.get_sites_settings")
    def test_context_service_uses_configured_page_sizes(self, mock_get_settings):
        """The context service should read page sizes from settings."""
        mock_get_settings.return_value = SitesSettings(
            context_page_size=10, context_max_page_size=20
        )

        service = get_context_query_service(store=MagicMock(), probe=MagicMock())

        assert isinstance(service, ContextQueryService)
        assert service._default_page_size == 10
        assert service._max_page_size == 20
