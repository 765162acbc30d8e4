"""Unit tests for the /sites and /robots.txt HTTP routes."""

from unittest.mock import Mock

import pytest
from fastapi import FastAPI, status
from fastapi.testclient import TestClient

from sites.domain.country_packs import RO_PACK
from sites.domain.value_objects import (
    ResolvedSiteConfig,
    SiteNotFound,
    TenantConfig,
    TenantId,
)
from sites.ports.exceptions import StoreUnavailableError

LIVE_ROBOTS = "User-agent: *\nAllow: /\n\nSitemap: https://bob.example/sitemap.xml"
DISALLOW_ROBOTS = "User-agent: *\nDisallow: /"


@pytest.fixture
def mock_resolver():
    """Mock SiteConfigResolver for testing."""
    return Mock()


@pytest.fixture
def test_client(mock_resolver):
    """Create TestClient with mocked dependencies."""
    from sites import dependencies
    from sites.presentation import register_exception_handlers, router

    app = FastAPI()
    register_exception_handlers(app)

    app.dependency_overrides[dependencies.get_site_config_resolver] = (
        lambda: mock_resolver
    )
    app.include_router(router)

    return TestClient(app)


def _resolved(status_value: str = "LIVE", **attributes) -> ResolvedSiteConfig:
    tenant = TenantConfig.model_validate(
        {
            "tenantId": "client-bob",
            "domain": "bob.example",
            "status": status_value,
            **attributes,
        }
    )
    return ResolvedSiteConfig.merge(tenant, RO_PACK)


class TestRobotsTxt:
    """Tests for GET /sites/{tenant_id}/robots.txt."""

    def test_live_site(self, test_client, mock_resolver):
        """LIVE sites should allow crawling and reference the sitemap."""
        mock_resolver.resolve.return_value = _resolved("LIVE")

        response = test_client.get("/sites/client-bob/robots.txt")

        assert response.status_code == status.HTTP_200_OK
        assert response.text == LIVE_ROBOTS
        assert response.headers["content-type"].startswith("text/plain")
        mock_resolver.resolve.assert_called_once_with(TenantId(value="client-bob"))

    def test_non_live_site(self, test_client, mock_resolver):
        """Non-LIVE sites should disallow everything."""
        mock_resolver.resolve.return_value = _resolved("SUSPENDED")

        response = test_client.get("/sites/client-bob/robots.txt")

        assert response.status_code == status.HTTP_200_OK
        assert response.text == DISALLOW_ROBOTS

    def test_unknown_site(self, test_client, mock_resolver):
        """Unknown sites should get a 404 with the disallow-all body."""
        mock_resolver.resolve.return_value = SiteNotFound(tenant_id="ghost")

        response = test_client.get("/sites/ghost/robots.txt")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.text == DISALLOW_ROBOTS

    def test_invalid_tenant_segment_is_not_found(self, test_client, mock_resolver):
        """A path segment that cannot be a tenant should never reach the store."""
        response = test_client.get("/sites/a%23b/robots.txt")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.text == DISALLOW_ROBOTS
        mock_resolver.resolve.assert_not_called()

    def test_store_unavailable(self, test_client, mock_resolver):
        """Store failures should be a 503 that still disallows crawling."""
        mock_resolver.resolve.side_effect = StoreUnavailableError("down")

        response = test_client.get("/sites/client-bob/robots.txt")

        assert response.status_code == status.HTTP_503_SERVICE_UNAVAILABLE
        assert response.text == DISALLOW_ROBOTS


class TestHostRobotsTxt:
    """Tests for GET /robots.txt resolved by Host header."""

    def test_resolves_by_host(self, test_client, mock_resolver):
        """The Host header should select the site."""
        mock_resolver.resolve_by_domain.return_value = _resolved("LIVE")

        response = test_client.get("/robots.txt", headers={"Host": "bob.example"})

        assert response.status_code == status.HTTP_200_OK
        assert response.text == LIVE_ROBOTS
        mock_resolver.resolve_by_domain.assert_called_once_with("bob.example")

    def test_unknown_host(self, test_client, mock_resolver):
        """A host owned by no tenant should get a 404 disallow-all body."""
        mock_resolver.resolve_by_domain.return_value = SiteNotFound()

        response = test_client.get("/robots.txt", headers={"Host": "nobody.example"})

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.text == DISALLOW_ROBOTS

    def test_store_unavailable(self, test_client, mock_resolver):
        """Store failures should be a 503 that still disallows crawling."""
        mock_resolver.resolve_by_domain.side_effect = StoreUnavailableError("down")

        response = test_client.get("/robots.txt", headers={"Host": "bob.example"})

        assert response.status_code == status.HTTP_503_SERVICE_UNAVAILABLE
        assert response.text == DISALLOW_ROBOTS


class TestThemeCss:
    """Tests for GET /sites/{tenant_id}/theme.css."""

    def test_renders_theme(self, test_client, mock_resolver):
        """The theme should be served as custom properties on :root."""
        mock_resolver.resolve.return_value = _resolved(
            theme={"primary": "#ff0000", "radius": "4px"}
        )

        response = test_client.get("/sites/client-bob/theme.css")

        assert response.status_code == status.HTTP_200_OK
        assert response.text == ":root { --primary: #ff0000; --radius: 4px; }"
        assert response.headers["content-type"].startswith("text/css")

    def test_site_without_theme_is_empty(self, test_client, mock_resolver):
        """Sites without a theme should get an empty stylesheet."""
        mock_resolver.resolve.return_value = _resolved()

        response = test_client.get("/sites/client-bob/theme.css")

        assert response.status_code == status.HTTP_200_OK
        assert response.text == ""

    def test_unknown_site(self, test_client, mock_resolver):
        """Unknown sites should be a 404."""
        mock_resolver.resolve.return_value = SiteNotFound(tenant_id="ghost")

        response = test_client.get("/sites/ghost/theme.css")

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_store_unavailable(self, test_client, mock_resolver):
        """Store failures should be a 503."""
        mock_resolver.resolve.side_effect = StoreUnavailableError("down")

        response = test_client.get("/sites/client-bob/theme.css")

        assert response.status_code == status.HTTP_503_SERVICE_UNAVAILABLE


class TestSiteConfig:
    """Tests for GET /sites/{tenant_id}/config."""

    def test_returns_resolved_config(self, test_client, mock_resolver):
        """The merged configuration should be returned."""
        mock_resolver.resolve.return_value = _resolved("LIVE", name="Bob's Bakery")

        response = test_client.get("/sites/client-bob/config")

        assert response.status_code == status.HTTP_200_OK
        body = response.json()
        assert body["tenant_id"] == "client-bob"
        assert body["name"] == "Bob's Bakery"
        assert body["is_public"] is True
        assert body["base_url"] == "https://bob.example"
        assert body["country_code"] == "RO"
        assert body["currency"]["code"] == "RON"
        assert len(body["address"]["regions"]) == 42
        assert "X-Robots-Tag" not in response.headers

    def test_non_public_site_is_noindex(self, test_client, mock_resolver):
        """Non-public sites should be served with a noindex header."""
        mock_resolver.resolve.return_value = _resolved("DRAFT")

        response = test_client.get("/sites/client-bob/config")

        assert response.status_code == status.HTTP_200_OK
        assert response.headers["X-Robots-Tag"] == "noindex"

    def test_unknown_site(self, test_client, mock_resolver):
        """Unknown sites should be a 404 with a generic body."""
        mock_resolver.resolve.return_value = SiteNotFound(tenant_id="ghost")

        response = test_client.get("/sites/ghost/config")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json() == {"error": "Site not found"}

    def test_store_unavailable(self, test_client, mock_resolver):
        """Store failures should be a 503, never a 404."""
        mock_resolver.resolve.side_effect = StoreUnavailableError("down")

        response = test_client.get("/sites/client-bob/config")

        assert response.status_code == status.HTTP_503_SERVICE_UNAVAILABLE
        assert response.json() == {"error": "Site configuration unavailable"}
