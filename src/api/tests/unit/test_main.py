"""Unit tests for main FastAPI application configuration."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest
from fastapi.testclient import TestClient


@pytest.fixture
def mock_startup_probe() -> MagicMock:
    """Create mock startup probe."""
    return MagicMock()


class TestHealth:
    """Tests for the health endpoint."""

    def test_health_returns_ok(self) -> None:
        """Health check should not touch the store."""
        from main import app

        with patch("main.reset_dynamodb_table"):
            with TestClient(app) as client:
                response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "ok"}


class TestLifespan:
    """Tests for tenant_sites_lifespan."""

    def test_startup_reports_country_packs(self, mock_startup_probe) -> None:
        """Startup should report the default and supported country packs."""
        from main import app

        with (
            patch("main.DefaultStartupProbe", return_value=mock_startup_probe),
            patch("main.configure_logging") as mock_configure_logging,
            patch("main.reset_dynamodb_table"),
        ):
            with TestClient(app):
                pass

        mock_configure_logging.assert_called_once()
        kwargs = mock_startup_probe.application_started.call_args.kwargs
        assert kwargs["default_country_code"] == "RO"
        assert kwargs["supported_country_codes"] == ["DE", "RO", "US"]

    def test_shutdown_resets_table_handle(self, mock_startup_probe) -> None:
        """Shutdown should drop the shared table handle."""
        from main import app

        with (
            patch("main.DefaultStartupProbe", return_value=mock_startup_probe),
            patch("main.configure_logging"),
            patch("main.reset_dynamodb_table") as mock_reset,
        ):
            with TestClient(app):
                mock_reset.assert_not_called()

        mock_reset.assert_called_once_with()
        mock_startup_probe.application_stopped.assert_called_once_with()


class TestRoutes:
    """Tests for route registration."""

    def test_sites_routes_are_registered(self) -> None:
        """The application should expose the context and site routes."""
        from main import app

        paths = {route.path for route in app.routes}

        assert "/context" in paths
        assert "/context/{entry_id}" in paths
        assert "/sites/{tenant_id}/robots.txt" in paths
        assert "/sites/{tenant_id}/theme.css" in paths
        assert "/sites/{tenant_id}/config" in paths
        assert "/robots.txt" in paths
