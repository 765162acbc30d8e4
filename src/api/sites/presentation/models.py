"""Pydantic models for sites API responses."""

from __future__ import annotations

from dataclasses import asdict
from typing import Any

from pydantic import BaseModel, Field

from sites.domain.value_objects import ContextPage, ResolvedSiteConfig


class ErrorResponse(BaseModel):
    """Error body shared by all JSON endpoints."""

    error: str = Field(..., description="Client-safe error message")


class ContextListResponse(BaseModel):
    """One page of context entries."""

    items: list[dict[str, Any]] = Field(
        ..., description="Stored documents, each with its entry id under 'id'"
    )
    next_cursor: str | None = Field(
        default=None, description="Opaque cursor for the next page, if any"
    )

    @classmethod
    def from_domain(cls, page: ContextPage) -> ContextListResponse:
        """Convert a ContextPage to the API response."""
        return cls(
            items=[entry.as_document() for entry in page.items],
            next_cursor=page.next_page_token,
        )


class SiteConfigResponse(BaseModel):
    """Resolved site configuration as consumed by the renderer."""

    tenant_id: str
    domain: str
    status: str
    is_public: bool
    base_url: str
    name: str
    description: str | None = None
    theme: dict[str, Any] | None = None
    country_code: str
    locale: str
    currency: dict[str, Any]
    address: dict[str, Any]
    legal: dict[str, Any]
    gdpr: dict[str, Any]
    attributes: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_domain(cls, config: ResolvedSiteConfig) -> SiteConfigResponse:
        """Convert a ResolvedSiteConfig to the API response.

        Args:
            config: Resolved site configuration

        Returns:
            SiteConfigResponse
        """
        return cls(
            tenant_id=config.tenant_id,
            domain=config.domain,
            status=config.status,
            is_public=config.is_public,
            base_url=config.base_url,
            name=config.name,
            description=config.description,
            theme=dict(config.theme) if config.theme is not None else None,
            country_code=config.country_code,
            locale=config.locale,
            currency=asdict(config.currency),
            address=asdict(config.address),
            legal=asdict(config.legal),
            gdpr=asdict(config.gdpr),
            attributes=dict(config.attributes),
        )
