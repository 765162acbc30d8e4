"""HTTP routes for resolved sites and their derived artifacts.

Tenant-addressed routes live under ``/sites/{tenant_id}``; ``/robots.txt``
resolves the site from the request's Host header.

Non-public and unknown sites always get the disallow-all robots body, and
so does a request that fails because the store is unavailable.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Header, Response, status
from fastapi.responses import JSONResponse, PlainTextResponse

from sites.application.services import SiteConfigResolver
from sites.dependencies import get_site_config_resolver, get_site_tenant_id
from sites.domain.artifacts import (
    DISALLOW_ALL_ROBOTS,
    render_robots_txt,
    render_theme_stylesheet,
)
from sites.domain.value_objects import ResolvedSiteConfig, SiteNotFound, TenantId
from sites.ports.exceptions import StoreUnavailableError
from sites.presentation.errors import error_response
from sites.presentation.models import ErrorResponse, SiteConfigResponse

router = APIRouter(prefix="/sites", tags=["sites"])
host_router = APIRouter(tags=["sites"])

SITE_NOT_FOUND = "Site not found"
SITE_STORE_UNAVAILABLE = "Site configuration unavailable"
NOINDEX_HEADERS = {"X-Robots-Tag": "noindex"}


def _resolve(
    resolver: SiteConfigResolver, tenant_id: TenantId | None
) -> ResolvedSiteConfig | SiteNotFound:
    if tenant_id is None:
        return SiteNotFound()
    return resolver.resolve(tenant_id)


def _robots_response(resolution: ResolvedSiteConfig | SiteNotFound) -> PlainTextResponse:
    status_code = (
        status.HTTP_404_NOT_FOUND
        if isinstance(resolution, SiteNotFound)
        else status.HTTP_200_OK
    )
    return PlainTextResponse(render_robots_txt(resolution), status_code=status_code)


@router.get("/{tenant_id}/robots.txt", response_class=PlainTextResponse)
def get_robots_txt(
    site_tenant_id: Annotated[TenantId | None, Depends(get_site_tenant_id)],
    resolver: Annotated[SiteConfigResolver, Depends(get_site_config_resolver)],
) -> PlainTextResponse:
    """Serve robots.txt for a tenant site.

    Returns:
        200 with the site's robots body, 404 with the disallow-all body if
        the site does not exist, or 503 with the disallow-all body if the
        store is unavailable
    """
    try:
        resolution = _resolve(resolver, site_tenant_id)
    except StoreUnavailableError:
        return PlainTextResponse(
            DISALLOW_ALL_ROBOTS, status_code=status.HTTP_503_SERVICE_UNAVAILABLE
        )
    return _robots_response(resolution)


@host_router.get("/robots.txt", response_class=PlainTextResponse)
def get_host_robots_txt(
    resolver: Annotated[SiteConfigResolver, Depends(get_site_config_resolver)],
    host: Annotated[str, Header()] = "",
) -> PlainTextResponse:
    """Serve robots.txt for the site owning the request's Host header.

    Same bodies and status codes as ``/sites/{tenant_id}/robots.txt``.
    """
    if not host:
        return _robots_response(SiteNotFound())
    try:
        resolution = resolver.resolve_by_domain(host)
    except StoreUnavailableError:
        return PlainTextResponse(
            DISALLOW_ALL_ROBOTS, status_code=status.HTTP_503_SERVICE_UNAVAILABLE
        )
    return _robots_response(resolution)


@router.get("/{tenant_id}/theme.css")
def get_theme_css(
    site_tenant_id: Annotated[TenantId | None, Depends(get_site_tenant_id)],
    resolver: Annotated[SiteConfigResolver, Depends(get_site_config_resolver)],
) -> Response:
    """Serve the site's theme as CSS custom properties on ``:root``.

    Returns:
        200 with the stylesheet (empty for sites without a theme), 404 if
        the site does not exist, 503 if the store is unavailable
    """
    try:
        resolution = _resolve(resolver, site_tenant_id)
    except StoreUnavailableError:
        return Response(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE, media_type="text/css"
        )
    if isinstance(resolution, SiteNotFound):
        return Response(status_code=status.HTTP_404_NOT_FOUND, media_type="text/css")
    return Response(
        content=render_theme_stylesheet(resolution.theme), media_type="text/css"
    )


@router.get(
    "/{tenant_id}/config",
    response_model=None,
    responses={
        404: {"model": ErrorResponse, "description": "Site not found"},
        503: {"model": ErrorResponse, "description": "Site store unavailable"},
    },
)
def get_site_config(
    site_tenant_id: Annotated[TenantId | None, Depends(get_site_tenant_id)],
    resolver: Annotated[SiteConfigResolver, Depends(get_site_config_resolver)],
) -> JSONResponse:
    """Get the resolved configuration of a tenant site.

    Non-public sites are served with ``X-Robots-Tag: noindex``.

    Returns:
        200 with SiteConfigResponse, 404 ``{"error": "Site not found"}``, or
        503 if the store is unavailable
    """
    try:
        resolution = _resolve(resolver, site_tenant_id)
    except StoreUnavailableError:
        return error_response(
            status.HTTP_503_SERVICE_UNAVAILABLE, SITE_STORE_UNAVAILABLE
        )
    if isinstance(resolution, SiteNotFound):
        return error_response(status.HTTP_404_NOT_FOUND, SITE_NOT_FOUND)

    body = SiteConfigResponse.from_domain(resolution).model_dump(mode="json")
    headers = None if resolution.is_public else NOINDEX_HEADERS
    return JSONResponse(content=body, headers=headers)
