"""HTTP routes for tenant context entries.

The tenant is taken from the X-Tenant-ID header and never from the query
string or cursor. Errors are answered with ``{"error": ...}`` bodies; see
``sites.presentation.errors``.
"""

from __future__ import annotations

from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends, Query, Response, status
from fastapi.responses import JSONResponse

from shared_kernel.middleware.tenant_context import TenantContext
from sites.application.services import ContextQueryService
from sites.dependencies import get_context_query_service, get_tenant_context
from sites.domain.value_objects import KEY_DELIMITER, TenantId
from sites.ports.repositories import RESERVED_ATTRIBUTES
from sites.presentation.errors import error_response
from sites.presentation.models import ContextListResponse, ErrorResponse

router = APIRouter(prefix="/context", tags=["context"])

ENTRY_NOT_FOUND = "Context entry not found"


def _is_entry_id(entry_id: str) -> bool:
    return bool(entry_id) and KEY_DELIMITER not in entry_id


def _reserved_keys_error(payload: dict[str, Any]) -> JSONResponse | None:
    reserved = sorted(RESERVED_ATTRIBUTES & payload.keys())
    if reserved:
        return error_response(
            status.HTTP_400_BAD_REQUEST,
            f"Payload must not set {', '.join(reserved)}",
        )
    return None


@router.get(
    "",
    responses={
        400: {
            "model": ErrorResponse,
            "description": "Missing tenant or invalid cursor",
        },
        503: {"model": ErrorResponse, "description": "Context store unavailable"},
    },
)
def list_context(
    tenant: Annotated[TenantContext, Depends(get_tenant_context)],
    service: Annotated[ContextQueryService, Depends(get_context_query_service)],
    cursor: Annotated[str | None, Query(description="Cursor from a previous page")] = None,
    limit: Annotated[int | None, Query(ge=1, le=100, description="Page size")] = None,
) -> ContextListResponse:
    """List the calling tenant's context entries.

    Args:
        tenant: Tenant resolved from the X-Tenant-ID header
        service: Context query service
        cursor: Opaque cursor returned as ``next_cursor`` by a previous call
        limit: Page size (defaults to the configured page size)

    Returns:
        ContextListResponse with items and the next cursor

    Raises:
        TenantContextError: 400 if the header is missing or invalid
        InvalidPageTokenError: 400 if the cursor is malformed or not the caller's
        StoreUnavailableError: 503 if the store cannot be reached
    """
    page = service.list(
        TenantId(value=tenant.tenant_id), page_token=cursor, limit=limit
    )
    return ContextListResponse.from_domain(page)


@router.get(
    "/{entry_id}",
    response_model=None,
    responses={
        400: {"model": ErrorResponse, "description": "Missing or invalid tenant"},
        404: {"model": ErrorResponse, "description": "Entry not found"},
        503: {"model": ErrorResponse, "description": "Context store unavailable"},
    },
)
def get_context_entry(
    entry_id: str,
    tenant: Annotated[TenantContext, Depends(get_tenant_context)],
    service: Annotated[ContextQueryService, Depends(get_context_query_service)],
) -> dict[str, Any] | JSONResponse:
    """Get one context entry of the calling tenant.

    Returns:
        The stored document with its id, or 404 if absent
    """
    if not _is_entry_id(entry_id):
        return error_response(status.HTTP_404_NOT_FOUND, ENTRY_NOT_FOUND)

    entry = service.get(TenantId(value=tenant.tenant_id), entry_id)
    if entry is None:
        return error_response(status.HTTP_404_NOT_FOUND, ENTRY_NOT_FOUND)
    return entry.as_document()


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=None,
    responses={
        400: {
            "model": ErrorResponse,
            "description": "Invalid tenant or key attributes",
        },
        503: {"model": ErrorResponse, "description": "Context store unavailable"},
    },
)
def create_context_entry(
    payload: Annotated[dict[str, Any], Body()],
    tenant: Annotated[TenantContext, Depends(get_tenant_context)],
    service: Annotated[ContextQueryService, Depends(get_context_query_service)],
) -> dict[str, Any] | JSONResponse:
    """Create a context entry for the calling tenant.

    The entry id is generated; ``tenantId`` and ``id`` in the payload are
    overwritten.

    Returns:
        The stored document with its generated id

    Raises:
        StoreUnavailableError: 503 if the store cannot be reached
    """
    error = _reserved_keys_error(payload)
    if error is not None:
        return error

    entry = service.create(TenantId(value=tenant.tenant_id), payload)
    return entry.as_document()


@router.put(
    "/{entry_id}",
    response_model=None,
    responses={
        400: {
            "model": ErrorResponse,
            "description": "Invalid tenant or key attributes",
        },
        404: {"model": ErrorResponse, "description": "Entry not found"},
        503: {"model": ErrorResponse, "description": "Context store unavailable"},
    },
)
def update_context_entry(
    entry_id: str,
    payload: Annotated[dict[str, Any], Body()],
    tenant: Annotated[TenantContext, Depends(get_tenant_context)],
    service: Annotated[ContextQueryService, Depends(get_context_query_service)],
) -> dict[str, Any] | JSONResponse:
    """Update an existing context entry of the calling tenant.

    Returns:
        The stored document, or 404 if the entry does not exist
    """
    if not _is_entry_id(entry_id):
        return error_response(status.HTTP_404_NOT_FOUND, ENTRY_NOT_FOUND)
    error = _reserved_keys_error(payload)
    if error is not None:
        return error

    entry = service.update(TenantId(value=tenant.tenant_id), entry_id, payload)
    if entry is None:
        return error_response(status.HTTP_404_NOT_FOUND, ENTRY_NOT_FOUND)
    return entry.as_document()


@router.delete(
    "/{entry_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_model=None,
    responses={
        404: {"model": ErrorResponse, "description": "Entry not found"},
        503: {"model": ErrorResponse, "description": "Context store unavailable"},
    },
)
def delete_context_entry(
    entry_id: str,
    tenant: Annotated[TenantContext, Depends(get_tenant_context)],
    service: Annotated[ContextQueryService, Depends(get_context_query_service)],
) -> Response:
    """Delete a context entry of the calling tenant.

    Returns:
        204 on success, 404 if the entry does not exist
    """
    if not _is_entry_id(entry_id) or not service.delete(
        TenantId(value=tenant.tenant_id), entry_id
    ):
        return error_response(status.HTTP_404_NOT_FOUND, ENTRY_NOT_FOUND)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
