"""Exception-to-response mapping for the sites API.

JSON endpoints answer errors with ``{"error": <message>}``. Messages are
fixed strings; store and key details never reach the client.
"""

from __future__ import annotations

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from shared_kernel.middleware.tenant_context import TenantContextError
from sites.ports.exceptions import InvalidPageTokenError, StoreUnavailableError

CONTEXT_STORE_UNAVAILABLE = "Context store unavailable"
INVALID_CURSOR = "Invalid cursor"


def error_response(status_code: int, message: str) -> JSONResponse:
    """Build a JSON error response."""
    return JSONResponse(status_code=status_code, content={"error": message})


async def _tenant_context_error_handler(
    request: Request, exc: TenantContextError
) -> JSONResponse:
    return error_response(status.HTTP_400_BAD_REQUEST, str(exc))


async def _invalid_page_token_handler(
    request: Request, exc: InvalidPageTokenError
) -> JSONResponse:
    return error_response(status.HTTP_400_BAD_REQUEST, INVALID_CURSOR)


async def _store_unavailable_handler(
    request: Request, exc: StoreUnavailableError
) -> JSONResponse:
    return error_response(
        status.HTTP_503_SERVICE_UNAVAILABLE, CONTEXT_STORE_UNAVAILABLE
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Install the sites exception handlers on an application.

    InvalidKeySchemeError has no handler and surfaces as a 500.
    """
    app.add_exception_handler(TenantContextError, _tenant_context_error_handler)
    app.add_exception_handler(InvalidPageTokenError, _invalid_page_token_handler)
    app.add_exception_handler(StoreUnavailableError, _store_unavailable_handler)
