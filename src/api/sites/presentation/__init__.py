"""Sites presentation layer.

Context entry routes (``/context``), tenant-addressed site routes
(``/sites/{tenant_id}/...``) and the Host-addressed ``/robots.txt``.
"""

from __future__ import annotations

from fastapi import APIRouter

from sites.presentation import context_routes, site_routes
from sites.presentation.errors import register_exception_handlers

router = APIRouter()

router.include_router(context_routes.router)
router.include_router(site_routes.router)
router.include_router(site_routes.host_router)

__all__ = ["router", "register_exception_handlers"]
