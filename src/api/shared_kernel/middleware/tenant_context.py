"""Tenant context value object for resolved tenant identification.

This module contains the pure value object that represents a resolved
tenant context. It is framework-agnostic and contains no business logic,
making it safe for the shared kernel.

The actual resolution logic (header or path extraction and validation)
lives in the sites bounded context's dependency layer.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

TENANT_HEADER = "X-Tenant-ID"


class TenantContextError(Exception):
    """Raised when no usable tenant can be resolved for a request.

    The message is safe to return to the client.
    """

    pass


@dataclass(frozen=True)
class TenantContext:
    """Resolved tenant context for the current request.

    Attributes:
        tenant_id: The validated tenant identifier as a string.
        source: How the tenant was resolved - 'header' if from X-Tenant-ID,
            'path' if from a URL path segment.
    """

    tenant_id: str
    source: Literal["header", "path"]
