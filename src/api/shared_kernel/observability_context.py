"""Observation context for domain-oriented observability.

Observation contexts collect and manage contextual metadata for instrumentation,
following the Domain Oriented Observability pattern.

See: https://martinfowler.com/articles/domain-oriented-observability.html
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class ObservationContext:
    """Immutable context containing metadata for observability.

    Captures request-scoped metadata that should be included with all
    instrumentation events. Domain identifiers such as the tenant id are
    passed to probe methods explicitly and are not part of the context.

    Attributes:
        request_id: Unique identifier for the current request.
        host: Host header the request was addressed to (if known).
        path: Request path (if known).
        extra: Additional contextual metadata.

    Example:
        context = ObservationContext(request_id="req-123", host="bob.example")
        probe = DefaultSiteConfigResolverProbe().with_context(context)
    """

    request_id: str | None = None
    host: str | None = None
    path: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    def as_dict(self) -> dict[str, Any]:
        """Convert context to a dictionary for logging.

        Only includes non-None values to keep logs clean.
        """
        result: dict[str, Any] = {}
        if self.request_id is not None:
            result["request_id"] = self.request_id
        if self.host is not None:
            result["host"] = self.host
        if self.path is not None:
            result["path"] = self.path
        result.update(self.extra)
        return result

    def with_extra(self, **kwargs: Any) -> ObservationContext:
        """Create a new context with additional metadata."""
        return ObservationContext(
            request_id=self.request_id,
            host=self.host,
            path=self.path,
            extra={**self.extra, **kwargs},
        )
