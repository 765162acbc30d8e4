"""Domain probes for infrastructure observability.

Domain probes provide a high-level instrumentation API oriented around
domain semantics, keeping infrastructure code clean and testable.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class DynamoDBTableProbe(Protocol):
    """Domain probe for the lifecycle of the shared DynamoDB table handle."""

    def table_handle_created(
        self, table_name: str, region: str | None, endpoint_url: str | None
    ) -> None:
        """Record that the process-wide table handle was created."""
        ...

    def table_handle_reset(self, table_name: str) -> None:
        """Record that the cached table handle was invalidated."""
        ...

    def with_context(self, context: ObservationContext) -> DynamoDBTableProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultDynamoDBTableProbe:
    """Default implementation of DynamoDBTableProbe using structlog."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self) -> dict[str, Any]:
        """Get context metadata as kwargs for logging."""
        if self._context is None:
            return {}
        return self._context.as_dict()

    def with_context(self, context: ObservationContext) -> DefaultDynamoDBTableProbe:
        """Create a new probe with observation context bound."""
        return DefaultDynamoDBTableProbe(logger=self._logger, context=context)

    def table_handle_created(
        self, table_name: str, region: str | None, endpoint_url: str | None
    ) -> None:
        """Record that the process-wide table handle was created."""
        self._logger.info(
            "dynamodb_table_handle_created",
            table_name=table_name,
            region=region,
            endpoint_url=endpoint_url,
            **self._get_context_kwargs(),
        )

    def table_handle_reset(self, table_name: str) -> None:
        """Record that the cached table handle was invalidated."""
        self._logger.info(
            "dynamodb_table_handle_reset",
            table_name=table_name,
            **self._get_context_kwargs(),
        )
