"""Domain probe for context entry operations."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class ContextQueryServiceProbe(Protocol):
    """Domain probe for context entry operations."""

    def context_listed(
        self, tenant_id: str, prefix: str, count: int, has_more: bool
    ) -> None:
        """Record that a page of context entries was served."""
        ...

    def context_entry_retrieved(self, tenant_id: str, entry_id: str) -> None:
        """Record that a context entry was served."""
        ...

    def context_entry_not_found(self, tenant_id: str, entry_id: str) -> None:
        """Record that a requested context entry does not exist."""
        ...

    def context_entry_created(self, tenant_id: str, entry_id: str) -> None:
        """Record that a context entry was created."""
        ...

    def context_entry_updated(self, tenant_id: str, entry_id: str) -> None:
        """Record that a context entry was replaced."""
        ...

    def context_entry_deleted(self, tenant_id: str, entry_id: str) -> None:
        """Record that a context entry was deleted."""
        ...

    def invalid_page_token(self, tenant_id: str) -> None:
        """Record that a caller presented a page token not valid for them."""
        ...

    def with_context(self, context: ObservationContext) -> ContextQueryServiceProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultContextQueryServiceProbe:
    """Default implementation of ContextQueryServiceProbe using structlog."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self) -> dict[str, Any]:
        if self._context is None:
            return {}
        return self._context.as_dict()

    def with_context(
        self, context: ObservationContext
    ) -> DefaultContextQueryServiceProbe:
        return DefaultContextQueryServiceProbe(logger=self._logger, context=context)

    def context_listed(
        self, tenant_id: str, prefix: str, count: int, has_more: bool
    ) -> None:
        self._logger.info(
            "context_listed",
            tenant_id=tenant_id,
            prefix=prefix,
            count=count,
            has_more=has_more,
            **self._get_context_kwargs(),
        )

    def context_entry_retrieved(self, tenant_id: str, entry_id: str) -> None:
        self._logger.debug(
            "context_entry_retrieved",
            tenant_id=tenant_id,
            entry_id=entry_id,
            **self._get_context_kwargs(),
        )

    def context_entry_not_found(self, tenant_id: str, entry_id: str) -> None:
        self._logger.debug(
            "context_entry_not_found",
            tenant_id=tenant_id,
            entry_id=entry_id,
            **self._get_context_kwargs(),
        )

    def context_entry_created(self, tenant_id: str, entry_id: str) -> None:
        self._logger.info(
            "context_entry_created",
            tenant_id=tenant_id,
            entry_id=entry_id,
            **self._get_context_kwargs(),
        )

    def context_entry_updated(self, tenant_id: str, entry_id: str) -> None:
        self._logger.info(
            "context_entry_updated",
            tenant_id=tenant_id,
            entry_id=entry_id,
            **self._get_context_kwargs(),
        )

    def context_entry_deleted(self, tenant_id: str, entry_id: str) -> None:
        self._logger.info(
            "context_entry_deleted",
            tenant_id=tenant_id,
            entry_id=entry_id,
            **self._get_context_kwargs(),
        )

    def invalid_page_token(self, tenant_id: str) -> None:
        self._logger.warning(
            "invalid_page_token",
            tenant_id=tenant_id,
            **self._get_context_kwargs(),
        )
