"""Probe for the lifecycle of the authoring write engine."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class ConnectionProbe(Protocol):
    """Domain probe for write engine lifecycle observability."""

    def engine_created(
        self, database: str, host: str, pool_size: int, isolation_level: str
    ) -> None:
        """Record that the write engine and its pool were created."""
        ...

    def engine_disposed(self, database: str) -> None:
        """Record that the write engine's pool was closed."""
        ...

    def with_context(self, context: ObservationContext) -> ConnectionProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultConnectionProbe:
    """ConnectionProbe writing structlog events."""

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

    def with_context(self, context: ObservationContext) -> DefaultConnectionProbe:
        return DefaultConnectionProbe(logger=self._logger, context=context)

    def engine_created(
        self, database: str, host: str, pool_size: int, isolation_level: str
    ) -> None:
        self._logger.info(
            "write_engine_created",
            database=database,
            host=host,
            pool_size=pool_size,
            isolation_level=isolation_level,
            **self._get_context_kwargs(),
        )

    def engine_disposed(self, database: str) -> None:
        self._logger.info(
            "write_engine_disposed",
            database=database,
            **self._get_context_kwargs(),
        )
