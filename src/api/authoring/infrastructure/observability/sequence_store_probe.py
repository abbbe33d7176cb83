"""Domain probe for sequence counter operations.

Following Domain-Oriented Observability patterns, this probe captures
identifier allocation events without exposing logging details to the store.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class SequenceStoreProbe(Protocol):
    """Domain probe for sequence store operations."""

    def counters_created(self, owner_kind: str, owner_id: int, count: int) -> None:
        """Record that counter rows were created for a new owner."""
        ...

    def counter_incremented(
        self, owner_kind: str, owner_id: int, counter_kind: str, value: int
    ) -> None:
        """Record that a counter value was allocated."""
        ...

    def counter_missing(self, owner_kind: str, owner_id: int, counter_kind: str) -> None:
        """Record that an allocation hit a missing counter row."""
        ...

    def counters_deleted(self, owner_kind: str, owner_id: int) -> None:
        """Record that the counter rows of an owner were deleted."""
        ...

    def with_context(self, context: ObservationContext) -> SequenceStoreProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultSequenceStoreProbe:
    """Default implementation of SequenceStoreProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultSequenceStoreProbe:
        """Create a new probe with observation context bound."""
        return DefaultSequenceStoreProbe(logger=self._logger, context=context)

    def counters_created(self, owner_kind: str, owner_id: int, count: int) -> None:
        """Record that counter rows were created for a new owner."""
        self._logger.debug(
            "sequence_counters_created",
            owner_kind=owner_kind,
            owner_id=owner_id,
            count=count,
            **self._get_context_kwargs(),
        )

    def counter_incremented(
        self, owner_kind: str, owner_id: int, counter_kind: str, value: int
    ) -> None:
        """Record that a counter value was allocated."""
        self._logger.debug(
            "sequence_counter_incremented",
            owner_kind=owner_kind,
            owner_id=owner_id,
            counter_kind=counter_kind,
            value=value,
            **self._get_context_kwargs(),
        )

    def counter_missing(self, owner_kind: str, owner_id: int, counter_kind: str) -> None:
        """Record that an allocation hit a missing counter row."""
        self._logger.error(
            "sequence_counter_missing",
            owner_kind=owner_kind,
            owner_id=owner_id,
            counter_kind=counter_kind,
            **self._get_context_kwargs(),
        )

    def counters_deleted(self, owner_kind: str, owner_id: int) -> None:
        """Record that the counter rows of an owner were deleted."""
        self._logger.debug(
            "sequence_counters_deleted",
            owner_kind=owner_kind,
            owner_id=owner_id,
            **self._get_context_kwargs(),
        )
