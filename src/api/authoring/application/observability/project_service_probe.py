"""Protocol for project application service observability."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class ProjectServiceProbe(Protocol):
    """Domain probe for project service operations."""

    def project_created(self, project_id: int, slug: str, owner_id: int) -> None:
        """Record project creation."""
        ...

    def actor_created(self, actor_id: int, project_id: int, name: str) -> None:
        """Record actor creation."""
        ...

    def project_not_found(self, project_id: int) -> None:
        """Record an operation scoped to a missing project."""
        ...

    def with_context(self, context: ObservationContext) -> ProjectServiceProbe:
        """Return a new probe with additional context."""
        ...


class DefaultProjectServiceProbe:
    """Default implementation of ProjectServiceProbe using structlog."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self, exclude: set[str] | None = None) -> dict[str, Any]:
        if self._context is None:
            return {}

        context_dict = self._context.as_dict()
        if exclude:
            return {k: v for k, v in context_dict.items() if k not in exclude}
        return context_dict

    def with_context(self, context: ObservationContext) -> DefaultProjectServiceProbe:
        """Create a new probe with observation context bound."""
        return DefaultProjectServiceProbe(logger=self._logger, context=context)

    def project_created(self, project_id: int, slug: str, owner_id: int) -> None:
        """Record project creation."""
        context_kwargs = self._get_context_kwargs(
            exclude={"project_id", "slug", "owner_id"}
        )
        self._logger.info(
            "project_created",
            project_id=project_id,
            slug=slug,
            owner_id=owner_id,
            **context_kwargs,
        )

    def actor_created(self, actor_id: int, project_id: int, name: str) -> None:
        """Record actor creation."""
        context_kwargs = self._get_context_kwargs(
            exclude={"actor_id", "project_id", "name"}
        )
        self._logger.info(
            "actor_created",
            actor_id=actor_id,
            project_id=project_id,
            name=name,
            **context_kwargs,
        )

    def project_not_found(self, project_id: int) -> None:
        """Record an operation scoped to a missing project."""
        context_kwargs = self._get_context_kwargs(exclude={"project_id"})
        self._logger.debug(
            "project_not_found",
            project_id=project_id,
            **context_kwargs,
        )
