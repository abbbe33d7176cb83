"""Protocol for authoring application service observability.

Defines the interface for domain probes that capture application-level
domain events for use case graph operations.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class AuthoringServiceProbe(Protocol):
    """Domain probe for authoring service operations."""

    def use_case_created(
        self,
        use_case_id: int,
        public_id: str,
        project_id: int,
        creator_id: int,
        flow_count: int,
        condition_count: int,
    ) -> None:
        """Record use case creation."""
        ...

    def use_case_updated(
        self,
        use_case_id: int,
        public_id: str,
        project_id: int,
        flow_count: int,
        condition_count: int,
    ) -> None:
        """Record use case update."""
        ...

    def use_case_deleted(self, use_case_id: int, public_id: str) -> None:
        """Record use case deletion."""
        ...

    def flow_created(
        self, flow_id: int, public_id: str, use_case_id: int, kind: str
    ) -> None:
        """Record standalone flow creation."""
        ...

    def condition_created(
        self, condition_id: int, public_id: str, use_case_id: int, kind: str
    ) -> None:
        """Record standalone condition creation."""
        ...

    def business_rule_created(
        self, business_rule_id: int, public_id: str, project_id: int
    ) -> None:
        """Record standalone business rule creation."""
        ...

    def authoring_failed(self, operation: str, error: str) -> None:
        """Record an aborted authoring operation."""
        ...

    def with_context(self, context: ObservationContext) -> AuthoringServiceProbe:
        """Return a new probe with additional context."""
        ...


class DefaultAuthoringServiceProbe:
    """Default implementation of AuthoringServiceProbe using structlog."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self, exclude: set[str] | None = None) -> dict[str, Any]:
        """Get context as kwargs dict, excluding specified keys.

        Args:
            exclude: Set of keys to exclude from context (avoids parameter collision)

        Returns:
            Context dict with excluded keys filtered out
        """
        if self._context is None:
            return {}

        context_dict = self._context.as_dict()
        if exclude:
            return {k: v for k, v in context_dict.items() if k not in exclude}
        return context_dict

    def with_context(self, context: ObservationContext) -> DefaultAuthoringServiceProbe:
        """Create a new probe with observation context bound."""
        return DefaultAuthoringServiceProbe(logger=self._logger, context=context)

    def use_case_created(
        self,
        use_case_id: int,
        public_id: str,
        project_id: int,
        creator_id: int,
        flow_count: int,
        condition_count: int,
    ) -> None:
        """Record use case creation."""
        context_kwargs = self._get_context_kwargs(
            exclude={
                "use_case_id",
                "public_id",
                "project_id",
                "creator_id",
                "flow_count",
                "condition_count",
            }
        )
        self._logger.info(
            "use_case_created",
            use_case_id=use_case_id,
            public_id=public_id,
            project_id=project_id,
            creator_id=creator_id,
            flow_count=flow_count,
            condition_count=condition_count,
            **context_kwargs,
        )

    def use_case_updated(
        self,
        use_case_id: int,
        public_id: str,
        project_id: int,
        flow_count: int,
        condition_count: int,
    ) -> None:
        """Record use case update."""
        context_kwargs = self._get_context_kwargs(
            exclude={
                "use_case_id",
                "public_id",
                "project_id",
                "flow_count",
                "condition_count",
            }
        )
        self._logger.info(
            "use_case_updated",
            use_case_id=use_case_id,
            public_id=public_id,
            project_id=project_id,
            flow_count=flow_count,
            condition_count=condition_count,
            **context_kwargs,
        )

    def use_case_deleted(self, use_case_id: int, public_id: str) -> None:
        """Record use case deletion."""
        context_kwargs = self._get_context_kwargs(exclude={"use_case_id", "public_id"})
        self._logger.info(
            "use_case_deleted",
            use_case_id=use_case_id,
            public_id=public_id,
            **context_kwargs,
        )

    def flow_created(
        self, flow_id: int, public_id: str, use_case_id: int, kind: str
    ) -> None:
        """Record standalone flow creation."""
        context_kwargs = self._get_context_kwargs(
            exclude={"flow_id", "public_id", "use_case_id", "kind"}
        )
        self._logger.info(
            "flow_created",
            flow_id=flow_id,
            public_id=public_id,
            use_case_id=use_case_id,
            kind=kind,
            **context_kwargs,
        )

    def condition_created(
        self, condition_id: int, public_id: str, use_case_id: int, kind: str
    ) -> None:
        """Record standalone condition creation."""
        context_kwargs = self._get_context_kwargs(
            exclude={"condition_id", "public_id", "use_case_id", "kind"}
        )
        self._logger.info(
            "condition_created",
            condition_id=condition_id,
            public_id=public_id,
            use_case_id=use_case_id,
            kind=kind,
            **context_kwargs,
        )

    def business_rule_created(
        self, business_rule_id: int, public_id: str, project_id: int
    ) -> None:
        """Record standalone business rule creation."""
        context_kwargs = self._get_context_kwargs(
            exclude={"business_rule_id", "public_id", "project_id"}
        )
        self._logger.info(
            "business_rule_created",
            business_rule_id=business_rule_id,
            public_id=public_id,
            project_id=project_id,
            **context_kwargs,
        )

    def authoring_failed(self, operation: str, error: str) -> None:
        """Record an aborted authoring operation."""
        context_kwargs = self._get_context_kwargs(exclude={"operation", "error"})
        self._logger.error(
            "authoring_failed",
            operation=operation,
            error=error,
            **context_kwargs,
        )
