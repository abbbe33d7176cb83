"""Authoring application service.

Coordinates every write to a use case graph. Each public method is one
transaction: relations are resolved and the flow graph planned first,
identifiers are then allocated from the sequence store in dependency order,
and the rows are written. Any error rolls the whole call back, counter
increments included.
"""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from authoring.application.graph_builder import PlannedFlow, plan_flows
from authoring.application.observability import (
    AuthoringServiceProbe,
    DefaultAuthoringServiceProbe,
)
from authoring.application.payloads import (
    BusinessRulePayload,
    ConditionPayload,
    FlowPayload,
    UseCasePayload,
)
from authoring.application.relation_resolver import (
    ActorInstruction,
    BusinessRuleInstruction,
    Connect,
    RelationResolver,
    ResolvedRelations,
)
from authoring.domain.entities import BusinessRule, Condition, Flow, UseCase
from authoring.domain.public_ids import (
    business_rule_public_id,
    condition_public_id,
    counter_kind_for_condition,
    counter_kind_for_flow,
    flow_public_id,
    use_case_public_id,
)
from authoring.domain.value_objects import (
    USE_CASE_COUNTER_KINDS,
    CounterKind,
    FlowKind,
    Mutability,
    OwnerKind,
    RuleType,
    StepSpec,
)
from authoring.ports.exceptions import (
    AuthoringError,
    DuplicateNormalFlowError,
    ForeignOwnershipError,
    OwnershipMismatchError,
    ParentFlowNotFoundError,
    ParentFlowRequiredError,
    ProjectNotFoundError,
    ReferenceNotFoundError,
    UseCaseNotFoundError,
    UseCaseValidationError,
)
from authoring.ports.repositories import (
    IProjectRepository,
    ISequenceStore,
    IUseCaseRepository,
    UseCaseHeader,
)
from infrastructure.settings import AuthoringSettings, get_authoring_settings
from shared_kernel.observability_context import ObservationContext

# Errors met while assembling a use case graph; reported wrapped in
# UseCaseValidationError by create_use_case and update_use_case.
_GRAPH_ERRORS = (
    ForeignOwnershipError,
    ReferenceNotFoundError,
    DuplicateNormalFlowError,
    ParentFlowRequiredError,
    ParentFlowNotFoundError,
)


class AuthoringService:
    """Application service for use case graphs and their children.

    The open session is handed explicitly to the resolver, the sequence
    store and the repositories; none of them keep transaction state.
    """

    def __init__(
        self,
        session: AsyncSession,
        sequence_store: ISequenceStore,
        use_case_repository: IUseCaseRepository,
        project_repository: IProjectRepository,
        resolver: RelationResolver,
        probe: AuthoringServiceProbe | None = None,
        settings: AuthoringSettings | None = None,
        context: ObservationContext | None = None,
    ):
        """Initialize AuthoringService with dependencies.

        Args:
            session: Database session for transaction management
            sequence_store: Store of the counters behind public identifiers
            use_case_repository: Repository for use case graphs
            project_repository: Repository for projects, actors and rules
            resolver: Resolver for actor and business rule relations
            probe: Optional domain probe for observability
            settings: Optional authoring settings (defaults to cached settings)
            context: Optional observation context bound to every event
        """
        self._session = session
        self._sequences = sequence_store
        self._use_cases = use_case_repository
        self._projects = project_repository
        self._resolver = resolver
        self._probe = probe or DefaultAuthoringServiceProbe()
        self._settings = settings or get_authoring_settings()
        self._context = context or ObservationContext()

    async def create_use_case(
        self, project_id: int, creator_id: int, payload: UseCasePayload
    ) -> UseCase:
        """Create a use case with its whole nested graph.

        Args:
            project_id: Project the use case is created in
            creator_id: User creating the use case
            payload: Full use case graph

        Returns:
            The persisted use case with every assigned public identifier

        Raises:
            ProjectNotFoundError: If the project does not exist
            UseCaseValidationError: If a relation or flow of the payload is invalid
            CounterNotFoundError: If a project counter row is missing
        """
        probe = self._project_probe(project_id)
        try:
            async with self._session.begin():
                if await self._projects.get_by_id(self._session, project_id) is None:
                    raise ProjectNotFoundError(project_id)

                try:
                    relations = await self._resolver.resolve(
                        self._session, project_id, payload
                    )
                    plan = plan_flows(payload.flows)

                    primary_actor_id = await self._apply_actor(
                        project_id, relations.primary_actor
                    )
                    value = await self._sequences.next_value(
                        self._session, project_id, OwnerKind.PROJECT, CounterKind.USE_CASE
                    )
                    header = await self._use_cases.add(
                        self._session,
                        project_id=project_id,
                        creator_id=creator_id,
                        public_id=use_case_public_id(value),
                        primary_actor_id=primary_actor_id,
                        details=payload.details(),
                        slug_max_length=self._settings.slug_max_length,
                    )
                    await self._sequences.create_counters(
                        self._session,
                        header.id,
                        OwnerKind.USE_CASE,
                        USE_CASE_COUNTER_KINDS,
                    )
                    await self._write_children(header, relations, payload, plan)
                except _GRAPH_ERRORS as e:
                    raise UseCaseValidationError(e) from e

                use_case = await self._load(header.id)

        except AuthoringError as e:
            probe.authoring_failed(operation="create_use_case", error=str(e))
            raise

        probe.use_case_created(
            use_case_id=use_case.id,
            public_id=use_case.public_id,
            project_id=project_id,
            creator_id=creator_id,
            flow_count=len(use_case.flows),
            condition_count=len(use_case.conditions),
        )
        return use_case

    async def update_use_case(
        self,
        use_case_id: int,
        project_id: int,
        creator_id: int,
        payload: UseCasePayload,
    ) -> UseCase:
        """Replace the graph of an existing use case.

        Conditions and flows are deleted and recreated with fresh
        identifiers; actor and business rule links are rebuilt. The use
        case keeps its own public identifier.

        Raises:
            UseCaseNotFoundError: If the use case does not exist
            OwnershipMismatchError: If the project or creator does not match
            UseCaseValidationError: If a relation or flow of the payload is invalid
        """
        probe = self._project_probe(project_id)
        try:
            async with self._session.begin():
                header = await self._get_header(use_case_id)
                if header.project_id != project_id:
                    raise OwnershipMismatchError(use_case_id, "project")
                if header.creator_id != creator_id:
                    raise OwnershipMismatchError(use_case_id, "creator")

                try:
                    relations = await self._resolver.resolve(
                        self._session, project_id, payload
                    )
                    plan = plan_flows(payload.flows)

                    primary_actor_id = await self._apply_actor(
                        project_id, relations.primary_actor
                    )
                    await self._use_cases.update_details(
                        self._session,
                        use_case_id=use_case_id,
                        primary_actor_id=primary_actor_id,
                        details=payload.details(),
                        slug_max_length=self._settings.slug_max_length,
                    )
                    await self._use_cases.clear_links(self._session, use_case_id)
                    await self._use_cases.delete_conditions(self._session, use_case_id)
                    await self._use_cases.delete_flows(self._session, use_case_id)
                    await self._write_children(header, relations, payload, plan)
                except _GRAPH_ERRORS as e:
                    raise UseCaseValidationError(e) from e

                use_case = await self._load(use_case_id)

        except AuthoringError as e:
            probe.authoring_failed(operation="update_use_case", error=str(e))
            raise

        probe.use_case_updated(
            use_case_id=use_case.id,
            public_id=use_case.public_id,
            project_id=project_id,
            flow_count=len(use_case.flows),
            condition_count=len(use_case.conditions),
        )
        return use_case

    async def delete_use_case(self, use_case_id: int) -> None:
        """Delete a use case with everything nested under it.

        Raises:
            UseCaseNotFoundError: If the use case does not exist
        """
        try:
            async with self._session.begin():
                header = await self._get_header(use_case_id)
                await self._use_cases.delete(self._session, use_case_id)
                await self._sequences.delete_counters(
                    self._session, use_case_id, OwnerKind.USE_CASE
                )
        except AuthoringError as e:
            self._probe.authoring_failed(operation="delete_use_case", error=str(e))
            raise

        self._probe.use_case_deleted(use_case_id=use_case_id, public_id=header.public_id)

    async def create_flow(self, use_case_id: int, payload: FlowPayload) -> Flow:
        """Add a single flow to an existing use case.

        Raises:
            UseCaseNotFoundError: If the use case does not exist
            DuplicateNormalFlowError: If a normal flow is requested twice
            ParentFlowRequiredError: If an exception flow names no parent
            ParentFlowNotFoundError: If the parent flow does not exist
            ForeignOwnershipError: If the parent flow belongs to another use case
        """
        try:
            async with self._session.begin():
                header = await self._get_header(use_case_id)

                parent_id: int | None = None
                parent_public_id: str | None = None
                if payload.kind == FlowKind.NORMAL:
                    if await self._use_cases.has_normal_flow(self._session, use_case_id):
                        raise DuplicateNormalFlowError(use_case_id)
                elif payload.kind == FlowKind.EXCEPTION:
                    if payload.parent_flow_id is None:
                        raise ParentFlowRequiredError(payload.name)
                    parent = await self._use_cases.get_flow_ref(
                        self._session, payload.parent_flow_id
                    )
                    if parent is None:
                        raise ParentFlowNotFoundError(payload.parent_flow_id)
                    if parent.use_case_id != use_case_id:
                        raise ForeignOwnershipError(
                            entity="Flow",
                            entity_id=parent.id,
                            expected_owner_id=use_case_id,
                            actual_owner_id=parent.use_case_id,
                        )
                    parent_id = parent.id
                    parent_public_id = parent.public_id

                flow = await self._add_flow(
                    header,
                    name=payload.name,
                    kind=payload.kind,
                    steps=payload.step_specs(),
                    parent_id=parent_id,
                    parent_public_id=parent_public_id,
                )
        except AuthoringError as e:
            self._probe.authoring_failed(operation="create_flow", error=str(e))
            raise

        self._probe.flow_created(
            flow_id=flow.id,
            public_id=flow.public_id,
            use_case_id=use_case_id,
            kind=flow.kind.value,
        )
        return flow

    async def create_condition(
        self, use_case_id: int, payload: ConditionPayload
    ) -> Condition:
        """Add a single pre- or postcondition to an existing use case.

        Raises:
            UseCaseNotFoundError: If the use case does not exist
        """
        try:
            async with self._session.begin():
                header = await self._get_header(use_case_id)
                condition = await self._add_condition(header, payload)
        except AuthoringError as e:
            self._probe.authoring_failed(operation="create_condition", error=str(e))
            raise

        self._probe.condition_created(
            condition_id=condition.id,
            public_id=condition.public_id,
            use_case_id=use_case_id,
            kind=condition.kind.value,
        )
        return condition

    async def create_business_rule(
        self, project_id: int, payload: BusinessRulePayload
    ) -> BusinessRule:
        """Add a business rule to a project.

        Concurrent calls for one project serialise on the project's
        business rule counter row and never share an identifier.

        Raises:
            ProjectNotFoundError: If the project does not exist
        """
        probe = self._project_probe(project_id)
        try:
            async with self._session.begin():
                if await self._projects.get_by_id(self._session, project_id) is None:
                    raise ProjectNotFoundError(project_id)
                rule = await self._add_business_rule(
                    project_id,
                    rule_def=payload.rule_def,
                    type=payload.type,
                    mutability=payload.mutability,
                    source=payload.source,
                )
        except AuthoringError as e:
            probe.authoring_failed(operation="create_business_rule", error=str(e))
            raise

        probe.business_rule_created(
            business_rule_id=rule.id, public_id=rule.public_id, project_id=project_id
        )
        return rule

    async def get_use_case(self, use_case_id: int) -> UseCase | None:
        async with self._session.begin():
            return await self._use_cases.get_graph(self._session, use_case_id)

    async def get_use_case_by_slug(self, slug: str) -> UseCase | None:
        async with self._session.begin():
            return await self._use_cases.get_graph_by_slug(self._session, slug)

    def _project_probe(self, project_id: int) -> AuthoringServiceProbe:
        return self._probe.with_context(self._context.with_project(project_id))

    async def _get_header(self, use_case_id: int) -> UseCaseHeader:
        header = await self._use_cases.get_header(self._session, use_case_id)
        if header is None:
            raise UseCaseNotFoundError(use_case_id)
        return header

    async def _load(self, use_case_id: int) -> UseCase:
        use_case = await self._use_cases.get_graph(self._session, use_case_id)
        if use_case is None:
            raise UseCaseNotFoundError(use_case_id)
        return use_case

    async def _write_children(
        self,
        header: UseCaseHeader,
        relations: ResolvedRelations,
        payload: UseCasePayload,
        plan: Sequence[PlannedFlow],
    ) -> None:
        """Write links, conditions and flows of a freshly resolved payload."""
        actor_ids = [
            await self._apply_actor(header.project_id, item)
            for item in relations.secondary_actors
        ]
        rule_ids = [
            await self._apply_business_rule(header.project_id, item)
            for item in relations.business_rules
        ]
        await self._use_cases.link_secondary_actors(self._session, header.id, actor_ids)
        await self._use_cases.link_business_rules(self._session, header.id, rule_ids)

        for condition in payload.conditions:
            await self._add_condition(header, condition)

        written: dict[int, Flow] = {}
        for planned in plan:
            parent = (
                written[planned.parent_index]
                if planned.parent_index is not None
                else None
            )
            written[planned.index] = await self._add_flow(
                header,
                name=planned.draft.name,
                kind=planned.draft.kind,
                steps=planned.draft.step_specs(),
                parent_id=parent.id if parent else None,
                parent_public_id=parent.public_id if parent else None,
            )

    async def _apply_actor(self, project_id: int, item: ActorInstruction) -> int:
        if isinstance(item, Connect):
            return item.id
        actor = await self._projects.add_actor(
            self._session,
            project_id=project_id,
            name=item.name,
            description=item.description,
        )
        return actor.id

    async def _apply_business_rule(
        self, project_id: int, item: BusinessRuleInstruction
    ) -> int:
        if isinstance(item, Connect):
            return item.id
        rule = await self._add_business_rule(
            project_id,
            rule_def=item.rule_def,
            type=item.type,
            mutability=item.mutability,
            source=item.source,
        )
        return rule.id

    async def _add_business_rule(
        self,
        project_id: int,
        rule_def: str,
        type: RuleType,
        mutability: Mutability,
        source: str,
    ) -> BusinessRule:
        value = await self._sequences.next_value(
            self._session, project_id, OwnerKind.PROJECT, CounterKind.BUSINESS_RULE
        )
        return await self._projects.add_business_rule(
            self._session,
            project_id=project_id,
            public_id=business_rule_public_id(value),
            rule_def=rule_def,
            type=type,
            mutability=mutability,
            source=source,
        )

    async def _add_condition(
        self, header: UseCaseHeader, payload: ConditionPayload
    ) -> Condition:
        value = await self._sequences.next_value(
            self._session,
            header.id,
            OwnerKind.USE_CASE,
            counter_kind_for_condition(payload.kind),
        )
        return await self._use_cases.add_condition(
            self._session,
            use_case_id=header.id,
            public_id=condition_public_id(payload.kind, value),
            kind=payload.kind,
            description=payload.description,
        )

    async def _add_flow(
        self,
        header: UseCaseHeader,
        name: str,
        kind: FlowKind,
        steps: Sequence[StepSpec],
        parent_id: int | None = None,
        parent_public_id: str | None = None,
    ) -> Flow:
        value = None
        counter_kind = counter_kind_for_flow(kind)
        if counter_kind is not None:
            value = await self._sequences.next_value(
                self._session, header.id, OwnerKind.USE_CASE, counter_kind
            )
        public_id = flow_public_id(
            kind,
            header.public_id,
            value=value,
            parent_flow_public_id=parent_public_id,
        )

        try:
            return await self._use_cases.add_flow(
                self._session,
                use_case_id=header.id,
                public_id=public_id,
                name=name,
                kind=kind,
                steps=steps,
                parent_flow_id=parent_id,
            )
        except IntegrityError as e:
            # Lost a race against another writer's normal flow.
            if kind == FlowKind.NORMAL:
                raise DuplicateNormalFlowError(header.id) from e
            raise
