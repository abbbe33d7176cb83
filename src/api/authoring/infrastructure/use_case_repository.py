"""SQL implementation of IUseCaseRepository.

Nested rows are written and removed with explicit statements rather than
ORM relationship cascades: references, then steps, then flows; conditions
and link rows alongside. The foreign keys carry ``ON DELETE CASCADE`` as a
second line of defence, but nothing here depends on the database enforcing
them.
"""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import delete, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from authoring.domain.entities import Condition, Flow, Reference, Step, UseCase
from authoring.domain.public_ids import step_public_id
from authoring.domain.slugs import use_case_slug
from authoring.domain.value_objects import (
    ConditionKind,
    FlowKind,
    Priority,
    ReferenceType,
    StepSpec,
    UseCaseDetails,
)
from authoring.infrastructure.models import (
    ActorModel,
    BusinessRuleModel,
    ConditionModel,
    FlowModel,
    StepModel,
    StepReferenceModel,
    UseCaseModel,
    use_case_business_rules,
    use_case_secondary_actors,
)
from authoring.infrastructure.project_repository import (
    actor_to_domain,
    business_rule_to_domain,
)
from authoring.ports.repositories import FlowRef, IUseCaseRepository, UseCaseHeader


class UseCaseRepository(IUseCaseRepository):
    """Persistence of use cases and every row nested beneath them."""

    async def add(
        self,
        session: AsyncSession,
        project_id: int,
        creator_id: int,
        public_id: str,
        primary_actor_id: int,
        details: UseCaseDetails,
        slug_max_length: int = 50,
    ) -> UseCaseHeader:
        """Insert a use case row and assign its slug.

        The slug embeds the generated id, so it is filled in after the
        first flush.
        """
        model = UseCaseModel(
            project_id=project_id,
            creator_id=creator_id,
            public_id=public_id,
            primary_actor_id=primary_actor_id,
            slug="",
        )
        self._apply_details(model, details)
        session.add(model)
        await session.flush()

        model.slug = use_case_slug(details.name, model.id, public_id, slug_max_length)
        await session.flush()
        return self._to_header(model)

    async def get_header(
        self, session: AsyncSession, use_case_id: int
    ) -> UseCaseHeader | None:
        model = await self._get_model(session, use_case_id)
        return self._to_header(model) if model else None

    async def update_details(
        self,
        session: AsyncSession,
        use_case_id: int,
        primary_actor_id: int,
        details: UseCaseDetails,
        slug_max_length: int = 50,
    ) -> None:
        """Overwrite the descriptive fields, primary actor and slug.

        The public id never changes.
        """
        model = await self._get_model(session, use_case_id)
        if model is None:
            raise LookupError(f"Use case {use_case_id} vanished during update")

        self._apply_details(model, details)
        model.primary_actor_id = primary_actor_id
        model.slug = use_case_slug(
            details.name, model.id, model.public_id, slug_max_length
        )
        await session.flush()

    async def link_secondary_actors(
        self, session: AsyncSession, use_case_id: int, actor_ids: Sequence[int]
    ) -> None:
        ids = list(dict.fromkeys(actor_ids))
        if not ids:
            return
        await session.execute(
            insert(use_case_secondary_actors),
            [{"use_case_id": use_case_id, "actor_id": actor_id} for actor_id in ids],
        )

    async def link_business_rules(
        self, session: AsyncSession, use_case_id: int, business_rule_ids: Sequence[int]
    ) -> None:
        ids = list(dict.fromkeys(business_rule_ids))
        if not ids:
            return
        await session.execute(
            insert(use_case_business_rules),
            [
                {"use_case_id": use_case_id, "business_rule_id": rule_id}
                for rule_id in ids
            ],
        )

    async def clear_links(self, session: AsyncSession, use_case_id: int) -> None:
        await session.execute(
            delete(use_case_secondary_actors).where(
                use_case_secondary_actors.c.use_case_id == use_case_id
            )
        )
        await session.execute(
            delete(use_case_business_rules).where(
                use_case_business_rules.c.use_case_id == use_case_id
            )
        )

    async def add_condition(
        self,
        session: AsyncSession,
        use_case_id: int,
        public_id: str,
        kind: ConditionKind,
        description: str,
    ) -> Condition:
        model = ConditionModel(
            use_case_id=use_case_id,
            public_id=public_id,
            kind=kind.value,
            description=description,
        )
        session.add(model)
        await session.flush()
        return self._condition_to_domain(model)

    async def add_flow(
        self,
        session: AsyncSession,
        use_case_id: int,
        public_id: str,
        name: str,
        kind: FlowKind,
        steps: Sequence[StepSpec],
        parent_flow_id: int | None = None,
    ) -> Flow:
        """Insert a flow with its steps and their references.

        Step identifiers are recomputed from position on every write.
        """
        flow_model = FlowModel(
            use_case_id=use_case_id,
            public_id=public_id,
            name=name,
            kind=kind.value,
            parent_flow_id=parent_flow_id,
        )
        session.add(flow_model)
        await session.flush()

        step_models = [
            StepModel(
                flow_id=flow_model.id,
                position=position,
                public_id=step_public_id(position),
                description=spec.description,
            )
            for position, spec in enumerate(steps, start=1)
        ]
        session.add_all(step_models)
        await session.flush()

        ref_models: list[StepReferenceModel] = []
        for step_model, spec in zip(step_models, steps):
            ref_models.extend(
                StepReferenceModel(
                    step_id=step_model.id,
                    ref_type=ref.ref_type.value,
                    ref_id=ref.ref_id,
                    location=ref.location,
                )
                for ref in spec.references
            )
        if ref_models:
            session.add_all(ref_models)
            await session.flush()

        return self._flow_to_domain(flow_model, step_models, ref_models)

    async def get_flow_ref(self, session: AsyncSession, flow_id: int) -> FlowRef | None:
        result = await session.execute(
            select(
                FlowModel.id,
                FlowModel.use_case_id,
                FlowModel.public_id,
                FlowModel.kind,
            ).where(FlowModel.id == flow_id)
        )
        row = result.one_or_none()
        if row is None:
            return None
        return FlowRef(
            id=row.id,
            use_case_id=row.use_case_id,
            public_id=row.public_id,
            kind=FlowKind(row.kind),
        )

    async def has_normal_flow(self, session: AsyncSession, use_case_id: int) -> bool:
        result = await session.execute(
            select(FlowModel.id)
            .where(
                FlowModel.use_case_id == use_case_id,
                FlowModel.kind == FlowKind.NORMAL.value,
            )
            .limit(1)
        )
        return result.scalar_one_or_none() is not None

    async def delete_conditions(self, session: AsyncSession, use_case_id: int) -> int:
        result = await session.execute(
            delete(ConditionModel).where(ConditionModel.use_case_id == use_case_id)
        )
        return result.rowcount

    async def delete_flows(self, session: AsyncSession, use_case_id: int) -> int:
        """Delete all flows of a use case with their steps and references."""
        flow_ids = select(FlowModel.id).where(FlowModel.use_case_id == use_case_id)
        step_ids = select(StepModel.id).where(StepModel.flow_id.in_(flow_ids))

        await session.execute(
            delete(StepReferenceModel).where(StepReferenceModel.step_id.in_(step_ids))
        )
        await session.execute(delete(StepModel).where(StepModel.flow_id.in_(flow_ids)))
        # Detach exception flows from their parents so row order cannot matter.
        await session.execute(
            update(FlowModel)
            .where(FlowModel.use_case_id == use_case_id)
            .values(parent_flow_id=None)
        )
        result = await session.execute(
            delete(FlowModel).where(FlowModel.use_case_id == use_case_id)
        )
        return result.rowcount

    async def delete(self, session: AsyncSession, use_case_id: int) -> None:
        """Delete a use case row together with every row nested under it."""
        await self.delete_flows(session, use_case_id)
        await self.delete_conditions(session, use_case_id)
        await self.clear_links(session, use_case_id)
        await session.execute(delete(UseCaseModel).where(UseCaseModel.id == use_case_id))

    async def get_graph(self, session: AsyncSession, use_case_id: int) -> UseCase | None:
        model = await self._get_model(session, use_case_id)
        if model is None:
            return None
        return await self._load_graph(session, model)

    async def get_graph_by_slug(self, session: AsyncSession, slug: str) -> UseCase | None:
        result = await session.execute(
            select(UseCaseModel).where(UseCaseModel.slug == slug)
        )
        model = result.scalars().first()
        if model is None:
            return None
        return await self._load_graph(session, model)

    async def _get_model(
        self, session: AsyncSession, use_case_id: int
    ) -> UseCaseModel | None:
        result = await session.execute(
            select(UseCaseModel).where(UseCaseModel.id == use_case_id)
        )
        return result.scalar_one_or_none()

    async def _load_graph(self, session: AsyncSession, model: UseCaseModel) -> UseCase:
        primary = await session.execute(
            select(ActorModel).where(ActorModel.id == model.primary_actor_id)
        )
        secondary = await session.execute(
            select(ActorModel)
            .join(
                use_case_secondary_actors,
                use_case_secondary_actors.c.actor_id == ActorModel.id,
            )
            .where(use_case_secondary_actors.c.use_case_id == model.id)
            .order_by(ActorModel.id)
        )
        rules = await session.execute(
            select(BusinessRuleModel)
            .join(
                use_case_business_rules,
                use_case_business_rules.c.business_rule_id == BusinessRuleModel.id,
            )
            .where(use_case_business_rules.c.use_case_id == model.id)
            .order_by(BusinessRuleModel.id)
        )
        conditions = await session.execute(
            select(ConditionModel)
            .where(ConditionModel.use_case_id == model.id)
            .order_by(ConditionModel.id)
        )

        return UseCase(
            id=model.id,
            project_id=model.project_id,
            creator_id=model.creator_id,
            public_id=model.public_id,
            slug=model.slug,
            name=model.name,
            description=model.description,
            trigger=model.trigger,
            priority=Priority(model.priority),
            freq_use=model.freq_use,
            other_info=list(model.other_info or []),
            assumptions=list(model.assumptions or []),
            primary_actor=actor_to_domain(primary.scalar_one()),
            secondary_actors=[actor_to_domain(a) for a in secondary.scalars()],
            business_rules=[business_rule_to_domain(r) for r in rules.scalars()],
            conditions=[self._condition_to_domain(c) for c in conditions.scalars()],
            flows=await self._load_flows(session, model.id),
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    async def _load_flows(self, session: AsyncSession, use_case_id: int) -> list[Flow]:
        flow_result = await session.execute(
            select(FlowModel)
            .where(FlowModel.use_case_id == use_case_id)
            .order_by(FlowModel.id)
        )
        flow_models = list(flow_result.scalars())
        if not flow_models:
            return []

        step_result = await session.execute(
            select(StepModel)
            .where(StepModel.flow_id.in_([f.id for f in flow_models]))
            .order_by(StepModel.flow_id, StepModel.position)
        )
        step_models = list(step_result.scalars())

        ref_models: list[StepReferenceModel] = []
        if step_models:
            ref_result = await session.execute(
                select(StepReferenceModel)
                .where(StepReferenceModel.step_id.in_([s.id for s in step_models]))
                .order_by(StepReferenceModel.id)
            )
            ref_models = list(ref_result.scalars())

        return [
            self._flow_to_domain(
                flow,
                [s for s in step_models if s.flow_id == flow.id],
                ref_models,
            )
            for flow in flow_models
        ]

    @staticmethod
    def _apply_details(model: UseCaseModel, details: UseCaseDetails) -> None:
        model.name = details.name
        model.description = details.description
        model.trigger = details.trigger
        model.priority = details.priority.value
        model.freq_use = details.freq_use
        model.other_info = list(details.other_info)
        model.assumptions = list(details.assumptions)

    @staticmethod
    def _to_header(model: UseCaseModel) -> UseCaseHeader:
        return UseCaseHeader(
            id=model.id,
            project_id=model.project_id,
            creator_id=model.creator_id,
            public_id=model.public_id,
        )

    @staticmethod
    def _condition_to_domain(model: ConditionModel) -> Condition:
        return Condition(
            id=model.id,
            use_case_id=model.use_case_id,
            public_id=model.public_id,
            kind=ConditionKind(model.kind),
            description=model.description,
        )

    @staticmethod
    def _flow_to_domain(
        flow: FlowModel,
        steps: Sequence[StepModel],
        refs: Sequence[StepReferenceModel],
    ) -> Flow:
        return Flow(
            id=flow.id,
            use_case_id=flow.use_case_id,
            public_id=flow.public_id,
            name=flow.name,
            kind=FlowKind(flow.kind),
            parent_flow_id=flow.parent_flow_id,
            steps=[
                Step(
                    id=step.id,
                    flow_id=step.flow_id,
                    public_id=step.public_id,
                    position=step.position,
                    description=step.description,
                    references=[
                        Reference(
                            id=ref.id,
                            step_id=ref.step_id,
                            ref_type=ReferenceType(ref.ref_type),
                            ref_id=ref.ref_id,
                            location=ref.location,
                        )
                        for ref in refs
                        if ref.step_id == step.id
                    ],
                )
                for step in steps
            ],
        )
