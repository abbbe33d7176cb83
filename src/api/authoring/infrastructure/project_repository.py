"""SQL implementation of IProjectRepository and IOwnershipLookup."""

from __future__ import annotations

from uuid import uuid4

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from authoring.domain.entities import Actor, BusinessRule, Project
from authoring.domain.slugs import project_slug
from authoring.domain.value_objects import Mutability, RuleType
from authoring.infrastructure.models import (
    ActorModel,
    BusinessRuleModel,
    ProjectModel,
)
from authoring.ports.repositories import (
    IOwnershipLookup,
    IProjectRepository,
    OwnedRef,
)


class ProjectRepository(IProjectRepository):
    """Persistence of projects, their actors and their business rules."""

    async def add(
        self,
        session: AsyncSession,
        name: str,
        owner_id: int,
        description: str = "",
        slug_max_length: int = 64,
    ) -> Project:
        """Insert a project and assign its slug.

        The slug embeds the generated id, so the row is flushed once with a
        provisional slug and then renamed.
        """
        model = ProjectModel(
            name=name,
            owner_id=owner_id,
            description=description,
            slug=f"pending-{uuid4().hex}",
        )
        session.add(model)
        await session.flush()

        model.slug = project_slug(name, model.id, slug_max_length)
        await session.flush()
        return self._to_domain(model)

    async def get_by_id(self, session: AsyncSession, project_id: int) -> Project | None:
        result = await session.execute(
            select(ProjectModel).where(ProjectModel.id == project_id)
        )
        model = result.scalar_one_or_none()
        return self._to_domain(model) if model else None

    async def add_actor(
        self,
        session: AsyncSession,
        project_id: int,
        name: str,
        description: str | None = None,
    ) -> Actor:
        model = ActorModel(project_id=project_id, name=name, description=description)
        session.add(model)
        await session.flush()
        return actor_to_domain(model)

    async def add_business_rule(
        self,
        session: AsyncSession,
        project_id: int,
        public_id: str,
        rule_def: str,
        type: RuleType,
        mutability: Mutability,
        source: str,
    ) -> BusinessRule:
        model = BusinessRuleModel(
            project_id=project_id,
            public_id=public_id,
            rule_def=rule_def,
            type=type.value,
            mutability=mutability.value,
            source=source,
        )
        session.add(model)
        await session.flush()
        return business_rule_to_domain(model)

    @staticmethod
    def _to_domain(model: ProjectModel) -> Project:
        return Project(
            id=model.id,
            name=model.name,
            slug=model.slug,
            owner_id=model.owner_id,
            description=model.description,
        )


class OwnershipLookup(IOwnershipLookup):
    """Point lookups returning an entity's id and owning project id."""

    async def find_actor(self, session: AsyncSession, actor_id: int) -> OwnedRef | None:
        result = await session.execute(
            select(ActorModel.id, ActorModel.project_id).where(ActorModel.id == actor_id)
        )
        row = result.one_or_none()
        return OwnedRef(id=row.id, owner_id=row.project_id) if row else None

    async def find_business_rule(
        self, session: AsyncSession, business_rule_id: int
    ) -> OwnedRef | None:
        result = await session.execute(
            select(BusinessRuleModel.id, BusinessRuleModel.project_id).where(
                BusinessRuleModel.id == business_rule_id
            )
        )
        row = result.one_or_none()
        return OwnedRef(id=row.id, owner_id=row.project_id) if row else None


def actor_to_domain(model: ActorModel) -> Actor:
    return Actor(
        id=model.id,
        project_id=model.project_id,
        name=model.name,
        description=model.description,
    )


def business_rule_to_domain(model: BusinessRuleModel) -> BusinessRule:
    return BusinessRule(
        id=model.id,
        project_id=model.project_id,
        public_id=model.public_id,
        rule_def=model.rule_def,
        type=RuleType(model.type),
        mutability=Mutability(model.mutability),
        source=model.source,
    )
