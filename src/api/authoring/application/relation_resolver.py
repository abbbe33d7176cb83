"""Resolution of the actor and business rule relations of a use case payload.

Every tagged entry is turned into an instruction: ``Connect`` for an entity
that exists and belongs to the use case's project, or a ``Create...`` for a
new entity to be inserted in that project. All entries are checked before
the coordinator writes anything, so a foreign reference in the last
position aborts the call just like one in the first.
"""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from authoring.application.payloads import (
    ActorRef,
    BusinessRuleRef,
    ExistingRef,
    UseCasePayload,
)
from authoring.domain.value_objects import Mutability, RuleType
from authoring.ports.exceptions import ForeignOwnershipError, ReferenceNotFoundError
from authoring.ports.repositories import IOwnershipLookup, OwnedRef


@dataclass(frozen=True)
class Connect:
    """Attach the existing entity with this id."""

    id: int


@dataclass(frozen=True)
class CreateActor:
    name: str
    description: str | None = None


@dataclass(frozen=True)
class CreateBusinessRule:
    rule_def: str
    type: RuleType
    mutability: Mutability
    source: str


ActorInstruction = Connect | CreateActor
BusinessRuleInstruction = Connect | CreateBusinessRule


@dataclass(frozen=True)
class ResolvedRelations:
    """Instructions for every relation of one use case payload."""

    primary_actor: ActorInstruction
    secondary_actors: tuple[ActorInstruction, ...] = ()
    business_rules: tuple[BusinessRuleInstruction, ...] = ()


class RelationResolver:
    """Classifies payload relations as connect or create and checks ownership."""

    def __init__(self, lookup: IOwnershipLookup):
        self._lookup = lookup

    async def resolve(
        self, session: AsyncSession, project_id: int, payload: UseCasePayload
    ) -> ResolvedRelations:
        """Resolve all actor and business rule entries of a payload.

        Args:
            session: Open transaction the lookups run in
            project_id: Project every connected entity must belong to
            payload: The use case payload

        Raises:
            ReferenceNotFoundError: If an existing entry names an unknown id
            ForeignOwnershipError: If an existing entry belongs to another project
        """
        primary = await self.resolve_actor(session, project_id, payload.primary_actor)
        secondary = [
            await self.resolve_actor(session, project_id, item)
            for item in payload.secondary_actors
        ]
        rules = [
            await self.resolve_business_rule(session, project_id, item)
            for item in payload.business_rules
        ]
        return ResolvedRelations(
            primary_actor=primary,
            secondary_actors=tuple(secondary),
            business_rules=tuple(rules),
        )

    async def resolve_actor(
        self, session: AsyncSession, project_id: int, item: ActorRef
    ) -> ActorInstruction:
        if isinstance(item, ExistingRef):
            found = await self._lookup.find_actor(session, item.id)
            self._check_owner("Actor", item.id, project_id, found)
            return Connect(id=item.id)
        return CreateActor(name=item.name, description=item.description)

    async def resolve_business_rule(
        self, session: AsyncSession, project_id: int, item: BusinessRuleRef
    ) -> BusinessRuleInstruction:
        if isinstance(item, ExistingRef):
            found = await self._lookup.find_business_rule(session, item.id)
            self._check_owner("BusinessRule", item.id, project_id, found)
            return Connect(id=item.id)
        return CreateBusinessRule(
            rule_def=item.rule_def,
            type=item.type,
            mutability=item.mutability,
            source=item.source,
        )

    @staticmethod
    def _check_owner(
        entity: str, entity_id: int, project_id: int, found: OwnedRef | None
    ) -> None:
        if found is None:
            raise ReferenceNotFoundError(entity, entity_id)
        if found.owner_id != project_id:
            raise ForeignOwnershipError(
                entity=entity,
                entity_id=entity_id,
                expected_owner_id=project_id,
                actual_owner_id=found.owner_id,
            )
