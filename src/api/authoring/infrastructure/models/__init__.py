"""SQLAlchemy ORM models for the authoring bounded context.

These models map to database tables and are used by repository implementations.
"""

from authoring.infrastructure.models.business_rule import BusinessRuleModel
from authoring.infrastructure.models.condition import ConditionModel
from authoring.infrastructure.models.flow import (
    FlowModel,
    StepModel,
    StepReferenceModel,
)
from authoring.infrastructure.models.project import ActorModel, ProjectModel
from authoring.infrastructure.models.sequence_counter import SequenceCounterModel
from authoring.infrastructure.models.use_case import (
    UseCaseModel,
    use_case_business_rules,
    use_case_secondary_actors,
)

__all__ = [
    "ActorModel",
    "BusinessRuleModel",
    "ConditionModel",
    "FlowModel",
    "ProjectModel",
    "SequenceCounterModel",
    "StepModel",
    "StepReferenceModel",
    "UseCaseModel",
    "use_case_business_rules",
    "use_case_secondary_actors",
]
