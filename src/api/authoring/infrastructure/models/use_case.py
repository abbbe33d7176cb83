"""SQLAlchemy ORM models for use cases and their link tables."""

from sqlalchemy import (
    JSON,
    Column,
    ForeignKey,
    Integer,
    String,
    Table,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column

from infrastructure.database.models import Base, TimestampMixin

use_case_secondary_actors = Table(
    "use_case_secondary_actors",
    Base.metadata,
    Column(
        "use_case_id",
        Integer,
        ForeignKey("use_cases.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "actor_id",
        Integer,
        ForeignKey("actors.id", ondelete="CASCADE"),
        primary_key=True,
    ),
)

use_case_business_rules = Table(
    "use_case_business_rules",
    Base.metadata,
    Column(
        "use_case_id",
        Integer,
        ForeignKey("use_cases.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "business_rule_id",
        Integer,
        ForeignKey("business_rules.id", ondelete="CASCADE"),
        primary_key=True,
    ),
)


class UseCaseModel(Base, TimestampMixin):
    """ORM model for use_cases table.

    Foreign Key Constraints:
    - project_id references projects.id with CASCADE delete
    - primary_actor_id references actors.id with RESTRICT delete
      An actor cannot be removed while it is the primary actor of a use case

    public_id (``UC-<n>``) is unique within the project. The precondition,
    postcondition, alternate flow and exception flow counters live in
    sequence_counters with owner_kind USE_CASE.
    """

    __tablename__ = "use_cases"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    project_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("projects.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    creator_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    public_id: Mapped[str] = mapped_column(String(32), nullable=False)
    slug: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    trigger: Mapped[str] = mapped_column(Text, nullable=False)
    priority: Mapped[str] = mapped_column(String(16), nullable=False)
    freq_use: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    other_info: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    assumptions: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    primary_actor_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("actors.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )

    __table_args__ = (
        UniqueConstraint(
            "project_id", "public_id", name="uq_use_cases_project_public_id"
        ),
        {"sqlite_autoincrement": True},
    )

    def __repr__(self) -> str:
        """Return string representation."""
        return (
            f"<UseCaseModel(id={self.id}, project_id={self.project_id}, "
            f"public_id={self.public_id}, name={self.name})>"
        )
