"""SQLAlchemy ORM models for projects and actors."""

from sqlalchemy import ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from infrastructure.database.models import Base, TimestampMixin


class ProjectModel(Base, TimestampMixin):
    """ORM model for projects table.

    A project owns actors, business rules and use cases. Its use case and
    business rule counters live in sequence_counters with owner_kind PROJECT.
    """

    __tablename__ = "projects"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    slug: Mapped[str] = mapped_column(String(64), nullable=False, unique=True)
    owner_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")

    def __repr__(self) -> str:
        """Return string representation."""
        return f"<ProjectModel(id={self.id}, name={self.name}, slug={self.slug})>"


class ActorModel(Base):
    """ORM model for actors table."""

    __tablename__ = "actors"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    project_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("projects.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    def __repr__(self) -> str:
        """Return string representation."""
        return (
            f"<ActorModel(id={self.id}, project_id={self.project_id}, "
            f"name={self.name})>"
        )
