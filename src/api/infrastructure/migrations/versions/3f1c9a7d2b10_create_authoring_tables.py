"""create authoring tables

Revision ID: 3f1c9a7d2b10
Revises:
Create Date: 2026-10-19 09:12:44.102831

Creates projects, actors, business rules, use cases with their conditions,
flows, steps and step references, the link tables, and the sequence
counters behind public identifiers. Child tables use CASCADE FK
constraints; the application also deletes children explicitly.
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op


# revision identifiers, used by Alembic.
revision: str = "3f1c9a7d2b10"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    ]


def upgrade() -> None:
    """Create the authoring schema.

    Key constraints:
    - public_id unique per owning project or use case
    - one sequence counter row per (owner_kind, owner_id, counter_kind)
    - partial unique index ensures only one NORMAL flow per use case
    """
    op.create_table(
        "projects",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("slug", sa.String(64), nullable=False, unique=True),
        sa.Column("owner_id", sa.Integer, nullable=False),
        sa.Column("description", sa.Text, nullable=False, server_default=""),
        *_timestamps(),
    )
    op.create_index("ix_projects_owner_id", "projects", ["owner_id"])

    op.create_table(
        "actors",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column(
            "project_id",
            sa.Integer,
            sa.ForeignKey("projects.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.Text, nullable=True),
    )
    op.create_index("ix_actors_project_id", "actors", ["project_id"])

    op.create_table(
        "business_rules",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column(
            "project_id",
            sa.Integer,
            sa.ForeignKey("projects.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("public_id", sa.String(32), nullable=False),
        sa.Column("rule_def", sa.Text, nullable=False),
        sa.Column("type", sa.String(32), nullable=False),
        sa.Column("mutability", sa.String(16), nullable=False),
        sa.Column("source", sa.String(255), nullable=False),
        sa.UniqueConstraint(
            "project_id", "public_id", name="uq_business_rules_project_public_id"
        ),
    )
    op.create_index("ix_business_rules_project_id", "business_rules", ["project_id"])

    op.create_table(
        "sequence_counters",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("owner_kind", sa.String(16), nullable=False),
        sa.Column("owner_id", sa.Integer, nullable=False),
        sa.Column("counter_kind", sa.String(32), nullable=False),
        sa.Column("count", sa.Integer, nullable=False, server_default="0"),
        sa.UniqueConstraint(
            "owner_kind",
            "owner_id",
            "counter_kind",
            name="uq_sequence_counters_owner_kind",
        ),
        sa.CheckConstraint("count >= 0", name="ck_sequence_counters_count_non_negative"),
    )

    op.create_table(
        "use_cases",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column(
            "project_id",
            sa.Integer,
            sa.ForeignKey("projects.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("creator_id", sa.Integer, nullable=False),
        sa.Column("public_id", sa.String(32), nullable=False),
        sa.Column("slug", sa.String(255), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.Text, nullable=False),
        sa.Column("trigger", sa.Text, nullable=False),
        sa.Column("priority", sa.String(16), nullable=False),
        sa.Column("freq_use", sa.String(255), nullable=False, server_default=""),
        sa.Column("other_info", sa.JSON, nullable=False),
        sa.Column("assumptions", sa.JSON, nullable=False),
        sa.Column(
            "primary_actor_id",
            sa.Integer,
            sa.ForeignKey("actors.id", ondelete="RESTRICT"),
            nullable=False,
        ),
        *_timestamps(),
        sa.UniqueConstraint(
            "project_id", "public_id", name="uq_use_cases_project_public_id"
        ),
        sqlite_autoincrement=True,
    )
    op.create_index("ix_use_cases_project_id", "use_cases", ["project_id"])
    op.create_index("ix_use_cases_creator_id", "use_cases", ["creator_id"])
    op.create_index("ix_use_cases_slug", "use_cases", ["slug"])
    op.create_index("ix_use_cases_primary_actor_id", "use_cases", ["primary_actor_id"])

    op.create_table(
        "use_case_secondary_actors",
        sa.Column(
            "use_case_id",
            sa.Integer,
            sa.ForeignKey("use_cases.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column(
            "actor_id",
            sa.Integer,
            sa.ForeignKey("actors.id", ondelete="CASCADE"),
            primary_key=True,
        ),
    )

    op.create_table(
        "use_case_business_rules",
        sa.Column(
            "use_case_id",
            sa.Integer,
            sa.ForeignKey("use_cases.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column(
            "business_rule_id",
            sa.Integer,
            sa.ForeignKey("business_rules.id", ondelete="CASCADE"),
            primary_key=True,
        ),
    )

    op.create_table(
        "conditions",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column(
            "use_case_id",
            sa.Integer,
            sa.ForeignKey("use_cases.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("public_id", sa.String(32), nullable=False),
        sa.Column("kind", sa.String(16), nullable=False),
        sa.Column("description", sa.Text, nullable=False),
        sa.UniqueConstraint(
            "use_case_id", "public_id", name="uq_conditions_use_case_public_id"
        ),
        sqlite_autoincrement=True,
    )
    op.create_index("ix_conditions_use_case_id", "conditions", ["use_case_id"])

    op.create_table(
        "flows",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column(
            "use_case_id",
            sa.Integer,
            sa.ForeignKey("use_cases.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("public_id", sa.String(64), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("kind", sa.String(16), nullable=False),
        sa.Column(
            "parent_flow_id",
            sa.Integer,
            sa.ForeignKey("flows.id", ondelete="CASCADE"),
            nullable=True,
        ),
        sa.UniqueConstraint(
            "use_case_id", "public_id", name="uq_flows_use_case_public_id"
        ),
        sqlite_autoincrement=True,
    )
    op.create_index("ix_flows_use_case_id", "flows", ["use_case_id"])
    op.create_index("ix_flows_parent_flow_id", "flows", ["parent_flow_id"])

    # Partial unique index: only one normal flow per use case
    op.create_index(
        "idx_flows_normal_unique",
        "flows",
        ["use_case_id"],
        unique=True,
        postgresql_where=sa.text("kind = 'NORMAL'"),
        sqlite_where=sa.text("kind = 'NORMAL'"),
    )

    op.create_table(
        "steps",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column(
            "flow_id",
            sa.Integer,
            sa.ForeignKey("flows.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("position", sa.Integer, nullable=False),
        sa.Column("public_id", sa.String(16), nullable=False),
        sa.Column("description", sa.Text, nullable=False),
        sqlite_autoincrement=True,
    )
    op.create_index("ix_steps_flow_id", "steps", ["flow_id"])

    op.create_table(
        "step_references",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column(
            "step_id",
            sa.Integer,
            sa.ForeignKey("steps.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("ref_type", sa.String(32), nullable=False),
        sa.Column("ref_id", sa.Integer, nullable=False),
        sa.Column("location", sa.Integer, nullable=False),
        sqlite_autoincrement=True,
    )
    op.create_index("ix_step_references_step_id", "step_references", ["step_id"])


def downgrade() -> None:
    """Drop the authoring schema in reverse dependency order."""
    op.drop_table("step_references")
    op.drop_table("steps")
    op.drop_index("idx_flows_normal_unique", table_name="flows")
    op.drop_table("flows")
    op.drop_table("conditions")
    op.drop_table("use_case_business_rules")
    op.drop_table("use_case_secondary_actors")
    op.drop_table("use_cases")
    op.drop_table("sequence_counters")
    op.drop_table("business_rules")
    op.drop_table("actors")
    op.drop_table("projects")
