"""Unit tests for the authoring schema migration.

Runs the revision against an in-memory SQLite database and compares the
result with the ORM metadata the repositories are written against.
"""

import importlib.util
from pathlib import Path

import pytest
from alembic.operations import Operations
from alembic.runtime.migration import MigrationContext
from sqlalchemy import create_engine, inspect

import authoring.infrastructure.models  # noqa: F401
from infrastructure.database.models import Base

VERSIONS = Path(__file__).parents[3] / "infrastructure" / "migrations" / "versions"


def _load_revision(filename: str):
    spec = importlib.util.spec_from_file_location(filename[:-3], VERSIONS / filename)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


@pytest.fixture
def revision():
    return _load_revision("3f1c9a7d2b10_create_authoring_tables.py")


@pytest.fixture
def connection():
    engine = create_engine("sqlite://")
    with engine.connect() as conn:
        yield conn
    engine.dispose()


def _run(connection, step) -> None:
    context = MigrationContext.configure(connection)
    with Operations.context(context):
        step()


class TestCreateAuthoringTables:
    def test_revision_is_the_root(self, revision):
        assert revision.revision == "3f1c9a7d2b10"
        assert revision.down_revision is None

    def test_upgrade_creates_every_mapped_table(self, revision, connection):
        _run(connection, revision.upgrade)

        tables = set(inspect(connection).get_table_names())
        assert tables == set(Base.metadata.tables)

    def test_upgrade_creates_normal_flow_index(self, revision, connection):
        _run(connection, revision.upgrade)

        indexes = {
            index["name"]: index for index in inspect(connection).get_indexes("flows")
        }
        assert indexes["idx_flows_normal_unique"]["unique"]

    def test_downgrade_drops_everything(self, revision, connection):
        _run(connection, revision.upgrade)
        _run(connection, revision.downgrade)

        assert inspect(connection).get_table_names() == []

    @pytest.mark.parametrize(
        "table", ["use_cases", "conditions", "flows", "steps", "step_references"]
    )
    def test_child_tables_never_reuse_ids(self, revision, connection, table):
        _run(connection, revision.upgrade)

        ddl = connection.exec_driver_sql(
            "SELECT sql FROM sqlite_master WHERE type = 'table' AND name = ?",
            (table,),
        ).scalar_one()
        assert "AUTOINCREMENT" in ddl
