import importlib.util
from pathlib import Path

from alembic.migration import MigrationContext
from alembic.operations import Operations
from sqlalchemy import create_engine, inspect

import slat.models  # noqa: F401
from slat.database import Base

MIGRATION = Path(__file__).resolve().parents[1] / "migrations" / "versions" / "001_initial.py"


def _load_migration():
    spec = importlib.util.spec_from_file_location("initial_migration", MIGRATION)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_initial_migration_matches_models():
    migration = _load_migration()
    engine = create_engine("sqlite://")

    with engine.begin() as connection:
        with Operations.context(MigrationContext.configure(connection)):
            migration.upgrade()

        inspector = inspect(connection)
        assert set(inspector.get_table_names()) == set(Base.metadata.tables)
        for name, table in Base.metadata.tables.items():
            columns = {column["name"] for column in inspector.get_columns(name)}
            assert columns == {column.name for column in table.columns}, name

        pairs = {c["name"] for c in inspector.get_unique_constraints("attendees")}
        assert "uq_attendees_student_lecture" in pairs

        with Operations.context(MigrationContext.configure(connection)):
            migration.downgrade()

        assert inspect(connection).get_table_names() == []
