"""
Tests for the Alembic migrations (Flask-Migrate).
"""
import os

import pytest
from flask_migrate import downgrade, upgrade
from sqlalchemy import inspect

from crewdesk import create_app
from crewdesk.config import TestingConfig
from crewdesk.extensions import db

MIGRATIONS_DIR = os.path.join(os.path.dirname(os.path.dirname(__file__)), 'migrations')

TABLES = {
    'events',
    'positions',
    'crew_members',
    'equipment_categories',
    'equipment',
    'crew_assignments',
    'equipment_assignments',
}


@pytest.fixture
def migrated_app(tmp_path, monkeypatch):
    """App on an empty SQLite file, upgraded to the latest revision."""
    monkeypatch.setattr(TestingConfig, 'SQLALCHEMY_DATABASE_URI',
                        f"sqlite:///{tmp_path / 'crewdesk.db'}")
    application = create_app('testing')

    with application.app_context():
        upgrade(directory=MIGRATIONS_DIR)
        yield application
        db.session.remove()
        db.engine.dispose()


class TestMigrations:

    def test_upgrade_creates_model_tables(self, migrated_app):
        tables = set(inspect(db.engine).get_table_names())
        assert TABLES <= tables
        assert 'alembic_version' in tables
        assert TABLES == {table.name for table in db.metadata.sorted_tables}

    def test_assignment_constraints(self, migrated_app):
        inspector = inspect(db.engine)

        crew_unique = {c['name'] for c in inspector.get_unique_constraints('crew_assignments')}
        assert 'uq_crew_assignment_event_member' in crew_unique

        equipment_unique = {c['name'] for c in inspector.get_unique_constraints('equipment_assignments')}
        assert 'uq_equipment_assignment_event_item' in equipment_unique

        checks = {c['name'] for c in inspector.get_check_constraints('equipment_assignments')}
        assert 'ck_equipment_assignment_quantity' in checks

    def test_downgrade_to_base(self, migrated_app):
        downgrade(directory=MIGRATIONS_DIR, revision='base')
        tables = set(inspect(db.engine).get_table_names())
        assert not TABLES & tables
