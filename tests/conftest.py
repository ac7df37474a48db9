# =============================================================================
# CrewDesk - Pytest Fixtures Configuration
# =============================================================================

import pytest
from datetime import date, time
from decimal import Decimal

from crewdesk import create_app
from crewdesk.extensions import db
from crewdesk.models import (
    CrewMember,
    Equipment,
    EquipmentCategory,
    Event,
    Position,
)
from crewdesk.blueprints.api.decorators import create_access_token

from tests.fakes import InMemoryAssignmentStore


# =============================================================================
# Application Fixtures
# =============================================================================

@pytest.fixture(scope='function')
def app():
    """Create and configure test application with SQLite in-memory database."""
    # Create app with 'testing' config (uses SQLite in-memory)
    application = create_app('testing')

    with application.app_context():
        db.create_all()
        yield application
        db.session.remove()
        db.drop_all()


@pytest.fixture(scope='function')
def client(app):
    """Test client for HTTP requests."""
    return app.test_client()


@pytest.fixture(scope='function')
def runner(app):
    """CLI test runner."""
    return app.test_cli_runner()


@pytest.fixture(scope='function')
def store():
    """Empty in-memory assignment store (no app needed)."""
    return InMemoryAssignmentStore()


# =============================================================================
# Auth Fixtures
# =============================================================================

@pytest.fixture
def auth_headers(app):
    """Build Authorization headers for a given role."""
    def _headers(role='scheduler', actor_id='actor-1'):
        token = create_access_token(actor_id, role)
        return {'Authorization': f'Bearer {token}'}
    return _headers


# =============================================================================
# Catalog Fixtures (database)
# =============================================================================

@pytest.fixture
def positions(app):
    """Two positions with distinct sort orders. Returns {name: id}."""
    rows = [
        Position(name='Stage Manager', sort_order=1),
        Position(name='Audio Engineer', sort_order=2),
    ]
    db.session.add_all(rows)
    db.session.commit()
    return {p.name: p.id for p in rows}


@pytest.fixture
def crew(app, positions):
    """Active and inactive crew members. Returns {name: id}."""
    rows = [
        CrewMember(name='Alice Martin', email='alice@example.com', phone='555-0101',
                   hourly_rate=Decimal('25.00'), default_position_id=positions['Stage Manager']),
        CrewMember(name='Bruno Diaz', email='bruno@example.com',
                   hourly_rate=Decimal('30.00')),
        CrewMember(name='Chloe Inactive', email='chloe@example.com',
                   hourly_rate=Decimal('40.00'), is_active=False),
    ]
    db.session.add_all(rows)
    db.session.commit()
    return {c.name: c.id for c in rows}


@pytest.fixture
def equipment(app):
    """A speaker, a light and a retired item. Returns {name: id}."""
    audio = EquipmentCategory(name='Audio', sort_order=1)
    lighting = EquipmentCategory(name='Lighting', sort_order=2)
    db.session.add_all([audio, lighting])
    db.session.flush()

    rows = [
        Equipment(name='Line Array Speaker', category_id=audio.id, serial_number='LA-001',
                  daily_rate=Decimal('75.00'), quantity_available=8),
        Equipment(name='Moving Head', category_id=lighting.id, serial_number='MH-014',
                  daily_rate=Decimal('40.00'), quantity_available=12),
        Equipment(name='Old Mixer', category_id=audio.id, daily_rate=Decimal('10.00'),
                  is_active=False),
    ]
    db.session.add_all(rows)
    db.session.commit()
    return {e.name: e.id for e in rows}


@pytest.fixture
def events(app):
    """Three events across two cost centers and one without. Returns {name: id}."""
    rows = [
        Event(name='Arena Night', event_date=date(2026, 6, 1), start_time=time(20, 0),
              location='Lyon', venue='Halle Tony Garnier', cost_center='TOUR-2026'),
        Event(name='Festival Day', event_date=date(2026, 6, 3), start_time=time(14, 0),
              location='Nantes', cost_center='FEST'),
        Event(name='Private Party', event_date=date(2026, 6, 5)),
    ]
    db.session.add_all(rows)
    db.session.commit()
    return {e.name: e.id for e in rows}
