"""
Tests for AvailabilityService.
"""
import pytest
from datetime import date
from decimal import Decimal

from crewdesk.services.assignment_service import AssignmentService
from crewdesk.services.availability_service import AvailabilityService


@pytest.fixture
def booked(store):
    """Alice booked on two events, Bruno on none, Chloe inactive but booked."""
    early = store.add_event('Early Show', date(2026, 6, 1))
    late = store.add_event('Late Show', date(2026, 6, 10))
    outside = store.add_event('Next Month', date(2026, 7, 15))
    alice = store.add_crew_member('Alice Martin', hourly_rate=Decimal('25'))
    bruno = store.add_crew_member('Bruno Diaz')
    chloe = store.add_crew_member('Chloe Inactive')

    assignments = AssignmentService(store)
    assignments.create_crew_assignment(late, alice)
    assignments.create_crew_assignment(early, alice)
    assignments.create_crew_assignment(outside, alice)
    assignments.create_crew_assignment(early, chloe)
    store.crew_members[chloe]['is_active'] = False

    return {'alice': alice, 'bruno': bruno, 'chloe': chloe, 'early': early, 'late': late}


class TestCrewAvailability:

    def test_lists_bookings_in_range_ordered_by_date(self, store, booked):
        result = AvailabilityService(store).crew_availability(date(2026, 6, 1), date(2026, 6, 30))

        assert [m['name'] for m in result] == ['Alice Martin', 'Bruno Diaz']
        alice = result[0]
        assert [a['event'] for a in alice['assignments']] == ['Early Show', 'Late Show']
        assert alice['assignments'][0] == {
            'date': date(2026, 6, 1), 'event': 'Early Show', 'event_id': booked['early'],
        }

    def test_free_members_have_empty_list(self, store, booked):
        result = AvailabilityService(store).crew_availability(date(2026, 6, 1), date(2026, 6, 30))
        bruno = next(m for m in result if m['id'] == booked['bruno'])
        assert bruno['assignments'] == []

    def test_range_bounds_are_inclusive(self, store, booked):
        result = AvailabilityService(store).crew_availability(date(2026, 6, 10), date(2026, 6, 10))
        alice = next(m for m in result if m['id'] == booked['alice'])
        assert [a['event_id'] for a in alice['assignments']] == [booked['late']]

    def test_empty_range_lists_every_active_member(self, store, booked):
        result = AvailabilityService(store).crew_availability(date(2027, 1, 1), date(2027, 1, 31))
        assert {m['id'] for m in result} == {booked['alice'], booked['bruno']}
        assert all(m['assignments'] == [] for m in result)

    def test_inverted_range_gives_empty_lists(self, store, booked):
        result = AvailabilityService(store).crew_availability(date(2026, 6, 30), date(2026, 6, 1))
        assert [m['name'] for m in result] == ['Alice Martin', 'Bruno Diaz']
        assert all(m['assignments'] == [] for m in result)
