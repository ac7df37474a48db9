"""
Crew availability: who is booked on which dates.
"""
from collections import defaultdict

from crewdesk.services.store import AssignmentStore


class AvailabilityService:
    """Read-only projection of crew bookings over a date range."""

    def __init__(self, store: AssignmentStore):
        self.store = store

    def crew_availability(self, start_date, end_date):
        """
        List every active crew member with their bookings in the range.

        Members with no booking in [start_date, end_date] are included with an
        empty list, including when start_date is after end_date. Overlapping
        bookings are reported, not prevented.
        """
        bookings = defaultdict(list)
        for row in self.store.list_crew_bookings(start_date, end_date):
            bookings[row['crew_member_id']].append(row)

        result = []
        members = sorted(self.store.list_active_crew_members(), key=lambda m: m['name'])
        for member in members:
            rows = sorted(bookings.get(member['id'], []), key=lambda r: r['event_date'])
            result.append({
                'id': member['id'],
                'name': member['name'],
                'assignments': [
                    {
                        'date': row['event_date'],
                        'event': row['event_name'],
                        'event_id': row['event_id'],
                    }
                    for row in rows
                ],
            })
        return result
