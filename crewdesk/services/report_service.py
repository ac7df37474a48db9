"""
Report service: rolls assignment costs up into event, cost-center and
crew schedule reports.

Amounts are summed as Decimal and returned rounded to cents. The API
schemas turn them into JSON numbers.
"""
from collections import OrderedDict
from datetime import date, time
from decimal import Decimal
from typing import Any, Dict, List, Optional

from crewdesk.services.exceptions import NotFound
from crewdesk.services.store import AssignmentStore
from crewdesk.utils.costs import (
    ZERO,
    crew_cost,
    effective_rate,
    equipment_cost,
    estimated_crew_cost,
    money,
)

UNASSIGNED_COST_CENTER = 'Unassigned'


def _totals(crew, equipment):
    return {
        'crew': money(crew),
        'equipment': money(equipment),
        'total': money(crew + equipment),
    }


def _sort_order_key(sort_order, name):
    # Missing sort order sorts last, as NULLs do in an ascending ORDER BY
    return (sort_order is None, sort_order or 0, name or '')


def _start_time_key(value):
    return (value is None, value or time.min)


class ReportService:
    """Cost and schedule reports built from the assignment store."""

    def __init__(self, store: AssignmentStore):
        self.store = store

    def _get_event(self, event_id):
        event = self.store.get_event(event_id)
        if event is None:
            raise NotFound('Event not found')
        return event

    def event_cost_summary(self, event_id) -> Dict[str, Decimal]:
        """Crew, equipment and total cost of one event, from real shift times."""
        self._get_event(event_id)

        crew = sum((crew_cost(line) for line in self.store.list_crew_lines([event_id])), ZERO)
        equipment = sum(
            (equipment_cost(line) for line in self.store.list_equipment_lines([event_id])), ZERO
        )
        return _totals(crew, equipment)

    def event_report(self, event_id) -> Dict[str, Any]:
        """
        Drill-down for one event.

        Returns:
            {
                'event': event row,
                'crew_assignments': crew lines with 'rate' and 'cost',
                    ordered by position sort order then crew name,
                'equipment_assignments': equipment lines with 'rate' and 'cost',
                    ordered by category sort order then equipment name,
                'totals': {'crew', 'equipment', 'total'},
            }
        """
        event = self._get_event(event_id)

        crew_lines = sorted(
            self.store.list_crew_lines([event_id]),
            key=lambda line: _sort_order_key(line.get('position_sort_order'), line.get('crew_name')),
        )
        equipment_lines = sorted(
            self.store.list_equipment_lines([event_id]),
            key=lambda line: _sort_order_key(
                line.get('category_sort_order'), line.get('equipment_name')
            ),
        )

        crew_total = ZERO
        crew_rows = []
        for line in crew_lines:
            cost = crew_cost(line)
            crew_total += cost
            crew_rows.append(dict(
                line,
                rate=money(effective_rate(line.get('rate_override'), line.get('default_rate'))),
                cost=money(cost),
            ))

        equipment_total = ZERO
        equipment_rows = []
        for line in equipment_lines:
            cost = equipment_cost(line)
            equipment_total += cost
            equipment_rows.append(dict(
                line,
                rate=money(effective_rate(line.get('rate_override'), line.get('default_rate'))),
                cost=money(cost),
            ))

        return {
            'event': event,
            'crew_assignments': crew_rows,
            'equipment_assignments': equipment_rows,
            'totals': _totals(crew_total, equipment_total),
        }

    def cost_report(self, start_date: Optional[date] = None, end_date: Optional[date] = None,
                    cost_center: Optional[str] = None) -> Dict[str, Any]:
        """
        Estimated costs grouped by cost center.

        Crew lines use the flat 8-hour estimate; equipment lines rate × quantity.
        Events without a cost center land in the 'Unassigned' bucket.
        """
        events = sorted(
            self.store.list_events(start_date=start_date, end_date=end_date, cost_center=cost_center),
            key=lambda e: e['event_date'],
        )
        event_ids = [e['id'] for e in events]

        crew_by_event = {event_id: ZERO for event_id in event_ids}
        for line in self.store.list_crew_lines(event_ids):
            crew_by_event[line['event_id']] += estimated_crew_cost(line)

        equipment_by_event = {event_id: ZERO for event_id in event_ids}
        for line in self.store.list_equipment_lines(event_ids):
            equipment_by_event[line['event_id']] += equipment_cost(line)

        buckets = OrderedDict()
        grand_crew = grand_equipment = ZERO

        for event in events:
            label = event.get('cost_center') or UNASSIGNED_COST_CENTER
            bucket = buckets.setdefault(label, {'events': [], 'crew': ZERO, 'equipment': ZERO})

            crew = money(crew_by_event[event['id']])
            equipment = money(equipment_by_event[event['id']])

            bucket['events'].append({
                'id': event['id'],
                'name': event['name'],
                'event_date': event['event_date'],
                'cost_center': event.get('cost_center'),
                'status': event.get('status'),
                'crew_cost': crew,
                'equipment_cost': equipment,
                'total': crew + equipment,
            })
            bucket['crew'] += crew
            bucket['equipment'] += equipment
            grand_crew += crew
            grand_equipment += equipment

        by_cost_center = OrderedDict(
            (label, {
                'events': bucket['events'],
                'totals': _totals(bucket['crew'], bucket['equipment']),
            })
            for label, bucket in buckets.items()
        )

        return {
            'by_cost_center': by_cost_center,
            'grand_total': _totals(grand_crew, grand_equipment),
            'event_count': len(events),
        }

    def crew_schedule_report(self, start_date: Optional[date] = None, end_date: Optional[date] = None,
                             crew_member_id: Optional[str] = None,
                             today: Optional[date] = None) -> Dict[str, Any]:
        """
        Upcoming assignments grouped by crew member.

        Without a start date the report starts today. Members are ordered by
        name and their assignments by event date then start time.
        """
        if start_date is None:
            start_date = today or date.today()

        rows = sorted(
            self.store.list_crew_schedule(start_date, end_date=end_date, crew_member_id=crew_member_id),
            key=lambda r: (
                r.get('crew_name') or '',
                r['event_date'],
                _start_time_key(r.get('event_start_time')),
            ),
        )

        schedule: Dict[str, Dict[str, Any]] = OrderedDict()
        for row in rows:
            member = schedule.setdefault(row['crew_member_id'], {
                'id': row['crew_member_id'],
                'name': row.get('crew_name'),
                'email': row.get('crew_email'),
                'phone': row.get('crew_phone'),
                'assignments': [],
            })
            member['assignments'].append({
                'event_id': row['event_id'],
                'event_name': row.get('event_name'),
                'event_date': row['event_date'],
                'location': row.get('location'),
                'venue': row.get('venue'),
                'call_time': row.get('call_time'),
                'position': row.get('position_name'),
                'status': row.get('status'),
            })

        return {
            'schedule': list(schedule.values()),
            'total_assignments': len(rows),
        }

    def cost_centers(self) -> List[str]:
        """Distinct non-empty cost center labels as stored, sorted."""
        return sorted({label for label in self.store.list_cost_centers() if label})
