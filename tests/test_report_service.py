"""
Tests for ReportService: event drill-down, cost-center roll-up, crew schedule.
"""
import pytest
from datetime import date, time
from decimal import Decimal

from crewdesk.services.assignment_service import AssignmentService
from crewdesk.services.exceptions import NotFound
from crewdesk.services.report_service import ReportService


@pytest.fixture
def reports(store):
    return ReportService(store)


@pytest.fixture
def costed(store):
    """Two events with crew and equipment, one event with no cost center."""
    arena = store.add_event('Arena Night', date(2026, 6, 1), cost_center='TOUR-2026',
                            start_time=time(20, 0))
    festival = store.add_event('Festival Day', date(2026, 6, 3), cost_center='FEST')
    party = store.add_event('Private Party', date(2026, 6, 5))

    stage = store.add_position('Stage Manager', sort_order=1)
    audio_pos = store.add_position('Audio Engineer', sort_order=2)
    alice = store.add_crew_member('Alice Martin', hourly_rate=Decimal('25'))
    bruno = store.add_crew_member('Bruno Diaz', hourly_rate=Decimal('20'))

    audio = store.add_category('Audio', sort_order=1)
    lighting = store.add_category('Lighting', sort_order=2)
    speaker = store.add_equipment('Speaker', daily_rate=Decimal('75'), category_id=audio)
    light = store.add_equipment('Moving Head', daily_rate=Decimal('40'), category_id=lighting)

    service = AssignmentService(store)
    # Overnight shift: 8h at 25
    service.create_crew_assignment(arena, alice, position_id=audio_pos,
                                   call_time='22:00', end_time='06:00')
    # Short shift: 2h at 20 (160 in the flat estimate)
    service.create_crew_assignment(arena, bruno, position_id=stage,
                                   call_time='10:00', end_time='12:00')
    service.create_equipment_assignment(arena, light, quantity=2)
    service.create_equipment_assignment(arena, speaker, quantity=3)
    service.create_equipment_assignment(festival, speaker, quantity=1, rate_override='25')
    service.create_crew_assignment(party, alice, rate_override='0')

    return {'arena': arena, 'festival': festival, 'party': party,
            'alice': alice, 'bruno': bruno}


class TestEventCostSummary:

    def test_uses_real_shift_times(self, reports, costed):
        summary = reports.event_cost_summary(costed['arena'])
        # crew: 25*8 + 20*2 ; equipment: 40*2 + 75*3
        assert summary == {'crew': 240.0, 'equipment': 305.0, 'total': 545.0}

    def test_event_without_assignments(self, reports, store):
        event = store.add_event('Empty', date(2026, 6, 9))
        assert reports.event_cost_summary(event) == {'crew': 0.0, 'equipment': 0.0, 'total': 0.0}

    def test_unknown_event(self, reports):
        with pytest.raises(NotFound):
            reports.event_cost_summary('missing')


class TestEventReport:

    def test_lines_are_costed_and_ordered(self, reports, costed):
        report = reports.event_report(costed['arena'])

        assert report['event']['name'] == 'Arena Night'
        # Stage Manager (sort 1) before Audio Engineer (sort 2)
        assert [c['crew_name'] for c in report['crew_assignments']] == ['Bruno Diaz', 'Alice Martin']
        assert [c['cost'] for c in report['crew_assignments']] == [40.0, 200.0]
        assert report['crew_assignments'][1]['rate'] == 25.0
        # Audio (sort 1) before Lighting (sort 2)
        assert [e['equipment_name'] for e in report['equipment_assignments']] == ['Speaker', 'Moving Head']
        assert report['totals'] == {'crew': 240.0, 'equipment': 305.0, 'total': 545.0}

    def test_unknown_event(self, reports):
        with pytest.raises(NotFound):
            reports.event_report('missing')


class TestCostReport:

    def test_grouped_by_cost_center(self, reports, costed):
        report = reports.cost_report()

        assert report['event_count'] == 3
        assert list(report['by_cost_center']) == ['TOUR-2026', 'FEST', 'Unassigned']

        arena = report['by_cost_center']['TOUR-2026']['events'][0]
        # Flat 8h estimate: (25 + 20) * 8
        assert arena['crew_cost'] == 360.0
        assert arena['equipment_cost'] == 305.0
        assert arena['total'] == 665.0

        festival = report['by_cost_center']['FEST']['totals']
        assert festival == {'crew': 0.0, 'equipment': 25.0, 'total': 25.0}

        # Zero override is used, not the member's rate
        assert report['by_cost_center']['Unassigned']['totals']['crew'] == 0.0

    def test_grand_total_is_sum_of_buckets(self, reports, costed):
        report = reports.cost_report()
        buckets = report['by_cost_center'].values()
        for key in ('crew', 'equipment', 'total'):
            assert report['grand_total'][key] == sum(b['totals'][key] for b in buckets)
        assert report['grand_total']['total'] == Decimal('690.00')

    def test_grand_total_exact_in_cents(self, reports, store):
        cable = store.add_equipment('Cable', daily_rate=Decimal('0.10'))
        service = AssignmentService(store)
        service.create_equipment_assignment(store.add_event('A', date(2026, 6, 1), cost_center='X'), cable)
        service.create_equipment_assignment(store.add_event('B', date(2026, 6, 2), cost_center='Y'), cable,
                                            rate_override='0.20')

        report = reports.cost_report()
        totals = [b['totals']['total'] for b in report['by_cost_center'].values()]
        assert totals == [Decimal('0.10'), Decimal('0.20')]
        assert report['grand_total']['total'] == sum(totals) == Decimal('0.30')

    def test_labels_kept_as_stored(self, reports, store):
        store.add_event('A', date(2026, 6, 1), cost_center='FEST')
        store.add_event('B', date(2026, 6, 2), cost_center='FEST ')
        store.add_event('C', date(2026, 6, 3), cost_center='   ')
        store.add_event('D', date(2026, 6, 4), cost_center='')

        report = reports.cost_report()
        assert list(report['by_cost_center']) == ['FEST', 'FEST ', '   ', 'Unassigned']
        assert report['event_count'] == 4

    def test_listed_label_filters_its_events(self, reports, store):
        store.add_event('A', date(2026, 6, 1), cost_center='FEST')
        store.add_event('B', date(2026, 6, 2), cost_center='FEST ')

        for label in reports.cost_centers():
            report = reports.cost_report(cost_center=label)
            assert list(report['by_cost_center']) == [label]
            assert report['event_count'] == 1

    def test_each_assignment_counted_once(self, reports, costed):
        # Two crew x two equipment lines on one event must not multiply
        report = reports.cost_report(cost_center='TOUR-2026')
        assert report['grand_total'] == {'crew': 360.0, 'equipment': 305.0, 'total': 665.0}

    def test_date_filters(self, reports, costed):
        report = reports.cost_report(start_date=date(2026, 6, 2), end_date=date(2026, 6, 4))
        assert report['event_count'] == 1
        assert list(report['by_cost_center']) == ['FEST']

    def test_no_matching_events(self, reports, costed):
        report = reports.cost_report(cost_center='NOPE')
        assert report == {
            'by_cost_center': {},
            'grand_total': {'crew': 0.0, 'equipment': 0.0, 'total': 0.0},
            'event_count': 0,
        }


class TestCrewScheduleReport:

    def test_grouped_and_ordered(self, reports, costed):
        report = reports.crew_schedule_report(today=date(2026, 5, 1))

        assert report['total_assignments'] == 3
        assert [m['name'] for m in report['schedule']] == ['Alice Martin', 'Bruno Diaz']
        alice = report['schedule'][0]
        assert [a['event_name'] for a in alice['assignments']] == ['Arena Night', 'Private Party']
        assert alice['assignments'][0]['position'] == 'Audio Engineer'
        assert alice['assignments'][0]['status'] == 'pending'
        assert alice['assignments'][0]['call_time'] == time(22, 0)

    def test_defaults_to_today(self, reports, costed):
        report = reports.crew_schedule_report(today=date(2026, 6, 2))
        assert report['total_assignments'] == 1
        assert report['schedule'][0]['assignments'][0]['event_name'] == 'Private Party'

    def test_start_date_replaces_today(self, reports, costed):
        report = reports.crew_schedule_report(start_date=date(2026, 1, 1), today=date(2026, 12, 31))
        assert report['total_assignments'] == 3

    def test_end_date_and_member_filters(self, reports, costed):
        report = reports.crew_schedule_report(
            start_date=date(2026, 1, 1), end_date=date(2026, 6, 2), crew_member_id=costed['alice'],
        )
        assert report['total_assignments'] == 1
        assert report['schedule'][0]['id'] == costed['alice']

    def test_missing_start_time_sorts_last(self, reports, store):
        member = store.add_crew_member('Dana Lee')
        morning = store.add_event('Morning', date(2026, 6, 1), start_time=time(9, 0))
        untimed = store.add_event('Untimed', date(2026, 6, 1))
        service = AssignmentService(store)
        service.create_crew_assignment(untimed, member)
        service.create_crew_assignment(morning, member)

        report = reports.crew_schedule_report(start_date=date(2026, 6, 1))
        names = [a['event_name'] for a in report['schedule'][0]['assignments']]
        assert names == ['Morning', 'Untimed']


class TestCostCenters:

    def test_distinct_sorted_non_blank(self, reports, store):
        store.add_event('A', date(2026, 6, 1), cost_center='TOUR-2026')
        store.add_event('B', date(2026, 6, 2), cost_center='FEST')
        store.add_event('C', date(2026, 6, 3), cost_center='FEST')
        store.add_event('D', date(2026, 6, 4), cost_center='')
        store.add_event('E', date(2026, 6, 5))
        assert reports.cost_centers() == ['FEST', 'TOUR-2026']

    def test_whitespace_labels_not_merged(self, reports, store):
        store.add_event('A', date(2026, 6, 1), cost_center='FEST')
        store.add_event('B', date(2026, 6, 2), cost_center='FEST ')
        assert reports.cost_centers() == ['FEST', 'FEST ']
