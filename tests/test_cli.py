"""
Tests for the Flask CLI commands.
"""
import json
from decimal import Decimal

from crewdesk.extensions import db
from crewdesk.models import EquipmentAssignment


class TestCliCommands:

    def test_init_db(self, runner):
        result = runner.invoke(args=['init-db'])
        assert result.exit_code == 0
        assert 'Database tables created' in result.output

    def test_cost_report_json(self, runner, events, equipment):
        db.session.add(EquipmentAssignment(
            event_id=events['Festival Day'],
            equipment_id=equipment['Moving Head'],
            quantity=3,
            rate_override=Decimal('10.00'),
        ))
        db.session.commit()

        result = runner.invoke(args=['cost-report', '--cost-center', 'FEST'])

        assert result.exit_code == 0
        report = json.loads(result.output)
        assert report['event_count'] == 1
        assert report['grand_total'] == {'crew': 0.0, 'equipment': 30.0, 'total': 30.0}
        assert report['by_cost_center']['FEST']['events'][0]['name'] == 'Festival Day'

    def test_cost_report_date_range(self, runner, events):
        result = runner.invoke(args=['cost-report', '--start-date', '2026-06-02',
                                     '--end-date', '2026-06-30'])
        assert result.exit_code == 0
        report = json.loads(result.output)
        assert report['event_count'] == 2
        assert list(report['by_cost_center']) == ['FEST', 'Unassigned']
