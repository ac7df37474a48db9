"""
API v1 Report endpoints: event drill-down, cost-center roll-up, crew schedule.
"""
from crewdesk.blueprints.api import api_bp
from crewdesk.blueprints.api.decorators import jwt_required
from crewdesk.blueprints.api.helpers import api_success, load_args
from crewdesk.blueprints.api.schemas import (
    CostReportArgsSchema,
    CostReportSchema,
    CostTotalsSchema,
    CrewScheduleArgsSchema,
    CrewScheduleSchema,
    EventReportSchema,
)
from crewdesk.services import ReportService, SQLAlchemyAssignmentStore


def _reports():
    return ReportService(SQLAlchemyAssignmentStore())


@api_bp.route('/reports/event/<event_id>', methods=['GET'])
@jwt_required
def api_event_report(event_id):
    """Event with its crew and equipment lines, each costed."""
    report = _reports().event_report(event_id)
    return api_success(EventReportSchema().dump(report))


@api_bp.route('/reports/event/<event_id>/summary', methods=['GET'])
@jwt_required
def api_event_cost_summary(event_id):
    """Crew, equipment and total cost of one event."""
    summary = _reports().event_cost_summary(event_id)
    return api_success(CostTotalsSchema().dump(summary))


@api_bp.route('/reports/costs', methods=['GET'])
@jwt_required
def api_cost_report():
    """Estimated costs grouped by cost center.

    Query params:
        start_date, end_date (YYYY-MM-DD): Inclusive event date range
        cost_center (str): Exact cost center label
    """
    args, error = load_args(CostReportArgsSchema())
    if error:
        return error

    report = _reports().cost_report(**args)
    return api_success(CostReportSchema().dump(report))


@api_bp.route('/reports/crew-schedule', methods=['GET'])
@jwt_required
def api_crew_schedule():
    """Upcoming assignments grouped by crew member.

    Query params:
        start_date (YYYY-MM-DD): Defaults to today
        end_date (YYYY-MM-DD): Optional upper bound
        crew_member_id: Only this crew member
    """
    args, error = load_args(CrewScheduleArgsSchema())
    if error:
        return error

    report = _reports().crew_schedule_report(**args)
    return api_success(CrewScheduleSchema().dump(report))


@api_bp.route('/reports/cost-centers', methods=['GET'])
@jwt_required
def api_cost_centers():
    """Cost center labels in use, for report filters."""
    return api_success(_reports().cost_centers())
