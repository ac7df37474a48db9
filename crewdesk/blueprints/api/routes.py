"""
API v1 Routes: crew and equipment assignments, crew availability.
"""
from flask import request

from crewdesk.blueprints.api import api_bp
from crewdesk.blueprints.api.decorators import jwt_required, requires_role
from crewdesk.blueprints.api.helpers import api_success, load_args, load_json
from crewdesk.blueprints.api.schemas import (
    AvailabilityArgsSchema,
    BulkAssignmentResultSchema,
    BulkCrewAssignmentSchema,
    CrewAssignmentCreateSchema,
    CrewAssignmentSchema,
    CrewAssignmentUpdateSchema,
    CrewAvailabilitySchema,
    EquipmentAssignmentCreateSchema,
    EquipmentAssignmentSchema,
    EquipmentAssignmentUpdateSchema,
)
from crewdesk.extensions import limiter
from crewdesk.services import (
    AssignmentService,
    AvailabilityService,
    CrewAssignmentUpdate,
    EquipmentAssignmentUpdate,
    SQLAlchemyAssignmentStore,
)


def _assignments():
    return AssignmentService(SQLAlchemyAssignmentStore())


# ── Crew assignments ───────────────────────────────────────

@api_bp.route('/assignments/crew', methods=['POST'])
@requires_role('scheduler')
def api_create_crew_assignment():
    """Assign a crew member to an event.

    Request body:
        {"event_id", "crew_member_id", "position_id"?, "call_time"?, "end_time"?,
         "rate_override"?, "notes"?}
    """
    data, error = load_json(CrewAssignmentCreateSchema())
    if error:
        return error

    assignment = _assignments().create_crew_assignment(actor=request.api_actor.id, **data)
    return api_success(CrewAssignmentSchema().dump(assignment), 201)


@api_bp.route('/assignments/crew/bulk', methods=['POST'])
@limiter.limit('30 per minute')
@requires_role('scheduler')
def api_bulk_create_crew_assignments():
    """Assign several crew members to one event.

    Request body:
        {"event_id", "crew_member_ids": [...], "position_id"?, "call_time"?}

    Returns 201 even when some items failed; see `errors` and `items`.
    """
    data, error = load_json(BulkCrewAssignmentSchema())
    if error:
        return error

    result = _assignments().bulk_create_crew_assignments(actor=request.api_actor.id, **data)
    return api_success(BulkAssignmentResultSchema().dump(result), 201)


@api_bp.route('/assignments/crew/<assignment_id>', methods=['PUT'])
@requires_role('scheduler')
def api_update_crew_assignment(assignment_id):
    """Update the supplied fields of a crew assignment (null clears a field)."""
    data, error = load_json(CrewAssignmentUpdateSchema())
    if error:
        return error

    assignment = _assignments().update_crew_assignment(
        assignment_id, CrewAssignmentUpdate.from_payload(data)
    )
    return api_success(CrewAssignmentSchema().dump(assignment))


@api_bp.route('/assignments/crew/<assignment_id>', methods=['DELETE'])
@requires_role('scheduler')
def api_delete_crew_assignment(assignment_id):
    """Remove a crew member from an event."""
    _assignments().delete_crew_assignment(assignment_id)
    return api_success({'message': 'Assignment removed'})


# ── Equipment assignments ──────────────────────────────────

@api_bp.route('/assignments/equipment', methods=['POST'])
@requires_role('scheduler')
def api_create_equipment_assignment():
    """Assign an equipment item to an event.

    Request body:
        {"event_id", "equipment_id", "quantity"? (default 1), "rate_override"?, "notes"?}
    """
    data, error = load_json(EquipmentAssignmentCreateSchema())
    if error:
        return error

    assignment = _assignments().create_equipment_assignment(actor=request.api_actor.id, **data)
    return api_success(EquipmentAssignmentSchema().dump(assignment), 201)


@api_bp.route('/assignments/equipment/<assignment_id>', methods=['PUT'])
@requires_role('scheduler')
def api_update_equipment_assignment(assignment_id):
    """Update quantity, rate override or notes of an equipment assignment."""
    data, error = load_json(EquipmentAssignmentUpdateSchema())
    if error:
        return error

    assignment = _assignments().update_equipment_assignment(
        assignment_id, EquipmentAssignmentUpdate.from_payload(data)
    )
    return api_success(EquipmentAssignmentSchema().dump(assignment))


@api_bp.route('/assignments/equipment/<assignment_id>', methods=['DELETE'])
@requires_role('scheduler')
def api_delete_equipment_assignment(assignment_id):
    """Remove an equipment item from an event."""
    _assignments().delete_equipment_assignment(assignment_id)
    return api_success({'message': 'Assignment removed'})


# ── Availability ───────────────────────────────────────────

@api_bp.route('/assignments/availability/crew', methods=['GET'])
@jwt_required
def api_crew_availability():
    """Active crew members with their bookings in a date range.

    Query params:
        start_date (YYYY-MM-DD): First day, inclusive
        end_date (YYYY-MM-DD): Last day, inclusive
    """
    args, error = load_args(AvailabilityArgsSchema())
    if error:
        return error

    availability = AvailabilityService(SQLAlchemyAssignmentStore()).crew_availability(
        args['start_date'], args['end_date']
    )
    return api_success(CrewAvailabilitySchema(many=True).dump(availability))
