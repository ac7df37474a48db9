"""
Marshmallow schemas for the API.
Load schemas validate request bodies and query strings; dump schemas turn
engine rows (dates, clock times, Decimals) into JSON-safe dictionaries.
"""
from marshmallow import Schema, fields, pre_load, EXCLUDE
from marshmallow.validate import Length, OneOf, Range

from crewdesk.models.assignment import AssignmentStatus
from crewdesk.utils.clock import format_clock


# ── Shared helpers ──────────────────────────────────────────

class UUIDString(fields.UUID):
    """UUID validated on load, kept as its canonical string."""

    def _deserialize(self, value, attr, data, **kwargs):
        return str(super()._deserialize(value, attr, data, **kwargs))


class ClockTime(fields.Field):
    """Clock time rendered as HH:MM."""

    def _serialize(self, value, attr, obj, **kwargs):
        return format_clock(value)


class LoadSchema(Schema):
    """Base for request schemas: unknown keys dropped, empty strings read as null."""
    class Meta:
        unknown = EXCLUDE

    @pre_load
    def blank_to_none(self, data, **kwargs):
        return {k: (None if v == '' else v) for k, v in data.items()}


_non_negative = Range(min=0)
_statuses = [s.value for s in AssignmentStatus]


# ── Crew assignment requests ───────────────────────────────

class CrewAssignmentCreateSchema(LoadSchema):
    event_id = UUIDString(required=True)
    crew_member_id = UUIDString(required=True)
    position_id = UUIDString(allow_none=True)
    call_time = fields.Time(allow_none=True)
    end_time = fields.Time(allow_none=True)
    rate_override = fields.Decimal(allow_none=True, validate=_non_negative)
    notes = fields.Str(allow_none=True)


class CrewAssignmentUpdateSchema(LoadSchema):
    """All fields optional; a key present with null clears the value."""
    position_id = UUIDString(allow_none=True)
    call_time = fields.Time(allow_none=True)
    end_time = fields.Time(allow_none=True)
    rate_override = fields.Decimal(allow_none=True, validate=_non_negative)
    status = fields.Str(allow_none=True, validate=OneOf(_statuses))
    notes = fields.Str(allow_none=True)


class BulkCrewAssignmentSchema(LoadSchema):
    event_id = UUIDString(required=True)
    # Ids are checked one by one by the engine, not rejected as a batch
    crew_member_ids = fields.List(fields.Str(validate=Length(min=1)), required=True,
                                  validate=Length(min=1))
    position_id = UUIDString(allow_none=True)
    call_time = fields.Time(allow_none=True)


# ── Equipment assignment requests ──────────────────────────

class EquipmentAssignmentCreateSchema(LoadSchema):
    event_id = UUIDString(required=True)
    equipment_id = UUIDString(required=True)
    quantity = fields.Int(load_default=1, allow_none=True, validate=Range(min=1))
    rate_override = fields.Decimal(allow_none=True, validate=_non_negative)
    notes = fields.Str(allow_none=True)


class EquipmentAssignmentUpdateSchema(LoadSchema):
    quantity = fields.Int(allow_none=True, validate=Range(min=1))
    rate_override = fields.Decimal(allow_none=True, validate=_non_negative)
    notes = fields.Str(allow_none=True)


# ── Query strings ──────────────────────────────────────────

class AvailabilityArgsSchema(LoadSchema):
    start_date = fields.Date(required=True)
    end_date = fields.Date(required=True)


class CostReportArgsSchema(LoadSchema):
    start_date = fields.Date(allow_none=True)
    end_date = fields.Date(allow_none=True)
    cost_center = fields.Str(allow_none=True)


class CrewScheduleArgsSchema(LoadSchema):
    start_date = fields.Date(allow_none=True)
    end_date = fields.Date(allow_none=True)
    crew_member_id = UUIDString(allow_none=True)


# ── Assignments ────────────────────────────────────────────

class CrewAssignmentSchema(Schema):
    """Crew assignment joined with crew member and position."""
    id = fields.Str()
    event_id = fields.Str()
    crew_member_id = fields.Str()
    position_id = fields.Str()
    call_time = ClockTime()
    end_time = ClockTime()
    rate_override = fields.Float()
    status = fields.Str()
    notes = fields.Str()
    created_by = fields.Str()
    created_at = fields.DateTime(format='iso')
    crew_name = fields.Str()
    crew_email = fields.Str()
    crew_phone = fields.Str()
    position_name = fields.Str()


class EquipmentAssignmentSchema(Schema):
    """Equipment assignment joined with equipment and category."""
    id = fields.Str()
    event_id = fields.Str()
    equipment_id = fields.Str()
    quantity = fields.Int()
    rate_override = fields.Float()
    notes = fields.Str()
    created_by = fields.Str()
    created_at = fields.DateTime(format='iso')
    equipment_name = fields.Str()
    serial_number = fields.Str()
    category_name = fields.Str()


class BulkItemSchema(Schema):
    crew_member_id = fields.Str()
    outcome = fields.Method('get_outcome')
    assignment = fields.Nested(CrewAssignmentSchema, allow_none=True)
    error = fields.Str(allow_none=True)

    def get_outcome(self, obj):
        return obj.outcome.value


class BulkAssignmentResultSchema(Schema):
    assigned = fields.Int()
    skipped = fields.Int()
    errors = fields.List(fields.Dict())
    items = fields.List(fields.Nested(BulkItemSchema))


# ── Availability ───────────────────────────────────────────

class BookingSchema(Schema):
    date = fields.Date()
    event = fields.Str()
    event_id = fields.Str()


class CrewAvailabilitySchema(Schema):
    id = fields.Str()
    name = fields.Str()
    assignments = fields.List(fields.Nested(BookingSchema))


# ── Reports ────────────────────────────────────────────────

class EventSchema(Schema):
    id = fields.Str()
    name = fields.Str()
    description = fields.Str()
    location = fields.Str()
    venue = fields.Str()
    event_date = fields.Date()
    start_time = ClockTime()
    end_time = ClockTime()
    load_in_time = ClockTime()
    load_out_time = ClockTime()
    cost_center = fields.Str()
    status = fields.Str()
    notes = fields.Str()


class CostTotalsSchema(Schema):
    crew = fields.Float()
    equipment = fields.Float()
    total = fields.Float()


class CrewCostLineSchema(CrewAssignmentSchema):
    rate = fields.Float()
    cost = fields.Float()


class EquipmentCostLineSchema(EquipmentAssignmentSchema):
    rate = fields.Float()
    cost = fields.Float()


class EventReportSchema(Schema):
    event = fields.Nested(EventSchema)
    crew_assignments = fields.List(fields.Nested(CrewCostLineSchema))
    equipment_assignments = fields.List(fields.Nested(EquipmentCostLineSchema))
    totals = fields.Nested(CostTotalsSchema)


class CostReportEventSchema(Schema):
    id = fields.Str()
    name = fields.Str()
    event_date = fields.Date()
    cost_center = fields.Str()
    status = fields.Str()
    crew_cost = fields.Float()
    equipment_cost = fields.Float()
    total = fields.Float()


class CostCenterSchema(Schema):
    events = fields.List(fields.Nested(CostReportEventSchema))
    totals = fields.Nested(CostTotalsSchema)


class CostReportSchema(Schema):
    by_cost_center = fields.Dict(keys=fields.Str(), values=fields.Nested(CostCenterSchema))
    grand_total = fields.Nested(CostTotalsSchema)
    event_count = fields.Int()


class ScheduleAssignmentSchema(Schema):
    event_id = fields.Str()
    event_name = fields.Str()
    event_date = fields.Date()
    location = fields.Str()
    venue = fields.Str()
    call_time = ClockTime()
    position = fields.Str()
    status = fields.Str()


class ScheduleMemberSchema(Schema):
    id = fields.Str()
    name = fields.Str()
    email = fields.Str()
    phone = fields.Str()
    assignments = fields.List(fields.Nested(ScheduleAssignmentSchema))


class CrewScheduleSchema(Schema):
    schedule = fields.List(fields.Nested(ScheduleMemberSchema))
    total_assignments = fields.Int()
