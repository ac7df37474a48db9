"""
Flask-SQLAlchemy implementation of the assignment store.
Each write is its own unit of work on the request-scoped session.
"""
import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import joinedload

from crewdesk.extensions import db
from crewdesk.models.assignment import CrewAssignment, EquipmentAssignment
from crewdesk.models.crew import CrewMember
from crewdesk.models.equipment import Equipment
from crewdesk.models.event import Event
from crewdesk.services.store import (
    AssignmentStore,
    DuplicateAssignmentError,
    MissingReferenceError,
)

logger = logging.getLogger(__name__)


def _schedule_row(assignment):
    row = assignment.to_dict()
    event = assignment.event
    row.update({
        'event_name': event.name,
        'event_date': event.event_date,
        'location': event.location,
        'venue': event.venue,
        'event_start_time': event.start_time,
        'event_end_time': event.end_time,
    })
    return row


class SQLAlchemyAssignmentStore(AssignmentStore):
    """Assignment store backed by the application database."""

    def __init__(self):
        self.session = db.session

    # ── Catalog ────────────────────────────────────────────

    def get_event(self, event_id):
        event = self.session.get(Event, event_id)
        return event.to_dict() if event else None

    def get_crew_member(self, crew_member_id):
        member = self.session.get(CrewMember, crew_member_id)
        return member.to_dict() if member else None

    def get_equipment(self, equipment_id):
        item = self.session.get(Equipment, equipment_id)
        return item.to_dict() if item else None

    def list_active_crew_members(self):
        members = CrewMember.query.filter(
            CrewMember.is_active.is_(True)
        ).order_by(CrewMember.name).all()
        return [m.to_dict() for m in members]

    def list_events(self, start_date=None, end_date=None, cost_center=None):
        query = Event.query
        if start_date:
            query = query.filter(Event.event_date >= start_date)
        if end_date:
            query = query.filter(Event.event_date <= end_date)
        if cost_center:
            query = query.filter(Event.cost_center == cost_center)
        return [e.to_dict() for e in query.order_by(Event.event_date, Event.start_time).all()]

    def list_cost_centers(self):
        rows = self.session.query(Event.cost_center).filter(
            Event.cost_center.isnot(None),
            Event.cost_center != '',
        ).distinct().order_by(Event.cost_center).all()
        return [row[0] for row in rows]

    # ── Shared write helpers ───────────────────────────────

    def _insert(self, model, values, duplicate_filter):
        record = model(**values)
        self.session.add(record)
        try:
            self.session.commit()
        except IntegrityError as exc:
            self.session.rollback()
            if model.query.filter_by(**duplicate_filter).first() is not None:
                raise DuplicateAssignmentError(
                    f'{model.__tablename__}: pair already assigned'
                ) from exc
            logger.warning('Integrity error inserting into %s: %s', model.__tablename__, exc.orig)
            raise MissingReferenceError('Referenced record does not exist') from exc
        return record.to_dict()

    def _update(self, model, assignment_id, changes):
        record = self.session.get(model, assignment_id)
        if record is None:
            return False
        for field, value in changes.items():
            setattr(record, field, value)
        try:
            self.session.commit()
        except IntegrityError as exc:
            self.session.rollback()
            raise MissingReferenceError('Referenced record does not exist') from exc
        return True

    def _delete(self, model, assignment_id):
        record = self.session.get(model, assignment_id)
        if record is None:
            return False
        self.session.delete(record)
        self.session.commit()
        return True

    # ── Crew assignments ───────────────────────────────────

    def insert_crew_assignment(self, values):
        return self._insert(CrewAssignment, values, {
            'event_id': values['event_id'],
            'crew_member_id': values['crew_member_id'],
        })

    def get_crew_assignment(self, assignment_id):
        assignment = self.session.get(CrewAssignment, assignment_id)
        return assignment.to_dict() if assignment else None

    def update_crew_assignment(self, assignment_id, changes):
        return self._update(CrewAssignment, assignment_id, changes)

    def delete_crew_assignment(self, assignment_id):
        return self._delete(CrewAssignment, assignment_id)

    def list_crew_lines(self, event_ids):
        event_ids = list(event_ids)
        if not event_ids:
            return []
        assignments = CrewAssignment.query.options(
            joinedload(CrewAssignment.crew_member),
            joinedload(CrewAssignment.position),
        ).filter(CrewAssignment.event_id.in_(event_ids)).all()
        return [a.to_dict() for a in assignments]

    def list_crew_bookings(self, start_date, end_date):
        rows = self.session.query(
            CrewAssignment.crew_member_id,
            Event.id,
            Event.event_date,
            Event.name,
        ).join(
            Event, CrewAssignment.event_id == Event.id
        ).join(
            CrewMember, CrewAssignment.crew_member_id == CrewMember.id
        ).filter(
            CrewMember.is_active.is_(True),
            Event.event_date >= start_date,
            Event.event_date <= end_date,
        ).order_by(Event.event_date).all()

        return [
            {
                'crew_member_id': crew_member_id,
                'event_id': event_id,
                'event_date': event_date,
                'event_name': event_name,
            }
            for crew_member_id, event_id, event_date, event_name in rows
        ]

    def list_crew_schedule(self, start_date, end_date=None, crew_member_id=None):
        query = CrewAssignment.query.join(
            Event, CrewAssignment.event_id == Event.id
        ).join(
            CrewMember, CrewAssignment.crew_member_id == CrewMember.id
        ).options(
            joinedload(CrewAssignment.event),
            joinedload(CrewAssignment.crew_member),
            joinedload(CrewAssignment.position),
        ).filter(Event.event_date >= start_date)

        if end_date:
            query = query.filter(Event.event_date <= end_date)
        if crew_member_id:
            query = query.filter(CrewAssignment.crew_member_id == crew_member_id)

        query = query.order_by(CrewMember.name, Event.event_date, Event.start_time)
        return [_schedule_row(a) for a in query.all()]

    # ── Equipment assignments ──────────────────────────────

    def insert_equipment_assignment(self, values):
        return self._insert(EquipmentAssignment, values, {
            'event_id': values['event_id'],
            'equipment_id': values['equipment_id'],
        })

    def get_equipment_assignment(self, assignment_id):
        assignment = self.session.get(EquipmentAssignment, assignment_id)
        return assignment.to_dict() if assignment else None

    def update_equipment_assignment(self, assignment_id, changes):
        return self._update(EquipmentAssignment, assignment_id, changes)

    def delete_equipment_assignment(self, assignment_id):
        return self._delete(EquipmentAssignment, assignment_id)

    def list_equipment_lines(self, event_ids):
        event_ids = list(event_ids)
        if not event_ids:
            return []
        assignments = EquipmentAssignment.query.options(
            joinedload(EquipmentAssignment.equipment).joinedload(Equipment.category),
        ).filter(EquipmentAssignment.event_id.in_(event_ids)).all()
        return [a.to_dict() for a in assignments]
