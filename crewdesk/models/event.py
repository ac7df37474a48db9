"""
Event model.
Events are owned by the scheduling side of the system; the assignment
engine only reads them (date, times, cost center).
"""
import enum
import uuid
from datetime import datetime

from crewdesk.extensions import db


class EventStatus(enum.Enum):
    """Event lifecycle: scheduled → confirmed → in_progress → completed, or cancelled."""
    SCHEDULED = 'scheduled'
    CONFIRMED = 'confirmed'
    IN_PROGRESS = 'in_progress'
    COMPLETED = 'completed'
    CANCELLED = 'cancelled'


def generate_uuid():
    return str(uuid.uuid4())


class Event(db.Model):
    """A scheduled event that crew and equipment get assigned to."""
    __tablename__ = 'events'

    id = db.Column(db.String(36), primary_key=True, default=generate_uuid)
    name = db.Column(db.String(500), nullable=False)
    description = db.Column(db.Text)
    location = db.Column(db.String(500))
    venue = db.Column(db.String(255))

    # Timing
    event_date = db.Column(db.Date, nullable=False, index=True)
    start_time = db.Column(db.Time)
    end_time = db.Column(db.Time)
    load_in_time = db.Column(db.Time)
    load_out_time = db.Column(db.Time)

    # Reporting
    cost_center = db.Column(db.String(100), index=True)
    status = db.Column(db.Enum(EventStatus), default=EventStatus.SCHEDULED, nullable=False, index=True)
    notes = db.Column(db.Text)

    # Audit
    created_by = db.Column(db.String(36))
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    crew_assignments = db.relationship(
        'CrewAssignment', back_populates='event', cascade='all, delete-orphan'
    )
    equipment_assignments = db.relationship(
        'EquipmentAssignment', back_populates='event', cascade='all, delete-orphan'
    )

    def __repr__(self):
        return f'<Event {self.name} {self.event_date}>'

    def to_dict(self):
        """Plain row used by the assignment store."""
        return {
            'id': self.id,
            'name': self.name,
            'description': self.description,
            'location': self.location,
            'venue': self.venue,
            'event_date': self.event_date,
            'start_time': self.start_time,
            'end_time': self.end_time,
            'load_in_time': self.load_in_time,
            'load_out_time': self.load_out_time,
            'cost_center': self.cost_center,
            'status': self.status.value if self.status else None,
            'notes': self.notes,
        }
