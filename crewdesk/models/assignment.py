"""
Assignment models linking crew members and equipment to events.
One assignment per (event, resource) pair is enforced by unique constraints.
"""
import enum
from datetime import datetime

from crewdesk.extensions import db
from crewdesk.models.event import generate_uuid


class AssignmentStatus(enum.Enum):
    """Status for crew assignments. Only changed through explicit updates."""
    PENDING = 'pending'         # Assigned, awaiting confirmation
    CONFIRMED = 'confirmed'     # Confirmed by the crew member
    DECLINED = 'declined'       # Declined
    NO_SHOW = 'no_show'         # Did not show up
    COMPLETED = 'completed'     # Worked (post-event)


class CrewAssignment(db.Model):
    """Assignment of a crew member to an event."""
    __tablename__ = 'crew_assignments'

    id = db.Column(db.String(36), primary_key=True, default=generate_uuid)
    event_id = db.Column(db.String(36), db.ForeignKey('events.id', ondelete='CASCADE'), nullable=False)
    crew_member_id = db.Column(
        db.String(36), db.ForeignKey('crew_members.id', ondelete='CASCADE'), nullable=False
    )
    position_id = db.Column(db.String(36), db.ForeignKey('positions.id', ondelete='SET NULL'))

    # Clock times, no date component
    call_time = db.Column(db.Time)
    end_time = db.Column(db.Time)

    rate_override = db.Column(db.Numeric(10, 2))
    status = db.Column(db.Enum(AssignmentStatus), default=AssignmentStatus.PENDING, nullable=False)
    notes = db.Column(db.Text)
    notification_sent_at = db.Column(db.DateTime)

    # Audit
    created_by = db.Column(db.String(36))
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    event = db.relationship('Event', back_populates='crew_assignments')
    crew_member = db.relationship('CrewMember', back_populates='assignments')
    position = db.relationship('Position')

    __table_args__ = (
        db.UniqueConstraint('event_id', 'crew_member_id', name='uq_crew_assignment_event_member'),
        db.Index('ix_crew_assignments_event', 'event_id'),
        db.Index('ix_crew_assignments_crew', 'crew_member_id'),
    )

    def __repr__(self):
        return f'<CrewAssignment {self.crew_member_id} -> {self.event_id}>'

    def to_dict(self):
        """Assignment joined with crew member and position names."""
        crew = self.crew_member
        position = self.position
        return {
            'id': self.id,
            'event_id': self.event_id,
            'crew_member_id': self.crew_member_id,
            'position_id': self.position_id,
            'call_time': self.call_time,
            'end_time': self.end_time,
            'rate_override': self.rate_override,
            'status': self.status.value if self.status else None,
            'notes': self.notes,
            'created_by': self.created_by,
            'created_at': self.created_at,
            'crew_name': crew.name if crew else None,
            'crew_email': crew.email if crew else None,
            'crew_phone': crew.phone if crew else None,
            'default_rate': crew.hourly_rate if crew else None,
            'position_name': position.name if position else None,
            'position_sort_order': position.sort_order if position else None,
        }


class EquipmentAssignment(db.Model):
    """Assignment of an equipment item (with a quantity) to an event."""
    __tablename__ = 'equipment_assignments'

    id = db.Column(db.String(36), primary_key=True, default=generate_uuid)
    event_id = db.Column(db.String(36), db.ForeignKey('events.id', ondelete='CASCADE'), nullable=False)
    equipment_id = db.Column(
        db.String(36), db.ForeignKey('equipment.id', ondelete='CASCADE'), nullable=False
    )
    quantity = db.Column(db.Integer, default=1, nullable=False)
    rate_override = db.Column(db.Numeric(10, 2))
    notes = db.Column(db.Text)

    # Audit
    created_by = db.Column(db.String(36))
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    event = db.relationship('Event', back_populates='equipment_assignments')
    equipment = db.relationship('Equipment', back_populates='assignments')

    __table_args__ = (
        db.UniqueConstraint('event_id', 'equipment_id', name='uq_equipment_assignment_event_item'),
        db.CheckConstraint('quantity >= 1', name='ck_equipment_assignment_quantity'),
        db.Index('ix_equipment_assignments_event', 'event_id'),
    )

    def __repr__(self):
        return f'<EquipmentAssignment {self.equipment_id} x{self.quantity} -> {self.event_id}>'

    def to_dict(self):
        """Assignment joined with equipment and category names."""
        item = self.equipment
        category = item.category if item else None
        return {
            'id': self.id,
            'event_id': self.event_id,
            'equipment_id': self.equipment_id,
            'quantity': self.quantity,
            'rate_override': self.rate_override,
            'notes': self.notes,
            'created_by': self.created_by,
            'created_at': self.created_at,
            'equipment_name': item.name if item else None,
            'serial_number': item.serial_number if item else None,
            'default_rate': item.daily_rate if item else None,
            'category_name': category.name if category else None,
            'category_sort_order': category.sort_order if category else None,
        }
