"""
Crew catalog models: positions and crew members.
Reference data read by the assignment engine.
"""
from datetime import datetime

from crewdesk.extensions import db
from crewdesk.models.event import generate_uuid


class Position(db.Model):
    """Job position (Audio A1, Stagehand, ...) with a default hourly rate."""
    __tablename__ = 'positions'

    id = db.Column(db.String(36), primary_key=True, default=generate_uuid)
    name = db.Column(db.String(100), unique=True, nullable=False)
    description = db.Column(db.Text)
    default_rate = db.Column(db.Numeric(10, 2))
    # Display ordering of assignment lists only
    sort_order = db.Column(db.Integer, default=0)
    is_active = db.Column(db.Boolean, default=True, nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    def __repr__(self):
        return f'<Position {self.name}>'


class CrewMember(db.Model):
    """A person who can be assigned to events."""
    __tablename__ = 'crew_members'

    id = db.Column(db.String(36), primary_key=True, default=generate_uuid)
    # Linked login account, managed by the identity service
    user_id = db.Column(db.String(36))

    # Identity
    name = db.Column(db.String(255), nullable=False)
    email = db.Column(db.String(255))
    phone = db.Column(db.String(50))
    department = db.Column(db.String(100))

    # Defaults used when assigning
    default_position_id = db.Column(db.String(36), db.ForeignKey('positions.id', ondelete='SET NULL'))
    hourly_rate = db.Column(db.Numeric(10, 2))

    notes = db.Column(db.Text)
    is_active = db.Column(db.Boolean, default=True, nullable=False)

    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    default_position = db.relationship('Position')
    assignments = db.relationship(
        'CrewAssignment', back_populates='crew_member', cascade='all, delete-orphan'
    )

    def __repr__(self):
        return f'<CrewMember {self.name}>'

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'email': self.email,
            'phone': self.phone,
            'department': self.department,
            'default_position_id': self.default_position_id,
            'hourly_rate': self.hourly_rate,
            'is_active': self.is_active,
        }
