"""
Equipment catalog models: categories and rentable items.
"""
from datetime import datetime

from crewdesk.extensions import db
from crewdesk.models.event import generate_uuid


class EquipmentCategory(db.Model):
    """Grouping for equipment (Audio, Lighting, Video...)."""
    __tablename__ = 'equipment_categories'

    id = db.Column(db.String(36), primary_key=True, default=generate_uuid)
    name = db.Column(db.String(100), unique=True, nullable=False)
    description = db.Column(db.Text)
    sort_order = db.Column(db.Integer, default=0)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    def __repr__(self):
        return f'<EquipmentCategory {self.name}>'


class Equipment(db.Model):
    """A rentable equipment item billed at a daily rate."""
    __tablename__ = 'equipment'

    id = db.Column(db.String(36), primary_key=True, default=generate_uuid)
    name = db.Column(db.String(255), nullable=False)
    category_id = db.Column(
        db.String(36), db.ForeignKey('equipment_categories.id', ondelete='SET NULL'), index=True
    )
    description = db.Column(db.Text)
    serial_number = db.Column(db.String(255))

    # Billing
    daily_rate = db.Column(db.Numeric(10, 2), default=0)
    replacement_cost = db.Column(db.Numeric(10, 2))
    quantity_available = db.Column(db.Integer, default=1)

    location = db.Column(db.String(255))
    notes = db.Column(db.Text)
    is_active = db.Column(db.Boolean, default=True, nullable=False)

    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    category = db.relationship('EquipmentCategory')
    assignments = db.relationship(
        'EquipmentAssignment', back_populates='equipment', cascade='all, delete-orphan'
    )

    def __repr__(self):
        return f'<Equipment {self.name}>'

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'category_id': self.category_id,
            'serial_number': self.serial_number,
            'daily_rate': self.daily_rate,
            'replacement_cost': self.replacement_cost,
            'quantity_available': self.quantity_available,
            'is_active': self.is_active,
        }
