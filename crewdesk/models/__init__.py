"""
SQLAlchemy models for CrewDesk.
All models are imported here for easy access.
"""
from crewdesk.models.event import Event, EventStatus
from crewdesk.models.crew import Position, CrewMember
from crewdesk.models.equipment import EquipmentCategory, Equipment
from crewdesk.models.assignment import (
    CrewAssignment,
    EquipmentAssignment,
    AssignmentStatus,
)

__all__ = [
    'Event',
    'EventStatus',
    'Position',
    'CrewMember',
    'EquipmentCategory',
    'Equipment',
    'CrewAssignment',
    'EquipmentAssignment',
    'AssignmentStatus',
]
