"""
Services package for CrewDesk.
Contains the assignment and cost engine, separated from routes.
"""

from crewdesk.services.assignment_service import (
    AssignmentService,
    BulkAssignmentResult,
    CrewAssignmentUpdate,
    EquipmentAssignmentUpdate,
)
from crewdesk.services.availability_service import AvailabilityService
from crewdesk.services.report_service import ReportService
from crewdesk.services.sql_store import SQLAlchemyAssignmentStore

__all__ = [
    'AssignmentService',
    'AvailabilityService',
    'ReportService',
    'SQLAlchemyAssignmentStore',
    'BulkAssignmentResult',
    'CrewAssignmentUpdate',
    'EquipmentAssignmentUpdate',
]
