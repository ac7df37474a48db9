"""
Assignment store interface.

The engine talks to persistence only through this interface so that its
logic can run against the SQLAlchemy store in the app and an in-memory
store in tests. Rows are plain dicts with native Python values
(date, time, Decimal).

The store is the single arbiter of the one-assignment-per-resource-per-event
rule: inserts must fail with DuplicateAssignmentError when the pair exists,
even when two requests race.
"""
from abc import ABC, abstractmethod
from datetime import date
from typing import Any, Dict, Iterable, List, Optional

Row = Dict[str, Any]


class StoreError(Exception):
    """Base class for persistence-level failures the engine knows how to map."""


class DuplicateAssignmentError(StoreError):
    """Unique violation: the (event, resource) pair already has an assignment."""


class MissingReferenceError(StoreError):
    """Foreign key violation: a referenced row does not exist."""


class AssignmentStore(ABC):
    """Queries and writes used by the assignment and report services."""

    # ── Catalog ────────────────────────────────────────────

    @abstractmethod
    def get_event(self, event_id: str) -> Optional[Row]:
        """Event row or None."""

    @abstractmethod
    def get_crew_member(self, crew_member_id: str) -> Optional[Row]:
        """Crew member row (active or not) or None."""

    @abstractmethod
    def get_equipment(self, equipment_id: str) -> Optional[Row]:
        """Equipment row (active or not) or None."""

    @abstractmethod
    def list_active_crew_members(self) -> List[Row]:
        """All active crew members."""

    @abstractmethod
    def list_events(self, start_date: Optional[date] = None, end_date: Optional[date] = None,
                    cost_center: Optional[str] = None) -> List[Row]:
        """Events filtered by inclusive date range and exact cost center."""

    @abstractmethod
    def list_cost_centers(self) -> List[str]:
        """Distinct cost center labels in use."""

    # ── Crew assignments ───────────────────────────────────

    @abstractmethod
    def insert_crew_assignment(self, values: Row) -> Row:
        """Insert and return the new row.

        Raises:
            DuplicateAssignmentError: pair already assigned
            MissingReferenceError: event, crew member or position missing
        """

    @abstractmethod
    def get_crew_assignment(self, assignment_id: str) -> Optional[Row]:
        """Assignment joined with crew name/email/phone/rate and position name."""

    @abstractmethod
    def update_crew_assignment(self, assignment_id: str, changes: Row) -> bool:
        """Apply changes; False when no row matches."""

    @abstractmethod
    def delete_crew_assignment(self, assignment_id: str) -> bool:
        """Delete; False when no row matches."""

    @abstractmethod
    def list_crew_lines(self, event_ids: Iterable[str]) -> List[Row]:
        """Joined crew assignment rows for the given events."""

    @abstractmethod
    def list_crew_bookings(self, start_date: date, end_date: date) -> List[Row]:
        """(crew_member_id, event_id, event_date, event_name) for events in range."""

    @abstractmethod
    def list_crew_schedule(self, start_date: date, end_date: Optional[date] = None,
                           crew_member_id: Optional[str] = None) -> List[Row]:
        """Joined crew assignment rows with event name/date/location/venue/start_time."""

    # ── Equipment assignments ──────────────────────────────

    @abstractmethod
    def insert_equipment_assignment(self, values: Row) -> Row:
        """Insert and return the new row (same errors as crew inserts)."""

    @abstractmethod
    def get_equipment_assignment(self, assignment_id: str) -> Optional[Row]:
        """Assignment joined with equipment name/serial/rate and category name."""

    @abstractmethod
    def update_equipment_assignment(self, assignment_id: str, changes: Row) -> bool:
        """Apply changes; False when no row matches."""

    @abstractmethod
    def delete_equipment_assignment(self, assignment_id: str) -> bool:
        """Delete; False when no row matches."""

    @abstractmethod
    def list_equipment_lines(self, event_ids: Iterable[str]) -> List[Row]:
        """Joined equipment assignment rows for the given events."""
