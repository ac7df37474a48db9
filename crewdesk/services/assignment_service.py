"""
Assignment service: attaches crew members and equipment to events.

Single-item operations validate everything before writing and raise the
first error they hit. Bulk crew assignment never raises for an individual
item: each id gets its own result (assigned, skipped or error).
"""
import dataclasses
import enum
import logging
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Optional

from crewdesk.models.assignment import AssignmentStatus
from crewdesk.services.exceptions import (
    AssignmentError,
    BadRequest,
    Conflict,
    NotFound,
    ValidationFailure,
)
from crewdesk.services.store import (
    AssignmentStore,
    DuplicateAssignmentError,
    MissingReferenceError,
    StoreError,
)
from crewdesk.utils.clock import parse_clock

logger = logging.getLogger(__name__)


class _Unset:
    """Marker for an update field that was not supplied."""

    def __repr__(self):
        return 'UNSET'

    def __bool__(self):
        return False


UNSET = _Unset()


def _blank_to_none(value):
    return None if value == '' else value


class _AssignmentUpdate:
    """Three-state update request: UNSET (omitted), None (cleared) or a value."""

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]):
        """Build from a request payload; keys not present stay UNSET."""
        names = {f.name for f in dataclasses.fields(cls)}
        return cls(**{k: v for k, v in payload.items() if k in names})

    def changes(self) -> Dict[str, Any]:
        """Supplied fields only, with empty strings normalized to None."""
        return {
            f.name: _blank_to_none(getattr(self, f.name))
            for f in dataclasses.fields(self)
            if getattr(self, f.name) is not UNSET
        }


@dataclass
class CrewAssignmentUpdate(_AssignmentUpdate):
    position_id: Any = UNSET
    call_time: Any = UNSET
    end_time: Any = UNSET
    rate_override: Any = UNSET
    status: Any = UNSET
    notes: Any = UNSET


@dataclass
class EquipmentAssignmentUpdate(_AssignmentUpdate):
    quantity: Any = UNSET
    rate_override: Any = UNSET
    notes: Any = UNSET


class BulkOutcome(enum.Enum):
    ASSIGNED = 'assigned'
    SKIPPED = 'skipped'
    ERROR = 'error'


@dataclass
class BulkItemResult:
    """Outcome of one crew member in a bulk assignment."""
    crew_member_id: str
    outcome: BulkOutcome
    assignment: Optional[Dict[str, Any]] = None
    error: Optional[str] = None


@dataclass
class BulkAssignmentResult:
    """Per-item results of a bulk assignment, with the summary counts."""
    items: List[BulkItemResult] = field(default_factory=list)

    def _count(self, outcome):
        return sum(1 for item in self.items if item.outcome is outcome)

    @property
    def assigned(self) -> int:
        return self._count(BulkOutcome.ASSIGNED)

    @property
    def skipped(self) -> int:
        return self._count(BulkOutcome.SKIPPED)

    @property
    def errors(self) -> List[Dict[str, str]]:
        return [
            {'crew_member_id': item.crew_member_id, 'error': item.error}
            for item in self.items
            if item.outcome is BulkOutcome.ERROR
        ]

    def to_dict(self):
        return {
            'assigned': self.assigned,
            'skipped': self.skipped,
            'errors': self.errors,
        }


# ── Value normalization ────────────────────────────────────

def _clock(value, field_name):
    try:
        return parse_clock(value)
    except ValueError:
        raise ValidationFailure(f'{field_name} must be a clock time (HH:MM or HH:MM:SS)')


def _rate(value):
    if value is None or value == '':
        return None
    try:
        rate = Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise ValidationFailure('rate_override must be a number')
    if not rate.is_finite() or rate < 0:
        raise ValidationFailure('rate_override must be a non-negative number')
    return rate


def _quantity(value):
    if isinstance(value, bool) or not isinstance(value, (int, str)):
        raise ValidationFailure('quantity must be an integer >= 1')
    try:
        quantity = int(value)
    except ValueError:
        raise ValidationFailure('quantity must be an integer >= 1')
    if quantity < 1:
        raise ValidationFailure('quantity must be an integer >= 1')
    return quantity


def _status(value):
    try:
        return AssignmentStatus(value)
    except ValueError:
        allowed = ', '.join(s.value for s in AssignmentStatus)
        raise ValidationFailure(f'status must be one of: {allowed}')


class AssignmentService:
    """Creates, updates and deletes crew and equipment assignments."""

    def __init__(self, store: AssignmentStore):
        self.store = store

    # ── Crew ───────────────────────────────────────────────

    def _require_event(self, event_id):
        if self.store.get_event(event_id) is None:
            raise NotFound('Event not found')

    def _require_active_crew_member(self, crew_member_id):
        member = self.store.get_crew_member(crew_member_id)
        if member is None or not member.get('is_active'):
            raise NotFound('Crew member not found or inactive')

    def _create_crew_assignment(self, event_id, crew_member_id, position_id, call_time,
                                end_time, rate_override, notes, actor, skip_existing):
        values = {
            'event_id': event_id,
            'crew_member_id': crew_member_id,
            'position_id': _blank_to_none(position_id),
            'call_time': _clock(call_time, 'call_time'),
            'end_time': _clock(end_time, 'end_time'),
            'rate_override': _rate(rate_override),
            'notes': _blank_to_none(notes),
            'created_by': actor,
        }

        self._require_event(event_id)
        self._require_active_crew_member(crew_member_id)

        try:
            row = self.store.insert_crew_assignment(values)
        except DuplicateAssignmentError:
            if skip_existing:
                return None
            raise Conflict('Crew member already assigned to this event')
        except MissingReferenceError:
            raise NotFound('Referenced record does not exist')

        logger.info('Crew member %s assigned to event %s by %s', crew_member_id, event_id, actor)
        return self.store.get_crew_assignment(row['id'])

    def create_crew_assignment(self, event_id, crew_member_id, position_id=None, call_time=None,
                               end_time=None, rate_override=None, notes=None, actor=None):
        """
        Assign a crew member to an event.

        Returns:
            Assignment dict joined with crew_name, crew_email and position_name

        Raises:
            NotFound: event missing, crew member missing or inactive
            Conflict: crew member already assigned to this event
            ValidationFailure: malformed time or negative rate
        """
        return self._create_crew_assignment(
            event_id, crew_member_id, position_id, call_time, end_time,
            rate_override, notes, actor, skip_existing=False,
        )

    def update_crew_assignment(self, assignment_id, changes: CrewAssignmentUpdate):
        """
        Apply the supplied fields of a crew assignment.

        Raises:
            BadRequest: no field supplied
            ValidationFailure: malformed value or unknown status
            NotFound: no such assignment
        """
        updates = changes.changes()
        if not updates:
            raise BadRequest('No updates provided')

        if 'call_time' in updates:
            updates['call_time'] = _clock(updates['call_time'], 'call_time')
        if 'end_time' in updates:
            updates['end_time'] = _clock(updates['end_time'], 'end_time')
        if 'rate_override' in updates:
            updates['rate_override'] = _rate(updates['rate_override'])
        if 'status' in updates:
            updates['status'] = _status(updates['status'])

        try:
            found = self.store.update_crew_assignment(assignment_id, updates)
        except MissingReferenceError:
            raise NotFound('Referenced record does not exist')
        if not found:
            raise NotFound('Assignment not found')

        return self.store.get_crew_assignment(assignment_id)

    def delete_crew_assignment(self, assignment_id):
        """Remove a crew assignment. The event and crew member are untouched."""
        if not self.store.delete_crew_assignment(assignment_id):
            raise NotFound('Assignment not found')
        logger.info('Crew assignment %s deleted', assignment_id)

    def bulk_create_crew_assignments(self, event_id, crew_member_ids, position_id=None,
                                     call_time=None, actor=None) -> BulkAssignmentResult:
        """
        Assign several crew members to one event.

        Every id is attempted independently. An existing assignment is skipped
        silently; any other failure is recorded against that id and the batch
        continues.
        """
        result = BulkAssignmentResult()

        for crew_member_id in crew_member_ids:
            try:
                assignment = self._create_crew_assignment(
                    event_id, crew_member_id, position_id, call_time, None,
                    None, None, actor, skip_existing=True,
                )
            except (AssignmentError, StoreError) as exc:
                logger.warning('Bulk assignment of %s to event %s failed: %s',
                               crew_member_id, event_id, exc)
                result.items.append(BulkItemResult(
                    crew_member_id=crew_member_id,
                    outcome=BulkOutcome.ERROR,
                    error=str(exc),
                ))
                continue

            if assignment is None:
                outcome = BulkOutcome.SKIPPED
            else:
                outcome = BulkOutcome.ASSIGNED
            result.items.append(BulkItemResult(
                crew_member_id=crew_member_id,
                outcome=outcome,
                assignment=assignment,
            ))

        logger.info('Bulk assignment to event %s: %d assigned, %d skipped, %d errors',
                    event_id, result.assigned, result.skipped, len(result.errors))
        return result

    # ── Equipment ──────────────────────────────────────────

    def create_equipment_assignment(self, event_id, equipment_id, quantity=1, rate_override=None,
                                    notes=None, actor=None):
        """
        Assign an equipment item to an event.

        Returns:
            Assignment dict joined with equipment_name, serial_number and category_name

        Raises:
            ValidationFailure: quantity < 1 or negative rate
            NotFound: event missing, equipment missing or inactive
            Conflict: equipment already assigned to this event
        """
        values = {
            'event_id': event_id,
            'equipment_id': equipment_id,
            'quantity': 1 if quantity is None or quantity == '' else _quantity(quantity),
            'rate_override': _rate(rate_override),
            'notes': _blank_to_none(notes),
            'created_by': actor,
        }

        self._require_event(event_id)
        item = self.store.get_equipment(equipment_id)
        if item is None or not item.get('is_active'):
            raise NotFound('Equipment not found or inactive')

        try:
            row = self.store.insert_equipment_assignment(values)
        except DuplicateAssignmentError:
            raise Conflict('Equipment already assigned to this event')
        except MissingReferenceError:
            raise NotFound('Referenced record does not exist')

        logger.info('Equipment %s (x%d) assigned to event %s by %s',
                    equipment_id, values['quantity'], event_id, actor)
        return self.store.get_equipment_assignment(row['id'])

    def update_equipment_assignment(self, assignment_id, changes: EquipmentAssignmentUpdate):
        """
        Apply the supplied fields of an equipment assignment.

        Raises:
            BadRequest: no field supplied
            ValidationFailure: quantity missing or < 1, negative rate
            NotFound: no such assignment
        """
        updates = changes.changes()
        if not updates:
            raise BadRequest('No updates provided')

        if 'quantity' in updates:
            updates['quantity'] = _quantity(updates['quantity'])
        if 'rate_override' in updates:
            updates['rate_override'] = _rate(updates['rate_override'])

        if not self.store.update_equipment_assignment(assignment_id, updates):
            raise NotFound('Assignment not found')

        return self.store.get_equipment_assignment(assignment_id)

    def delete_equipment_assignment(self, assignment_id):
        """Remove an equipment assignment. The event and equipment are untouched."""
        if not self.store.delete_equipment_assignment(assignment_id):
            raise NotFound('Assignment not found')
        logger.info('Equipment assignment %s deleted', assignment_id)
