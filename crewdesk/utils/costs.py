"""
Cost formulas for crew and equipment assignments.

All functions are pure. They take a plain mapping (an assignment row joined
with its resource) and never raise on malformed numbers: a rate or quantity
that cannot be parsed degrades to a neutral value instead of aborting a report.

Expected keys:
    rate_override: per-assignment rate (nullable)
    default_rate: crew hourly rate or equipment daily rate (nullable)
    call_time, end_time: clock times for crew lines
    quantity: item count for equipment lines
"""
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

from crewdesk.utils.clock import parse_clock

ZERO = Decimal('0')
DEFAULT_SHIFT_HOURS = Decimal('8')
HOURS_PER_DAY = Decimal('24')
CENT = Decimal('0.01')


def to_decimal(value) -> Decimal:
    """Convert a numeric-ish value to Decimal, 0 when missing or malformed."""
    if value is None or isinstance(value, bool):
        return ZERO
    try:
        result = Decimal(str(value))
    except (InvalidOperation, ValueError, TypeError):
        return ZERO
    if not result.is_finite():
        return ZERO
    return result


def effective_rate(rate_override, default_rate) -> Decimal:
    """
    Rate actually used for costing.

    The override wins when present (including an explicit 0), then the
    resource's default rate, then 0.
    """
    if rate_override is not None and rate_override != '':
        return to_decimal(rate_override)
    return to_decimal(default_rate)


def _clock_hours(value):
    try:
        parsed = parse_clock(value)
    except (ValueError, TypeError):
        return None
    if parsed is None:
        return None
    return Decimal(parsed.hour) + Decimal(parsed.minute) / 60


def shift_hours(call_time, end_time) -> Decimal:
    """
    Hours between call and end time.

    A negative span is a shift crossing midnight (+24h). When either time is
    missing or unreadable the shift is estimated at 8 hours.
    """
    start = _clock_hours(call_time)
    end = _clock_hours(end_time)
    if start is None or end is None:
        return DEFAULT_SHIFT_HOURS

    hours = end - start
    if hours < 0:
        hours += HOURS_PER_DAY
    return hours


def _quantity(value) -> int:
    try:
        quantity = int(Decimal(str(value)))
    except (InvalidOperation, ValueError, TypeError, OverflowError):
        return 1
    return quantity if quantity >= 1 else 1


def crew_cost(line) -> Decimal:
    """Crew cost from the real call/end times (8h when unknown)."""
    rate = effective_rate(line.get('rate_override'), line.get('default_rate'))
    return rate * shift_hours(line.get('call_time'), line.get('end_time'))


def estimated_crew_cost(line) -> Decimal:
    """Crew cost with a flat 8-hour shift, used by the cost-center roll-up."""
    rate = effective_rate(line.get('rate_override'), line.get('default_rate'))
    return rate * DEFAULT_SHIFT_HOURS


def equipment_cost(line) -> Decimal:
    """Equipment cost: rate × quantity (quantity defaults to 1)."""
    rate = effective_rate(line.get('rate_override'), line.get('default_rate'))
    return rate * _quantity(line.get('quantity'))


def money(value) -> Decimal:
    """Round an amount to cents, half up."""
    return to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)
