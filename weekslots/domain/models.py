"""
Domain models for stored events and date handling.
"""

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Any

import pendulum
from pendulum import Date, DateTime

from .exceptions import InvalidDateError

# Slots are identified by their start time-of-day, e.g. "9:30".
SlotLabel = str


class EventKind(str, Enum):
    """Discriminator for stored events."""
    OPENING = "opening"
    APPOINTMENT = "appointment"


@dataclass(frozen=True)
class Event:
    """
    A stored opening or appointment, tagged with the day of week it applies to.

    The interval is half-open: [starts_at, ends_at). No ordering check is made;
    a degenerate event simply tiles into an empty slot sequence.
    """
    id: int
    day_of_week: int  # 0=Sunday, 6=Saturday
    starts_at: DateTime
    ends_at: DateTime
    kind: EventKind
    weekly_recurring: bool = False

    @property
    def is_opening(self) -> bool:
        return self.kind is EventKind.OPENING

    @property
    def is_appointment(self) -> bool:
        return self.kind is EventKind.APPOINTMENT


def day_of_week_index(value: date) -> int:
    """Return the day of week with 0=Sunday .. 6=Saturday (strftime's %w)."""
    return value.isoweekday() % 7


def to_calendar_date(value: Any) -> Date:
    """
    Coerce a query date into a pendulum ``Date``.

    Accepts pendulum or stdlib dates and datetimes (the time part is dropped)
    and ``YYYY-MM-DD`` strings.

    Raises:
        InvalidDateError: If the value is not a valid calendar date
    """
    if isinstance(value, date):
        return pendulum.date(value.year, value.month, value.day)

    if isinstance(value, str) and value.strip():
        try:
            parsed = pendulum.parse(value.strip(), exact=True)
        except (ValueError, TypeError, OverflowError) as exc:
            raise InvalidDateError(f"Invalid date: {value!r}") from exc

        if isinstance(parsed, date):
            return pendulum.date(parsed.year, parsed.month, parsed.day)

    raise InvalidDateError(f"Invalid date: {value!r}")
