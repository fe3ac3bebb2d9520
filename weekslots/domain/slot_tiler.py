"""
Turns an event's time range into discrete slot labels.
"""

from datetime import datetime, timedelta
from typing import List

from .models import SlotLabel

DEFAULT_SLOT_MINUTES = 30


def slot_label(moment: datetime) -> SlotLabel:
    """Format a moment as ``H:MM`` (24-hour clock, no leading zero on the hour)."""
    return f"{moment.hour}:{moment.minute:02d}"


def tile_event(
    starts_at: datetime,
    ends_at: datetime,
    slot_minutes: int = DEFAULT_SLOT_MINUTES
) -> List[SlotLabel]:
    """
    Cover [starts_at, ends_at) with fixed-size slots.

    The label for ``ends_at`` itself is never emitted. Empty or negative
    ranges yield no slots. Hours roll over past midnight without any
    special handling.

    Example:
    09:00 - 10:00 -> ["9:00", "9:30"]
    """
    step = timedelta(minutes=slot_minutes)
    slot_count = int((ends_at - starts_at).total_seconds() // step.total_seconds())

    slots: List[SlotLabel] = []
    current = starts_at

    for _ in range(max(slot_count, 0)):
        slots.append(slot_label(current))
        current = current + step

    return slots
