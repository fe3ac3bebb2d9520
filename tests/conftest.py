"""
Shared helpers for building events.
"""

import pendulum
import pytest

from weekslots.domain.models import Event, EventKind, day_of_week_index


def make_event(
    starts_at: str,
    ends_at: str,
    kind: EventKind = EventKind.OPENING,
    weekly_recurring: bool = False,
    event_id: int = 1,
) -> Event:
    """Build an event tagged with the day of week of its own start."""
    start = pendulum.parse(starts_at)
    end = pendulum.parse(ends_at)
    return Event(
        id=event_id,
        day_of_week=day_of_week_index(start),
        starts_at=start,
        ends_at=end,
        kind=kind,
        weekly_recurring=weekly_recurring,
    )


@pytest.fixture
def event_factory():
    return make_event
