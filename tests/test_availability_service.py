"""
Tests for the AvailabilityService orchestration layer.
"""

import asyncio
from datetime import date
from typing import List

import pendulum
import pytest

from weekslots.domain.availability_calculator import AvailabilityCalculator
from weekslots.domain.exceptions import InvalidDateError
from weekslots.domain.models import Event, EventKind
from weekslots.services.availability_finder import AvailabilityService, get_availabilities

from conftest import make_event


class StubEventSource:
    """Minimal stub matching EventSourceProtocol."""

    def __init__(self, events: List[Event]):
        self._events = events
        self.calls: List[date] = []

    async def fetch_week_events(self, start_date):
        self.calls.append(start_date)
        return self._events


def _classic_week() -> List[Event]:
    return [
        make_event("2014-08-04 09:30", "2014-08-04 12:30", weekly_recurring=True, event_id=1),
        make_event("2014-08-11 10:30", "2014-08-11 11:30", kind=EventKind.APPOINTMENT, event_id=2),
    ]


def test_get_availabilities_end_to_end():
    """String query date resolves against the stub source."""
    source = StubEventSource(_classic_week())
    service = AvailabilityService(event_source=source)

    result = asyncio.run(service.get_availabilities("2014-08-10"))

    assert len(result) == 7
    assert result["2014-08-11"] == ["9:30", "10:00", "11:30", "12:00"]
    assert source.calls == [pendulum.date(2014, 8, 10)]


@pytest.mark.parametrize("query_date", ["not-a-date", "2014-13-01", None])
def test_invalid_date_fails_before_fetch(query_date):
    source = StubEventSource(_classic_week())
    service = AvailabilityService(event_source=source)

    with pytest.raises(InvalidDateError):
        asyncio.run(service.get_availabilities(query_date))

    assert source.calls == []


def test_datetime_query_uses_its_calendar_day():
    source = StubEventSource([])
    service = AvailabilityService(event_source=source)

    result = asyncio.run(service.get_availabilities(pendulum.datetime(2014, 8, 10, 18, 45)))

    assert list(result.keys())[0] == "2014-08-10"
    assert list(result.keys())[-1] == "2014-08-16"


def test_empty_week():
    service = AvailabilityService(event_source=StubEventSource([]))

    result = asyncio.run(service.get_availabilities(date(2014, 8, 10)))

    assert result == {
        pendulum.date(2014, 8, 10).add(days=offset).to_date_string(): []
        for offset in range(7)
    }


def test_service_uses_injected_calculator():
    service = AvailabilityService(
        event_source=StubEventSource(_classic_week()),
        calculator=AvailabilityCalculator(slot_minutes=60),
    )

    result = asyncio.run(service.get_availabilities("2014-08-10"))

    assert result["2014-08-11"] == ["9:30", "11:30"]


def test_module_level_shortcut():
    result = asyncio.run(get_availabilities("2014-08-10", StubEventSource(_classic_week())))

    assert result["2014-08-11"] == ["9:30", "10:00", "11:30", "12:00"]
