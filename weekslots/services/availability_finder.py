"""
Application services for resolving a week's availabilities.

The service coordinates fetching events through an event source adapter and
delegates the slot resolution to the domain-level ``AvailabilityCalculator``.
The event source is injected via a simple protocol, so the SQLite adapter
and in-memory fakes are interchangeable.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Any, Dict, List, Protocol

from ..domain.availability_calculator import AvailabilityCalculator
from ..domain.models import Event, to_calendar_date
from ..domain.slot_tiler import DEFAULT_SLOT_MINUTES

logger = logging.getLogger(__name__)


class EventSourceProtocol(Protocol):
    """Protocol describing the event source behaviour needed by the service."""

    async def fetch_week_events(self, start_date: date) -> List[Event]:
        """
        Return recurring openings plus all events within
        [start_date, start_date + 7 days), ordered by start time and tagged
        with the day of week of their own start.
        """


class AvailabilityService:
    """
    Orchestrates event retrieval and availability resolution.

    Each call builds its own weekly grid; the service keeps no per-query state.
    """

    def __init__(
        self,
        event_source: EventSourceProtocol,
        calculator: AvailabilityCalculator | None = None,
    ) -> None:
        self._event_source = event_source
        self._calculator = calculator or AvailabilityCalculator()

    async def get_availabilities(self, query_date: Any) -> Dict[str, List[str]]:
        """
        Free slots for the 7 days starting at ``query_date``.

        Args:
            query_date: A date, datetime or ``YYYY-MM-DD`` string

        Returns:
            Mapping of ``YYYY-MM-DD`` to the free slot labels of that day

        Raises:
            InvalidDateError: If query_date is not a valid date (before any fetch)
        """
        start_date = to_calendar_date(query_date)

        events = await self.fetch_events(start_date)

        return self.calculate_availabilities(start_date, events)

    async def fetch_events(self, start_date: date) -> List[Event]:
        """Fetch the events relevant to the week starting at ``start_date``."""
        logger.debug("Fetching events for week starting %s", start_date)
        events = await self._event_source.fetch_week_events(start_date)
        logger.debug("Resolving %d event(s)", len(events))
        return list(events)

    def calculate_availabilities(
        self,
        start_date: date,
        events: List[Event],
    ) -> Dict[str, List[str]]:
        """Resolve already-fetched events into the formatted result."""
        grid = self._calculator.find_availabilities(start_date, events)
        return self._calculator.format_results(grid)


async def get_availabilities(
    query_date: Any,
    event_source: EventSourceProtocol,
    slot_minutes: int = DEFAULT_SLOT_MINUTES,
) -> Dict[str, List[str]]:
    """Shortcut for a one-off query against ``event_source``."""
    service = AvailabilityService(
        event_source=event_source,
        calculator=AvailabilityCalculator(slot_minutes=slot_minutes),
    )
    return await service.get_availabilities(query_date)
