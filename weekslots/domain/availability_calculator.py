"""
Core business logic for resolving a week's free slots.

Pure domain logic: the events have already been fetched, nothing here
touches storage or performs I/O.
"""

from datetime import date
from typing import Dict, Iterable, List

from .exceptions import InvalidDateError
from .models import Event, SlotLabel
from .slot_tiler import DEFAULT_SLOT_MINUTES, tile_event
from .weekly_grid import WeeklyGrid, build_week_grid, resolve_dates_by_day_of_week


class AvailabilityCalculator:
    """
    Folds openings and appointments into a weekly grid of free slots.

    Algorithm:
    1. Build an empty grid for the 7 days starting at the query date
    2. Build the day-of-week -> date lookup for that grid
    3. Sort events by start time
    4. For each event, tile it into slots and pick its bucket by day of week
    5. Openings add their slots, appointments remove theirs
    """

    def __init__(self, slot_minutes: int = DEFAULT_SLOT_MINUTES):
        if slot_minutes <= 0:
            raise ValueError(f"slot_minutes must be greater than zero, got {slot_minutes}")
        self.slot_minutes = slot_minutes

    def find_availabilities(
        self,
        start_date: date,
        events: Iterable[Event]
    ) -> WeeklyGrid:
        """
        Build the populated weekly grid.

        Args:
            start_date: First day of the week to resolve
            events: Events for that week, as returned by an event source

        Returns:
            Mapping of each of the 7 dates to its free slot labels

        Raises:
            InvalidDateError: If start_date is not a date
        """
        if not isinstance(start_date, date):
            raise InvalidDateError(f"Invalid date: {start_date!r}")

        grid = build_week_grid(start_date)
        dates_by_day_of_week = resolve_dates_by_day_of_week(grid.keys())

        # Appointments only remove slots an earlier opening already added.
        for event in sorted(events, key=lambda e: e.starts_at):
            bucket = dates_by_day_of_week[event.day_of_week]
            event_slots = tile_event(event.starts_at, event.ends_at, self.slot_minutes)

            if event.is_opening:
                grid[bucket] = self._add_slots(grid[bucket], event_slots)
            elif event.is_appointment:
                grid[bucket] = self._remove_slots(grid[bucket], event_slots)

        return grid

    @staticmethod
    def _add_slots(
        current: List[SlotLabel],
        added: List[SlotLabel]
    ) -> List[SlotLabel]:
        """Union keeping first-seen order."""
        return list(dict.fromkeys(current + added))

    @staticmethod
    def _remove_slots(
        current: List[SlotLabel],
        removed: List[SlotLabel]
    ) -> List[SlotLabel]:
        """Set difference keeping the remaining order."""
        booked = set(removed)
        return [slot for slot in current if slot not in booked]

    @staticmethod
    def format_results(grid: WeeklyGrid) -> Dict[str, List[SlotLabel]]:
        """Render the grid with ``YYYY-MM-DD`` keys, one per grid date."""
        return {
            day.to_date_string(): list(slots)
            for day, slots in grid.items()
        }
