"""
Per-query weekly grid and the day-of-week lookup into it.
"""

from datetime import date
from typing import Dict, Iterable, List

import pendulum
from pendulum import Date

from .models import SlotLabel, day_of_week_index

DAYS_IN_WEEK = 7

WeeklyGrid = Dict[Date, List[SlotLabel]]


def build_week_grid(start_date: date) -> WeeklyGrid:
    """Return an empty grid for the 7 days starting at ``start_date`` (inclusive)."""
    first_day = pendulum.date(start_date.year, start_date.month, start_date.day)

    return {
        first_day.add(days=offset): []
        for offset in range(DAYS_IN_WEEK)
    }


def resolve_dates_by_day_of_week(grid_dates: Iterable[Date]) -> Dict[int, Date]:
    """
    Map each day-of-week index (0=Sunday .. 6=Saturday) to its date in the grid.

    For 7 consecutive dates the mapping is total and one-to-one, so a
    recurring event only needs its day of week to find its bucket.
    """
    return {day_of_week_index(day): day for day in grid_dates}
