"""
Domain layer - Pure business logic without external dependencies.
"""

from .availability_calculator import AvailabilityCalculator
from .exceptions import AvailabilityError, EventSourceError, InvalidDateError
from .models import Event, EventKind, day_of_week_index, to_calendar_date
from .slot_tiler import slot_label, tile_event
from .weekly_grid import build_week_grid, resolve_dates_by_day_of_week

__all__ = [
    "AvailabilityCalculator",
    "AvailabilityError",
    "Event",
    "EventKind",
    "EventSourceError",
    "InvalidDateError",
    "build_week_grid",
    "day_of_week_index",
    "resolve_dates_by_day_of_week",
    "slot_label",
    "tile_event",
    "to_calendar_date",
]
