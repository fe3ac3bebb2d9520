"""
In-memory event source, optionally loaded from a JSON fixture.
"""

import json
import logging
from datetime import date, datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

import pendulum

from ..domain.exceptions import EventSourceError
from ..domain.models import Event, EventKind, day_of_week_index

logger = logging.getLogger(__name__)

SAMPLE_EVENTS_FILE = Path(__file__).parent / "sample_events.json"


class InMemoryEventSource:
    """
    Event source over plain records, for tests and the CLI mock mode.

    Records are dicts with ``starts_at``, ``ends_at`` (ISO strings or
    datetimes), ``kind`` and an optional ``weekly_recurring`` and ``id``.
    Filtering and ordering mirror the SQLite source.
    """

    def __init__(self, records: Optional[List[Dict[str, Any]]] = None):
        self._events: List[Event] = []
        for record in records or []:
            self._events.append(self._record_to_event(record, self._next_id()))

    @classmethod
    def from_json(cls, data_file: Path = SAMPLE_EVENTS_FILE) -> "InMemoryEventSource":
        """
        Load records from a JSON file holding a list of event objects.

        Raises:
            FileNotFoundError: If the file doesn't exist
            EventSourceError: If the file is not valid event JSON
        """
        if not data_file.exists():
            raise FileNotFoundError(f"Event data file not found: {data_file}")

        try:
            with open(data_file, "r", encoding="utf-8") as f:
                records = json.load(f)
        except json.JSONDecodeError as exc:
            raise EventSourceError(f"Invalid JSON in {data_file}: {exc}") from exc

        if not isinstance(records, list):
            raise EventSourceError("Event data file must contain a list at the root level.")

        logger.debug("Loaded %d event record(s) from %s", len(records), data_file)
        return cls(records)

    def add_event(
        self,
        starts_at: datetime,
        ends_at: datetime,
        kind: EventKind | str,
        weekly_recurring: bool = False
    ) -> int:
        event_id = self._next_id()
        self._events.append(self._record_to_event(
            {
                "starts_at": starts_at,
                "ends_at": ends_at,
                "kind": kind,
                "weekly_recurring": weekly_recurring,
            },
            event_id,
        ))
        return event_id

    def close(self) -> None:
        """Nothing to release (kept for interface compatibility)."""
        pass

    async def fetch_week_events(self, start_date: date) -> List[Event]:
        """Recurring openings plus events within [start_date, start_date + 7 days)."""
        week_start = pendulum.datetime(start_date.year, start_date.month, start_date.day)
        week_end = week_start.add(days=7)

        matching = [
            event for event in self._events
            if (event.is_opening and event.weekly_recurring)
            or (event.starts_at >= week_start and event.ends_at <= week_end)
        ]
        return sorted(matching, key=lambda e: (e.starts_at, e.id))

    def _next_id(self) -> int:
        return max((event.id for event in self._events), default=0) + 1

    @staticmethod
    def _record_to_event(record: Dict[str, Any], default_id: int) -> Event:
        try:
            starts_at = _to_datetime(record["starts_at"])
            ends_at = _to_datetime(record["ends_at"])
            return Event(
                id=int(record.get("id", default_id)),
                day_of_week=day_of_week_index(starts_at),
                starts_at=starts_at,
                ends_at=ends_at,
                kind=EventKind(record["kind"]),
                weekly_recurring=bool(record.get("weekly_recurring", False)),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise EventSourceError(f"Invalid event record {record!r}: {e}") from e


def _to_datetime(value: Any) -> pendulum.DateTime:
    """Normalise a stored timestamp to a pendulum DateTime (UTC when naive)."""
    if isinstance(value, datetime):
        return pendulum.instance(value)

    parsed = pendulum.parse(value)
    if not isinstance(parsed, datetime):
        raise ValueError(f"Could not parse datetime: {value}")
    return parsed
