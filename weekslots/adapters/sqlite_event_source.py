"""
SQLite-backed event storage.
"""

from __future__ import annotations

import logging
import sqlite3
from datetime import date, datetime
from typing import List

import pendulum

from ..domain.exceptions import EventSourceError
from ..domain.models import Event, EventKind

logger = logging.getLogger(__name__)

STORAGE_FORMAT = "%Y-%m-%d %H:%M:%S"

CREATE_EVENTS_TABLE = """
CREATE TABLE IF NOT EXISTS events (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    starts_at DATETIME NOT NULL,
    ends_at DATETIME NOT NULL,
    kind TEXT NOT NULL CHECK (kind IN ('appointment', 'opening')),
    weekly_recurring BOOLEAN
)
"""

# Recurring openings match by day of week only; everything else must fall
# inside the queried week.
WEEK_EVENTS_QUERY = """
SELECT
    id,
    CAST(strftime('%w', starts_at) AS INTEGER) AS day_of_week,
    starts_at,
    ends_at,
    kind,
    weekly_recurring
FROM events
WHERE (weekly_recurring = 1 AND kind = 'opening')
   OR (
        julianday(starts_at) >= julianday(:week_start)
        AND julianday(ends_at) <= julianday(:week_end)
   )
ORDER BY julianday(starts_at), id
"""


class SqliteEventSource:
    """
    Event source reading openings and appointments from an ``events`` table.

    Holds a single connection for its lifetime, so an in-memory database
    (the default) keeps its data between calls.
    """

    def __init__(self, database: str = ":memory:"):
        """
        Open the database.

        Args:
            database: SQLite file path, or ":memory:"
        """
        self.database = database
        try:
            self._connection = sqlite3.connect(database)
        except sqlite3.Error as e:
            raise EventSourceError(f"Could not open event database {database}: {e}") from e
        self._connection.row_factory = sqlite3.Row

    def __enter__(self) -> "SqliteEventSource":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def close(self) -> None:
        self._connection.close()

    def migrate(self) -> None:
        """Create the events table if it does not exist yet."""
        logger.debug("Running migration on %s", self.database)
        try:
            with self._connection:
                self._connection.execute(CREATE_EVENTS_TABLE)
        except sqlite3.Error as e:
            raise EventSourceError(f"Migration failed: {e}") from e

    def add_event(
        self,
        starts_at: datetime,
        ends_at: datetime,
        kind: EventKind | str,
        weekly_recurring: bool = False
    ) -> int:
        """
        Store a new event.

        Returns:
            The id of the inserted row
        """
        kind = EventKind(kind)
        try:
            with self._connection:
                cursor = self._connection.execute(
                    "INSERT INTO events (starts_at, ends_at, kind, weekly_recurring) "
                    "VALUES (?, ?, ?, ?)",
                    (
                        starts_at.strftime(STORAGE_FORMAT),
                        ends_at.strftime(STORAGE_FORMAT),
                        kind.value,
                        weekly_recurring,
                    ),
                )
        except sqlite3.Error as e:
            raise EventSourceError(f"Could not store event: {e}") from e

        logger.debug("Stored %s event %s", kind.value, cursor.lastrowid)
        return cursor.lastrowid

    async def fetch_week_events(self, start_date: date) -> List[Event]:
        """
        Fetch recurring openings plus every event inside the week.

        Args:
            start_date: First day of the week

        Returns:
            Events ordered by start time, tagged with their own day of week
        """
        week_start = pendulum.date(start_date.year, start_date.month, start_date.day)
        week_end = week_start.add(days=7)
        params = {
            "week_start": f"{week_start.to_date_string()} 00:00:00",
            "week_end": f"{week_end.to_date_string()} 00:00:00",
        }

        logger.debug("Executing week query with %s", params)
        try:
            rows = self._connection.execute(WEEK_EVENTS_QUERY, params).fetchall()
        except sqlite3.Error as e:
            raise EventSourceError(f"Failed to fetch events: {e}") from e

        logger.debug("Fetched %d event(s) for week of %s", len(rows), week_start)
        return [self._row_to_event(row) for row in rows]

    @staticmethod
    def _row_to_event(row: sqlite3.Row) -> Event:
        """Convert a database row into our domain model."""
        try:
            return Event(
                id=row["id"],
                day_of_week=row["day_of_week"],
                starts_at=pendulum.parse(row["starts_at"]),
                ends_at=pendulum.parse(row["ends_at"]),
                kind=EventKind(row["kind"]),
                weekly_recurring=bool(row["weekly_recurring"]),
            )
        except (TypeError, ValueError) as e:
            logger.warning("Unreadable event row %s: %s", row["id"], e)
            raise EventSourceError(f"Invalid event {row['id']}: {e}") from e
