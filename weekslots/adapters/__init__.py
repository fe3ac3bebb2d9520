"""
Adapters layer - Event storage backends.
"""

from .memory_event_source import InMemoryEventSource
from .sqlite_event_source import SqliteEventSource

__all__ = ["InMemoryEventSource", "SqliteEventSource"]
