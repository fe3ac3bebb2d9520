"""
Service layer helpers that orchestrate adapters and domain logic.
"""

from .availability_finder import AvailabilityService, EventSourceProtocol, get_availabilities

__all__ = ["AvailabilityService", "EventSourceProtocol", "get_availabilities"]
