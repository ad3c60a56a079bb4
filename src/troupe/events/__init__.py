"""Module for events."""

from troupe.events.base import Event, EventBus

__all__ = ["Event", "EventBus"]
