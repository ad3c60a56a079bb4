"""Publish/subscribe event bus.

The host runtime and the systems announce what happened (a variable was written,
a message was shown, a pre-message common event started) by publishing Event
instances. Anything interested subscribes by event type, without the publisher
knowing who listens.

Example usage:
    bus = EventBus()

    def on_position(event: PartyPositionChangedEvent) -> None:
        print(f"Actor {event.actor_id} now at slot {event.position}")

    bus.subscribe(PartyPositionChangedEvent, on_position)
    bus.publish(PartyPositionChangedEvent(actor_id=3, position=1, present=True))
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable

logger = logging.getLogger(__name__)


@dataclass
class Event:
    """Base event class."""


class EventBus:
    """Synchronous event dispatcher keyed by exact event type.

    Handlers run in subscription order on the caller's thread, inside publish().
    An exception raised by a handler propagates to the publisher and stops the
    remaining handlers for that event.

    Not thread-safe. Everything in troupe runs on the single update thread.
    """

    def __init__(self) -> None:
        """Create a bus with no listeners."""
        self.listeners: dict[type[Event], list[Callable[[Event], None]]] = {}

    def subscribe(self, event_type: type[Event], handler: Callable[[Event], None]) -> None:
        """Call handler for every published event of event_type.

        Subscribing the same handler twice makes it run twice.

        Args:
            event_type: Exact Event subclass to listen for.
            handler: Callable taking the event instance.
        """
        self.listeners.setdefault(event_type, []).append(handler)

    def unsubscribe(self, event_type: type[Event], handler: Callable[[Event], None]) -> None:
        """Remove every subscription of handler for event_type.

        Unknown handlers are ignored.
        """
        if event_type in self.listeners:
            self.listeners[event_type] = [h for h in self.listeners[event_type] if h != handler]

    def publish(self, event: Event) -> None:
        """Deliver event to the handlers subscribed to its type."""
        for handler in list(self.listeners.get(type(event), [])):
            handler(event)

    def clear(self) -> None:
        """Drop all listeners for all event types."""
        self.listeners.clear()

    def unregister_all(self, subscriber: object) -> None:
        """Remove every bound-method handler whose instance is subscriber.

        Systems call this from cleanup() so no stale handler outlives them.
        """
        for event_type, handlers in self.listeners.items():
            self.listeners[event_type] = [h for h in handlers if getattr(h, "__self__", None) is not subscriber]
        logger.debug("EventBus: Unregistered handlers of %s", type(subscriber).__name__)
