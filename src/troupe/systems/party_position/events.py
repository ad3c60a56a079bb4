"""Events for party position tracking."""

from dataclasses import dataclass

from troupe.events import Event


@dataclass
class PartyPositionChangedEvent(Event):
    """Fired when a refresh writes a tracked actor's outputs.

    Only published when at least one store value actually changed, so listeners
    see one event per change rather than one per frame.

    Attributes:
        actor_id: Tracked actor.
        position: 1-based slot in the party, 0 when absent.
        present: Whether the actor is in the party.
    """

    actor_id: int
    position: int
    present: bool
