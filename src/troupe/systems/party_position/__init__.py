"""Party position system package."""

from troupe.systems.party_position.base import PartyPositionBaseManager, TrackedActorRule, parse_rules
from troupe.systems.party_position.events import PartyPositionChangedEvent
from troupe.systems.party_position.manager import PartyPositionManager

__all__ = [
    "PartyPositionBaseManager",
    "PartyPositionChangedEvent",
    "PartyPositionManager",
    "TrackedActorRule",
    "parse_rules",
]
