"""Base class and configuration for PartyPositionManager."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Self

from troupe.conf.coerce import to_int, to_list
from troupe.systems.base import BaseSystem

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TrackedActorRule:
    """Where to mirror one actor's place in the party.

    Attributes:
        actor_id: Actor to look for in the party.
        position_variable_id: Variable receiving the 1-based slot (leader is 1,
            absent is 0). 0 disables this output.
        presence_switch_id: Switch receiving whether the actor is in the party.
            0 disables this output.

    Example:
        # Variable 10 holds Harold's slot, switch 20 whether Lucius is along
        TrackedActorRule(actor_id=1, position_variable_id=10)
        TrackedActorRule(actor_id=4, presence_switch_id=20)
    """

    actor_id: int
    position_variable_id: int = 0
    presence_switch_id: int = 0

    def is_valid(self) -> bool:
        """Return True if the rule names an actor and writes at least one output."""
        return self.actor_id > 0 and (self.position_variable_id > 0 or self.presence_switch_id > 0)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        """Create a rule from a mapping, coercing every field to int.

        Accepts both snake_case and camelCase keys, since rule lists are often
        pasted from plugin parameter JSON.
        """
        return cls(
            actor_id=to_int(data.get("actor_id", data.get("actorId"))),
            position_variable_id=to_int(data.get("position_variable_id", data.get("positionVariableId"))),
            presence_switch_id=to_int(data.get("presence_switch_id", data.get("presenceSwitchId"))),
        )


def parse_rules(raw: Any) -> list[TrackedActorRule]:  # noqa: ANN401
    """Build the retained rules from a settings value.

    Args:
        raw: List of mappings, or a JSON string encoding one.

    Returns:
        Valid rules in configuration order. Entries that are not mappings, lack a
        positive actor id, or enable no output are dropped.
    """
    rules = []
    for entry in to_list(raw):
        if not isinstance(entry, dict):
            logger.debug("Ignoring party position rule that is not a mapping: %r", entry)
            continue
        rule = TrackedActorRule.from_dict(entry)
        if not rule.is_valid():
            logger.debug("Ignoring party position rule without actor or outputs: %r", entry)
            continue
        rules.append(rule)
    return rules


class PartyPositionBaseManager(BaseSystem, ABC):
    """Base class for PartyPositionManager."""

    role = "party_position_manager"

    @abstractmethod
    def refresh(self) -> None:
        """Write every tracked actor's position and presence."""
        ...

    @abstractmethod
    def position_of(self, actor_id: int) -> int | None:
        """Return the 0-based slot of actor_id, or None if absent."""
        ...
