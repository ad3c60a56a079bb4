"""Party position tracking.

This module mirrors where configured actors stand in the party's marching order
into game variables and switches, so that ordinary event conditions ("variable 10
is 1", "switch 20 is ON") can react to party changes without any scripting.

On every world tick outside of battle, the PartyPositionManager scans the party
for each tracked actor and writes:
- the actor's 1-based slot (leader is 1) into the rule's position variable, or 0
  when the actor is not in the party;
- whether the actor is in the party into the rule's presence switch.

A store is only written when its value actually differs. Every write makes the
host re-evaluate event conditions, so writing the same value each frame would
trigger needless refreshes.

Configuration, in settings.py:
    PARTY_POSITION_RULES = [
        {"actor_id": 1, "position_variable_id": 10},
        {"actor_id": 4, "position_variable_id": 11, "presence_switch_id": 20},
    ]
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, ClassVar

from troupe.systems.party_position.base import PartyPositionBaseManager, TrackedActorRule, parse_rules
from troupe.systems.party_position.events import PartyPositionChangedEvent
from troupe.systems.registry import SystemRegistry

if TYPE_CHECKING:
    from collections.abc import Sequence

    from troupe.conf import LazySettings
    from troupe.events import EventBus
    from troupe.host.base import KeyValueStore, RosterMember, RosterProvider
    from troupe.systems.game_context import GameContext

logger = logging.getLogger(__name__)


@SystemRegistry.register
class PartyPositionManager(PartyPositionBaseManager):
    """Writes tracked actors' party slots and presence into variables and switches.

    The manager keeps no state between ticks besides the rules parsed at setup.
    Everything it writes is derived from the current party on every refresh.

    Attributes:
        rules: Valid tracked actor rules, in configuration order.
        party: Party roster read on refresh.
        variables: Store receiving positions.
        switches: Store receiving presence flags.
        event_bus: Bus receiving PartyPositionChangedEvent.

    Example usage:
        manager = PartyPositionManager()
        manager.setup(context, settings)

        # Called by the world every frame
        manager.update(delta_time, context)

        # Or on demand
        manager.refresh()
    """

    name: ClassVar[str] = "party_position"
    dependencies: ClassVar[list[str]] = []

    def __init__(self) -> None:
        """Initialize the manager without rules."""
        self.rules: list[TrackedActorRule] = []
        self.party: RosterProvider | None = None
        self.variables: KeyValueStore[int] | None = None
        self.switches: KeyValueStore[bool] | None = None
        self.event_bus: EventBus | None = None

    def setup(self, context: GameContext, settings: LazySettings) -> None:
        """Pick the party and stores out of the context and load the rules.

        Args:
            context: Game context.
            settings: Settings providing PARTY_POSITION_RULES.
        """
        self.party = context.party
        self.variables = context.variables
        self.switches = context.switches
        self.event_bus = context.event_bus
        self.rules = parse_rules(settings.PARTY_POSITION_RULES)
        logger.info("PartyPositionManager: Tracking %d actors", len(self.rules))

    def cleanup(self) -> None:
        """Drop the rules and collaborators."""
        self.rules = []
        self.party = None
        self.variables = None
        self.switches = None
        self.event_bus = None

    def get_state(self) -> dict[str, Any]:
        """Report the loaded rules."""
        return {
            "rules": [
                {
                    "actor_id": rule.actor_id,
                    "position_variable_id": rule.position_variable_id,
                    "presence_switch_id": rule.presence_switch_id,
                }
                for rule in self.rules
            ],
        }

    def update(self, delta_time: float, context: GameContext) -> None:
        """Refresh once per world tick, except during battle.

        Args:
            delta_time: Unused.
            context: Unused, collaborators were taken at setup.
        """
        if self.party is None or self.party.in_battle():
            return
        self.refresh()

    def position_of(self, actor_id: int) -> int | None:
        """Return the 0-based slot of actor_id in the party, or None if absent."""
        if self.party is None:
            return None
        return self._find_slot(self.party.members(), actor_id)

    def refresh(self) -> None:
        """Write position and presence for every tracked actor."""
        if self.party is None:
            return

        members = self.party.members()
        for rule in self.rules:
            slot = self._find_slot(members, rule.actor_id)
            present = slot is not None
            position = slot + 1 if slot is not None else 0

            changed = False
            if rule.position_variable_id > 0 and self.variables is not None:
                changed |= self._write(self.variables, rule.position_variable_id, position)
            if rule.presence_switch_id > 0 and self.switches is not None:
                changed |= self._write(self.switches, rule.presence_switch_id, present)

            if changed:
                logger.debug(
                    "PartyPositionManager: Actor %d position=%d present=%s",
                    rule.actor_id,
                    position,
                    present,
                )
                if self.event_bus:
                    self.event_bus.publish(PartyPositionChangedEvent(rule.actor_id, position, present))

    @staticmethod
    def _find_slot(members: Sequence[RosterMember], actor_id: int) -> int | None:
        """Return the index of the first member with actor_id, front to back."""
        for index, member in enumerate(members):
            if member.actor_id == actor_id:
                return index
        return None

    @staticmethod
    def _write(store: KeyValueStore[Any], key: int, value: Any) -> bool:  # noqa: ANN401
        """Write value unless the store already holds it. Returns True on write."""
        if store.value(key) == value:
            return False
        store.set_value(key, value)
        return True
