"""Game context passed to systems.

The GameContext is the explicit dependency container of a World. Instead of
reaching for process-wide globals, systems receive the context in setup() and
update() and pick their collaborators out of it: the event bus, the party roster,
the variable and switch stores, the common event database, and the shared list
of interpreter hooks.

Example usage:
    context = GameContext(
        event_bus=event_bus,
        party=party,
        variables=variables,
        switches=switches,
        common_events=common_events,
    )

    # Done by SystemLoader / World
    context.register_system("party_position", party_position_manager)

    # Systems registered with a role are also attributes
    context.party_position_manager.refresh()
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from troupe.events import EventBus
    from troupe.host.base import KeyValueStore, RosterProvider, SubProgramRegistry
    from troupe.interpreter.hooks import InterpreterHook
    from troupe.systems.base import BaseSystem
    from troupe.systems.party_position.base import PartyPositionBaseManager
    from troupe.systems.pre_message.base import PreMessageBaseManager

logger = logging.getLogger(__name__)


class GameContext:
    """Registry of systems plus the host runtime they work against.

    Attributes:
        event_bus: Publish/subscribe bus shared by host and systems.
        party: Party roster.
        variables: Variable store.
        switches: Switch store.
        common_events: Common event lookup.
        interpreter_hooks: Hook list shared by every interpreter the world creates.
    """

    party_position_manager: PartyPositionBaseManager
    pre_message_manager: PreMessageBaseManager

    def __init__(
        self,
        event_bus: EventBus,
        party: RosterProvider,
        variables: KeyValueStore[int],
        switches: KeyValueStore[bool],
        common_events: SubProgramRegistry,
        interpreter_hooks: list[InterpreterHook] | None = None,
    ) -> None:
        """Initialize the context.

        Args:
            event_bus: Publish/subscribe bus.
            party: Party roster.
            variables: Variable store.
            switches: Switch store.
            common_events: Common event lookup.
            interpreter_hooks: Hook list to share with interpreters. A new empty
                list is used when omitted.
        """
        self.event_bus = event_bus
        self.party = party
        self.variables = variables
        self.switches = switches
        self.common_events = common_events
        self.interpreter_hooks: list[InterpreterHook] = interpreter_hooks if interpreter_hooks is not None else []

        self._systems: dict[str, BaseSystem] = {}

    def register_system(self, name: str, system: BaseSystem) -> None:
        """Register a system and expose it under its role, if it has one."""
        self._systems[name] = system
        if system.role:
            setattr(self, system.role, system)

    def get_system(self, name: str) -> BaseSystem | None:
        """Get a registered system by name, or None."""
        return self._systems.get(name)

    def get_systems(self) -> dict[str, BaseSystem]:
        """Get all registered systems."""
        return self._systems

    def add_interpreter_hook(self, hook: InterpreterHook) -> None:
        """Attach hook to every interpreter sharing this context's hook list."""
        if hook not in self.interpreter_hooks:
            self.interpreter_hooks.append(hook)
            logger.debug("GameContext: Added interpreter hook %s", type(hook).__name__)

    def remove_interpreter_hook(self, hook: InterpreterHook) -> None:
        """Detach hook. Unknown hooks are ignored."""
        if hook in self.interpreter_hooks:
            self.interpreter_hooks.remove(hook)
            logger.debug("GameContext: Removed interpreter hook %s", type(hook).__name__)
