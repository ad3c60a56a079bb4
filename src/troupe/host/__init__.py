"""Reference host runtime: party roster, variable/switch stores and common events."""

from troupe.host.base import (
    ChildExecutionLauncher,
    KeyValueStore,
    RosterMember,
    RosterProvider,
    SubProgramRegistry,
)
from troupe.host.common_events import CommonEvent, CommonEventDatabase
from troupe.host.events import SwitchChangedEvent, VariableChangedEvent
from troupe.host.party import Party, PartyMember
from troupe.host.store import GameSwitches, GameVariables

__all__ = [
    "ChildExecutionLauncher",
    "CommonEvent",
    "CommonEventDatabase",
    "GameSwitches",
    "GameVariables",
    "KeyValueStore",
    "Party",
    "PartyMember",
    "RosterMember",
    "RosterProvider",
    "SubProgramRegistry",
    "SwitchChangedEvent",
    "VariableChangedEvent",
]
