"""troupe - party position tracking and pre-message common events for 2D RPG runtimes.

This package provides two per-frame systems and the small runtime they plug into:
- Party position tracking: mirror where actors stand in the party into
  variables and switches
- Pre-message common events: run a common event before every message,
  through a phase state machine layered on the command interpreter
- A reference host: party roster, variable/switch stores, common event
  database and a cooperative command interpreter with extension points

Quick start:
    # Create a settings.py file in your project root:
    # PRE_MESSAGE_COMMON_EVENT_ID = 3
    # PARTY_POSITION_RULES = [{"actor_id": 1, "position_variable_id": 10}]

    from troupe import create_world

    world = create_world()
    world.party.add_actor(1)
    world.run_frames(1)
    world.variables.value(10)  # 1

Alternative usage:
    from troupe import World, settings

    settings.configure(PRE_MESSAGE_COMMON_EVENT_ID=3)
    world = World(settings)
    world.setup()
"""

__version__ = "0.1.0"

from troupe.conf import settings
from troupe.events import Event, EventBus
from troupe.helpers import create_world
from troupe.host import CommonEvent, CommonEventDatabase, GameSwitches, GameVariables, Party, PartyMember
from troupe.interpreter import CommandCode, EventCommand, Interpreter, InterpreterHook
from troupe.systems import (
    BaseSystem,
    GameContext,
    MessagePhase,
    PartyPositionManager,
    PreMessageManager,
    SystemLoader,
    SystemRegistry,
    TrackedActorRule,
)
from troupe.world import World

__all__ = [
    "BaseSystem",
    "CommandCode",
    "CommonEvent",
    "CommonEventDatabase",
    "Event",
    "EventBus",
    "EventCommand",
    "GameContext",
    "GameSwitches",
    "GameVariables",
    "Interpreter",
    "InterpreterHook",
    "MessagePhase",
    "Party",
    "PartyMember",
    "PartyPositionManager",
    "PreMessageManager",
    "SystemLoader",
    "SystemRegistry",
    "TrackedActorRule",
    "World",
    "__version__",
    "create_world",
    "settings",
]
