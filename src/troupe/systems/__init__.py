"""Pluggable systems and the machinery that loads them."""

from troupe.systems.base import BaseSystem
from troupe.systems.game_context import GameContext
from troupe.systems.loader import CircularDependencyError, MissingDependencyError, SystemLoader
from troupe.systems.registry import SystemRegistry

from troupe.systems.party_position import PartyPositionManager, TrackedActorRule  # isort: skip
from troupe.systems.pre_message import MessagePhase, PreMessageManager  # isort: skip

__all__ = [
    "BaseSystem",
    "CircularDependencyError",
    "GameContext",
    "MessagePhase",
    "MissingDependencyError",
    "PartyPositionManager",
    "PreMessageManager",
    "SystemLoader",
    "SystemRegistry",
    "TrackedActorRule",
]
