"""Pre-message system package."""

from troupe.systems.pre_message.base import (
    InterceptionConfig,
    InterceptionState,
    MessagePhase,
    PreMessageBaseManager,
)
from troupe.systems.pre_message.events import PreMessageFinishedEvent, PreMessageStartedEvent
from troupe.systems.pre_message.manager import PreMessageManager

__all__ = [
    "InterceptionConfig",
    "InterceptionState",
    "MessagePhase",
    "PreMessageBaseManager",
    "PreMessageFinishedEvent",
    "PreMessageManager",
    "PreMessageStartedEvent",
]
