"""Base class, phases and configuration for PreMessageManager."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum, auto
from typing import TYPE_CHECKING, Self

from troupe.conf.coerce import to_int
from troupe.interpreter.hooks import InterpreterHook
from troupe.systems.base import BaseSystem

if TYPE_CHECKING:
    from troupe.conf import LazySettings
    from troupe.interpreter.interpreter import Interpreter


class MessagePhase(Enum):
    """Where an interpreter stands in running the pre-message common event.

    IDLE: nothing in progress.
    SUB_PROGRAM_RUNNING: the common event was launched as a child and has not
        been seen to finish yet.
    READY_TO_DISPATCH: the common event finished; the held show text command
        runs on the next dispatch attempt.
    """

    IDLE = auto()
    SUB_PROGRAM_RUNNING = auto()
    READY_TO_DISPATCH = auto()


@dataclass
class InterceptionState:
    """Phase of one interpreter. Transient, never saved.

    Attributes:
        phase: Current phase.
        held_at: (run_count, index) of the held show text command while the
            phase is not IDLE.
    """

    phase: MessagePhase = MessagePhase.IDLE
    held_at: tuple[int, int] | None = None


@dataclass(frozen=True)
class InterceptionConfig:
    """Pre-message configuration.

    Attributes:
        common_event_id: Common event run before each message. 0 disables.
        enabled_switch_id: Switch that must be ON for interception. 0 means
            always enabled.
    """

    common_event_id: int = 0
    enabled_switch_id: int = 0

    @classmethod
    def from_settings(cls, settings: LazySettings) -> Self:
        """Read PRE_MESSAGE_COMMON_EVENT_ID and PRE_MESSAGE_SWITCH_ID.

        Non-numeric or negative values collapse to 0.
        """
        return cls(
            common_event_id=max(0, to_int(getattr(settings, "PRE_MESSAGE_COMMON_EVENT_ID", 0))),
            enabled_switch_id=max(0, to_int(getattr(settings, "PRE_MESSAGE_SWITCH_ID", 0))),
        )


class PreMessageBaseManager(BaseSystem, InterpreterHook, ABC):
    """Base class for PreMessageManager."""

    role = "pre_message_manager"

    @abstractmethod
    def phase_of(self, interpreter: Interpreter) -> MessagePhase:
        """Return the phase of interpreter (IDLE if never seen)."""
        ...
