"""Pre-message common events.

This module runs a configured common event right before every show text command,
for effects such as flashing a portrait, playing a voice blip or setting a
variable the message refers to.

The PreMessageManager is an InterpreterHook. When an interpreter is about to run
a show text command, the manager holds the command back, launches the common
event as a child of that interpreter, and lets the message through only after
the child is seen to have finished. Each interpreter goes through three phases:

    IDLE --(message, gate on, event found)--> SUB_PROGRAM_RUNNING
    SUB_PROGRAM_RUNNING --(after_tick sees empty child slot)--> READY_TO_DISPATCH
    READY_TO_DISPATCH --(next dispatch attempt)--> IDLE, message runs

Holding a command is done by returning False from before_dispatch: the
interpreter keeps its pointer on the message and offers it again next frame.
Because after_tick of a frame runs before the next frame's dispatch, the
completion of the child is always visible by the time the message is retried.

Timing: a message is shown two frames after it is first reached, even when the
common event itself finishes without waiting. The launch frame ends with the
message held. The child runs on the next frame, whose after_tick observes its
completion. The message runs on the frame after that.

Messages shown by the common event, or by any common event it calls, are not
intercepted.

Abort paths, all ending in IDLE:
- The gating switch is OFF when a message is dispatched.
- The interpreter dispatches something other than a show text command while a
  message is held (control flow moved elsewhere).
- The interpreter was set up again, or moved to another show text command,
  while a message was held.

A missing common event (id 0, unknown id, no commands) skips the launch and lets
the message through in the same call.

Configuration, in settings.py:
    PRE_MESSAGE_COMMON_EVENT_ID = 3
    PRE_MESSAGE_SWITCH_ID = 12    # 0 for always on
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, ClassVar
from weakref import WeakKeyDictionary, WeakSet

from troupe.interpreter.commands import CommandCode, EventCommand
from troupe.systems.pre_message.base import InterceptionConfig, InterceptionState, MessagePhase, PreMessageBaseManager
from troupe.systems.pre_message.events import PreMessageFinishedEvent, PreMessageStartedEvent
from troupe.systems.registry import SystemRegistry

if TYPE_CHECKING:
    from collections.abc import Callable

    from troupe.conf import LazySettings
    from troupe.events import EventBus
    from troupe.host.base import KeyValueStore, SubProgramRegistry
    from troupe.interpreter.interpreter import Interpreter
    from troupe.systems.game_context import GameContext

logger = logging.getLogger(__name__)


@SystemRegistry.register
class PreMessageManager(PreMessageBaseManager):
    """Runs a common event before each show text command.

    Phase state is kept per interpreter, keyed weakly so finished interpreters
    are forgotten without explicit cleanup.

    Attributes:
        config: Common event and gating switch ids.
        switches: Store holding the gating switch.
        common_events: Lookup for the pre-message common event.
        event_bus: Bus receiving PreMessageStartedEvent / PreMessageFinishedEvent.

    Example usage:
        manager = PreMessageManager()
        manager.setup(context, settings)  # registers itself as an interpreter hook

        interpreter = Interpreter(variables, switches, common_events, hooks=context.interpreter_hooks)
        interpreter.setup(commands)
        interpreter.update()
        manager.phase_of(interpreter)  # MessagePhase.SUB_PROGRAM_RUNNING
    """

    name: ClassVar[str] = "pre_message"
    dependencies: ClassVar[list[str]] = []

    def __init__(self) -> None:
        """Initialize an unconfigured manager."""
        self.config = InterceptionConfig()
        self.switches: KeyValueStore[bool] | None = None
        self.common_events: SubProgramRegistry | None = None
        self.event_bus: EventBus | None = None
        self._context: GameContext | None = None
        self._states: WeakKeyDictionary[Interpreter, InterceptionState] = WeakKeyDictionary()
        self._launched: WeakSet[Interpreter] = WeakSet()

    def setup(self, context: GameContext, settings: LazySettings) -> None:
        """Read the configuration and register as an interpreter hook.

        Args:
            context: Game context.
            settings: Settings providing PRE_MESSAGE_COMMON_EVENT_ID and PRE_MESSAGE_SWITCH_ID.
        """
        self.config = InterceptionConfig.from_settings(settings)
        self.switches = context.switches
        self.common_events = context.common_events
        self.event_bus = context.event_bus
        self._context = context
        context.add_interpreter_hook(self)
        logger.info(
            "PreMessageManager: Common event %d before messages (switch %d)",
            self.config.common_event_id,
            self.config.enabled_switch_id,
        )

    def cleanup(self) -> None:
        """Unregister the hook and forget every interpreter."""
        if self._context is not None:
            self._context.remove_interpreter_hook(self)
        self._context = None
        self.switches = None
        self.common_events = None
        self.event_bus = None
        self._states.clear()
        self._launched.clear()

    def get_state(self) -> dict[str, Any]:
        """Report the configuration and the interpreters currently holding a message."""
        return {
            "common_event_id": self.config.common_event_id,
            "enabled_switch_id": self.config.enabled_switch_id,
            "held_messages": sum(1 for state in self._states.values() if state.phase is not MessagePhase.IDLE),
        }

    def phase_of(self, interpreter: Interpreter) -> MessagePhase:
        """Return the phase of interpreter (IDLE if never seen)."""
        state = self._states.get(interpreter)
        return state.phase if state else MessagePhase.IDLE

    def is_enabled(self) -> bool:
        """Check the gating switch. No switch configured means enabled."""
        if self.config.enabled_switch_id <= 0:
            return True
        return bool(self.switches and self.switches.value(self.config.enabled_switch_id))

    def before_dispatch(self, interpreter: Interpreter, command: EventCommand, dispatch: Callable[[], bool]) -> bool:
        """Hold show text commands until the pre-message common event has run.

        Args:
            interpreter: Interpreter about to run command.
            command: The current command.
            dispatch: Runs the command.

        Returns:
            The result of dispatch() when the command is let through, False while
            the message is held.
        """
        if command.code != CommandCode.SHOW_TEXT:
            self._reset(interpreter, "control left the message")
            return dispatch()

        # Messages inside the pre-message common event, at any depth, run untouched
        if self._inside_launched(interpreter):
            return dispatch()

        if not self.is_enabled():
            self._reset(interpreter, "gating switch is off")
            return dispatch()

        state = self._states.setdefault(interpreter, InterceptionState())
        if state.phase is not MessagePhase.IDLE and state.held_at != self._position(interpreter):
            self._reset(interpreter, "a different message was reached")

        if state.phase is MessagePhase.IDLE:
            commands = self._pre_message_commands()
            if not commands:
                state.phase = MessagePhase.READY_TO_DISPATCH
            else:
                interpreter.setup_child(commands, interpreter.event_id)
                if interpreter.child is not None:
                    self._launched.add(interpreter.child)
                state.phase = MessagePhase.SUB_PROGRAM_RUNNING
                state.held_at = self._position(interpreter)
                logger.debug(
                    "PreMessageManager: Holding message of event %d for common event %d",
                    interpreter.event_id,
                    self.config.common_event_id,
                )
                if self.event_bus:
                    self.event_bus.publish(PreMessageStartedEvent(self.config.common_event_id, interpreter.event_id))
                return False

        if state.phase is MessagePhase.SUB_PROGRAM_RUNNING:
            return False

        state.phase = MessagePhase.IDLE
        state.held_at = None
        return dispatch()

    def after_tick(self, interpreter: Interpreter) -> None:
        """Release the held message once the common event's child slot is empty."""
        state = self._states.get(interpreter)
        if state is None or state.phase is not MessagePhase.SUB_PROGRAM_RUNNING:
            return
        if state.held_at != self._position(interpreter):
            self._reset(interpreter, "interpreter was set up again")
            return
        if interpreter.child is not None:
            return

        state.phase = MessagePhase.READY_TO_DISPATCH
        interpreter.clear_wait()
        logger.debug("PreMessageManager: Common event finished, releasing message of event %d", interpreter.event_id)
        if self.event_bus:
            self.event_bus.publish(PreMessageFinishedEvent(self.config.common_event_id, interpreter.event_id))

    def _pre_message_commands(self) -> list[EventCommand] | None:
        """Return the configured common event's commands, or None if unusable."""
        if self.config.common_event_id <= 0 or self.common_events is None:
            return None
        return self.common_events.commands_for(self.config.common_event_id)

    def _reset(self, interpreter: Interpreter, reason: str) -> None:
        """Return interpreter to IDLE, abandoning any held message."""
        state = self._states.get(interpreter)
        if state is None or state.phase is MessagePhase.IDLE:
            return
        logger.debug("PreMessageManager: Resetting event %d from %s (%s)", interpreter.event_id, state.phase.name, reason)
        state.phase = MessagePhase.IDLE
        state.held_at = None

    def _inside_launched(self, interpreter: Interpreter) -> bool:
        """Check whether interpreter is, or descends from, a launched common event."""
        current: Interpreter | None = interpreter
        while current is not None:
            if current in self._launched:
                return True
            current = current.parent
        return False

    @staticmethod
    def _position(interpreter: Interpreter) -> tuple[int, int]:
        return (interpreter.run_count, interpreter.index)
