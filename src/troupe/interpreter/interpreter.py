"""Command interpreter.

The interpreter runs a list of EventCommand objects cooperatively, a frame at a
time. Each update() runs commands until one of them reports it is not finished,
a wait is pending, or a child interpreter is still running, and then returns
control to the caller. Nothing blocks: suspension is expressed purely as state
kept on the interpreter between updates.

Update cycle:
1. If a child interpreter occupies the running slot, update it. While it keeps
   running, the parent does nothing else this frame. Once it stops, the slot is
   cleared.
2. If wait_count is positive, count it down and stop for this frame.
3. Dispatch the current command through the registered hooks. Advance on True,
   stop for this frame on False.
4. Repeat until the command list is exhausted, then terminate.
5. Run every hook's after_tick().

Child interpreters share their parent's stores, event bus and hooks list.
"""

from __future__ import annotations

import logging
import math
import random
from functools import partial
from typing import TYPE_CHECKING, ClassVar

from troupe.conf.coerce import to_int
from troupe.interpreter.commands import CommandCode, EventCommand
from troupe.interpreter.events import MessageShownEvent

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from troupe.events import EventBus
    from troupe.host.base import KeyValueStore, SubProgramRegistry
    from troupe.interpreter.hooks import InterpreterHook

logger = logging.getLogger(__name__)


class InterpreterOverflowError(RuntimeError):
    """Raised when common events nest deeper than Interpreter.MAX_DEPTH."""


class Interpreter:
    """Runs event commands and nested common events.

    Attributes:
        variables: Variable store written by control variables commands.
        switches: Switch store written by control switches commands.
        common_events: Lookup used by common event commands.
        event_bus: Optional bus receiving MessageShownEvent.
        hooks: Extension points consulted on every dispatch and every update. The
            list is shared, not copied, so hooks registered later still apply.
        depth: Nesting level, 0 for a top-level interpreter.
        parent: Interpreter that launched this one as a child, or None.
        run_count: Number of command lists started by setup(). Lets hooks tell a
            fresh run apart from an earlier one at the same index.
        event_id: Id of the event owning the running commands.
        index: Position of the current command.
        wait_count: Frames left to wait before running the next command.
    """

    MAX_DEPTH: ClassVar[int] = 100

    def __init__(
        self,
        variables: KeyValueStore[int],
        switches: KeyValueStore[bool],
        common_events: SubProgramRegistry,
        *,
        event_bus: EventBus | None = None,
        hooks: list[InterpreterHook] | None = None,
        depth: int = 0,
        parent: Interpreter | None = None,
    ) -> None:
        """Initialize an idle interpreter.

        Args:
            variables: Variable store.
            switches: Switch store.
            common_events: Common event lookup.
            event_bus: Optional bus for MessageShownEvent.
            hooks: Shared hook list. A new empty list is used when omitted.
            depth: Nesting level.
            parent: Launching interpreter, for children.
        """
        self.variables = variables
        self.switches = switches
        self.common_events = common_events
        self.event_bus = event_bus
        self.hooks: list[InterpreterHook] = hooks if hooks is not None else []
        self.depth = depth
        self.parent = parent

        self.run_count = 0
        self.event_id = 0
        self.index = 0
        self.wait_count = 0
        self._commands: list[EventCommand] | None = None
        self._child: Interpreter | None = None

        self._handlers: dict[int, Callable[[EventCommand], bool]] = {
            CommandCode.SHOW_TEXT: self.command_show_text,
            CommandCode.COMMON_EVENT: self.command_common_event,
            CommandCode.CONTROL_SWITCHES: self.command_control_switches,
            CommandCode.CONTROL_VARIABLES: self.command_control_variables,
            CommandCode.WAIT: self.command_wait,
        }

    @property
    def child(self) -> Interpreter | None:
        """Child interpreter currently occupying the running slot."""
        return self._child

    def clear(self) -> None:
        """Drop the command list, the child and any pending wait."""
        self._commands = None
        self._child = None
        self.index = 0
        self.wait_count = 0
        self.event_id = 0

    def setup(self, commands: Sequence[EventCommand], event_id: int = 0) -> None:
        """Start running commands on behalf of event_id.

        Args:
            commands: Commands to run. Copied, so later edits to the source list
                do not affect the run.
            event_id: Id of the owning event (0 for none).
        """
        self.clear()
        self._commands = list(commands)
        self.event_id = event_id
        self.run_count += 1
        logger.debug("Interpreter: Started %d commands for event %d (depth %d)", len(self._commands), event_id, self.depth)

    def setup_child(self, commands: Sequence[EventCommand], event_id: int) -> None:
        """Run commands in a child interpreter that blocks this one until done.

        Raises:
            InterpreterOverflowError: If the child would exceed MAX_DEPTH.
        """
        if self.depth + 1 >= self.MAX_DEPTH:
            msg = f"Common events nested deeper than {self.MAX_DEPTH} levels"
            raise InterpreterOverflowError(msg)
        child = Interpreter(
            self.variables,
            self.switches,
            self.common_events,
            event_bus=self.event_bus,
            hooks=self.hooks,
            depth=self.depth + 1,
            parent=self,
        )
        child.setup(commands, event_id)
        self._child = child

    def is_running(self) -> bool:
        """Return True while a command list is loaded."""
        return self._commands is not None

    def terminate(self) -> None:
        """Stop running the current command list."""
        logger.debug("Interpreter: Finished event %d (depth %d)", self.event_id, self.depth)
        self._commands = None
        self.index = 0

    def clear_wait(self) -> None:
        """Cancel any pending wait."""
        self.wait_count = 0

    def current_command(self) -> EventCommand | None:
        """Return the command at the pointer, or None past the end."""
        if self._commands is not None and self.index < len(self._commands):
            return self._commands[self.index]
        return None

    def next_command(self) -> EventCommand | None:
        """Return the command after the current one, or None."""
        if self._commands is not None and self.index + 1 < len(self._commands):
            return self._commands[self.index + 1]
        return None

    def update(self) -> None:
        """Run as many commands as possible this frame, then notify hooks."""
        while self.is_running():
            if self.update_child() or self.update_wait():
                break
            if not self.execute_command():
                break
        for hook in list(self.hooks):
            hook.after_tick(self)

    def update_child(self) -> bool:
        """Update the child interpreter.

        Returns:
            True while the child is still running.
        """
        if self._child is None:
            return False
        self._child.update()
        if self._child.is_running():
            return True
        self._child = None
        return False

    def update_wait(self) -> bool:
        """Count down a pending wait.

        Returns:
            True if this frame was spent waiting.
        """
        if self.wait_count > 0:
            self.wait_count -= 1
            return True
        return False

    def execute_command(self) -> bool:
        """Dispatch the current command through the hooks.

        Returns:
            True if the command finished and the pointer advanced, False if the
            same command must be offered again on the next update.
        """
        command = self.current_command()
        if command is None:
            self.terminate()
            return True

        dispatch = partial(self._dispatch, command)
        for hook in reversed(self.hooks):
            dispatch = partial(hook.before_dispatch, self, command, dispatch)

        if not dispatch():
            return False
        self.index += 1
        return True

    def _dispatch(self, command: EventCommand) -> bool:
        """Run command without any hooks."""
        handler = self._handlers.get(command.code)
        if handler is None:
            if command.code != CommandCode.END:
                logger.debug("Interpreter: Skipping unsupported command %d", command.code)
            return True
        return handler(command)

    # Commands

    def command_show_text(self, command: EventCommand) -> bool:
        """Show text, gathering the text line commands that follow it."""
        lines: list[str] = []
        while (following := self.next_command()) is not None and following.code == CommandCode.TEXT_LINE:
            self.index += 1
            lines.append(str(following.parameter(0, "")))

        event = MessageShownEvent(
            event_id=self.event_id,
            face_name=str(command.parameter(0, "")),
            face_index=to_int(command.parameter(1)),
            background=to_int(command.parameter(2)),
            position=to_int(command.parameter(3), default=2),
            lines=lines,
        )
        logger.debug("Interpreter: Message from event %d: %s", self.event_id, lines)
        if self.event_bus:
            self.event_bus.publish(event)
        return True

    def command_common_event(self, command: EventCommand) -> bool:
        """Run a common event as a child."""
        common_event_id = to_int(command.parameter(0))
        commands = self.common_events.commands_for(common_event_id)
        if commands:
            self.setup_child(commands, self.event_id)
        else:
            logger.debug("Interpreter: Common event %d not found", common_event_id)
        return True

    def command_control_switches(self, command: EventCommand) -> bool:
        """Set a range of switches. Parameter 2 is 0 for ON, 1 for OFF."""
        start = to_int(command.parameter(0))
        end = to_int(command.parameter(1), default=start)
        value = to_int(command.parameter(2)) == 0
        for switch_id in range(start, end + 1):
            self.switches.set_value(switch_id, value)
        return True

    def command_control_variables(self, command: EventCommand) -> bool:
        """Operate on a range of variables.

        Parameters: start, end, operation (0 set, 1 add, 2 sub, 3 mul, 4 div,
        5 mod), operand type (0 constant, 1 variable, 2 random), operand, and the
        upper bound for random operands.
        """
        start = to_int(command.parameter(0))
        end = to_int(command.parameter(1), default=start)
        operation = to_int(command.parameter(2))
        operand_type = to_int(command.parameter(3))
        operand = to_int(command.parameter(4))

        if operand_type == 1:
            value = self.variables.value(operand)
        elif operand_type == 2:
            high = to_int(command.parameter(5), default=operand)
            value = random.randint(min(operand, high), max(operand, high))  # noqa: S311
        else:
            value = operand

        for variable_id in range(start, end + 1):
            old_value = self.variables.value(variable_id)
            self.variables.set_value(variable_id, self._operate(operation, old_value, value))
        return True

    @staticmethod
    def _operate(operation: int, old_value: int, value: int) -> int:
        if operation == 1:
            return old_value + value
        if operation == 2:
            return old_value - value
        if operation == 3:
            return old_value * value
        if operation == 4:
            return old_value // value if value else 0
        if operation == 5:
            return int(math.fmod(old_value, value)) if value else 0
        return value

    def command_wait(self, command: EventCommand) -> bool:
        """Wait a number of frames."""
        self.wait_count = max(0, to_int(command.parameter(0)))
        return True
