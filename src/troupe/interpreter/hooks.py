"""Extension points of the command interpreter.

Plugins change how an interpreter runs by registering an InterpreterHook instead
of replacing interpreter methods. Two points are exposed:

- before_dispatch: wraps the dispatch of every command. The hook receives the
  original dispatch as a callable and decides whether, and when, to call it.
  Returning False tells the interpreter the command is not finished: the
  command pointer stays put and the same command is offered again on the next
  update.
- after_tick: runs once at the end of every interpreter update, after the
  interpreter has run as far as it can this frame.

For a given interpreter, after_tick of one frame always runs before
before_dispatch of the next frame.

Example:
    class LogCommands(InterpreterHook):
        def before_dispatch(self, interpreter, command, dispatch):
            logger.debug("Running command %d", command.code)
            return dispatch()

    hooks = [LogCommands()]
    interpreter = Interpreter(variables, switches, common_events, hooks=hooks)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable

    from troupe.interpreter.commands import EventCommand
    from troupe.interpreter.interpreter import Interpreter


class InterpreterHook:
    """Base class for interpreter extensions. Both methods default to no-ops."""

    def before_dispatch(self, interpreter: Interpreter, command: EventCommand, dispatch: Callable[[], bool]) -> bool:
        """Wrap the dispatch of command.

        Args:
            interpreter: Interpreter about to run command.
            command: The current command.
            dispatch: Runs the command (and any hooks registered after this one).
                Returns True when the command finished.

        Returns:
            True if the command finished and the interpreter may advance.
        """
        return dispatch()

    def after_tick(self, interpreter: Interpreter) -> None:  # noqa: B027
        """Called at the end of every update of interpreter."""
