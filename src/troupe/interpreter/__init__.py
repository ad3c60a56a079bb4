"""Event command interpreter and its extension points."""

from troupe.interpreter.commands import CommandCode, EventCommand, parse_commands
from troupe.interpreter.events import MessageShownEvent
from troupe.interpreter.hooks import InterpreterHook
from troupe.interpreter.interpreter import Interpreter, InterpreterOverflowError

__all__ = [
    "CommandCode",
    "EventCommand",
    "Interpreter",
    "InterpreterHook",
    "InterpreterOverflowError",
    "MessageShownEvent",
    "parse_commands",
]
