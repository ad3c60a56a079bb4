"""Event command data."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Self

from troupe.conf.coerce import to_int


class CommandCode(IntEnum):
    """Codes of the commands understood by the interpreter.

    The numbering follows the event command codes used in the engine's data files
    so that exported command lists load unchanged.
    """

    END = 0
    SHOW_TEXT = 101
    COMMON_EVENT = 117
    CONTROL_SWITCHES = 121
    CONTROL_VARIABLES = 122
    WAIT = 230
    TEXT_LINE = 401


@dataclass
class EventCommand:
    """A single interpreter command.

    Attributes:
        code: Command kind, usually a CommandCode value. Unknown codes are allowed
            and skipped by the interpreter.
        indent: Nesting depth inside the command list.
        parameters: Positional parameters, meaning depends on code.

    Example:
        EventCommand(CommandCode.SHOW_TEXT, parameters=["", 0, 0, 2])
        EventCommand(CommandCode.TEXT_LINE, parameters=["Hello!"])
    """

    code: int
    indent: int = 0
    parameters: list[Any] = field(default_factory=list)

    def parameter(self, index: int, default: Any = None) -> Any:  # noqa: ANN401
        """Return parameter index, or default when it is missing."""
        if 0 <= index < len(self.parameters):
            return self.parameters[index]
        return default

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        """Create an EventCommand from a {"code", "indent", "parameters"} mapping."""
        parameters = data.get("parameters")
        return cls(
            code=to_int(data.get("code")),
            indent=to_int(data.get("indent")),
            parameters=list(parameters) if isinstance(parameters, list) else [],
        )


def parse_commands(raw: Any) -> list[EventCommand]:  # noqa: ANN401
    """Build commands from a list of mappings, skipping entries that are not mappings."""
    if not isinstance(raw, list):
        return []
    return [EventCommand.from_dict(item) for item in raw if isinstance(item, dict)]
