"""Interfaces of the host runtime consumed by the systems.

The systems never reach into a concrete party, store or interpreter class. They
only rely on the narrow protocols below, so any runtime that provides them (the
reference implementation in troupe.host, a test double, or an adapter around a
different engine) can drive them.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, TypeVar

if TYPE_CHECKING:
    from collections.abc import Sequence

    from troupe.interpreter.commands import EventCommand

V = TypeVar("V")


class RosterMember(Protocol):
    """A party member with a stable actor identifier."""

    actor_id: int


class RosterProvider(Protocol):
    """Ordered party roster. Index 0 is the leader."""

    def members(self) -> Sequence[RosterMember]:
        """Return the current members in marching order."""
        ...

    def in_battle(self) -> bool:
        """Return True while a battle encounter is running."""
        ...


class KeyValueStore(Protocol[V]):
    """Variable or switch storage addressed by integer id."""

    def value(self, key: int) -> V:
        """Return the stored value for key."""
        ...

    def set_value(self, key: int, value: V) -> None:
        """Store value under key."""
        ...


class SubProgramRegistry(Protocol):
    """Lookup of reusable command lists (common events)."""

    def commands_for(self, common_event_id: int) -> list[EventCommand] | None:
        """Return the commands of a common event, or None if it does not exist."""
        ...


class ChildExecutionLauncher(Protocol):
    """An interpreter able to run a nested command list and report on it.

    The child attribute is the running slot: it holds the nested interpreter
    while it runs and becomes None once the parent observes it has finished.
    """

    event_id: int

    @property
    def child(self) -> ChildExecutionLauncher | None:
        """Return the running child, if any."""
        ...

    def setup_child(self, commands: Sequence[EventCommand], event_id: int) -> None:
        """Start running commands as a child owned by event_id."""
        ...

    def clear_wait(self) -> None:
        """Drop any pending wait so the interpreter runs on its next update."""
        ...
