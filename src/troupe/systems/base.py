"""Base class for pluggable systems.

Systems are the units a World is built from. Each one owns a single concern,
registers itself with SystemRegistry, and is instantiated, set up and updated by
SystemLoader.

Example:
    Creating a custom system::

        from troupe.systems.base import BaseSystem
        from troupe.systems.registry import SystemRegistry

        @SystemRegistry.register
        class GoldWatcher(BaseSystem):
            name = "gold_watcher"

            def setup(self, context, settings):
                self.variables = context.variables

            def update(self, delta_time, context):
                if self.variables.value(1) > 9999:
                    self.variables.set_value(1, 9999)
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, ClassVar

if TYPE_CHECKING:
    from troupe.conf import LazySettings
    from troupe.systems.game_context import GameContext


class BaseSystem(ABC):
    """Base class for all pluggable systems.

    Attributes:
        name: Unique identifier for the system. Must be defined as a class variable.
        role: Optional attribute name under which GameContext exposes the system
            (for example "party_position_manager").
        dependencies: Names of systems that must be set up before this one.
    """

    name: ClassVar[str]
    role: ClassVar[str | None] = None
    dependencies: ClassVar[list[str]] = []

    @abstractmethod
    def setup(self, context: GameContext, settings: LazySettings) -> None:
        """Initialize the system before the first update.

        Called once all systems are instantiated and registered with the context,
        in dependency order. Read configuration here and pick the collaborators
        the system needs out of the context.

        Args:
            context: Game context holding the host runtime and the other systems.
            settings: Project settings.
        """

    def update(self, delta_time: float, context: GameContext) -> None:  # noqa: B027
        """Called once per world tick, after the host's own tick logic.

        Args:
            delta_time: Seconds elapsed since the previous tick.
            context: Game context.
        """

    def cleanup(self) -> None:  # noqa: B027
        """Release resources and unregister hooks and event handlers."""

    def get_state(self) -> dict[str, Any]:
        """Return a JSON-serializable description of the system's state."""
        return {}
