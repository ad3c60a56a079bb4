"""Game variable and switch stores."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from troupe.conf.coerce import to_int
from troupe.host.events import SwitchChangedEvent, VariableChangedEvent

if TYPE_CHECKING:
    from troupe.events import EventBus

logger = logging.getLogger(__name__)


class GameVariables:
    """Integer variables addressed by id. Unset variables read as 0.

    Every set_value() publishes a VariableChangedEvent when an event bus is
    attached, whether or not the value actually changed.
    """

    def __init__(self, event_bus: EventBus | None = None) -> None:
        """Initialize an empty variable store.

        Args:
            event_bus: Optional bus receiving a VariableChangedEvent per write.
        """
        self.event_bus = event_bus
        self._data: dict[int, int] = {}

    def value(self, key: int) -> int:
        """Return variable key, or 0 if it was never written."""
        return self._data.get(key, 0)

    def set_value(self, key: int, value: Any) -> None:  # noqa: ANN401
        """Write variable key. Non-positive ids are ignored."""
        if key <= 0:
            return
        self._data[key] = to_int(value)
        if self.event_bus:
            self.event_bus.publish(VariableChangedEvent(key, self._data[key]))

    def clear(self) -> None:
        """Forget every variable."""
        self._data.clear()

    def to_dict(self) -> dict[int, int]:
        """Return a copy of all written variables."""
        return dict(self._data)


class GameSwitches:
    """Boolean switches addressed by id. Unset switches read as False."""

    def __init__(self, event_bus: EventBus | None = None) -> None:
        """Initialize an empty switch store.

        Args:
            event_bus: Optional bus receiving a SwitchChangedEvent per write.
        """
        self.event_bus = event_bus
        self._data: dict[int, bool] = {}

    def value(self, key: int) -> bool:
        """Return switch key, or False if it was never written."""
        return self._data.get(key, False)

    def set_value(self, key: int, value: Any) -> None:  # noqa: ANN401
        """Write switch key. Non-positive ids are ignored."""
        if key <= 0:
            return
        self._data[key] = bool(value)
        if self.event_bus:
            self.event_bus.publish(SwitchChangedEvent(key, self._data[key]))

    def clear(self) -> None:
        """Turn every switch off."""
        self._data.clear()

    def to_dict(self) -> dict[int, bool]:
        """Return a copy of all written switches."""
        return dict(self._data)
