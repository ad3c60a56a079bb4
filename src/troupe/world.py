"""The world: host runtime plus installed systems, advanced one frame at a time.

A World builds everything a game session needs and wires it together:
- an EventBus shared by host and systems
- the Party roster, GameVariables and GameSwitches stores
- the CommonEventDatabase, loaded from COMMON_EVENTS_FILE if configured
- a GameContext exposing all of the above
- the systems listed in INSTALLED_SYSTEMS, loaded by SystemLoader
- the map Interpreter running the current event

Each call to update() is one frame:
1. The map interpreter runs (the host's own tick logic).
2. Every system's update() runs, in dependency order.

Example usage:
    world = World()
    world.setup()
    world.party.add_actor(1, "Harold")
    world.start_event(commands, event_id=7)
    world.run_frames(60)
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from troupe.conf import settings as default_settings
from troupe.conf.coerce import to_int
from troupe.constants import asset_path
from troupe.events import EventBus
from troupe.host import CommonEventDatabase, GameSwitches, GameVariables, Party
from troupe.interpreter import Interpreter
from troupe.systems.game_context import GameContext
from troupe.systems.loader import SystemLoader

if TYPE_CHECKING:
    from collections.abc import Sequence

    from troupe.conf import LazySettings
    from troupe.interpreter import EventCommand

logger = logging.getLogger(__name__)


class World:
    """Owns the host runtime, the systems and the map interpreter.

    Attributes:
        settings: Settings used for systems and data files.
        event_bus: Bus shared by everything in the world.
        party: Party roster.
        variables: Variable store.
        switches: Switch store.
        common_events: Common event database.
        context: GameContext handed to systems.
        interpreter: Interpreter running the current map event.
        system_loader: Loader holding the system instances (None before setup()).
        frame_count: Number of frames run so far.
    """

    def __init__(self, settings: LazySettings | None = None) -> None:
        """Build the host runtime. Systems are loaded later, in setup().

        Args:
            settings: Settings to use. Defaults to troupe.conf.settings.
        """
        self.settings = settings if settings is not None else default_settings
        self.event_bus = EventBus()
        self.party = Party()
        self.variables = GameVariables(self.event_bus)
        self.switches = GameSwitches(self.event_bus)
        self.common_events = CommonEventDatabase()
        self.context = GameContext(
            event_bus=self.event_bus,
            party=self.party,
            variables=self.variables,
            switches=self.switches,
            common_events=self.common_events,
        )
        self.interpreter = Interpreter(
            self.variables,
            self.switches,
            self.common_events,
            event_bus=self.event_bus,
            hooks=self.context.interpreter_hooks,
        )
        self.system_loader: SystemLoader | None = None
        self.frame_count = 0
        self.initialized = False

    def setup(self) -> None:
        """Load data files and systems. Safe to call more than once."""
        if self.initialized:
            return

        self._load_common_events()

        self.system_loader = SystemLoader(self.settings)
        for name, system in self.system_loader.instantiate_all().items():
            self.context.register_system(name, system)
        self.system_loader.setup_all(self.context)

        self.initialized = True
        logger.info("World: Ready with systems %s", ", ".join(self.system_loader.load_order) or "(none)")

    def _load_common_events(self) -> None:
        """Load COMMON_EVENTS_FILE from the assets directory, if configured."""
        relative_path = self.settings.COMMON_EVENTS_FILE
        if not relative_path:
            return
        try:
            full_path = asset_path(relative_path)
        except FileNotFoundError:
            logger.error("World: Common events file not found: %s", relative_path)  # noqa: TRY400
            return
        self.common_events.load_file(full_path)

    def start_event(self, commands: Sequence[EventCommand], event_id: int = 0) -> None:
        """Run commands on the map interpreter, replacing whatever was running."""
        self.interpreter.setup(commands, event_id)

    def is_event_running(self) -> bool:
        """Return True while the map interpreter has commands to run."""
        return self.interpreter.is_running()

    def update(self, delta_time: float | None = None) -> None:
        """Run one frame.

        Args:
            delta_time: Seconds since the previous frame. Defaults to 1 / FRAME_RATE.
        """
        if not self.initialized:
            self.setup()
        if delta_time is None:
            delta_time = 1 / max(1, to_int(self.settings.FRAME_RATE, default=60))

        self.interpreter.update()
        if self.system_loader:
            self.system_loader.update_all(delta_time, self.context)
        self.frame_count += 1

    def run_frames(self, count: int) -> None:
        """Run count frames back to back."""
        for _ in range(count):
            self.update()

    def cleanup(self) -> None:
        """Clean up systems and stop the map interpreter."""
        if self.system_loader:
            self.system_loader.cleanup_all()
        self.interpreter.clear()
        self.event_bus.clear()
        self.initialized = False
