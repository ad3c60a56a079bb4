"""End-to-end tests running both systems inside a World."""

import unittest

from troupe import World, settings
from troupe.host import CommonEvent
from troupe.host.events import SwitchChangedEvent
from troupe.interpreter import CommandCode, EventCommand, MessageShownEvent
from troupe.systems import MessagePhase, PartyPositionManager, PreMessageManager
from troupe.systems.party_position import PartyPositionChangedEvent

GATE_SWITCH_ID = 12
MAP_EVENT_ID = 7


def message_event(text: str) -> list[EventCommand]:
    """Build a map event showing one message."""
    return [
        EventCommand(CommandCode.SHOW_TEXT, parameters=["", 0, 0, 2]),
        EventCommand(CommandCode.TEXT_LINE, parameters=[text]),
        EventCommand(CommandCode.END),
    ]


class TestWorldSetup(unittest.TestCase):
    """Test World construction and system loading."""

    def test_setup_installs_both_systems(self) -> None:
        """Test that the default INSTALLED_SYSTEMS load both managers."""
        world = World(settings)
        world.setup()

        assert isinstance(world.context.party_position_manager, PartyPositionManager)
        assert isinstance(world.context.pre_message_manager, PreMessageManager)
        assert world.context.pre_message_manager in world.context.interpreter_hooks
        assert set(world.system_loader.load_order) == {"party_position", "pre_message"}

    def test_setup_is_idempotent(self) -> None:
        """Test that a second setup() changes nothing."""
        world = World(settings)
        world.setup()
        loader = world.system_loader

        world.setup()

        assert world.system_loader is loader
        assert len(world.context.interpreter_hooks) == 1

    def test_update_sets_up_lazily(self) -> None:
        """Test that the first update() runs setup()."""
        world = World(settings)

        world.update()

        assert world.initialized
        assert world.frame_count == 1

    def test_loads_common_events_file(self) -> None:
        """Test loading COMMON_EVENTS_FILE through the assets handle."""
        settings.configure(COMMON_EVENTS_FILE="data/common_events.json")
        world = World(settings)

        world.setup()

        assert len(world.common_events) == 2
        assert world.common_events.get(1).name == "Portrait flash"
        assert world.common_events.commands_for(2) == []

    def test_missing_common_events_file_is_logged(self) -> None:
        """Test that a missing data file leaves the database empty."""
        settings.configure(COMMON_EVENTS_FILE="data/nope.json")
        world = World(settings)

        with self.assertLogs("troupe.world", level="ERROR"):
            world.setup()

        assert len(world.common_events) == 0

    def test_cleanup_unregisters_hooks(self) -> None:
        """Test that cleanup() tears systems down."""
        world = World(settings)
        world.setup()

        world.cleanup()

        assert world.context.interpreter_hooks == []
        assert not world.initialized


class TestWorldPartyPosition(unittest.TestCase):
    """Party position tracking driven by World.update()."""

    def setUp(self) -> None:
        """Configure two rules and build the world."""
        settings.configure(
            PARTY_POSITION_RULES=[
                {"actor_id": 1, "position_variable_id": 10},
                {"actor_id": 3, "position_variable_id": 11, "presence_switch_id": 20},
            ]
        )
        self.world = World(settings)
        self.world.setup()
        self.world.party.add_actor(1, "Harold")
        self.world.party.add_actor(2, "Therese")

    def test_positions_written_on_tick(self) -> None:
        """Test that one frame writes positions."""
        self.world.run_frames(1)

        assert self.world.variables.value(10) == 1
        assert self.world.variables.value(11) == 0
        assert self.world.switches.value(20) is False

    def test_joining_actor_updates_next_tick(self) -> None:
        """Test that adding a tracked actor is reflected on the next frame."""
        self.world.run_frames(1)
        self.world.party.add_actor(3, "Marsha")

        self.world.run_frames(1)

        assert self.world.variables.value(11) == 3
        assert self.world.switches.value(20) is True

    def test_no_refresh_during_battle(self) -> None:
        """Test that battle suspends tracking until it ends."""
        self.world.party.on_battle_start()
        self.world.party.swap_order(0, 1)
        self.world.run_frames(2)
        assert self.world.variables.value(10) == 0

        self.world.party.on_battle_end()
        self.world.run_frames(1)

        assert self.world.variables.value(10) == 2

    def test_stable_party_stops_writing(self) -> None:
        """Test that once outputs match, frames publish no store writes."""
        writes: list[object] = []
        self.world.run_frames(1)
        self.world.event_bus.subscribe(SwitchChangedEvent, writes.append)
        self.world.event_bus.subscribe(PartyPositionChangedEvent, writes.append)

        self.world.run_frames(5)

        assert writes == []


class TestWorldPreMessage(unittest.TestCase):
    """Pre-message common events driven by World.update()."""

    def setUp(self) -> None:
        """Configure common event 1 before messages, gated by switch 12."""
        settings.configure(
            COMMON_EVENTS_FILE="data/common_events.json",
            PRE_MESSAGE_COMMON_EVENT_ID=1,
            PRE_MESSAGE_SWITCH_ID=GATE_SWITCH_ID,
        )
        self.world = World(settings)
        self.world.setup()
        self.world.switches.set_value(GATE_SWITCH_ID, True)
        self.manager = self.world.context.pre_message_manager

        self.shown: list[tuple[int, list[str], bool]] = []
        self.world.event_bus.subscribe(MessageShownEvent, self._on_message)

    def _on_message(self, event: MessageShownEvent) -> None:
        self.shown.append((self.world.frame_count, event.lines, self.world.switches.value(5)))

    def test_common_event_runs_before_message(self) -> None:
        """Test the three-frame sequence: launch, run, show."""
        self.world.start_event(message_event("Hello"), MAP_EVENT_ID)

        self.world.run_frames(1)
        assert self.shown == []
        assert self.manager.phase_of(self.world.interpreter) is MessagePhase.SUB_PROGRAM_RUNNING

        self.world.run_frames(1)
        assert self.shown == []
        assert self.world.switches.value(5) is True
        assert self.world.variables.value(7) == 1
        assert self.manager.phase_of(self.world.interpreter) is MessagePhase.READY_TO_DISPATCH

        self.world.run_frames(1)
        assert self.shown == [(2, ["Hello"], True)]
        assert self.manager.phase_of(self.world.interpreter) is MessagePhase.IDLE
        assert not self.world.is_event_running()

    def test_each_message_gets_its_own_run(self) -> None:
        """Test that two messages run the common event twice."""
        commands = message_event("One")[:-1] + message_event("Two")
        self.world.start_event(commands, MAP_EVENT_ID)

        self.world.run_frames(10)

        assert [lines for _, lines, _ in self.shown] == [["One"], ["Two"]]
        assert self.world.variables.value(7) == 2

    def test_gate_off_shows_message_immediately(self) -> None:
        """Test that with the gate off the message shows on the first frame."""
        self.world.switches.set_value(GATE_SWITCH_ID, False)
        self.world.start_event(message_event("Hello"), MAP_EVENT_ID)

        self.world.run_frames(1)

        assert self.shown == [(0, ["Hello"], False)]
        assert self.world.variables.value(7) == 0

    def test_empty_common_event_does_not_delay(self) -> None:
        """Test that an empty common event lets the message through at once."""
        settings.configure(PRE_MESSAGE_COMMON_EVENT_ID=2)
        self.manager.setup(self.world.context, settings)
        self.world.start_event(message_event("Hello"), MAP_EVENT_ID)

        self.world.run_frames(1)

        assert [lines for _, lines, _ in self.shown] == [["Hello"]]

    def test_messages_inside_common_event_are_shown_directly(self) -> None:
        """Test that the pre-message common event's own message is not intercepted."""
        self.world.common_events.add(CommonEvent(3, "Talker", message_event("Inner")))
        settings.configure(PRE_MESSAGE_COMMON_EVENT_ID=3)
        self.manager.setup(self.world.context, settings)
        self.world.start_event(message_event("Outer"), MAP_EVENT_ID)

        self.world.run_frames(5)

        assert [lines for _, lines, _ in self.shown] == [["Inner"], ["Outer"]]

    def test_gate_off_mid_flight_saves_a_frame(self) -> None:
        """Test that disabling the gate while the common event runs skips the extra frame."""
        slow = [EventCommand(CommandCode.WAIT, parameters=[3])]
        self.world.common_events.add(CommonEvent(3, "Slow", slow))
        settings.configure(PRE_MESSAGE_COMMON_EVENT_ID=3)
        self.manager.setup(self.world.context, settings)

        self.world.start_event(message_event("Gated"), MAP_EVENT_ID)
        self.world.run_frames(10)
        frame_with_gate = self.shown[0][0]

        self.shown.clear()
        self.world.switches.set_value(GATE_SWITCH_ID, True)
        self.world.start_event(message_event("Aborted"), MAP_EVENT_ID)
        self.world.run_frames(1)
        start = self.world.frame_count
        assert self.manager.phase_of(self.world.interpreter) is MessagePhase.SUB_PROGRAM_RUNNING
        self.world.switches.set_value(GATE_SWITCH_ID, False)
        self.world.run_frames(10)

        assert self.shown[0][1] == ["Aborted"]
        assert self.shown[0][0] - (start - 1) == frame_with_gate - 1
        assert self.manager.phase_of(self.world.interpreter) is MessagePhase.IDLE
