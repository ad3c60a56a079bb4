"""Unit tests for PartyPositionManager."""

import unittest
from unittest.mock import MagicMock

from troupe.host import GameSwitches, GameVariables, Party, PartyMember
from troupe.systems.party_position import (
    PartyPositionChangedEvent,
    PartyPositionManager,
    TrackedActorRule,
    parse_rules,
)

ACTOR_A = 1
ACTOR_B = 2
ACTOR_C = 3


class TestParseRules(unittest.TestCase):
    """Test parse_rules and TrackedActorRule."""

    def test_keeps_valid_rules_in_order(self) -> None:
        """Test that valid rules are kept in configuration order."""
        rules = parse_rules(
            [
                {"actor_id": 4, "presence_switch_id": 20},
                {"actor_id": 1, "position_variable_id": 10},
            ]
        )

        assert rules == [
            TrackedActorRule(actor_id=4, presence_switch_id=20),
            TrackedActorRule(actor_id=1, position_variable_id=10),
        ]

    def test_drops_rule_without_actor(self) -> None:
        """Test that a non-positive actor id drops the rule."""
        assert parse_rules([{"actor_id": 0, "position_variable_id": 10}]) == []
        assert parse_rules([{"actor_id": -3, "position_variable_id": 10}]) == []

    def test_drops_rule_without_outputs(self) -> None:
        """Test that a rule with both outputs disabled is dropped."""
        assert parse_rules([{"actor_id": 1}]) == []
        assert parse_rules([{"actor_id": 1, "position_variable_id": 0, "presence_switch_id": 0}]) == []

    def test_coerces_string_fields(self) -> None:
        """Test that numeric strings are accepted and junk collapses to 0."""
        rules = parse_rules([{"actor_id": "5", "position_variable_id": "12", "presence_switch_id": "abc"}])

        assert rules == [TrackedActorRule(actor_id=5, position_variable_id=12, presence_switch_id=0)]

    def test_accepts_json_string(self) -> None:
        """Test that the rule list may be given as JSON."""
        rules = parse_rules('[{"actorId": 2, "presenceSwitchId": 8}]')

        assert rules == [TrackedActorRule(actor_id=2, presence_switch_id=8)]

    def test_malformed_input_yields_no_rules(self) -> None:
        """Test that malformed settings never raise."""
        assert parse_rules("not json") == []
        assert parse_rules(None) == []
        assert parse_rules([1, "x", None]) == []


class TestPartyPositionManager(unittest.TestCase):
    """Unit test class for PartyPositionManager."""

    def setUp(self) -> None:
        """Set up a manager over a real party and stores."""
        self.party = Party([PartyMember(ACTOR_A), PartyMember(ACTOR_B)])
        self.variables = MagicMock(wraps=GameVariables())
        self.switches = MagicMock(wraps=GameSwitches())

        self.mock_context = MagicMock()
        self.mock_context.party = self.party
        self.mock_context.variables = self.variables
        self.mock_context.switches = self.switches
        self.mock_event_bus = MagicMock()
        self.mock_context.event_bus = self.mock_event_bus

        self.mock_settings = MagicMock()
        self.mock_settings.PARTY_POSITION_RULES = [
            {"actor_id": ACTOR_A, "position_variable_id": 10},
            {"actor_id": ACTOR_B, "position_variable_id": 11, "presence_switch_id": 21},
            {"actor_id": ACTOR_C, "position_variable_id": 12, "presence_switch_id": 20},
        ]

        self.manager = PartyPositionManager()
        self.manager.setup(self.mock_context, self.mock_settings)

    def test_setup_loads_rules(self) -> None:
        """Test that setup parses the configured rules."""
        assert len(self.manager.rules) == 3
        assert self.manager.get_state()["rules"][0] == {
            "actor_id": ACTOR_A,
            "position_variable_id": 10,
            "presence_switch_id": 0,
        }

    def test_leader_position_is_one(self) -> None:
        """Test that the party leader gets position 1."""
        self.manager.refresh()

        assert self.variables.value(10) == 1

    def test_second_member_position_is_two(self) -> None:
        """Test that the second member gets position 2 and presence ON."""
        self.manager.refresh()

        assert self.variables.value(11) == 2
        assert self.switches.value(21) is True

    def test_absent_actor_writes_zero_and_off(self) -> None:
        """Test that an actor outside the party gets position 0 and presence OFF."""
        self.switches.set_value(20, True)
        self.variables.set_value(12, 3)

        self.manager.refresh()

        assert self.variables.value(12) == 0
        assert self.switches.value(20) is False

    def test_refresh_follows_reordering(self) -> None:
        """Test that swapping members updates positions."""
        self.manager.refresh()
        self.party.swap_order(0, 1)
        self.manager.refresh()

        assert self.variables.value(10) == 2
        assert self.variables.value(11) == 1

    def test_refresh_follows_removal(self) -> None:
        """Test that removing a member clears its outputs and shifts the rest."""
        self.manager.refresh()
        self.party.remove_actor(ACTOR_A)
        self.manager.refresh()

        assert self.variables.value(10) == 0
        assert self.variables.value(11) == 1

    def test_second_refresh_writes_nothing(self) -> None:
        """Test that an unchanged party produces no additional writes."""
        self.manager.refresh()
        variable_writes = self.variables.set_value.call_count
        switch_writes = self.switches.set_value.call_count

        self.manager.refresh()

        assert self.variables.set_value.call_count == variable_writes
        assert self.switches.set_value.call_count == switch_writes

    def test_value_already_matching_is_not_written(self) -> None:
        """Test that an absent actor whose outputs already read 0/OFF is not written."""
        self.manager.refresh()

        written_variables = [c.args[0] for c in self.variables.set_value.call_args_list]
        written_switches = [c.args[0] for c in self.switches.set_value.call_args_list]
        assert 12 not in written_variables
        assert 20 not in written_switches

    def test_disabled_outputs_are_never_written(self) -> None:
        """Test that a rule only writes the outputs it enables."""
        self.manager.refresh()

        written_switches = {c.args[0] for c in self.switches.set_value.call_args_list}
        assert written_switches == {21}

    def test_change_publishes_event(self) -> None:
        """Test that a write publishes PartyPositionChangedEvent."""
        self.manager.refresh()

        events = [c.args[0] for c in self.mock_event_bus.publish.call_args_list]
        assert PartyPositionChangedEvent(ACTOR_A, 1, True) in events
        assert PartyPositionChangedEvent(ACTOR_B, 2, True) in events
        assert all(event.actor_id != ACTOR_C for event in events)

    def test_no_event_without_change(self) -> None:
        """Test that an idle refresh publishes nothing."""
        self.manager.refresh()
        self.mock_event_bus.reset_mock()

        self.manager.refresh()

        self.mock_event_bus.publish.assert_not_called()

    def test_update_refreshes(self) -> None:
        """Test that update() refreshes outside battle."""
        self.manager.update(1 / 60, self.mock_context)

        assert self.variables.value(10) == 1

    def test_update_skipped_in_battle(self) -> None:
        """Test that update() does nothing during battle."""
        self.party.on_battle_start()

        self.manager.update(1 / 60, self.mock_context)

        self.variables.set_value.assert_not_called()
        self.switches.set_value.assert_not_called()

    def test_update_resumes_after_battle(self) -> None:
        """Test that tracking resumes once the battle ends."""
        self.party.on_battle_start()
        self.manager.update(1 / 60, self.mock_context)
        self.party.on_battle_end()
        self.manager.update(1 / 60, self.mock_context)

        assert self.variables.value(10) == 1

    def test_position_of(self) -> None:
        """Test the 0-based lookup."""
        assert self.manager.position_of(ACTOR_A) == 0
        assert self.manager.position_of(ACTOR_B) == 1
        assert self.manager.position_of(ACTOR_C) is None

    def test_first_match_wins(self) -> None:
        """Test that the scan stops at the first matching member."""
        party = MagicMock()
        party.members.return_value = [PartyMember(ACTOR_B), PartyMember(ACTOR_A), PartyMember(ACTOR_A)]
        party.in_battle.return_value = False
        self.manager.party = party

        self.manager.refresh()

        assert self.variables.value(10) == 2

    def test_cleanup_stops_tracking(self) -> None:
        """Test that a cleaned up manager ignores updates."""
        self.manager.cleanup()

        self.manager.update(1 / 60, self.mock_context)

        assert self.manager.rules == []
        self.variables.set_value.assert_not_called()


class TestPartyPositionScenarios(unittest.TestCase):
    """Scenario tests with a single rule each."""

    def _manager(self, party: Party, rules: list[dict]) -> tuple[PartyPositionManager, GameVariables, GameSwitches]:
        variables = GameVariables()
        switches = GameSwitches()
        context = MagicMock()
        context.party = party
        context.variables = variables
        context.switches = switches
        context.event_bus = None
        mock_settings = MagicMock()
        mock_settings.PARTY_POSITION_RULES = rules

        manager = PartyPositionManager()
        manager.setup(context, mock_settings)
        return manager, variables, switches

    def test_leader_in_two_member_party(self) -> None:
        """Test roster [A, B] with rule(A, variable 10) gives variable 10 == 1."""
        manager, variables, _ = self._manager(
            Party([PartyMember(ACTOR_A), PartyMember(ACTOR_B)]),
            [{"actor_id": ACTOR_A, "position_variable_id": 10}],
        )

        manager.refresh()

        assert variables.value(10) == 1

    def test_absent_actor_switch_off(self) -> None:
        """Test C not in roster with rule(C, switch 20) gives switch 20 OFF."""
        manager, _, switches = self._manager(
            Party([PartyMember(ACTOR_A), PartyMember(ACTOR_B)]),
            [{"actor_id": ACTOR_C, "presence_switch_id": 20}],
        )

        manager.refresh()

        assert switches.value(20) is False

    def test_every_slot_maps_to_index_plus_one(self) -> None:
        """Test that for every slot i the position variable reads i + 1."""
        actor_ids = [7, 3, 9, 4]
        rules = [{"actor_id": actor_id, "position_variable_id": 100 + actor_id} for actor_id in actor_ids]
        manager, variables, _ = self._manager(Party([PartyMember(a) for a in actor_ids]), rules)

        manager.refresh()

        for index, actor_id in enumerate(actor_ids):
            assert variables.value(100 + actor_id) == index + 1

    def test_presence_matches_membership(self) -> None:
        """Test that each presence switch equals roster membership."""
        rules = [{"actor_id": actor_id, "presence_switch_id": 50 + actor_id} for actor_id in (1, 2, 3, 4)]
        manager, _, switches = self._manager(Party([PartyMember(2), PartyMember(4)]), rules)

        manager.refresh()

        assert [switches.value(50 + actor_id) for actor_id in (1, 2, 3, 4)] == [False, True, False, True]
