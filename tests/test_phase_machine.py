"""Tests for the phase state machine.

Tests cover:
1. Phase transitions (valid and invalid)
2. Start conditions
3. Snake order helpers
4. End of setup detection
"""

import pytest

from catan_core.constants import Phase
from catan_core.game_state import GameState
from catan_data.topology import build_standard_topology
from catan_engine.phase_machine import (
    PhaseMachine,
    PhaseTransitionResult,
    PHASE_TRANSITIONS,
)


# =============================================================================
# Phase Transition Tests
# =============================================================================


class TestPhaseTransitions:
    """Test valid and invalid phase transitions."""

    def test_initial_phase(self):
        """Should start in WAITING."""
        machine = PhaseMachine()
        assert machine.phase == Phase.WAITING
        assert machine.is_waiting()

    def test_custom_initial_phase(self):
        """Should accept custom initial phase."""
        machine = PhaseMachine(initial_phase=Phase.PLAYING)
        assert machine.is_playing()

    def test_forward_path(self):
        """Phases should run waiting -> setup -> playing -> finished."""
        machine = PhaseMachine()
        for target in (Phase.SETUP, Phase.PLAYING, Phase.FINISHED):
            result = machine.transition_to(target)
            assert result.success
            assert result.new_phase == target
        assert machine.is_game_over()

    def test_finished_is_terminal(self):
        """FINISHED has no outgoing transitions."""
        machine = PhaseMachine(initial_phase=Phase.FINISHED)
        assert machine.get_valid_transitions() == []
        for phase in Phase:
            assert not machine.can_transition_to(phase)

    @pytest.mark.parametrize(
        "start,target",
        [
            (Phase.WAITING, Phase.PLAYING),
            (Phase.WAITING, Phase.FINISHED),
            (Phase.SETUP, Phase.WAITING),
            (Phase.SETUP, Phase.FINISHED),
            (Phase.PLAYING, Phase.SETUP),
            (Phase.PLAYING, Phase.PLAYING),
        ],
    )
    def test_invalid_transitions(self, start, target):
        """Should refuse to skip or go back."""
        machine = PhaseMachine(initial_phase=start)
        result = machine.transition_to(target)
        assert result == PhaseTransitionResult(
            success=False, new_phase=None, reason=result.reason
        )
        assert "Cannot transition" in result.reason
        assert machine.phase == start

    def test_transition_table_covers_all_phases(self):
        assert set(PHASE_TRANSITIONS) == set(Phase)


# =============================================================================
# Start Condition Tests
# =============================================================================


class TestCanStart:
    def test_enough_players(self):
        result = PhaseMachine().can_start(num_players=2, min_players=2)
        assert result.success
        assert result.new_phase == Phase.SETUP

    def test_too_few_players(self):
        result = PhaseMachine().can_start(num_players=1, min_players=2)
        assert not result.success
        assert "at least 2" in result.reason

    def test_already_started(self):
        result = PhaseMachine(initial_phase=Phase.SETUP).can_start(4, 2)
        assert not result.success
        assert "already started" in result.reason


# =============================================================================
# Setup Order Tests
# =============================================================================


class TestSetupOrder:
    """Test the snake order helpers."""

    def test_four_players(self):
        machine = PhaseMachine()
        assert machine.get_setup_forward_order(4) == [0, 1, 2, 3]
        assert machine.get_setup_reverse_order(4) == [3, 2, 1, 0]
        assert machine.get_setup_order(4) == [0, 1, 2, 3, 3, 2, 1, 0]

    def test_two_players(self):
        assert PhaseMachine().get_setup_order(2) == [0, 1, 1, 0]

    @pytest.mark.parametrize("num_players", range(2, 7))
    def test_each_player_visited_twice(self, num_players):
        order = PhaseMachine().get_setup_order(num_players)
        assert len(order) == 2 * num_players
        assert all(order.count(pid) == 2 for pid in range(num_players))


# =============================================================================
# End of Setup Tests
# =============================================================================


class TestShouldEndSetup:
    """Test detection of the last setup visit."""

    @pytest.fixture
    def state(self) -> GameState:
        state = GameState.create_initial_state(build_standard_topology())
        for _ in range(3):
            state.add_player()
        return state

    def test_last_visit_complete(self, state: GameState):
        machine = PhaseMachine(initial_phase=Phase.SETUP)
        state.turn.setup_round = 2
        state.turn.current_player_idx = 0
        state.turn.setup_settlement_key = "0,0,0"
        state.turn.setup_road_key = "0,0,0"
        assert machine.should_end_setup(state)

    def test_last_visit_incomplete(self, state: GameState):
        machine = PhaseMachine(initial_phase=Phase.SETUP)
        state.turn.setup_round = 2
        state.turn.setup_settlement_key = "0,0,0"
        assert not machine.should_end_setup(state)

    def test_first_round(self, state: GameState):
        machine = PhaseMachine(initial_phase=Phase.SETUP)
        state.turn.setup_settlement_key = "0,0,0"
        state.turn.setup_road_key = "0,0,0"
        assert not machine.should_end_setup(state)

    def test_not_in_setup(self, state: GameState):
        machine = PhaseMachine(initial_phase=Phase.PLAYING)
        state.turn.setup_round = 2
        state.turn.setup_settlement_key = "0,0,0"
        state.turn.setup_road_key = "0,0,0"
        assert not machine.should_end_setup(state)

    def test_str(self):
        assert str(PhaseMachine()) == "PhaseMachine(phase=waiting)"
