"""Tests for the setup phase.

Tests cover:
1. Snake order of visits
2. Settlement then road within a visit
3. Resource grant for the second-round settlement
"""

import random

import pytest

from catan_core.constants import PieceType
from catan_core.game_state import GameState
from catan_data.generator import generate_standard_board
from catan_engine.setup import SetupManager, SetupValidationResult


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def game_state() -> GameState:
    """Three players on a generated board."""
    state = GameState.create_initial_state(generate_standard_board(random.Random(7)))
    for name in ("Ann", "Bo", "Cy"):
        state.add_player(name)
    return state


@pytest.fixture
def manager(game_state: GameState) -> SetupManager:
    manager = SetupManager(game_state)
    manager.start()
    return manager


def complete_visit(manager: SetupManager) -> None:
    """Place the first legal settlement and road for the current player."""
    player_id = manager.state.turn.current_player_idx
    corner = manager.get_valid_settlement_corners()[0]
    assert manager.place_settlement(player_id, corner).success
    side = manager.get_valid_road_sides(player_id)[0]
    assert manager.place_road(player_id, side).success


# =============================================================================
# Visit Tests
# =============================================================================


class TestSetupVisit:
    """Test a single setup visit."""

    def test_start(self, manager: SetupManager):
        turn = manager.state.turn
        assert turn.current_player_idx == 0
        assert turn.setup_round == 1
        assert turn.setup_direction == 1
        assert not manager.is_visit_complete()
        assert not manager.is_second_round()

    def test_settlement_then_road(self, manager: SetupManager):
        corner = manager.get_valid_settlement_corners()[0]
        result = manager.place_settlement(0, corner)

        assert result.success
        assert manager.state.turn.setup_settlement_key == corner.key
        assert manager.get_valid_settlement_corners() == []

        sides = manager.get_valid_road_sides(0)
        assert sides
        assert all(corner.key in side.corner_keys for side in sides)

        assert manager.place_road(0, sides[0]).success
        assert manager.is_visit_complete()
        assert manager.get_valid_road_sides(0) == []

    def test_setup_is_free(self, manager: SetupManager):
        complete_visit(manager)
        player = manager.state.get_player(0)
        assert player.total_resources() == 0
        assert player.supply[PieceType.SETTLEMENT] == 4
        assert player.supply[PieceType.ROAD] == 14

    def test_road_before_settlement(self, manager: SetupManager):
        side = manager.state.board.get_sides()[0]
        assert manager.validate_road(0) == SetupValidationResult(
            valid=False, reason="Player 0 must place a settlement before the road"
        )
        result = manager.place_road(0, side)
        assert not result.success
        assert manager.get_valid_road_sides(0) == []

    def test_second_settlement_same_visit(self, manager: SetupManager):
        corners = manager.get_valid_settlement_corners()
        manager.place_settlement(0, corners[0])

        far = next(c for c in corners if manager.builder.rules.can_place_settlement(c))
        result = manager.place_settlement(0, far)
        assert not result.success
        assert "already placed a settlement" in result.reason

    def test_second_road_same_visit(self, manager: SetupManager):
        complete_visit(manager)
        side = manager.builder.rules.get_valid_road_sides(
            0, anchor=manager.state.turn.setup_settlement_key
        )[0]
        result = manager.place_road(0, side)
        assert not result.success
        assert "already placed a road" in result.reason

    def test_road_must_touch_visit_settlement(self, manager: SetupManager):
        board = manager.state.board
        corner = manager.get_valid_settlement_corners()[0]
        manager.place_settlement(0, corner)

        away = next(s for s in board.get_sides() if corner.key not in s.corner_keys)
        result = manager.place_road(0, away)
        assert not result.success
        assert "does not touch" in result.reason

    def test_distance_rule_applies(self, manager: SetupManager):
        board = manager.state.board
        corner = manager.get_valid_settlement_corners()[0]
        complete_visit(manager)
        manager.advance()

        neighbor = board.get_adjacent_corners(corner)[0]
        result = manager.place_settlement(1, neighbor)
        assert not result.success

    def test_advance_requires_complete_visit(self, manager: SetupManager):
        with pytest.raises(ValueError):
            manager.advance()


# =============================================================================
# Snake Order Tests
# =============================================================================


class TestSnakeOrder:
    """Test the order of setup visits."""

    def test_visit_order(self, manager: SetupManager):
        order = []
        done = False
        while not done:
            order.append(manager.state.turn.current_player_idx)
            complete_visit(manager)
            done = manager.advance()

        assert order == [0, 1, 2, 2, 1, 0]

    def test_last_forward_player_starts_backward_round(self, manager: SetupManager):
        for _ in range(3):
            complete_visit(manager)
            manager.advance()

        turn = manager.state.turn
        assert turn.current_player_idx == 2
        assert turn.setup_round == 2
        assert turn.setup_direction == -1
        assert manager.is_second_round()

    def test_every_player_places_twice(self, manager: SetupManager):
        done = False
        while not done:
            complete_visit(manager)
            done = manager.advance()

        for player in manager.state.players:
            assert len(player.settlement_keys) == 2
            assert len(player.road_keys) == 2
        assert manager.is_last_visit()


# =============================================================================
# Initial Resources Tests
# =============================================================================


class TestInitialResources:
    """Test the second-round resource grant."""

    def test_first_round_grants_nothing(self, manager: SetupManager):
        for _ in range(3):
            complete_visit(manager)
            assert manager.last_grant == {}
            manager.advance()
        for player in manager.state.players:
            assert player.total_resources() == 0

    def test_second_round_grants_adjacent_tiles(self, manager: SetupManager):
        board = manager.state.board
        done = False
        while not done:
            complete_visit(manager)
            done = manager.advance()

        for player in manager.state.players:
            second = board.get_corner_by_key(player.settlement_keys[1])
            expected = sum(
                1 for tile in board.get_corner_tiles(second) if tile.is_productive_terrain()
            )
            assert player.total_resources() == expected
