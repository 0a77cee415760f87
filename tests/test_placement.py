"""Tests for placement legality rules."""

import pytest

from catan_core.board import Board
from catan_core.game_state import GameState
from catan_core.pieces import Settlement, City, Road
from catan_data.topology import build_standard_topology
from catan_engine.placement import PlacementRules, ValidationResult


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def board() -> Board:
    """Bare standard topology."""
    return build_standard_topology()


@pytest.fixture
def rules(board: Board) -> PlacementRules:
    return PlacementRules(board)


def ring(board: Board, q: int = 0, r: int = 0):
    """Corners and sides around a tile, in tile-relative order."""
    tile = board.get_tile(q, r)
    corners = [board.corner_of(tile, i) for i in range(6)]
    sides = [board.side_of(tile, i) for i in range(6)]
    return corners, sides


def put_settlement(board: Board, corner, owner: int) -> None:
    corner.building = Settlement(
        piece_id=board.ids.next_id(), owner_id=owner, corner_key=corner.key
    )


def put_road(board: Board, side, owner: int) -> None:
    side.road = Road(piece_id=board.ids.next_id(), owner_id=owner, side_key=side.key)


# =============================================================================
# ValidationResult Tests
# =============================================================================


class TestValidationResult:
    def test_truthiness(self):
        assert ValidationResult(valid=True)
        assert not ValidationResult(valid=False, reason="nope")


# =============================================================================
# Settlement Rules
# =============================================================================


class TestSettlementRules:
    """Tests for settlement legality."""

    def test_empty_board_allows_every_corner(self, rules: PlacementRules):
        """Every corner of an empty board is legal."""
        assert len(rules.get_valid_settlement_corners()) == 54

    def test_occupied_corner_rejected(self, board: Board, rules: PlacementRules):
        """Should reject a corner that already has a building."""
        corners, _ = ring(board)
        put_settlement(board, corners[0], owner=0)

        result = rules.check_settlement(corners[0])
        assert not result.valid
        assert "already has" in result.reason

    def test_distance_rule(self, board: Board, rules: PlacementRules):
        """Corners one side away from a building are illegal."""
        corners, _ = ring(board)
        put_settlement(board, corners[0], owner=0)

        for neighbor in board.get_adjacent_corners(corners[0]):
            result = rules.check_settlement(neighbor)
            assert not result.valid
            assert "next to a building" in result.reason

        # Two sides away is fine
        assert rules.can_place_settlement(corners[2])
        assert len(rules.get_valid_settlement_corners()) == 54 - 1 - 3

    def test_distance_rule_applies_to_all_owners(self, board: Board, rules: PlacementRules):
        """The distance rule ignores ownership."""
        corners, _ = ring(board)
        put_settlement(board, corners[0], owner=1)
        assert not rules.can_place_settlement(corners[1], player_id=0)
        assert not rules.can_place_settlement(corners[1], player_id=1)

    def test_road_connection_required_in_play(self, board: Board, rules: PlacementRules):
        """With require_road, the corner must touch one of the player's roads."""
        corners, sides = ring(board)
        put_settlement(board, corners[0], owner=0)

        assert not rules.can_place_settlement(corners[2], player_id=0, require_road=True)

        put_road(board, sides[0], owner=0)
        put_road(board, sides[1], owner=0)

        assert rules.can_place_settlement(corners[2], player_id=0, require_road=True)
        assert not rules.can_place_settlement(corners[2], player_id=1, require_road=True)

    def test_road_connection_needs_player(self, board: Board, rules: PlacementRules):
        corners, _ = ring(board)
        with pytest.raises(ValueError):
            rules.check_settlement(corners[0], require_road=True)

    def test_foreign_corner_raises(self, rules: PlacementRules):
        """Entities from another board are programming errors."""
        other = build_standard_topology()
        corners, _ = ring(other)
        with pytest.raises(ValueError):
            rules.check_settlement(corners[0])


# =============================================================================
# City Rules
# =============================================================================


class TestCityRules:
    """Tests for city legality."""

    def test_empty_corner_rejected(self, board: Board, rules: PlacementRules):
        corners, _ = ring(board)
        result = rules.check_city(corners[0], player_id=0)
        assert not result.valid
        assert "no settlement" in result.reason

    def test_own_settlement_accepted(self, board: Board, rules: PlacementRules):
        corners, _ = ring(board)
        put_settlement(board, corners[0], owner=0)
        assert rules.can_place_city(corners[0], player_id=0)
        assert rules.get_valid_city_corners(0) == [corners[0]]
        assert rules.get_valid_city_corners(1) == []

    def test_opponent_settlement_rejected(self, board: Board, rules: PlacementRules):
        corners, _ = ring(board)
        put_settlement(board, corners[0], owner=1)
        result = rules.check_city(corners[0], player_id=0)
        assert not result.valid
        assert "belongs to player 1" in result.reason

    def test_city_cannot_be_upgraded(self, board: Board, rules: PlacementRules):
        corners, _ = ring(board)
        corners[0].building = City(piece_id=99, owner_id=0, corner_key=corners[0].key)
        assert not rules.can_place_city(corners[0], player_id=0)


# =============================================================================
# Road Rules
# =============================================================================


class TestRoadRules:
    """Tests for road legality."""

    def test_unconnected_side_rejected(self, board: Board, rules: PlacementRules):
        _, sides = ring(board)
        result = rules.check_road(sides[0], player_id=0)
        assert not result.valid
        assert "not connected" in result.reason
        assert rules.get_valid_road_sides(0) == []

    def test_next_to_own_building(self, board: Board, rules: PlacementRules):
        """A side touching the player's building is legal."""
        corners, sides = ring(board)
        put_settlement(board, corners[0], owner=0)

        valid = rules.get_valid_road_sides(0)
        assert len(valid) == 3
        assert sides[0] in valid
        assert sides[5] in valid
        assert rules.get_valid_road_sides(1) == []

    def test_extends_own_road(self, board: Board, rules: PlacementRules):
        """A side sharing a corner with the player's road is legal."""
        _, sides = ring(board)
        put_road(board, sides[0], owner=0)

        assert rules.can_place_road(sides[1], player_id=0)
        assert rules.can_place_road(sides[5], player_id=0)
        assert not rules.can_place_road(sides[3], player_id=0)
        assert not rules.can_place_road(sides[1], player_id=1)

    def test_occupied_side_rejected(self, board: Board, rules: PlacementRules):
        corners, sides = ring(board)
        put_settlement(board, corners[0], owner=0)
        put_road(board, sides[0], owner=1)

        result = rules.check_road(sides[0], player_id=0)
        assert not result.valid
        assert "already has a road" in result.reason

    def test_anchor(self, board: Board, rules: PlacementRules):
        """An anchored road must touch the anchor corner and nothing else."""
        corners, sides = ring(board)
        anchor = corners[0].key

        assert rules.can_place_road(sides[0], player_id=0, anchor=anchor)
        assert rules.can_place_road(sides[5], player_id=0, anchor=anchor)
        result = rules.check_road(sides[2], player_id=0, anchor=anchor)
        assert not result.valid
        assert "does not touch" in result.reason
        assert len(rules.get_valid_road_sides(0, anchor=anchor)) == 3

    def test_foreign_side_raises(self, rules: PlacementRules):
        _, sides = ring(build_standard_topology())
        with pytest.raises(ValueError):
            rules.check_road(sides[0], player_id=0)

    def test_queries_do_not_mutate(self, board: Board, rules: PlacementRules):
        state = GameState(board=board)
        before = state.state_hash()
        rules.get_valid_settlement_corners()
        rules.get_valid_road_sides(0)
        rules.get_valid_city_corners(0)
        assert state.state_hash() == before
