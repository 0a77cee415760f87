"""Tests for the main game engine.

Tests cover:
1. Player registration and game start
2. Setup flow in snake order
3. Dice, production and the robber
4. Rejections of out-of-turn or out-of-phase actions
5. Action execution (step) and valid action generation
6. Complete game scenarios up to a winner
"""

import random

import pytest

from catan_core.config import GameConfig
from catan_core.constants import Phase, Resource, INITIAL_TURN_NUMBER
from catan_data.topology import build_standard_topology
from catan_engine.game_engine import (
    GameEngine,
    Action,
    ActionType,
    StepResult,
)


class LoadedDice(random.Random):
    """Random source whose next dice can be forced."""

    def __init__(self, seed=None):
        super().__init__(seed)
        self.forced: list[int] = []

    def load(self, *values: int) -> None:
        self.forced.extend(values)

    def randint(self, a, b):
        if self.forced:
            return self.forced.pop(0)
        return super().randint(a, b)


# =============================================================================
# Fixtures
# =============================================================================


def make_engine(num_players: int = 4, seed: int = 42, **config) -> GameEngine:
    engine = GameEngine(GameConfig(seed=seed, **config))
    for i in range(num_players):
        engine.add_player(f"P{i}")
    return engine


def run_setup(engine: GameEngine) -> None:
    """Step the first valid action until setup is over."""
    for _ in range(200):
        if engine.phase != Phase.SETUP:
            return
        result = engine.step(engine.get_valid_actions()[0])
        assert result.success, result.info
    raise AssertionError("setup did not finish")


@pytest.fixture
def engine() -> GameEngine:
    """Four players, game started."""
    engine = make_engine()
    assert engine.start_game()
    return engine


@pytest.fixture
def playing_engine(engine: GameEngine) -> GameEngine:
    """Four players, setup finished."""
    run_setup(engine)
    return engine


@pytest.fixture
def loaded_engine() -> GameEngine:
    """Two players with forceable dice, setup finished."""
    engine = GameEngine(GameConfig(), rng=LoadedDice(5))
    engine.add_player("Ann")
    engine.add_player("Bo")
    engine.start_game()
    run_setup(engine)
    return engine


def expected_yield(engine: GameEngine, total: int) -> dict[int, int]:
    """Units each player should receive for a dice total."""
    board = engine.board
    expected = {p.player_id: 0 for p in engine.state.players}
    for building in board.get_buildings():
        corner = board.get_corner_by_key(building.corner_key)
        for tile in board.get_corner_tiles(corner):
            if tile.should_produce(total):
                expected[building.owner_id] += building.resource_multiplier
    return expected


# =============================================================================
# Initialization Tests
# =============================================================================


class TestGameInitialization:
    """Test registration and start."""

    def test_initial_state(self):
        engine = GameEngine()
        assert engine.phase == Phase.WAITING
        assert engine.state.num_players() == 0
        assert not engine.is_game_over()
        assert engine.get_valid_actions() == []

    def test_invalid_config(self):
        with pytest.raises(ValueError):
            GameEngine(GameConfig(min_players=4, max_players=3))

    def test_add_player(self):
        engine = GameEngine()
        player = engine.add_player("Ann", "red")
        assert player.player_id == 0
        assert player.name == "Ann"
        assert player.color == "red"
        assert engine.get_events()[-1].kind == "player_joined"

    def test_too_many_players(self):
        engine = make_engine(num_players=6)
        assert engine.add_player("extra") is None
        assert engine.state.num_players() == 6

    def test_too_few_players(self):
        engine = make_engine(num_players=1)
        assert not engine.start_game()
        assert engine.phase == Phase.WAITING
        assert "at least 2" in engine.get_events()[-1].message

    def test_start_game(self, engine: GameEngine):
        board = engine.board
        assert engine.phase == Phase.SETUP
        assert board.is_generated
        assert len(board.tiles) == 19
        assert len(board.get_bound_markers()) == 18
        assert board.get_robber_tile() is not None
        assert engine.state.turn.current_player_idx == 0

    def test_cannot_start_twice(self, engine: GameEngine):
        assert not engine.start_game()
        assert engine.phase == Phase.SETUP

    def test_no_players_after_start(self, engine: GameEngine):
        assert engine.add_player("late") is None
        assert engine.state.num_players() == 4

    def test_generate_board_after_start(self, engine: GameEngine):
        with pytest.raises(RuntimeError):
            engine.generate_board()

    def test_seed_reproduces_board(self):
        a = make_engine(seed=3)
        b = make_engine(seed=3)
        a.start_game()
        b.start_game()
        assert a.state.state_hash() == b.state.state_hash()

    def test_reset(self, engine: GameEngine):
        state = engine.reset()
        assert engine.phase == Phase.WAITING
        assert state.num_players() == 0
        assert engine.state is state

    def test_reset_with_board(self):
        engine = GameEngine(GameConfig(seed=1))
        board = build_standard_topology()
        engine.reset(board)
        engine.add_player()
        engine.add_player()
        engine.start_game()
        assert engine.board is board
        assert board.is_generated


# =============================================================================
# Setup Flow Tests
# =============================================================================


class TestSetupFlow:
    """Test the setup phase through the engine."""

    def test_snake_order(self, engine: GameEngine):
        placed = []
        engine.subscribe(
            lambda event: placed.append(event.player_id)
            if event.kind == "settlement_placed" else None
        )
        run_setup(engine)
        assert placed == [0, 1, 2, 3, 3, 2, 1, 0]

    def test_play_begins_after_setup(self, playing_engine: GameEngine):
        turn = playing_engine.state.turn
        assert playing_engine.phase == Phase.PLAYING
        assert turn.current_player_idx == 0
        assert turn.turn_number == INITIAL_TURN_NUMBER
        assert not turn.has_rolled
        for player in playing_engine.state.players:
            assert len(player.settlement_keys) == 2
            assert len(player.road_keys) == 2
            assert player.score == 2

    def test_second_settlement_grants_resources(self, playing_engine: GameEngine):
        board = playing_engine.board
        for player in playing_engine.state.players:
            second = board.get_corner_by_key(player.settlement_keys[1])
            expected = sum(
                1 for tile in board.get_corner_tiles(second) if tile.is_productive_terrain()
            )
            assert player.total_resources() == expected

    def test_setup_actions(self, engine: GameEngine):
        actions = engine.get_valid_actions()
        assert {a.action_type for a in actions} == {ActionType.PLACE_SETTLEMENT}
        assert len(actions) == 54

        engine.step(actions[0])
        actions = engine.get_valid_actions()
        assert {a.action_type for a in actions} == {ActionType.PLACE_ROAD}

        engine.step(actions[0])
        assert [a.action_type for a in engine.get_valid_actions()] == [ActionType.END_TURN]

    def test_wrong_player(self, engine: GameEngine):
        corner = engine.get_valid_settlement_corners()[0]
        assert engine.place_settlement(corner, player_id=1) is None
        assert corner.building is None
        assert engine.get_events()[-1].kind == "rejected"

    def test_unknown_player(self, engine: GameEngine):
        corner = engine.get_valid_settlement_corners()[0]
        with pytest.raises(ValueError):
            engine.place_settlement(corner, player_id=9)

    def test_end_visit_early(self, engine: GameEngine):
        assert not engine.end_turn()
        assert engine.state.turn.current_player_idx == 0

    def test_no_cities_or_dice_in_setup(self, engine: GameEngine):
        corner = engine.get_valid_settlement_corners()[0]
        assert engine.place_settlement(corner) is not None
        assert engine.place_city(corner) is None
        assert engine.roll_dice() is None

    def test_one_settlement_per_visit(self, engine: GameEngine):
        corners = engine.get_valid_settlement_corners()
        engine.place_settlement(corners[0])
        assert engine.place_settlement(corners[-1]) is None

    def test_setup_road_must_touch_settlement(self, engine: GameEngine):
        corner = engine.get_valid_settlement_corners()[0]
        engine.place_settlement(corner)
        away = next(s for s in engine.board.get_sides() if corner.key not in s.corner_keys)
        assert engine.place_road(away) is None
        road = engine.place_road(engine.get_valid_road_sides()[0])
        assert road is not None
        assert corner.key in engine.board.get_side_by_key(road.side_key).corner_keys

    def test_legality_queries_follow_setup_visit(self):
        """Should agree with placement during the second round of setup."""
        engine = make_engine(num_players=2, seed=3)
        engine.start_game()
        for _ in range(3):
            for _ in range(3):
                assert engine.step(engine.get_valid_actions()[0]).success
        player = engine.get_current_player()
        assert player.player_id == 0
        first = engine.board.get_corner_by_key(player.settlement_keys[0])

        assert not any(engine.can_place_road(s, 0) for s in engine.board.get_sides())
        corner = engine.get_valid_settlement_corners()[0]
        assert engine.can_place_settlement(corner, 0)
        assert not engine.can_place_settlement(corner, 1)
        assert engine.place_settlement(corner) is not None
        assert not engine.can_place_settlement(engine.get_valid_settlement_corners()[0], 0)

        legal = {s.key for s in engine.board.get_sides() if engine.can_place_road(s, 0)}
        assert legal == {s.key for s in engine.get_valid_road_sides()}
        behind = next(s for s in engine.board.get_corner_sides(first) if not s.has_road())
        assert not engine.can_place_road(behind, 0)
        assert engine.place_road(behind) is None


# =============================================================================
# Turn Flow Tests
# =============================================================================


class TestTurnFlow:
    """Test rolling, building and ending turns."""

    def test_roll(self, playing_engine: GameEngine):
        dice = playing_engine.roll_dice()
        assert dice is not None
        assert all(1 <= d <= 6 for d in dice)
        assert playing_engine.state.turn.has_rolled
        assert playing_engine.state.turn.last_roll == dice

    def test_roll_once_per_turn(self, playing_engine: GameEngine):
        playing_engine.roll_dice()
        assert playing_engine.roll_dice() is None

    def test_build_before_roll(self, playing_engine: GameEngine):
        player = playing_engine.get_current_player()
        player.add_resource(Resource.LUMBER)
        player.add_resource(Resource.BRICK)
        side = playing_engine.get_valid_road_sides()[0]

        assert playing_engine.place_road(side) is None
        assert "must roll" in playing_engine.get_events()[-1].message

    def test_end_turn_before_roll(self, playing_engine: GameEngine):
        assert not playing_engine.end_turn()
        assert playing_engine.state.turn.current_player_idx == 0

    def test_production_matches_buildings(self, playing_engine: GameEngine):
        """Roll until a non-7 pays out; each gain equals the building multipliers."""
        engine = playing_engine
        for _ in range(300):
            totals = {p.player_id: p.total_resources() for p in engine.state.players}
            dice = engine.roll_dice()
            total = sum(dice)
            if total != 7:
                expected = expected_yield(engine, total)
                for player in engine.state.players:
                    delta = player.total_resources() - totals[player.player_id]
                    assert delta == expected[player.player_id]
                if any(expected.values()):
                    return
            else:
                tile = next(t for t in engine.board.get_tiles() if not t.has_robber)
                assert engine.move_robber(tile) is not None
            assert engine.end_turn()
        pytest.fail("no production in 300 rolls")

    def test_end_turn_advances(self, playing_engine: GameEngine):
        engine = playing_engine
        dice = engine.roll_dice()
        if sum(dice) == 7:
            tile = next(t for t in engine.board.get_tiles() if not t.has_robber)
            engine.move_robber(tile)

        assert engine.end_turn()
        turn = engine.state.turn
        assert turn.current_player_idx == 1
        assert turn.turn_number == INITIAL_TURN_NUMBER + 1
        assert not turn.has_rolled

    def test_turn_wraps_around(self, playing_engine: GameEngine):
        engine = playing_engine
        for _ in range(4):
            if sum(engine.roll_dice()) == 7:
                tile = next(t for t in engine.board.get_tiles() if not t.has_robber)
                engine.move_robber(tile)
            engine.end_turn()
        assert engine.state.turn.current_player_idx == 0
        assert engine.state.turn.turn_number == INITIAL_TURN_NUMBER + 4

    def test_build_road_after_roll(self, loaded_engine: GameEngine):
        engine = loaded_engine
        engine.rng.load(1, 1)
        engine.roll_dice()
        player = engine.get_current_player()
        player.add_resource(Resource.LUMBER)
        player.add_resource(Resource.BRICK)
        before = player.total_resources()

        side = engine.get_valid_road_sides()[0]
        road = engine.place_road(side)

        assert road is not None
        assert side.road is road
        assert player.total_resources() == before - 2
        assert len(player.road_keys) == 3


# =============================================================================
# Robber Tests
# =============================================================================


class TestRobber:
    """Test the 7 roll through the engine."""

    def test_seven_requires_robber_move(self, loaded_engine: GameEngine):
        engine = loaded_engine
        ann, bo = engine.state.players
        ann.add_resource(Resource.ORE, 10 - ann.total_resources())
        bo_cards = bo.total_resources()
        engine.rng.load(3, 4)

        assert sum(engine.roll_dice()) == 7

        assert ann.total_resources() == 5
        assert bo.total_resources() == bo_cards
        assert engine.state.turn.robber_pending
        assert not engine.end_turn()

        actions = engine.get_valid_actions()
        assert {a.action_type for a in actions} == {ActionType.MOVE_ROBBER}
        assert len(actions) == 18

    def test_move_robber_to_victim(self, loaded_engine: GameEngine):
        engine = loaded_engine
        board = engine.board
        bo = engine.state.get_player(1)
        engine.rng.load(6, 1)
        engine.roll_dice()

        corner = board.get_corner_by_key(bo.settlement_keys[0])
        tile = next(t for t in board.get_corner_tiles(corner) if not t.has_robber)
        result = engine.move_robber(tile)

        assert result.success
        assert result.victims == [1]
        assert board.get_robber_tile() is tile
        assert not engine.state.turn.robber_pending
        assert engine.end_turn()

    def test_robber_blocks_building(self, loaded_engine: GameEngine):
        engine = loaded_engine
        player = engine.get_current_player()
        player.add_resource(Resource.LUMBER)
        player.add_resource(Resource.BRICK)
        engine.rng.load(2, 5)
        engine.roll_dice()

        side = engine.get_valid_road_sides()[0]
        assert engine.place_road(side) is None
        assert "robber" in engine.get_events()[-1].message

    def test_robber_only_after_seven(self, loaded_engine: GameEngine):
        engine = loaded_engine
        engine.rng.load(2, 2)
        engine.roll_dice()
        tile = next(t for t in engine.board.get_tiles() if not t.has_robber)
        assert engine.move_robber(tile) is None

    def test_robber_must_move(self, loaded_engine: GameEngine):
        engine = loaded_engine
        engine.rng.load(5, 2)
        engine.roll_dice()
        assert engine.move_robber(engine.board.get_robber_tile()) is None
        assert engine.state.turn.robber_pending

    def test_foreign_tile(self, loaded_engine: GameEngine):
        engine = loaded_engine
        engine.rng.load(4, 3)
        engine.roll_dice()
        other = build_standard_topology()
        with pytest.raises(ValueError):
            engine.move_robber(other.get_tile(0, 0))


# =============================================================================
# Step Tests
# =============================================================================


class TestStep:
    """Test action execution through step()."""

    def test_step_returns_result(self, engine: GameEngine):
        action = engine.get_valid_actions()[0]
        result = engine.step(action)
        assert isinstance(result, StepResult)
        assert result.success
        assert result.state is engine.state
        assert not result.done
        assert result.info["phase"] == "setup"

    def test_invalid_action(self, engine: GameEngine):
        result = engine.step(Action(ActionType.ROLL_DICE, 0, {}))
        assert not result.success
        assert "Invalid action" in result.info["error"]

    def test_wrong_player_action(self, engine: GameEngine):
        action = engine.get_valid_actions()[0]
        result = engine.step(Action(action.action_type, 2, action.params))
        assert not result.success

    def test_playing_actions(self, playing_engine: GameEngine):
        actions = playing_engine.get_valid_actions()
        assert [a.action_type for a in actions] == [ActionType.ROLL_DICE]

        result = playing_engine.step(actions[0])
        assert result.success
        assert "roll" in result.info

        kinds = {a.action_type for a in playing_engine.get_valid_actions()}
        if playing_engine.state.turn.robber_pending:
            assert kinds == {ActionType.MOVE_ROBBER}
        else:
            assert ActionType.END_TURN in kinds
            assert ActionType.ROLL_DICE not in kinds

    def test_random_playout_keeps_state_consistent(self, playing_engine: GameEngine):
        chooser = random.Random(0)
        for _ in range(150):
            actions = playing_engine.get_valid_actions()
            if not actions:
                break
            result = playing_engine.step(chooser.choice(actions))
            assert result.success, result.info
            assert playing_engine.state.validate() == []


# =============================================================================
# Winning Tests
# =============================================================================


class TestWinning:
    """Test the end of the game."""

    def test_city_wins_at_target(self):
        engine = GameEngine(GameConfig(target_victory_points=3), rng=LoadedDice(11))
        engine.add_player("Ann")
        engine.add_player("Bo")
        engine.start_game()
        run_setup(engine)
        assert engine.phase == Phase.PLAYING

        ann = engine.get_current_player()
        ann.add_resource(Resource.ORE, 3)
        ann.add_resource(Resource.GRAIN, 2)
        engine.rng.load(1, 1)
        engine.roll_dice()

        corner = engine.board.get_corner_by_key(ann.settlement_keys[0])
        city = engine.place_city(corner)

        assert city is not None
        assert corner.building is city
        assert ann.score == 3
        assert engine.is_game_over()
        assert engine.phase == Phase.FINISHED
        assert engine.get_winner() is ann
        assert engine.get_events()[-1].kind == "game_won"

    def test_nothing_after_finish(self):
        engine = GameEngine(GameConfig(target_victory_points=3), rng=LoadedDice(11))
        engine.add_player()
        engine.add_player()
        engine.start_game()
        run_setup(engine)
        ann = engine.get_current_player()
        ann.add_resource(Resource.ORE, 3)
        ann.add_resource(Resource.GRAIN, 2)
        engine.rng.load(1, 1)
        engine.roll_dice()
        engine.place_city(engine.board.get_corner_by_key(ann.settlement_keys[0]))

        assert engine.get_valid_actions() == []
        assert engine.roll_dice() is None
        assert not engine.end_turn()
        result = engine.step(Action(ActionType.END_TURN, 0, {}))
        assert result.done
        assert not result.success

    def test_target_reached_at_setup_end(self):
        """A target met during setup is only declared once play begins."""
        engine = make_engine(num_players=2, target_victory_points=2)
        engine.start_game()
        winners = []
        engine.subscribe(lambda e: winners.append(e.player_id) if e.kind == "game_won" else None)
        run_setup(engine)
        assert engine.is_game_over()
        assert winners == [0]


# =============================================================================
# Utility Tests
# =============================================================================


class TestUtilities:
    def test_clone_is_independent(self, playing_engine: GameEngine):
        clone = playing_engine.clone()
        before = playing_engine.state.state_hash()
        assert clone.state.state_hash() == before

        clone.roll_dice()
        assert playing_engine.state.state_hash() == before
        assert not playing_engine.state.turn.has_rolled
        assert clone.phase == Phase.PLAYING

    def test_summary(self, playing_engine: GameEngine):
        summary = playing_engine.get_game_summary()
        assert summary["phase"] == "playing"
        assert summary["turn"] == INITIAL_TURN_NUMBER
        assert summary["current_player"] == 0
        assert len(summary["players"]) == 4
        assert all(p["settlements"] == 2 for p in summary["players"])
        assert summary["winner"] is None
        assert summary["recent_events"][-1] == "Setup complete, play begins"
        assert len(summary["recent_events"]) == 5

    def test_unsubscribe(self, engine: GameEngine):
        seen = []
        listener = seen.append
        engine.subscribe(listener)
        engine.step(engine.get_valid_actions()[0])
        engine.unsubscribe(listener)
        count = len(seen)
        engine.step(engine.get_valid_actions()[0])
        assert len(seen) == count > 0

    def test_queries(self, playing_engine: GameEngine):
        engine = playing_engine
        player = engine.get_current_player()
        side = engine.board.get_side_by_key(player.road_keys[0])
        assert engine.get_road_length(side, player.player_id) >= 1
        assert engine.get_longest_road_length(player.player_id) >= 1
        assert len(engine.get_valid_city_corners()) == 2
        for tile in engine.get_producing_tiles(8):
            assert tile.marker.value == 8
