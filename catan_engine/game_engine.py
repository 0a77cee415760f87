"""Main game engine for the hex settlement game.

The GameEngine is the primary interface for playing the game. It provides:
- add_player() / start_game(): register players and build the board
- place_settlement() / place_city() / place_road() / roll_dice() /
  end_turn() / move_robber(): the mutation surface
- step(): execute an Action intent and report the outcome
- get_valid_actions(): legal intents for the current player

Rule violations never raise: mutations return None/False, the reason is
logged and appended to the event log. Programming errors (unknown players,
entities from another board, unknown keys) raise.
"""

from __future__ import annotations

import copy
import random
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Optional

from catan_core.board import Board, Corner, Side, Tile
from catan_core.config import GameConfig
from catan_core.constants import Phase, PieceType, ROBBER_ROLL, INITIAL_TURN_NUMBER
from catan_core.game_state import GameState, GameEvent
from catan_core.logging_config import get_logger
from catan_core.pieces import Settlement, City, Road
from catan_core.player import Player
from catan_data.generator import BoardGenerator

from .phase_machine import PhaseMachine
from .placement import PlacementRules
from .resolvers.building import BuildingResolver, BuildResult
from .resolvers.longest_road import LongestRoadResolver
from .resolvers.production import ProductionResolver
from .resolvers.robber import RobberResolver, RobberResult
from .resolvers.scoring import ScoringResolver
from .setup import SetupManager


logger = get_logger("game_engine")

EventListener = Callable[[GameEvent], None]


class ActionType(Enum):
    """Types of intents a player can submit."""

    PLACE_SETTLEMENT = "place_settlement"
    PLACE_CITY = "place_city"
    PLACE_ROAD = "place_road"
    ROLL_DICE = "roll_dice"
    END_TURN = "end_turn"
    MOVE_ROBBER = "move_robber"


@dataclass
class Action:
    """Represents an action to be executed.

    Attributes:
        action_type: The type of action.
        player_id: The player taking the action.
        params: Canonical keys for the target ("corner", "side" or "tile").
    """

    action_type: ActionType
    player_id: int
    params: dict[str, Any]

    def __str__(self) -> str:
        return f"Action({self.action_type.value}, player={self.player_id}, params={self.params})"


@dataclass
class StepResult:
    """Result of executing a step in the game.

    Attributes:
        success: Whether the action was executed successfully.
        state: The game state after the action.
        done: Whether the game has ended.
        info: Additional information about the step.
    """

    success: bool
    state: GameState
    done: bool
    info: dict[str, Any]


class GameEngine:
    """Main engine for playing the game.

    Usage:
        engine = GameEngine(GameConfig(seed=42))
        for name in ("Ann", "Bo", "Cy"):
            engine.add_player(name)
        engine.start_game()

        while not engine.is_game_over():
            actions = engine.get_valid_actions()
            action = select_action(actions)
            result = engine.step(action)
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        rng: Optional[random.Random] = None,
    ):
        """Initialize the game engine.

        Args:
            config: Game settings (defaults used if None).
            rng: Random source for board generation and dice. Built from
                config.seed if None.

        Raises:
            ValueError: If the config is invalid.
        """
        self.config = config if config is not None else GameConfig()
        errors = self.config.validate()
        if errors:
            raise ValueError(f"Invalid game config: {'; '.join(errors)}")

        self.rng = rng if rng is not None else self.config.make_rng()
        self._listeners: list[EventListener] = []
        self.reset()

    def reset(self, board: Optional[Board] = None) -> GameState:
        """Discard the current game and wait for players again.

        Args:
            board: Board to play on; regenerated when the game starts.

        Returns:
            The fresh game state.
        """
        self._state = GameState.create_initial_state(board)
        self._phase_machine = PhaseMachine(initial_phase=Phase.WAITING)
        self._setup_manager: Optional[SetupManager] = None
        self._wire_resolvers()
        return self._state

    def _wire_resolvers(self) -> None:
        state = self._state
        self._rules = PlacementRules(state.board)
        self._builder = BuildingResolver(state)
        self._production = ProductionResolver(state)
        self._robber = RobberResolver(state)
        self._longest_road = LongestRoadResolver(state)
        self._scoring = ScoringResolver(state, target=self.config.target_victory_points)

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def board(self) -> Board:
        return self._state.board

    @property
    def phase(self) -> Phase:
        return self._state.phase

    def is_game_over(self) -> bool:
        return self._phase_machine.is_game_over()

    def get_winner(self) -> Optional[Player]:
        return self._state.get_winner()

    def get_current_player(self) -> Player:
        return self._state.get_current_player()

    # -------------------------------------------------------------------------
    # Events
    # -------------------------------------------------------------------------

    def subscribe(self, listener: EventListener) -> None:
        """Register a callback invoked with every new GameEvent."""
        self._listeners.append(listener)

    def unsubscribe(self, listener: EventListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _log(self, message: str, player_id: Optional[int] = None, kind: str = "info") -> GameEvent:
        event = self._state.record_event(message, player_id=player_id, kind=kind)
        logger.info(
            "game_event",
            kind=kind,
            turn=event.turn,
            phase=event.phase.value,
            player_id=player_id,
            message=message,
        )
        for listener in list(self._listeners):
            listener(event)
        return event

    def _reject(self, reason: str, player_id: Optional[int] = None) -> None:
        self._log(reason, player_id=player_id, kind="rejected")

    def get_events(self) -> list[GameEvent]:
        return list(self._state.events)

    # -------------------------------------------------------------------------
    # Game Initialization
    # -------------------------------------------------------------------------

    def add_player(self, name: str = "", color: str = "") -> Optional[Player]:
        """Register a player.

        Returns:
            The new player, or None if the game already started or is full.
        """
        if not self._phase_machine.is_waiting():
            self._reject(f"Cannot add players during {self.phase.value}")
            return None
        if self._state.num_players() >= self.config.max_players:
            self._reject(f"Game is full ({self.config.max_players} players)")
            return None

        player = self._state.add_player(name=name, color=color)
        self._log(f"{player.name} joined the game", player_id=player.player_id, kind="player_joined")
        return player

    def generate_board(self) -> Board:
        """Regenerate the board in place (topology, terrain, markers, robber).

        Raises:
            RuntimeError: If called after the game started.
        """
        if not self._phase_machine.is_waiting():
            raise RuntimeError("The board can only be regenerated before the game starts")
        return BoardGenerator(rng=self.rng).generate(self._state.board)

    def start_game(self) -> bool:
        """Generate the board and enter the setup phase.

        Returns:
            True if the game started, False if not enough players or
            already started.
        """
        check = self._phase_machine.can_start(self._state.num_players(), self.config.min_players)
        if not check.success:
            self._reject(check.reason)
            return False

        self.generate_board()
        self._transition_to_phase(Phase.SETUP)
        self._setup_manager = SetupManager(self._state)
        self._setup_manager.start()
        self._log(
            f"Game started with {self._state.num_players()} players",
            kind="game_started",
        )
        return True

    def _transition_to_phase(self, new_phase: Phase) -> None:
        result = self._phase_machine.transition_to(new_phase)
        if not result.success:
            raise RuntimeError(result.reason)
        self._state.set_phase(new_phase)

    # -------------------------------------------------------------------------
    # Placement
    # -------------------------------------------------------------------------

    def _acting_player(self, player_id: Optional[int], action: str) -> Optional[Player]:
        """Resolve the player performing an action during setup or play.

        Raises:
            ValueError: If player_id does not name a registered player.
        """
        if self.phase not in (Phase.SETUP, Phase.PLAYING):
            self._reject(f"Cannot {action} during {self.phase.value}", player_id=player_id)
            return None

        current = self._state.get_current_player()
        if player_id is None:
            return current
        player = self._state.get_player(player_id)
        if player is not current:
            self._reject(f"It is not {player.name}'s turn", player_id=player_id)
            return None
        return player

    def _check_build_window(self, player: Player) -> bool:
        turn = self._state.turn
        if not turn.has_rolled:
            self._reject(f"{player.name} must roll before building", player_id=player.player_id)
            return False
        if turn.robber_pending:
            self._reject(f"{player.name} must move the robber first", player_id=player.player_id)
            return False
        return True

    def place_settlement(self, corner: Corner, player_id: Optional[int] = None) -> Optional[Settlement]:
        """Place a settlement for the current player.

        Returns:
            The settlement, or None if the placement is not allowed.
        """
        player = self._acting_player(player_id, "place a settlement")
        if player is None:
            return None

        if self._phase_machine.is_setup_phase():
            result = self._setup_manager.place_settlement(player.player_id, corner)
        else:
            if not self._check_build_window(player):
                return None
            result = self._builder.place_settlement(player.player_id, corner)

        if not self._accept(result, player):
            return None

        self._log(f"{player.name} built a settlement at {corner.key}",
                  player_id=player.player_id, kind="settlement_placed")
        if self._setup_manager is not None and self._setup_manager.last_grant:
            granted = ", ".join(
                f"{amount} {res.value}" for res, amount in self._setup_manager.last_grant.items()
            )
            self._log(f"{player.name} received {granted}",
                      player_id=player.player_id, kind="initial_resources")
        self._after_placement()
        return result.piece

    def place_city(self, corner: Corner, player_id: Optional[int] = None) -> Optional[City]:
        """Upgrade one of the current player's settlements to a city.

        Returns:
            The city, or None if the upgrade is not allowed.
        """
        player = self._acting_player(player_id, "build a city")
        if player is None:
            return None
        if self._phase_machine.is_setup_phase():
            self._reject("Cities cannot be built during setup", player_id=player.player_id)
            return None
        if not self._check_build_window(player):
            return None

        result = self._builder.place_city(player.player_id, corner)
        if not self._accept(result, player):
            return None

        self._log(f"{player.name} upgraded {corner.key} to a city",
                  player_id=player.player_id, kind="city_placed")
        self._after_placement()
        return result.piece

    def place_road(self, side: Side, player_id: Optional[int] = None) -> Optional[Road]:
        """Build a road for the current player.

        Returns:
            The road, or None if the placement is not allowed.
        """
        player = self._acting_player(player_id, "build a road")
        if player is None:
            return None

        if self._phase_machine.is_setup_phase():
            result = self._setup_manager.place_road(player.player_id, side)
        else:
            if not self._check_build_window(player):
                return None
            result = self._builder.place_road(player.player_id, side)

        if not self._accept(result, player):
            return None

        self._log(f"{player.name} built a road at {side.key}",
                  player_id=player.player_id, kind="road_placed")
        self._after_placement()
        return result.piece

    def _accept(self, result: BuildResult, player: Player) -> bool:
        if not result.success:
            self._reject(result.reason, player_id=player.player_id)
        return result.success

    def _after_placement(self) -> None:
        road = self._longest_road.update(self.config.longest_road_minimum)
        if road.changed:
            if road.holder_id is None:
                self._log("Nobody holds the longest road", kind="longest_road")
            else:
                holder = self._state.get_player(road.holder_id)
                self._log(
                    f"{holder.name} holds the longest road ({road.lengths[road.holder_id]})",
                    player_id=holder.player_id,
                    kind="longest_road",
                )
        self._check_winner()

    def _check_winner(self) -> Optional[Player]:
        winner = self._scoring.find_winner()
        if winner is None or not self._phase_machine.is_playing():
            return None
        self._state.turn.winner_id = winner.player_id
        self._transition_to_phase(Phase.FINISHED)
        self._log(f"{winner.name} wins with {winner.score} points",
                  player_id=winner.player_id, kind="game_won")
        return winner

    # -------------------------------------------------------------------------
    # Turn flow
    # -------------------------------------------------------------------------

    def roll_dice(self) -> Optional[tuple[int, int]]:
        """Roll two dice for the current player.

        A 7 makes every player over the discard threshold discard half and
        requires the robber to move; any other total triggers production.

        Returns:
            The two dice, or None if rolling is not allowed now.
        """
        if not self._phase_machine.is_playing():
            self._reject(f"Cannot roll dice during {self.phase.value}")
            return None
        turn = self._state.turn
        player = self._state.get_current_player()
        if turn.has_rolled:
            self._reject(f"{player.name} already rolled this turn", player_id=player.player_id)
            return None

        dice = (self.rng.randint(1, 6), self.rng.randint(1, 6))
        total = sum(dice)
        turn.has_rolled = True
        turn.last_roll = dice
        self._log(f"{player.name} rolled {dice[0]} + {dice[1]} = {total}",
                  player_id=player.player_id, kind="dice_rolled")

        if total == ROBBER_ROLL:
            discards = self._robber.resolve_discards(self.config.discard_threshold)
            for pid, cards in discards.discards.items():
                self._log(
                    f"{self._state.get_player(pid).name} discarded {sum(cards.values())} cards",
                    player_id=pid,
                    kind="discarded",
                )
            turn.robber_pending = True
        else:
            production = self._production.resolve(total)
            for pid, hand in production.gains.items():
                gained = ", ".join(f"{amount} {res.value}" for res, amount in hand.items())
                self._log(f"{self._state.get_player(pid).name} received {gained}",
                          player_id=pid, kind="production")
        return dice

    def move_robber(self, tile: Tile, player_id: Optional[int] = None) -> Optional[RobberResult]:
        """Move the robber after a 7.

        Returns:
            RobberResult listing the steal targets, or None if not allowed.

        Raises:
            ValueError: If the tile is not on this board.
        """
        player = self._acting_player(player_id, "move the robber")
        if player is None:
            return None
        if not self._state.turn.robber_pending:
            self._reject("The robber can only move after a 7", player_id=player.player_id)
            return None
        if not self.board.contains(tile):
            raise ValueError(f"Tile {tile.key} is not on this board")

        result = self._robber.move_robber(tile, player_id=player.player_id)
        if not result.success:
            self._reject(result.reason, player_id=player.player_id)
            return None

        self._state.turn.robber_pending = False
        self._log(f"{player.name} moved the robber to {tile.key}",
                  player_id=player.player_id, kind="robber_moved")
        return result

    def end_turn(self) -> bool:
        """End the current player's turn (or setup visit).

        Returns:
            True if the turn ended, False if it cannot end yet.
        """
        if self._phase_machine.is_setup_phase():
            return self._end_setup_visit()
        if not self._phase_machine.is_playing():
            self._reject(f"Cannot end turn during {self.phase.value}")
            return False

        turn = self._state.turn
        player = self._state.get_current_player()
        if not turn.has_rolled:
            self._reject(f"{player.name} must roll before ending the turn", player_id=player.player_id)
            return False
        if turn.robber_pending:
            self._reject(f"{player.name} must move the robber first", player_id=player.player_id)
            return False

        turn.reset_for_new_turn()
        self._state.advance_current_player()
        turn.turn_number += 1
        next_player = self._state.get_current_player()
        self._log(f"Turn {turn.turn_number}: {next_player.name} to play",
                  player_id=next_player.player_id, kind="turn_started")
        self._check_winner()
        return True

    def _end_setup_visit(self) -> bool:
        player = self._state.get_current_player()
        if not self._setup_manager.is_visit_complete():
            self._reject(
                f"{player.name} must place a settlement and a road first",
                player_id=player.player_id,
            )
            return False

        if self._phase_machine.should_end_setup(self._state):
            self._setup_manager.advance()
            self._finish_setup()
            return True

        self._setup_manager.advance()
        next_player = self._state.get_current_player()
        self._log(f"Setup: {next_player.name} to place", player_id=next_player.player_id,
                  kind="setup_turn")
        return True

    def _finish_setup(self) -> None:
        turn = self._state.turn
        self._transition_to_phase(Phase.PLAYING)
        turn.current_player_idx = 0
        turn.turn_number = INITIAL_TURN_NUMBER
        turn.reset_for_new_turn()
        self._log("Setup complete, play begins", player_id=0, kind="play_started")
        self._check_winner()

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def get_valid_settlement_corners(self, player_id: Optional[int] = None) -> list[Corner]:
        """Corners where a settlement may go.

        Without a player, only the occupancy and distance rules apply.
        During play, with a player, the corner must also touch their roads.
        """
        if self._phase_machine.is_setup_phase() or player_id is None:
            return self._rules.get_valid_settlement_corners()
        return self._rules.get_valid_settlement_corners(player_id, require_road=True)

    def get_valid_road_sides(self, player_id: Optional[int] = None) -> list[Side]:
        """Sides where the player (default: current) may build a road."""
        if player_id is None:
            player_id = self._state.get_current_player().player_id
        if self._phase_machine.is_setup_phase():
            return self._setup_manager.get_valid_road_sides(player_id)
        return self._rules.get_valid_road_sides(player_id)

    def get_valid_city_corners(self, player_id: Optional[int] = None) -> list[Corner]:
        if player_id is None:
            player_id = self._state.get_current_player().player_id
        return self._rules.get_valid_city_corners(player_id)

    def get_producing_tiles(self, roll: int) -> list[Tile]:
        return self._production.get_producing_tiles(roll)

    def get_adjacent_players(self, tile: Tile) -> list[int]:
        return self._robber.get_adjacent_players(tile)

    def get_road_length(self, side: Side, player_id: int) -> int:
        """Longest path of the player's roads starting at a side."""
        return self._longest_road.road_length_from(side, player_id)

    def get_longest_road_length(self, player_id: int) -> int:
        return self._longest_road.longest_road_length(player_id)

    def _is_setup_visitor(self, player_id: Optional[int]) -> bool:
        return player_id is None or player_id == self._state.get_current_player().player_id

    def can_place_settlement(self, corner: Corner, player_id: Optional[int] = None) -> bool:
        """Whether a settlement may go on a corner.

        During setup this also applies the current visit's limits, so only
        the visiting player's first settlement of the visit qualifies.
        """
        if self._phase_machine.is_setup_phase():
            if not self._is_setup_visitor(player_id):
                return False
            visitor = self._state.get_current_player().player_id
            if not self._setup_manager.validate_settlement(visitor).valid:
                return False
            return self._rules.can_place_settlement(corner)
        require_road = self._phase_machine.is_playing() and player_id is not None
        return self._rules.can_place_settlement(corner, player_id, require_road=require_road)

    def can_place_city(self, corner: Corner, player_id: int) -> bool:
        return self._rules.can_place_city(corner, player_id)

    def can_place_road(self, side: Side, player_id: int) -> bool:
        """Whether the player may build a road on a side.

        During setup the road must follow the visit's settlement and touch it.
        """
        if self._phase_machine.is_setup_phase():
            if not self._is_setup_visitor(player_id):
                return False
            if not self._setup_manager.validate_road(player_id).valid:
                return False
            return self._rules.can_place_road(
                side, player_id, anchor=self._state.turn.setup_settlement_key
            )
        return self._rules.can_place_road(side, player_id)

    # -------------------------------------------------------------------------
    # Action Execution
    # -------------------------------------------------------------------------

    def step(self, action: Action) -> StepResult:
        """Execute an action intent.

        Args:
            action: The action to execute.

        Returns:
            StepResult with the outcome of the action.
        """
        if not self._is_action_valid(action, self.get_valid_actions()):
            self._reject(f"Invalid action: {action}", player_id=action.player_id)
            return StepResult(
                success=False,
                state=self.state,
                done=self.is_game_over(),
                info={"error": f"Invalid action: {action}"},
            )

        info: dict[str, Any] = {"action": str(action)}
        board = self.board
        kind = action.action_type

        if kind == ActionType.PLACE_SETTLEMENT:
            outcome = self.place_settlement(
                board.get_corner_by_key(action.params["corner"]), action.player_id
            )
        elif kind == ActionType.PLACE_CITY:
            outcome = self.place_city(
                board.get_corner_by_key(action.params["corner"]), action.player_id
            )
        elif kind == ActionType.PLACE_ROAD:
            outcome = self.place_road(
                board.get_side_by_key(action.params["side"]), action.player_id
            )
        elif kind == ActionType.ROLL_DICE:
            outcome = self.roll_dice()
            if outcome is not None:
                info["roll"] = outcome
        elif kind == ActionType.END_TURN:
            outcome = self.end_turn() or None
        else:
            outcome = self.move_robber(
                board.get_tile_by_key(action.params["tile"]), action.player_id
            )
            if outcome is not None:
                info["victims"] = outcome.victims

        if outcome is None:
            info["error"] = self._state.events[-1].message
        info["phase"] = self.phase.value
        info["turn"] = self._state.turn.turn_number

        return StepResult(
            success=outcome is not None,
            state=self.state,
            done=self.is_game_over(),
            info=info,
        )

    def _is_action_valid(self, action: Action, valid_actions: list[Action]) -> bool:
        for valid in valid_actions:
            if (
                action.action_type == valid.action_type
                and action.player_id == valid.player_id
                and action.params == valid.params
            ):
                return True
        return False

    def get_valid_actions(self) -> list[Action]:
        """Get all legal actions for the current player."""
        if self.phase == Phase.SETUP:
            return self._get_valid_setup_actions()
        if self.phase == Phase.PLAYING:
            return self._get_valid_playing_actions()
        return []

    def _get_valid_setup_actions(self) -> list[Action]:
        player_id = self._state.turn.current_player_idx
        if self._setup_manager.is_visit_complete():
            return [Action(ActionType.END_TURN, player_id, {})]
        if self._state.turn.setup_settlement_key is None:
            return [
                Action(ActionType.PLACE_SETTLEMENT, player_id, {"corner": corner.key})
                for corner in self._setup_manager.get_valid_settlement_corners()
            ]
        return [
            Action(ActionType.PLACE_ROAD, player_id, {"side": side.key})
            for side in self._setup_manager.get_valid_road_sides(player_id)
        ]

    def _get_valid_playing_actions(self) -> list[Action]:
        turn = self._state.turn
        player = self._state.get_current_player()
        player_id = player.player_id

        if not turn.has_rolled:
            return [Action(ActionType.ROLL_DICE, player_id, {})]

        if turn.robber_pending:
            return [
                Action(ActionType.MOVE_ROBBER, player_id, {"tile": tile.key})
                for tile in self.board.get_tiles()
                if not tile.has_robber
            ]

        actions: list[Action] = []
        if player.has_supply(PieceType.SETTLEMENT) and player.can_afford_piece(PieceType.SETTLEMENT):
            actions.extend(
                Action(ActionType.PLACE_SETTLEMENT, player_id, {"corner": corner.key})
                for corner in self._rules.get_valid_settlement_corners(player_id, require_road=True)
            )
        if player.has_supply(PieceType.CITY) and player.can_afford_piece(PieceType.CITY):
            actions.extend(
                Action(ActionType.PLACE_CITY, player_id, {"corner": corner.key})
                for corner in self._rules.get_valid_city_corners(player_id)
            )
        if player.has_supply(PieceType.ROAD) and player.can_afford_piece(PieceType.ROAD):
            actions.extend(
                Action(ActionType.PLACE_ROAD, player_id, {"side": side.key})
                for side in self._rules.get_valid_road_sides(player_id)
            )
        actions.append(Action(ActionType.END_TURN, player_id, {}))
        return actions

    # -------------------------------------------------------------------------
    # Utility Methods
    # -------------------------------------------------------------------------

    def clone(self) -> GameEngine:
        """Create a deep copy of the engine (listeners are not copied)."""
        new_engine = GameEngine(config=self.config, rng=copy.deepcopy(self.rng))
        new_engine._state = self._state.clone()
        new_engine._phase_machine = PhaseMachine(initial_phase=self._state.phase)
        new_engine._wire_resolvers()
        if self._setup_manager is not None:
            new_engine._setup_manager = SetupManager(new_engine._state)
        return new_engine

    def get_game_summary(self) -> dict[str, Any]:
        """Get a summary of the current game state for display."""
        turn = self._state.turn
        winner = self.get_winner()
        return {
            "phase": self.phase.value,
            "turn": turn.turn_number,
            "current_player": turn.current_player_idx if self._state.players else None,
            "setup_round": turn.setup_round if self.phase == Phase.SETUP else None,
            "dice": list(turn.last_roll) if turn.last_roll else None,
            "dice_total": turn.last_total,
            "has_rolled": turn.has_rolled,
            "robber_pending": turn.robber_pending,
            "robber_tile": self.board.robber.tile_key,
            "players": [
                {
                    "id": p.player_id,
                    "name": p.name,
                    "color": p.color,
                    "score": p.score,
                    "resources": p.total_resources(),
                    "settlements": len(p.settlement_keys),
                    "cities": len(p.city_keys),
                    "roads": len(p.road_keys),
                    "longest_road": p.longest_road_length,
                    "has_longest_road": p.has_longest_road,
                }
                for p in self._state.players
            ],
            "game_over": self.is_game_over(),
            "winner": winner.player_id if winner else None,
            "recent_events": [event.message for event in self._state.get_recent_events(5)],
        }

    def __str__(self) -> str:
        return f"GameEngine(phase={self.phase.value}, turn={self._state.turn.turn_number})"
