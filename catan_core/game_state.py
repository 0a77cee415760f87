"""Game state for the hex settlement game engine.

GameState is the single source of truth for a game: the board, the players
in seat order, the phase, per-turn bookkeeping and the append-only event
log. It provides cloning, serialization and hashing for snapshots.
"""

from __future__ import annotations

import copy
import hashlib
import json
import time
from dataclasses import dataclass, field
from typing import Optional, Any

from .constants import Phase, Resource, INITIAL_TURN_NUMBER
from .board import Board
from .coordinates import CornerKey, SideKey
from .player import Player


@dataclass
class TurnState:
    """Per-turn and setup bookkeeping.

    Attributes:
        current_player_idx: Index of the player whose turn it is.
        turn_number: Turn counter (starts when play begins).
        setup_round: Setup round (1 forward, 2 backward).
        setup_direction: +1 in the forward round, -1 in the backward round.
        setup_settlement_key: Settlement placed during the current setup visit.
        setup_road_key: Road placed during the current setup visit.
        has_rolled: Whether the current player rolled this turn.
        last_roll: The two dice of the most recent roll.
        robber_pending: Whether a 7 was rolled and the robber must move.
        winner_id: Player who won, once the game is finished.
    """

    current_player_idx: int = 0
    turn_number: int = 0
    setup_round: int = 1
    setup_direction: int = 1
    setup_settlement_key: Optional[CornerKey] = None
    setup_road_key: Optional[SideKey] = None
    has_rolled: bool = False
    last_roll: Optional[tuple[int, int]] = None
    robber_pending: bool = False
    winner_id: Optional[int] = None

    @property
    def last_total(self) -> Optional[int]:
        """Sum of the most recent roll."""
        if self.last_roll is None:
            return None
        return sum(self.last_roll)

    def reset_setup_visit(self) -> None:
        self.setup_settlement_key = None
        self.setup_road_key = None

    def reset_for_new_turn(self) -> None:
        self.has_rolled = False
        self.robber_pending = False


@dataclass
class GameEvent:
    """One entry of the game log.

    Attributes:
        turn: Turn number when the event happened.
        phase: Phase when the event happened.
        player_id: Player the event concerns, if any.
        message: Human-readable description.
        kind: Short machine-readable category (e.g. "settlement_placed").
        timestamp: Wall-clock time the event was recorded.
    """

    turn: int
    phase: Phase
    player_id: Optional[int]
    message: str
    kind: str = "info"
    timestamp: float = field(default_factory=time.time)

    def to_dict(self) -> dict[str, Any]:
        return {
            "turn": self.turn,
            "phase": self.phase.value,
            "player_id": self.player_id,
            "message": self.message,
            "kind": self.kind,
            "timestamp": self.timestamp,
        }


@dataclass
class GameState:
    """The complete game state.

    Attributes:
        board: The board arena with all occupancy.
        players: Players in seat order; player_id equals list index.
        phase: Current game phase.
        turn: Per-turn and setup bookkeeping.
        events: Append-only game log.
    """

    board: Board
    players: list[Player] = field(default_factory=list)
    phase: Phase = Phase.WAITING
    turn: TurnState = field(default_factory=TurnState)
    events: list[GameEvent] = field(default_factory=list)

    @classmethod
    def create_initial_state(cls, board: Optional[Board] = None) -> GameState:
        """Create an empty game waiting for players."""
        return cls(board=board if board is not None else Board())

    # -------------------------------------------------------------------------
    # Player access methods
    # -------------------------------------------------------------------------

    def add_player(self, name: str = "", color: str = "") -> Player:
        """Append a new player in the next seat."""
        player = Player(player_id=len(self.players), name=name, color=color)
        self.players.append(player)
        return player

    def get_player(self, player_id: int) -> Player:
        """Get a player by ID.

        Raises:
            ValueError: If player_id is invalid.
        """
        if not 0 <= player_id < len(self.players):
            raise ValueError(f"Invalid player ID: {player_id}")
        return self.players[player_id]

    def get_current_player(self) -> Player:
        """Get the current player.

        Raises:
            ValueError: If there are no players.
        """
        if not self.players:
            raise ValueError("No players in the game")
        return self.players[self.turn.current_player_idx]

    def num_players(self) -> int:
        return len(self.players)

    def advance_current_player(self, step: int = 1) -> None:
        """Move to the next player cyclically (step may be negative)."""
        self.turn.current_player_idx = (
            (self.turn.current_player_idx + step) % len(self.players)
        )

    # -------------------------------------------------------------------------
    # Phase management
    # -------------------------------------------------------------------------

    def set_phase(self, phase: Phase) -> None:
        self.phase = phase

    def is_setup_phase(self) -> bool:
        return self.phase == Phase.SETUP

    def is_playing(self) -> bool:
        return self.phase == Phase.PLAYING

    def is_game_over(self) -> bool:
        return self.phase == Phase.FINISHED

    def get_winner(self) -> Optional[Player]:
        if self.turn.winner_id is None:
            return None
        return self.players[self.turn.winner_id]

    # -------------------------------------------------------------------------
    # Event log
    # -------------------------------------------------------------------------

    def record_event(
        self,
        message: str,
        player_id: Optional[int] = None,
        kind: str = "info",
    ) -> GameEvent:
        """Append an event to the log."""
        event = GameEvent(
            turn=self.turn.turn_number,
            phase=self.phase,
            player_id=player_id,
            message=message,
            kind=kind,
        )
        self.events.append(event)
        return event

    def get_recent_events(self, count: int = 10) -> list[GameEvent]:
        return self.events[-count:]

    # -------------------------------------------------------------------------
    # Cloning and serialization
    # -------------------------------------------------------------------------

    def clone(self) -> GameState:
        """Create a deep copy of the game state."""
        return copy.deepcopy(self)

    def to_dict(self) -> dict[str, Any]:
        """Serialize the game state to a dictionary.

        The board is serialized by occupancy only (buildings, roads, robber,
        terrain and markers); the topology is implied by the tile keys.
        """
        return {
            "phase": self.phase.value,
            "turn": {
                "current_player_idx": self.turn.current_player_idx,
                "turn_number": self.turn.turn_number,
                "setup_round": self.turn.setup_round,
                "setup_direction": self.turn.setup_direction,
                "has_rolled": self.turn.has_rolled,
                "last_roll": list(self.turn.last_roll) if self.turn.last_roll else None,
                "robber_pending": self.turn.robber_pending,
                "winner_id": self.turn.winner_id,
            },
            "players": [
                {
                    "player_id": p.player_id,
                    "name": p.name,
                    "color": p.color,
                    "resources": {res.value: count for res, count in p.resources.items()},
                    "supply": {kind.value: count for kind, count in p.supply.items()},
                    "settlements": list(p.settlement_keys),
                    "cities": list(p.city_keys),
                    "roads": list(p.road_keys),
                    "victory_point_cards": p.victory_point_cards,
                    "knights_played": p.knights_played,
                    "has_longest_road": p.has_longest_road,
                    "has_largest_army": p.has_largest_army,
                    "longest_road_length": p.longest_road_length,
                    "score": p.score,
                }
                for p in self.players
            ],
            "board_state": self._serialize_board_state(),
            "event_count": len(self.events),
        }

    def _serialize_board_state(self) -> dict[str, Any]:
        board = self.board
        return {
            "tiles": {
                key: {
                    "terrain": tile.terrain.value,
                    "marker": tile.marker.value if tile.marker else None,
                }
                for key, tile in board.tiles.items()
            },
            "buildings": {
                key: {
                    "type": corner.building.piece_type.value,
                    "owner": corner.building.owner_id,
                }
                for key, corner in board.corners.items()
                if corner.building is not None
            },
            "roads": {
                key: side.road.owner_id
                for key, side in board.sides.items()
                if side.road is not None
            },
            "robber": board.robber.tile_key,
        }

    def state_hash(self) -> str:
        """Compute a hash of the serialized game state."""
        state_json = json.dumps(self.to_dict(), sort_keys=True)
        return hashlib.sha256(state_json.encode()).hexdigest()

    # -------------------------------------------------------------------------
    # Validation
    # -------------------------------------------------------------------------

    def validate(self) -> list[str]:
        """Validate the game state for consistency.

        Returns:
            List of validation error messages (empty if valid).
        """
        errors: list[str] = []

        for i, player in enumerate(self.players):
            if player.player_id != i:
                errors.append(f"Player at index {i} has ID {player.player_id} (expected {i})")
            for resource in Resource:
                if player.resources.get(resource, 0) < 0:
                    errors.append(f"Player {i} has negative {resource.value}")

        if self.players and not 0 <= self.turn.current_player_idx < len(self.players):
            errors.append(f"Invalid current_player_idx: {self.turn.current_player_idx}")

        # Buildings and roads must agree with the players' ledgers
        for key, corner in self.board.corners.items():
            building = corner.building
            if building is None:
                continue
            if building.corner_key != key:
                errors.append(f"Building at {key} records location {building.corner_key}")
            if not 0 <= building.owner_id < len(self.players):
                errors.append(f"Building at {key} has unknown owner {building.owner_id}")
            elif not self.players[building.owner_id].owns_corner(key):
                errors.append(f"Building at {key} missing from player {building.owner_id}")

        for key, side in self.board.sides.items():
            road = side.road
            if road is None:
                continue
            if not 0 <= road.owner_id < len(self.players):
                errors.append(f"Road at {key} has unknown owner {road.owner_id}")
            elif key not in self.players[road.owner_id].road_keys:
                errors.append(f"Road at {key} missing from player {road.owner_id}")

        robber_tiles = [key for key, tile in self.board.tiles.items() if tile.has_robber]
        if len(robber_tiles) > 1:
            errors.append(f"Robber flag set on several tiles: {robber_tiles}")
        if robber_tiles and robber_tiles[0] != self.board.robber.tile_key:
            errors.append(
                f"Robber at {self.board.robber.tile_key} but flag set on {robber_tiles[0]}"
            )

        return errors

    # -------------------------------------------------------------------------
    # String representation
    # -------------------------------------------------------------------------

    def __str__(self) -> str:
        lines = [
            f"GameState(phase={self.phase.value}, turn={self.turn.turn_number})",
            f"  Current player: {self.turn.current_player_idx}",
            f"  Last roll: {self.turn.last_roll}",
            f"  Players ({len(self.players)}):",
        ]
        for p in self.players:
            lines.append(f"    {p.summary()}")
        lines.append(f"  Events: {len(self.events)}")
        return "\n".join(lines)
