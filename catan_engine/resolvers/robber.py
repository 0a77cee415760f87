"""Robber resolver for the hex settlement game engine.

Handles the two consequences of a 7:
- Every player holding more cards than the discard threshold discards half
  (rounded down)
- The robber moves to another tile; the owners of buildings touching that
  tile become steal targets
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, TYPE_CHECKING

from catan_core.board import Tile
from catan_core.constants import Resource, DISCARD_THRESHOLD
from catan_core.coordinates import TileKey

if TYPE_CHECKING:
    from catan_core.game_state import GameState


@dataclass
class RobberResult:
    """Result of moving the robber.

    Attributes:
        success: Whether the robber moved.
        tile_key: Destination tile.
        previous_tile_key: Tile the robber left.
        victims: Owners of buildings touching the destination, excluding
            the moving player.
        reason: Description of why the move failed (if it did).
    """

    success: bool
    tile_key: Optional[TileKey] = None
    previous_tile_key: Optional[TileKey] = None
    victims: list[int] = field(default_factory=list)
    reason: Optional[str] = None


@dataclass
class DiscardResult:
    """Cards discarded after a 7, per player id."""

    discards: dict[int, dict[Resource, int]] = field(default_factory=dict)

    def total_for(self, player_id: int) -> int:
        return sum(self.discards.get(player_id, {}).values())


class RobberResolver:
    """Moves the robber and applies the discard rule."""

    def __init__(self, state: GameState):
        """Initialize the resolver with the game state.

        Args:
            state: The current game state.
        """
        self.state = state

    def get_adjacent_players(self, tile: Tile, exclude: Optional[int] = None) -> list[int]:
        """Distinct owners of buildings touching a tile.

        Args:
            tile: The tile to inspect.
            exclude: Player id to leave out (usually the robber's mover).
        """
        return [
            owner
            for owner in self.state.board.get_adjacent_building_owners(tile)
            if owner != exclude
        ]

    def move_robber(self, tile: Tile, player_id: Optional[int] = None) -> RobberResult:
        """Move the robber to a different tile.

        Args:
            tile: Destination tile.
            player_id: The moving player, excluded from the victims.
        """
        board = self.state.board
        if board.robber.is_blocking(tile.key):
            return RobberResult(
                success=False,
                reason=f"Robber is already on tile {tile.key}",
            )

        previous = board.move_robber(tile)
        return RobberResult(
            success=True,
            tile_key=tile.key,
            previous_tile_key=previous.key if previous else None,
            victims=self.get_adjacent_players(tile, exclude=player_id),
        )

    def get_players_over_threshold(self, threshold: int = DISCARD_THRESHOLD) -> list[int]:
        """Players holding more cards than the threshold."""
        return [
            player.player_id
            for player in self.state.players
            if player.total_resources() > threshold
        ]

    def resolve_discards(self, threshold: int = DISCARD_THRESHOLD) -> DiscardResult:
        """Make every player over the threshold discard half their hand."""
        result = DiscardResult()
        for player_id in self.get_players_over_threshold(threshold):
            result.discards[player_id] = self.state.get_player(player_id).discard_half()
        return result
