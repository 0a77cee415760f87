"""Longest road resolver for the hex settlement game engine.

A player's road length is the number of sides in the longest simple path
through their own roads. Paths continue through corners that are empty or
hold the player's own building, and stop at corners holding an opponent's
building.

The achievement goes to a player at or above the minimum length. The
current holder keeps it until someone is strictly longer; without a
holder, a unique leader takes it and a tie awards nobody.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, TYPE_CHECKING

from catan_core.board import Side
from catan_core.constants import LONGEST_ROAD_MINIMUM
from catan_core.coordinates import CornerKey, SideKey

if TYPE_CHECKING:
    from catan_core.game_state import GameState


@dataclass
class LongestRoadResult:
    """Result of re-evaluating the longest road.

    Attributes:
        holder_id: Player holding the achievement afterwards.
        previous_holder_id: Player holding it before.
        lengths: Longest road length per player id.
    """

    holder_id: Optional[int]
    previous_holder_id: Optional[int]
    lengths: dict[int, int] = field(default_factory=dict)

    @property
    def changed(self) -> bool:
        return self.holder_id != self.previous_holder_id


class LongestRoadResolver:
    """Computes road lengths and assigns the longest-road achievement."""

    def __init__(self, state: GameState):
        """Initialize the resolver with the game state.

        Args:
            state: The current game state.
        """
        self.state = state

    def road_length_from(self, side: Side, player_id: int) -> int:
        """Length of the longest simple path starting at a side.

        Returns:
            Number of sides in the path (0 if the side is not the player's).
        """
        if not side.is_owned_by(player_id):
            return 0
        visited = {side.key}
        return 1 + max(
            self._extend(corner_key, player_id, visited) for corner_key in side.corner_keys
        )

    def _extend(self, corner_key: CornerKey, player_id: int, visited: set[SideKey]) -> int:
        board = self.state.board
        corner = board.corners[corner_key]
        if corner.is_blocked_for(player_id):
            return 0

        best = 0
        for side_key in corner.side_keys:
            if side_key in visited:
                continue
            side = board.sides[side_key]
            if not side.is_owned_by(player_id):
                continue
            visited.add(side_key)
            length = 1 + self._extend(side.other_corner(corner_key), player_id, visited)
            visited.remove(side_key)
            best = max(best, length)
        return best

    def longest_road_length(self, player_id: int) -> int:
        """The player's longest road over all their sides."""
        player = self.state.get_player(player_id)
        board = self.state.board
        return max(
            (self.road_length_from(board.sides[key], player_id) for key in player.road_keys),
            default=0,
        )

    def get_holder(self) -> Optional[int]:
        for player in self.state.players:
            if player.has_longest_road:
                return player.player_id
        return None

    def update(self, minimum: int = LONGEST_ROAD_MINIMUM) -> LongestRoadResult:
        """Recompute every player's length and reassign the achievement."""
        lengths = {}
        for player in self.state.players:
            player.longest_road_length = self.longest_road_length(player.player_id)
            lengths[player.player_id] = player.longest_road_length

        previous = self.get_holder()
        holder = previous

        if holder is not None:
            held = lengths[holder]
            if held < minimum or any(
                length > held for pid, length in lengths.items() if pid != holder
            ):
                holder = None

        if holder is None and lengths:
            best = max(lengths.values())
            leaders = [pid for pid, length in lengths.items() if length == best]
            if best >= minimum and len(leaders) == 1:
                holder = leaders[0]

        for player in self.state.players:
            player.has_longest_road = player.player_id == holder

        return LongestRoadResult(holder_id=holder, previous_holder_id=previous, lengths=lengths)
