"""Resource production resolver for the hex settlement game engine.

On a dice total V, every tile with marker V that is not desert/sea and not
under the robber pays its resource to each adjacent building: one unit per
settlement, two per city.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from catan_core.board import Corner, Tile
from catan_core.constants import Resource, ROBBER_ROLL
from catan_core.coordinates import TileKey

if TYPE_CHECKING:
    from catan_core.game_state import GameState


@dataclass
class ProductionResult:
    """Result of resolving production for one roll.

    Attributes:
        roll: The dice total.
        producing_tiles: Keys of the tiles that produced.
        gains: Resources handed out, per player id.
    """

    roll: int
    producing_tiles: list[TileKey] = field(default_factory=list)
    gains: dict[int, dict[Resource, int]] = field(default_factory=dict)

    def total_for(self, player_id: int) -> int:
        """Total units the player received."""
        return sum(self.gains.get(player_id, {}).values())


class ProductionResolver:
    """Hands out resources for dice rolls and setup placements."""

    def __init__(self, state: GameState):
        """Initialize the resolver with the game state.

        Args:
            state: The current game state.
        """
        self.state = state

    def get_producing_tiles(self, roll: int) -> list[Tile]:
        """Tiles that produce on this dice total."""
        return self.state.board.get_producing_tiles(roll)

    def compute_yield(self, roll: int) -> ProductionResult:
        """Compute what a roll would hand out, without applying it."""
        result = ProductionResult(roll=roll)
        if roll == ROBBER_ROLL:
            return result

        board = self.state.board
        for tile in self.get_producing_tiles(roll):
            result.producing_tiles.append(tile.key)
            for corner in board.get_tile_corners(tile):
                building = corner.building
                if building is None:
                    continue
                hand = result.gains.setdefault(building.owner_id, {})
                hand[tile.resource] = hand.get(tile.resource, 0) + building.resource_multiplier

        return result

    def resolve(self, roll: int) -> ProductionResult:
        """Hand out resources for a dice total.

        A total of 7 produces nothing.
        """
        result = self.compute_yield(roll)
        for player_id, hand in result.gains.items():
            player = self.state.get_player(player_id)
            for resource, amount in hand.items():
                player.add_resource(resource, amount)
        return result

    def grant_initial_resources(self, player_id: int, corner: Corner) -> dict[Resource, int]:
        """Give one unit per adjacent productive tile (second setup settlement).

        Markers and the robber are ignored.

        Returns:
            The resources granted.
        """
        player = self.state.get_player(player_id)
        granted: dict[Resource, int] = {}
        for tile in self.state.board.get_corner_tiles(corner):
            if not tile.is_productive_terrain():
                continue
            player.add_resource(tile.resource)
            granted[tile.resource] = granted.get(tile.resource, 0) + 1
        return granted
