"""Building resolver for the hex settlement game engine.

Applies settlement, city and road placements once they are legal:
pays the cost (unless the placement is a free setup placement), takes the
piece from the player's supply, creates it on the board and records it in
the player's ledger.

Upgrading a settlement to a city removes the settlement from the corner and
returns it to its owner's supply.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, TYPE_CHECKING

from catan_core.board import Corner, Side
from catan_core.constants import PieceType
from catan_core.coordinates import CornerKey
from catan_core.pieces import Piece, Settlement, City, Road

from catan_engine.placement import PlacementRules, ValidationResult

if TYPE_CHECKING:
    from catan_core.game_state import GameState
    from catan_core.player import Player


@dataclass
class BuildResult:
    """Result of a build attempt.

    Attributes:
        success: Whether the piece was placed.
        piece: The piece created on the board.
        removed: Piece taken off the board (the settlement a city replaced).
        reason: Description of why the build failed (if it did).
    """

    success: bool
    piece: Optional[Piece] = None
    removed: Optional[Piece] = None
    reason: Optional[str] = None

    @classmethod
    def failed(cls, reason: str) -> BuildResult:
        return cls(success=False, reason=reason)


class BuildingResolver:
    """Validates and applies piece placements for a game."""

    def __init__(self, state: GameState):
        """Initialize the resolver with the game state.

        Args:
            state: The current game state.
        """
        self.state = state
        self.rules = PlacementRules(state.board)

    def _check_resources(
        self, player: Player, piece_type: PieceType, free: bool
    ) -> ValidationResult:
        if not player.has_supply(piece_type):
            return ValidationResult(
                valid=False,
                reason=f"Player {player.player_id} has no {piece_type.value} pieces left",
            )
        if not free and not player.can_afford_piece(piece_type):
            return ValidationResult(
                valid=False,
                reason=f"Player {player.player_id} cannot afford a {piece_type.value}",
            )
        return ValidationResult(valid=True)

    def place_settlement(
        self,
        player_id: int,
        corner: Corner,
        setup: bool = False,
    ) -> BuildResult:
        """Place a settlement.

        Args:
            player_id: The building player.
            corner: Target corner.
            setup: Free setup placement (no cost, no road connection needed).

        Returns:
            BuildResult with the new settlement on success.
        """
        player = self.state.get_player(player_id)

        check = self.rules.check_settlement(corner, player_id, require_road=not setup)
        if not check.valid:
            return BuildResult.failed(check.reason)

        check = self._check_resources(player, PieceType.SETTLEMENT, free=setup)
        if not check.valid:
            return BuildResult.failed(check.reason)

        player.pay_for(PieceType.SETTLEMENT, free=setup)
        player.take_piece(PieceType.SETTLEMENT)

        settlement = Settlement(
            piece_id=self.state.board.ids.next_id(),
            owner_id=player_id,
            placed_turn=self.state.turn.turn_number,
            corner_key=corner.key,
        )
        corner.building = settlement
        player.record_settlement(corner.key)
        return BuildResult(success=True, piece=settlement)

    def place_city(self, player_id: int, corner: Corner) -> BuildResult:
        """Upgrade the player's settlement on a corner to a city.

        Returns:
            BuildResult with the new city and the removed settlement.
        """
        player = self.state.get_player(player_id)

        check = self.rules.check_city(corner, player_id)
        if not check.valid:
            return BuildResult.failed(check.reason)

        check = self._check_resources(player, PieceType.CITY, free=False)
        if not check.valid:
            return BuildResult.failed(check.reason)

        player.pay_for(PieceType.CITY)
        player.take_piece(PieceType.CITY)

        removed = corner.building
        removed.corner_key = None
        city = City(
            piece_id=self.state.board.ids.next_id(),
            owner_id=player_id,
            placed_turn=self.state.turn.turn_number,
            corner_key=corner.key,
        )
        corner.building = city
        player.upgrade_to_city(corner.key)
        player.return_piece(PieceType.SETTLEMENT)
        return BuildResult(success=True, piece=city, removed=removed)

    def place_road(
        self,
        player_id: int,
        side: Side,
        setup: bool = False,
        anchor: Optional[CornerKey] = None,
    ) -> BuildResult:
        """Build a road.

        Args:
            player_id: The building player.
            side: Target side.
            setup: Free setup placement.
            anchor: Corner the road must touch (the settlement of the current
                setup visit).

        Returns:
            BuildResult with the new road on success.
        """
        player = self.state.get_player(player_id)

        check = self.rules.check_road(side, player_id, anchor=anchor)
        if not check.valid:
            return BuildResult.failed(check.reason)

        check = self._check_resources(player, PieceType.ROAD, free=setup)
        if not check.valid:
            return BuildResult.failed(check.reason)

        player.pay_for(PieceType.ROAD, free=setup)
        player.take_piece(PieceType.ROAD)

        road = Road(
            piece_id=self.state.board.ids.next_id(),
            owner_id=player_id,
            placed_turn=self.state.turn.turn_number,
            side_key=side.key,
        )
        side.road = road
        player.record_road(side.key)
        return BuildResult(success=True, piece=road)
