"""Placement legality rules for the hex settlement game engine.

Pure queries over the board: nothing here mutates state. Each check returns
a ValidationResult carrying the reason a placement is illegal, so callers
can surface it without raising.

Checks:
- Settlement: corner empty and no building one side away (distance rule);
  optionally connected to the player's own road network
- City: corner holds a settlement of the requesting player
- Road: side empty and touching the player's building or road
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from catan_core.board import Board, Corner, Side, Tile
from catan_core.constants import PieceType
from catan_core.coordinates import CornerKey


@dataclass
class ValidationResult:
    """Result of validating a placement.

    Attributes:
        valid: Whether the placement is legal.
        reason: Description of why it is illegal (if it is).
    """

    valid: bool
    reason: Optional[str] = None

    def __bool__(self) -> bool:
        return self.valid


class PlacementRules:
    """Placement checks and legal-location queries for one board."""

    def __init__(self, board: Board):
        """Initialize with the board to check against.

        Args:
            board: The board arena.
        """
        self.board = board

    def _require_on_board(self, entity: Tile | Corner | Side) -> None:
        if not self.board.contains(entity):
            raise ValueError(f"{entity} is not part of this board")

    # -------------------------------------------------------------------------
    # Settlements
    # -------------------------------------------------------------------------

    def check_settlement(
        self,
        corner: Corner,
        player_id: Optional[int] = None,
        require_road: bool = False,
    ) -> ValidationResult:
        """Check whether a settlement may be placed on a corner.

        Args:
            corner: Target corner.
            player_id: Requesting player (needed when require_road is set).
            require_road: Whether the corner must touch one of the player's
                roads (normal play; setup skips this).

        Raises:
            ValueError: If the corner is not on this board, or require_road
                is set without a player.
        """
        self._require_on_board(corner)

        if corner.has_building():
            return ValidationResult(
                valid=False,
                reason=f"Corner {corner.key} already has a {corner.building.piece_type.value}",
            )

        for neighbor in self.board.get_adjacent_corners(corner):
            if neighbor.has_building():
                return ValidationResult(
                    valid=False,
                    reason=f"Corner {corner.key} is next to a building at {neighbor.key}",
                )

        if require_road:
            if player_id is None:
                raise ValueError("A player is required to check road connection")
            if not any(
                side.is_owned_by(player_id) for side in self.board.get_corner_sides(corner)
            ):
                return ValidationResult(
                    valid=False,
                    reason=f"Corner {corner.key} is not connected to player {player_id}'s roads",
                )

        return ValidationResult(valid=True)

    def can_place_settlement(
        self,
        corner: Corner,
        player_id: Optional[int] = None,
        require_road: bool = False,
    ) -> bool:
        return self.check_settlement(corner, player_id, require_road).valid

    def get_valid_settlement_corners(
        self,
        player_id: Optional[int] = None,
        require_road: bool = False,
    ) -> list[Corner]:
        """All corners where a settlement may be placed."""
        return [
            corner
            for corner in self.board.corners.values()
            if self.check_settlement(corner, player_id, require_road).valid
        ]

    # -------------------------------------------------------------------------
    # Cities
    # -------------------------------------------------------------------------

    def check_city(self, corner: Corner, player_id: int) -> ValidationResult:
        """Check whether a player may upgrade the settlement on a corner."""
        self._require_on_board(corner)

        building = corner.building
        if building is None:
            return ValidationResult(valid=False, reason=f"Corner {corner.key} has no settlement")
        if building.piece_type != PieceType.SETTLEMENT:
            return ValidationResult(
                valid=False,
                reason=f"Corner {corner.key} already has a {building.piece_type.value}",
            )
        if building.owner_id != player_id:
            return ValidationResult(
                valid=False,
                reason=f"Settlement at {corner.key} belongs to player {building.owner_id}",
            )
        return ValidationResult(valid=True)

    def can_place_city(self, corner: Corner, player_id: int) -> bool:
        return self.check_city(corner, player_id).valid

    def get_valid_city_corners(self, player_id: int) -> list[Corner]:
        """Corners holding the player's settlements."""
        return [
            corner
            for corner in self.board.corners.values()
            if self.check_city(corner, player_id).valid
        ]

    # -------------------------------------------------------------------------
    # Roads
    # -------------------------------------------------------------------------

    def check_road(
        self,
        side: Side,
        player_id: int,
        anchor: Optional[CornerKey] = None,
    ) -> ValidationResult:
        """Check whether a player may build a road on a side.

        Args:
            side: Target side.
            player_id: Requesting player.
            anchor: If given, the road must have this corner as an endpoint
                (setup roads must touch the settlement just placed).
        """
        self._require_on_board(side)

        if side.has_road():
            return ValidationResult(
                valid=False,
                reason=f"Side {side.key} already has a road (player {side.road.owner_id})",
            )

        if anchor is not None:
            if anchor not in side.corner_keys:
                return ValidationResult(
                    valid=False,
                    reason=f"Side {side.key} does not touch corner {anchor}",
                )
            return ValidationResult(valid=True)

        for corner in self.board.get_side_corners(side):
            if corner.is_owned_by(player_id):
                return ValidationResult(valid=True)

        for neighbor in self.board.get_adjacent_sides(side):
            if neighbor.is_owned_by(player_id):
                return ValidationResult(valid=True)

        return ValidationResult(
            valid=False,
            reason=f"Side {side.key} is not connected to player {player_id}'s network",
        )

    def can_place_road(
        self,
        side: Side,
        player_id: int,
        anchor: Optional[CornerKey] = None,
    ) -> bool:
        return self.check_road(side, player_id, anchor).valid

    def get_valid_road_sides(
        self,
        player_id: int,
        anchor: Optional[CornerKey] = None,
    ) -> list[Side]:
        """All sides where the player may build a road."""
        return [
            side
            for side in self.board.sides.values()
            if self.check_road(side, player_id, anchor).valid
        ]
