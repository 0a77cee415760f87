"""Game pieces for the hex settlement game engine.

Settlements and cities sit on corners, roads on sides, and the single
robber on a tile. Pieces refer to their location and owner by key/id only;
the Board owns the entities they point at.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from .constants import PieceType, SETTLEMENT_POINTS, CITY_POINTS
from .coordinates import CornerKey, SideKey, TileKey


@dataclass
class IdGenerator:
    """Hands out sequential identifiers for one game instance."""

    _next_id: int = field(default=1, repr=False)

    def next_id(self) -> int:
        """Return a fresh identifier."""
        value = self._next_id
        self._next_id += 1
        return value

    def peek(self) -> int:
        """Return the identifier the next call will produce."""
        return self._next_id


@dataclass
class Piece:
    """Base class for anything placed on the board.

    Attributes:
        piece_id: Unique identifier within the game.
        owner_id: Owning player's id (None for the robber).
        placed_turn: Turn number on which the piece was placed.
    """

    piece_id: int
    owner_id: Optional[int] = None
    placed_turn: Optional[int] = None

    piece_type: PieceType = field(init=False)

    @property
    def location_key(self) -> Optional[str]:
        """Key of the corner, side or tile this piece sits on."""
        return None

    def is_placed(self) -> bool:
        """Check if the piece is on the board."""
        return self.location_key is not None

    def __str__(self) -> str:
        where = self.location_key or "unplaced"
        owner = "neutral" if self.owner_id is None else f"P{self.owner_id}"
        return f"{self.piece_type.value.title()}({owner}) at {where}"


@dataclass
class Building(Piece):
    """A piece occupying a corner; yields resources from touching tiles."""

    corner_key: Optional[CornerKey] = None

    victory_points: int = field(init=False, default=0)
    resource_multiplier: int = field(init=False, default=0)

    @property
    def location_key(self) -> Optional[str]:
        return self.corner_key


@dataclass
class Settlement(Building):
    """Worth 1 point; yields 1 unit per matching adjacent tile."""

    def __post_init__(self) -> None:
        self.piece_type = PieceType.SETTLEMENT
        self.victory_points = SETTLEMENT_POINTS
        self.resource_multiplier = 1


@dataclass
class City(Building):
    """Worth 2 points; yields 2 units per matching adjacent tile."""

    def __post_init__(self) -> None:
        self.piece_type = PieceType.CITY
        self.victory_points = CITY_POINTS
        self.resource_multiplier = 2


@dataclass
class Road(Piece):
    """A piece occupying a side; extends its owner's network."""

    side_key: Optional[SideKey] = None

    def __post_init__(self) -> None:
        self.piece_type = PieceType.ROAD

    @property
    def location_key(self) -> Optional[str]:
        return self.side_key


@dataclass
class Robber(Piece):
    """The neutral robber; suppresses production on its tile."""

    tile_key: Optional[TileKey] = None

    def __post_init__(self) -> None:
        self.piece_type = PieceType.ROBBER
        if self.owner_id is not None:
            raise ValueError("The robber cannot have an owner")

    @property
    def location_key(self) -> Optional[str]:
        return self.tile_key

    def is_blocking(self, tile_key: TileKey) -> bool:
        """Check if the robber sits on the given tile."""
        return self.tile_key == tile_key
