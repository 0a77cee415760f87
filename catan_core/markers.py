"""Probability markers placed on producing tiles.

A marker carries a dice total (2-12, never 7) and the number of two-die
combinations producing that total. Markers are bound to at most one tile;
binding and unbinding keep the tile's back-reference in step.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, TYPE_CHECKING

from .constants import (
    PROBABILITY_WEIGHTS,
    HIGH_PROBABILITY_WEIGHT,
    ROBBER_ROLL,
    DICE_COMBINATIONS,
    STANDARD_MARKER_VALUES,
)
from .coordinates import TileKey

if TYPE_CHECKING:
    from .board import Tile


@dataclass(eq=False)
class ProbabilityMarker:
    """A numbered marker on a tile.

    Attributes:
        value: Dice total this marker responds to.
        tile_key: Key of the tile the marker is bound to, if any.
    """

    value: int
    tile_key: Optional[TileKey] = field(default=None)

    def __post_init__(self) -> None:
        if self.value not in PROBABILITY_WEIGHTS or self.value == ROBBER_ROLL:
            raise ValueError(f"Marker value must be 2-6 or 8-12, got {self.value}")

    @property
    def weight(self) -> int:
        """Number of two-die combinations producing this value."""
        return PROBABILITY_WEIGHTS[self.value]

    @property
    def dots(self) -> int:
        """Pips printed on the marker (same as weight)."""
        return self.weight

    def probability_percent(self) -> float:
        """Chance of this value on one roll, as a percentage to 1 decimal."""
        return round(self.weight / DICE_COMBINATIONS * 100, 1)

    def is_high_probability(self) -> bool:
        """Check if this is a 6 or 8."""
        return self.weight == HIGH_PROBABILITY_WEIGHT

    def is_low_probability(self) -> bool:
        """Check if this is a 2 or 12."""
        return self.weight == 1

    @property
    def color(self) -> str:
        """Display colour: red for high-probability markers."""
        return "red" if self.is_high_probability() else "black"

    def is_bound(self) -> bool:
        """Check if the marker sits on a tile."""
        return self.tile_key is not None

    def place_on(self, tile: Tile, previous: Optional[Tile] = None) -> None:
        """Bind this marker to a tile.

        Args:
            tile: The tile to bind to.
            previous: The tile this marker is currently bound to, if any;
                its reference is cleared.

        Raises:
            ValueError: If the target tile already carries another marker.
        """
        if tile.marker is not None and tile.marker is not self:
            raise ValueError(f"Tile {tile.key} already has marker {tile.marker.value}")
        if previous is not None and previous.marker is self:
            previous.marker = None
        self.tile_key = tile.key
        tile.marker = self

    def remove_from_tile(self, tile: Tile) -> None:
        """Unbind this marker from its tile, clearing the tile's reference."""
        if tile.marker is self:
            tile.marker = None
        self.tile_key = None

    def __str__(self) -> str:
        where = f" on {self.tile_key}" if self.tile_key else ""
        return (
            f"ProbabilityMarker({self.value}){where} "
            f"[{self.weight} ways, {self.probability_percent()}%]"
        )


def create_standard_markers() -> list[ProbabilityMarker]:
    """Create the 18 markers of the standard board."""
    return [ProbabilityMarker(value) for value in STANDARD_MARKER_VALUES]
