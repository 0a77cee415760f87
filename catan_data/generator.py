"""Randomized board generation for the hex settlement game engine.

Generation runs in four steps on a freshly built topology:
1. Shuffle the terrain multiset and assign one terrain per tile
2. Place high-probability markers (6 and 8) so no two are neighbours
3. Place the remaining markers on the remaining producing tiles
4. Put the robber on the desert

All randomness comes from an injected random.Random, so a seeded generator
reproduces the same board.
"""

from __future__ import annotations

import random
from typing import Iterable, Optional

from catan_core.constants import (
    Terrain,
    STANDARD_LAYOUT,
    STANDARD_TERRAIN_COUNTS,
    STANDARD_MARKER_VALUES,
)
from catan_core.coordinates import Axial
from catan_core.board import Board, Tile
from catan_core.markers import ProbabilityMarker
from catan_core.logging_config import get_logger

from .topology import TopologyBuilder


logger = get_logger("board_generator")


class BoardGenerator:
    """Assigns terrain, probability markers and the robber to a board.

    Attributes:
        rng: Random source for every shuffle and pick.
        layout: Axial coordinates of the tiles to build.
        terrain_counts: Terrain multiset to distribute.
        marker_values: Marker multiset to distribute.
    """

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        layout: Iterable[Axial] = STANDARD_LAYOUT,
        terrain_counts: Optional[dict[Terrain, int]] = None,
        marker_values: Optional[list[int]] = None,
    ):
        self.rng = rng if rng is not None else random.Random()
        self.layout = list(layout)
        self.terrain_counts = dict(
            terrain_counts if terrain_counts is not None else STANDARD_TERRAIN_COUNTS
        )
        self.marker_values = list(
            marker_values if marker_values is not None else STANDARD_MARKER_VALUES
        )

    def generate(self, board: Optional[Board] = None) -> Board:
        """Build and populate a board.

        Args:
            board: Board to regenerate in place; cleared first. A new board
                is created if None.

        Returns:
            The generated board.
        """
        layout_name = "standard" if self.layout == list(STANDARD_LAYOUT) else "custom"
        board = TopologyBuilder().build(self.layout, board=board, layout_name=layout_name)
        self.assign_terrain(board)
        self.place_markers(board)
        self.place_robber(board)
        board.is_generated = True
        logger.debug(
            "board_generated",
            tiles=len(board.tiles),
            corners=len(board.corners),
            sides=len(board.sides),
            markers=len(board.markers),
        )
        return board

    def terrain_pool(self) -> list[Terrain]:
        """The terrain multiset as a flat list."""
        pool: list[Terrain] = []
        for terrain, count in self.terrain_counts.items():
            pool.extend([terrain] * count)
        return pool

    def assign_terrain(self, board: Board) -> None:
        """Shuffle the terrain pool and assign it to tiles in layout order.

        Tiles left over when the pool runs out become sea.
        """
        pool = self.terrain_pool()
        self.rng.shuffle(pool)

        tiles = board.get_tiles()
        if len(pool) < len(tiles):
            logger.warning(
                "terrain_pool_exhausted",
                tiles=len(tiles),
                terrain=len(pool),
                fallback=Terrain.SEA.value,
            )
        elif len(pool) > len(tiles):
            logger.warning("terrain_pool_surplus", tiles=len(tiles), terrain=len(pool))

        for i, tile in enumerate(tiles):
            tile.terrain = pool[i] if i < len(pool) else Terrain.SEA

    def place_markers(self, board: Board) -> None:
        """Place probability markers on producing tiles.

        High-probability markers go first, each on a tile with no
        high-probability neighbour. When no such tile remains the constraint
        is relaxed and any remaining tile is used.
        """
        markers = [ProbabilityMarker(value) for value in self.marker_values]
        high = [m for m in markers if m.is_high_probability()]
        other = [m for m in markers if not m.is_high_probability()]
        self.rng.shuffle(high)
        self.rng.shuffle(other)

        available = [tile for tile in board.get_tiles() if tile.is_productive_terrain()]

        for marker in high:
            if not available:
                logger.warning("marker_surplus", value=marker.value)
                continue
            candidates = [
                tile for tile in available if not self._has_high_neighbor(board, tile)
            ]
            if not candidates:
                logger.warning("marker_constraint_relaxed", value=marker.value)
                candidates = available
            tile = self.rng.choice(candidates)
            board.bind_marker(marker, tile)
            available.remove(tile)

        self.rng.shuffle(available)
        for marker in other:
            if not available:
                logger.warning("marker_surplus", value=marker.value)
                continue
            board.bind_marker(marker, available.pop())

        if available:
            logger.warning(
                "tiles_without_marker",
                tiles=[tile.key for tile in available],
            )

    def _has_high_neighbor(self, board: Board, tile: Tile) -> bool:
        return any(
            neighbor.marker is not None and neighbor.marker.is_high_probability()
            for neighbor in board.get_tile_neighbors(tile)
        )

    def place_robber(self, board: Board) -> Optional[Tile]:
        """Put the robber on the desert.

        Falls back to the first tile when the board has no desert.

        Returns:
            The robber's tile, or None for an empty board.
        """
        deserts = board.get_tiles_by_terrain(Terrain.DESERT)
        if deserts:
            target = deserts[0]
        else:
            tiles = board.get_tiles()
            if not tiles:
                return None
            target = tiles[0]
            logger.warning("no_desert_for_robber", fallback=target.key)
        board.move_robber(target)
        return target


def generate_standard_board(
    rng: Optional[random.Random] = None,
    board: Optional[Board] = None,
) -> Board:
    """Generate the standard 19-tile board.

    Passing an existing board regenerates it in place (reset + rebuild).
    """
    return BoardGenerator(rng=rng).generate(board)
