"""Board topology builder for the hex settlement game engine.

Builds the Tile/Corner/Side arena from a list of axial tile coordinates,
either the standard 19-tile layout or a custom layout loaded from JSON.

Each tile computes canonical coordinates for its six corners and six sides,
so tiles sharing a physical corner or side resolve to the same entity.
A second pass links tile neighbours, corner/side incidence and the derived
corner-corner and side-side adjacency lists.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Iterable, Optional

from catan_core.constants import Terrain, STANDARD_LAYOUT
from catan_core.coordinates import (
    Axial,
    canonical_corner,
    canonical_side,
    corner_sides,
    side_corners,
    neighbors,
    make_tile_key,
)
from catan_core.board import Board, Tile
from catan_core.markers import ProbabilityMarker


DEFAULT_LAYOUT_PATH = Path(__file__).parent / "standard_layout.json"


class TopologyError(Exception):
    """Raised when a layout cannot be turned into a board."""
    pass


def _append_unique(items: list[str], value: str) -> None:
    if value not in items:
        items.append(value)


class TopologyBuilder:
    """Builds board topology from tile coordinates."""

    def build(
        self,
        coords: Iterable[Axial],
        board: Optional[Board] = None,
        layout_name: str = "custom",
    ) -> Board:
        """Build a board from axial tile coordinates.

        Args:
            coords: Axial (q, r) coordinates of the land tiles.
            board: Board to build into; it is cleared first. A new board is
                created if None.
            layout_name: Name recorded on the board.

        Returns:
            The board with tiles, corners and sides linked.

        Raises:
            TopologyError: If a coordinate repeats or the list is empty.
        """
        if board is None:
            board = Board()
        else:
            board.clear()

        for q, r in coords:
            if make_tile_key(q, r) in board.tiles:
                raise TopologyError(f"Duplicate tile coordinate: ({q}, {r})")
            board.add_tile(Tile(q=q, r=r))

        if not board.tiles:
            raise TopologyError("Layout must contain at least one tile")

        self._create_corners_and_sides(board)
        self._link_neighbors(board)
        self._link_corners_and_sides(board)
        self._link_adjacency(board)

        board.layout_name = layout_name
        return board

    def _create_corners_and_sides(self, board: Board) -> None:
        for tile in board.tiles.values():
            for direction in range(6):
                corner = board.ensure_corner(*canonical_corner(tile.q, tile.r, direction))
                tile.corner_keys.append(corner.key)
                _append_unique(corner.tile_keys, tile.key)

                side = board.ensure_side(*canonical_side(tile.q, tile.r, direction))
                tile.side_keys.append(side.key)
                _append_unique(side.tile_keys, tile.key)

    def _link_neighbors(self, board: Board) -> None:
        for tile in board.tiles.values():
            for nq, nr in neighbors(tile.q, tile.r):
                key = make_tile_key(nq, nr)
                if key in board.tiles:
                    tile.neighbor_keys.append(key)

    def _link_corners_and_sides(self, board: Board) -> None:
        for tile in board.tiles.values():
            for direction in range(6):
                corner = board.corners[tile.corner_keys[direction]]
                for side_dir in corner_sides(direction):
                    _append_unique(corner.side_keys, tile.side_keys[side_dir])

                side = board.sides[tile.side_keys[direction]]
                for corner_dir in side_corners(direction):
                    _append_unique(side.corner_keys, tile.corner_keys[corner_dir])

    def _link_adjacency(self, board: Board) -> None:
        for side in board.sides.values():
            a, b = side.corner_keys
            _append_unique(board.corners[a].adjacent_corner_keys, b)
            _append_unique(board.corners[b].adjacent_corner_keys, a)

            for corner_key in side.corner_keys:
                for other_key in board.corners[corner_key].side_keys:
                    if other_key != side.key:
                        _append_unique(side.adjacent_side_keys, other_key)

    # -------------------------------------------------------------------------
    # Layout files
    # -------------------------------------------------------------------------

    def load_from_file(self, file_path: str | Path, board: Optional[Board] = None) -> Board:
        """Build a board from a JSON layout file.

        Raises:
            TopologyError: If the file cannot be read, parsed or validated.
        """
        path = Path(file_path)

        if not path.exists():
            raise TopologyError(f"Layout file not found: {path}")

        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise TopologyError(f"Invalid JSON in layout file: {e}")
        except OSError as e:
            raise TopologyError(f"Error reading layout file: {e}")

        return self.load_from_dict(data, board=board)

    def load_from_dict(self, data: dict[str, Any], board: Optional[Board] = None) -> Board:
        """Build a board from a layout dictionary.

        The dictionary holds a "tiles" list of {"q", "r"} entries, each with
        optional "terrain" (a Terrain value) and "marker" (a dice total).

        Raises:
            TopologyError: If the structure or any entry is invalid.
        """
        if not isinstance(data, dict):
            raise TopologyError("Layout data must be a dictionary")
        if "tiles" not in data:
            raise TopologyError("Layout data missing 'tiles' key")
        if not isinstance(data["tiles"], list):
            raise TopologyError("'tiles' must be a list")

        entries = [self._parse_tile_entry(entry) for entry in data["tiles"]]
        board = self.build(
            [(q, r) for q, r, _, _ in entries],
            board=board,
            layout_name=str(data.get("name", "custom")),
        )

        for q, r, terrain, marker_value in entries:
            tile = board.get_tile(q, r)
            if terrain is not None:
                tile.terrain = terrain
            if marker_value is not None:
                if not tile.is_productive_terrain():
                    raise TopologyError(
                        f"Tile ({q}, {r}) is {tile.terrain.value} and cannot carry a marker"
                    )
                board.bind_marker(ProbabilityMarker(marker_value), tile)

        return board

    def _parse_tile_entry(
        self, entry: Any
    ) -> tuple[int, int, Optional[Terrain], Optional[int]]:
        if not isinstance(entry, dict):
            raise TopologyError(f"Tile entry must be a dictionary, got {entry!r}")
        for field in ("q", "r"):
            if field not in entry:
                raise TopologyError(f"Tile entry missing required field: {field}")
            if not isinstance(entry[field], int) or isinstance(entry[field], bool):
                raise TopologyError(f"Tile field '{field}' must be an integer: {entry!r}")

        terrain = None
        if entry.get("terrain") is not None:
            try:
                terrain = Terrain(entry["terrain"])
            except ValueError:
                raise TopologyError(
                    f"Invalid terrain '{entry['terrain']}'. "
                    f"Valid terrains: {[t.value for t in Terrain]}"
                )

        marker_value = entry.get("marker")
        if marker_value is not None:
            try:
                ProbabilityMarker(marker_value)
            except ValueError as e:
                raise TopologyError(str(e))

        return entry["q"], entry["r"], terrain, marker_value


def build_board(coords: Iterable[Axial], board: Optional[Board] = None) -> Board:
    """Convenience function to build a board from tile coordinates."""
    return TopologyBuilder().build(coords, board=board)


def build_standard_topology(board: Optional[Board] = None) -> Board:
    """Build the standard 19-tile topology (no terrain or markers yet)."""
    return TopologyBuilder().build(STANDARD_LAYOUT, board=board, layout_name="standard")


def load_layout(file_path: str | Path, board: Optional[Board] = None) -> Board:
    """Convenience function to build a board from a JSON layout file."""
    return TopologyBuilder().load_from_file(file_path, board=board)


def load_default_layout(board: Optional[Board] = None) -> Board:
    """Build the standard layout from the bundled JSON file."""
    return load_layout(DEFAULT_LAYOUT_PATH, board=board)


def get_board_stats(board: Board) -> dict[str, Any]:
    """Get statistics about a board.

    Args:
        board: The board to analyze.

    Returns:
        Dictionary with board statistics.
    """
    terrain_counts = {terrain.value: 0 for terrain in Terrain}
    for tile in board.tiles.values():
        terrain_counts[tile.terrain.value] += 1

    marker_counts: dict[int, int] = {}
    for marker in board.get_bound_markers():
        marker_counts[marker.value] = marker_counts.get(marker.value, 0) + 1

    interior_corners = sum(1 for c in board.corners.values() if len(c.tile_keys) == 3)
    coastal_sides = sum(1 for s in board.sides.values() if board.is_coastal(s))

    return {
        "layout": board.layout_name,
        "num_tiles": len(board.tiles),
        "num_corners": len(board.corners),
        "num_sides": len(board.sides),
        "num_markers": len(board.get_bound_markers()),
        "interior_corners": interior_corners,
        "coastal_sides": coastal_sides,
        "terrain_counts": terrain_counts,
        "marker_counts": dict(sorted(marker_counts.items())),
        "robber_tile": board.robber.tile_key,
        "buildings": len(board.get_buildings()),
        "roads": len(board.get_roads()),
    }
