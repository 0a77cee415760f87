"""Board model for the hex settlement game engine.

The board is an arena of tiles, corners and sides keyed by canonical
coordinate strings:
- Tiles are the hexes, keyed "q,r"
- Corners are where settlements and cities stand, keyed "q,r,d"
- Sides are where roads are built, keyed "q,r,d"

Cross-references between entities are stored as keys into the arena, never
as direct object links. The topology is built once (see
catan_data.topology); only occupancy (buildings, roads, markers, robber)
changes during play.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Optional

from .constants import Terrain, Resource, TERRAIN_RESOURCES
from .coordinates import (
    TileKey,
    CornerKey,
    SideKey,
    hex_distance,
    axial_to_pixel,
    corner_to_pixel,
    side_to_pixel,
    canonical_corner,
    canonical_side,
    make_tile_key,
    make_corner_key,
    make_side_key,
)
from .markers import ProbabilityMarker
from .pieces import Building, Road, Robber, IdGenerator


@dataclass(eq=False)
class Tile:
    """A single hex tile.

    Attributes:
        q: Axial q coordinate.
        r: Axial r coordinate.
        terrain: Terrain kind of the tile.
        marker: Probability marker bound to this tile, if any.
        has_robber: True while the robber sits here.
        corner_keys: The six corners, in tile-relative order 0-5.
        side_keys: The six sides, in tile-relative order 0-5.
        neighbor_keys: Keys of adjacent tiles present on the board.
    """

    q: int
    r: int
    terrain: Terrain = Terrain.DESERT
    marker: Optional[ProbabilityMarker] = None
    has_robber: bool = False
    corner_keys: list[CornerKey] = field(default_factory=list)
    side_keys: list[SideKey] = field(default_factory=list)
    neighbor_keys: list[TileKey] = field(default_factory=list)

    @property
    def s(self) -> int:
        """Derived cube coordinate."""
        return -self.q - self.r

    @property
    def key(self) -> TileKey:
        return make_tile_key(self.q, self.r)

    @property
    def resource(self) -> Optional[Resource]:
        """Resource this tile's terrain produces (None for desert/sea)."""
        return TERRAIN_RESOURCES.get(self.terrain)

    def is_productive_terrain(self) -> bool:
        """Check if the terrain yields a resource at all."""
        return self.resource is not None

    def can_produce(self) -> bool:
        """Check if the tile has productive terrain and a marker."""
        return self.is_productive_terrain() and self.marker is not None

    def should_produce(self, roll: int) -> bool:
        """Check if a dice total makes this tile produce."""
        return (
            self.can_produce()
            and self.marker.value == roll
            and not self.has_robber
        )

    def distance_to(self, other: Tile) -> int:
        """Tile steps between this tile and another."""
        return hex_distance((self.q, self.r), (other.q, other.r))

    def to_pixel(self, size: float = 1.0) -> tuple[float, float]:
        """Centre of this tile on the (x, z) plane."""
        return axial_to_pixel(self.q, self.r, size)

    def __str__(self) -> str:
        marker = f":{self.marker.value}" if self.marker else ""
        return f"Tile({self.q},{self.r}) [{self.terrain.value}{marker}]"


@dataclass(eq=False)
class Corner:
    """A tile corner where up to three tiles meet.

    Attributes:
        q: Canonical q coordinate.
        r: Canonical r coordinate.
        direction: Canonical direction (0 or 1).
        building: Settlement or city standing here.
        port: Harbour type at this corner, if any.
        tile_keys: Tiles touching this corner (3, or fewer at the coast).
        side_keys: Sides meeting at this corner.
        adjacent_corner_keys: Corners one side away.
    """

    q: int
    r: int
    direction: int
    building: Optional[Building] = None
    port: Optional[str] = None
    tile_keys: list[TileKey] = field(default_factory=list)
    side_keys: list[SideKey] = field(default_factory=list)
    adjacent_corner_keys: list[CornerKey] = field(default_factory=list)

    @property
    def key(self) -> CornerKey:
        return make_corner_key(self.q, self.r, self.direction)

    def has_building(self) -> bool:
        return self.building is not None

    def is_owned_by(self, player_id: int) -> bool:
        """Check if a building of the given player stands here."""
        return self.building is not None and self.building.owner_id == player_id

    def is_blocked_for(self, player_id: int) -> bool:
        """Check if an opponent's building stands here."""
        return self.building is not None and self.building.owner_id != player_id

    def to_pixel(self, size: float = 1.0) -> tuple[float, float]:
        return corner_to_pixel(self.q, self.r, self.direction, size)

    def __str__(self) -> str:
        building = ""
        if self.building is not None:
            building = f"[{self.building.piece_type.value}:P{self.building.owner_id}]"
        return f"Corner({self.q},{self.r}:{self.direction}){building}"


@dataclass(eq=False)
class Side:
    """A tile side where a road may be built.

    Attributes:
        q: Canonical q coordinate.
        r: Canonical r coordinate.
        direction: Canonical direction (0, 1 or 2).
        road: Road built here, if any.
        tile_keys: Tiles bordering this side (2, or 1 at the coast).
        corner_keys: The two corners this side joins.
        adjacent_side_keys: Sides sharing a corner with this one.
    """

    q: int
    r: int
    direction: int
    road: Optional[Road] = None
    tile_keys: list[TileKey] = field(default_factory=list)
    corner_keys: list[CornerKey] = field(default_factory=list)
    adjacent_side_keys: list[SideKey] = field(default_factory=list)

    @property
    def key(self) -> SideKey:
        return make_side_key(self.q, self.r, self.direction)

    def has_road(self) -> bool:
        return self.road is not None

    def is_owned_by(self, player_id: int) -> bool:
        """Check if the given player has a road here."""
        return self.road is not None and self.road.owner_id == player_id

    def other_corner(self, corner_key: CornerKey) -> CornerKey:
        """Return the endpoint opposite to the given one.

        Raises:
            KeyError: If corner_key is not an endpoint of this side.
        """
        if corner_key not in self.corner_keys:
            raise KeyError(f"Corner {corner_key} is not an endpoint of side {self.key}")
        a, b = self.corner_keys
        return b if corner_key == a else a

    def connects(self, corner_a: CornerKey, corner_b: CornerKey) -> bool:
        """Check if this side joins the two given corners."""
        return set(self.corner_keys) == {corner_a, corner_b}

    def to_pixel(self, size: float = 1.0) -> tuple[float, float, float]:
        return side_to_pixel(self.q, self.r, self.direction, size)

    def __str__(self) -> str:
        road = f"[road:P{self.road.owner_id}]" if self.road is not None else ""
        return f"Side({self.q},{self.r}:{self.direction}){road}"


@dataclass
class Board:
    """The game board: an arena of tiles, corners and sides.

    The Board exclusively owns every Tile, Corner, Side, ProbabilityMarker
    and the Robber. Pieces and players only hold keys into it.

    Attributes:
        tiles: Mapping from tile key to tile.
        corners: Mapping from canonical corner key to corner.
        sides: Mapping from canonical side key to side.
        markers: Probability markers bound to tiles.
        robber: The single robber.
        ids: Identifier source for pieces created on this board.
        is_generated: Whether topology and tokens are in place.
        layout_name: Name of the layout the topology was built from.
    """

    tiles: dict[TileKey, Tile] = field(default_factory=dict)
    corners: dict[CornerKey, Corner] = field(default_factory=dict)
    sides: dict[SideKey, Side] = field(default_factory=dict)
    markers: list[ProbabilityMarker] = field(default_factory=list)
    ids: IdGenerator = field(default_factory=IdGenerator)
    robber: Optional[Robber] = None
    is_generated: bool = False
    layout_name: str = "empty"

    def __post_init__(self) -> None:
        if self.robber is None:
            self.robber = Robber(piece_id=self.ids.next_id())

    # -------------------------------------------------------------------------
    # Construction helpers (used by the topology builder)
    # -------------------------------------------------------------------------

    def add_tile(self, tile: Tile) -> Tile:
        """Add a tile to the arena.

        Raises:
            ValueError: If a tile already exists at the same coordinate.
        """
        if tile.key in self.tiles:
            raise ValueError(f"Duplicate tile at {tile.key}")
        self.tiles[tile.key] = tile
        return tile

    def ensure_corner(self, q: int, r: int, direction: int) -> Corner:
        """Fetch the corner at a canonical coordinate, creating it if needed."""
        key = make_corner_key(q, r, direction)
        corner = self.corners.get(key)
        if corner is None:
            corner = Corner(q=q, r=r, direction=direction)
            self.corners[key] = corner
        return corner

    def ensure_side(self, q: int, r: int, direction: int) -> Side:
        """Fetch the side at a canonical coordinate, creating it if needed."""
        key = make_side_key(q, r, direction)
        side = self.sides.get(key)
        if side is None:
            side = Side(q=q, r=r, direction=direction)
            self.sides[key] = side
        return side

    def clear(self) -> None:
        """Drop all tiles, corners, sides, markers and the robber."""
        self.tiles.clear()
        self.corners.clear()
        self.sides.clear()
        self.markers = []
        self.ids = IdGenerator()
        self.robber = Robber(piece_id=self.ids.next_id())
        self.is_generated = False
        self.layout_name = "empty"

    # -------------------------------------------------------------------------
    # Lookup
    # -------------------------------------------------------------------------

    def get_tile(self, q: int, r: int) -> Tile:
        """Get the tile at an axial coordinate.

        Raises:
            KeyError: If no tile exists there.
        """
        return self.tiles[make_tile_key(q, r)]

    def has_tile(self, q: int, r: int) -> bool:
        return make_tile_key(q, r) in self.tiles

    def get_corner(self, q: int, r: int, direction: int) -> Corner:
        """Get a corner by canonical coordinate.

        Raises:
            KeyError: If the corner does not exist.
        """
        return self.corners[make_corner_key(q, r, direction)]

    def get_side(self, q: int, r: int, direction: int) -> Side:
        """Get a side by canonical coordinate.

        Raises:
            KeyError: If the side does not exist.
        """
        return self.sides[make_side_key(q, r, direction)]

    def get_tile_by_key(self, key: TileKey) -> Tile:
        return self.tiles[key]

    def get_corner_by_key(self, key: CornerKey) -> Corner:
        return self.corners[key]

    def get_side_by_key(self, key: SideKey) -> Side:
        return self.sides[key]

    def corner_of(self, tile: Tile, direction: int) -> Corner:
        """Get a tile's corner by tile-relative direction (0-5)."""
        q, r, d = canonical_corner(tile.q, tile.r, direction)
        return self.get_corner(q, r, d)

    def side_of(self, tile: Tile, direction: int) -> Side:
        """Get a tile's side by tile-relative direction (0-5)."""
        q, r, d = canonical_side(tile.q, tile.r, direction)
        return self.get_side(q, r, d)

    def contains(self, entity: Tile | Corner | Side) -> bool:
        """Check if this exact entity belongs to this board's arena."""
        if isinstance(entity, Tile):
            return self.tiles.get(entity.key) is entity
        if isinstance(entity, Corner):
            return self.corners.get(entity.key) is entity
        if isinstance(entity, Side):
            return self.sides.get(entity.key) is entity
        return False

    # -------------------------------------------------------------------------
    # Enumeration (for rendering)
    # -------------------------------------------------------------------------

    def get_tiles(self) -> list[Tile]:
        return list(self.tiles.values())

    def get_corners(self) -> list[Corner]:
        return list(self.corners.values())

    def get_sides(self) -> list[Side]:
        return list(self.sides.values())

    def get_tiles_by_terrain(self, terrain: Terrain) -> list[Tile]:
        return [tile for tile in self.tiles.values() if tile.terrain == terrain]

    def get_buildings(self) -> list[Building]:
        """Return every settlement and city on the board."""
        return [c.building for c in self.corners.values() if c.building is not None]

    def get_roads(self) -> list[Road]:
        """Return every road on the board."""
        return [s.road for s in self.sides.values() if s.road is not None]

    # -------------------------------------------------------------------------
    # Relationship navigation
    # -------------------------------------------------------------------------

    def get_tile_neighbors(self, tile: Tile) -> list[Tile]:
        return [self.tiles[key] for key in tile.neighbor_keys]

    def get_tile_corners(self, tile: Tile) -> list[Corner]:
        return [self.corners[key] for key in tile.corner_keys]

    def get_tile_sides(self, tile: Tile) -> list[Side]:
        return [self.sides[key] for key in tile.side_keys]

    def get_corner_tiles(self, corner: Corner) -> list[Tile]:
        return [self.tiles[key] for key in corner.tile_keys]

    def get_corner_sides(self, corner: Corner) -> list[Side]:
        return [self.sides[key] for key in corner.side_keys]

    def get_adjacent_corners(self, corner: Corner) -> list[Corner]:
        return [self.corners[key] for key in corner.adjacent_corner_keys]

    def get_side_corners(self, side: Side) -> list[Corner]:
        return [self.corners[key] for key in side.corner_keys]

    def get_side_tiles(self, side: Side) -> list[Tile]:
        return [self.tiles[key] for key in side.tile_keys]

    def get_adjacent_sides(self, side: Side) -> list[Side]:
        return [self.sides[key] for key in side.adjacent_side_keys]

    def get_resource_tiles(self, corner: Corner) -> list[Tile]:
        """Tiles around a corner that can produce resources."""
        return [tile for tile in self.get_corner_tiles(corner) if tile.can_produce()]

    def is_coastal(self, side: Side) -> bool:
        """Check if a side borders the sea or the edge of the board."""
        return len(side.tile_keys) < 2 or any(
            self.tiles[key].terrain == Terrain.SEA for key in side.tile_keys
        )

    def get_adjacent_building_owners(self, tile: Tile) -> list[int]:
        """Distinct owners of buildings touching a tile, in corner order."""
        owners: list[int] = []
        for corner in self.get_tile_corners(tile):
            building = corner.building
            if building is not None and building.owner_id not in owners:
                owners.append(building.owner_id)
        return owners

    # -------------------------------------------------------------------------
    # Markers and robber
    # -------------------------------------------------------------------------

    def bind_marker(self, marker: ProbabilityMarker, tile: Tile) -> None:
        """Bind a marker to a tile and track it in the board's marker list."""
        previous = self.tiles.get(marker.tile_key) if marker.tile_key else None
        marker.place_on(tile, previous=previous)
        if marker not in self.markers:
            self.markers.append(marker)

    def unbind_marker(self, marker: ProbabilityMarker) -> None:
        """Remove a marker from its tile and from the board's marker list."""
        if marker.tile_key is not None:
            marker.remove_from_tile(self.tiles[marker.tile_key])
        if marker in self.markers:
            self.markers.remove(marker)

    def get_bound_markers(self) -> list[ProbabilityMarker]:
        return [marker for marker in self.markers if marker.is_bound()]

    def get_robber_tile(self) -> Optional[Tile]:
        """Return the tile the robber sits on, if placed."""
        if self.robber.tile_key is None:
            return None
        return self.tiles[self.robber.tile_key]

    def move_robber(self, tile: Tile) -> Optional[Tile]:
        """Move the robber to a tile.

        Clears the robber flag on the previous tile (if any) and sets it on
        the destination.

        Returns:
            The tile the robber left, or None if it was unplaced.

        Raises:
            ValueError: If the tile is not part of this board.
        """
        if not self.contains(tile):
            raise ValueError(f"Tile {tile.key} is not on this board")
        previous = self.get_robber_tile()
        if previous is not None:
            previous.has_robber = False
        self.robber.tile_key = tile.key
        tile.has_robber = True
        return previous

    # -------------------------------------------------------------------------
    # Producing tiles
    # -------------------------------------------------------------------------

    def get_producing_tiles(self, roll: int) -> list[Tile]:
        """Return all tiles that produce on a given dice total."""
        return [tile for tile in self.tiles.values() if tile.should_produce(roll)]

    # -------------------------------------------------------------------------
    # Cloning
    # -------------------------------------------------------------------------

    def clone(self) -> Board:
        """Create a deep copy of this board."""
        return copy.deepcopy(self)

    def __str__(self) -> str:
        return (
            f"Board({self.layout_name}) - {len(self.tiles)} tiles, "
            f"{len(self.corners)} corners, {len(self.sides)} sides"
        )
