"""Hex grid coordinate math.

Tiles use axial coordinates (q, r) with a derived cube coordinate
s = -q - r, laid out flat-topped: tile corner i sits at 60*i degrees from
the tile centre and tile side i at 60*i + 30 degrees, so side i joins
corners i and i + 1.

Corners and sides are shared between up to three (corners) or two (sides)
tiles. Each one is named by a canonical (q, r, direction) triple so that
every tile touching it computes the same key:
- corners use canonical directions 0 and 1
- sides use canonical directions 0, 1 and 2

Everything here is pure; adjacency and identity depend only on the integer
coordinates, never on pixel positions.
"""

from __future__ import annotations

import math


# Type aliases for clarity
Axial = tuple[int, int]
Cube = tuple[int, int, int]
CornerCoord = tuple[int, int, int]  # Canonical form: direction in {0, 1}
SideCoord = tuple[int, int, int]  # Canonical form: direction in {0, 1, 2}

TileKey = str  # "q,r"
CornerKey = str  # "q,r,d"
SideKey = str  # "q,r,d"

NEIGHBOR_OFFSETS: list[Axial] = [
    (1, -1),
    (1, 0),
    (0, 1),
    (-1, 1),
    (-1, 0),
    (0, -1),
]

# Tile-relative corner i -> (dq, dr, canonical direction)
CORNER_OFFSETS: list[CornerCoord] = [
    (0, 0, 0),
    (0, 0, 1),
    (-1, 1, 0),
    (-1, 0, 1),
    (-1, 0, 0),
    (0, -1, 1),
]

# Tile-relative side i -> (dq, dr, canonical direction)
SIDE_OFFSETS: list[SideCoord] = [
    (0, 0, 0),
    (0, 0, 1),
    (0, 0, 2),
    (-1, 0, 0),
    (0, -1, 1),
    (1, -1, 2),
]

# Tile-relative side i faces the neighbour at this axial offset
SIDE_NEIGHBOR_OFFSETS: list[Axial] = [
    (1, 0),
    (0, 1),
    (-1, 1),
    (-1, 0),
    (0, -1),
    (1, -1),
]

SQRT3 = math.sqrt(3.0)


def axial_to_cube(q: int, r: int) -> Cube:
    """Convert axial (q, r) to cube (q, r, s)."""
    return (q, r, -q - r)


def cube_to_axial(q: int, r: int, s: int) -> Axial:
    """Convert cube (q, r, s) to axial (q, r).

    Raises:
        ValueError: If the cube coordinate does not sum to zero.
    """
    if q + r + s != 0:
        raise ValueError(f"Cube coordinate ({q}, {r}, {s}) must sum to 0")
    return (q, r)


def hex_distance(a: Axial, b: Axial) -> int:
    """Number of tile steps between two axial coordinates."""
    dq = a[0] - b[0]
    dr = a[1] - b[1]
    return (abs(dq) + abs(dq + dr) + abs(dr)) // 2


def neighbor(q: int, r: int, direction: int) -> Axial:
    """Axial coordinate of the neighbouring tile in a given direction."""
    dq, dr = NEIGHBOR_OFFSETS[direction % 6]
    return (q + dq, r + dr)


def neighbors(q: int, r: int) -> list[Axial]:
    """All six neighbouring axial coordinates, in NEIGHBOR_OFFSETS order."""
    return [(q + dq, r + dr) for dq, dr in NEIGHBOR_OFFSETS]


def axial_to_pixel(q: int, r: int, size: float = 1.0) -> tuple[float, float]:
    """Project a tile centre onto the (x, z) plane."""
    x = size * (3.0 / 2.0 * q)
    z = size * (SQRT3 / 2.0 * q + SQRT3 * r)
    return (x, z)


def canonical_corner(q: int, r: int, direction: int) -> CornerCoord:
    """Canonical coordinate of a tile's corner.

    Args:
        q: Tile axial q.
        r: Tile axial r.
        direction: Tile-relative corner index (0-5).

    Returns:
        The (q, r, d) triple shared by every tile touching this corner.
    """
    dq, dr, d = CORNER_OFFSETS[direction % 6]
    return (q + dq, r + dr, d)


def canonical_side(q: int, r: int, direction: int) -> SideCoord:
    """Canonical coordinate of a tile's side.

    Args:
        q: Tile axial q.
        r: Tile axial r.
        direction: Tile-relative side index (0-5).

    Returns:
        The (q, r, d) triple shared by both tiles along this side.
    """
    dq, dr, d = SIDE_OFFSETS[direction % 6]
    return (q + dq, r + dr, d)


def corner_sides(direction: int) -> tuple[int, int]:
    """Tile-relative side indices touching tile-relative corner `direction`."""
    return ((direction - 1) % 6, direction % 6)


def side_corners(direction: int) -> tuple[int, int]:
    """Tile-relative corner indices joined by tile-relative side `direction`."""
    return (direction % 6, (direction + 1) % 6)


def make_tile_key(q: int, r: int) -> TileKey:
    """Create the arena key for a tile."""
    return f"{q},{r}"


def make_corner_key(q: int, r: int, direction: int) -> CornerKey:
    """Create the arena key for a canonical corner coordinate."""
    return f"{q},{r},{direction}"


def make_side_key(q: int, r: int, direction: int) -> SideKey:
    """Create the arena key for a canonical side coordinate."""
    return f"{q},{r},{direction}"


def parse_key(key: str) -> tuple[int, ...]:
    """Split an arena key back into its integer components.

    Raises:
        ValueError: If the key is not a comma-separated list of integers.
    """
    try:
        return tuple(int(part) for part in key.split(","))
    except ValueError:
        raise ValueError(f"Malformed coordinate key: {key!r}")


def corner_to_pixel(q: int, r: int, direction: int, size: float = 1.0) -> tuple[float, float]:
    """Position of a corner, given as (q, r, d) relative to tile (q, r)."""
    cx, cz = axial_to_pixel(q, r, size)
    angle = math.radians(60 * direction)
    return (cx + size * math.cos(angle), cz + size * math.sin(angle))


def side_to_pixel(
    q: int, r: int, direction: int, size: float = 1.0
) -> tuple[float, float, float]:
    """Midpoint and rotation of a side, given relative to tile (q, r).

    Returns:
        (x, z, rotation) where rotation is the outward normal in radians.
    """
    cx, cz = axial_to_pixel(q, r, size)
    angle = math.radians(60 * direction + 30)
    radius = size * SQRT3 / 2.0
    return (cx + radius * math.cos(angle), cz + radius * math.sin(angle), angle)
