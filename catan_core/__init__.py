"""Core data models for the hex settlement game engine."""

from .constants import (
    Terrain,
    Resource,
    PieceType,
    Phase,
    TERRAIN_RESOURCES,
    RESOURCE_ORDER,
    STANDARD_LAYOUT,
    STANDARD_TERRAIN_COUNTS,
    STANDARD_MARKER_VALUES,
    PROBABILITY_WEIGHTS,
    ROBBER_ROLL,
    MIN_PLAYERS,
    MAX_PLAYERS,
    SETTLEMENTS_PER_PLAYER,
    CITIES_PER_PLAYER,
    ROADS_PER_PLAYER,
    BUILD_COSTS,
    TARGET_VICTORY_POINTS,
    LONGEST_ROAD_MINIMUM,
    DISCARD_THRESHOLD,
    INITIAL_TURN_NUMBER,
)

from .config import GameConfig

from .coordinates import (
    Axial,
    TileKey,
    CornerKey,
    SideKey,
    axial_to_cube,
    cube_to_axial,
    hex_distance,
    neighbors,
    axial_to_pixel,
    canonical_corner,
    canonical_side,
    make_tile_key,
    make_corner_key,
    make_side_key,
    parse_key,
)

from .markers import ProbabilityMarker, create_standard_markers

from .pieces import IdGenerator, Piece, Building, Settlement, City, Road, Robber

from .board import Tile, Corner, Side, Board

from .player import Player

from .game_state import TurnState, GameEvent, GameState

from .logging_config import configure_logging, get_logger

__all__ = [
    # Constants
    "Terrain",
    "Resource",
    "PieceType",
    "Phase",
    "TERRAIN_RESOURCES",
    "RESOURCE_ORDER",
    "STANDARD_LAYOUT",
    "STANDARD_TERRAIN_COUNTS",
    "STANDARD_MARKER_VALUES",
    "PROBABILITY_WEIGHTS",
    "ROBBER_ROLL",
    "MIN_PLAYERS",
    "MAX_PLAYERS",
    "SETTLEMENTS_PER_PLAYER",
    "CITIES_PER_PLAYER",
    "ROADS_PER_PLAYER",
    "BUILD_COSTS",
    "TARGET_VICTORY_POINTS",
    "LONGEST_ROAD_MINIMUM",
    "DISCARD_THRESHOLD",
    "INITIAL_TURN_NUMBER",
    # Config
    "GameConfig",
    # Coordinates
    "Axial",
    "TileKey",
    "CornerKey",
    "SideKey",
    "axial_to_cube",
    "cube_to_axial",
    "hex_distance",
    "neighbors",
    "axial_to_pixel",
    "canonical_corner",
    "canonical_side",
    "make_tile_key",
    "make_corner_key",
    "make_side_key",
    "parse_key",
    # Markers
    "ProbabilityMarker",
    "create_standard_markers",
    # Pieces
    "IdGenerator",
    "Piece",
    "Building",
    "Settlement",
    "City",
    "Road",
    "Robber",
    # Board
    "Tile",
    "Corner",
    "Side",
    "Board",
    # Player
    "Player",
    # Game State
    "TurnState",
    "GameEvent",
    "GameState",
    # Logging
    "configure_logging",
    "get_logger",
]
