"""Constants and enums for the hex settlement game engine."""

from enum import Enum


class Terrain(Enum):
    """Terrain kinds a tile can carry."""

    FOREST = "forest"
    HILLS = "hills"
    MOUNTAINS = "mountains"
    FIELDS = "fields"
    PASTURE = "pasture"
    DESERT = "desert"
    SEA = "sea"


class Resource(Enum):
    """Resource cards, one per producing terrain kind."""

    LUMBER = "lumber"
    BRICK = "brick"
    ORE = "ore"
    GRAIN = "grain"
    WOOL = "wool"


class PieceType(Enum):
    """Placeable pieces."""

    SETTLEMENT = "settlement"
    CITY = "city"
    ROAD = "road"
    ROBBER = "robber"


class Phase(Enum):
    """Game phases, from player registration to a declared winner."""

    WAITING = "waiting"
    SETUP = "setup"
    PLAYING = "playing"
    FINISHED = "finished"


# Terrain -> produced resource (desert and sea produce nothing)
TERRAIN_RESOURCES = {
    Terrain.FOREST: Resource.LUMBER,
    Terrain.HILLS: Resource.BRICK,
    Terrain.MOUNTAINS: Resource.ORE,
    Terrain.FIELDS: Resource.GRAIN,
    Terrain.PASTURE: Resource.WOOL,
}

NON_PRODUCING_TERRAIN = (Terrain.DESERT, Terrain.SEA)

# Fixed discard order when a 7 is rolled
RESOURCE_ORDER = [
    Resource.LUMBER,
    Resource.BRICK,
    Resource.ORE,
    Resource.GRAIN,
    Resource.WOOL,
]

# Standard 19-tile layout, five rows of 3/4/5/4/3 in axial (q, r)
STANDARD_LAYOUT = [
    (-2, 0), (-1, -1), (0, -2),
    (-2, 1), (-1, 0), (0, -1), (1, -2),
    (-2, 2), (-1, 1), (0, 0), (1, -1), (2, -2),
    (-1, 2), (0, 1), (1, 0), (2, -1),
    (0, 2), (1, 1), (2, 0),
]

STANDARD_TERRAIN_COUNTS = {
    Terrain.FOREST: 4,
    Terrain.PASTURE: 4,
    Terrain.FIELDS: 4,
    Terrain.HILLS: 3,
    Terrain.MOUNTAINS: 3,
    Terrain.DESERT: 1,
}

STANDARD_MARKER_VALUES = [2, 3, 3, 4, 4, 5, 5, 6, 6, 8, 8, 9, 9, 10, 10, 11, 11, 12]

# Number of two-die combinations producing each total
PROBABILITY_WEIGHTS = {
    2: 1,
    3: 2,
    4: 3,
    5: 4,
    6: 5,
    7: 6,
    8: 5,
    9: 4,
    10: 3,
    11: 2,
    12: 1,
}

HIGH_PROBABILITY_WEIGHT = 5
ROBBER_ROLL = 7
DICE_COMBINATIONS = 36

# Player limits
MIN_PLAYERS = 2
MAX_PLAYERS = 6

# Piece supply per player
SETTLEMENTS_PER_PLAYER = 5
CITIES_PER_PLAYER = 4
ROADS_PER_PLAYER = 15

# Build costs
BUILD_COSTS = {
    PieceType.ROAD: {Resource.LUMBER: 1, Resource.BRICK: 1},
    PieceType.SETTLEMENT: {
        Resource.LUMBER: 1,
        Resource.BRICK: 1,
        Resource.WOOL: 1,
        Resource.GRAIN: 1,
    },
    PieceType.CITY: {Resource.ORE: 3, Resource.GRAIN: 2},
}
DEVELOPMENT_CARD_COST = {Resource.ORE: 1, Resource.WOOL: 1, Resource.GRAIN: 1}

# Scoring
SETTLEMENT_POINTS = 1
CITY_POINTS = 2
LONGEST_ROAD_POINTS = 2
LARGEST_ARMY_POINTS = 2
TARGET_VICTORY_POINTS = 10
LONGEST_ROAD_MINIMUM = 5

# A player holding more than this many cards discards half on a 7
DISCARD_THRESHOLD = 7

# Setup runs one forward round then one backward round
SETUP_ROUNDS = 2
INITIAL_TURN_NUMBER = 1
