"""Rule resolvers for the hex settlement game engine.

Each resolver:
- Takes the game state as input
- Applies one family of rules (building, production, robber, longest
  road, scoring)
- Returns a result dataclass with resolution details

Resolvers are used by the GameEngine; they never change the phase.
"""

from .building import (
    BuildingResolver,
    BuildResult,
)

from .production import (
    ProductionResolver,
    ProductionResult,
)

from .robber import (
    RobberResolver,
    RobberResult,
    DiscardResult,
)

from .longest_road import (
    LongestRoadResolver,
    LongestRoadResult,
)

from .scoring import ScoringResolver

__all__ = [
    # Building
    "BuildingResolver",
    "BuildResult",
    # Production
    "ProductionResolver",
    "ProductionResult",
    # Robber
    "RobberResolver",
    "RobberResult",
    "DiscardResult",
    # Longest Road
    "LongestRoadResolver",
    "LongestRoadResult",
    # Scoring
    "ScoringResolver",
]
