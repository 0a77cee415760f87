"""Player model for the hex settlement game engine.

Each player holds resource cards, a limited supply of pieces, and keys to
the corners and sides they have built on. Resource counters only change
through add_resource/remove_resource (and the helpers built on them).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from .constants import (
    Resource,
    PieceType,
    RESOURCE_ORDER,
    BUILD_COSTS,
    SETTLEMENTS_PER_PLAYER,
    CITIES_PER_PLAYER,
    ROADS_PER_PLAYER,
    SETTLEMENT_POINTS,
    CITY_POINTS,
    LONGEST_ROAD_POINTS,
    LARGEST_ARMY_POINTS,
)
from .coordinates import CornerKey, SideKey


SUPPLY_LIMITS = {
    PieceType.SETTLEMENT: SETTLEMENTS_PER_PLAYER,
    PieceType.CITY: CITIES_PER_PLAYER,
    PieceType.ROAD: ROADS_PER_PLAYER,
}


def empty_hand() -> dict[Resource, int]:
    """A resource mapping with every counter at zero."""
    return {resource: 0 for resource in RESOURCE_ORDER}


@dataclass
class Player:
    """Represents a player in the game.

    Attributes:
        player_id: Unique identifier for this player (0-indexed, seat order).
        name: Display name.
        color: Display colour.
        resources: Resource card counts.
        supply: Pieces not yet placed, per piece type.
        settlement_keys: Corners holding this player's settlements.
        city_keys: Corners holding this player's cities.
        road_keys: Sides holding this player's roads.
        victory_point_cards: Point cards held.
        knights_played: Knights played (feeds the largest army).
        has_longest_road: Whether the player holds the longest road.
        has_largest_army: Whether the player holds the largest army.
        longest_road_length: Last computed longest road length.
        score: Last computed victory points.
    """

    player_id: int
    name: str = ""
    color: str = ""
    resources: dict[Resource, int] = field(default_factory=empty_hand)
    supply: dict[PieceType, int] = field(default_factory=lambda: dict(SUPPLY_LIMITS))
    settlement_keys: list[CornerKey] = field(default_factory=list)
    city_keys: list[CornerKey] = field(default_factory=list)
    road_keys: list[SideKey] = field(default_factory=list)
    victory_point_cards: int = 0
    knights_played: int = 0
    has_longest_road: bool = False
    has_largest_army: bool = False
    longest_road_length: int = 0
    score: int = 0

    def __post_init__(self) -> None:
        if not self.name:
            self.name = f"Player {self.player_id + 1}"

    # -------------------------------------------------------------------------
    # Resources
    # -------------------------------------------------------------------------

    def get_resource(self, resource: Resource) -> int:
        return self.resources[resource]

    def add_resource(self, resource: Resource, amount: int = 1) -> None:
        """Add resource cards.

        Raises:
            ValueError: If amount is negative.
        """
        if amount < 0:
            raise ValueError(f"Cannot add a negative amount ({amount}) of {resource.value}")
        self.resources[resource] += amount

    def remove_resource(self, resource: Resource, amount: int = 1) -> bool:
        """Remove resource cards.

        Returns:
            True if removed, False if the player holds too few (no change).

        Raises:
            ValueError: If amount is negative.
        """
        if amount < 0:
            raise ValueError(f"Cannot remove a negative amount ({amount}) of {resource.value}")
        if self.resources[resource] < amount:
            return False
        self.resources[resource] -= amount
        return True

    def total_resources(self) -> int:
        """Total number of resource cards in hand."""
        return sum(self.resources.values())

    def can_afford(self, cost: dict[Resource, int]) -> bool:
        return all(self.resources[res] >= amount for res, amount in cost.items())

    def pay(self, cost: dict[Resource, int]) -> bool:
        """Pay a cost in full, or nothing at all.

        Returns:
            True if paid, False if the player cannot afford it.
        """
        if not self.can_afford(cost):
            return False
        for resource, amount in cost.items():
            self.resources[resource] -= amount
        return True

    def pay_for(self, piece_type: PieceType, free: bool = False) -> bool:
        """Pay the build cost of a piece.

        Args:
            piece_type: Settlement, city or road.
            free: True for free placements (setup), which cost nothing.

        Returns:
            True if paid (always True when free), False if unaffordable.
        """
        if free:
            return True
        return self.pay(BUILD_COSTS[piece_type])

    def can_afford_piece(self, piece_type: PieceType) -> bool:
        return self.can_afford(BUILD_COSTS[piece_type])

    def discard_half(self) -> dict[Resource, int]:
        """Discard floor(total / 2) cards.

        Cards are removed one per resource kind per pass, cycling through
        RESOURCE_ORDER and skipping kinds the player has run out of.

        Returns:
            Mapping of resource to number discarded.
        """
        to_discard = self.total_resources() // 2
        discarded = empty_hand()
        while to_discard > 0:
            for resource in RESOURCE_ORDER:
                if to_discard == 0:
                    break
                if self.remove_resource(resource):
                    discarded[resource] += 1
                    to_discard -= 1
        return {res: count for res, count in discarded.items() if count}

    # -------------------------------------------------------------------------
    # Piece supply
    # -------------------------------------------------------------------------

    def has_supply(self, piece_type: PieceType) -> bool:
        """Check if the player has an unplaced piece of this type."""
        return self.supply.get(piece_type, 0) > 0

    def take_piece(self, piece_type: PieceType) -> None:
        """Take one piece from the supply.

        Raises:
            ValueError: If none remain.
        """
        if not self.has_supply(piece_type):
            raise ValueError(
                f"Player {self.player_id} has no {piece_type.value} pieces remaining"
            )
        self.supply[piece_type] -= 1

    def return_piece(self, piece_type: PieceType) -> None:
        """Return one piece to the supply.

        Raises:
            ValueError: If the supply is already full.
        """
        if self.supply[piece_type] >= SUPPLY_LIMITS[piece_type]:
            raise ValueError(
                f"Player {self.player_id} already has a full {piece_type.value} supply"
            )
        self.supply[piece_type] += 1

    # -------------------------------------------------------------------------
    # Placements
    # -------------------------------------------------------------------------

    def record_settlement(self, corner_key: CornerKey) -> None:
        self.settlement_keys.append(corner_key)

    def record_road(self, side_key: SideKey) -> None:
        self.road_keys.append(side_key)

    def upgrade_to_city(self, corner_key: CornerKey) -> None:
        """Move a corner from the settlement list to the city list.

        Raises:
            ValueError: If the player has no settlement there.
        """
        if corner_key not in self.settlement_keys:
            raise ValueError(
                f"Player {self.player_id} has no settlement at {corner_key}"
            )
        self.settlement_keys.remove(corner_key)
        self.city_keys.append(corner_key)

    def owns_corner(self, corner_key: CornerKey) -> bool:
        return corner_key in self.settlement_keys or corner_key in self.city_keys

    # -------------------------------------------------------------------------
    # Scoring
    # -------------------------------------------------------------------------

    def compute_score(self) -> int:
        """Recompute and store victory points.

        Returns:
            The new score.
        """
        score = (
            len(self.settlement_keys) * SETTLEMENT_POINTS
            + len(self.city_keys) * CITY_POINTS
            + self.victory_point_cards
        )
        if self.has_longest_road:
            score += LONGEST_ROAD_POINTS
        if self.has_largest_army:
            score += LARGEST_ARMY_POINTS
        self.score = score
        return score

    def summary(self, target: Optional[int] = None) -> str:
        """One-line debug summary of the player's position."""
        hand = ", ".join(f"{res.value}={count}" for res, count in self.resources.items())
        goal = f"/{target}" if target is not None else ""
        return (
            f"P{self.player_id} {self.name}: {self.score}{goal} VP, "
            f"{len(self.settlement_keys)} settlements, {len(self.city_keys)} cities, "
            f"{len(self.road_keys)} roads (longest {self.longest_road_length}) [{hand}]"
        )

    def __str__(self) -> str:
        return self.summary()
