"""Configuration for a single game instance.

Rule constants live in constants.py; this module holds the settings a host
may tune per game (victory target, player limits, seeding).
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Optional

from .constants import (
    TARGET_VICTORY_POINTS,
    MIN_PLAYERS,
    MAX_PLAYERS,
    LONGEST_ROAD_MINIMUM,
    DISCARD_THRESHOLD,
)


@dataclass(frozen=True)
class GameConfig:
    """Tunable settings for a game.

    Attributes:
        target_victory_points: Score that ends the game.
        min_players: Fewest players needed to start.
        max_players: Most players that may register.
        longest_road_minimum: Road length needed to claim the longest road.
        discard_threshold: Players holding more cards than this discard on a 7.
        seed: Seed for the game's random source (None for OS entropy).
        hex_size: Tile radius used for pixel projection.
    """

    target_victory_points: int = TARGET_VICTORY_POINTS
    min_players: int = MIN_PLAYERS
    max_players: int = MAX_PLAYERS
    longest_road_minimum: int = LONGEST_ROAD_MINIMUM
    discard_threshold: int = DISCARD_THRESHOLD
    seed: Optional[int] = None
    hex_size: float = 1.0

    def make_rng(self) -> random.Random:
        """Build the random source for a game using this config."""
        return random.Random(self.seed)

    def validate(self) -> list[str]:
        """Validate the configuration.

        Returns:
            List of problems (empty if valid).
        """
        errors: list[str] = []
        if self.target_victory_points < 1:
            errors.append(
                f"target_victory_points must be positive, got {self.target_victory_points}"
            )
        if self.min_players < MIN_PLAYERS:
            errors.append(f"min_players must be at least {MIN_PLAYERS}, got {self.min_players}")
        if self.max_players > MAX_PLAYERS:
            errors.append(f"max_players must be at most {MAX_PLAYERS}, got {self.max_players}")
        if self.min_players > self.max_players:
            errors.append(
                f"min_players ({self.min_players}) exceeds max_players ({self.max_players})"
            )
        if self.longest_road_minimum < 1:
            errors.append(
                f"longest_road_minimum must be positive, got {self.longest_road_minimum}"
            )
        if self.discard_threshold < 0:
            errors.append(
                f"discard_threshold must be non-negative, got {self.discard_threshold}"
            )
        if self.hex_size <= 0:
            errors.append(f"hex_size must be positive, got {self.hex_size}")
        return errors
