"""Scoring resolver for the hex settlement game engine.

Score = 1 per settlement + 2 per city + 2 for the longest road + 2 for the
largest army + point cards. The first player (checked from the current
player onward) at or above the target wins.
"""

from __future__ import annotations

from typing import Optional, TYPE_CHECKING

from catan_core.constants import TARGET_VICTORY_POINTS

if TYPE_CHECKING:
    from catan_core.game_state import GameState
    from catan_core.player import Player


class ScoringResolver:
    """Recomputes scores and detects a winner."""

    def __init__(self, state: GameState, target: int = TARGET_VICTORY_POINTS):
        """Initialize the resolver.

        Args:
            state: The current game state.
            target: Victory points needed to win.
        """
        self.state = state
        self.target = target

    def compute_scores(self) -> dict[int, int]:
        """Recompute and store every player's score."""
        return {player.player_id: player.compute_score() for player in self.state.players}

    def find_winner(self) -> Optional[Player]:
        """Recompute scores and return the first player at the target.

        Players are checked in seat order starting from the current player.
        """
        self.compute_scores()
        players = self.state.players
        if not players:
            return None
        start = self.state.turn.current_player_idx
        for offset in range(len(players)):
            player = players[(start + offset) % len(players)]
            if player.score >= self.target:
                return player
        return None

    def get_standings(self) -> list[tuple[int, int]]:
        """(player_id, score) pairs, highest score first."""
        return sorted(
            ((p.player_id, p.score) for p in self.state.players),
            key=lambda item: (-item[1], item[0]),
        )
