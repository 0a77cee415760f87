"""Initial placement logic for the hex settlement game engine.

Setup visits players in snake order: forward (0 .. n-1), then backward
(n-1 .. 0). Each visit places one settlement and then one road touching
it, both free. The settlement placed in the backward round immediately
yields one resource per adjacent productive tile.

After the last visit the game enters PLAYING with player 0 to move.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, TYPE_CHECKING

from catan_core.board import Corner, Side
from catan_core.constants import Resource, SETUP_ROUNDS

from .resolvers.building import BuildingResolver, BuildResult
from .resolvers.production import ProductionResolver

if TYPE_CHECKING:
    from catan_core.game_state import GameState


@dataclass
class SetupValidationResult:
    """Result of validating a setup action.

    Attributes:
        valid: Whether the action is valid.
        reason: Description of why the action is invalid (if it is).
    """

    valid: bool
    reason: Optional[str] = None


class SetupManager:
    """Manages the setup phase.

    Tracks the current visit (one settlement plus one road) and advances
    the current player along the snake order.
    """

    def __init__(self, state: GameState):
        """Initialize the setup manager.

        Args:
            state: The game state to manage setup for.
        """
        self.state = state
        self.builder = BuildingResolver(state)
        self.production = ProductionResolver(state)
        self.last_grant: dict[Resource, int] = {}

    def start(self) -> None:
        """Reset setup bookkeeping to the first visit of player 0."""
        turn = self.state.turn
        turn.current_player_idx = 0
        turn.setup_round = 1
        turn.setup_direction = 1
        turn.reset_setup_visit()

    # -------------------------------------------------------------------------
    # Visit state
    # -------------------------------------------------------------------------

    def is_second_round(self) -> bool:
        return self.state.turn.setup_round == SETUP_ROUNDS

    def is_visit_complete(self) -> bool:
        turn = self.state.turn
        return turn.setup_settlement_key is not None and turn.setup_road_key is not None

    def is_last_visit(self) -> bool:
        return self.is_second_round() and self.state.turn.current_player_idx == 0

    # -------------------------------------------------------------------------
    # Settlements
    # -------------------------------------------------------------------------

    def validate_settlement(self, player_id: int) -> SetupValidationResult:
        if self.state.turn.setup_settlement_key is not None:
            return SetupValidationResult(
                valid=False,
                reason=f"Player {player_id} already placed a settlement this visit",
            )
        return SetupValidationResult(valid=True)

    def place_settlement(self, player_id: int, corner: Corner) -> BuildResult:
        """Place the visit's free settlement.

        In the second round the player also collects one resource from each
        adjacent productive tile.
        """
        check = self.validate_settlement(player_id)
        if not check.valid:
            return BuildResult.failed(check.reason)

        result = self.builder.place_settlement(player_id, corner, setup=True)
        if not result.success:
            return result

        self.state.turn.setup_settlement_key = corner.key
        self.last_grant = {}
        if self.is_second_round():
            self.last_grant = self.production.grant_initial_resources(player_id, corner)
        return result

    def get_valid_settlement_corners(self) -> list[Corner]:
        if self.state.turn.setup_settlement_key is not None:
            return []
        return self.builder.rules.get_valid_settlement_corners()

    # -------------------------------------------------------------------------
    # Roads
    # -------------------------------------------------------------------------

    def validate_road(self, player_id: int) -> SetupValidationResult:
        turn = self.state.turn
        if turn.setup_settlement_key is None:
            return SetupValidationResult(
                valid=False,
                reason=f"Player {player_id} must place a settlement before the road",
            )
        if turn.setup_road_key is not None:
            return SetupValidationResult(
                valid=False,
                reason=f"Player {player_id} already placed a road this visit",
            )
        return SetupValidationResult(valid=True)

    def place_road(self, player_id: int, side: Side) -> BuildResult:
        """Place the visit's free road next to the visit's settlement."""
        check = self.validate_road(player_id)
        if not check.valid:
            return BuildResult.failed(check.reason)

        result = self.builder.place_road(
            player_id,
            side,
            setup=True,
            anchor=self.state.turn.setup_settlement_key,
        )
        if result.success:
            self.state.turn.setup_road_key = side.key
        return result

    def get_valid_road_sides(self, player_id: int) -> list[Side]:
        if not self.validate_road(player_id).valid:
            return []
        return self.builder.rules.get_valid_road_sides(
            player_id, anchor=self.state.turn.setup_settlement_key
        )

    # -------------------------------------------------------------------------
    # Snake order
    # -------------------------------------------------------------------------

    def advance(self) -> bool:
        """Move to the next visit in snake order.

        The last player of the forward round immediately takes the first
        visit of the backward round.

        Returns:
            True if setup is complete (player 0 finished the backward round).

        Raises:
            ValueError: If the current visit is incomplete.
        """
        if not self.is_visit_complete():
            raise ValueError("Setup visit is incomplete")

        turn = self.state.turn
        num_players = self.state.num_players()
        turn.reset_setup_visit()
        self.last_grant = {}

        if turn.setup_direction > 0:
            if turn.current_player_idx == num_players - 1:
                turn.setup_round = SETUP_ROUNDS
                turn.setup_direction = -1
            else:
                turn.current_player_idx += 1
            return False

        if turn.current_player_idx == 0:
            return True
        turn.current_player_idx -= 1
        return False
