"""Phase state machine for the hex settlement game engine.

Phases run strictly forward:
- WAITING: players register
- SETUP: snake-order free placements (forward round, then backward round)
- PLAYING: roll, build, end turn
- FINISHED: a player reached the victory target

The phase machine enforces valid transitions; it does not modify game
state directly.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, TYPE_CHECKING

from catan_core.constants import Phase, SETUP_ROUNDS

if TYPE_CHECKING:
    from catan_core.game_state import GameState


# Valid phase transitions
PHASE_TRANSITIONS: dict[Phase, list[Phase]] = {
    Phase.WAITING: [Phase.SETUP],
    Phase.SETUP: [Phase.PLAYING],
    Phase.PLAYING: [Phase.FINISHED],
    # Terminal
    Phase.FINISHED: [],
}


@dataclass
class PhaseTransitionResult:
    """Result of a phase transition attempt.

    Attributes:
        success: Whether the transition was successful.
        new_phase: The new phase if successful, None otherwise.
        reason: Description of why the transition failed (if it did).
    """

    success: bool
    new_phase: Optional[Phase]
    reason: Optional[str] = None


class PhaseMachine:
    """State machine for managing game phase transitions."""

    def __init__(self, initial_phase: Phase = Phase.WAITING):
        """Initialize the phase machine.

        Args:
            initial_phase: The starting phase (default: WAITING).
        """
        self._phase = initial_phase

    @property
    def phase(self) -> Phase:
        return self._phase

    def get_valid_transitions(self) -> list[Phase]:
        return PHASE_TRANSITIONS.get(self._phase, [])

    def can_transition_to(self, target_phase: Phase) -> bool:
        return target_phase in self.get_valid_transitions()

    def transition_to(self, target_phase: Phase) -> PhaseTransitionResult:
        """Attempt to transition to a new phase.

        Args:
            target_phase: The phase to transition to.

        Returns:
            PhaseTransitionResult indicating success or failure.
        """
        if not self.can_transition_to(target_phase):
            valid = self.get_valid_transitions()
            return PhaseTransitionResult(
                success=False,
                new_phase=None,
                reason=f"Cannot transition from {self._phase.value} to {target_phase.value}. "
                f"Valid transitions: {[p.value for p in valid]}",
            )

        self._phase = target_phase
        return PhaseTransitionResult(success=True, new_phase=target_phase)

    def is_waiting(self) -> bool:
        return self._phase == Phase.WAITING

    def is_setup_phase(self) -> bool:
        return self._phase == Phase.SETUP

    def is_playing(self) -> bool:
        return self._phase == Phase.PLAYING

    def is_game_over(self) -> bool:
        return self._phase == Phase.FINISHED

    # -------------------------------------------------------------------------
    # Phase transition logic helpers
    # -------------------------------------------------------------------------

    def can_start(self, num_players: int, min_players: int) -> PhaseTransitionResult:
        """Check whether the game may leave WAITING.

        Args:
            num_players: Registered players.
            min_players: Fewest players needed.
        """
        if self._phase != Phase.WAITING:
            return PhaseTransitionResult(
                success=False,
                new_phase=None,
                reason=f"Game already started (phase: {self._phase.value})",
            )
        if num_players < min_players:
            return PhaseTransitionResult(
                success=False,
                new_phase=None,
                reason=f"Need at least {min_players} players, have {num_players}",
            )
        return PhaseTransitionResult(success=True, new_phase=Phase.SETUP)

    def should_end_setup(self, state: GameState) -> bool:
        """Check if the last setup visit (player 0, backward round) is done."""
        if self._phase != Phase.SETUP:
            return False
        turn = state.turn
        return (
            turn.setup_round == SETUP_ROUNDS
            and turn.current_player_idx == 0
            and turn.setup_settlement_key is not None
            and turn.setup_road_key is not None
        )

    # -------------------------------------------------------------------------
    # Setup phase helpers
    # -------------------------------------------------------------------------

    def get_setup_forward_order(self, num_players: int) -> list[int]:
        """Players in the first setup round: 0, 1, ..., n - 1."""
        return list(range(num_players))

    def get_setup_reverse_order(self, num_players: int) -> list[int]:
        """Players in the second setup round: n - 1, ..., 1, 0."""
        return list(range(num_players - 1, -1, -1))

    def get_setup_order(self, num_players: int) -> list[int]:
        """Complete snake order of setup visits."""
        return self.get_setup_forward_order(num_players) + self.get_setup_reverse_order(
            num_players
        )

    # -------------------------------------------------------------------------
    # String representation
    # -------------------------------------------------------------------------

    def __str__(self) -> str:
        return f"PhaseMachine(phase={self._phase.value})"

    def __repr__(self) -> str:
        return f"PhaseMachine(phase={self._phase!r})"
