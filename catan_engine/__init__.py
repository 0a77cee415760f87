"""Rules engine for the hex settlement game."""

from .placement import PlacementRules, ValidationResult

from .phase_machine import PhaseMachine, PhaseTransitionResult, PHASE_TRANSITIONS

from .setup import SetupManager, SetupValidationResult

from .game_engine import GameEngine, Action, ActionType, StepResult

__all__ = [
    # Placement
    "PlacementRules",
    "ValidationResult",
    # Phase Machine
    "PhaseMachine",
    "PhaseTransitionResult",
    "PHASE_TRANSITIONS",
    # Setup
    "SetupManager",
    "SetupValidationResult",
    # Game Engine
    "GameEngine",
    "Action",
    "ActionType",
    "StepResult",
]
