"""Game implementations."""

from .base import Participant
from .crazyeights import CrazyEightsOptions, CrazyEightsSession, GameState, TurnPhase

__all__ = [
    "Participant",
    "CrazyEightsOptions",
    "CrazyEightsSession",
    "GameState",
    "TurnPhase",
]
