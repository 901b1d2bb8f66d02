"""Crazy Eights game package."""

from .bot import bot_think, decide, preferred_suit
from .game import (
    CrazyEightsOptions,
    GameState,
    TurnPhase,
    apply_action,
    apply_draw,
    apply_pass,
    apply_play,
    is_game_over,
    is_legal,
    legal_moves,
    new_game,
)
from .session import CrazyEightsSession, TICKS_PER_SECOND

__all__ = [
    "bot_think",
    "decide",
    "preferred_suit",
    "CrazyEightsOptions",
    "GameState",
    "TurnPhase",
    "apply_action",
    "apply_draw",
    "apply_pass",
    "apply_play",
    "is_game_over",
    "is_legal",
    "legal_moves",
    "new_game",
    "CrazyEightsSession",
    "TICKS_PER_SECOND",
]
