"""Errors raised by the engine when a requested move cannot be applied.

Each error carries a Fluent message ID so hosts can show it to the player.
None of them are fatal; the state they were raised against is unchanged.
"""

from typing import Any


class GameError(Exception):
    """Base class for rejected moves."""

    message_id = "crazyeights-move-rejected"

    def __init__(self, **kwargs: Any):
        self.kwargs = kwargs
        detail = ", ".join(f"{k}={v}" for k, v in kwargs.items())
        super().__init__(f"{self.message_id}: {detail}" if detail else self.message_id)


class IllegalPlayError(GameError):
    """Card does not match the suit or rank of the top card and is not an 8."""

    message_id = "crazyeights-illegal-play"


class WildSuitRequiredError(IllegalPlayError):
    """An 8 was played without declaring a suit."""

    message_id = "crazyeights-wild-needs-suit"


class HandFullError(GameError):
    """Draw requested while the hand is at capacity."""

    message_id = "crazyeights-hand-full"


class EmptyDeckError(GameError):
    """No card left to draw, even after recycling the discard pile."""

    message_id = "crazyeights-deck-empty"


class GameOverError(GameError):
    """Move requested after someone has already won."""

    message_id = "crazyeights-game-over"


class NotYourTurnError(GameError):
    """Human input arrived while the bot is to move."""

    message_id = "crazyeights-not-your-turn"
