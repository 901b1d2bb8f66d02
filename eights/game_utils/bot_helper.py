"""Bot helper for pacing AI turns.

This is a stateless helper that operates on serialized session fields:
- session.bot_think_ticks: Ticks until the bot can act
- session.bot_pending_action: Action to execute when ready
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..games.crazyeights.session import CrazyEightsSession


class BotHelper:
    """
    Stateless helper for managing bot turns in a session.

    All bot state is stored in session fields for serialization.
    This class just provides utility methods for manipulating that state.

    Usage:
        # In session on_tick:
        BotHelper.on_tick(self)

        # When a bot's turn starts, make it wait before acting:
        BotHelper.jolt_bot(session, ticks=20)
    """

    # Default think ticks when not specified
    DEFAULT_THINK_TICKS = 5

    @staticmethod
    def jolt_bot(session: "CrazyEightsSession", ticks: int | None = None) -> None:
        """Make the bot pause before it can act."""
        pause_ticks = ticks if ticks is not None else BotHelper.DEFAULT_THINK_TICKS
        session.bot_think_ticks = pause_ticks
        session.bot_pending_action = None

    @staticmethod
    def on_tick(session: "CrazyEightsSession") -> None:
        """
        Process bot actions for a tick: think -> pending -> execute.

        Call this from the session's on_tick() method.
        """
        if session.status != "playing":
            return

        current = session.current_participant
        if current is None or not session.is_bot_controlled(current):
            return

        # Count down thinking time
        if session.bot_think_ticks > 0:
            session.bot_think_ticks -= 1
            return

        # Execute pending action if we have one
        if session.bot_pending_action:
            action = session.bot_pending_action
            session.bot_pending_action = None
            session.execute_bot_action(current, action)
            return

        # Ask the session what this bot should do
        session.bot_pending_action = session.bot_think(current)
