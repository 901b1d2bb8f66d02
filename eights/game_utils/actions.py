"""Action system for games - explicit commands consumed by the turn state machine."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from mashumaro.mixins.json import DataClassJSONMixin

from .cards import Suit


class ActionKind(str, Enum):
    """What a participant does with their turn."""

    PLAY = "play"
    DRAW = "draw"
    PASS = "pass"


@dataclass(frozen=True)
class Action(DataClassJSONMixin):
    """
    A single turn command.

    Hosts build these from player input; the bot builds them from its
    decision procedure. Both feed them through the same engine entry points.
    """

    kind: ActionKind
    index: int | None = None  # Hand index for PLAY
    suit: Suit | None = None  # Declared suit when PLAY is an 8

    @classmethod
    def play(cls, index: int, suit: Suit | None = None) -> "Action":
        return cls(ActionKind.PLAY, index=index, suit=suit)

    @classmethod
    def draw(cls) -> "Action":
        return cls(ActionKind.DRAW)

    @classmethod
    def pass_turn(cls) -> "Action":
        return cls(ActionKind.PASS)

    @property
    def action_id(self) -> str:
        """Stable string form, e.g. 'play_card_3', 'play_card_0_spades', 'draw'."""
        if self.kind == ActionKind.PLAY:
            if self.suit is not None:
                return f"play_card_{self.index}_{self.suit.value}"
            return f"play_card_{self.index}"
        return self.kind.value

    @classmethod
    def from_action_id(cls, action_id: str) -> "Action | None":
        """Inverse of action_id. Returns None for anything unrecognised."""
        if action_id == "draw":
            return cls.draw()
        if action_id == "pass":
            return cls.pass_turn()
        if not action_id.startswith("play_card_"):
            return None
        parts = action_id[len("play_card_"):].split("_")
        try:
            index = int(parts[0])
        except ValueError:
            return None
        suit = None
        if len(parts) > 1:
            suit = Suit.parse(parts[1])
            if suit is None:
                return None
        return cls.play(index, suit)
