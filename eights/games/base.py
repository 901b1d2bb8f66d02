"""Participant dataclass shared by card games."""

from dataclasses import dataclass, field

from mashumaro.mixins.json import DataClassJSONMixin

from ..game_utils.cards import Card

DEFAULT_HUMAN_NAME = "Player"
DEFAULT_BOT_NAME = "Bot"

# Names handed out to the human seat when bots play both sides
BOT_NAMES = [
    "Alice",
    "Charlie",
    "Diana",
    "Frank",
    "Grace",
    "Henry",
]


@dataclass
class Participant(DataClassJSONMixin):
    """
    One seat at the table.

    This is a dataclass that gets serialized with the game state.
    """

    id: str  # Stable seat id ("human" or "bot")
    name: str  # Display name
    is_bot: bool = False
    hand: list[Card] = field(default_factory=list)

    def hand_size(self) -> int:
        return len(self.hand)

    def is_hand_full(self, max_hand_size: int) -> bool:
        return len(self.hand) >= max_hand_size
