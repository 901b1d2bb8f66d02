"""Standard 52-card deck: suits, cards, draw pile and discard pile."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
import random

from mashumaro.mixins.json import DataClassJSONMixin

from .errors import EmptyDeckError
from ..messages.localization import Localization


class Suit(str, Enum):
    """Card suits, declared in tie-break priority order."""

    HEARTS = "hearts"
    DIAMONDS = "diamonds"
    CLUBS = "clubs"
    SPADES = "spades"

    @property
    def symbol(self) -> str:
        return SUIT_SYMBOLS[self]

    @classmethod
    def parse(cls, text: str) -> "Suit | None":
        """Parse a suit from its name, initial or symbol ("hearts", "h", "♥")."""
        value = text.strip().lower()
        if not value:
            return None
        for suit in cls:
            if value in (suit.value, suit.value[0], suit.symbol):
                return suit
        return None


SUIT_SYMBOLS: dict[Suit, str] = {
    Suit.HEARTS: "♥",
    Suit.DIAMONDS: "♦",
    Suit.CLUBS: "♣",
    Suit.SPADES: "♠",
}

RANKS = list(range(1, 14))  # 1 = Ace .. 13 = King
WILD_RANK = 8

RANK_GLYPHS = {1: "A", 11: "J", 12: "Q", 13: "K"}


@dataclass(frozen=True)
class Card(DataClassJSONMixin):
    """A playing card. Cards never change once created."""

    rank: int  # 1..13
    suit: Suit

    @property
    def is_wild(self) -> bool:
        return self.rank == WILD_RANK

    @property
    def glyph(self) -> str:
        """Short form like 'A♥' or '10♠'."""
        return f"{RANK_GLYPHS.get(self.rank, str(self.rank))}{self.suit.symbol}"

    def __str__(self) -> str:
        return self.glyph


def full_card_set() -> list[Card]:
    """All 52 cards in suit-major order."""
    return [Card(rank, suit) for suit in Suit for rank in RANKS]


def suit_name(suit: Suit, locale: str = "en") -> str:
    return Localization.get(locale, f"suit-{suit.value}")


def card_name(card: Card, locale: str = "en") -> str:
    """Localized long name, e.g. 'Ace of Hearts'."""
    return Localization.get(
        locale,
        "card-name",
        rank=Localization.get(locale, f"rank-{card.rank}"),
        suit=suit_name(card.suit, locale),
    )


@dataclass
class Deck(DataClassJSONMixin):
    """
    Draw pile plus discard pile.

    Cards are drawn from the end of draw_pile; the last element of
    discard_pile is the top of the discard.
    """

    draw_pile: list[Card] = field(default_factory=list)
    discard_pile: list[Card] = field(default_factory=list)

    @classmethod
    def standard(cls) -> "Deck":
        return cls(draw_pile=full_card_set())

    def size(self) -> int:
        return len(self.draw_pile)

    def is_empty(self) -> bool:
        return not self.draw_pile

    def all_cards(self) -> list[Card]:
        return self.draw_pile + self.discard_pile

    def add(self, cards: list[Card]) -> None:
        """Put cards back into the draw pile (on the bottom)."""
        self.draw_pile[:0] = cards

    def shuffle(self, rng: random.Random | None = None) -> None:
        (rng or random).shuffle(self.draw_pile)

    def draw_one(self) -> Card:
        if not self.draw_pile:
            raise EmptyDeckError()
        return self.draw_pile.pop()

    # Alias used by hosts that think in terms of "dealing" a single card.
    deal = draw_one

    def deal_out(self, first: list[Card], second: list[Card], count: int) -> None:
        """Deal count cards to each hand, alternating first and second."""
        if len(self.draw_pile) < 2 * count:
            raise EmptyDeckError(needed=2 * count, remaining=len(self.draw_pile))
        for _ in range(count):
            first.append(self.draw_pile.pop())
            second.append(self.draw_pile.pop())

    def play_first(self) -> Card:
        """Turn the top of the draw pile onto the discard pile."""
        card = self.draw_one()
        self.discard_pile.append(card)
        return card

    def play(self, hand: list[Card], index: int) -> Card:
        """Move hand[index] onto the discard pile. No legality check."""
        card = hand.pop(index)
        self.discard_pile.append(card)
        return card

    def top_of_discard(self) -> Card | None:
        return self.discard_pile[-1] if self.discard_pile else None

    def reshuffle_discard(self, rng: random.Random | None = None) -> int:
        """Shuffle everything under the top discard back into the draw pile."""
        if len(self.discard_pile) <= 1:
            return 0
        top = self.discard_pile[-1]
        rest = self.discard_pile[:-1]
        self.discard_pile = [top]
        self.add(rest)
        self.shuffle(rng)
        return len(rest)
