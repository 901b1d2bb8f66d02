"""Tests for cards, suits and the draw/discard deck."""

from pathlib import Path
import random

import pytest

from eights.game_utils.cards import (
    Card,
    Deck,
    Suit,
    WILD_RANK,
    card_name,
    full_card_set,
)
from eights.game_utils.errors import EmptyDeckError
from eights.messages.localization import Localization

Localization.init(Path(__file__).resolve().parents[1] / "locales")


class TestCard:
    def test_full_card_set_is_52_distinct_cards(self):
        cards = full_card_set()
        assert len(cards) == 52
        assert len(set(cards)) == 52
        assert {c.rank for c in cards} == set(range(1, 14))
        assert {c.suit for c in cards} == set(Suit)

    def test_cards_are_immutable(self):
        card = Card(8, Suit.HEARTS)
        with pytest.raises(AttributeError):
            card.suit = Suit.SPADES

    def test_wild(self):
        assert Card(WILD_RANK, Suit.CLUBS).is_wild
        assert not Card(9, Suit.CLUBS).is_wild

    def test_glyph(self):
        assert Card(1, Suit.HEARTS).glyph == "A♥"
        assert Card(10, Suit.SPADES).glyph == "10♠"
        assert str(Card(12, Suit.DIAMONDS)) == "Q♦"

    def test_card_name(self):
        assert card_name(Card(1, Suit.HEARTS)) == "Ace of Hearts"
        assert card_name(Card(13, Suit.CLUBS)) == "King of Clubs"

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("hearts", Suit.HEARTS),
            ("S", Suit.SPADES),
            ("♦", Suit.DIAMONDS),
            (" clubs ", Suit.CLUBS),
            ("stars", None),
            ("", None),
        ],
    )
    def test_suit_parse(self, text, expected):
        assert Suit.parse(text) == expected


class TestDeck:
    def test_standard_deck(self):
        deck = Deck.standard()
        assert deck.size() == 52
        assert deck.discard_pile == []
        assert deck.top_of_discard() is None

    def test_shuffle_is_seedable(self):
        a = Deck.standard()
        b = Deck.standard()
        a.shuffle(random.Random(5))
        b.shuffle(random.Random(5))
        assert a.draw_pile == b.draw_pile
        assert sorted(a.draw_pile, key=lambda c: (c.suit.value, c.rank)) == sorted(
            full_card_set(), key=lambda c: (c.suit.value, c.rank)
        )

    def test_deal_out_alternates(self):
        deck = Deck.standard()
        expected = list(reversed(deck.draw_pile))[:6]
        first: list[Card] = []
        second: list[Card] = []
        deck.deal_out(first, second, 3)
        assert first == expected[0::2]
        assert second == expected[1::2]
        assert deck.size() == 46

    def test_deal_out_needs_enough_cards(self):
        deck = Deck(draw_pile=full_card_set()[:5])
        first: list[Card] = []
        second: list[Card] = []
        with pytest.raises(EmptyDeckError):
            deck.deal_out(first, second, 3)
        assert first == [] and second == []
        assert deck.size() == 5

    def test_play_first_seeds_discard(self):
        deck = Deck.standard()
        top = deck.draw_pile[-1]
        assert deck.play_first() == top
        assert deck.top_of_discard() == top
        assert deck.size() == 51

    def test_deal_from_empty_raises(self):
        deck = Deck()
        with pytest.raises(EmptyDeckError):
            deck.deal()

    def test_play_moves_card_to_discard(self):
        deck = Deck(discard_pile=[Card(3, Suit.CLUBS)])
        hand = [Card(4, Suit.CLUBS), Card(9, Suit.HEARTS)]
        played = deck.play(hand, 1)
        assert played == Card(9, Suit.HEARTS)
        assert hand == [Card(4, Suit.CLUBS)]
        assert deck.top_of_discard() == played

    def test_top_of_discard_does_not_mutate(self):
        deck = Deck(discard_pile=[Card(3, Suit.CLUBS), Card(5, Suit.CLUBS)])
        assert deck.top_of_discard() == Card(5, Suit.CLUBS)
        assert deck.top_of_discard() == Card(5, Suit.CLUBS)
        assert len(deck.discard_pile) == 2

    def test_reshuffle_discard_keeps_top(self):
        discards = [Card(r, Suit.HEARTS) for r in (2, 3, 4, 5)]
        deck = Deck(discard_pile=list(discards))
        moved = deck.reshuffle_discard(random.Random(1))
        assert moved == 3
        assert deck.discard_pile == [Card(5, Suit.HEARTS)]
        assert set(deck.draw_pile) == set(discards[:3])

    def test_reshuffle_with_only_top_card(self):
        deck = Deck(discard_pile=[Card(5, Suit.HEARTS)])
        assert deck.reshuffle_discard(random.Random(1)) == 0
        assert deck.is_empty()
