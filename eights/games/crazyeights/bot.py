"""Greedy single-ply bot for Crazy Eights.

No lookahead and no memory: the decision depends only on the hand and
the top of the discard pile. It is a simple opponent, not a strong one.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ...game_utils.actions import Action
from ...game_utils.cards import Card, Suit
from .game import current_participant, is_legal, top_card

if TYPE_CHECKING:
    from .game import GameState


def preferred_suit(hand: list[Card]) -> Suit:
    """Most common suit among the non-8 cards; ties go to the earlier Suit."""
    suit_counts = {suit: 0 for suit in Suit}
    for card in hand:
        if card.is_wild:
            continue
        suit_counts[card.suit] += 1
    best = max(suit_counts.items(), key=lambda item: item[1])[0]
    return best


def decide(hand: list[Card], top: Card | None, declared_suit: Suit | None = None) -> Action:
    """First suit-or-rank match in hand order, else the first 8, else draw."""
    first_wild: int | None = None
    for idx, card in enumerate(hand):
        if card.is_wild:
            if first_wild is None:
                first_wild = idx
            continue
        if is_legal(card, top, declared_suit):
            return Action.play(idx)

    if first_wild is not None:
        remaining = hand[:first_wild] + hand[first_wild + 1:]
        return Action.play(first_wild, preferred_suit(remaining))

    return Action.draw()


def bot_think(state: "GameState") -> Action:
    """Decision for whoever is to move, turning an impossible draw into a pass."""
    player = current_participant(state)
    action = decide(player.hand, top_card(state), state.declared_suit)
    if action == Action.draw() and player.is_hand_full(state.max_hand_size):
        return Action.pass_turn()
    return action
