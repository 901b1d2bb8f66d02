"""Crazy Eights rules engine.

The engine is a set of plain functions over a GameState value. Every
function that changes the game returns a new GameState and leaves its
argument untouched, so a rejected move (a raised GameError) never
disturbs the caller's state.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Sequence
import copy
import random

from mashumaro.mixins.json import DataClassJSONMixin

from ..base import Participant, DEFAULT_BOT_NAME, DEFAULT_HUMAN_NAME
from ...game_utils.actions import Action, ActionKind
from ...game_utils.cards import Card, Deck, Suit
from ...game_utils.errors import (
    EmptyDeckError,
    GameOverError,
    HandFullError,
    IllegalPlayError,
    WildSuitRequiredError,
)
from ...game_utils.options import GameOptions, IntOption, MenuOption, option_field
from ...logging_utils import get_logger

log = get_logger(__name__)

HUMAN_ID = "human"
BOT_ID = "bot"
DECK_SIZE = 52


@dataclass
class CrazyEightsOptions(GameOptions):
    """Options for Crazy Eights."""

    deal_size: int = option_field(
        IntOption(
            min_val=1,
            max_val=20,
            default=8,
            value_key="count",
            label="crazyeights-option-deal-size",
        )
    )
    max_hand_size: int = option_field(
        IntOption(
            min_val=1,
            max_val=DECK_SIZE,
            default=12,
            value_key="count",
            label="crazyeights-option-max-hand-size",
        )
    )
    bot_delay: int = option_field(
        IntOption(
            min_val=0,
            max_val=10,
            default=1,
            value_key="seconds",
            label="crazyeights-option-bot-delay",
        )
    )
    reset_delay: int = option_field(
        IntOption(
            min_val=0,
            max_val=30,
            default=2,
            value_key="seconds",
            label="crazyeights-option-reset-delay",
        )
    )
    locale: str = option_field(
        MenuOption(
            choices=["en"],
            default="en",
            label="crazyeights-option-locale",
        )
    )
    seed: int | None = None  # None draws a fresh seed for every game


class TurnPhase(str, Enum):
    HUMAN_TURN = "human_turn"
    BOT_TURN = "bot_turn"
    GAME_OVER = "game_over"


@dataclass
class GameState(DataClassJSONMixin):
    """Everything needed to continue a game. Serializable with Mashumaro."""

    participants: list[Participant] = field(default_factory=list)
    deck: Deck = field(default_factory=Deck)
    declared_suit: Suit | None = None  # Suit named for an 8 while it is on top
    turn_index: int = 0
    phase: TurnPhase = TurnPhase.HUMAN_TURN
    winner_id: str | None = None
    deal_size: int = 8
    max_hand_size: int = 12
    seed: int = 0
    shuffles: int = 0  # Number of shuffles so far; keys the next RNG
    last_action: Action | None = None

    def copy(self) -> GameState:
        return copy.deepcopy(self)


# ==========================================================================
# Rule helpers
# ==========================================================================


def is_legal(card: Card, top: Card | None, declared_suit: Suit | None = None) -> bool:
    """An 8 always plays; anything else must match the top's suit or rank."""
    if card.is_wild:
        return True
    if top is None:
        return True
    suit = declared_suit if declared_suit is not None else top.suit
    return card.suit == suit or card.rank == top.rank


def top_card(state: GameState) -> Card | None:
    return state.deck.top_of_discard()


def effective_suit(state: GameState) -> Suit | None:
    """Suit the next card must match: the declared suit of a covering 8, else the printed one."""
    if state.declared_suit is not None:
        return state.declared_suit
    top = top_card(state)
    return top.suit if top else None


def current_participant(state: GameState) -> Participant:
    return state.participants[state.turn_index % len(state.participants)]


def get_participant(state: GameState, participant_id: str) -> Participant | None:
    for p in state.participants:
        if p.id == participant_id:
            return p
    return None


def cards_in_play(state: GameState) -> list[Card]:
    """Every card across draw pile, discard pile and both hands."""
    cards = state.deck.all_cards()
    for p in state.participants:
        cards.extend(p.hand)
    return cards


def _next_rng(state: GameState) -> random.Random:
    rng = random.Random(f"{state.seed}:{state.shuffles}")
    state.shuffles += 1
    return rng


def _phase_for(participant: Participant) -> TurnPhase:
    return TurnPhase.BOT_TURN if participant.is_bot else TurnPhase.HUMAN_TURN


def _advance_turn(state: GameState) -> None:
    state.turn_index = (state.turn_index + 1) % len(state.participants)
    state.phase = _phase_for(current_participant(state))


def _require_active(state: GameState) -> None:
    if state.phase == TurnPhase.GAME_OVER:
        raise GameOverError()


# ==========================================================================
# Engine entry points
# ==========================================================================


def new_game(
    participant_names: Sequence[str] = (DEFAULT_HUMAN_NAME, DEFAULT_BOT_NAME),
    options: CrazyEightsOptions | None = None,
) -> GameState:
    """Shuffle a fresh deck, deal both hands and turn the first discard.

    participant_names is (human, bot); blank names get the defaults. The
    human moves first. An 8 turned as the first discard stays as it is,
    with no declared suit, so its printed suit and rank govern the next play.
    """
    options = options or CrazyEightsOptions()
    if options.max_hand_size < options.deal_size:
        raise ValueError(
            f"max_hand_size ({options.max_hand_size}) is smaller than "
            f"deal_size ({options.deal_size})"
        )
    names = list(participant_names) + [""] * (2 - len(participant_names))
    human_name = names[0].strip() or DEFAULT_HUMAN_NAME
    bot_name = names[1].strip() or DEFAULT_BOT_NAME

    seed = options.seed if options.seed is not None else random.randrange(2**32)
    human = Participant(id=HUMAN_ID, name=human_name)
    bot = Participant(id=BOT_ID, name=bot_name, is_bot=True)
    state = GameState(
        participants=[human, bot],
        deck=Deck.standard(),
        deal_size=options.deal_size,
        max_hand_size=options.max_hand_size,
        seed=seed,
    )

    state.deck.shuffle(_next_rng(state))
    state.deck.deal_out(human.hand, bot.hand, options.deal_size)
    first = state.deck.play_first()
    state.phase = _phase_for(current_participant(state))
    log.debug("new game seed=%s, first discard %s", seed, first)
    return state


def legal_moves(state: GameState) -> set[int]:
    """Hand indices the participant to move may play. Never mutates state."""
    if state.phase == TurnPhase.GAME_OVER:
        return set()
    top = top_card(state)
    hand = current_participant(state).hand
    return {i for i, card in enumerate(hand) if is_legal(card, top, state.declared_suit)}


def apply_play(
    state: GameState, hand_index: int, declared_suit: Suit | None = None
) -> GameState:
    """Play hand[hand_index] for the participant to move.

    declared_suit is required when the card is an 8 and ignored otherwise.
    """
    _require_active(state)
    hand = current_participant(state).hand
    if not 0 <= hand_index < len(hand):
        raise IllegalPlayError(index=hand_index)
    card = hand[hand_index]
    if not is_legal(card, top_card(state), state.declared_suit):
        raise IllegalPlayError(card=card.glyph)
    if card.is_wild and declared_suit is None:
        raise WildSuitRequiredError(card=card.glyph)

    new = state.copy()
    player = current_participant(new)
    new.deck.play(player.hand, hand_index)
    new.declared_suit = declared_suit if card.is_wild else None
    new.last_action = Action.play(hand_index, new.declared_suit)

    if not player.hand:
        new.phase = TurnPhase.GAME_OVER
        new.winner_id = player.id
        log.debug("%s went out with %s", player.name, card)
        return new

    _advance_turn(new)
    return new


def apply_draw(state: GameState) -> GameState:
    """Draw one card for the participant to move; drawing ends the turn.

    When the draw pile is empty, everything under the top discard is
    shuffled back in first. EmptyDeckError is raised only if nothing
    could be recycled.
    """
    _require_active(state)
    player = current_participant(state)
    if player.is_hand_full(state.max_hand_size):
        raise HandFullError(limit=state.max_hand_size)

    new = state.copy()
    if new.deck.is_empty():
        moved = new.deck.reshuffle_discard(_next_rng(new))
        if not moved:
            raise EmptyDeckError()
        log.debug("reshuffled %d discards into the draw pile", moved)

    player = current_participant(new)
    player.hand.append(new.deck.draw_one())
    new.last_action = Action.draw()
    _advance_turn(new)
    return new


def apply_pass(state: GameState) -> GameState:
    """Give up the turn. The deck is not touched."""
    _require_active(state)
    new = state.copy()
    new.last_action = Action.pass_turn()
    _advance_turn(new)
    return new


def apply_action(state: GameState, action: Action) -> GameState:
    if action.kind == ActionKind.PLAY:
        if action.index is None:
            raise IllegalPlayError()
        return apply_play(state, action.index, action.suit)
    if action.kind == ActionKind.DRAW:
        return apply_draw(state)
    return apply_pass(state)


def is_game_over(state: GameState) -> Participant | None:
    """The winner once a hand has been emptied, otherwise None."""
    if state.phase != TurnPhase.GAME_OVER or state.winner_id is None:
        return None
    return get_participant(state, state.winner_id)
