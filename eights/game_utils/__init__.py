"""Shared game utilities."""

from .actions import Action, ActionKind
from .bot_helper import BotHelper
from .cards import Card, Deck, Suit, WILD_RANK, card_name, full_card_set, suit_name
from .errors import (
    EmptyDeckError,
    GameError,
    GameOverError,
    HandFullError,
    IllegalPlayError,
    NotYourTurnError,
    WildSuitRequiredError,
)
from .options import GameOptions, IntOption, MenuOption, option_field

__all__ = [
    "Action",
    "ActionKind",
    "BotHelper",
    "Card",
    "Deck",
    "Suit",
    "WILD_RANK",
    "card_name",
    "full_card_set",
    "suit_name",
    "EmptyDeckError",
    "GameError",
    "GameOverError",
    "HandFullError",
    "IllegalPlayError",
    "NotYourTurnError",
    "WildSuitRequiredError",
    "GameOptions",
    "IntOption",
    "MenuOption",
    "option_field",
]
