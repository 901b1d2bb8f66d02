"""Crazy Eights session: turn order, bot pacing and table talk.

A session wraps one GameState at a time and drives it with ticks
(TICKS_PER_SECOND per second). Hosts call on_tick() from their loop and
execute_action() with the human's commands; the bot acts on its own
after options.bot_delay seconds. When a hand empties, the winner is
announced and a fresh game is dealt after options.reset_delay seconds.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
import random

from mashumaro.mixins.json import DataClassJSONMixin

from ..base import Participant
from ...game_utils.actions import Action, ActionKind
from ...game_utils.bot_helper import BotHelper
from ...game_utils.cards import Card, Suit, card_name, suit_name
from ...game_utils.errors import (
    EmptyDeckError,
    GameError,
    HandFullError,
    NotYourTurnError,
    WildSuitRequiredError,
)
from ...logging_utils import get_logger
from ...messages.localization import Localization
from ...users.base import User
from .bot import bot_think
from .game import (
    BOT_ID,
    HUMAN_ID,
    CrazyEightsOptions,
    GameState,
    TurnPhase,
    apply_action,
    current_participant,
    get_participant,
    is_game_over,
    new_game,
    top_card,
)

log = get_logger(__name__)

TICKS_PER_SECOND = 20


@dataclass
class CrazyEightsSession(DataClassJSONMixin):
    """A human-vs-bot table that deals a new game whenever one ends."""

    options: CrazyEightsOptions = field(default_factory=CrazyEightsOptions)
    human_name: str = ""
    bot_name: str = ""
    autoplay_human: bool = False  # Let the bot policy play the human seat too
    state: GameState | None = None
    status: str = "waiting"  # waiting, playing
    games_played: int = 0
    wins: dict[str, int] = field(default_factory=dict)  # Participant id -> games won

    bot_think_ticks: int = 0
    bot_pending_action: Action | None = None
    hand_wait_ticks: int = 0

    def __post_init__(self):
        # Runtime only, not serialized
        self._users: dict[str, User] = {}  # participant id -> User
        self._spectators: list[User] = []

    # ==========================================================================
    # Users
    # ==========================================================================

    def attach_user(self, participant_id: str, user: User) -> None:
        self._users[participant_id] = user

    def add_spectator(self, user: User) -> None:
        self._spectators.append(user)

    def get_user(self, participant: Participant) -> User | None:
        return self._users.get(participant.id)

    def _all_users(self) -> list[User]:
        return list(self._users.values()) + self._spectators

    def broadcast_l(self, message_id: str, **kwargs) -> None:
        """Send a localized message to every attached user."""
        for user in self._all_users():
            user.speak_l(message_id, **kwargs)

    # ==========================================================================
    # State accessors
    # ==========================================================================

    @property
    def current_participant(self) -> Participant | None:
        if self.state is None:
            return None
        return current_participant(self.state)

    @property
    def human(self) -> Participant | None:
        return get_participant(self.state, HUMAN_ID) if self.state else None

    @property
    def bot(self) -> Participant | None:
        return get_participant(self.state, BOT_ID) if self.state else None

    def is_bot_controlled(self, participant: Participant) -> bool:
        return participant.is_bot or self.autoplay_human

    def awaiting_human(self) -> bool:
        """True when the game is waiting on input from the human seat."""
        return (
            self.status == "playing"
            and self.state is not None
            and self.state.phase == TurnPhase.HUMAN_TURN
            and not self.autoplay_human
        )

    # ==========================================================================
    # Game flow
    # ==========================================================================

    def start(self) -> None:
        self.status = "playing"
        self._new_game()

    def _new_game(self) -> None:
        self.hand_wait_ticks = 0
        self.bot_pending_action = None
        self.state = new_game((self.human_name, self.bot_name), self._game_options())
        self.human_name = self.state.participants[0].name
        self.bot_name = self.state.participants[1].name
        log.info("game %d dealt, seed=%s", self.games_played + 1, self.state.seed)

        first = current_participant(self.state)
        self.broadcast_l("crazyeights-new-hand", player=first.name)
        for user in self._all_users():
            user.speak_l("crazyeights-start-card", card=self.format_top_card(user.locale))
        self._start_turn()

    def _game_options(self) -> CrazyEightsOptions:
        """Options for the next deal, with a seed of its own derived from the session seed."""
        if self.options.seed is None:
            return self.options
        rng = random.Random(f"{self.options.seed}:{self.games_played}")
        return replace(self.options, seed=rng.randrange(2**32))

    def _start_turn(self) -> None:
        player = self.current_participant
        if player is None:
            return
        if self.is_bot_controlled(player):
            BotHelper.jolt_bot(self, ticks=self.options.bot_delay * TICKS_PER_SECOND)
            return
        user = self.get_user(player)
        if user:
            user.speak_l("crazyeights-your-turn")

    def on_tick(self) -> None:
        if self.status != "playing" or self.state is None:
            return
        if self.state.phase == TurnPhase.GAME_OVER:
            if self.hand_wait_ticks > 0:
                self.hand_wait_ticks -= 1
                if self.hand_wait_ticks == 0:
                    self._new_game()
            return
        BotHelper.on_tick(self)

    def bot_think(self, participant: Participant) -> Action:
        return bot_think(self.state)

    # ==========================================================================
    # Actions
    # ==========================================================================

    def execute_action(self, action: Action) -> GameError | None:
        """Apply a command from the human seat.

        Returns the rejection (already reported to the human) or None.
        """
        player = self.human
        if player is None or not self.awaiting_human():
            err = NotYourTurnError()
            if player is not None:
                self._report_error(player, err)
            return err
        return self._apply(player, action)

    def execute_bot_action(self, participant: Participant, action: Action) -> None:
        err = self._apply(participant, action)
        if isinstance(err, (HandFullError, EmptyDeckError)) and action.kind == ActionKind.DRAW:
            # Nothing to draw: the bot passes instead.
            self._apply(participant, Action.pass_turn())

    def _apply(self, participant: Participant, action: Action) -> GameError | None:
        old = self.state
        try:
            new = apply_action(old, action)
        except GameError as err:
            log.info("%s: %s rejected (%s)", participant.name, action.action_id, err)
            self._report_error(participant, err)
            return err

        log.debug("%s: %s", participant.name, action.action_id)
        self.state = new
        self._announce(participant, action, old, new)

        if new.phase == TurnPhase.GAME_OVER:
            self._end_game()
        else:
            self._start_turn()
        return None

    def _report_error(self, participant: Participant, err: GameError) -> None:
        user = self.get_user(participant)
        if not user:
            return
        kwargs = dict(err.kwargs)
        if isinstance(err, WildSuitRequiredError):
            kwargs["suits"] = Localization.format_list_or(
                user.locale, [suit_name(s, user.locale) for s in Suit]
            )
        user.speak_l(err.message_id, buffer="errors", **kwargs)

    def _announce(
        self, participant: Participant, action: Action, old: GameState, new: GameState
    ) -> None:
        if action.kind == ActionKind.DRAW and new.shuffles != old.shuffles:
            self.broadcast_l("crazyeights-deck-reshuffled")

        for user in self._all_users():
            locale = user.locale
            if action.kind == ActionKind.PLAY:
                card = top_card(new)
                if card is not None and card.is_wild and new.declared_suit is not None:
                    user.speak_l(
                        "crazyeights-player-plays-wild",
                        player=participant.name,
                        suit=suit_name(new.declared_suit, locale),
                    )
                else:
                    user.speak_l(
                        "crazyeights-player-plays",
                        player=participant.name,
                        card=self.format_card(card, locale),
                    )
            elif action.kind == ActionKind.DRAW:
                user.speak_l("crazyeights-player-draws", player=participant.name)
            else:
                user.speak_l("crazyeights-player-passes", player=participant.name)

    def _end_game(self) -> None:
        winner = is_game_over(self.state)
        if winner is None:
            return
        self.games_played += 1
        self.wins[winner.id] = self.wins.get(winner.id, 0) + 1
        log.info("game %d won by %s", self.games_played, winner.name)

        key = "crazyeights-winner-bot" if winner.is_bot else "crazyeights-winner-human"
        self.broadcast_l(key, player=winner.name)

        self.bot_pending_action = None
        self.hand_wait_ticks = self.options.reset_delay * TICKS_PER_SECOND
        if self.hand_wait_ticks == 0:
            self._new_game()

    # ==========================================================================
    # Formatting
    # ==========================================================================

    def format_card(self, card: Card | None, locale: str) -> str:
        if card is None:
            return Localization.get(locale, "crazyeights-no-top")
        return card_name(card, locale)

    def format_top_card(self, locale: str) -> str:
        top = top_card(self.state) if self.state else None
        if top is None:
            return Localization.get(locale, "crazyeights-no-top")
        return self.format_card(top, locale)

    def describe_top(self, locale: str) -> str:
        """Full line for the top of the discard, including any declared suit."""
        top = top_card(self.state) if self.state else None
        if top is None:
            return Localization.get(locale, "crazyeights-no-top")
        if self.state.declared_suit is not None:
            return Localization.get(
                locale,
                "crazyeights-top-card-wild",
                card=card_name(top, locale),
                suit=suit_name(self.state.declared_suit, locale),
            )
        return Localization.get(locale, "crazyeights-top-card", card=card_name(top, locale))

    def seat_names(self) -> dict[str, str]:
        """Participant id -> display name, for the seats that have a name yet."""
        names = {HUMAN_ID: self.human_name, BOT_ID: self.bot_name}
        return {pid: name for pid, name in names.items() if name}

    def format_scores(self, locale: str) -> str:
        parts = [
            f"{name}: {self.wins.get(participant_id, 0)}"
            for participant_id, name in self.seat_names().items()
        ]
        return Localization.get(
            locale,
            "crazyeights-session-score",
            score=Localization.format_list_and(locale, parts),
        )
