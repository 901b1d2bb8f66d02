"""
Tests for the Crazy Eights session (turn state machine and host boundary).

Following the testing strategy:
- Unit tests for turn flow and error reporting
- Play tests that run whole games with the bot on both seats
- Persistence tests (save/reload during play)
"""

from pathlib import Path

from eights.games.base import Participant
from eights.games.crazyeights.game import CrazyEightsOptions, GameState, TurnPhase
from eights.games.crazyeights.session import TICKS_PER_SECOND, CrazyEightsSession
from eights.game_utils.actions import Action
from eights.game_utils.cards import Card, Deck, Suit, full_card_set
from eights.game_utils.errors import (
    IllegalPlayError,
    NotYourTurnError,
    WildSuitRequiredError,
)
from eights.messages.localization import Localization
from eights.users.test_user import MockUser

Localization.init(Path(__file__).resolve().parents[1] / "locales")

H, D, C, S = Suit.HEARTS, Suit.DIAMONDS, Suit.CLUBS, Suit.SPADES


def make_state(human_hand, bot_hand, top, turn_index=0, draw_pile=None, human_name="Alice"):
    used = set(human_hand) | set(bot_hand) | {top}
    if draw_pile is None:
        draw_pile = [c for c in full_card_set() if c not in used]
    return GameState(
        participants=[
            Participant(id="human", name=human_name, hand=list(human_hand)),
            Participant(id="bot", name="Bot", is_bot=True, hand=list(bot_hand)),
        ],
        deck=Deck(draw_pile=list(draw_pile), discard_pile=[top]),
        turn_index=turn_index,
        phase=TurnPhase.BOT_TURN if turn_index == 1 else TurnPhase.HUMAN_TURN,
        seed=5,
    )


def started_session(**option_overrides) -> tuple[CrazyEightsSession, MockUser]:
    options = CrazyEightsOptions(seed=3, **option_overrides)
    session = CrazyEightsSession(options=options, human_name="Alice")
    user = MockUser("Alice")
    session.attach_user("human", user)
    session.start()
    return session, user


class TestSessionFlow:
    def test_start_deals_and_announces(self):
        session, user = started_session()
        assert session.status == "playing"
        assert session.awaiting_human()
        assert session.human.name == "Alice"
        assert session.bot.name == "Bot"
        spoken = user.get_spoken_messages()
        assert spoken[0] == "New game started. Alice goes first."
        assert spoken[1].startswith("The first card is ")
        assert spoken[-1] == "Your turn. Play a card, draw, or pass."

    def test_human_play_then_bot_answers_after_delay(self):
        session, user = started_session(bot_delay=1)
        session.state = make_state([Card(9, H), Card(2, C)], [Card(3, H)], Card(5, H))

        assert session.execute_action(Action.play(0)) is None
        assert session.state.phase == TurnPhase.BOT_TURN
        assert "Alice played Nine of Hearts." in user.get_spoken_messages()

        for _ in range(TICKS_PER_SECOND):
            session.on_tick()
        assert session.state.phase == TurnPhase.BOT_TURN

        session.on_tick()  # decide
        session.on_tick()  # act
        assert session.state.phase == TurnPhase.GAME_OVER
        assert session.wins == {"bot": 1}
        assert user.get_last_spoken() == "Bot won this time. Better luck next game!"

    def test_illegal_play_reported_and_state_kept(self):
        session, user = started_session()
        session.state = make_state([Card(2, C)], [Card(3, S)], Card(7, D))
        before = session.state

        err = session.execute_action(Action.play(0))
        assert isinstance(err, IllegalPlayError)
        assert session.state is before
        assert user.messages[-1].data["buffer"] == "errors"
        assert user.get_last_spoken().startswith("That card cannot be played.")

    def test_wild_without_suit_prompts_for_suit(self):
        session, user = started_session()
        session.state = make_state([Card(8, C), Card(2, C)], [Card(3, S)], Card(7, D))

        err = session.execute_action(Action.play(0))
        assert isinstance(err, WildSuitRequiredError)
        prompt = user.get_last_spoken()
        assert prompt.startswith("Choose a suit for your wild card:")
        assert "Hearts" in prompt and "Spades" in prompt

        assert session.execute_action(Action.play(0, S)) is None
        assert session.state.declared_suit == S
        assert "Alice played an 8 and changed suit to Spades." in user.get_spoken_messages()

    def test_input_on_bot_turn_rejected(self):
        session, user = started_session()
        session.state = make_state([Card(2, C)], [Card(3, S)], Card(7, D), turn_index=1)
        err = session.execute_action(Action.draw())
        assert isinstance(err, NotYourTurnError)
        assert user.get_last_spoken() == "It is not your turn."

    def test_human_pass_and_draw(self):
        session, user = started_session(bot_delay=0)
        session.state = make_state([Card(2, C)], [Card(3, S)], Card(7, D))
        assert session.execute_action(Action.pass_turn()) is None
        assert "Alice passed." in user.get_spoken_messages()
        assert session.state.phase == TurnPhase.BOT_TURN

        session.on_tick()
        session.on_tick()
        assert "Bot drew a card." in user.get_spoken_messages()
        assert session.state.phase == TurnPhase.HUMAN_TURN

        assert session.execute_action(Action.draw()) is None
        assert session.human.hand_size() == 2

    def test_bot_passes_when_nothing_to_draw(self):
        session, user = started_session()
        session.state = make_state(
            [Card(2, C)], [Card(3, S)], Card(7, D), turn_index=1, draw_pile=[]
        )
        session.execute_bot_action(session.bot, Action.draw())
        assert session.state.phase == TurnPhase.HUMAN_TURN
        assert session.bot.hand == [Card(3, S)]
        assert "Bot passed." in user.get_spoken_messages()

    def test_win_then_new_game_after_reset_delay(self):
        session, user = started_session(reset_delay=2)
        session.state = make_state([Card(9, H)], [Card(3, S)], Card(5, H))

        assert session.execute_action(Action.play(0)) is None
        assert session.state.phase == TurnPhase.GAME_OVER
        assert session.wins == {"human": 1}
        assert "Congratulations, Alice! You won the game!" in user.get_spoken_messages()

        for _ in range(2 * TICKS_PER_SECOND - 1):
            session.on_tick()
        assert session.state.phase == TurnPhase.GAME_OVER

        session.on_tick()
        assert session.state.phase == TurnPhase.HUMAN_TURN
        assert session.games_played == 1
        assert [p.hand_size() for p in session.state.participants] == [8, 8]
        assert session.format_scores("en") == "Games won: Alice: 1 and Bot: 0"

    def test_describe_top_with_declared_suit(self):
        session, _ = started_session()
        session.state = make_state([Card(8, C), Card(2, C)], [Card(3, S)], Card(7, D))
        assert session.describe_top("en") == "Top card: Seven of Diamonds"
        session.execute_action(Action.play(0, H))
        assert session.describe_top("en") == "Top card: Eight of Clubs, suit changed to Hearts"

    def test_wins_tracked_per_seat_when_names_match(self):
        options = CrazyEightsOptions(seed=3, reset_delay=0)
        session = CrazyEightsSession(options=options, human_name="Bot")
        session.start()
        assert [p.name for p in session.state.participants] == ["Bot", "Bot"]

        session.state = make_state([Card(9, H)], [Card(3, S)], Card(5, H), human_name="Bot")
        session.execute_action(Action.play(0))
        assert session.wins == {"human": 1}
        assert session.format_scores("en") == "Games won: Bot: 1 and Bot: 0"


def dealt_cards(session: CrazyEightsSession) -> list:
    state = session.state
    return [list(p.hand) for p in state.participants] + [list(state.deck.discard_pile)]


class TestSessionDeals:
    def test_each_new_game_is_shuffled_again(self):
        session, _ = started_session(reset_delay=0)
        first_deal = dealt_cards(session)

        session.state = make_state([Card(9, H)], [Card(3, S)], Card(5, H))
        session.execute_action(Action.play(0))
        assert session.games_played == 1
        assert session.state.phase == TurnPhase.HUMAN_TURN
        assert dealt_cards(session) != first_deal

    def test_fixed_seed_repeats_the_whole_run(self):
        first, _ = started_session()
        second, _ = started_session()
        assert dealt_cards(first) == dealt_cards(second)
        assert first.state.seed == second.state.seed

    def test_unseeded_sessions_draw_fresh_seeds(self):
        session = CrazyEightsSession(human_name="Alice")
        session.start()
        assert session.options.seed is None
        assert [p.hand_size() for p in session.state.participants] == [8, 8]


class TestSessionPlay:
    def test_bot_games_complete(self):
        options = CrazyEightsOptions(seed=11, bot_delay=0, reset_delay=0, max_hand_size=52)
        session = CrazyEightsSession(options=options, human_name="Alice", autoplay_human=True)
        spectator = MockUser("Watcher")
        session.add_spectator(spectator)
        session.start()

        for _ in range(200000):
            if session.games_played >= 3:
                break
            session.on_tick()

        assert session.games_played == 3
        assert sum(session.wins.values()) == 3
        assert spectator.get_spoken_messages()

    def test_save_and_reload_during_play(self):
        options = CrazyEightsOptions(seed=21, bot_delay=0, reset_delay=1, max_hand_size=52)
        session = CrazyEightsSession(options=options, human_name="Alice", autoplay_human=True)
        session.start()

        for tick in range(200000):
            if session.games_played >= 1:
                break
            if tick % 50 == 0 and tick > 0:
                session = CrazyEightsSession.from_json(session.to_json())
            session.on_tick()

        assert session.games_played == 1
