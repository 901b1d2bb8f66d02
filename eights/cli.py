"""
Command-line host for Crazy Eights.

Usage examples:
    # Play against the bot in the terminal
    python -m eights play --name Alice

    # Reproducible game with a bigger deal
    python -m eights play --seed 42 -o deal_size=7

    # Let the bot play both seats for 10 games
    python -m eights simulate --games 10 --seed 1

    # Output as JSON for machine parsing
    python -m eights simulate --games 3 --json

    # Test serialization (save/restore after each tick)
    python -m eights simulate --games 2 --test-serialization

    # Show game options
    python -m eights show-options
"""

import argparse
import json
import sys
import time
from pathlib import Path
from typing import Any

from .games.base import BOT_NAMES, DEFAULT_HUMAN_NAME
from .games.crazyeights.game import CrazyEightsOptions
from .games.crazyeights.session import TICKS_PER_SECOND, CrazyEightsSession
from .game_utils.actions import Action
from .game_utils.cards import Suit, card_name
from .game_utils.options import get_option_meta
from .logging_utils import LOG_LEVEL, get_logger, setup_logging
from .messages.localization import Localization
from .users.base import User, generate_uuid

_MODULE_DIR = Path(__file__).parent
Localization.init(_MODULE_DIR / "locales")

log = get_logger(__name__)

META_COMMANDS = {"hand", "top", "score", "help", "quit"}
COMMAND_ALIASES = {
    "p": "play",
    "d": "draw",
    "s": "pass",
    "h": "hand",
    "t": "top",
    "q": "quit",
    "exit": "quit",
    "?": "help",
}


class ConsoleUser(User):
    """Prints everything the session says to the terminal."""

    def __init__(self, username: str, locale: str = "en"):
        self._uuid = generate_uuid()
        self._username = username
        self._locale = locale

    @property
    def uuid(self) -> str:
        return self._uuid

    @property
    def username(self) -> str:
        return self._username

    @property
    def locale(self) -> str:
        return self._locale

    def speak(self, text: str, buffer: str = "misc") -> None:
        prefix = "! " if buffer == "errors" else ""
        print(f"{prefix}{text}")


class SpectatorUser(User):
    """
    A spectator that captures all table talk.
    Used for simulations to watch games play out.
    """

    def __init__(self, json_mode: bool = False, quiet: bool = False):
        self._uuid = generate_uuid()
        self._json_mode = json_mode
        self._quiet = quiet
        self.messages: list[str] = []

    @property
    def uuid(self) -> str:
        return self._uuid

    @property
    def username(self) -> str:
        return "__spectator__"

    @property
    def locale(self) -> str:
        return "en"

    def speak(self, text: str, buffer: str = "misc") -> None:
        self.messages.append(text)
        if not self._quiet and not self._json_mode:
            print(f"  {text}")


def parse_command(text: str) -> Action | str | None:
    """
    Turn a line of input into an Action or a meta command name.

    Card numbers are 1-based, as shown in the hand listing:
        "play 3", "p 3 spades", "3 h", "draw", "pass", "hand", "quit"
    A bare number plays that card. Returns None for anything unrecognised.
    """
    words = text.strip().lower().split()
    if not words:
        return None
    head = COMMAND_ALIASES.get(words[0], words[0])
    if head.isdigit():
        head, words = "play", ["play"] + words
    if head == "draw" and len(words) == 1:
        return Action.draw()
    if head == "pass" and len(words) == 1:
        return Action.pass_turn()
    if head in META_COMMANDS and len(words) == 1:
        return head
    if head != "play" or len(words) not in (2, 3) or not words[1].isdigit():
        return None
    index = int(words[1]) - 1
    if index < 0:
        return None
    suit = None
    if len(words) == 3:
        suit = Suit.parse(words[2])
        if suit is None:
            return None
    return Action.play(index, suit)


def render_hand(session: CrazyEightsSession, locale: str) -> list[str]:
    """Numbered hand listing for the human seat, plus the bot's card count."""
    human = session.human
    bot = session.bot
    if human is None or bot is None:
        return []
    lines = [Localization.get(locale, "crazyeights-hand-header", player=human.name)]
    for number, card in enumerate(human.hand, 1):
        lines.append(f"  {number:>2}. {card.glyph:<4} {card_name(card, locale)}")
    lines.append(
        Localization.get(
            locale, "crazyeights-read-counts", player=bot.name, count=bot.hand_size()
        )
    )
    return lines


def load_options(args: argparse.Namespace) -> CrazyEightsOptions:
    """Build options from --options FILE, then -o key=value, then --seed."""
    if getattr(args, "options", None):
        options = CrazyEightsOptions.from_json(Path(args.options).read_text(encoding="utf-8"))
    else:
        options = CrazyEightsOptions()
    for item in getattr(args, "option", None) or []:
        key, sep, value = item.partition("=")
        if not sep or not options.set_option(key.strip(), value.strip()):
            raise ValueError(f"invalid option '{item}'")
    if getattr(args, "seed", None) is not None:
        options.seed = args.seed
    return options


def _ask_name() -> str:
    try:
        name = input("Enter your name: ")
    except EOFError:
        name = ""
    return name.strip() or DEFAULT_HUMAN_NAME


def _run_until_human(session: CrazyEightsSession, realtime: bool = True) -> None:
    """Tick the session until the human has to act."""
    while session.status == "playing" and not session.awaiting_human():
        session.on_tick()
        if realtime:
            time.sleep(1 / TICKS_PER_SECOND)


def cmd_play(args: argparse.Namespace) -> None:
    """Play against the bot in the terminal."""
    options = load_options(args)
    name = args.name if args.name is not None else _ask_name()
    user = ConsoleUser(name, locale=options.locale)
    session = CrazyEightsSession(options=options, human_name=name, bot_name=args.bot_name)
    session.attach_user("human", user)
    session.start()

    while True:
        _run_until_human(session)
        print()
        print(session.describe_top(user.locale))
        for line in render_hand(session, user.locale):
            print(line)
        try:
            text = input("> ")
        except EOFError:
            break
        command = parse_command(text)
        if command is None:
            user.speak_l("crazyeights-unknown-command", buffer="errors")
        elif command == "quit":
            break
        elif command == "score":
            print(session.format_scores(user.locale))
        elif command == "help":
            user.speak_l("crazyeights-help")
        elif isinstance(command, Action):
            session.execute_action(command)

    print(session.format_scores(user.locale))


class GameSimulator:
    """Runs bot-vs-bot games with a spectator."""

    def __init__(
        self,
        options: CrazyEightsOptions,
        games: int = 1,
        json_mode: bool = False,
        quiet: bool = False,
        max_ticks: int = 10000000,
        test_serialization: bool = False,
    ):
        self.options = options
        self.games = games
        self.json_mode = json_mode
        self.quiet = quiet
        self.max_ticks = max_ticks
        self.test_serialization = test_serialization

        self.session = CrazyEightsSession(
            options=options,
            human_name=BOT_NAMES[0],
            autoplay_human=True,
        )
        self.spectator = SpectatorUser(json_mode=json_mode, quiet=quiet)
        self.session.add_spectator(self.spectator)

    def _save_and_restore(self, tick: int) -> None:
        """Save the session to JSON and restore it, testing serialization."""
        spectators = list(self.session._spectators)
        try:
            session_json = self.session.to_json()
        except Exception as e:
            raise RuntimeError(f"Serialization failed at tick {tick}: {e}") from e
        try:
            self.session = CrazyEightsSession.from_json(session_json)
        except Exception as e:
            raise RuntimeError(f"Deserialization failed at tick {tick}: {e}") from e
        for spectator in spectators:
            self.session.add_spectator(spectator)

    def run(self) -> dict[str, Any]:
        """Run the simulation to completion. Returns results dict."""
        self.session.start()

        tick = 0
        serialization_error = None
        while self.session.games_played < self.games and tick < self.max_ticks:
            self.session.on_tick()
            tick += 1
            if self.test_serialization:
                try:
                    self._save_and_restore(tick)
                except RuntimeError as e:
                    serialization_error = str(e)
                    log.error(serialization_error)
                    break

        timed_out = tick >= self.max_ticks
        if timed_out:
            log.warning("simulation timed out after %d ticks", self.max_ticks)

        results: dict[str, Any] = {
            "games": self.session.games_played,
            "ticks": tick,
            "timed_out": timed_out,
            "players": self.session.seat_names(),
            "wins": dict(self.session.wins),
            "messages": self.spectator.messages,
        }
        if self.test_serialization:
            results["serialization_tested"] = True
            if serialization_error:
                results["serialization_error"] = serialization_error
            else:
                results["serialization_passed"] = True
        return results


def cmd_simulate(args: argparse.Namespace) -> None:
    """Simulate games with the bot policy on both seats."""
    simulator = GameSimulator(
        load_options(args),
        games=args.games,
        json_mode=args.json,
        quiet=args.quiet,
        max_ticks=args.max_ticks,
        test_serialization=args.test_serialization,
    )
    results = simulator.run()
    if args.json:
        print(json.dumps(results, indent=2))
        return
    print()
    print(f"Games: {results['games']} in {results['ticks']} ticks")
    for participant_id, name in results["players"].items():
        print(f"  {name}: {results['wins'].get(participant_id, 0)}")
    if results.get("serialization_error"):
        print(f"Error: {results['serialization_error']}")
        sys.exit(1)


def cmd_show_options(args: argparse.Namespace) -> None:
    """Show the configurable options and their defaults."""
    options = CrazyEightsOptions()
    options_list = []
    for field_name in options.__dataclass_fields__:
        option_data: dict[str, Any] = {
            "name": field_name,
            "default": getattr(options, field_name),
        }
        meta = get_option_meta(CrazyEightsOptions, field_name)
        if meta:
            if hasattr(meta, "min_val"):
                option_data["min"] = meta.min_val
            if hasattr(meta, "max_val"):
                option_data["max"] = meta.max_val
            if hasattr(meta, "choices"):
                option_data["choices"] = list(meta.choices)
            option_data["label"] = meta.get_label("en", option_data["default"])
        options_list.append(option_data)

    if args.json:
        print(json.dumps({"options": options_list}, indent=2))
        return
    for option in options_list:
        extra = ""
        if "min" in option:
            extra = f" ({option['min']}-{option['max']})"
        elif "choices" in option:
            extra = f" ({', '.join(option['choices'])})"
        print(f"  {option['name']}: {option['default']}{extra}")


def _add_option_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--option",
        "-o",
        action="append",
        help="Set game option (e.g., -o deal_size=7)",
    )
    parser.add_argument("--options", help="Load options from a JSON file")
    parser.add_argument("--seed", type=int, help="Seed for reproducible shuffles")


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="eights",
        description="Crazy Eights against a simple bot",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "--log-level",
        default=LOG_LEVEL,
        help=f"Logging level (default: {LOG_LEVEL}, from LOG_LEVEL)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    play_parser = subparsers.add_parser("play", help="Play against the bot")
    play_parser.add_argument("--name", help="Your name (prompted if omitted)")
    play_parser.add_argument("--bot-name", default="", help="Name of the bot")
    _add_option_arguments(play_parser)

    sim_parser = subparsers.add_parser("simulate", help="Simulate bot-vs-bot games")
    sim_parser.add_argument("--games", "-g", type=int, default=1, help="Games to play")
    sim_parser.add_argument("--json", action="store_true", help="Output as JSON")
    sim_parser.add_argument(
        "--quiet", "-q", action="store_true", help="Suppress game output"
    )
    sim_parser.add_argument(
        "--max-ticks",
        type=int,
        default=10000000,
        help="Maximum ticks before timeout (default: 10000000)",
    )
    sim_parser.add_argument(
        "--test-serialization",
        "-s",
        action="store_true",
        help="Save and restore the session after each tick to test serialization",
    )
    _add_option_arguments(sim_parser)

    options_parser = subparsers.add_parser("show-options", help="Show game options")
    options_parser.add_argument("--json", action="store_true", help="Output as JSON")

    args = parser.parse_args(argv)
    setup_logging(args.log_level)

    try:
        if args.command == "play":
            cmd_play(args)
        elif args.command == "simulate":
            cmd_simulate(args)
        elif args.command == "show-options":
            cmd_show_options(args)
        else:
            parser.print_help()
            sys.exit(1)
    except ValueError as e:
        parser.error(str(e))
    except KeyboardInterrupt:
        print()


if __name__ == "__main__":
    main()
