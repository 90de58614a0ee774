from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import List, Optional

from . import __version__
from .core.rng import RNG
from .engine.game import GameEngine
from .engine.status import GameStatus
from .logging_config import configure_logging
from .settings import GameSettings

logger = logging.getLogger(__name__)

BOMB_TOKENS = {"b", "bomb"}


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="mini-dungeon",
        description="MiniDungeon - scripted runner for the turn-based dungeon engine",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "moves",
        nargs="*",
        help="Actions to play in order: u/d/l/r (or up/down/left/right), b to activate a bomb.",
    )
    parser.add_argument("--difficulty", type=int, default=None, help="Starting difficulty 0-10.")
    parser.add_argument("--seed", type=int, default=None, help="Seed for reproducible maps and attacks.")
    parser.add_argument(
        "--settings",
        dest="settings_path",
        type=Path,
        default=None,
        help="Path to a user settings YAML file to load/override defaults.",
    )
    parser.add_argument(
        "--load",
        type=Path,
        default=None,
        help="Resume from a save file instead of starting fresh. Relative paths use the current directory.",
    )
    parser.add_argument(
        "--save",
        type=Path,
        default=None,
        help="Save the game after the moves are played. Relative paths use the current directory.",
    )
    parser.add_argument("--show-map", action="store_true", help="Print the map with the player after the run.")
    parser.add_argument("--scores", action="store_true", help="Print the leaderboard after the run.")
    parser.add_argument("--debug", action="store_true", help="Enable verbose debug logging.")
    return parser.parse_args(argv)


def _cli_path(path: Path) -> Path:
    # Shell paths are relative to the working directory, not the save directory.
    return path.expanduser().resolve()


def _flush(engine: GameEngine) -> None:
    for line in engine.messages:
        print(line)
    engine.clear_messages()


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    configure_logging(level=logging.DEBUG if args.debug else logging.WARNING)

    settings = GameSettings.load(user_path=args.settings_path)
    engine = GameEngine(settings, rng=RNG(args.seed))

    if args.load is not None:
        if not engine.load_game(_cli_path(args.load)):
            _flush(engine)
            return 1
    else:
        engine.start_game(args.difficulty)
    _flush(engine)

    for token in args.moves:
        if engine.status is not GameStatus.PLAYING:
            logger.info("Game over; ignoring remaining moves")
            break
        if token.strip().lower() in BOMB_TOKENS:
            engine.activate_bomb()
        else:
            engine.move_player(token)
        _flush(engine)

    exit_code = 0
    if args.save is not None:
        if not engine.save_game(_cli_path(args.save)):
            exit_code = 1
        _flush(engine)

    print(engine.player_status())
    if args.show_map:
        print(engine.render())
    if args.scores:
        print(engine.top_scores_display())
    return exit_code
