"""Main entry point for the Tongits text client."""

import argparse
import logging
import sys
import time
from datetime import datetime
from pathlib import Path

from tongits.config import Config, load_config
from tongits.game.engine import GameEngine
from tongits.logging import GameLogConfig, GameLogger
from tongits.models.game_state import DrawSource, GameState
from tongits.utils.logger import GameDisplay, setup_logging

logger = logging.getLogger(__name__)

HELP_TEXT = """Commands:
  d                draw from deck
  t                take the top discard
  m I J K ...      meld hand cards
  s P M I ...      sapaw: add hand cards to player P's meld M
  x I              discard hand card I (ends turn)
  c                call draw
  q                quit"""


def generate_log_filename(log_dir: str, config: Config) -> str:
    """Generate log filename with timestamp and player names.

    Format: {ISO timestamp}_{player1}_{player2}_{player3}.jsonl
    """
    timestamp = datetime.now().strftime("%Y%m%dT%H%M%S")
    names = "_".join(n.replace(" ", "") for n in config.game.player_names)
    return str(Path(log_dir) / f"{timestamp}_{names}.jsonl")


def apply_command(engine: GameEngine, line: str) -> bool:
    """Apply one human command to the engine.

    Args:
        engine: Running engine
        line: Raw command line

    Returns:
        False if the player asked to quit, True otherwise.
    """
    parts = line.split()
    if not parts:
        return True

    verb, args = parts[0].lower(), parts[1:]
    try:
        numbers = [int(a) for a in args]
    except ValueError:
        print("Arguments must be card or seat numbers")
        return True

    before = engine.state
    if verb == "q":
        return False
    if verb == "d":
        engine.draw(DrawSource.DECK)
    elif verb == "t":
        engine.draw(DrawSource.DISCARD)
    elif verb == "m":
        engine.meld(numbers)
    elif verb == "s" and len(numbers) >= 3:
        engine.extend_meld(numbers[0], numbers[1], numbers[2:])
    elif verb == "x" and len(numbers) == 1:
        engine.discard(numbers[0])
    elif verb == "c":
        engine.call_draw()
    else:
        print(HELP_TEXT)
        return True

    if engine.state is before:
        print("Move not allowed")
    return True


def play_round(
    engine: GameEngine,
    display: GameDisplay,
    turn_delay: float,
) -> GameState | None:
    """Play one round to completion.

    Returns:
        Final state, or None if the human quit.
    """
    shown = 0
    while not engine.state.game_ended:
        state = engine.state
        if engine.is_bot_turn():
            if turn_delay > 0:
                time.sleep(turn_delay)
            engine.play_bot_turn()
        else:
            display.print_table(state)
            display.print_hands(state)
            display.print_hand(state.current_player)
            if engine.can_draw_from_discard():
                print("(you may take the top discard)")
            if not apply_command(engine, input("> ")):
                return None

        for action in engine.actions[shown:]:
            display.print_action(action)
        shown = len(engine.actions)

    return engine.state


def main() -> int:
    """Main entry point.

    Returns:
        Exit code (0 for success)
    """
    parser = argparse.ArgumentParser(
        description="Tongits card game against two bots"
    )
    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        help="Path to config file (YAML)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        help="Random seed for shuffling (overrides config)",
    )
    parser.add_argument(
        "-r",
        "--rounds",
        type=int,
        default=1,
        help="Number of rounds to play",
    )
    parser.add_argument(
        "--autoplay",
        action="store_true",
        help="Let a bot play the human seat too",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose output",
    )
    parser.add_argument(
        "--show-hands",
        action="store_true",
        help="Show bot hands in output",
    )
    parser.add_argument(
        "--game-log",
        type=Path,
        help="Directory for game log files (filename auto-generated)",
    )

    args = parser.parse_args()

    # Load config
    config = load_config(args.config)

    # Apply command-line overrides
    if args.seed is not None:
        config.game.seed = args.seed
    if args.autoplay:
        config.game.human_seat = None
        config.bot.turn_delay = 0.0
    if args.verbose:
        config.logging.level = "DEBUG"
    if args.show_hands:
        config.logging.show_hands = True

    game_log_enabled = args.game_log is not None or config.game_log.enabled
    game_log_dir = str(args.game_log) if args.game_log else config.game_log.output_path

    setup_logging(config.logging.level)
    display = GameDisplay(show_hands=config.logging.show_hands)

    if game_log_enabled:
        log_path = generate_log_filename(game_log_dir, config)
        game_log_config = GameLogConfig(enabled=True, output_path=log_path)
        print(f"Game log: {log_path}")
    else:
        game_log_config = GameLogConfig(enabled=False)

    try:
        with GameLogger(game_log_config) as game_logger:
            engine = GameEngine(config, game_logger=game_logger)
            wins = {p.id: 0 for p in engine.state.players}

            for round_number in range(1, args.rounds + 1):
                if round_number > 1:
                    engine.new_game()
                display.print_game_start(round_number, args.rounds)

                final = play_round(engine, display, config.bot.turn_delay)
                if final is None:
                    print("\nGame abandoned")
                    return 1

                display.print_game_end(final)
                if final.winner is not None:
                    wins[final.winner.id] += 1

            display.print_final_results(wins, engine.state)
            return 0

    except (KeyboardInterrupt, EOFError):
        print("\nInterrupted by user")
        return 1
    except Exception as e:
        logger.exception(f"Game error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
