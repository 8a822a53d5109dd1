"""Logging utilities and game state display."""

import logging
import sys
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from tongits.models.game_state import GameAction, GameState
    from tongits.models.player import Player


def setup_logging(level: str = "INFO") -> None:
    """Configure logging for the application.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR)
    """
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stdout,
    )


def _cards(cards: list) -> str:
    return "[" + " ".join(str(c) for c in cards) + "]"


class GameDisplay:
    """Display game state to stdout."""

    def __init__(self, show_hands: bool = False):
        """Initialize display.

        Args:
            show_hands: Whether to show bot hands
        """
        self.show_hands = show_hands

    def print_separator(self) -> None:
        """Print a separator line."""
        print("=" * 60)

    def print_game_start(self, round_number: int, num_rounds: int) -> None:
        """Print game start message."""
        self.print_separator()
        print(f"ROUND {round_number}/{num_rounds}")
        self.print_separator()

    def print_table(self, state: "GameState") -> None:
        """Print piles and every player's melds."""
        top = state.top_discard
        print(f"\nDeck: {len(state.deck)} | Discard top: {top if top else '-'}")
        for player in state.players:
            melds = " ".join(_cards(m) for m in player.exposed_melds) or "-"
            status = " [SAPAWED]" if player.is_sapawed else ""
            print(f"  P{player.id} {player.name} ({len(player.hand)} cards){status}: {melds}")

    def print_hand(self, player: "Player") -> None:
        """Print a hand with the indices commands refer to."""
        cells = [f"{i}:{card}" for i, card in enumerate(player.hand)]
        print(f"Your hand: {' '.join(cells)}")

    def print_hands(self, state: "GameState") -> None:
        """Print bot hands (if show_hands is enabled)."""
        if not self.show_hands:
            return

        for player in state.players:
            if not player.is_human:
                print(f"  P{player.id}: {_cards(player.hand)}")

    def print_action(self, action: "GameAction") -> None:
        """Print one action log entry."""
        print(f"  {action.player}: {action.details}")

    def print_game_end(self, state: "GameState") -> None:
        """Print game end results."""
        print(f"\nRound {state.round_number} finished!")
        if state.winner is not None:
            print(f"Winner: {state.winner.name}")
        for player in state.players:
            print(
                f"  P{player.id} {player.name}: {player.score} points "
                f"(streak {player.consecutive_wins})"
            )

    def print_final_results(self, wins: dict[int, int], state: "GameState") -> None:
        """Print results over all rounds."""
        self.print_separator()
        print("FINAL RESULTS")
        self.print_separator()

        ranked = sorted(wins.items(), key=lambda x: x[1], reverse=True)
        for rank, (seat, count) in enumerate(ranked, 1):
            print(f"  #{rank}: {state.players[seat].name} - {count} wins")
