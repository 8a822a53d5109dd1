"""Hand search helpers for bot decisions.

Every search scans indices in ascending order and stops at (or lists in)
first-found order, so plans are deterministic for a given state.
"""

from itertools import combinations
from typing import Iterable

from tongits.game.analyzer import is_valid_meld
from tongits.models.card import DECK_SIZE, Card, point_value
from tongits.models.game_state import GameState


def find_possible_melds(hand: list[Card]) -> list[tuple[int, int, int]]:
    """List every 3-card index combination of the hand that is a meld.

    Combinations may overlap; only literal 3-card subsets are tested.
    """
    return [
        (i, j, k)
        for i, j, k in combinations(range(len(hand)), 3)
        if is_valid_meld([hand[i], hand[j], hand[k]])
    ]


def find_extension(
    state: GameState,
    hand: list[Card],
    excluded_seats: Iterable[int] = (),
) -> tuple[int, int, int] | None:
    """Find the first single card that extends an exposed meld.

    Seats are scanned in order (the acting seat included), then melds,
    then hand cards.

    Args:
        state: Current game state
        hand: Acting player's hand
        excluded_seats: Seats whose melds are never considered

    Returns:
        Tuple of (target_player, target_meld, card_index), or None.
    """
    excluded = set(excluded_seats)
    for seat, player in enumerate(state.players):
        if seat in excluded:
            continue
        for meld_index, meld in enumerate(player.exposed_melds):
            for card_index, card in enumerate(hand):
                if is_valid_meld([*meld, card]):
                    return seat, meld_index, card_index
    return None


def draw_probability(hand: list[Card], seen: list[Card]) -> float:
    """Rough chance that an unseen card matches a rank already in hand.

    Args:
        hand: Cards in hand
        seen: Other cards known to be out of the deck

    Returns:
        Ratio of still-missing cards of held ranks to unseen cards.
    """
    held_ranks = set(c.rank for c in hand)
    unseen = DECK_SIZE - len(hand) - len(seen)
    if unseen <= 0:
        return 0.0
    missing = len(held_ranks) * 4 - len(hand)
    return missing / unseen


def highest_point_index(hand: list[Card]) -> int:
    """Index of the highest-value card (first one on ties), or -1 if empty."""
    best_index = -1
    best_points = -1
    for i, card in enumerate(hand):
        points = point_value(card)
        if points > best_points:
            best_points = points
            best_index = i
    return best_index
