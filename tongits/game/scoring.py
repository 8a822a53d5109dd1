"""Residual hand scoring."""

from itertools import combinations
from typing import Sequence

from tongits.models.card import Card, hand_points


def _take_set(cards: list[Card]) -> list[Card] | None:
    """Remove and return the first same-rank triple (lowest indices first)."""
    for i, j, k in combinations(range(len(cards)), 3):
        if cards[i].rank == cards[j].rank == cards[k].rank:
            meld = [cards[i], cards[j], cards[k]]
            for index in (k, j, i):
                del cards[index]
            return meld
    return None


def _take_run(cards: list[Card]) -> list[Card] | None:
    """Remove and return the first run of three adjacent cards in rank order.

    Only neighbours in the stably rank-sorted list are considered, so a run
    whose cards are separated by another card of a repeated rank is missed.
    """
    ordered = sorted(cards, key=lambda c: c.rank)
    for a, b, c in zip(ordered, ordered[1:], ordered[2:]):
        if (
            a.suit == b.suit == c.suit
            and b.rank - a.rank == 1
            and c.rank - b.rank == 1
        ):
            for card in (c, b, a):
                cards.remove(card)
            return [a, b, c]
    return None


def find_and_remove_meld(cards: list[Card]) -> list[Card] | None:
    """Remove one meld from ``cards`` in place, sets before runs.

    Args:
        cards: Working hand, modified in place

    Returns:
        The removed meld, or None if no meld was found.
    """
    return _take_set(cards) or _take_run(cards)


def score_residual_hand(
    hand: Sequence[Card],
    prior_secret_melds: Sequence[Sequence[Card]] = (),
) -> int:
    """Score a hand after greedily removing every meld it can form.

    This is a greedy decomposition, not the optimal one: melds are taken one
    at a time in a fixed scan order until none is left.

    Args:
        hand: Cards in hand
        prior_secret_melds: Melds kept hidden in hand. Their cards are not in
            ``hand`` and they do not change the total.

    Returns:
        Point total of the cards left over.
    """
    working = list(hand)
    while find_and_remove_meld(working) is not None:
        pass
    return hand_points(working)
