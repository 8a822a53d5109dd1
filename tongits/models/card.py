"""Card model, deck construction and dealing."""

import random
from enum import Enum, IntEnum

from pydantic import BaseModel


class Suit(str, Enum):
    """Card suit (declaration order is the deck construction order)."""

    HEARTS = "hearts"
    DIAMONDS = "diamonds"
    CLUBS = "clubs"
    SPADES = "spades"


class Rank(IntEnum):
    """Card rank.

    Value is the position in run order: A < 2 < ... < 10 < J < Q < K.
    There is no wraparound, so K-A-2 is never a run.
    """

    ACE = 1
    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13


# Map rank to display string
RANK_NAMES = {
    Rank.ACE: "A",
    Rank.TWO: "2",
    Rank.THREE: "3",
    Rank.FOUR: "4",
    Rank.FIVE: "5",
    Rank.SIX: "6",
    Rank.SEVEN: "7",
    Rank.EIGHT: "8",
    Rank.NINE: "9",
    Rank.TEN: "10",
    Rank.JACK: "J",
    Rank.QUEEN: "Q",
    Rank.KING: "K",
}

SUIT_SYMBOLS = {
    Suit.HEARTS: "♥",
    Suit.DIAMONDS: "♦",
    Suit.CLUBS: "♣",
    Suit.SPADES: "♠",
}

DECK_SIZE = 52


class Card(BaseModel, frozen=True):
    """Single playing card. Two cards are the same card iff suit and rank match."""

    suit: Suit
    rank: Rank

    @property
    def points(self) -> int:
        """Point value of this card (see point_value)."""
        return point_value(self)

    def describe(self) -> str:
        """Long form used in action log details, e.g. "10 of hearts"."""
        return f"{RANK_NAMES[self.rank]} of {self.suit.value}"

    def __str__(self) -> str:
        return f"{RANK_NAMES[self.rank]}{SUIT_SYMBOLS[self.suit]}"

    def __repr__(self) -> str:
        return str(self)


def point_value(card: Card) -> int:
    """Get the point value of a card.

    Ace counts 1, number cards their face value, J/Q/K count 10.
    """
    return min(int(card.rank), 10)


def hand_points(cards: list[Card]) -> int:
    """Sum of point values, with no meld removal."""
    return sum(point_value(c) for c in cards)


def create_full_deck() -> list[Card]:
    """Create the ordered 52-card universe (no jokers)."""
    return [Card(suit=suit, rank=rank) for suit in Suit for rank in Rank]


def build_shuffled_deck(rng: random.Random | None = None) -> list[Card]:
    """Create a full deck in uniformly random order.

    Args:
        rng: Random source. Uses the module-level generator if None.

    Returns:
        All 52 cards, each exactly once. The last element is the top.
    """
    cards = create_full_deck()
    (rng or random).shuffle(cards)
    return cards


def deal(
    deck: list[Card],
    player_count: int,
    per_player: int,
) -> tuple[list[list[Card]], list[Card]]:
    """Deal cards round-robin from the top of the deck.

    One card per player per round, for ``per_player`` rounds. If the deck
    runs out, dealing simply stops and later hands come up short.

    Args:
        deck: Deck to deal from (top = last element). Not modified.
        player_count: Number of hands.
        per_player: Cards per hand.

    Returns:
        Tuple of (hands, remaining deck).
    """
    remaining = list(deck)
    hands: list[list[Card]] = [[] for _ in range(player_count)]

    for _ in range(per_player):
        for hand in hands:
            if remaining:
                hand.append(remaining.pop())

    return hands, remaining
