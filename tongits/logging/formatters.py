"""Formatters for game log output."""

from tongits.models.card import RANK_NAMES, Card, Suit

# Suit codes for log output
SUIT_CODES: dict[Suit, str] = {
    Suit.HEARTS: "H",
    Suit.DIAMONDS: "D",
    Suit.CLUBS: "C",
    Suit.SPADES: "S",
}


def format_card(card: Card) -> str:
    """Format a single card to string.

    Args:
        card: Card to format.

    Returns:
        Formatted string (e.g., "H3" for 3 of hearts, "S10" for 10 of spades).
    """
    return f"{SUIT_CODES[card.suit]}{RANK_NAMES[card.rank]}"


def format_cards(cards: list[Card]) -> str:
    """Format cards to a comma-separated string, keeping their order.

    Args:
        cards: Cards to format.

    Returns:
        Comma-separated card strings (e.g., "H8,D8,C8").
        Empty string if no cards.
    """
    return ",".join(format_card(c) for c in cards)


def format_hands(hands: list[list[Card]]) -> dict[str, str]:
    """Format all players' hands to dict.

    Args:
        hands: List of hands indexed by seat.

    Returns:
        Dict mapping seat (as string) to formatted hand string.
    """
    return {str(i): format_cards(h) for i, h in enumerate(hands)}


def format_melds(melds: list[list[Card]]) -> list[str]:
    """Format a player's exposed melds, one string per meld."""
    return [format_cards(m) for m in melds]


_CODE_SUITS = {code: suit for suit, code in SUIT_CODES.items()}
_CODE_RANKS = {name: rank for rank, name in RANK_NAMES.items()}


def parse_card(code: str) -> Card:
    """Parse a card code produced by format_card.

    Args:
        code: Card code such as "H3", "S10" or "DK".

    Returns:
        The Card.

    Raises:
        ValueError: If the code is not a valid card code.
    """
    code = code.strip().upper()
    suit = _CODE_SUITS.get(code[:1])
    rank = _CODE_RANKS.get(code[1:])
    if suit is None or rank is None:
        raise ValueError(f"Invalid card code: {code!r}")
    return Card(suit=suit, rank=rank)


def parse_cards(codes: str) -> list[Card]:
    """Parse a comma-separated card list produced by format_cards."""
    return [parse_card(c) for c in codes.split(",") if c.strip()]
