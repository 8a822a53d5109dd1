"""Shared fixtures for engine and strategy tests."""

import pytest

from tongits.logging.formatters import parse_cards
from tongits.models.card import create_full_deck
from tongits.models.game_state import GameState
from tongits.models.player import Player


def build_state(
    hands: list[str],
    deck: str | None = None,
    discard: str = "",
    melds: list[list[str]] | None = None,
    current: int = 0,
    drawn: bool = False,
    turns_played: list[int] | None = None,
    sapawed: list[bool] | None = None,
) -> GameState:
    """Build a 3-player state from card codes.

    When ``deck`` is None the deck holds every card not used elsewhere, in
    full-deck order, so the 52-card partition holds.
    """
    melds = melds or [[], [], []]
    turns_played = turns_played or [0, 0, 0]
    sapawed = sapawed or [False, False, False]
    names = ["You", "Bot 1", "Bot 2"]

    players = [
        Player(
            id=seat,
            name=names[seat],
            is_human=seat == 0,
            hand=parse_cards(hands[seat]),
            exposed_melds=[parse_cards(m) for m in melds[seat]],
            turns_played=turns_played[seat],
            is_sapawed=sapawed[seat],
        )
        for seat in range(3)
    ]
    discard_pile = parse_cards(discard)

    if deck is None:
        used = set(discard_pile)
        for p in players:
            used.update(p.hand)
            for m in p.exposed_melds:
                used.update(m)
        deck_cards = [c for c in create_full_deck() if c not in used]
    else:
        deck_cards = parse_cards(deck)

    return GameState(
        players=players,
        current_player_index=current,
        deck=deck_cards,
        discard_pile=discard_pile,
        has_drawn_this_turn=drawn,
    )


@pytest.fixture
def make_state():
    return build_state
