"""Game models."""

from .card import (
    Card,
    Rank,
    Suit,
    build_shuffled_deck,
    create_full_deck,
    deal,
    point_value,
)
from .game_state import ActionType, DrawSource, GameAction, GameState
from .player import Player

__all__ = [
    "Card",
    "Rank",
    "Suit",
    "build_shuffled_deck",
    "create_full_deck",
    "deal",
    "point_value",
    "Player",
    "ActionType",
    "DrawSource",
    "GameAction",
    "GameState",
]
