"""Game state models."""

from enum import Enum

from pydantic import BaseModel, Field

from .card import Card
from .player import Player


class ActionType(str, Enum):
    """Kind of a logged game action (values match the UI timeline keys)."""

    DRAW = "draw"
    MELD = "meld"
    SAPAW = "sapaw"  # Extend an exposed meld
    DISCARD = "discard"
    CALL_DRAW = "callDraw"  # Any game end: call, deck exhaustion or Tongits


class DrawSource(str, Enum):
    """Where a draw takes its card from."""

    DECK = "deck"
    DISCARD = "discard"


class GameAction(BaseModel, frozen=True):
    """One committed transition, as shown in the activity log."""

    kind: ActionType
    player: str
    details: str

    card: Card | None = None
    cards: list[Card] | None = None
    from_discard: bool | None = None
    target_player: int | None = None
    target_meld: int | None = None
    card_index: int | None = None


class GameState(BaseModel):
    """Overall game state.

    The engine never mutates a committed state: each transition works on a
    deep copy and replaces the whole object.
    """

    players: list[Player] = Field(default_factory=list)
    current_player_index: int = 0

    deck: list[Card] = Field(default_factory=list)  # Top = last element
    discard_pile: list[Card] = Field(default_factory=list)  # Top = last element

    winner: Player | None = None
    has_drawn_this_turn: bool = False
    game_ended: bool = False

    round_number: int = 1

    # Stored token scalars, never settled
    pot_money: int = 0
    table_charge: int = 0
    entry_fee: int = 0

    @property
    def current_player(self) -> Player:
        """Player whose turn it is."""
        return self.players[self.current_player_index]

    @property
    def top_discard(self) -> Card | None:
        """Top card of the discard pile, or None if the pile is empty."""
        return self.discard_pile[-1] if self.discard_pile else None

    def is_deck_empty(self) -> bool:
        """Check if the draw deck is exhausted."""
        return len(self.deck) == 0

    def all_cards(self) -> list[Card]:
        """Every card in play: deck, hands, exposed melds and discard pile."""
        cards = list(self.deck) + list(self.discard_pile)
        for player in self.players:
            cards.extend(player.hand)
            for meld in player.exposed_melds:
                cards.extend(meld)
        return cards

    def __str__(self) -> str:
        parts = [f"Round {self.round_number}"]
        if self.game_ended and self.winner is not None:
            parts.append(f"[ENDED, winner {self.winner.name}]")
        else:
            parts.append(f"{self.current_player.name}'s turn")
        parts.append(f"deck={len(self.deck)} discard={len(self.discard_pile)}")
        return " ".join(parts)
