"""Player model."""

from pydantic import BaseModel, Field

from .card import Card


class Player(BaseModel):
    """Player state.

    ``hand`` order has no meaning for the rules but is kept stable because
    every command addresses cards by hand index.
    """

    id: int  # Seat index 0-2
    name: str = "Player"
    is_human: bool = False

    hand: list[Card] = Field(default_factory=list)
    exposed_melds: list[list[Card]] = Field(default_factory=list)
    secret_melds: list[list[Card]] = Field(default_factory=list)  # Reserved, never filled

    score: int = 0  # Residual score set when the game is settled
    consecutive_wins: int = 0
    points: int = 0  # Stored token balance, never settled

    is_sapawed: bool = False  # One of our melds was extended since our last discard
    turns_played: int = 0  # Number of discards made

    @property
    def has_exposed_meld(self) -> bool:
        """Check if this player has laid down at least one meld."""
        return len(self.exposed_melds) > 0

    def __str__(self) -> str:
        status = " (sapawed)" if self.is_sapawed else ""
        return f"Player{self.id}[{self.name}]{status}"

    def __repr__(self) -> str:
        return (
            f"Player(id={self.id}, name={self.name!r}, "
            f"hand={len(self.hand)}, melds={len(self.exposed_melds)})"
        )
