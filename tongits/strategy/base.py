"""Base strategy class for bot seats.

Defines the interface that all bot strategies must implement.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from tongits.models.card import Card
from tongits.models.game_state import ActionType, GameState


@dataclass(frozen=True)
class BotAction:
    """One intended action in a bot's plan.

    ``card_indices`` refer to the hand at planning time and ``cards`` holds
    the cards at those indices, so a driver can find them again after the
    hand has changed.
    """

    kind: ActionType
    from_discard: bool = False
    card_indices: tuple[int, ...] = ()
    cards: tuple[Card, ...] = ()
    target_player: int | None = None
    target_meld: int | None = None

    @property
    def card_index(self) -> int | None:
        """Single index of a discard intent."""
        return self.card_indices[0] if self.card_indices else None


class Strategy(ABC):
    """Abstract base class for bot strategies.

    All bot implementations must inherit from this class and implement
    plan_turn. Planning never mutates the state it is given.
    """

    @abstractmethod
    def plan_turn(self, state: GameState) -> list[BotAction]:
        """Plan the rest of the current player's turn.

        Args:
            state: Current game state (read-only)

        Returns:
            Ordered list of intended actions
        """
        pass
