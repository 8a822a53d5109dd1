"""Move validation for game transitions."""

from dataclasses import dataclass
from itertools import combinations
from typing import Sequence

from tongits.models.card import Card
from tongits.models.game_state import GameState
from tongits.models.player import Player

from .analyzer import MIN_MELD_SIZE, MeldAnalyzer

# A player must have discarded this many times before calling a draw
MIN_TURNS_TO_CALL = 2


@dataclass
class ValidationResult:
    """Result of move validation."""

    is_valid: bool
    error_message: str = ""


def can_take_discard(state: GameState) -> bool:
    """Check if the current player may take the top discard.

    The top card must complete a 3-card meld with two cards from the hand,
    or extend one of the player's own exposed melds.
    """
    top = state.top_discard
    if top is None:
        return False

    analyzer = MeldAnalyzer()
    player = state.current_player
    for first, second in combinations(player.hand, 2):
        if analyzer.analyze([top, first, second]).is_valid:
            return True
    return any(analyzer.analyze([*meld, top]).is_valid for meld in player.exposed_melds)


class MoveValidator:
    """Validates transitions requested against a game state."""

    def __init__(self, analyzer: MeldAnalyzer | None = None):
        """Initialize validator.

        Args:
            analyzer: MeldAnalyzer instance (creates one if not provided)
        """
        self.analyzer = analyzer or MeldAnalyzer()

    def validate_draw(self, state: GameState) -> ValidationResult:
        """Validate a draw (the source fallback is decided by the engine)."""
        if state.game_ended:
            return ValidationResult(is_valid=False, error_message="Game has ended")
        if state.has_drawn_this_turn:
            return ValidationResult(
                is_valid=False,
                error_message="Already drew this turn",
            )
        return ValidationResult(is_valid=True)

    def validate_meld(
        self,
        state: GameState,
        card_indices: Sequence[int],
    ) -> ValidationResult:
        """Validate laying down a new meld from the current hand.

        Args:
            state: Current game state
            card_indices: Hand indices of the cards to meld

        Returns:
            ValidationResult
        """
        if state.game_ended:
            return ValidationResult(is_valid=False, error_message="Game has ended")

        hand = state.current_player.hand
        result = self._check_indices(hand, card_indices, minimum=MIN_MELD_SIZE)
        if not result.is_valid:
            return result

        analysis = self.analyzer.analyze(hand[i] for i in card_indices)
        if not analysis.is_valid:
            return ValidationResult(
                is_valid=False,
                error_message=f"Invalid meld: {analysis.error.name}",
            )
        return ValidationResult(is_valid=True)

    def validate_extend(
        self,
        state: GameState,
        target_player: int,
        target_meld: int,
        card_indices: Sequence[int],
    ) -> ValidationResult:
        """Validate extending an exposed meld (sapaw).

        The target meld followed by the selected cards must still be a meld.

        Args:
            state: Current game state
            target_player: Seat index owning the meld
            target_meld: Index of the meld in that player's exposed melds
            card_indices: Hand indices of the acting player's cards

        Returns:
            ValidationResult
        """
        if state.game_ended:
            return ValidationResult(is_valid=False, error_message="Game has ended")

        if not 0 <= target_player < len(state.players):
            return ValidationResult(
                is_valid=False,
                error_message=f"No player at seat {target_player}",
            )
        melds = state.players[target_player].exposed_melds
        if not 0 <= target_meld < len(melds):
            return ValidationResult(
                is_valid=False,
                error_message=f"Player {target_player} has no meld {target_meld}",
            )

        hand = state.current_player.hand
        result = self._check_indices(hand, card_indices, minimum=1)
        if not result.is_valid:
            return result

        extended = [*melds[target_meld], *(hand[i] for i in card_indices)]
        analysis = self.analyzer.analyze(extended)
        if not analysis.is_valid:
            return ValidationResult(
                is_valid=False,
                error_message=f"Extended meld is invalid: {analysis.error.name}",
            )
        return ValidationResult(is_valid=True)

    def validate_discard(self, state: GameState, card_index: int) -> ValidationResult:
        """Validate discarding one card from the current hand."""
        if state.game_ended:
            return ValidationResult(is_valid=False, error_message="Game has ended")
        return self._check_indices(state.current_player.hand, [card_index], minimum=1)

    def validate_call_draw(self, state: GameState) -> ValidationResult:
        """Validate a voluntary call to end the round by score.

        The caller must not have drawn this turn, must have discarded at
        least MIN_TURNS_TO_CALL times and must not be sapawed.
        """
        if state.game_ended:
            return ValidationResult(is_valid=False, error_message="Game has ended")

        player: Player = state.current_player
        if state.has_drawn_this_turn:
            return ValidationResult(
                is_valid=False,
                error_message="Cannot call after drawing",
            )
        if player.turns_played < MIN_TURNS_TO_CALL:
            return ValidationResult(
                is_valid=False,
                error_message=(
                    f"Need {MIN_TURNS_TO_CALL} turns before calling, "
                    f"played {player.turns_played}"
                ),
            )
        if player.is_sapawed:
            return ValidationResult(
                is_valid=False,
                error_message="Cannot call while sapawed",
            )
        return ValidationResult(is_valid=True)

    def _check_indices(
        self,
        hand: list[Card],
        card_indices: Sequence[int],
        minimum: int,
    ) -> ValidationResult:
        """Check that indices are distinct, in range and numerous enough."""
        if len(card_indices) < minimum:
            return ValidationResult(
                is_valid=False,
                error_message=f"Need at least {minimum} cards, got {len(card_indices)}",
            )
        if len(set(card_indices)) != len(card_indices):
            return ValidationResult(
                is_valid=False,
                error_message="Duplicate card indices",
            )
        for index in card_indices:
            if not 0 <= index < len(hand):
                return ValidationResult(
                    is_valid=False,
                    error_message=f"Card index {index} out of range",
                )
        return ValidationResult(is_valid=True)
