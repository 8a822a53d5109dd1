"""Game engine for Tongits."""

from __future__ import annotations

import logging
import random
from typing import Sequence

from tongits.config import Config
from tongits.logging import GameLogger
from tongits.models.card import Card, build_shuffled_deck, deal
from tongits.models.game_state import ActionType, DrawSource, GameAction, GameState
from tongits.models.player import Player
from tongits.strategy.analyzer import highest_point_index
from tongits.strategy.base import BotAction, Strategy
from tongits.strategy.simple import SimpleStrategy

from .scoring import score_residual_hand
from .validator import MoveValidator, ValidationResult, can_take_discard

logger = logging.getLogger(__name__)

# Fixed table parameters
NUM_PLAYERS = 3
CARDS_PER_PLAYER = 12


def next_seat(seat: int, num_seats: int = NUM_PLAYERS) -> int:
    """Seat that plays after ``seat`` in the fixed cycle 0 -> 1 -> 2 -> 0."""
    return (seat + 1) % num_seats


class GameEngine:
    """Authoritative Tongits state machine.

    Every command validates against the current state, applies its change to
    a deep copy and commits the copy. A rejected command returns the current
    state object unchanged and logs nothing to the action log.
    """

    def __init__(
        self,
        config: Config | None = None,
        strategy: Strategy | None = None,
        game_logger: GameLogger | None = None,
        state: GameState | None = None,
        rng: random.Random | None = None,
    ):
        """Initialize game engine.

        Args:
            config: Configuration (uses defaults if not provided)
            strategy: Strategy used for bot seats (SimpleStrategy by default)
            game_logger: GameLogger instance for detailed logging
            state: Start from this state instead of dealing a new game
            rng: Random source for shuffling (seeded from config if not provided)
        """
        self.config = config or Config()
        self.strategy = strategy or SimpleStrategy(self.config.bot)
        self.game_logger = game_logger
        self.validator = MoveValidator()
        self._rng = rng or random.Random(self.config.game.seed)

        self._actions: list[GameAction] = []
        if state is None:
            self._state = self._deal(round_number=1)
            self._log_game_start()
        else:
            self._state = state

    # Queries

    @property
    def state(self) -> GameState:
        """Current committed state. Never mutated after it is committed."""
        return self._state

    @property
    def actions(self) -> tuple[GameAction, ...]:
        """Action log of the current game, in commit order."""
        return tuple(self._actions)

    def snapshot(self) -> GameState:
        """Independent deep copy of the current state."""
        return self._state.model_copy(deep=True)

    def is_deck_empty(self) -> bool:
        """Check if the draw deck is exhausted."""
        return self._state.is_deck_empty()

    def is_bot_turn(self) -> bool:
        """Check if a bot seat is to act in a running game."""
        return not self._state.game_ended and not self._state.current_player.is_human

    def can_draw_from_discard(self) -> bool:
        """Check if the current player may take the top discard right now."""
        if not self.validator.validate_draw(self._state).is_valid:
            return False
        return can_take_discard(self._state)

    # Session

    def new_game(self) -> GameState:
        """Deal a fresh game at the same table.

        Consecutive wins and token balances carry over; the action log
        starts empty.
        """
        previous = self._state
        self._state = self._deal(previous.round_number + 1, previous)
        self._actions = []
        self._log_game_start()
        return self._state

    def _deal(self, round_number: int, previous: GameState | None = None) -> GameState:
        """Shuffle and deal a new game state."""
        deck = build_shuffled_deck(self._rng)
        hands, remaining = deal(deck, NUM_PLAYERS, CARDS_PER_PLAYER)

        names = self.config.game.player_names
        players = []
        for seat, hand in enumerate(hands):
            carried = previous.players[seat] if previous else None
            players.append(
                Player(
                    id=seat,
                    name=names[seat],
                    is_human=seat == self.config.game.human_seat,
                    hand=hand,
                    consecutive_wins=carried.consecutive_wins if carried else 0,
                    points=carried.points if carried else 0,
                )
            )

        logger.debug(f"Round {round_number} dealt, {len(remaining)} cards left in deck")

        return GameState(
            players=players,
            current_player_index=0,
            deck=remaining,
            round_number=round_number,
            table_charge=self.config.economy.table_charge,
            entry_fee=self.config.economy.entry_fee,
        )

    # Commands

    def draw(self, source: DrawSource | str = DrawSource.DECK) -> GameState:
        """Draw one card for the current player.

        A discard draw that the player is not eligible for falls back to the
        deck. A deck draw from an empty deck does nothing.
        """
        state = self._state
        result = self.validator.validate_draw(state)
        if not result.is_valid:
            return self._reject("draw", result)

        source = DrawSource(source)
        from_discard = source == DrawSource.DISCARD and can_take_discard(state)
        if source == DrawSource.DISCARD and not from_discard:
            logger.debug(
                f"{state.current_player.name} cannot use the top discard, drawing from deck"
            )
        if not from_discard and state.is_deck_empty():
            return self._reject(
                "draw", ValidationResult(is_valid=False, error_message="Deck is empty")
            )

        new_state = state.model_copy(deep=True)
        player = new_state.current_player
        card = new_state.discard_pile.pop() if from_discard else new_state.deck.pop()
        player.hand.append(card)
        new_state.has_drawn_this_turn = True

        origin = "discard pile" if from_discard else "deck"
        return self._commit(
            new_state,
            GameAction(
                kind=ActionType.DRAW,
                player=player.name,
                details=f"Drew {card.describe()} from {origin}",
                card=card,
                from_discard=from_discard,
            ),
        )

    def meld(self, card_indices: Sequence[int]) -> GameState:
        """Lay down the indexed hand cards as a new exposed meld."""
        indices = list(card_indices)
        result = self.validator.validate_meld(self._state, indices)
        if not result.is_valid:
            return self._reject("meld", result)

        new_state = self._state.model_copy(deep=True)
        seat = new_state.current_player_index
        player = new_state.current_player
        cards = _take_cards(player, indices)
        player.exposed_melds.append(cards)

        actions = [
            GameAction(
                kind=ActionType.MELD,
                player=player.name,
                details=f"Melded {len(cards)} cards",
                cards=list(cards),
            )
        ]
        actions.extend(self._settle_if_hand_empty(new_state, seat))
        return self._commit(new_state, *actions)

    def extend_meld(
        self,
        target_player: int,
        target_meld: int,
        card_indices: Sequence[int],
    ) -> GameState:
        """Append the indexed hand cards to an exposed meld (sapaw).

        The meld's owner becomes sapawed, even when extending one's own meld.
        """
        indices = list(card_indices)
        result = self.validator.validate_extend(
            self._state, target_player, target_meld, indices
        )
        if not result.is_valid:
            return self._reject("sapaw", result)

        new_state = self._state.model_copy(deep=True)
        seat = new_state.current_player_index
        player = new_state.current_player
        target = new_state.players[target_player]

        cards = _take_cards(player, indices)
        target.exposed_melds[target_meld].extend(cards)
        target.is_sapawed = True

        actions = [
            GameAction(
                kind=ActionType.SAPAW,
                player=player.name,
                details=f"Sapawed {len(cards)} cards to {target.name}'s meld",
                cards=list(cards),
                target_player=target_player,
                target_meld=target_meld,
            )
        ]
        actions.extend(self._settle_if_hand_empty(new_state, seat))
        return self._commit(new_state, *actions)

    def discard(self, card_index: int) -> GameState:
        """Discard one card and pass the turn to the next seat."""
        result = self.validator.validate_discard(self._state, card_index)
        if not result.is_valid:
            return self._reject("discard", result)

        new_state = self._state.model_copy(deep=True)
        seat = new_state.current_player_index
        player = new_state.current_player

        card = player.hand.pop(card_index)
        new_state.discard_pile.append(card)
        player.is_sapawed = False
        player.turns_played += 1

        new_state.current_player_index = next_seat(seat, len(new_state.players))
        new_state.has_drawn_this_turn = False

        actions = [
            GameAction(
                kind=ActionType.DISCARD,
                player=player.name,
                details=f"Discarded {card.describe()}",
                card=card,
                card_index=card_index,
            )
        ]

        # Emptying the hand wins outright, ahead of deck exhaustion
        actions.extend(self._settle_if_hand_empty(new_state, seat))
        if not new_state.game_ended and new_state.is_deck_empty():
            logger.info("Deck exhausted, settling by score")
            actions.append(
                self._settle_by_score(
                    new_state, new_state.current_player, "Deck exhausted"
                )
            )

        return self._commit(new_state, *actions)

    def call_draw(self) -> GameState:
        """End the game by comparing residual scores (lowest wins)."""
        result = self.validator.validate_call_draw(self._state)
        if not result.is_valid:
            return self._reject("call draw", result)

        new_state = self._state.model_copy(deep=True)
        action = self._settle_by_score(new_state, new_state.current_player, "Called draw")
        return self._commit(new_state, action)

    def check_hand_emptied(self) -> GameState:
        """End the game if the current player has no cards left."""
        state = self._state
        if state.game_ended or state.current_player.hand:
            return state

        new_state = state.model_copy(deep=True)
        actions = self._settle_if_hand_empty(new_state, new_state.current_player_index)
        return self._commit(new_state, *actions)

    def play_bot_turn(self) -> GameState:
        """Play the current bot seat's turn through the regular commands.

        The strategy's plan is replayed intent by intent. Once a planned draw
        has gone through, the rest of the turn is re-planned against the
        actual hand. Intents whose cards are no longer in hand are skipped.
        If the plan leaves the turn open (for example a call rejected after
        drawing), the highest-value card is discarded.
        """
        state = self._state
        if not self.is_bot_turn():
            return state

        seat = state.current_player_index
        plan = self.strategy.plan_turn(state)

        if plan and plan[0].kind == ActionType.DRAW:
            self._apply_intent(plan[0])
            if self._state.has_drawn_this_turn:
                plan = self.strategy.plan_turn(self._state)
            else:
                plan = plan[1:]

        for intent in plan:
            if self._turn_over(seat):
                break
            self._apply_intent(intent)

        if not self._turn_over(seat):
            index = highest_point_index(self._state.current_player.hand)
            if index >= 0:
                logger.debug(f"{self._state.current_player.name} ends turn with fallback discard")
                self.discard(index)

        return self._state

    # Internals

    def _apply_intent(self, intent: BotAction) -> None:
        """Replay one planned action through the validated commands."""
        if intent.kind == ActionType.DRAW:
            self.draw(DrawSource.DISCARD if intent.from_discard else DrawSource.DECK)
            return
        if intent.kind == ActionType.CALL_DRAW:
            self.call_draw()
            return

        indices = self._locate(intent.cards)
        if indices is None:
            logger.debug(f"Skipping {intent.kind.value}: planned cards no longer in hand")
            return

        if intent.kind == ActionType.MELD:
            self.meld(indices)
        elif intent.kind == ActionType.SAPAW:
            self.extend_meld(intent.target_player, intent.target_meld, indices)
        elif intent.kind == ActionType.DISCARD:
            self.discard(indices[0])

    def _locate(self, cards: Sequence[Card]) -> list[int] | None:
        """Current hand indices of ``cards``, or None if any is missing."""
        hand = self._state.current_player.hand
        if not cards or any(c not in hand for c in cards):
            return None
        return [hand.index(c) for c in cards]

    def _turn_over(self, seat: int) -> bool:
        return self._state.game_ended or self._state.current_player_index != seat

    def _settle_if_hand_empty(self, state: GameState, seat: int) -> list[GameAction]:
        """End ``state`` with ``seat`` as winner if that hand is empty (Tongits)."""
        player = state.players[seat]
        if state.game_ended or player.hand:
            return []

        for index, p in enumerate(state.players):
            if index == seat:
                p.score = 0
                p.consecutive_wins += 1
            else:
                p.score = score_residual_hand(p.hand, p.secret_melds)
                p.consecutive_wins = 0

        state.winner = player.model_copy(deep=True)
        state.game_ended = True
        logger.info(f"{player.name} emptied their hand")

        return [
            GameAction(
                kind=ActionType.CALL_DRAW,
                player=player.name,
                details=f"Called Tongits! {player.name} wins with a score of 0.",
            )
        ]

    def _settle_by_score(self, state: GameState, caller: Player, reason: str) -> GameAction:
        """Score every hand and end ``state`` with the lowest score winning.

        Ties go to the earliest seat.
        """
        for p in state.players:
            p.score = score_residual_hand(p.hand, p.secret_melds)

        winner = state.players[0]
        for p in state.players[1:]:
            if p.score < winner.score:
                winner = p

        for p in state.players:
            p.consecutive_wins = p.consecutive_wins + 1 if p is winner else 0

        state.winner = winner.model_copy(deep=True)
        state.game_ended = True

        return GameAction(
            kind=ActionType.CALL_DRAW,
            player=caller.name,
            details=f"{reason}. {winner.name} wins with {winner.score} points.",
        )

    def _commit(self, new_state: GameState, *actions: GameAction) -> GameState:
        """Replace the current state and record the actions that produced it."""
        self._state = new_state
        for action in actions:
            self._actions.append(action)
            logger.info(f"{action.player}: {action.details}")
            if self.game_logger:
                self.game_logger.log_action(new_state.round_number, action)

        if new_state.game_ended and self.game_logger:
            self.game_logger.log_game_end(new_state)
        return new_state

    def _reject(self, operation: str, result: ValidationResult) -> GameState:
        logger.debug(
            f"Rejected {operation} by {self._state.current_player.name}: "
            f"{result.error_message}"
        )
        return self._state

    def _log_game_start(self) -> None:
        if self.game_logger:
            self.game_logger.log_game_start(self._state)
        logger.info(
            f"Round {self._state.round_number} started, "
            f"first player: {self._state.current_player.name}"
        )


def _take_cards(player: Player, indices: list[int]) -> list[Card]:
    """Remove the indexed cards from a hand, returning them in index order given."""
    cards = [player.hand[i] for i in indices]
    chosen = set(indices)
    player.hand = [c for i, c in enumerate(player.hand) if i not in chosen]
    return cards
