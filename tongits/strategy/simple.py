"""Simple heuristic strategy.

Strategy:
- Draw: take the top discard if it adds a 3-card meld, or if matching
  ranks look scarce in the deck; otherwise draw from the deck
- Meld: lay down every 3-card meld found in hand
- Sapaw: extend at most one exposed meld with a single card
- End: call a draw when holding the lowest residual score, else discard the
  highest-value card
"""

import logging

from tongits.config import BotConfig
from tongits.game.scoring import score_residual_hand
from tongits.models.game_state import ActionType, GameState
from tongits.models.player import Player
from tongits.strategy.analyzer import (
    draw_probability,
    find_extension,
    find_possible_melds,
    highest_point_index,
)
from tongits.strategy.base import BotAction, Strategy

logger = logging.getLogger(__name__)


class SimpleStrategy(Strategy):
    """Greedy bot that plans a whole turn from one state snapshot.

    The bot reads every player's hand when comparing scores; it is not
    limited to public information.
    """

    def __init__(self, config: BotConfig | None = None):
        """Initialize strategy.

        Args:
            config: Bot configuration (uses defaults if not provided)
        """
        self.config = config or BotConfig()

    def plan_turn(self, state: GameState) -> list[BotAction]:
        """Plan the current player's turn.

        Melds, the extension and the discard are chosen from the hand as it
        is in ``state``; a card drawn by the planned draw is not part of it.
        """
        player = state.current_player
        actions: list[BotAction] = []

        if not state.has_drawn_this_turn:
            if state.is_deck_empty():
                if player.has_exposed_meld:
                    return [BotAction(kind=ActionType.CALL_DRAW)]
                return [self._discard_highest(player)]
            actions.append(
                BotAction(
                    kind=ActionType.DRAW,
                    from_discard=self.should_draw_from_discard(state),
                )
            )

        for meld in find_possible_melds(player.hand):
            actions.append(
                BotAction(
                    kind=ActionType.MELD,
                    card_indices=meld,
                    cards=tuple(player.hand[i] for i in meld),
                )
            )

        extension = find_extension(
            state, player.hand, self.config.excluded_sapaw_seats
        )
        if extension is not None:
            target_player, target_meld, card_index = extension
            actions.append(
                BotAction(
                    kind=ActionType.SAPAW,
                    card_indices=(card_index,),
                    cards=(player.hand[card_index],),
                    target_player=target_player,
                    target_meld=target_meld,
                )
            )

        if self.should_call_draw(state):
            actions.append(BotAction(kind=ActionType.CALL_DRAW))
        else:
            actions.append(self._discard_highest(player))

        logger.debug(
            f"{player.name} planned: {[a.kind.value for a in actions]}"
        )
        return actions

    def should_draw_from_discard(self, state: GameState) -> bool:
        """Decide between the top discard and the deck."""
        top = state.top_discard
        if top is None:
            return False

        hand = state.current_player.hand
        if len(find_possible_melds([*hand, top])) > len(find_possible_melds(hand)):
            return True

        return draw_probability(hand, [top]) < self.config.discard_draw_threshold

    def should_call_draw(self, state: GameState) -> bool:
        """Decide whether to end the round by score.

        Requires an exposed meld and a draw this turn, plus either an empty
        deck or a residual score no worse than every other player's.
        """
        player = state.current_player
        if not player.has_exposed_meld or not state.has_drawn_this_turn:
            return False
        if state.is_deck_empty():
            return True

        others = [
            score_residual_hand(p.hand, p.secret_melds)
            for i, p in enumerate(state.players)
            if i != state.current_player_index
        ]
        own = score_residual_hand(player.hand, player.secret_melds)
        return not others or own <= min(others)

    def _discard_highest(self, player: Player) -> BotAction:
        index = highest_point_index(player.hand)
        if index < 0:
            return BotAction(kind=ActionType.DISCARD)
        return BotAction(
            kind=ActionType.DISCARD,
            card_indices=(index,),
            cards=(player.hand[index],),
        )
