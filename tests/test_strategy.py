"""Tests for bot strategy."""

import pytest

from tongits.config import BotConfig
from tongits.logging.formatters import parse_cards
from tongits.models.game_state import ActionType
from tongits.strategy import BotAction, SimpleStrategy
from tongits.strategy.analyzer import (
    draw_probability,
    find_extension,
    find_possible_melds,
    highest_point_index,
)


@pytest.fixture
def strategy():
    return SimpleStrategy(BotConfig())


class TestAnalyzerHelpers:
    """Tests for the hand search helpers."""

    def test_find_possible_melds(self):
        """Test every 3-card meld combination is listed in order."""
        hand = parse_cards("H3,D3,C3,S3,HK")
        assert find_possible_melds(hand) == [(0, 1, 2), (0, 1, 3), (0, 2, 3), (1, 2, 3)]

    def test_find_possible_melds_only_three_cards(self):
        """Test longer runs show up as their 3-card windows only."""
        hand = parse_cards("S7,S8,S9,S10")
        assert find_possible_melds(hand) == [(0, 1, 2), (1, 2, 3)]

    def test_find_possible_melds_none(self):
        """Test a hand without melds."""
        assert find_possible_melds(parse_cards("SK,DK,C2,H5")) == []

    def test_find_extension(self, make_state):
        """Test the first fitting seat, meld and card are returned."""
        state = make_state(
            ["HK,S10", "D2", "C5"],
            melds=[[], ["H2,H3,H4"], ["S7,S8,S9"]],
        )
        hand = state.players[0].hand

        assert find_extension(state, hand) == (2, 0, 1)

    def test_find_extension_skips_excluded_seats(self, make_state):
        """Test excluded seats are never chosen."""
        state = make_state(["S10", "D2", "C5"], melds=[[], ["S7,S8,S9"], []])
        hand = state.players[0].hand

        assert find_extension(state, hand, excluded_seats=[1]) is None
        assert find_extension(state, hand) == (1, 0, 0)

    def test_draw_probability(self):
        """Test the missing-over-unseen estimate."""
        hand = parse_cards("H3,D3,SK")
        # ranks {3, K}: 8 - 3 missing, 52 - 3 - 1 unseen
        assert draw_probability(hand, parse_cards("C7")) == pytest.approx(5 / 48)

    def test_draw_probability_no_unseen(self):
        """Test a zero denominator yields 0."""
        assert draw_probability([], [None] * 52) == 0.0

    def test_highest_point_index(self):
        """Test the first highest-value card is chosen."""
        assert highest_point_index(parse_cards("H5,HK,DQ,S9")) == 1
        assert highest_point_index(parse_cards("HA")) == 0
        assert highest_point_index([]) == -1


class TestSimpleStrategyDraw:
    """Tests for the draw decision."""

    def test_plan_starts_with_draw(self, strategy, make_state):
        """Test an undrawn turn begins with a draw."""
        plan = strategy.plan_turn(make_state(["HA,D3,C5", "S2", "S4"]))

        assert plan[0].kind == ActionType.DRAW
        assert plan[0].from_discard is False
        assert plan[-1].kind == ActionType.DISCARD

    def test_takes_discard_that_adds_meld(self, strategy, make_state):
        """Test the top discard is chosen when it completes a meld."""
        state = make_state(["H3,D3,SK,HA,D5,C7,S9", "S2", "S4"], discard="C3")

        assert strategy.should_draw_from_discard(state)
        assert strategy.plan_turn(state)[0].from_discard is True

    def test_deck_when_discard_is_useless(self, strategy, make_state):
        """Test the deck is chosen when the discard adds nothing."""
        state = make_state(["HA,D3,C5,S7,H9,DJ", "S2", "S4"], discard="SK")

        assert not strategy.should_draw_from_discard(state)

    def test_discard_when_ranks_scarce(self, strategy, make_state):
        """Test a low match probability favours the discard pile."""
        # One card of rank 4 left unseen: 1/48 < 0.2
        state = make_state(["H4,D4,C4", "S2", "S3"], discard="SK")

        assert strategy.should_draw_from_discard(state)

    def test_threshold_from_config(self, make_state):
        """Test the threshold comes from configuration."""
        state = make_state(["H4,D4,C4", "S2", "S3"], discard="SK")
        strategy = SimpleStrategy(BotConfig(discard_draw_threshold=0.0))

        assert not strategy.should_draw_from_discard(state)

    def test_empty_discard_pile(self, strategy, make_state):
        """Test there is nothing to take from an empty pile."""
        assert not strategy.should_draw_from_discard(make_state(["H4,D4", "S2", "S3"]))


class TestSimpleStrategyPlan:
    """Tests for the rest of the plan."""

    def test_lists_every_meld(self, strategy, make_state):
        """Test overlapping melds are all planned with their cards."""
        state = make_state(["H3,D3,C3,S3", "S2", "S4"], drawn=True)
        plan = strategy.plan_turn(state)
        melds = [a for a in plan if a.kind == ActionType.MELD]

        assert [a.card_indices for a in melds] == [
            (0, 1, 2),
            (0, 1, 3),
            (0, 2, 3),
            (1, 2, 3),
        ]
        assert melds[0].cards == tuple(parse_cards("H3,D3,C3"))

    def test_sapaw_skips_seat_one(self, make_state):
        """Test seat 1's melds are never extended by default."""
        strategy = SimpleStrategy()
        state = make_state(
            ["H2", "D2", "S10,HK,D4"],
            melds=[[], ["S7,S8,S9"], []],
            current=2,
            drawn=True,
        )

        plan = strategy.plan_turn(state)

        assert not any(a.kind == ActionType.SAPAW for a in plan)

    def test_sapaw_single_extension(self, strategy, make_state):
        """Test at most one extension is planned."""
        state = make_state(
            ["H2", "D2", "S10,H5,D4"],
            melds=[["S7,S8,S9", "H2,H3,H4"], [], []],
            current=2,
            drawn=True,
        )

        sapaws = [a for a in strategy.plan_turn(state) if a.kind == ActionType.SAPAW]

        assert sapaws == [
            BotAction(
                kind=ActionType.SAPAW,
                card_indices=(0,),
                cards=tuple(parse_cards("S10")),
                target_player=0,
                target_meld=0,
            )
        ]

    def test_sapaw_own_meld(self, strategy, make_state):
        """Test the bot may extend its own meld."""
        state = make_state(
            ["H2", "D2", "HK,S10"],
            melds=[[], [], ["S7,S8,S9"]],
            current=2,
            drawn=True,
        )

        sapaw = [a for a in strategy.plan_turn(state) if a.kind == ActionType.SAPAW][0]

        assert sapaw.target_player == 2
        assert sapaw.cards == tuple(parse_cards("S10"))

    def test_discards_highest(self, strategy, make_state):
        """Test the first highest-value card is discarded."""
        state = make_state(["H5,HK,DQ,S9", "S2", "S4"], drawn=True)
        plan = strategy.plan_turn(state)

        assert plan[-1].kind == ActionType.DISCARD
        assert plan[-1].card_index == 1
        assert plan[-1].cards == tuple(parse_cards("HK"))

    def test_calls_with_lowest_score(self, strategy, make_state):
        """Test a drawn bot with a meld and the lowest score calls."""
        state = make_state(
            ["SK,DQ", "HA,D2", "S9,D8"],
            melds=[[], ["C7,C8,C9"], []],
            current=1,
            drawn=True,
        )

        assert strategy.should_call_draw(state)
        assert strategy.plan_turn(state)[-1].kind == ActionType.CALL_DRAW

    def test_no_call_without_meld(self, strategy, make_state):
        """Test a bot without an exposed meld never calls."""
        state = make_state(["SK,DQ", "HA,D2", "S9,D8"], current=1, drawn=True)

        assert not strategy.should_call_draw(state)

    def test_no_call_with_higher_score(self, strategy, make_state):
        """Test a bot behind on score keeps playing."""
        state = make_state(
            ["HA", "SK,D2", "S9,D8"],
            melds=[[], ["C7,C8,C9"], []],
            current=1,
            drawn=True,
        )

        assert not strategy.should_call_draw(state)

    def test_call_on_empty_deck_before_draw(self, strategy, make_state):
        """Test an empty deck with a meld plans only a call."""
        state = make_state(
            ["SK", "HA,D2", "S9"],
            deck="",
            melds=[[], ["C7,C8,C9"], []],
            current=1,
        )

        assert strategy.plan_turn(state) == [BotAction(kind=ActionType.CALL_DRAW)]

    def test_discard_on_empty_deck_without_meld(self, strategy, make_state):
        """Test an empty deck without melds plans only a discard."""
        state = make_state(["SK", "HA,D2", "S9"], deck="", current=1)

        plan = strategy.plan_turn(state)

        assert len(plan) == 1
        assert plan[0].kind == ActionType.DISCARD
        assert plan[0].cards == tuple(parse_cards("D2"))

    def test_planning_is_pure(self, strategy, make_state):
        """Test planning leaves the state unchanged."""
        state = make_state(
            ["H3,D3,C3,S10,HK", "D2", "C5"],
            melds=[[], [], ["S7,S8,S9"]],
            discard="H4",
        )
        before = state.model_copy(deep=True)

        strategy.plan_turn(state)

        assert state == before
