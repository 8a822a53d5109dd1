"""Meld analysis for card combinations."""

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Iterable

from tongits.models.card import Card

MIN_MELD_SIZE = 3
MAX_SET_SIZE = 4


class MeldType(str, Enum):
    """Type of card combination."""

    INVALID = "invalid"
    SET = "set"  # Same rank, 3 or 4 cards
    RUN = "run"  # Same suit, consecutive ranks


class AnalysisError(IntEnum):
    """Reason a combination is not a meld."""

    NONE = 0
    TOO_FEW_CARDS = 1
    SET_TOO_LARGE = 2
    MIXED_SUITS = 3
    NOT_CONSECUTIVE = 4


@dataclass
class MeldAnalysis:
    """Result of analyzing a card combination."""

    meld_type: MeldType
    count: int
    error: AnalysisError = AnalysisError.NONE

    @property
    def is_valid(self) -> bool:
        """Check if the combination is a legal meld."""
        return self.error == AnalysisError.NONE and self.meld_type != MeldType.INVALID


class MeldAnalyzer:
    """Classifies card combinations as sets, runs or invalid.

    Input order does not matter; runs are checked on a rank-sorted copy.
    """

    def analyze(self, cards: Iterable[Card]) -> MeldAnalysis:
        """Analyze a card combination.

        Args:
            cards: Cards to analyze

        Returns:
            MeldAnalysis result
        """
        cards = list(cards)
        count = len(cards)

        if count < MIN_MELD_SIZE:
            return MeldAnalysis(
                meld_type=MeldType.INVALID,
                count=count,
                error=AnalysisError.TOO_FEW_CARDS,
            )

        # Same rank: a set, but only up to four cards
        if len(set(c.rank for c in cards)) == 1:
            if count > MAX_SET_SIZE:
                return MeldAnalysis(
                    meld_type=MeldType.SET,
                    count=count,
                    error=AnalysisError.SET_TOO_LARGE,
                )
            return MeldAnalysis(meld_type=MeldType.SET, count=count)

        if len(set(c.suit for c in cards)) != 1:
            return MeldAnalysis(
                meld_type=MeldType.INVALID,
                count=count,
                error=AnalysisError.MIXED_SUITS,
            )

        ranks = sorted(int(c.rank) for c in cards)
        for i in range(1, len(ranks)):
            if ranks[i] != ranks[i - 1] + 1:
                return MeldAnalysis(
                    meld_type=MeldType.INVALID,
                    count=count,
                    error=AnalysisError.NOT_CONSECUTIVE,
                )

        return MeldAnalysis(meld_type=MeldType.RUN, count=count)


_analyzer = MeldAnalyzer()


def is_valid_meld(cards: Iterable[Card]) -> bool:
    """Check if cards form a same-rank set of 3-4 or a same-suit run of 3+."""
    return _analyzer.analyze(cards).is_valid


def is_set(cards: Iterable[Card]) -> bool:
    """Check if cards form a same-rank set."""
    analysis = _analyzer.analyze(cards)
    return analysis.is_valid and analysis.meld_type == MeldType.SET


def is_run(cards: Iterable[Card]) -> bool:
    """Check if cards form a same-suit run."""
    analysis = _analyzer.analyze(cards)
    return analysis.is_valid and analysis.meld_type == MeldType.RUN
