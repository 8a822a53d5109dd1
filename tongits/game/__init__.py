"""Game logic."""

from .analyzer import AnalysisError, MeldAnalysis, MeldAnalyzer, MeldType, is_valid_meld
from .scoring import score_residual_hand
from .validator import MoveValidator, ValidationResult, can_take_discard

__all__ = [
    "AnalysisError",
    "MeldAnalysis",
    "MeldAnalyzer",
    "MeldType",
    "is_valid_meld",
    "score_residual_hand",
    "MoveValidator",
    "ValidationResult",
    "can_take_discard",
]
