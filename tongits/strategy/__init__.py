"""Bot strategies."""

from tongits.strategy.base import BotAction, Strategy
from tongits.strategy.simple import SimpleStrategy

__all__ = ["BotAction", "Strategy", "SimpleStrategy"]
