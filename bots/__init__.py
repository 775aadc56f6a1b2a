"""Bot strategies for Briscola."""

from .baseline_greedy import GreedyBot
from .baseline_trump_manager import TrumpManagerBot
from .random_bot import RandomBot

__all__ = ["GreedyBot", "TrumpManagerBot", "RandomBot"]
