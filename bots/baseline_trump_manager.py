"""Baseline bot focused on trump management."""

from __future__ import annotations

from typing import Optional

from briscola.state import GameState

from .base import swappable_card
from .baseline_greedy import GreedyBot


class TrumpManagerBot(GreedyBot):
    """Greedy play, and always takes the face-up trump when the rules allow it."""

    name = "TrumpManager"

    def choose_swap(self, state: GameState, player: str) -> Optional[str]:
        return swappable_card(state, player)
