"""Random baseline bot."""

from __future__ import annotations

import random
from typing import Optional

from briscola.state import GameState

from .base import BotStrategy, swappable_card


class RandomBot(BotStrategy):
    name = "Random"

    def __init__(self, seed: Optional[int] = None, swap_rate: float = 0.5) -> None:
        self._rng = random.Random(seed)
        self.swap_rate = swap_rate

    def choose_swap(self, state: GameState, player: str) -> Optional[str]:
        candidate = swappable_card(state, player)
        if candidate is None or self._rng.random() >= self.swap_rate:
            return None
        return candidate

    def play_card(self, state: GameState, player: str) -> str:
        hand = list(state.hands[player])
        if not hand:
            raise RuntimeError("No cards left to play.")
        return self._rng.choice(hand).card_id
