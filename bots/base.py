"""Common bot strategy interfaces."""

from __future__ import annotations

from typing import Optional

from briscola.state import GameState
from briscola.swap import can_swap_with_trump


class BotStrategy:
    """Base class for bot policies."""

    name: str = "BaseBot"

    def on_game_start(self, state: GameState, player: str) -> None:
        """Optional hook invoked when a new game is dealt."""
        return None

    def choose_swap(self, state: GameState, player: str) -> Optional[str]:
        """Return the id of a card to trade for the trump card, or None."""
        return None

    def play_card(self, state: GameState, player: str) -> str:
        """Return the id of the card to play."""
        hand = state.hand_of(player)
        if not hand:
            raise RuntimeError("No cards left to play.")
        return hand[0].card_id


def swappable_card(state: GameState, player: str) -> Optional[str]:
    """Id of a card in ``player``'s hand that may take the trump card, if any."""
    if state.trump_card is None or not state.deck:
        return None
    for card in state.hands[player]:
        if can_swap_with_trump(card, state.trump_card):
            return card.card_id
    return None
