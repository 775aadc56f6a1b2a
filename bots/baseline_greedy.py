"""Baseline greedy bot."""

from __future__ import annotations

from typing import List, Optional, Sequence

from briscola.cards import Card, card_strength
from briscola.state import GameState
from briscola.trick import PlayedCard, winning_play

from .base import BotStrategy


def _cheapest(cards: Sequence[Card], trump) -> Card:
    # Shed points first, keep trumps, then keep strength.
    return min(cards, key=lambda c: (c.point_value(), c.suit is trump, -card_strength(c)))


def winning_cards(state: GameState, player: str) -> List[Card]:
    """Cards from ``player``'s hand that would currently take the trick."""
    if not state.play_area:
        return []
    winners = []
    for card in state.hands[player]:
        plays = state.play_area + (PlayedCard(player, card),)
        if winning_play(plays, state.trump_suit).player == player:
            winners.append(card)
    return winners


class GreedyBot(BotStrategy):
    name = "Greedy"

    def play_card(self, state: GameState, player: str) -> str:
        hand = list(state.hands[player])
        if not hand:
            raise RuntimeError("No cards left to play.")
        trump = state.trump_suit

        if not state.play_area:
            return _cheapest(hand, trump).card_id

        on_table = sum(play.card.point_value() for play in state.play_area)
        winners = winning_cards(state, player)
        if winners and on_table > 0:
            # Take the points with the weakest card that still wins.
            chosen: Optional[Card] = max(winners, key=lambda c: (c.suit is not trump, card_strength(c)))
            return chosen.card_id
        return _cheapest(hand, trump).card_id
