"""Deck creation, shuffling and dealing for Briscola."""

from __future__ import annotations

from random import Random
from typing import Dict, List, Optional, Sequence, Tuple

from .cards import Card, Rank, Suit

DECK_SIZE = 40


class DealError(RuntimeError):
    """Raised when the deck runs out while dealing."""


def build_deck() -> List[Card]:
    """Return the ordered 40-card deck."""
    return [Card(rank, suit) for suit in Suit for rank in Rank]


def shuffle_deck(cards: Sequence[Card], rng: Optional[Random] = None) -> List[Card]:
    """Return a uniformly shuffled copy of ``cards``."""
    shuffled = list(cards)
    (rng or Random()).shuffle(shuffled)
    return shuffled


def deal_round_robin(
    deck: Sequence[Card],
    players: Sequence[str],
    hand_size: int,
) -> Tuple[List[Card], Dict[str, List[Card]]]:
    """Deal ``hand_size`` cards to each player, one card per pass.

    Cards are popped from the end of the deck. Returns the remaining deck and
    the hands keyed by player id.
    """
    remaining = list(deck)
    hands: Dict[str, List[Card]] = {player: [] for player in players}
    for _ in range(hand_size):
        for player in players:
            if not remaining:
                raise DealError(f"Deck ran out while dealing to {player}.")
            hands[player].append(remaining.pop())
    return remaining, hands


def balance_deck(deck: Sequence[Card], player_count: int) -> Tuple[List[Card], List[Card]]:
    """Drop cards from the bottom until the deck divides evenly among players.

    Returns ``(deck, discarded)``.
    """
    if player_count <= 0:
        raise ValueError("player_count must be positive.")
    excess = len(deck) % player_count
    return list(deck[excess:]), list(deck[:excess])
