"""Trump-swap rule: trade a Seven or a Two of trumps for the face-up trump card."""

from __future__ import annotations

from dataclasses import replace
from typing import Optional

from .cards import Card, Rank
from .errors import (
    CARD_NOT_IN_HAND,
    DECK_EXHAUSTED,
    NOT_TRUMP_SUIT,
    RANK_NOT_SWAPPABLE,
    UNKNOWN_PLAYER,
    InvalidSwap,
    WrongPhase,
)
from .state import GameState, Phase

SWAP_PHASES = frozenset({Phase.PLAYING, Phase.ROUND_COMPLETE})


def can_swap_with_trump(card: Card, trump_card: Optional[Card]) -> bool:
    """Return True if ``card`` may replace the face-up ``trump_card``.

    The Seven takes a major trump (Ace, Three, King, Knight, Jack); the Two
    takes any other. No other rank is ever swappable.
    """
    if trump_card is None or card.suit is not trump_card.suit:
        return False
    if card.rank is Rank.SEVEN:
        return trump_card.is_major()
    if card.rank is Rank.TWO:
        return not trump_card.is_major()
    return False


def swap_with_trump(state: GameState, player: str, card_id: str) -> GameState:
    """Return a new snapshot with the player's card and the trump card exchanged.

    The old trump card takes the offered card's slot in the hand, so hand
    size and order are preserved. Not gated by turn order.
    """
    if state.phase not in SWAP_PHASES:
        raise WrongPhase(f"Cannot swap during phase {state.phase}.")
    if state.trump_card is None or not state.deck:
        raise InvalidSwap("Swapping is closed once the deck is empty.", code=DECK_EXHAUSTED)
    if player not in state.hands:
        raise InvalidSwap(f"Unknown player {player!r}.", code=UNKNOWN_PLAYER)

    hand = list(state.hands[player])
    index = next((i for i, card in enumerate(hand) if card.card_id == card_id), None)
    if index is None:
        raise InvalidSwap(f"{card_id} is not in {player}'s hand.", code=CARD_NOT_IN_HAND)

    offered = hand[index]
    if offered.suit is not state.trump_card.suit:
        raise InvalidSwap(f"{card_id} is not a trump.", code=NOT_TRUMP_SUIT)
    if not can_swap_with_trump(offered, state.trump_card):
        raise InvalidSwap(
            f"{card_id} cannot take {state.trump_card.card_id}.", code=RANK_NOT_SWAPPABLE
        )

    hand[index] = state.trump_card
    hands = dict(state.hands)
    hands[player] = tuple(hand)
    return replace(state, trump_card=offered, hands=hands, last_swap_player=player)
