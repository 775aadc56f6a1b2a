"""Trick (round) resolution."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from .cards import Card, Suit, card_strength


class TrickError(RuntimeError):
    """Raised when a trick cannot be evaluated."""


@dataclass(frozen=True)
class PlayedCard:
    player: str
    card: Card


def leading_suit(plays: Sequence[PlayedCard]) -> Optional[Suit]:
    return plays[0].card.suit if plays else None


def _strongest(plays: Sequence[PlayedCard]) -> PlayedCard:
    best = plays[0]
    for play in plays[1:]:
        if card_strength(play.card) < card_strength(best.card):
            best = play
    return best


def winning_play(plays: Sequence[PlayedCard], trump: Suit) -> PlayedCard:
    """Return the play that takes the trick.

    The strongest trump wins if any trump was played, otherwise the strongest
    card of the leading suit. Cards of other suits never win.
    """
    if not plays:
        raise TrickError("Cannot determine winner on empty trick.")

    trumps = [play for play in plays if play.card.suit is trump]
    if trumps:
        return _strongest(trumps)

    led = leading_suit(plays)
    following = [play for play in plays if play.card.suit is led]
    if following:
        return _strongest(following)

    return plays[0]


def evaluate_round(plays: Sequence[PlayedCard], trump: Suit) -> str:
    """Return the id of the player who wins the trick."""
    return winning_play(plays, trump).player
