from typing import List, Sequence

from briscola.cards import Card, Rank, Suit
from briscola.deck import build_deck


def card(rank: Rank, suit: Suit) -> Card:
    return Card(rank, suit)


def stacked_deck(top: Sequence[Card]) -> List[Card]:
    """Deck whose pops yield ``top`` in order: trump first, then the deal, then draws."""
    rest = [c for c in build_deck() if c not in top]
    return rest + list(reversed(top))


def assert_conserved(state) -> None:
    assert state.card_count() == 40
    everything = list(state.deck) + [play.card for play in state.play_area]
    for hand in state.hands.values():
        everything.extend(hand)
    for stack in state.stacks.values():
        everything.extend(stack)
    if state.trump_card is not None:
        everything.append(state.trump_card)
    everything.extend(getattr(state.table, "discarded", ()))
    assert len(set(everything)) == 40
