"""Card-related data structures and helpers for Briscola."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterable, Mapping


class Suit(Enum):
    CLUB = auto()
    COIN = auto()
    CUP = auto()
    SWORD = auto()

    def __str__(self) -> str:
        return self.name.lower()


class Rank(Enum):
    ACE = auto()
    TWO = auto()
    THREE = auto()
    FOUR = auto()
    FIVE = auto()
    SIX = auto()
    SEVEN = auto()
    JACK = auto()
    KNIGHT = auto()
    KING = auto()

    def __str__(self) -> str:
        return self.name.lower()


# Card point values; the full deck is worth 120.
CARD_POINTS: dict[Rank, int] = {
    Rank.ACE: 11,
    Rank.TWO: 0,
    Rank.THREE: 10,
    Rank.FOUR: 0,
    Rank.FIVE: 0,
    Rank.SIX: 0,
    Rank.SEVEN: 0,
    Rank.JACK: 2,
    Rank.KNIGHT: 3,
    Rank.KING: 4,
}

# Trick strength from strongest to weakest, independent of points.
RANK_ORDER: list[Rank] = [
    Rank.ACE,
    Rank.THREE,
    Rank.KING,
    Rank.KNIGHT,
    Rank.JACK,
    Rank.SEVEN,
    Rank.SIX,
    Rank.FIVE,
    Rank.FOUR,
    Rank.TWO,
]

RANK_STRENGTH: dict[Rank, int] = {rank: index for index, rank in enumerate(RANK_ORDER)}

# Face-up trump ranks that only a Seven may replace; the rest go to the Two.
MAJOR_RANKS: frozenset[Rank] = frozenset(
    {Rank.KING, Rank.KNIGHT, Rank.JACK, Rank.ACE, Rank.THREE}
)

RANK_TOKENS: dict[Rank, str] = {
    Rank.ACE: "1",
    Rank.TWO: "2",
    Rank.THREE: "3",
    Rank.FOUR: "4",
    Rank.FIVE: "5",
    Rank.SIX: "6",
    Rank.SEVEN: "7",
    Rank.JACK: "jack",
    Rank.KNIGHT: "knight",
    Rank.KING: "king",
}

_TOKEN_RANKS: dict[str, Rank] = {token: rank for rank, token in RANK_TOKENS.items()}


@dataclass(frozen=True)
class Card:
    """Immutable representation of a playing card."""

    rank: Rank
    suit: Suit

    def point_value(self) -> int:
        return CARD_POINTS[self.rank]

    @property
    def card_id(self) -> str:
        return f"{self.suit.name.lower()}_{RANK_TOKENS[self.rank]}"

    def is_major(self) -> bool:
        return self.rank in MAJOR_RANKS


def card_strength(card: Card) -> int:
    """Return the trick strength index of a card; lower is stronger."""
    return RANK_STRENGTH[card.rank]


def total_points(cards: Iterable[Card]) -> int:
    return sum(card.point_value() for card in cards)


def card_from_id(card_id: str) -> Card:
    """Parse an id such as ``coin_1`` or ``sword_king``."""
    suit_name, _, token = card_id.partition("_")
    try:
        return Card(_TOKEN_RANKS[token], Suit[suit_name.upper()])
    except KeyError as exc:
        raise ValueError(f"Unknown card id: {card_id!r}") from exc


def serialize_card(card: Card) -> dict[str, str]:
    return {"id": card.card_id, "rank": card.rank.name.lower(), "suit": card.suit.name.lower()}


def deserialize_card(payload: Mapping[str, str]) -> Card:
    if "rank" in payload and "suit" in payload:
        return Card(Rank[payload["rank"].upper()], Suit[payload["suit"].upper()])
    return card_from_id(payload["id"])


def card_label(card: Card) -> str:
    return f"{card.rank.name.title()} of {card.suit.name.lower()}s"
