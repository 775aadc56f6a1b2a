"""Game state snapshots for Briscola.

A ``GameState`` is never mutated: every legal command produces a new snapshot
and the previous one stays valid. Mode-specific data lives in the ``table``
payload (``HeadToHeadTable``, ``FreeForAllTable`` or ``TeamTable``) instead of
optional fields on the snapshot itself.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Mapping, Optional, Tuple, Union

from .cards import Card, Suit
from .modes import GameMode, build_team_turn_order, seat_order_from
from .scoring import GameResult
from .trick import PlayedCard

Hand = Tuple[Card, ...]


class Phase(Enum):
    REVEALING_HANDS = "revealing_hands"
    PLAYING = "playing"
    ROUND_COMPLETE = "round_complete"
    GAME_OVER = "game_over"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class RoundRecord:
    round_number: int
    plays: Tuple[PlayedCard, ...]
    winner: str


@dataclass(frozen=True)
class HeadToHeadTable:
    mode: GameMode = field(default=GameMode.ONE_V_ONE, init=False)


@dataclass(frozen=True)
class FreeForAllTable:
    # Cards removed to balance the deck; never shown to players.
    discarded: Hand = ()
    mode: GameMode = field(default=GameMode.FREE_FOR_ALL, init=False)


@dataclass(frozen=True)
class TeamTable:
    teams: Mapping[str, int]
    turn_order: Tuple[str, ...]
    mode: GameMode = field(default=GameMode.TWO_V_TWO, init=False)


Table = Union[HeadToHeadTable, FreeForAllTable, TeamTable]


@dataclass(frozen=True)
class GameState:
    players: Tuple[str, ...]
    phase: Phase
    deck: Hand
    trump_card: Optional[Card]
    trump_suit: Suit
    hands: Mapping[str, Hand]
    stacks: Mapping[str, Hand]
    table: Table
    play_area: Tuple[PlayedCard, ...] = ()
    leader: Optional[str] = None
    current_player: Optional[str] = None
    round_number: int = 1
    round_winner: Optional[str] = None
    last_round_winner: Optional[str] = None
    last_swap_player: Optional[str] = None
    history: Tuple[RoundRecord, ...] = ()
    result: Optional[GameResult] = None
    game_number: int = 0

    @property
    def mode(self) -> GameMode:
        return self.table.mode

    @property
    def is_over(self) -> bool:
        return self.phase is Phase.GAME_OVER

    def hand_of(self, player: str) -> Hand:
        return self.hands[player]

    def card_count(self) -> int:
        """Number of cards accounted for across every container."""
        count = len(self.deck) + len(self.play_area)
        count += sum(len(hand) for hand in self.hands.values())
        count += sum(len(stack) for stack in self.stacks.values())
        if self.trump_card is not None:
            count += 1
        if isinstance(self.table, FreeForAllTable):
            count += len(self.table.discarded)
        return count


def turn_order(state: GameState, leader: Optional[str] = None) -> List[str]:
    """Return the playing order of a round led by ``leader``."""
    leader = leader or state.leader
    if leader is None:
        return []
    match state.table:
        case TeamTable(teams=teams, turn_order=order):
            if order and order[0] == leader:
                return list(order)
            return build_team_turn_order(leader, teams, state.players)
        case HeadToHeadTable() | FreeForAllTable():
            return seat_order_from(state.players, leader)
    raise TypeError(f"Unsupported table payload: {state.table!r}")


def teammate(state: GameState, player: str) -> Optional[str]:
    if not isinstance(state.table, TeamTable):
        return None
    teams = state.table.teams
    for other in state.players:
        if other != player and teams[other] == teams[player]:
            return other
    return None
