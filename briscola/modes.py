"""Game mode definitions and mode-specific seating rules."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Mapping, Optional, Sequence

from .deck import DECK_SIZE
from .errors import ConfigurationError, UNKNOWN_PLAYER

HAND_SIZE = 3
TEAMS = (1, 2)


class GameMode(Enum):
    ONE_V_ONE = "1v1"
    FREE_FOR_ALL = "n-for-all"
    TWO_V_TWO = "2v2"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class ModeRules:
    min_players: int
    max_players: int
    description: str
    hand_size: int = HAND_SIZE
    # Drop cards so the deck splits evenly among players.
    balance_deck: bool = False
    # The face-up trump card is handed out once the deck is empty.
    trump_is_last_draw: bool = False
    # Teammates see each other's hands before the first round.
    reveal_hands: bool = False


MODE_RULES: Dict[GameMode, ModeRules] = {
    GameMode.ONE_V_ONE: ModeRules(
        min_players=2,
        max_players=2,
        description="Head-to-head competition",
        trump_is_last_draw=True,
    ),
    GameMode.FREE_FOR_ALL: ModeRules(
        min_players=3,
        max_players=(DECK_SIZE - 1) // HAND_SIZE,
        description="Every player competes individually",
        balance_deck=True,
    ),
    GameMode.TWO_V_TWO: ModeRules(
        min_players=4,
        max_players=4,
        description="Two teams of two",
        trump_is_last_draw=True,
        reveal_hands=True,
    ),
}


def rules_for(mode: GameMode) -> ModeRules:
    return MODE_RULES[mode]


def select_game_mode(player_count: int) -> Optional[GameMode]:
    """Pick the default mode for a table of ``player_count`` players."""
    if player_count == 2:
        return GameMode.ONE_V_ONE
    if player_count == 4:
        return GameMode.TWO_V_TWO
    rules = MODE_RULES[GameMode.FREE_FOR_ALL]
    if rules.min_players <= player_count <= rules.max_players:
        return GameMode.FREE_FOR_ALL
    return None


def validate_player_count(mode: GameMode, players: Sequence[str]) -> None:
    rules = MODE_RULES[mode]
    count = len(players)
    if not rules.min_players <= count <= rules.max_players:
        if rules.min_players == rules.max_players:
            expected = str(rules.min_players)
        else:
            expected = f"{rules.min_players}-{rules.max_players}"
        raise ConfigurationError(f"Mode {mode} requires {expected} players, got {count}.")
    if len(set(players)) != count:
        raise ConfigurationError("Player ids must be unique.")


def seat_order_from(players: Sequence[str], leader: str) -> List[str]:
    """Return every player in seat order, starting with ``leader``."""
    start = list(players).index(leader)
    return [players[(start + offset) % len(players)] for offset in range(len(players))]


def default_teams(players: Sequence[str]) -> Dict[str, int]:
    """Alternate seats between team 1 and team 2."""
    return {player: (index % 2) + 1 for index, player in enumerate(players)}


def validate_teams(players: Sequence[str], teams: Optional[Mapping[str, int]]) -> Dict[str, int]:
    """Fill unset seats with the default assignment and check two players per team."""
    fallback = default_teams(players)
    resolved: Dict[str, int] = {}
    supplied = dict(teams or {})
    unknown = set(supplied) - set(players)
    if unknown:
        raise ConfigurationError(
            f"Team map names unknown players: {sorted(unknown)}", code=UNKNOWN_PLAYER
        )
    for player in players:
        team = supplied[player] if player in supplied else fallback[player]
        if team not in TEAMS:
            raise ConfigurationError(f"Team for {player} must be 1 or 2, got {team!r}.")
        resolved[player] = team
    for team in TEAMS:
        members = [player for player in players if resolved[player] == team]
        if len(members) != 2:
            raise ConfigurationError(f"Team {team} must have exactly two players, got {members}.")
    return resolved


def build_team_turn_order(leader: str, teams: Mapping[str, int], players: Sequence[str]) -> List[str]:
    """Order a 2v2 round: leader, opponent, leader's teammate, other opponent."""
    own_team = teams[leader]
    partners = [player for player in players if teams[player] == own_team and player != leader]
    opponents = [player for player in players if teams[player] != own_team]
    return [leader, opponents[0], partners[0], opponents[1]]
