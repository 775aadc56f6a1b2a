"""End-of-game scoring helpers for Briscola."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Mapping, Optional, Sequence, Tuple

from .cards import Card, total_points


@dataclass(frozen=True)
class GameResult:
    """Final scores and the winning side.

    ``winners`` holds every player sharing the top score (or every member of
    the winning team). A tie is reported through ``is_tie`` rather than by
    picking one of the tied players.
    """

    scores: Mapping[str, int]
    winners: Tuple[str, ...]
    is_tie: bool
    team_scores: Optional[Mapping[int, int]] = None
    winning_team: Optional[int] = None

    @property
    def winner(self) -> Optional[str]:
        """Single winning player, or ``None`` on a tie or a team result."""
        if self.is_tie or self.team_scores is not None:
            return None
        return self.winners[0]


def stack_points(stack: Iterable[Card]) -> int:
    return total_points(stack)


def score_stacks(stacks: Mapping[str, Sequence[Card]]) -> Dict[str, int]:
    return {player: stack_points(cards) for player, cards in stacks.items()}


def team_scores(scores: Mapping[str, int], teams: Mapping[str, int]) -> Dict[int, int]:
    totals: Dict[int, int] = {team: 0 for team in sorted(set(teams.values()))}
    for player, points in scores.items():
        totals[teams[player]] += points
    return totals


def top_scorers(scores: Mapping[str, int]) -> Tuple[str, ...]:
    best = max(scores.values())
    return tuple(player for player, points in scores.items() if points == best)


def individual_result(stacks: Mapping[str, Sequence[Card]]) -> GameResult:
    scores = score_stacks(stacks)
    leaders = top_scorers(scores)
    return GameResult(scores=scores, winners=leaders, is_tie=len(leaders) > 1)


def team_result(stacks: Mapping[str, Sequence[Card]], teams: Mapping[str, int]) -> GameResult:
    scores = score_stacks(stacks)
    totals = team_scores(scores, teams)
    best = max(totals.values())
    leading = [team for team, points in totals.items() if points == best]
    if len(leading) > 1:
        return GameResult(scores=scores, winners=(), is_tie=True, team_scores=totals)
    winning_team = leading[0]
    members = tuple(player for player in scores if teams[player] == winning_team)
    return GameResult(
        scores=scores,
        winners=members,
        is_tie=False,
        team_scores=totals,
        winning_team=winning_team,
    )
