"""Plain-dict snapshots for broadcast and per-player views."""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional

from .cards import Card, Suit, card_label, deserialize_card, serialize_card
from .modes import GameMode
from .scoring import GameResult
from .state import (
    FreeForAllTable,
    GameState,
    HeadToHeadTable,
    Phase,
    RoundRecord,
    Table,
    TeamTable,
    teammate,
)
from .trick import PlayedCard


def _cards(cards) -> List[dict]:
    return [serialize_card(card) for card in cards]


def _load_cards(payload) -> tuple[Card, ...]:
    return tuple(deserialize_card(item) for item in payload)


def _play_payload(play: PlayedCard) -> dict:
    return {"player": play.player, "card": serialize_card(play.card), "label": card_label(play.card)}


def _load_play(payload: Mapping[str, Any]) -> PlayedCard:
    return PlayedCard(payload["player"], deserialize_card(payload["card"]))


def _history_payload(history) -> List[dict]:
    return [
        {
            "round_number": record.round_number,
            "plays": [_play_payload(play) for play in record.plays],
            "winner": record.winner,
        }
        for record in history
    ]


def _result_payload(result: Optional[GameResult]) -> Optional[dict]:
    if result is None:
        return None
    return {
        "scores": dict(result.scores),
        "winners": list(result.winners),
        "is_tie": result.is_tie,
        "team_scores": (
            {str(team): points for team, points in result.team_scores.items()}
            if result.team_scores is not None
            else None
        ),
        "winning_team": result.winning_team,
    }


def _load_result(payload: Optional[Mapping[str, Any]]) -> Optional[GameResult]:
    if payload is None:
        return None
    team_scores = payload.get("team_scores")
    return GameResult(
        scores=dict(payload["scores"]),
        winners=tuple(payload["winners"]),
        is_tie=payload["is_tie"],
        team_scores={int(team): points for team, points in team_scores.items()} if team_scores is not None else None,
        winning_team=payload.get("winning_team"),
    )


def _table_payload(table: Table) -> dict:
    payload: Dict[str, Any] = {"mode": table.mode.value}
    if isinstance(table, FreeForAllTable):
        payload["discarded"] = _cards(table.discarded)
    elif isinstance(table, TeamTable):
        payload["teams"] = dict(table.teams)
        payload["turn_order"] = list(table.turn_order)
    return payload


def _load_table(payload: Mapping[str, Any]) -> Table:
    mode = GameMode(payload["mode"])
    if mode is GameMode.FREE_FOR_ALL:
        return FreeForAllTable(discarded=_load_cards(payload.get("discarded", [])))
    if mode is GameMode.TWO_V_TWO:
        return TeamTable(teams=dict(payload["teams"]), turn_order=tuple(payload["turn_order"]))
    return HeadToHeadTable()


def state_to_payload(state: GameState) -> dict:
    """Full snapshot as JSON-compatible data, suitable for whole-value broadcast."""
    return {
        "players": list(state.players),
        "phase": state.phase.value,
        "deck": _cards(state.deck),
        "trump_card": serialize_card(state.trump_card) if state.trump_card else None,
        "trump_suit": state.trump_suit.name.lower(),
        "hands": {player: _cards(hand) for player, hand in state.hands.items()},
        "stacks": {player: _cards(stack) for player, stack in state.stacks.items()},
        "table": _table_payload(state.table),
        "play_area": [_play_payload(play) for play in state.play_area],
        "leader": state.leader,
        "current_player": state.current_player,
        "round_number": state.round_number,
        "round_winner": state.round_winner,
        "last_round_winner": state.last_round_winner,
        "last_swap_player": state.last_swap_player,
        "history": _history_payload(state.history),
        "result": _result_payload(state.result),
        "game_number": state.game_number,
    }


def state_from_payload(payload: Mapping[str, Any]) -> GameState:
    """Rebuild a snapshot produced by :func:`state_to_payload`."""
    trump_payload = payload.get("trump_card")
    return GameState(
        players=tuple(payload["players"]),
        phase=Phase(payload["phase"]),
        deck=_load_cards(payload["deck"]),
        trump_card=deserialize_card(trump_payload) if trump_payload else None,
        trump_suit=Suit[payload["trump_suit"].upper()],
        hands={player: _load_cards(hand) for player, hand in payload["hands"].items()},
        stacks={player: _load_cards(stack) for player, stack in payload["stacks"].items()},
        table=_load_table(payload["table"]),
        play_area=tuple(_load_play(play) for play in payload.get("play_area", [])),
        leader=payload.get("leader"),
        current_player=payload.get("current_player"),
        round_number=payload.get("round_number", 1),
        round_winner=payload.get("round_winner"),
        last_round_winner=payload.get("last_round_winner"),
        last_swap_player=payload.get("last_swap_player"),
        history=tuple(
            RoundRecord(
                round_number=record["round_number"],
                plays=tuple(_load_play(play) for play in record["plays"]),
                winner=record["winner"],
            )
            for record in payload.get("history", [])
        ),
        result=_load_result(payload.get("result")),
        game_number=payload.get("game_number", 0),
    )


def player_view(state: GameState, perspective: Optional[str] = None) -> dict:
    """What one participant may see.

    Own hand in full, everyone else as a count. During the hand-reveal phase
    a 2v2 player also sees their teammate's hand. Balancing discards are only
    ever reported as a count. ``perspective=None`` gives a spectator view.
    """
    partner = teammate(state, perspective) if perspective is not None else None
    show_partner = partner is not None and state.phase is Phase.REVEALING_HANDS

    view: Dict[str, Any] = {
        "mode": state.mode.value,
        "players": list(state.players),
        "phase": state.phase.value,
        "deck_count": len(state.deck),
        "trump_card": serialize_card(state.trump_card) if state.trump_card else None,
        "trump_suit": state.trump_suit.name.lower(),
        "hand": _cards(state.hands.get(perspective, ())),
        "hand_labels": [card_label(card) for card in state.hands.get(perspective, ())],
        "hand_sizes": {player: len(hand) for player, hand in state.hands.items()},
        "stack_sizes": {player: len(stack) for player, stack in state.stacks.items()},
        "play_area": [_play_payload(play) for play in state.play_area],
        "current_player": state.current_player,
        "round_number": state.round_number,
        "round_winner": state.round_winner,
        "last_round_winner": state.last_round_winner,
        "last_swap_player": state.last_swap_player,
        "history": _history_payload(state.history),
        "result": _result_payload(state.result),
    }
    if perspective in state.stacks:
        view["stack"] = _cards(state.stacks[perspective])
    if isinstance(state.table, FreeForAllTable):
        view["discarded_count"] = len(state.table.discarded)
    if isinstance(state.table, TeamTable):
        view["teams"] = dict(state.table.teams)
        view["turn_order"] = list(state.table.turn_order)
    if show_partner:
        view["teammate"] = partner
        view["teammate_hand"] = _cards(state.hands[partner])
    return view
