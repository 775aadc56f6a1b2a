"""Mode engines for Briscola.

``BriscolaEngine`` holds the table configuration (mode, seats, teams, rng) and
turns one snapshot into the next. It never keeps a copy of the game state, so
a host can load any snapshot it holds and apply a command to it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from random import Random
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from .cards import Card
from .deck import balance_deck, build_deck, deal_round_robin, shuffle_deck
from .errors import CARD_NOT_IN_HAND, NOT_YOUR_TURN, ConfigurationError, InvalidPlay, WrongPhase
from .modes import (
    GameMode,
    ModeRules,
    build_team_turn_order,
    rules_for,
    select_game_mode,
    validate_player_count,
    validate_teams,
)
from .scoring import GameResult, individual_result, team_result
from .state import (
    FreeForAllTable,
    GameState,
    HeadToHeadTable,
    Phase,
    RoundRecord,
    Table,
    TeamTable,
    turn_order,
)
from .swap import swap_with_trump
from .trick import PlayedCard, evaluate_round

logger = logging.getLogger(__name__)


@dataclass
class BriscolaEngine:
    """Apply Briscola rules for one table."""

    players: Sequence[str]
    mode: Optional[GameMode] = None
    teams: Optional[Mapping[str, int]] = None
    rng: Optional[Random] = None
    deck: Optional[Sequence[Card]] = None

    rules: ModeRules = field(init=False)

    def __post_init__(self) -> None:
        self.players = tuple(self.players)
        if self.mode is None:
            self.mode = select_game_mode(len(self.players))
            if self.mode is None:
                raise ConfigurationError(f"No game mode supports {len(self.players)} players.")
        validate_player_count(self.mode, self.players)
        self.rules = rules_for(self.mode)
        if self.mode is GameMode.TWO_V_TWO:
            self.teams = validate_teams(self.players, self.teams)
        elif self.teams:
            raise ConfigurationError(f"Mode {self.mode} does not use teams.")
        if self.rng is None:
            self.rng = Random()

    # Setup -------------------------------------------------------------

    def initialize_game(self, *, starting_player: Optional[str] = None, game_number: int = 0) -> GameState:
        """Shuffle, set the trump card aside and deal a fresh game."""
        cards = list(self.deck) if self.deck is not None else shuffle_deck(build_deck(), self.rng)
        if len(cards) != 40:
            raise ConfigurationError("Deck must contain exactly 40 cards.")
        trump_card = cards.pop()
        remaining, dealt = deal_round_robin(cards, self.players, self.rules.hand_size)
        hands = {player: tuple(hand) for player, hand in dealt.items()}
        stacks: Dict[str, Tuple[Card, ...]] = {player: () for player in self.players}

        leader = starting_player or self._default_leader()
        if leader not in self.players:
            raise ConfigurationError(f"Unknown starting player {leader!r}.")

        table: Table
        match self.mode:
            case GameMode.ONE_V_ONE:
                table = HeadToHeadTable()
            case GameMode.FREE_FOR_ALL:
                remaining, discarded = balance_deck(remaining, len(self.players))
                table = FreeForAllTable(discarded=tuple(discarded))
            case GameMode.TWO_V_TWO:
                assert self.teams is not None
                order = build_team_turn_order(leader, self.teams, self.players)
                table = TeamTable(teams=dict(self.teams), turn_order=tuple(order))
            case _:
                raise ConfigurationError(f"Unsupported mode: {self.mode!r}")

        phase = Phase.REVEALING_HANDS if self.rules.reveal_hands else Phase.PLAYING
        state = GameState(
            players=tuple(self.players),
            phase=phase,
            deck=tuple(remaining),
            trump_card=trump_card,
            trump_suit=trump_card.suit,
            hands=hands,
            stacks=stacks,
            table=table,
            leader=leader,
            current_player=leader,
            game_number=game_number,
        )
        logger.info(
            "Dealt %s game %d: trump %s, %d cards in deck, %s leads",
            self.mode,
            game_number,
            trump_card.card_id,
            len(state.deck),
            leader,
        )
        return state

    def play_again(self, previous: GameState) -> GameState:
        """Deal a new game, rotating the starting seat by game count."""
        game_number = previous.game_number + 1
        starter = self.players[game_number % len(self.players)]
        return self.initialize_game(starting_player=starter, game_number=game_number)

    def finish_reveal(self, state: GameState) -> GameState:
        """Leave the teammate hand-reveal phase and start play."""
        if state.phase is not Phase.REVEALING_HANDS:
            raise WrongPhase(f"No hand reveal in progress (phase {state.phase}).")
        return replace(state, phase=Phase.PLAYING)

    # Commands ----------------------------------------------------------

    def play_card(self, state: GameState, player: str, card_id: str) -> GameState:
        if state.phase is not Phase.PLAYING:
            raise WrongPhase(f"Cannot play during phase {state.phase}.")
        if player != state.current_player:
            raise InvalidPlay(f"It is not {player}'s turn.", code=NOT_YOUR_TURN)

        hand = list(state.hands.get(player, ()))
        index = next((i for i, card in enumerate(hand) if card.card_id == card_id), None)
        if index is None:
            raise InvalidPlay(f"{card_id} is not in {player}'s hand.", code=CARD_NOT_IN_HAND)

        card = hand.pop(index)
        hands = dict(state.hands)
        hands[player] = tuple(hand)
        play_area = state.play_area + (PlayedCard(player, card),)

        if len(play_area) == len(state.players):
            winner = evaluate_round(play_area, state.trump_suit)
            logger.debug("Round %d complete, %s takes it", state.round_number, winner)
            return replace(
                state,
                phase=Phase.ROUND_COMPLETE,
                hands=hands,
                play_area=play_area,
                current_player=None,
                round_winner=winner,
            )

        order = turn_order(state)
        return replace(
            state,
            hands=hands,
            play_area=play_area,
            current_player=order[len(play_area)],
        )

    def swap_with_trump(self, state: GameState, player: str, card_id: str) -> GameState:
        return swap_with_trump(state, player, card_id)

    def resolve_round(self, state: GameState) -> GameState:
        """Award the trick, refill hands and start the next round.

        Returns ``state`` itself when no completed round is waiting.
        """
        if state.phase is not Phase.ROUND_COMPLETE or state.round_winner is None:
            return state

        winner = state.round_winner
        stacks = dict(state.stacks)
        stacks[winner] = stacks[winner] + tuple(play.card for play in state.play_area)
        record = RoundRecord(state.round_number, state.play_area, winner)

        table = state.table
        if isinstance(table, TeamTable):
            order = build_team_turn_order(winner, table.teams, state.players)
            table = replace(table, turn_order=tuple(order))
        else:
            order = turn_order(state, winner)

        deck, trump_card, hands = self._draw(state, order)

        resolved = replace(
            state,
            deck=deck,
            trump_card=trump_card,
            hands=hands,
            stacks=stacks,
            table=table,
            play_area=(),
            history=state.history + (record,),
            last_round_winner=winner,
        )

        if self._is_game_over(resolved):
            result = self._final_result(resolved)
            logger.info(
                "Game %d over after %d rounds: scores %s, winners %s%s",
                state.game_number,
                state.round_number,
                dict(result.scores),
                list(result.winners),
                " (tie)" if result.is_tie else "",
            )
            return replace(resolved, phase=Phase.GAME_OVER, current_player=None, result=result)

        return replace(
            resolved,
            phase=Phase.PLAYING,
            leader=winner,
            current_player=winner,
            round_number=state.round_number + 1,
            round_winner=None,
        )

    # Helpers -----------------------------------------------------------

    def _default_leader(self) -> str:
        if self.mode is GameMode.TWO_V_TWO:
            assert self.teams is not None
            return next(player for player in self.players if self.teams[player] == 1)
        return self.players[0]

    def _draw(
        self, state: GameState, order: List[str]
    ) -> Tuple[Tuple[Card, ...], Optional[Card], Dict[str, Tuple[Card, ...]]]:
        """Top hands up in ``order``; hand out the trump card last where the mode says so."""
        deck = list(state.deck)
        trump_card = state.trump_card
        hands = {player: list(hand) for player, hand in state.hands.items()}

        for player in order:
            while len(hands[player]) < self.rules.hand_size:
                if deck:
                    hands[player].append(deck.pop())
                elif trump_card is not None and self.rules.trump_is_last_draw:
                    hands[player].append(trump_card)
                    trump_card = None
                    break
                else:
                    break

        return tuple(deck), trump_card, {player: tuple(hand) for player, hand in hands.items()}

    def _is_game_over(self, state: GameState) -> bool:
        if state.deck or any(state.hands.values()):
            return False
        if self.rules.trump_is_last_draw and state.trump_card is not None:
            return False
        return True

    def _final_result(self, state: GameState) -> GameResult:
        match state.table:
            case TeamTable(teams=teams):
                return team_result(state.stacks, teams)
            case HeadToHeadTable() | FreeForAllTable():
                return individual_result(state.stacks)
        raise TypeError(f"Unsupported table payload: {state.table!r}")
