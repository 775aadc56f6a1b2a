from random import Random

import pytest

from briscola.cards import Card, Rank, Suit
from briscola.errors import ConfigurationError
from briscola.game import BriscolaEngine
from briscola.modes import GameMode, select_game_mode
from briscola.state import FreeForAllTable, GameState, Phase
from briscola.trick import PlayedCard

from helpers import assert_conserved

PLAYERS = ["p1", "p2", "p3"]


def test_three_players_need_no_balancing():
    engine = BriscolaEngine(players=PLAYERS, mode=GameMode.FREE_FOR_ALL, rng=Random(1))
    state = engine.initialize_game()
    assert isinstance(state.table, FreeForAllTable)
    assert state.table.discarded == ()
    assert len(state.deck) == 30
    assert all(len(state.hands[p]) == 3 for p in PLAYERS)
    assert_conserved(state)


def test_five_players_discard_the_remainder():
    players = [f"p{i}" for i in range(1, 6)]
    engine = BriscolaEngine(players=players, mode=GameMode.FREE_FOR_ALL, rng=Random(2))
    state = engine.initialize_game()
    assert len(state.table.discarded) == 4
    assert len(state.deck) == 20
    assert len(state.deck) % len(players) == 0
    assert_conserved(state)


def test_free_for_all_rejects_two_players():
    with pytest.raises(ConfigurationError):
        BriscolaEngine(players=["p1", "p2"], mode=GameMode.FREE_FOR_ALL)


def test_default_mode_selection():
    assert select_game_mode(2) is GameMode.ONE_V_ONE
    assert select_game_mode(3) is GameMode.FREE_FOR_ALL
    assert select_game_mode(4) is GameMode.TWO_V_TWO
    assert select_game_mode(5) is GameMode.FREE_FOR_ALL
    assert select_game_mode(1) is None
    assert select_game_mode(14) is None


def test_round_robin_turns_and_winner_leads_next_round():
    engine = BriscolaEngine(players=PLAYERS, mode=GameMode.FREE_FOR_ALL, rng=Random(5))
    state = engine.initialize_game()
    assert state.current_player == "p1"
    for player in PLAYERS:
        assert state.current_player == player
        state = engine.play_card(state, player, state.hands[player][0].card_id)
    assert state.phase is Phase.ROUND_COMPLETE
    winner = state.round_winner

    state = engine.resolve_round(state)
    assert state.current_player == winner
    assert all(len(state.hands[p]) == 3 for p in PLAYERS)
    assert len(state.deck) == 27
    assert_conserved(state)


def test_draw_order_starts_with_the_winner():
    trump = Card(Rank.KING, Suit.CUP)
    deck = (Card(Rank.FIVE, Suit.CLUB), Card(Rank.SIX, Suit.CLUB), Card(Rank.SEVEN, Suit.CLUB))
    state = GameState(
        players=tuple(PLAYERS),
        phase=Phase.ROUND_COMPLETE,
        deck=deck,
        trump_card=trump,
        trump_suit=Suit.CUP,
        hands={p: (Card(Rank.TWO, suit), Card(Rank.FOUR, suit)) for p, suit in zip(PLAYERS, (Suit.COIN, Suit.SWORD, Suit.CLUB))},
        stacks={p: () for p in PLAYERS},
        table=FreeForAllTable(),
        play_area=(
            PlayedCard("p1", Card(Rank.ACE, Suit.COIN)),
            PlayedCard("p2", Card(Rank.TWO, Suit.CUP)),
            PlayedCard("p3", Card(Rank.THREE, Suit.COIN)),
        ),
        leader="p1",
        round_number=10,
        round_winner="p2",
    )
    engine = BriscolaEngine(players=PLAYERS, mode=GameMode.FREE_FOR_ALL)
    state = engine.resolve_round(state)
    assert state.hands["p2"][-1] == deck[2]
    assert state.hands["p3"][-1] == deck[1]
    assert state.hands["p1"][-1] == deck[0]
    assert state.current_player == "p2"


def test_game_over_leaves_the_trump_card_on_the_table():
    trump = Card(Rank.KING, Suit.CUP)
    state = GameState(
        players=tuple(PLAYERS),
        phase=Phase.ROUND_COMPLETE,
        deck=(),
        trump_card=trump,
        trump_suit=Suit.CUP,
        hands={p: () for p in PLAYERS},
        stacks={"p1": (Card(Rank.ACE, Suit.SWORD),), "p2": (), "p3": (Card(Rank.ACE, Suit.CLUB),)},
        table=FreeForAllTable(),
        play_area=(
            PlayedCard("p1", Card(Rank.TWO, Suit.COIN)),
            PlayedCard("p2", Card(Rank.FOUR, Suit.COIN)),
            PlayedCard("p3", Card(Rank.FIVE, Suit.COIN)),
        ),
        leader="p1",
        round_number=13,
        round_winner="p3",
    )
    engine = BriscolaEngine(players=PLAYERS, mode=GameMode.FREE_FOR_ALL)
    state = engine.resolve_round(state)
    assert state.phase is Phase.GAME_OVER
    assert state.trump_card == trump
    assert state.result.scores == {"p1": 11, "p2": 0, "p3": 11}
    assert state.result.is_tie
    assert state.result.winners == ("p1", "p3")
