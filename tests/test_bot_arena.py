from random import Random

from bots import GreedyBot, RandomBot, TrumpManagerBot
from bots.base import swappable_card
from bots.baseline_greedy import winning_cards
from bots.bot_arena import main, run_match
from briscola.cards import Card, Rank, Suit
from briscola.game import BriscolaEngine
from briscola.modes import GameMode
from briscola.state import FreeForAllTable, GameState, HeadToHeadTable, Phase
from briscola.trick import PlayedCard


def head_to_head(hand, play_area=(), trump=Card(Rank.KING, Suit.CUP)):
    return GameState(
        players=("me", "you"),
        phase=Phase.PLAYING,
        deck=(Card(Rank.FOUR, Suit.SWORD),),
        trump_card=trump,
        trump_suit=trump.suit,
        hands={"me": tuple(hand), "you": ()},
        stacks={"me": (), "you": ()},
        table=HeadToHeadTable(),
        play_area=tuple(play_area),
        leader="you" if play_area else "me",
        current_player="me",
    )


def test_greedy_takes_points_with_weakest_winner():
    hand = [Card(Rank.ACE, Suit.COIN), Card(Rank.KNIGHT, Suit.COIN), Card(Rank.TWO, Suit.CUP)]
    state = head_to_head(hand, [PlayedCard("you", Card(Rank.KING, Suit.COIN))])
    assert {card.card_id for card in winning_cards(state, "me")} == {"coin_1", "cup_2"}
    assert GreedyBot().play_card(state, "me") == "coin_1"


def test_greedy_sheds_cheapest_card_when_leading():
    hand = [Card(Rank.ACE, Suit.COIN), Card(Rank.FIVE, Suit.CUP), Card(Rank.SIX, Suit.SWORD)]
    state = head_to_head(hand)
    assert GreedyBot().play_card(state, "me") == "sword_6"


def test_trump_manager_swaps_when_allowed():
    hand = [Card(Rank.SEVEN, Suit.CUP), Card(Rank.FIVE, Suit.CLUB)]
    state = head_to_head(hand)
    assert swappable_card(state, "me") == "cup_7"
    assert TrumpManagerBot().choose_swap(state, "me") == "cup_7"
    assert GreedyBot().choose_swap(state, "me") is None


def test_random_bot_never_swaps_at_zero_rate():
    state = head_to_head([Card(Rank.SEVEN, Suit.CUP)])
    assert RandomBot(seed=1, swap_rate=0.0).choose_swap(state, "me") is None
    assert RandomBot(seed=1, swap_rate=1.0).choose_swap(state, "me") == "cup_7"


def test_run_match_tallies_every_game():
    results = run_match([GreedyBot(), RandomBot(seed=2), TrumpManagerBot()], n_games=4, seed=3)
    assert results["mode"] == "n-for-all"
    assert len(results["history"]) == 4
    decided = sum(1 for game in results["history"] if not game["is_tie"])
    assert sum(results["wins"].values()) >= decided
    assert results["ties"] == 4 - decided


def test_run_match_is_reproducible():
    first = run_match([RandomBot(seed=1), RandomBot(seed=2)], n_games=3, seed=11)
    second = run_match([RandomBot(seed=1), RandomBot(seed=2)], n_games=3, seed=11)
    assert first == second


def test_cli_prints_summary(capsys):
    main(["--bots", "greedy", "random", "greedy", "trump", "--n", "2", "--seed", "1"])
    output = capsys.readouterr().out
    assert "Mode 2v2, 2 games" in output
    assert "ties:" in output
