from random import Random

import pytest

from briscola.cards import (
    CARD_POINTS,
    MAJOR_RANKS,
    RANK_ORDER,
    Card,
    Rank,
    Suit,
    card_from_id,
    card_label,
    deserialize_card,
    serialize_card,
    total_points,
)
from briscola.deck import DealError, balance_deck, build_deck, deal_round_robin, shuffle_deck


def test_deck_has_forty_unique_cards_worth_120():
    deck = build_deck()
    assert len(deck) == 40
    assert len(set(deck)) == 40
    assert total_points(deck) == 120
    assert {card.suit for card in deck} == set(Suit)


def test_point_values():
    assert CARD_POINTS[Rank.ACE] == 11
    assert CARD_POINTS[Rank.THREE] == 10
    assert CARD_POINTS[Rank.KING] == 4
    assert CARD_POINTS[Rank.KNIGHT] == 3
    assert CARD_POINTS[Rank.JACK] == 2
    assert all(CARD_POINTS[rank] == 0 for rank in (Rank.TWO, Rank.FOUR, Rank.FIVE, Rank.SIX, Rank.SEVEN))


def test_rank_order_and_major_ranks():
    assert RANK_ORDER[:3] == [Rank.ACE, Rank.THREE, Rank.KING]
    assert RANK_ORDER[-1] is Rank.TWO
    assert MAJOR_RANKS == {Rank.ACE, Rank.THREE, Rank.KING, Rank.KNIGHT, Rank.JACK}


def test_card_ids_and_labels():
    ace = Card(Rank.ACE, Suit.COIN)
    king = Card(Rank.KING, Suit.SWORD)
    assert ace.card_id == "coin_1"
    assert king.card_id == "sword_king"
    assert card_from_id("sword_king") == king
    assert deserialize_card(serialize_card(ace)) == ace
    assert deserialize_card({"id": "cup_7"}) == Card(Rank.SEVEN, Suit.CUP)
    assert card_label(ace) == "Ace of coins"
    with pytest.raises(ValueError):
        card_from_id("coin_queen")


def test_shuffle_is_a_permutation_and_seedable():
    deck = build_deck()
    first = shuffle_deck(deck, Random(3))
    second = shuffle_deck(deck, Random(3))
    assert first == second
    assert sorted(first, key=lambda c: c.card_id) == sorted(deck, key=lambda c: c.card_id)
    assert deck == build_deck()


def test_deal_is_round_robin_from_the_end():
    deck = build_deck()
    remaining, hands = deal_round_robin(deck, ["a", "b"], 3)
    assert hands["a"] == [deck[-1], deck[-3], deck[-5]]
    assert hands["b"] == [deck[-2], deck[-4], deck[-6]]
    assert remaining == deck[:-6]


def test_deal_detects_short_deck():
    with pytest.raises(DealError):
        deal_round_robin(build_deck()[:5], ["a", "b"], 3)


def test_balance_deck_discards_from_the_bottom():
    deck = build_deck()[:24]
    balanced, discarded = balance_deck(deck, 5)
    assert len(discarded) == 4
    assert discarded == deck[:4]
    assert balanced == deck[4:]
    assert balance_deck(deck[:30], 3) == (deck[:30], [])
