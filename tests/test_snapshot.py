import json
from random import Random

import pytest

from bots import GreedyBot
from bots.bot_arena import play_game
from briscola.game import BriscolaEngine
from briscola.modes import GameMode
from briscola.snapshot import player_view, state_from_payload, state_to_payload


def test_finished_team_game_survives_json():
    engine = BriscolaEngine(players=["a", "b", "c", "d"], rng=Random(11))
    state = play_game(engine, engine.initialize_game(), {p: GreedyBot() for p in "abcd"})
    payload = json.loads(json.dumps(state_to_payload(state)))
    assert state_from_payload(payload) == state


def test_mid_game_free_for_all_snapshot_keeps_discards():
    engine = BriscolaEngine(players=["a", "b", "c", "d", "e"], mode=GameMode.FREE_FOR_ALL, rng=Random(4))
    state = engine.initialize_game()
    state = engine.play_card(state, "a", state.hands["a"][1].card_id)
    restored = state_from_payload(json.loads(json.dumps(state_to_payload(state))))
    assert restored == state
    assert restored.table.discarded == state.table.discarded


def test_player_view_hides_other_hands():
    engine = BriscolaEngine(players=["a", "b", "c"], rng=Random(8))
    state = engine.initialize_game()
    view = player_view(state, "b")
    assert [card["id"] for card in view["hand"]] == [card.card_id for card in state.hands["b"]]
    assert view["hand_sizes"] == {"a": 3, "b": 3, "c": 3}
    assert view["deck_count"] == 30
    assert view["discarded_count"] == 0
    assert "deck" not in view
    assert "hands" not in view
    assert view["mode"] == "n-for-all"


def test_spectator_view_has_no_hand():
    engine = BriscolaEngine(players=["a", "b"], rng=Random(8))
    view = player_view(engine.initialize_game())
    assert view["hand"] == []
    assert "stack" not in view
    assert view["trump_card"]["suit"] == view["trump_suit"]


def test_snapshot_phase_must_be_a_live_phase():
    engine = BriscolaEngine(players=["a", "b"], rng=Random(2))
    payload = state_to_payload(engine.initialize_game())
    payload["phase"] = "waiting"
    with pytest.raises(ValueError):
        state_from_payload(payload)
