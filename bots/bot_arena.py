"""Simple bot arena for Briscola."""

from __future__ import annotations

import argparse
from random import Random
from typing import Callable, Dict, Iterable, Mapping, Optional, Sequence

from briscola.game import BriscolaEngine
from briscola.modes import GameMode
from briscola.state import GameState, Phase

from .base import BotStrategy
from .baseline_greedy import GreedyBot
from .baseline_trump_manager import TrumpManagerBot
from .random_bot import RandomBot

BOT_REGISTRY: Dict[str, type[BotStrategy]] = {
    "greedy": GreedyBot,
    "trump": TrumpManagerBot,
    "random": RandomBot,
}

Observer = Callable[[GameState], None]


def _offer_swaps(engine: BriscolaEngine, state: GameState, bots: Mapping[str, BotStrategy], observe) -> GameState:
    for player in state.players:
        card_id = bots[player].choose_swap(state, player)
        if card_id is not None:
            state = engine.swap_with_trump(state, player, card_id)
            observe(state)
    return state


def play_game(
    engine: BriscolaEngine,
    state: GameState,
    bots: Mapping[str, BotStrategy],
    *,
    observe: Optional[Observer] = None,
    max_steps: int = 1000,
) -> GameState:
    """Drive ``state`` to game over, calling ``observe`` after every command."""
    observe = observe or (lambda _state: None)
    for player in state.players:
        bots[player].on_game_start(state, player)

    for _ in range(max_steps):
        if state.is_over:
            return state
        if state.phase is Phase.REVEALING_HANDS:
            state = engine.finish_reveal(state)
        elif state.phase is Phase.ROUND_COMPLETE:
            state = engine.resolve_round(state)
        else:
            state = _offer_swaps(engine, state, bots, observe)
            player = state.current_player
            assert player is not None
            state = engine.play_card(state, player, bots[player].play_card(state, player))
        observe(state)
    raise RuntimeError(f"Game did not finish within {max_steps} steps.")


def run_match(
    bots: Sequence[BotStrategy],
    *,
    mode: Optional[GameMode] = None,
    n_games: int = 10,
    seed: Optional[int] = None,
    observe: Optional[Observer] = None,
) -> dict:
    players = [f"p{index + 1}" for index in range(len(bots))]
    seats = dict(zip(players, bots))
    engine = BriscolaEngine(players=players, mode=mode, rng=Random(seed))

    wins = {player: 0 for player in players}
    ties = 0
    history = []
    state: Optional[GameState] = None
    for _ in range(n_games):
        state = engine.initialize_game() if state is None else engine.play_again(state)
        if observe is not None:
            observe(state)
        state = play_game(engine, state, seats, observe=observe)
        result = state.result
        assert result is not None
        if result.is_tie:
            ties += 1
        else:
            for player in result.winners:
                wins[player] += 1
        history.append(
            {
                "scores": dict(result.scores),
                "winners": list(result.winners),
                "is_tie": result.is_tie,
                "team_scores": dict(result.team_scores) if result.team_scores else None,
                "rounds": len(state.history),
            }
        )
    return {"mode": str(engine.mode), "wins": wins, "ties": ties, "history": history}


def main(argv: Iterable[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Run a bot match.")
    parser.add_argument(
        "--bots",
        nargs="+",
        default=["greedy", "trump"],
        choices=BOT_REGISTRY.keys(),
        help="One bot per seat, in seat order.",
    )
    parser.add_argument("--mode", choices=[mode.value for mode in GameMode], default=None)
    parser.add_argument("--n", type=int, default=10, help="Number of games to play.")
    parser.add_argument("--seed", type=int, default=42)
    args = parser.parse_args(argv)

    bots = [BOT_REGISTRY[name]() for name in args.bots]
    mode = GameMode(args.mode) if args.mode else None
    results = run_match(bots, mode=mode, n_games=args.n, seed=args.seed)

    print(f"Mode {results['mode']}, {args.n} games")
    for player, count in results["wins"].items():
        print(f"  {player}: {count} wins")
    print(f"  ties: {results['ties']}")


if __name__ == "__main__":
    main()
