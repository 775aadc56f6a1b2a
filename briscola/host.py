"""Host-side command surface for a Briscola table.

``GameHost`` owns the only authoritative snapshot of a table. Commands are
serialized through one lock, each one is validated against the snapshot left
by the previous command, and every accepted command publishes the complete
new snapshot to subscribers in order.

Completed tricks stay on the table for ``resolve_delay`` seconds before they
are resolved, and 2v2 games hold the teammate reveal for ``reveal_delay``
seconds. Both timers capture the game generation and round number they were
scheduled for and do nothing if the table has moved on by the time they fire.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from dataclasses import dataclass
from random import Random
from typing import Awaitable, Callable, Dict, List, Mapping, Optional, Sequence, Tuple, Union

from .cards import Card
from .errors import IllegalCommand
from .game import BriscolaEngine
from .modes import GameMode
from .rules_schema import TableSettings
from .snapshot import player_view
from .state import GameState, Phase

logger = logging.getLogger(__name__)

NO_CHANGE = "NO_CHANGE"
NO_GAME = "NO_GAME"

Listener = Callable[[int, GameState], Union[Awaitable[None], None]]
Command = Callable[[BriscolaEngine, GameState], GameState]
TimerKey = Tuple[int, int, Phase]


@dataclass(frozen=True)
class CommandResult:
    """Outcome of a player command.

    A rejected command leaves ``state`` as the unchanged current snapshot and
    nothing is broadcast.
    """

    accepted: bool
    state: Optional[GameState]
    version: int
    reason: Optional[str] = None


class GameHost:
    """Single-writer coordinator for one table."""

    def __init__(self, settings: Optional[TableSettings] = None, *, rng: Optional[Random] = None) -> None:
        self.settings = settings or TableSettings()
        self.rng = rng or Random(self.settings.seed)
        self.engine: Optional[BriscolaEngine] = None
        self.version = 0
        self._state: Optional[GameState] = None
        self._generation = 0
        self._listeners: List[Listener] = []
        self._lock = asyncio.Lock()
        self._timers: Dict[str, Tuple[TimerKey, asyncio.Task]] = {}

    @property
    def state(self) -> Optional[GameState]:
        return self._state

    @property
    def generation(self) -> int:
        return self._generation

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register ``listener(version, state)``; returns an unsubscribe callable.

        Listeners run while the host holds its lock and must not issue
        commands back to the host directly.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # Game lifecycle ----------------------------------------------------

    async def start_game(
        self,
        players: Sequence[str],
        mode: Optional[GameMode] = None,
        teams: Optional[Mapping[str, int]] = None,
        *,
        deck: Optional[Sequence[Card]] = None,
    ) -> GameState:
        """Deal a new game; raises ``ConfigurationError`` before any state changes."""
        engine = BriscolaEngine(players=players, mode=mode, teams=teams, rng=self.rng, deck=deck)
        state = engine.initialize_game()
        async with self._lock:
            self._cancel_timers()
            self.engine = engine
            self._generation += 1
            logger.info("Table started in %s mode with %d players", engine.mode, len(engine.players))
            await self._publish(state)
        return state

    async def play_again(self) -> GameState:
        """Deal the next game for the same players, rotating the opening lead."""
        async with self._lock:
            engine, previous = self._require_game()
            self._cancel_timers()
            if self.settings.rotate_starting_player:
                state = engine.play_again(previous)
            else:
                state = engine.initialize_game(game_number=previous.game_number + 1)
            self._generation += 1
            await self._publish(state)
        return state

    async def close(self) -> None:
        async with self._lock:
            self._cancel_timers()

    # Actions -----------------------------------------------------------

    async def play_card(self, player: str, card_id: str) -> CommandResult:
        return await self._apply("play_card", player, lambda engine, state: engine.play_card(state, player, card_id))

    async def swap_with_trump(self, player: str, card_id: str) -> CommandResult:
        return await self._apply(
            "swap_with_trump", player, lambda engine, state: engine.swap_with_trump(state, player, card_id)
        )

    async def resolve_round(self) -> CommandResult:
        """Resolve a completed trick now instead of waiting for the timer."""
        return await self._apply("resolve_round", None, lambda engine, state: engine.resolve_round(state))

    async def finish_reveal(self) -> CommandResult:
        return await self._apply("finish_reveal", None, lambda engine, state: engine.finish_reveal(state))

    # Views -------------------------------------------------------------

    def view(self, perspective: Optional[str] = None) -> Optional[dict]:
        if self._state is None:
            return None
        return player_view(self._state, perspective)

    # Helpers -----------------------------------------------------------

    async def _apply(self, name: str, player: Optional[str], command: Command) -> CommandResult:
        async with self._lock:
            if self.engine is None or self._state is None:
                return CommandResult(accepted=False, state=None, version=self.version, reason=NO_GAME)
            state = self._state
            try:
                new_state = command(self.engine, state)
            except IllegalCommand as exc:
                logger.debug("Rejected %s from %s: %s", name, player, exc, extra={"player": player})
                return CommandResult(accepted=False, state=state, version=self.version, reason=exc.code)
            if new_state is state:
                return CommandResult(accepted=False, state=state, version=self.version, reason=NO_CHANGE)
            await self._publish(new_state)
            return CommandResult(accepted=True, state=new_state, version=self.version)

    async def _publish(self, state: GameState) -> None:
        self._state = state
        self.version += 1
        self._schedule_timers(state)
        for listener in list(self._listeners):
            outcome = listener(self.version, state)
            if inspect.isawaitable(outcome):
                await outcome

    def _schedule_timers(self, state: GameState) -> None:
        if state.phase is Phase.ROUND_COMPLETE:
            self._schedule("resolve", self.settings.resolve_delay, state, BriscolaEngine.resolve_round)
        elif state.phase is Phase.REVEALING_HANDS:
            self._schedule("reveal", self.settings.reveal_delay, state, BriscolaEngine.finish_reveal)

    def _schedule(self, name: str, delay: float, state: GameState, transition: Command) -> None:
        key = (self._generation, state.round_number, state.phase)
        pending = self._timers.get(name)
        # A swap during the dwell keeps the original deadline.
        if pending is not None and pending[0] == key and not pending[1].done():
            return
        self._cancel_timer(name)
        self._timers[name] = (key, asyncio.create_task(self._fire_after(name, delay, key, transition)))

    async def _fire_after(self, name: str, delay: float, key: TimerKey, transition: Command) -> None:
        await asyncio.sleep(delay)
        async with self._lock:
            pending = self._timers.get(name)
            if pending is not None and pending[1] is asyncio.current_task():
                del self._timers[name]
            state = self._state
            if self.engine is None or state is None or (self._generation, state.round_number, state.phase) != key:
                logger.debug("Ignoring stale %s timer for generation %d round %d", name, key[0], key[1])
                return
            try:
                await self._publish(transition(self.engine, state))
            except Exception:
                logger.exception("Timer %s failed for generation %d round %d", name, key[0], key[1])

    def _cancel_timer(self, name: str) -> None:
        pending = self._timers.pop(name, None)
        if pending is not None and pending[1] is not asyncio.current_task():
            pending[1].cancel()

    def _cancel_timers(self) -> None:
        for name in list(self._timers):
            self._cancel_timer(name)

    def _require_game(self) -> Tuple[BriscolaEngine, GameState]:
        if self.engine is None or self._state is None:
            raise RuntimeError("No active game.")
        return self.engine, self._state
