from __future__ import annotations

import asyncio
import inspect
from dataclasses import dataclass, replace
from typing import Any, Awaitable, Callable, Dict, List, Optional

from . import text
from .core import MatchAlreadyDecided, MatchEngine, MatchState, RoundInProgress, RoundResult
from .utils import Move, Outcome

Subscriber = Callable[["SessionSnapshot"], Any]


@dataclass(frozen=True)
class SessionSnapshot:
    state: MatchState
    thinking: bool = False
    player_choice: Optional[Move] = None
    opponent_choice: Optional[Move] = None
    last_outcome: Optional[Outcome] = None
    message: str = text.IDLE
    dialog: Optional[str] = None  # winner side while the match-end dialog is shown

    def to_dict(self) -> Dict[str, Any]:
        return {
            "state": self.state.to_dict(),
            "thinking": self.thinking,
            "player_choice": self.player_choice.name if self.player_choice is not None else None,
            "opponent_choice": self.opponent_choice.name if self.opponent_choice is not None else None,
            "last_outcome": self.last_outcome.value if self.last_outcome is not None else None,
            "message": self.message,
            "dialog": self.dialog,
        }


class MatchSession:
    """
    Presentation-side wrapper around a MatchEngine.

    Paces each round with a "CPU is thinking" delay, allows at most one round
    in flight, holds the match-end dialog until the player dismisses it, and
    publishes a new SessionSnapshot to subscribers after every transition.
    """

    def __init__(
        self,
        engine: Optional[MatchEngine] = None,
        think_delay: float = 0.7,
        reveal_delay: float = 0.5,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ):
        self.engine = engine or MatchEngine()
        self.think_delay = think_delay
        self.reveal_delay = reveal_delay
        self._sleep = sleep
        self._busy = False
        self._subscribers: List[Subscriber] = []
        self._snapshot = SessionSnapshot(state=self.engine.state)

    @property
    def busy(self) -> bool:
        return self._busy

    def snapshot(self) -> SessionSnapshot:
        return self._snapshot

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    async def _publish(self, snap: SessionSnapshot) -> None:
        self._snapshot = snap
        for cb in list(self._subscribers):
            res = cb(snap)
            if inspect.isawaitable(res):
                await res

    async def play(self, move) -> RoundResult:
        if self._busy:
            raise RoundInProgress("previous round is still being presented")
        if self._snapshot.dialog is not None or self.engine.state.decided:
            raise MatchAlreadyDecided("match over; dismiss the dialog first")
        move = Move.parse(move)
        previous = self._snapshot
        self._busy = True
        try:
            try:
                await self._publish(replace(
                    self._snapshot,
                    thinking=True,
                    player_choice=move,
                    opponent_choice=None,
                    message=text.THINKING,
                ))
                await self._sleep(self.think_delay)
            except asyncio.CancelledError:
                # round never resolved; put the view back as it was
                await self._publish(previous)
                raise

            result = self.engine.resolve_round(move)
            await self._publish(SessionSnapshot(
                state=result.state,
                player_choice=result.player_move,
                opponent_choice=result.opponent_move,
                last_outcome=result.outcome,
                message=text.RESULT[result.outcome],
            ))

            winner = text.winner_of(result.state.status)
            if winner is not None:
                await self._sleep(self.reveal_delay)
                await self._publish(replace(self._snapshot, dialog=winner))
            return result
        finally:
            self._busy = False

    async def _restart(self) -> SessionSnapshot:
        if self._busy:
            raise RoundInProgress("cannot reset while a round is being presented")
        state = self.engine.reset()
        await self._publish(SessionSnapshot(state=state))
        return self._snapshot

    async def play_again(self) -> SessionSnapshot:
        return await self._restart()

    async def exit_to_menu(self) -> SessionSnapshot:
        # leaving the screen drops the whole session state, best streak included
        snap = await self._restart()
        self._subscribers.clear()
        return snap
