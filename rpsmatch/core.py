from __future__ import annotations

import random
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Callable, Dict, Optional, Tuple

from .utils import Move, Outcome, outcome_of, random_move

WIN_LIMIT = 5
HISTORY_LIMIT = 8


class InvalidOperation(Exception):
    """A round or reset was requested when the match cannot accept it."""


class MatchAlreadyDecided(InvalidOperation):
    pass


class RoundInProgress(InvalidOperation):
    pass


class MatchStatus(str, Enum):
    IN_PROGRESS = "IN_PROGRESS"
    PLAYER_WON = "PLAYER_WON"
    OPPONENT_WON = "OPPONENT_WON"


@dataclass(frozen=True)
class MatchState:
    player_score: int = 0
    opponent_score: int = 0
    current_streak: int = 0
    best_streak: int = 0
    history: Tuple[Outcome, ...] = field(default_factory=tuple)  # most recent first
    status: MatchStatus = MatchStatus.IN_PROGRESS
    win_limit: int = WIN_LIMIT

    @property
    def decided(self) -> bool:
        return self.status is not MatchStatus.IN_PROGRESS

    def to_dict(self) -> Dict[str, Any]:
        return {
            "player_score": self.player_score,
            "opponent_score": self.opponent_score,
            "current_streak": self.current_streak,
            "best_streak": self.best_streak,
            "history": [o.value for o in self.history],
            "status": self.status.value,
            "win_limit": self.win_limit,
        }


@dataclass(frozen=True)
class RoundResult:
    player_move: Move
    opponent_move: Move
    outcome: Outcome
    state: MatchState

    def to_dict(self) -> Dict[str, Any]:
        return {
            "player_move": self.player_move.name,
            "opponent_move": self.opponent_move.name,
            "outcome": self.outcome.value,
            "state": self.state.to_dict(),
        }


def apply_outcome(state: MatchState, outcome: Outcome) -> MatchState:
    """Return the state that follows ``state`` after one round ending in ``outcome``."""
    player, opponent = state.player_score, state.opponent_score
    streak, best = state.current_streak, state.best_streak
    if outcome is Outcome.WIN:
        player += 1
        streak += 1
        best = max(best, streak)
    elif outcome is Outcome.LOSE:
        opponent += 1
        streak = 0
    else:
        streak = 0

    history = ((outcome,) + state.history)[:HISTORY_LIMIT]

    if player >= state.win_limit:
        status = MatchStatus.PLAYER_WON
    elif opponent >= state.win_limit:
        status = MatchStatus.OPPONENT_WON
    else:
        status = MatchStatus.IN_PROGRESS

    return replace(
        state,
        player_score=player,
        opponent_score=opponent,
        current_streak=streak,
        best_streak=best,
        history=history,
        status=status,
    )


class MatchEngine:
    """
    Match engine for a first-to-``win_limit`` Rock-Paper-Scissors match.

    - Opponent plays uniformly at random unless an ``opponent`` callable is given
    - State is an immutable MatchState, replaced on every round and on reset
    - A decided match rejects rounds with MatchAlreadyDecided until reset()
    """

    def __init__(
        self,
        win_limit: int = WIN_LIMIT,
        opponent: Optional[Callable[[], Move]] = None,
        random_seed: Optional[int] = None,
    ):
        if win_limit < 1:
            raise ValueError(f"win_limit must be positive, got {win_limit}")
        self.win_limit = win_limit
        self.rng = random.Random(random_seed)
        self._opponent = opponent or (lambda: random_move(self.rng))
        self._state = MatchState(win_limit=win_limit)

    @property
    def state(self) -> MatchState:
        return self._state

    def resolve_round(self, player_move: Move) -> RoundResult:
        if self._state.decided:
            raise MatchAlreadyDecided(f"match already decided: {self._state.status.value}")
        player_move = Move.parse(player_move)
        opponent_move = Move.parse(self._opponent())
        outcome = outcome_of(player_move, opponent_move)
        self._state = apply_outcome(self._state, outcome)
        return RoundResult(player_move, opponent_move, outcome, self._state)

    def reset(self) -> MatchState:
        # best_streak is cleared too; a new match starts from nothing
        self._state = MatchState(win_limit=self.win_limit)
        return self._state
