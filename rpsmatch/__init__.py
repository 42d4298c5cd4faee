from .core import (
    HISTORY_LIMIT,
    WIN_LIMIT,
    InvalidOperation,
    MatchAlreadyDecided,
    MatchEngine,
    MatchState,
    MatchStatus,
    RoundInProgress,
    RoundResult,
)
from .session import MatchSession, SessionSnapshot
from .utils import MOVES, Move, Outcome, beats, outcome_of

__all__ = [
    "HISTORY_LIMIT",
    "WIN_LIMIT",
    "InvalidOperation",
    "MatchAlreadyDecided",
    "MatchEngine",
    "MatchSession",
    "MatchState",
    "MatchStatus",
    "MOVES",
    "Move",
    "Outcome",
    "RoundInProgress",
    "RoundResult",
    "SessionSnapshot",
    "beats",
    "outcome_of",
]
