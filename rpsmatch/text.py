from __future__ import annotations

from typing import Dict, Optional

from .core import MatchStatus
from .utils import Move, Outcome

IDLE = "Choose your weapon!"
THINKING = "CPU is thinking..."

RESULT: Dict[Outcome, str] = {
    Outcome.WIN: "BOOM! YOU WIN! \U0001F389",
    Outcome.LOSE: "OUCH! CPU WIN! \U0001F61E",
    Outcome.DRAW: "STALEMATE! ⚔️",
}

EMOJI: Dict[Move, str] = {
    Move.ROCK: "\U0001FAA8",
    Move.PAPER: "\U0001F4C4",
    Move.SCISSORS: "✂️",
}

PLAYER = "PLAYER"
COMPUTER = "COMPUTER"

DIALOG = {
    PLAYER: ("\U0001F3C6", "VICTORY!", "You are the Rock Paper Scissors Champion!"),
    COMPUTER: ("\U0001F916", "DEFEAT!", "The CPU was too strong this time."),
}


def winner_of(status: MatchStatus) -> Optional[str]:
    if status is MatchStatus.PLAYER_WON:
        return PLAYER
    if status is MatchStatus.OPPONENT_WON:
        return COMPUTER
    return None


def choice_label(move: Optional[Move]) -> str:
    if move is None:
        return "?"
    return f"{EMOJI[move]} {move.name.title()}"
