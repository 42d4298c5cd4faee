from __future__ import annotations

import random
from enum import Enum, IntEnum

import numpy as np


class Move(IntEnum):
    ROCK = 0
    PAPER = 1
    SCISSORS = 2

    @classmethod
    def parse(cls, value) -> "Move":
        """Accept a Move, its index, its name or its first letter."""
        if isinstance(value, Move):
            return value
        if isinstance(value, int) and not isinstance(value, bool):
            return cls(value)
        if isinstance(value, str):
            s = value.strip().upper()
            if s.isdigit():
                return cls(int(s))
            for m in cls:
                if s == m.name or (len(s) == 1 and m.name.startswith(s)):
                    return m
        raise ValueError(f"not a move: {value!r}")


class Outcome(str, Enum):
    WIN = "WIN"
    LOSE = "LOSE"
    DRAW = "DRAW"


MOVES = [Move.ROCK, Move.PAPER, Move.SCISSORS]

# PAYOFF[i, j] = result of playing i against j (1 win, 0 draw, -1 lose)
# Rock beats Scissors, Paper beats Rock, Scissors beats Paper
PAYOFF = np.array([
    [0, -1, 1],   # Rock vs [R,P,S]
    [1, 0, -1],   # Paper
    [-1, 1, 0],   # Scissors
], dtype=np.int8)


def beats(a: Move, b: Move) -> bool:
    return int(PAYOFF[int(a), int(b)]) == 1


def outcome_of(player: Move, opponent: Move) -> Outcome:
    r = int(PAYOFF[int(player), int(opponent)])
    if r > 0:
        return Outcome.WIN
    if r < 0:
        return Outcome.LOSE
    return Outcome.DRAW


def random_move(rng: random.Random) -> Move:
    return MOVES[rng.randrange(len(MOVES))]
