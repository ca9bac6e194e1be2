"""Static evaluation: material plus optional piece-square bonuses.

Pure, deterministic, and side-effect free. Scores are White-positive.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Final, Mapping, Tuple

from pawnsearch.engine.board import Board, Color, mirror_sq
from pawnsearch.engine.movegen import Variant


# Material values in centipawns
P_VAL: Final = 100
N_VAL: Final = 320
B_VAL: Final = 330
R_VAL: Final = 500
Q_VAL: Final = 900
K_VAL: Final = 20000

PIECE_VALUES: Final[Mapping[str, int]] = MappingProxyType(
    {"p": P_VAL, "n": N_VAL, "b": B_VAL, "r": R_VAL, "q": Q_VAL, "k": K_VAL}
)


# Piece-square tables from White's point of view, rank 8 first (index 0 = a8).
# fmt: off
PSQT_P: Final = (
     0,   0,   0,   0,   0,   0,   0,   0,
    50,  50,  50,  50,  50,  50,  50,  50,
    10,  10,  20,  30,  30,  20,  10,  10,
     5,   5,  10,  25,  25,  10,   5,   5,
     0,   0,   0,  20,  20,   0,   0,   0,
     5,  -5, -10,   0,   0, -10,  -5,   5,
     5,  10,  10, -20, -20,  10,  10,   5,
     0,   0,   0,   0,   0,   0,   0,   0,
)

PSQT_N: Final = (
   -50, -40, -30, -30, -30, -30, -40, -50,
   -40, -20,   0,   0,   0,   0, -20, -40,
   -30,   0,  10,  15,  15,  10,   0, -30,
   -30,   5,  15,  20,  20,  15,   5, -30,
   -30,   0,  15,  20,  20,  15,   0, -30,
   -30,   5,  10,  15,  15,  10,   5, -30,
   -40, -20,   0,   5,   5,   0, -20, -40,
   -50, -40, -30, -30, -30, -30, -40, -50,
)

PSQT_B: Final = (
   -20, -10, -10, -10, -10, -10, -10, -20,
   -10,   0,   0,   0,   0,   0,   0, -10,
   -10,   0,   5,  10,  10,   5,   0, -10,
   -10,   5,   5,  10,  10,   5,   5, -10,
   -10,   0,  10,  10,  10,  10,   0, -10,
   -10,  10,  10,  10,  10,  10,  10, -10,
   -10,   5,   0,   0,   0,   0,   5, -10,
   -20, -10, -10, -10, -10, -10, -10, -20,
)

PSQT_R: Final = (
     0,   0,   0,   0,   0,   0,   0,   0,
     5,  10,  10,  10,  10,  10,  10,   5,
    -5,   0,   0,   0,   0,   0,   0,  -5,
    -5,   0,   0,   0,   0,   0,   0,  -5,
    -5,   0,   0,   0,   0,   0,   0,  -5,
    -5,   0,   0,   0,   0,   0,   0,  -5,
    -5,   0,   0,   0,   0,   0,   0,  -5,
     0,   0,   0,   5,   5,   0,   0,   0,
)

PSQT_Q: Final = (
   -20, -10, -10,  -5,  -5, -10, -10, -20,
   -10,   0,   0,   0,   0,   0,   0, -10,
   -10,   0,   5,   5,   5,   5,   0, -10,
    -5,   0,   5,   5,   5,   5,   0,  -5,
     0,   0,   5,   5,   5,   5,   0,  -5,
   -10,   5,   5,   5,   5,   5,   0, -10,
   -10,   0,   5,   0,   0,   0,   0, -10,
   -20, -10, -10,  -5,  -5, -10, -10, -20,
)

PSQT_K: Final = (
   -30, -40, -40, -50, -50, -40, -40, -30,
   -30, -40, -40, -50, -50, -40, -40, -30,
   -30, -40, -40, -50, -50, -40, -40, -30,
   -30, -40, -40, -50, -50, -40, -40, -30,
   -20, -30, -30, -40, -40, -30, -30, -20,
   -10, -20, -20, -20, -20, -20, -20, -10,
    20,  20,   0,   0,   0,   0,  20,  20,
    20,  30,  10,   0,   0,  10,  30,  20,
)
# fmt: on

PSQT: Final[Mapping[str, Tuple[int, ...]]] = MappingProxyType(
    {"p": PSQT_P, "n": PSQT_N, "b": PSQT_B, "r": PSQT_R, "q": PSQT_Q, "k": PSQT_K}
)


def evaluate(board: Board, variant: Variant = Variant.IMPROVED) -> int:
    """Return a static score in centipawns from White's point of view.

    Black pieces look up the rank-mirrored square, so a colour-flipped mirror
    of any position evaluates to exactly the negated score.
    """
    positional = variant is Variant.IMPROVED
    score = 0
    for sq, piece in board.pieces():
        kind = piece.kind
        if piece.color is Color.WHITE:
            score += PIECE_VALUES[kind]
            if positional:
                score += PSQT[kind][sq]
        else:
            score -= PIECE_VALUES[kind]
            if positional:
                score -= PSQT[kind][mirror_sq(sq)]
    return score
