from __future__ import annotations

import random
from typing import Optional


# Common first moves for White
STUB_MOVES = ("e2e4", "d2d4", "g1f3", "c2c4")


class StubEngine:
    """Demonstration engine that ignores the position.

    It picks one of a handful of opening moves at random. Pass ``seed`` for a
    reproducible sequence.
    """

    def __init__(self, seed: Optional[int] = None) -> None:
        self._rng = random.Random(seed)

    def best_move(self, fen: str, max_nodes: Optional[int] = None) -> str:
        return self._rng.choice(STUB_MOVES)
