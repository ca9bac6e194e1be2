from __future__ import annotations

from .board import Board
from .movegen import Variant, generate_moves


def perft(board: Board, depth: int, variant: Variant = Variant.IMPROVED) -> int:
    """Count leaf nodes of the pseudo-legal move tree below ``board``.

    Definition:
    - depth == 0 returns 1 (the current node).
    - depth > 0 returns the sum over all generated child positions' perft(depth-1).

    A node with no generated moves contributes 0 at depth > 0.
    """
    if depth < 0:
        raise ValueError("depth must be >= 0")
    if depth == 0:
        return 1
    if depth == 1:
        return len(generate_moves(board, variant=variant))

    nodes = 0
    for m in generate_moves(board, variant=variant):
        nodes += perft(board.apply(m), depth - 1, variant)
    return nodes
