from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Optional, Tuple

from pawnsearch.config import DEFAULT_DEPTH
from pawnsearch.engine.board import Board, Color
from pawnsearch.engine.move import Move
from pawnsearch.engine.movegen import Variant, generate_moves
from pawnsearch.eval import evaluate


logger = logging.getLogger(__name__)

INF = 10_000_000


@dataclass
class SearchStats:
    nodes: int = 0


@dataclass
class SearchResult:
    best_move: Optional[Move]
    score: int
    nodes: int
    depth: int
    time_ms: int
    variant: Variant


def alphabeta(
    board: Board,
    depth: int,
    alpha: int = -INF,
    beta: int = INF,
    variant: Variant = Variant.IMPROVED,
    stats: Optional[SearchStats] = None,
) -> Tuple[int, Optional[Move]]:
    """Depth-limited minimax with alpha-beta pruning.

    White maximizes and Black minimizes the White-positive evaluation. Moves
    are tried in generation order and a later move only replaces the best one
    when strictly better, so ties resolve to the first move generated.

    Returns:
        Tuple[int, Optional[Move]]: Score of the node and the move achieving
            it, or ``None`` at a leaf (depth exhausted or no moves).
    """
    if stats is not None:
        stats.nodes += 1
    if depth <= 0:
        return evaluate(board, variant), None
    moves = generate_moves(board, variant=variant)
    if not moves:
        return evaluate(board, variant), None

    maximizing = board.side_to_move is Color.WHITE
    best_score = -INF if maximizing else INF
    best_move: Optional[Move] = None
    for mv in moves:
        score, _ = alphabeta(board.apply(mv), depth - 1, alpha, beta, variant, stats)
        if maximizing:
            if score > best_score:
                best_score, best_move = score, mv
            alpha = max(alpha, score)
        else:
            if score < best_score:
                best_score, best_move = score, mv
            beta = min(beta, score)
        if beta <= alpha:
            break
    return best_score, best_move


class SearchService:
    """Fixed-depth search front end; holds no state between calls."""

    def search(
        self,
        board: Board,
        depth: int = DEFAULT_DEPTH,
        variant: Variant = Variant.IMPROVED,
    ) -> SearchResult:
        if depth < 1:
            depth = DEFAULT_DEPTH
        stats = SearchStats()
        start = time.perf_counter()
        score, best = alphabeta(board, depth, -INF, INF, variant, stats)
        time_ms = int((time.perf_counter() - start) * 1000)
        logger.debug(
            "search complete",
            extra={
                "depth": depth,
                "nodes": stats.nodes,
                "time_ms": time_ms,
                "score": score,
                "best_move": best.to_uci() if best else None,
                "variant": variant.value,
            },
        )
        return SearchResult(
            best_move=best,
            score=score,
            nodes=stats.nodes,
            depth=depth,
            time_ms=time_ms,
            variant=variant,
        )


def get_best_move(
    fen: str, max_depth: Optional[int] = None, variant: Variant = Variant.IMPROVED
) -> Optional[str]:
    """Return the best coordinate move for the position, or ``None``.

    ``max_depth`` values that are missing or not positive fall back to 3.

    Raises:
        MalformedFEN: If ``fen`` cannot be decoded.
    """
    board = Board.from_fen(fen)
    depth = max_depth if max_depth is not None and max_depth > 0 else DEFAULT_DEPTH
    res = SearchService().search(board, depth=depth, variant=variant)
    if res.best_move is None:
        logger.info("no move available", extra={"fen": fen, "depth": depth})
        return None
    return res.best_move.to_uci()
