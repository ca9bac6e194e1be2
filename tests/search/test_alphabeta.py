from __future__ import annotations

from typing import List

import pytest

from pawnsearch.engine.board import Board, Color, STARTPOS_FEN
from pawnsearch.engine.movegen import Variant, generate_moves
from pawnsearch.eval import evaluate
from pawnsearch.search.service import INF, SearchService, SearchStats, alphabeta


def _minimax(board: Board, depth: int, variant: Variant, counter: List[int]) -> int:
    # Plain minimax with no pruning, used as the reference score
    counter[0] += 1
    if depth == 0:
        return evaluate(board, variant)
    moves = generate_moves(board, variant=variant)
    if not moves:
        return evaluate(board, variant)
    scores = [_minimax(board.apply(m), depth - 1, variant, counter) for m in moves]
    return max(scores) if board.side_to_move is Color.WHITE else min(scores)


@pytest.mark.parametrize(
    "fen,depth",
    [
        (STARTPOS_FEN, 3),
        ("r1bqkbnr/pppp1ppp/2n5/4p3/3P4/5N2/PPP1PPPP/RNBQKB1R b", 2),
        ("r3k2r/p1ppqpb1/bn2pnp1/3PN3/1p2P3/2N2Q1p/PPPBBPPP/R3K2R w", 2),
        ("8/2p5/3p4/KP5r/1R3p1k/8/4P1P1/8 w", 3),
        ("4k3/8/8/2n5/3B4/8/8/4K3 b", 3),
    ],
)
@pytest.mark.parametrize("variant", list(Variant))
def test_pruning_matches_full_minimax(fen: str, depth: int, variant: Variant) -> None:
    board = Board.from_fen(fen)
    counter = [0]
    expected = _minimax(board, depth, variant, counter)

    stats = SearchStats()
    score, best = alphabeta(board, depth, -INF, INF, variant, stats)
    assert score == expected
    assert best is not None
    # The chosen move must actually achieve the reported score
    assert _minimax(board.apply(best), depth - 1, variant, [0]) == score
    assert stats.nodes <= counter[0]


def test_pruning_reduces_nodes_at_startpos() -> None:
    board = Board.startpos()
    counter = [0]
    _minimax(board, 3, Variant.IMPROVED, counter)
    stats = SearchStats()
    alphabeta(board, 3, -INF, INF, Variant.IMPROVED, stats)
    assert stats.nodes < counter[0]


def test_depth_zero_returns_static_eval() -> None:
    board = Board.from_fen("r1bqkbnr/pppp1ppp/2n5/4p3/3P4/5N2/PPP1PPPP/RNBQKB1R b")
    for variant in Variant:
        assert alphabeta(board, 0, -INF, INF, variant) == (evaluate(board, variant), None)


def test_no_moves_returns_static_eval() -> None:
    board = Board.from_fen("8/8/8/8/8/8/8/P7 w")
    assert alphabeta(board, 3) == (evaluate(board), None)


def test_lone_king_depth_2() -> None:
    board = Board.from_fen("8/8/8/8/8/8/4K3/8 w")
    # Improved: f1 carries the best king bonus among the reachable squares
    score, best = alphabeta(board, 2, variant=Variant.IMPROVED)
    assert best is not None and best.to_uci() == "e2f1"
    assert score == 20010
    # Simple: every reply scores the same, so the first generated move wins
    score, best = alphabeta(board, 2, variant=Variant.SIMPLE)
    assert best is not None and best.to_uci() == "e2f2"
    assert score == 20000


def test_black_ties_keep_first_move() -> None:
    board = Board.from_fen("8/4k3/8/8/8/8/8/8 b")
    score, best = alphabeta(board, 1, variant=Variant.SIMPLE)
    assert score == -20000
    assert best is not None and best.to_uci() == "e7f7"


def test_search_does_not_change_root_board() -> None:
    board = Board.from_fen("r3k2r/p1ppqpb1/bn2pnp1/3PN3/1p2P3/2N2Q1p/PPPBBPPP/R3K2R w")
    before = (tuple(board.cells), board.side_to_move, board.to_fen())
    SearchService().search(board, depth=2)
    assert (tuple(board.cells), board.side_to_move, board.to_fen()) == before


def test_service_defaults_non_positive_depth() -> None:
    res = SearchService().search(Board.startpos(), depth=0)
    assert res.depth == 3
    assert res.best_move is not None
    assert res.nodes > 0
    assert res.variant is Variant.IMPROVED


def test_black_prefers_winning_material() -> None:
    # Black queen on g1 can take the white rook next to it
    board = Board.from_fen("7k/8/8/8/8/8/8/K4Rq1 b")
    res = SearchService().search(board, depth=1, variant=Variant.SIMPLE)
    assert res.best_move is not None and res.best_move.to_uci() == "g1f1"
    assert res.score == -900
