from __future__ import annotations

import pytest

from pawnsearch.engine.board import Board, Color, Piece, STARTPOS_FEN, apply_move
from pawnsearch.engine.move import Move, parse_uci, square_to_str, str_to_square


def test_apply_returns_new_board_and_does_not_mutate() -> None:
    b = Board.from_fen(STARTPOS_FEN)
    b2 = b.apply(parse_uci("e2e4"))

    # Original board unchanged
    assert b.to_fen() == "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w"

    assert b2.to_fen() == "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b"
    assert b2.side_to_move is Color.BLACK


def test_apply_overwrites_target_without_bookkeeping() -> None:
    b = Board.from_fen("8/8/8/3p4/4P3/8/8/8 w")
    b2 = apply_move(b, "e4d5")
    assert b2.piece_at(str_to_square("d5")) is Piece.WP
    assert b2.piece_at(str_to_square("e4")) is None
    assert sum(1 for _ in b2.pieces()) == 1


def test_side_flips_unconditionally() -> None:
    b = Board.from_fen("8/8/8/8/8/8/8/k6K b")
    # Moving a White piece while Black is to move still hands the turn to White
    b2 = b.apply(parse_uci("h1h2"))
    assert b2.side_to_move is Color.WHITE


def test_square_conversions() -> None:
    assert str_to_square("a8") == 0
    assert str_to_square("h8") == 7
    assert str_to_square("a1") == 56
    assert str_to_square("h1") == 63
    assert str_to_square("e2") == 52
    for idx in range(64):
        assert str_to_square(square_to_str(idx)) == idx


def test_move_to_uci() -> None:
    assert Move(str_to_square("g1"), str_to_square("f3")).to_uci() == "g1f3"
    assert str(parse_uci("e7e5")) == "e7e5"


@pytest.mark.parametrize("bad", ["", "e2", "e2e", "e2e4q", "i2e4", "e9e4", "e0e4"])
def test_parse_rejects_malformed_moves(bad: str) -> None:
    with pytest.raises(ValueError):
        parse_uci(bad)


def test_square_to_str_rejects_out_of_range() -> None:
    with pytest.raises(ValueError):
        square_to_str(64)
    with pytest.raises(ValueError):
        square_to_str(-1)
