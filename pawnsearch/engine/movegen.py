"""Pseudo-legal move generation on the flat 64-cell board.

Every piece takes at most one step per direction; sliders are not extended
into rays and targets are only bounds-checked against 0..63 (a step off the
a- or h-file wraps onto the neighbouring rank). No check, castling,
en-passant or promotion handling.
"""

from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import Final, List, Mapping, Optional, Tuple

from .board import Board, Color, Piece
from .move import Move


class Variant(str, Enum):
    """Generator/evaluator flavour.

    SIMPLE accepts any empty-or-capture target for every piece and scores
    material only. IMPROVED gates pawn moves and adds piece-square bonuses.
    """

    SIMPLE = "simple"
    IMPROVED = "improved"


KNIGHT_OFFSETS: Final = (15, 17, 6, 10, -15, -17, -6, -10)
BISHOP_OFFSETS: Final = (7, 9, -7, -9)
ROOK_OFFSETS: Final = (1, -1, 8, -8)
KING_OFFSETS: Final = ROOK_OFFSETS + BISHOP_OFFSETS

# Pawn offsets are ordered: single push, double push, then the two diagonals.
WHITE_PAWN_OFFSETS: Final = (-8, -16, -7, -9)
BLACK_PAWN_OFFSETS: Final = (8, 16, 7, 9)

DIRECTIONS: Final[Mapping[Piece, Tuple[int, ...]]] = MappingProxyType(
    {
        Piece.WP: WHITE_PAWN_OFFSETS,
        Piece.BP: BLACK_PAWN_OFFSETS,
        Piece.WN: KNIGHT_OFFSETS,
        Piece.BN: KNIGHT_OFFSETS,
        Piece.WB: BISHOP_OFFSETS,
        Piece.BB: BISHOP_OFFSETS,
        Piece.WR: ROOK_OFFSETS,
        Piece.BR: ROOK_OFFSETS,
        Piece.WQ: KING_OFFSETS,
        Piece.BQ: KING_OFFSETS,
        Piece.WK: KING_OFFSETS,
        Piece.BK: KING_OFFSETS,
    }
)

# Rows (0 = rank 8) on which pawns start and may double-step
PAWN_START_ROW: Final = MappingProxyType({Color.WHITE: 6, Color.BLACK: 1})


def generate_moves(
    board: Board, side: Optional[Color] = None, variant: Variant = Variant.IMPROVED
) -> List[Move]:
    """Enumerate pseudo-legal moves for ``side`` in square-then-offset order.

    Args:
        board (Board): Position to generate from.
        side (Optional[Color]): Side whose pieces move; defaults to the
            board's side to move.
        variant (Variant): Which target gates to apply.

    Returns:
        List[Move]: Generated moves, possibly empty.
    """
    if side is None:
        side = board.side_to_move
    cells = board.cells
    moves: List[Move] = []
    for from_sq, piece in enumerate(cells):
        if piece is None or piece.color is not side:
            continue
        pawn_gates = variant is Variant.IMPROVED and piece.kind == "p"
        for offset in DIRECTIONS[piece]:
            to_sq = from_sq + offset
            if to_sq < 0 or to_sq >= 64:
                continue
            target = cells[to_sq]
            if pawn_gates:
                if not _pawn_step_allowed(cells, side, from_sq, to_sq, offset):
                    continue
            elif target is not None and target.color is side:
                continue
            moves.append(Move(from_sq, to_sq))
    return moves


def _pawn_step_allowed(
    cells: Tuple[Optional[Piece], ...], side: Color, from_sq: int, to_sq: int, offset: int
) -> bool:
    target = cells[to_sq]
    step = abs(offset)
    if step == 8:
        row = from_sq // 8
        return target is None and 0 < row < 7
    if step == 16:
        if from_sq // 8 != PAWN_START_ROW[side]:
            return False
        return target is None and cells[from_sq + offset // 2] is None
    # Diagonals capture only
    return target is not None and target.color is not side
