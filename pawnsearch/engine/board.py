from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List, Optional, Tuple

from .move import Move, parse_uci


STARTPOS_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"


class MalformedFEN(ValueError):
    """Raised when a FEN string cannot be decoded into a 64-cell board."""


class Color(Enum):
    WHITE = "w"
    BLACK = "b"

    @property
    def opponent(self) -> "Color":
        return Color.BLACK if self is Color.WHITE else Color.WHITE


class Piece(Enum):
    """The twelve piece symbols; uppercase is White, lowercase is Black."""

    WP = "P"
    WN = "N"
    WB = "B"
    WR = "R"
    WQ = "Q"
    WK = "K"
    BP = "p"
    BN = "n"
    BB = "b"
    BR = "r"
    BQ = "q"
    BK = "k"

    @classmethod
    def from_symbol(cls, ch: str) -> "Piece":
        try:
            return cls(ch)
        except ValueError as e:
            raise ValueError(f"invalid piece symbol: {ch!r}") from e

    @property
    def symbol(self) -> str:
        return self.value

    @property
    def kind(self) -> str:
        """Lowercase piece letter shared by both colours (``"p"``, ``"n"``, ...)."""
        return self.value.lower()

    @property
    def color(self) -> Color:
        return Color.WHITE if self.value.isupper() else Color.BLACK


Cells = Tuple[Optional[Piece], ...]


@dataclass(frozen=True)
class Board:
    """Immutable 64-cell board plus side to move.

    Notes:
    - Squares are 0..63 with a8=0 and h1=63, scanned rank 8 first.
    - Applying a move returns a fresh Board; instances are never mutated.
    """

    cells: Cells
    side_to_move: Color

    def __post_init__(self) -> None:
        if len(self.cells) != 64:
            raise ValueError(f"board must have 64 cells, got {len(self.cells)}")

    @classmethod
    def startpos(cls) -> "Board":
        return cls.from_fen(STARTPOS_FEN)

    @classmethod
    def from_fen(cls, fen: str) -> "Board":
        """Decode the placement and active-colour fields of a FEN string.

        Args:
            fen (str): FEN string. Castling, en-passant and move counter
                fields may be present or omitted; they are ignored.

        Returns:
            Board: Board holding the decoded cells and side to move.

        Raises:
            MalformedFEN: If the string is empty, the active colour is missing
                or not ``w``/``b``, the placement does not have 8 ranks of 8
                cells, or it contains an unknown piece symbol.
        """
        if not fen or not isinstance(fen, str):
            raise MalformedFEN("FEN must be a non-empty string")
        parts = fen.split()
        if len(parts) < 2:
            raise MalformedFEN("FEN is missing the side-to-move field")
        placement, stm = parts[0], parts[1]

        ranks = placement.split("/")
        if len(ranks) != 8:
            raise MalformedFEN(f"FEN board must have 8 ranks, got {len(ranks)}")
        cells: List[Optional[Piece]] = []
        for rank in ranks:
            width = 0
            for ch in rank:
                if ch in "0123456789":
                    n = int(ch)
                    cells.extend([None] * n)
                    width += n
                else:
                    try:
                        cells.append(Piece.from_symbol(ch))
                    except ValueError as e:
                        raise MalformedFEN(str(e)) from e
                    width += 1
            if width != 8:
                raise MalformedFEN(f"rank {rank!r} does not sum to 8 squares")

        try:
            side = Color(stm)
        except ValueError as e:
            raise MalformedFEN(f"side to move must be 'w' or 'b', got {stm!r}") from e
        return cls(cells=tuple(cells), side_to_move=side)

    def placement(self) -> str:
        """Re-derive the FEN piece-placement field, collapsing empty runs."""
        ranks_str: List[str] = []
        for row in range(8):
            run = 0
            out = []
            for piece in self.cells[row * 8 : row * 8 + 8]:
                if piece is None:
                    run += 1
                    continue
                if run:
                    out.append(str(run))
                    run = 0
                out.append(piece.symbol)
            if run:
                out.append(str(run))
            ranks_str.append("".join(out))
        return "/".join(ranks_str)

    def to_fen(self) -> str:
        return f"{self.placement()} {self.side_to_move.value}"

    def piece_at(self, sq: int) -> Optional[Piece]:
        return self.cells[sq]

    def pieces(self) -> Iterator[Tuple[int, Piece]]:
        """Yield ``(square, piece)`` for occupied squares in index order."""
        for sq, piece in enumerate(self.cells):
            if piece is not None:
                yield sq, piece

    def apply(self, move: Move) -> "Board":
        """Return a new Board with ``move`` played and the side flipped.

        The piece on the origin square replaces whatever stands on the target
        square. No legality check, capture bookkeeping or promotion is done.
        """
        cells = list(self.cells)
        cells[move.to_sq] = cells[move.from_sq]
        cells[move.from_sq] = None
        return Board(cells=tuple(cells), side_to_move=self.side_to_move.opponent)

    def mirrored(self) -> "Board":
        """Colour-flipped rank mirror: every piece swaps colour and rank."""
        cells: List[Optional[Piece]] = [None] * 64
        for sq, piece in self.pieces():
            cells[mirror_sq(sq)] = Piece.from_symbol(piece.symbol.swapcase())
        return Board(cells=tuple(cells), side_to_move=self.side_to_move.opponent)


def mirror_sq(sq: int) -> int:
    # Flip vertically (rank mirror)
    row, file = divmod(sq, 8)
    return (7 - row) * 8 + file


def decode_fen(fen: str) -> Tuple[Board, Color]:
    board = Board.from_fen(fen)
    return board, board.side_to_move


def apply_move(board: Board, move: Move | str) -> Board:
    if isinstance(move, str):
        move = parse_uci(move)
    return board.apply(move)
