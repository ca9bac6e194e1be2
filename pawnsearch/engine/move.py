from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Move:
    """Coordinate move between two board squares.

    Attributes:
        from_sq (int): Origin square index (0 = a8 .. 63 = h1).
        to_sq (int): Destination square index.
    """

    from_sq: int
    to_sq: int

    def to_uci(self) -> str:
        """Serialize the move into coordinate form.

        Returns:
            str: Move encoded like ``"e2e4"``.
        """
        return square_to_str(self.from_sq) + square_to_str(self.to_sq)

    def __str__(self) -> str:
        return self.to_uci()


def parse_uci(uci: str) -> Move:
    """Parse a 4-character coordinate move string.

    Args:
        uci (str): Move such as ``"g1f3"``.

    Returns:
        Move: Parsed move.

    Raises:
        ValueError: If the string has the wrong length or names an invalid
            square.
    """
    if len(uci) != 4:
        raise ValueError(f"invalid move length: {uci!r}")
    return Move(str_to_square(uci[0:2]), str_to_square(uci[2:4]))


def str_to_square(s: str) -> int:
    """Convert a square name into a board index.

    Index 0 is a8 and indices grow along the rank, then down the board, so
    rank 8 occupies 0..7 and rank 1 occupies 56..63.

    Raises:
        ValueError: If ``s`` is not a valid square.
    """
    if len(s) != 2 or s[0] < "a" or s[0] > "h" or s[1] < "1" or s[1] > "8":
        raise ValueError(f"invalid square: {s!r}")
    file = ord(s[0]) - ord("a")
    row = 8 - int(s[1])
    return row * 8 + file


def square_to_str(idx: int) -> str:
    """Convert a board index into a square name.

    Raises:
        ValueError: If ``idx`` is outside 0..63.
    """
    if idx < 0 or idx > 63:
        raise ValueError(f"invalid square index: {idx}")
    row, file = divmod(idx, 8)
    return chr(ord("a") + file) + str(8 - row)
