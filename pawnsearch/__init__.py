"""Fixed-depth alpha-beta chess search over a simplified move generator."""

from pawnsearch.engine.board import Board, Color, MalformedFEN, Piece
from pawnsearch.engine.movegen import Variant, generate_moves
from pawnsearch.eval import evaluate
from pawnsearch.search.service import SearchService, get_best_move

__version__ = "0.1.0"

__all__ = [
    "Board",
    "Color",
    "MalformedFEN",
    "Piece",
    "SearchService",
    "Variant",
    "evaluate",
    "generate_moves",
    "get_best_move",
]
