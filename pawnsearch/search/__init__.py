from .service import INF, SearchResult, SearchService, alphabeta, get_best_move
from .stub import STUB_MOVES, StubEngine

__all__ = [
    "INF",
    "STUB_MOVES",
    "SearchResult",
    "SearchService",
    "StubEngine",
    "alphabeta",
    "get_best_move",
]
