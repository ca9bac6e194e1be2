from __future__ import annotations

import logging
from typing import Dict, List, Literal, Optional

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, Field
from starlette.exceptions import HTTPException as StarletteHTTPException

from .error import (
    exception_handler,
    http_exception_handler,
    malformed_fen_handler,
    request_validation_exception_handler,
)
from .logging_middleware import RequestIDLoggingMiddleware
from ... import __version__
from ...config import MAX_DEPTH, EngineConfig, load_config
from ...engine.board import Board, MalformedFEN
from ...engine.movegen import Variant, generate_moves
from ...engine.perft import perft as perft_nodes
from ...eval import evaluate
from ...search.service import SearchService
from ...search.stub import StubEngine


logger = logging.getLogger(__name__)

MAX_PERFT_DEPTH = 6


class PositionRequest(BaseModel):
    fen: str = Field(..., description="FEN string; only placement and side to move are read")
    variant: Optional[Variant] = None


class BestMoveRequest(PositionRequest):
    depth: Optional[int] = Field(
        default=None,
        le=MAX_DEPTH,
        description="Search depth in plies; missing or < 1 uses the default",
    )
    engine: Literal["search", "stub"] = "search"


class PerftRequest(PositionRequest):
    depth: int = Field(..., ge=0, le=MAX_PERFT_DEPTH)


class BestMoveResponse(BaseModel):
    best_move: Optional[str]
    score: Optional[int]
    nodes: int
    depth: int
    time_ms: int
    variant: Variant
    engine: str


class MovesResponse(BaseModel):
    side_to_move: str
    moves: List[str]


class EvaluateResponse(BaseModel):
    score: int
    variant: Variant


class PerftResponse(BaseModel):
    nodes: int


def create_app(config: Optional[EngineConfig] = None) -> FastAPI:
    cfg = config or load_config()
    app = FastAPI(title="pawnsearch", version=__version__)

    logging.basicConfig(level=cfg.log_level)

    app.add_middleware(RequestIDLoggingMiddleware)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_exception_handler)
    app.add_exception_handler(MalformedFEN, malformed_fen_handler)
    app.add_exception_handler(Exception, exception_handler)

    service = SearchService()
    stub = StubEngine()

    def _variant(req: PositionRequest) -> Variant:
        return req.variant or cfg.variant

    @app.get("/healthz")
    async def healthz() -> Dict[str, str]:
        return {"status": "ok"}

    @app.post("/api/bestmove", response_model=BestMoveResponse)
    def bestmove(req: BestMoveRequest) -> BestMoveResponse:
        board = Board.from_fen(req.fen)
        variant = _variant(req)
        depth = req.depth if req.depth is not None and req.depth > 0 else cfg.default_depth
        if req.engine == "stub":
            return BestMoveResponse(
                best_move=stub.best_move(req.fen),
                score=None,
                nodes=0,
                depth=depth,
                time_ms=0,
                variant=variant,
                engine=req.engine,
            )
        res = service.search(board, depth=depth, variant=variant)
        return BestMoveResponse(
            best_move=res.best_move.to_uci() if res.best_move else None,
            score=res.score,
            nodes=res.nodes,
            depth=res.depth,
            time_ms=res.time_ms,
            variant=variant,
            engine=req.engine,
        )

    @app.post("/api/moves", response_model=MovesResponse)
    def moves(req: PositionRequest) -> MovesResponse:
        board = Board.from_fen(req.fen)
        generated = generate_moves(board, variant=_variant(req))
        return MovesResponse(
            side_to_move=board.side_to_move.value, moves=[m.to_uci() for m in generated]
        )

    @app.post("/api/evaluate", response_model=EvaluateResponse)
    def evaluate_position(req: PositionRequest) -> EvaluateResponse:
        variant = _variant(req)
        return EvaluateResponse(score=evaluate(Board.from_fen(req.fen), variant), variant=variant)

    @app.post("/api/perft", response_model=PerftResponse)
    def perft(req: PerftRequest) -> PerftResponse:
        board = Board.from_fen(req.fen)
        return PerftResponse(nodes=perft_nodes(board, req.depth, _variant(req)))

    return app
