from __future__ import annotations

from fastapi.testclient import TestClient

from pawnsearch.config import MAX_DEPTH, EngineConfig
from pawnsearch.engine.board import STARTPOS_FEN
from pawnsearch.engine.movegen import Variant
from pawnsearch.protocol.http.app import create_app
from pawnsearch.search.stub import STUB_MOVES


def _client(config: EngineConfig | None = None) -> TestClient:
    return TestClient(create_app(config or EngineConfig()))


def test_bestmove_shape_and_defaults() -> None:
    r = _client().post("/api/bestmove", json={"fen": STARTPOS_FEN})
    assert r.status_code == 200
    body = r.json()
    assert set(["best_move", "score", "nodes", "depth", "time_ms", "variant"]).issubset(body)
    assert body["depth"] == 3
    assert body["variant"] == "improved"
    assert body["engine"] == "search"
    assert body["best_move"][1] in "12"
    assert body["nodes"] > 0


def test_bestmove_depth_1() -> None:
    r = _client().post("/api/bestmove", json={"fen": STARTPOS_FEN, "depth": 1})
    assert r.json()["best_move"] == "b1c3"
    r = _client().post(
        "/api/bestmove", json={"fen": STARTPOS_FEN, "depth": 1, "variant": "simple"}
    )
    assert r.json()["best_move"] == "a2a3"
    assert r.json()["score"] == 0


def test_bestmove_non_positive_depth_uses_config_default() -> None:
    client = _client(EngineConfig(default_depth=2))
    r = client.post("/api/bestmove", json={"fen": STARTPOS_FEN, "depth": 0})
    assert r.json()["depth"] == 2


def test_bestmove_null_when_no_move() -> None:
    r = _client().post("/api/bestmove", json={"fen": "8/8/8/8/8/8/8/P7 w"})
    assert r.status_code == 200
    assert r.json()["best_move"] is None


def test_bestmove_stub_engine() -> None:
    r = _client().post("/api/bestmove", json={"fen": STARTPOS_FEN, "engine": "stub"})
    body = r.json()
    assert body["best_move"] in STUB_MOVES
    assert body["score"] is None
    assert body["engine"] == "stub"


def test_moves_endpoint() -> None:
    r = _client().post("/api/moves", json={"fen": STARTPOS_FEN})
    body = r.json()
    assert body["side_to_move"] == "w"
    assert len(body["moves"]) == 21
    assert "e2e4" in body["moves"]
    r = _client(EngineConfig(variant=Variant.SIMPLE)).post("/api/moves", json={"fen": STARTPOS_FEN})
    assert len(r.json()["moves"]) == 36


def test_evaluate_endpoint() -> None:
    r = _client().post("/api/evaluate", json={"fen": "8/8/8/8/8/8/4K3/8 w", "variant": "simple"})
    assert r.json() == {"score": 20000, "variant": "simple"}


def test_perft_endpoint_and_bounds() -> None:
    client = _client()
    r = client.post("/api/perft", json={"fen": STARTPOS_FEN, "depth": 1})
    assert r.json() == {"nodes": 21}
    r_bad = client.post("/api/perft", json={"fen": STARTPOS_FEN, "depth": 7})
    assert r_bad.status_code == 422


def test_bestmove_rejects_depth_over_cap() -> None:
    r = _client().post("/api/bestmove", json={"fen": STARTPOS_FEN, "depth": MAX_DEPTH + 1})
    assert r.status_code == 422
    err = r.json()["error"]
    assert err["code"] == "unprocessable_entity"
    assert any(fe["field"] == "body.depth" for fe in err["field_errors"])
