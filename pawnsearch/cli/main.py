from __future__ import annotations

import argparse
import logging
import sys
import time
from typing import List, Optional

from ..config import load_config
from ..engine.board import STARTPOS_FEN, Board, MalformedFEN
from ..engine.movegen import Variant
from ..engine.perft import perft
from ..search.service import get_best_move


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="pawnsearch", description="Fixed-depth chess search")
    sub = parser.add_subparsers(dest="command", required=True)

    p_best = sub.add_parser("bestmove", help="Print the best move for a FEN")
    p_best.add_argument("fen", type=str, help="FEN string (quote it)")
    p_best.add_argument("--depth", type=int, default=None, help="Search depth in plies")
    p_best.add_argument("--variant", choices=[v.value for v in Variant], default=None)

    p_perft = sub.add_parser("perft", help="Count pseudo-legal leaf nodes")
    p_perft.add_argument("fen", nargs="?", default=STARTPOS_FEN, help="FEN (default: startpos)")
    p_perft.add_argument("--depth", type=int, default=3, help="Perft depth (default: 3)")
    p_perft.add_argument("--variant", choices=[v.value for v in Variant], default=None)

    p_serve = sub.add_parser("serve", help="Run the HTTP API")
    p_serve.add_argument("--host", type=str, default=None)
    p_serve.add_argument("--port", type=int, default=None)

    sub.add_parser("uci", help="Speak UCI on stdin/stdout")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = _build_parser().parse_args(argv)
    cfg = load_config()
    logging.basicConfig(level=cfg.log_level, stream=sys.stderr)

    if args.command == "bestmove":
        variant = Variant(args.variant) if args.variant else cfg.variant
        depth = args.depth if args.depth is not None else cfg.default_depth
        try:
            move = get_best_move(args.fen, depth, variant)
        except MalformedFEN as e:
            print(f"error: {e}", file=sys.stderr)
            return 2
        print(move if move is not None else "(none)")
        return 0

    if args.command == "perft":
        variant = Variant(args.variant) if args.variant else cfg.variant
        try:
            board = Board.from_fen(args.fen)
        except MalformedFEN as e:
            print(f"error: {e}", file=sys.stderr)
            return 2
        start = time.perf_counter()
        nodes = perft(board, args.depth, variant)
        dt = time.perf_counter() - start
        print(f"nodes={nodes} depth={args.depth} time_ms={int(dt*1000)} nps={int(nodes/max(dt,1e-9))}")
        return 0

    if args.command == "serve":
        import uvicorn

        uvicorn.run(
            "pawnsearch.protocol.http.app:create_app",
            factory=True,
            host=args.host or cfg.host,
            port=args.port or cfg.port,
            log_level=cfg.log_level.lower(),
        )
        return 0

    from ..protocol.uci.loop import run_uci

    run_uci(config=cfg)
    return 0


if __name__ == "__main__":
    sys.exit(main())
