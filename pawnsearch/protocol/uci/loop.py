from __future__ import annotations

import logging
import sys
from typing import Callable, Iterable, List, Optional

from ...config import MAX_DEPTH, EngineConfig, load_config
from ...engine.board import Board, Color, MalformedFEN
from ...engine.move import parse_uci
from ...engine.movegen import Variant, generate_moves
from ...search.service import SearchResult, SearchService


logger = logging.getLogger(__name__)

Writer = Callable[[str], None]


class UCIEngine:
    """UCI protocol adapter around the search.

    Notes:
    - Searches run synchronously to the requested depth; there is no clock,
      so ``stop`` has nothing to interrupt and time fields of ``go`` are ignored.
    - Command set: uci, isready, ucinewgame, setoption, position, go, quit.
    """

    def __init__(self, config: Optional[EngineConfig] = None) -> None:
        cfg = config or EngineConfig()
        self.board: Board = Board.startpos()
        self.search = SearchService()
        self.depth: int = cfg.default_depth
        self.variant: Variant = cfg.variant

    # ---- Command handlers ----
    def cmd_uci(self, write: Writer) -> None:
        write("id name pawnsearch")
        write("id author pawnsearch developers")
        write(f"option name Depth type spin default {self.depth} min 1 max {MAX_DEPTH}")
        write(f"option name Variant type combo default {self.variant.value} var simple var improved")
        write("uciok")

    def cmd_isready(self, write: Writer) -> None:
        write("readyok")

    def cmd_ucinewgame(self) -> None:
        self.board = Board.startpos()

    def cmd_setoption(self, args: List[str]) -> None:
        # setoption name <name> [value <value>]
        if not args:
            return
        tokens = args[1:] if args[0] == "name" else args
        if "value" in tokens:
            i = tokens.index("value")
            name, value = " ".join(tokens[:i]), " ".join(tokens[i + 1 :])
        else:
            name, value = " ".join(tokens), ""
        name = name.strip().lower()
        value = value.strip()
        if name == "depth":
            try:
                self.depth = _clamp_depth(int(value))
            except ValueError:
                logger.warning("ignoring invalid Depth option", extra={"value": value})
        elif name == "variant":
            try:
                self.variant = Variant(value.lower())
            except ValueError:
                logger.warning("ignoring invalid Variant option", extra={"value": value})

    def cmd_position(self, args: List[str]) -> None:
        # position [startpos | fen <FEN> ] [moves m1 m2 ...]
        if not args:
            return
        idx = 0
        if args[idx] == "startpos":
            board = Board.startpos()
            idx += 1
        elif args[idx] == "fen":
            idx += 1
            fen_tokens: List[str] = []
            while idx < len(args) and args[idx] != "moves":
                fen_tokens.append(args[idx])
                idx += 1
            try:
                board = Board.from_fen(" ".join(fen_tokens))
            except MalformedFEN as e:
                # Keep the previous position
                logger.warning("ignoring invalid FEN", extra={"reason": str(e)})
                return
        else:
            return

        if idx < len(args) and args[idx] == "moves":
            for u in args[idx + 1 :]:
                try:
                    mv = parse_uci(u)
                except ValueError:
                    logger.warning("ignoring malformed move", extra={"move": u})
                    break
                if mv not in generate_moves(board, variant=self.variant):
                    logger.warning("ignoring unavailable move", extra={"move": u})
                    break
                board = board.apply(mv)
        self.board = board

    def cmd_go(self, args: List[str], write: Writer) -> SearchResult:
        depth = self._parse_depth(args)
        res = self.search.search(self.board, depth=depth, variant=self.variant)
        self._emit_info(res, write)
        best = res.best_move.to_uci() if res.best_move else "(none)"
        write(f"bestmove {best}")
        return res

    # ---- Utilities ----
    def _parse_depth(self, args: List[str]) -> int:
        if "depth" in args:
            i = args.index("depth")
            if i + 1 < len(args):
                try:
                    d = int(args[i + 1])
                except ValueError:
                    d = 0
                if d > 0:
                    return _clamp_depth(d)
        return self.depth

    def _emit_info(self, res: SearchResult, write: Writer) -> None:
        # UCI scores are from the side to move's point of view
        cp = res.score if self.board.side_to_move is Color.WHITE else -res.score
        nps = int(res.nodes * 1000 / max(1, res.time_ms))
        pv = f" pv {res.best_move.to_uci()}" if res.best_move else ""
        write(
            f"info depth {res.depth} nodes {res.nodes} time {res.time_ms} nps {nps} "
            f"score cp {cp}{pv}"
        )


def _clamp_depth(depth: int) -> int:
    return min(MAX_DEPTH, max(1, depth))


def _default_writer(line: str) -> None:
    sys.stdout.write(line + "\n")
    sys.stdout.flush()


def run_uci(
    lines: Optional[Iterable[str]] = None,
    write: Writer = _default_writer,
    config: Optional[EngineConfig] = None,
) -> None:
    eng = UCIEngine(config or load_config())
    for raw in lines if lines is not None else sys.stdin:
        line = raw.strip()
        if not line:
            continue
        parts = line.split()
        cmd, args = parts[0], parts[1:]

        if cmd == "uci":
            eng.cmd_uci(write)
        elif cmd == "isready":
            eng.cmd_isready(write)
        elif cmd == "setoption":
            eng.cmd_setoption(args)
        elif cmd == "ucinewgame":
            eng.cmd_ucinewgame()
        elif cmd == "position":
            eng.cmd_position(args)
        elif cmd == "go":
            eng.cmd_go(args, write)
        elif cmd == "quit":
            break
        # Ignore unknown commands per UCI convention
