from __future__ import annotations

import argparse
import logging
import sys

from othello_engine.config import ConfigError, load_config
from othello_engine.engine.perft import play_moves
from othello_engine.engine.notation import move_to_notation
from othello_engine.engine.search import Searcher, clamp_time_budget
from othello_engine.logging_setup import setup_logging


def main() -> None:
    p = argparse.ArgumentParser(prog="othello-bestmove", description="Print the engine's move for a position")
    p.add_argument("--moves", default="", help="moves from the start position, e.g. f5d6c3")
    p.add_argument("--time-ms", type=int, default=None, help="thinking time (clamped to the configured range)")
    p.add_argument("--config", default=None, help="TOML config file")
    args = p.parse_args()

    try:
        cfg = load_config(args.config)
    except ConfigError as e:
        print(f"config error: {e}", file=sys.stderr)
        sys.exit(2)
    setup_logging(overwrite=cfg.logging.overwrite, level=cfg.logging.level, log_path=cfg.logging.file)
    log = logging.getLogger(__name__)

    try:
        state = play_moves(args.moves)
    except ValueError as e:
        log.error("Bad move sequence %r: %s", args.moves, e)
        sys.exit(2)

    time_ms = clamp_time_budget(cfg.search.time_ms if args.time_ms is None else args.time_ms, cfg.search)
    searcher = Searcher(cfg.search, weights=cfg.eval)
    try:
        res = searcher.search(state.position, state.black_to_move, time_ms)
    except KeyboardInterrupt:
        log.info("Search interrupted by user")
        sys.exit(1)
    log.info("depth=%d score=%s nodes=%d time=%dms", res.depth, res.score, res.nodes, res.time_ms)
    print(move_to_notation(res.best_move))


if __name__ == "__main__":
    main()
