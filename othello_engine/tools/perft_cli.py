from __future__ import annotations

import argparse
import sys
from time import perf_counter

from othello_engine.engine.perft import perft, play_moves


def main() -> None:
    p = argparse.ArgumentParser(prog="othello-perft")
    p.add_argument("--depth", type=int, required=True)
    p.add_argument("--position", type=str, default="", help="move sequence like f5d6c3")
    args = p.parse_args()

    try:
        state = play_moves(args.position)
    except ValueError as e:
        print(f"bad move sequence: {e}", file=sys.stderr)
        sys.exit(2)
    t0 = perf_counter()
    n = perft(state.position, args.depth)
    dt = perf_counter() - t0
    print(f"perft(d={args.depth})={n} in {dt:.3f}s")


if __name__ == "__main__":
    main()
