"""Self-play CLI: the engine plays complete games against itself"""

import argparse
import logging
import pathlib
import sys
from datetime import datetime

import orjson

from ..config import ConfigError, load_config
from ..logging_setup import setup_logging
from ..selfplay.runner import play_many


def main():
    """Main entry point for othello-selfplay"""
    parser = argparse.ArgumentParser(
        description="Play engine-vs-engine games to the end"
    )

    parser.add_argument(
        '--games',
        type=int,
        default=1,
        help='Number of games (default: 1)'
    )

    parser.add_argument(
        '--time-ms',
        type=int,
        default=500,
        help='Thinking time per move in ms (default: 500)'
    )

    parser.add_argument(
        '--config',
        help='Configuration file path'
    )

    parser.add_argument(
        '--output',
        help='Output file for game records (JSON)'
    )

    args = parser.parse_args()

    try:
        cfg = load_config(args.config)
    except ConfigError as e:
        print(f"config error: {e}", file=sys.stderr)
        sys.exit(2)
    setup_logging(overwrite=False, level=cfg.logging.level, log_path=cfg.logging.file)
    log = logging.getLogger(__name__)

    try:
        log.info("Playing %d game(s) at %d ms per move", args.games, args.time_ms)
        records = play_many(args.games, args.time_ms, cfg.search, weights=cfg.eval)

        wins = {1: 0, -1: 0, 0: 0}
        for r in records:
            wins[r.result] += 1
        log.info("Black %d, White %d, draws %d", wins[1], wins[-1], wins[0])

        if args.output:
            output_data = {
                'timestamp': datetime.now().isoformat(),
                'config': {'games': args.games, 'time_ms': args.time_ms},
                'games': [r.to_dict() for r in records],
            }
            pathlib.Path(args.output).write_bytes(orjson.dumps(output_data, option=orjson.OPT_INDENT_2))
            log.info("Results saved to %s", args.output)

    except KeyboardInterrupt:
        log.info("Self-play interrupted by user")
        sys.exit(1)


if __name__ == '__main__':
    main()
