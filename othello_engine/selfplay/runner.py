from __future__ import annotations

import logging
from dataclasses import dataclass, asdict
from typing import Any, Dict, List

from ..engine.notation import moves_to_string
from ..engine.eval import DEFAULT_WEIGHTS, EvalWeights
from ..engine.search import SearchConfig
from ..engine.session import GameSession

logger = logging.getLogger(__name__)


@dataclass
class GameRecord:
    result: int  # from Black POV: +1, -1, 0
    black_discs: int
    white_discs: int
    plies: int
    moves: str
    finished: bool

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def play_one(
    time_ms: int = 500,
    max_plies: int = 200,
    config: SearchConfig | None = None,
    weights: EvalWeights = DEFAULT_WEIGHTS,
) -> GameRecord:
    session = GameSession(config, weights=weights)
    state = session.run_to_end(time_ms=time_ms, max_plies=max_plies)
    black, white = state.disc_counts()
    return GameRecord(
        result=state.result(),
        black_discs=black,
        white_discs=white,
        plies=state.ply,
        moves=moves_to_string(session.history),
        finished=state.is_terminal(),
    )


def play_many(
    games: int, time_ms: int = 500, config: SearchConfig | None = None, weights: EvalWeights = DEFAULT_WEIGHTS
) -> List[GameRecord]:
    records = []
    for i in range(games):
        rec = play_one(time_ms, config=config, weights=weights)
        logger.info("game %d: result=%d %d-%d in %d plies", i + 1, rec.result, rec.black_discs, rec.white_discs, rec.plies)
        records.append(rec)
    return records
