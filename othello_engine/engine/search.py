from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from functools import partial
from typing import Callable, List, Optional, Tuple, Union

from .bitboard import CORNER_MASK, PASS_MOVE, Position, iter_bits, popcount
from .movegen_fast import legal_moves_mask, play
from .eval import DEFAULT_WEIGHTS, EvalWeights, evaluate_masks
from .notation import move_to_notation
from .tt import TranspositionTable, classify

logger = logging.getLogger(__name__)

INF = 10**9


class SearchTimeout:
    """Marker passed back up the recursion once the deadline has expired."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "TIMED_OUT"


TIMED_OUT = SearchTimeout()

Score = Union[int, SearchTimeout]


@dataclass
class SearchConfig:
    time_ms: int = 1800
    min_time_ms: int = 400
    max_time_ms: int = 10_000
    start_depth: int = 2
    max_depth: int = 64
    endgame_empties: int = 14
    corner_penalty: int = 200
    terminal_scale: int = 10_000


@dataclass
class SearchResult:
    best_move: int
    score: Optional[int]
    depth: int
    nodes: int
    time_ms: int


def clamp_time_budget(time_ms: int, config: SearchConfig | None = None) -> int:
    cfg = config or SearchConfig()
    return max(cfg.min_time_ms, min(cfg.max_time_ms, int(time_ms)))


def order_moves(mask: int) -> List[int]:
    # Corners first, otherwise square order
    moves = list(iter_bits(mask))
    return [m for m in moves if m & CORNER_MASK] + [m for m in moves if not m & CORNER_MASK]


def gives_opponent_corner(mover: int, opponent: int, move: int) -> bool:
    """True if after `move` the opponent can reply by taking a corner."""
    next_mover, next_opponent = play(mover, opponent, move)
    return bool(legal_moves_mask(next_mover, next_opponent) & CORNER_MASK)


class Searcher:
    def __init__(
        self,
        config: SearchConfig | None = None,
        weights: EvalWeights = DEFAULT_WEIGHTS,
        evaluator: Callable[[int, int], int] | None = None,
        clock: Callable[[], float] = time.perf_counter,
    ) -> None:
        self.config = config or SearchConfig()
        self.weights = weights
        self.evaluate = evaluator or partial(evaluate_masks, weights=weights)
        self.clock = clock
        self.tt = TranspositionTable()
        self.nodes = 0

    def clear(self) -> None:
        self.tt.clear()

    def search_best_move(self, position: Position, black_to_move: bool, time_budget_ms: int) -> int:
        return self.search(position, black_to_move, time_budget_ms).best_move

    def search(self, position: Position, black_to_move: bool, time_ms: int | None = None) -> SearchResult:
        cfg = self.config
        if time_ms is None:
            time_ms = cfg.time_ms
        start = self.clock()
        deadline = start + time_ms / 1000.0
        self.nodes = 0
        mover, opponent = position.mover, position.opponent

        moves = order_moves(legal_moves_mask(mover, opponent))
        if not moves:
            return SearchResult(PASS_MOVE, None, 0, 0, 0)
        if len(moves) == 1:
            return SearchResult(moves[0], None, 0, 0, 0)

        empties = 64 - popcount(mover | opponent)
        best_move, best_score, completed = moves[0], None, 0
        depth = cfg.start_depth
        while depth <= cfg.max_depth:
            found = self._search_root(mover, opponent, black_to_move, moves, depth, deadline)
            if found is TIMED_OUT:
                logger.debug("depth %d interrupted after %d nodes", depth, self.nodes)
                break
            best_move, best_score = found
            completed = depth
            logger.debug(
                "depth %d: best=%s score=%d nodes=%d tt=%d",
                depth, move_to_notation(best_move), best_score, self.nodes, len(self.tt),
            )
            if depth >= empties:
                # Every line already ends in a finished game
                break
            depth += 1
            if self.clock() > deadline:
                break
            if empties <= cfg.endgame_empties:
                depth += 1

        elapsed_ms = int((self.clock() - start) * 1000)
        return SearchResult(best_move, best_score, completed, self.nodes, elapsed_ms)

    def _search_root(
        self, mover: int, opponent: int, black_to_move: bool, moves: List[int], depth: int, deadline: float
    ) -> Union[Tuple[int, int], SearchTimeout]:
        alpha, beta = -INF, INF
        best_move, best_score = moves[0], -INF
        for move in moves:
            score = self._score_move(mover, opponent, black_to_move, move, depth, alpha, beta, deadline)
            if score is TIMED_OUT:
                return TIMED_OUT
            if score > best_score:
                best_move, best_score = move, score
            if best_score > alpha:
                alpha = best_score
            if alpha >= beta:
                break
        return best_move, best_score

    def _score_move(
        self, mover: int, opponent: int, black_to_move: bool, move: int,
        depth: int, alpha: int, beta: int, deadline: float,
    ) -> Score:
        child_mover, child_opponent = play(mover, opponent, move)
        penalty = 0
        if legal_moves_mask(child_mover, child_opponent) & CORNER_MASK:
            penalty = self.config.corner_penalty
        # The penalty is known up front, so the child window is shifted by it
        score = self.negamax(
            child_mover, child_opponent, not black_to_move, depth - 1,
            -beta - penalty, -alpha - penalty, deadline,
        )
        if score is TIMED_OUT:
            return TIMED_OUT
        return -score - penalty

    def negamax(
        self, mover: int, opponent: int, black_to_move: bool,
        depth: int, alpha: int, beta: int, deadline: float,
    ) -> Score:
        """Fail-soft alpha-beta score of the node for the side to move.

        Returns TIMED_OUT as soon as the deadline has passed.
        """
        self.nodes += 1
        if self.clock() > deadline:
            return TIMED_OUT

        key = (mover, opponent, black_to_move)
        entry = self.tt.probe(key)
        if entry is not None:
            hit = self.tt.cutoff(entry, depth, alpha, beta)
            if hit is not None:
                return hit

        mask = legal_moves_mask(mover, opponent)
        if not mask:
            if not legal_moves_mask(opponent, mover):
                return (popcount(mover) - popcount(opponent)) * self.config.terminal_scale
            # Pass: same depth, roles swapped
            score = self.negamax(opponent, mover, not black_to_move, depth, -beta, -alpha, deadline)
            if score is TIMED_OUT:
                return TIMED_OUT
            return -score

        if depth == 0:
            return self.evaluate(mover, opponent)

        alpha0 = alpha
        best = -INF
        for move in order_moves(mask):
            score = self._score_move(mover, opponent, black_to_move, move, depth, alpha, beta, deadline)
            if score is TIMED_OUT:
                return TIMED_OUT
            if score > best:
                best = score
            if best > alpha:
                alpha = best
            if alpha >= beta:
                break

        self.tt.save(key, depth, best, classify(best, alpha0, beta))
        return best


def search_best_move(
    position: Position, black_to_move: bool, time_budget_ms: int, searcher: Searcher | None = None
) -> int:
    """Best move for the side to move within `time_budget_ms`, or PASS_MOVE."""
    searcher = searcher or Searcher()
    return searcher.search_best_move(position, black_to_move, time_budget_ms)
