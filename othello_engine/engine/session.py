from __future__ import annotations

import logging
from typing import List, Optional

from .bitboard import PASS_MOVE
from .board import GameState, InvalidMoveError, start_state
from .notation import move_to_notation
from .eval import DEFAULT_WEIGHTS, EvalWeights
from .search import SearchConfig, Searcher, clamp_time_budget
from ..logging_setup import log_event

logger = logging.getLogger(__name__)


class GameSession:
    """Caller-side game driver: owns the current state and the engine.

    The transposition table is kept across ordinary turns and cleared on
    reset() and at the start of run_to_end().
    """

    def __init__(
        self,
        config: SearchConfig | None = None,
        searcher: Searcher | None = None,
        human_black: bool = True,
        thinking_ms: int | None = None,
        weights: EvalWeights = DEFAULT_WEIGHTS,
    ) -> None:
        self.searcher = searcher or Searcher(config, weights=weights)
        self.config = self.searcher.config
        self.human_black = human_black
        self.thinking_ms = self.config.time_ms if thinking_ms is None else thinking_ms
        self.state: GameState = start_state()
        self.history: List[int] = []

    def reset(self) -> None:
        self.searcher.clear()
        self.state = start_state()
        self.history = []
        log_event("session", "reset")

    def is_game_over(self) -> bool:
        return self.state.is_terminal()

    def is_humans_turn(self) -> bool:
        return self.state.black_to_move == self.human_black

    def winner(self) -> Optional[str]:
        if not self.is_game_over():
            return None
        return {1: "black", -1: "white", 0: "draw"}[self.state.result()]

    def _apply(self, move: int) -> None:
        self.state = self.state.play(move)
        self.history.append(move)

    def play_human(self, move: int) -> None:
        if self.is_game_over():
            raise InvalidMoveError("game is over")
        if not self.is_humans_turn():
            raise InvalidMoveError("not the human side's turn")
        self._apply(move)

    def ai_step(self, time_ms: int | None = None) -> Optional[int]:
        """Let the engine play one move for the side to move (passing if it must).

        Returns the move played, or None when the game is already over.
        """
        if self.is_game_over():
            return None
        if self.state.must_pass():
            self._apply(PASS_MOVE)
            logger.info("ply %d: %s passes", self.state.ply, "white" if self.state.black_to_move else "black")
            return PASS_MOVE
        budget = clamp_time_budget(self.thinking_ms if time_ms is None else time_ms, self.config)
        return self._engine_move(budget)

    def _engine_move(self, time_ms: int) -> int:
        result = self.searcher.search(self.state.position, self.state.black_to_move, time_ms)
        side = "black" if self.state.black_to_move else "white"
        self._apply(result.best_move)
        logger.info(
            "ply %d: %s plays %s (depth %d, score %s, %d nodes, %d ms)",
            self.state.ply, side, move_to_notation(result.best_move),
            result.depth, result.score, result.nodes, result.time_ms,
        )
        return result.best_move

    def run_to_end(self, time_ms: int = 500, max_plies: int = 200) -> GameState:
        """Fast-forward: engine plays both sides until the game ends."""
        self.searcher.clear()
        log_event("session", "run_to_end", time_ms=time_ms, ply=self.state.ply)
        for _ in range(max_plies):
            if self.is_game_over():
                break
            if self.state.must_pass():
                self._apply(PASS_MOVE)
                continue
            self._engine_move(time_ms)
        black, white = self.state.disc_counts()
        log_event("session", "run_to_end_done", black=black, white=white, plies=self.state.ply, finished=self.is_game_over())
        return self.state
