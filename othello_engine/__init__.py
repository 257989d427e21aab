"""Othello (Reversi) engine: bitboard move generation, evaluation and timed search"""

from .engine.bitboard import PASS_MOVE, Position
from .engine.board import GameState, InvalidMoveError, apply_move, game_result, is_terminal, legal_moves, start_state
from .engine.eval import evaluate
from .engine.search import Searcher, SearchTimeout, search_best_move

__all__ = [
    'PASS_MOVE',
    'Position',
    'GameState',
    'InvalidMoveError',
    'apply_move',
    'game_result',
    'is_terminal',
    'legal_moves',
    'start_state',
    'evaluate',
    'Searcher',
    'SearchTimeout',
    'search_best_move',
]
