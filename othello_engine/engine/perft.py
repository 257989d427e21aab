from __future__ import annotations

from typing import Iterable, Optional, Union

from .bitboard import Position, iter_bits
from .board import GameState, start_state
from .movegen_fast import legal_moves_mask, play
from .notation import notation_to_move, string_to_moves


def _perft(mover: int, opponent: int, depth: int) -> int:
    if depth == 0:
        return 1
    mask = legal_moves_mask(mover, opponent)
    if mask == 0:
        if legal_moves_mask(opponent, mover) == 0:
            return 1  # game over counts as a leaf
        return _perft(opponent, mover, depth - 1)
    total = 0
    for move in iter_bits(mask):
        m2, o2 = play(mover, opponent, move)
        total += _perft(m2, o2, depth - 1)
    return total


def perft(position: Position, depth: int) -> int:
    """Count leaf nodes `depth` plies below `position`, a pass counting as a ply."""
    return _perft(position.mover, position.opponent, depth)


def play_moves(moves: Union[str, Iterable[str]], state: Optional[GameState] = None) -> GameState:
    """Replay notation from `state` (the start position by default).

    Raises InvalidMoveError on the first illegal move.
    """
    s = start_state() if state is None else state
    seq = string_to_moves(moves) if isinstance(moves, str) else [notation_to_move(m) for m in moves]
    for move in seq:
        s = s.play(move)
    return s
