from __future__ import annotations

from typing import Tuple

from .bitboard import FULL, NOT_A, NOT_H, PASS_MOVE

# Directions in deltas: N, S, E, W, NE, NW, SE, SW
DIRS = [8, -8, 1, -1, 9, 7, -7, -9]


def _shift(bb: int, d: int) -> int:
    if d == 8:
        return (bb << 8) & FULL
    if d == -8:
        return bb >> 8
    if d == 1:
        return (bb << 1) & NOT_A & FULL
    if d == -1:
        return (bb >> 1) & NOT_H
    if d == 9:
        return (bb << 9) & NOT_A & FULL
    if d == 7:
        return (bb << 7) & NOT_H & FULL
    if d == -7:
        return (bb >> 7) & NOT_A
    if d == -9:
        return (bb >> 9) & NOT_H
    raise ValueError("bad dir")


def legal_moves_mask(mover: int, opponent: int) -> int:
    """Bitmask of squares where `mover` flips at least one `opponent` run."""
    empty = ~(mover | opponent) & FULL
    moves = 0
    # For each direction, expand captures using shift-and-mask trick
    for d in DIRS:
        t = _shift(mover, d) & opponent
        # Up to 5 additional expansions are sufficient on an 8x8 board
        t |= _shift(t, d) & opponent
        t |= _shift(t, d) & opponent
        t |= _shift(t, d) & opponent
        t |= _shift(t, d) & opponent
        t |= _shift(t, d) & opponent
        moves |= _shift(t, d) & empty
    return moves


def flip_mask(mover: int, opponent: int, move: int) -> int:
    """Discs flipped when `mover` plays the single-bit `move`."""
    flips = 0
    for d in DIRS:
        run = 0
        cur = _shift(move, d)
        while cur & opponent:
            run |= cur
            cur = _shift(cur, d)
        if run and (cur & mover):
            flips |= run
    return flips


def play(mover: int, opponent: int, move: int) -> Tuple[int, int]:
    """Play `move` without validation and return (new_mover, new_opponent).

    Roles are swapped in the result: the side that just moved becomes the
    opponent. PASS_MOVE only swaps roles.
    """
    if move == PASS_MOVE:
        return opponent, mover
    flips = flip_mask(mover, opponent, move)
    return opponent ^ flips, mover ^ (flips | move)
