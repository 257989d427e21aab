from __future__ import annotations

# Slow square-by-square generator kept for cross-checking the bit-parallel one.

_STEPS = [(dr, df) for dr in (-1, 0, 1) for df in (-1, 0, 1) if dr or df]


def _captures(mover: int, opponent: int, sq: int) -> int:
    rank, file = divmod(sq, 8)
    flips = 0
    for dr, df in _STEPS:
        r, f = rank + dr, file + df
        run = 0
        while 0 <= r < 8 and 0 <= f < 8 and opponent >> (r * 8 + f) & 1:
            run |= 1 << (r * 8 + f)
            r += dr
            f += df
        if run and 0 <= r < 8 and 0 <= f < 8 and mover >> (r * 8 + f) & 1:
            flips |= run
    return flips


def legal_moves_mask(mover: int, opponent: int) -> int:
    occupied = mover | opponent
    moves = 0
    for sq in range(64):
        if not occupied >> sq & 1 and _captures(mover, opponent, sq):
            moves |= 1 << sq
    return moves


def flip_mask(mover: int, opponent: int, move: int) -> int:
    return _captures(mover, opponent, move.bit_length() - 1)
