from __future__ import annotations
from dataclasses import dataclass
from typing import Iterator

# Board is 8x8, squares numbered 0..63 row-major, A1=0 (LSB) to H8=63 (MSB):
# sq = rank * 8 + file, files a..h -> 0..7, ranks 1..8 -> 0..7.
# A move is the single-bit mask 1 << sq; PASS_MOVE (0) means "no move".

FULL = 0xFFFFFFFFFFFFFFFF
PASS_MOVE = 0

# File masks to prevent horizontal wrap
FILE_A = 0x0101010101010101
FILE_H = 0x8080808080808080
NOT_A = ~FILE_A & FULL
NOT_H = ~FILE_H & FULL

CORNER_MASK = (1 << 0) | (1 << 7) | (1 << 56) | (1 << 63)


def popcount(x: int) -> int:
    return x.bit_count()


def sq_to_bit(sq: int) -> int:
    if not 0 <= sq < 64:
        raise ValueError(f"square out of range: {sq}")
    return 1 << sq


def bit_to_sq(bit: int) -> int:
    return bit.bit_length() - 1


def iter_bits(mask: int) -> Iterator[int]:
    """Yield the single-bit masks set in `mask`, least significant first."""
    while mask:
        lsb = mask & -mask
        yield lsb
        mask ^= lsb


@dataclass(frozen=True)
class Position:
    """Disc masks seen from the side to move."""

    mover: int
    opponent: int

    def __post_init__(self) -> None:
        assert 0 <= self.mover <= FULL and 0 <= self.opponent <= FULL, "masks must fit in 64 bits"
        assert self.mover & self.opponent == 0, "a square cannot hold two discs"

    @staticmethod
    def initial() -> "Position":
        # Black (mover) on e4, d5; White on d4, e5
        black = (1 << 28) | (1 << 35)
        white = (1 << 27) | (1 << 36)
        return Position(mover=black, opponent=white)

    @property
    def empty(self) -> int:
        return ~(self.mover | self.opponent) & FULL

    @property
    def mover_discs(self) -> int:
        return popcount(self.mover)

    @property
    def opponent_discs(self) -> int:
        return popcount(self.opponent)

    @property
    def empty_count(self) -> int:
        return 64 - popcount(self.mover | self.opponent)

    def swapped(self) -> "Position":
        return Position(self.opponent, self.mover)
