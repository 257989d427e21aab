from __future__ import annotations
from dataclasses import dataclass
from .bitboard import FULL, NOT_A, NOT_H, CORNER_MASK, Position, popcount
from .movegen_fast import legal_moves_mask

# Positional evaluation from the side-to-move perspective (positive is good for mover).


@dataclass
class EvalWeights:
    corners: int = 100
    x_square: int = 35
    c_square: int = 15
    mobility: int = 2
    stability: int = 4
    frontier: int = 25
    material: int = 4


DEFAULT_WEIGHTS = EvalWeights()

# (corner, X-square, C-squares) for A1, H1, A8, H8
CORNER_ZONES = (
    (1 << 0, 1 << 9, (1 << 1) | (1 << 8)),
    (1 << 7, 1 << 14, (1 << 6) | (1 << 15)),
    (1 << 56, 1 << 49, (1 << 57) | (1 << 48)),
    (1 << 63, 1 << 54, (1 << 62) | (1 << 55)),
)

# Each edge as an ordered run of squares between two corners
EDGES = (
    tuple(range(0, 8)),             # rank 1
    tuple(range(56, 64)),           # rank 8
    tuple(range(0, 64, 8)),         # file a
    tuple(range(7, 64, 8)),         # file h
)


def _neighbours(bb: int) -> int:
    # King-move dilation of bb
    ns = ((bb << 8) | (bb >> 8)) & FULL
    left = (bb & NOT_A) >> 1
    right = (bb & NOT_H) << 1
    side = left | right
    ns |= side | ((side << 8) | (side >> 8))
    return ns & FULL


def frontier_discs(me: int, opp: int) -> int:
    # A disc is frontier if adjacent to any empty square
    empty = ~(me | opp) & FULL
    return popcount(me & _neighbours(empty))


def corner_zone_score(me: int, opp: int, weights: EvalWeights = DEFAULT_WEIGHTS) -> int:
    # X/C squares only matter while their corner is still open
    score = 0
    for corner, x, c in CORNER_ZONES:
        if (me | opp) & corner:
            continue
        score -= weights.x_square * popcount(me & x) + weights.c_square * popcount(me & c)
        score += weights.x_square * popcount(opp & x) + weights.c_square * popcount(opp & c)
    return score


def edge_stable_counts(me: int, opp: int) -> tuple[int, int]:
    """Approximate stable discs: same-colour runs anchored at either end of an edge."""
    s_me = s_opp = 0
    for edge in EDGES:
        for seq in (edge, edge[::-1]):
            owner = None
            for sq in seq:
                bit = 1 << sq
                if me & bit:
                    colour = 0
                elif opp & bit:
                    colour = 1
                else:
                    break
                if owner is None:
                    owner = colour
                elif owner != colour:
                    break
                if colour == 0:
                    s_me += 1
                else:
                    s_opp += 1
    return s_me, s_opp


def evaluate_masks(me: int, opp: int, weights: EvalWeights = DEFAULT_WEIGHTS) -> int:
    empties = 64 - popcount(me | opp)
    phase = empties / 64.0

    score = weights.corners * (popcount(me & CORNER_MASK) - popcount(opp & CORNER_MASK))
    score += corner_zone_score(me, opp, weights)
    score += weights.mobility * (popcount(legal_moves_mask(me, opp)) - popcount(legal_moves_mask(opp, me)))

    s_me, s_opp = edge_stable_counts(me, opp)
    score += weights.stability * (s_me - s_opp)

    f_me = frontier_discs(me, opp)
    f_opp = frontier_discs(opp, me)
    total = float(score)
    total += -weights.frontier * (f_me - f_opp) / (f_me + f_opp + 1)
    total += (popcount(me) - popcount(opp)) * (1 - phase) * weights.material
    return round(total)


def evaluate(pos: Position, weights: EvalWeights = DEFAULT_WEIGHTS) -> int:
    return evaluate_masks(pos.mover, pos.opponent, weights)
