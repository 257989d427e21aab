from __future__ import annotations

import random

import pytest

from othello_engine import PASS_MOVE, Position, apply_move, legal_moves, search_best_move
from othello_engine.engine.bitboard import FULL, iter_bits, popcount
from othello_engine.engine.eval import evaluate_masks
from othello_engine.engine.movegen_fast import legal_moves_mask, play
from othello_engine.engine.notation import notation_to_move
from othello_engine.engine.perft import play_moves
from othello_engine.engine.search import (
    INF,
    TIMED_OUT,
    SearchConfig,
    Searcher,
    clamp_time_budget,
    gives_opponent_corner,
    order_moves,
)

CFG = SearchConfig()


def full_width(mover: int, opponent: int, depth: int) -> int:
    """Plain negamax without pruning or caching."""
    mask = legal_moves_mask(mover, opponent)
    if not mask:
        if not legal_moves_mask(opponent, mover):
            return (popcount(mover) - popcount(opponent)) * CFG.terminal_scale
        return -full_width(opponent, mover, depth)
    if depth == 0:
        return evaluate_masks(mover, opponent)
    best = -INF
    for move in iter_bits(mask):
        m2, o2 = play(mover, opponent, move)
        score = -full_width(m2, o2, depth - 1)
        if gives_opponent_corner(mover, opponent, move):
            score -= CFG.corner_penalty
        best = max(best, score)
    return best


def random_position(seed: int, plies: int) -> Position:
    rng = random.Random(seed)
    p = Position.initial()
    for _ in range(plies):
        moves = list(iter_bits(legal_moves(p)))
        if not moves:
            break
        p = apply_move(p, rng.choice(moves))
    return p


@pytest.mark.parametrize("seed,plies", [(1, 8), (2, 14), (3, 20), (4, 30)])
def test_alpha_beta_matches_full_width(seed, plies):
    p = random_position(seed, plies)
    s = Searcher()
    for depth in (1, 2, 3):
        expected = full_width(p.mover, p.opponent, depth)
        got = s.negamax(p.mover, p.opponent, True, depth, -INF, INF, float("inf"))
        assert got == expected
    # Warm table gives the same answers
    assert s.negamax(p.mover, p.opponent, True, 3, -INF, INF, float("inf")) == full_width(p.mover, p.opponent, 3)


def test_terminal_score_is_weighted_disc_difference():
    s = Searcher()
    p = Position(mover=(1 << 0) | (1 << 9), opponent=1 << 63)
    assert s.negamax(p.mover, p.opponent, True, 3, -INF, INF, float("inf")) == 10_000
    assert s.negamax(p.opponent, p.mover, False, 3, -INF, INF, float("inf")) == -10_000


def test_tiny_deadline_still_returns_a_legal_move():
    p = Position.initial()
    move = search_best_move(p, True, 1)
    assert move != PASS_MOVE
    assert move & legal_moves(p)
    assert move & (move - 1) == 0


def test_expired_clock_falls_back_to_first_ordered_move():
    # Legal moves: c3 (via c4 to c5) and the h8 corner (via g7 to f6)
    p = Position(mover=(1 << 34) | (1 << 45), opponent=(1 << 26) | (1 << 54))
    assert legal_moves(p) == (1 << 18) | (1 << 63)
    ticks = iter([0.0])
    s = Searcher(clock=lambda: next(ticks, 1e9))
    res = s.search(p, True, 1000)
    assert res.best_move == 1 << 63
    assert res.depth == 0
    assert res.score is None


def test_negamax_reports_timeout():
    s = Searcher(clock=lambda: 5.0)
    p = Position.initial()
    assert s.negamax(p.mover, p.opponent, True, 4, -INF, INF, deadline=1.0) is TIMED_OUT


def test_single_and_no_legal_moves():
    only = Position(mover=1 << 34, opponent=1 << 26)
    assert legal_moves(only) == 1 << 18
    res = Searcher().search(only, True, 1000)
    assert res.best_move == 1 << 18
    assert res.nodes == 0

    stuck = Position(mover=1 << 0, opponent=1 << 63)
    assert search_best_move(stuck, True, 1000) == PASS_MOVE


def test_corner_moves_are_ordered_first():
    mask = (1 << 3) | (1 << 7) | (1 << 20) | (1 << 56)
    assert order_moves(mask) == [1 << 7, 1 << 56, 1 << 3, 1 << 20]


def test_search_avoids_handing_over_a_corner():
    # b1 (flipping b2) lets the opponent answer a1; h6 (flipping h5) does not.
    mover = sum(notation_to_move(s) for s in ("b3", "h4", "e5"))
    opponent = sum(notation_to_move(s) for s in ("b2", "c1", "h5"))
    p = Position(mover, opponent)
    b1, h6 = notation_to_move("b1"), notation_to_move("h6")
    assert legal_moves(p) == b1 | h6
    assert gives_opponent_corner(mover, opponent, b1)
    assert not gives_opponent_corner(mover, opponent, h6)

    # Flat leaf evaluation: only the corner-donation penalty separates the moves
    s = Searcher(SearchConfig(max_depth=2), evaluator=lambda m, o: 0)
    res = s.search(p, True, 60_000)
    assert res.depth == 2
    assert res.best_move == h6
    assert res.score == 0


def counting_clock(limit: int):
    """Clock that reads 0.0 for the first `limit` calls and far past any deadline afterwards."""
    calls = [0]

    def clock() -> float:
        calls[0] += 1
        return 0.0 if calls[0] <= limit else 1e9

    return clock


def test_interrupted_iteration_keeps_previous_best_move():
    state = play_moves("f5")
    p = state.position
    assert popcount(legal_moves(p)) == 3

    reference = Searcher(SearchConfig(max_depth=2)).search(p, False, 1000)
    assert reference.depth == 2
    # One clock read at the start, one per depth-2 node, one after the iteration,
    # then a handful of depth-3 nodes before the deadline passes.
    s = Searcher(clock=counting_clock(reference.nodes + 2 + 5))
    res = s.search(p, False, 1000)
    assert res.depth == 2
    assert res.best_move == reference.best_move
    assert res.score == reference.score


def test_iterative_deepening_stops_once_the_game_end_is_reached():
    # Only a1..d1 are empty; each flips the rank-2 disc above it
    mover = FULL & ~((1 << 16) - 1)
    opponent = (0xFF << 8) | 0xF0
    p = Position(mover, opponent)
    assert p.empty_count == 4
    assert legal_moves(p) == 0x0F
    res = Searcher().search(p, True, 10_000)
    assert res.depth == 4
    assert res.score is not None
    assert res.time_ms < 10_000
    assert res.best_move & legal_moves(p)


def test_result_is_reproducible_for_a_fixed_depth():
    p = random_position(11, 12)
    cfg = SearchConfig(max_depth=3)
    a = Searcher(cfg).search(p, True, 60_000)
    b = Searcher(cfg).search(p, True, 60_000)
    assert (a.best_move, a.score, a.depth) == (b.best_move, b.score, b.depth)
    assert a.depth == 3


def test_clear_empties_the_table():
    s = Searcher(SearchConfig(max_depth=3))
    s.search(random_position(5, 10), True, 60_000)
    assert len(s.tt) > 0
    s.clear()
    assert len(s.tt) == 0


def test_clamp_time_budget():
    assert clamp_time_budget(1) == 400
    assert clamp_time_budget(1800) == 1800
    assert clamp_time_budget(60_000) == 10_000
    assert clamp_time_budget(50, SearchConfig(min_time_ms=10, max_time_ms=100)) == 50
