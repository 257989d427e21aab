from othello_engine.engine.bitboard import Position
from othello_engine.engine.perft import perft, play_moves


def test_perft_depths():
    p = Position.initial()
    assert perft(p, 1) == 4
    assert perft(p, 2) == 12
    assert perft(p, 3) == 56
    # Classical Othello perft counts from start
    assert perft(p, 4) == 244
    assert perft(p, 5) == 1396
    assert perft(p, 6) == 8200


def test_perft_after_opening_moves_is_symmetric():
    # All four first moves are equivalent by symmetry
    counts = {m: perft(play_moves(m).position, 3) for m in ("d3", "c4", "f5", "e6")}
    assert len(set(counts.values())) == 1
    assert sum(perft(play_moves(m).position, 2) for m in counts) == perft(Position.initial(), 3)


def test_perft_counts_terminal_position_as_leaf():
    p = Position(mover=1 << 0, opponent=1 << 63)
    assert perft(p, 3) == 1
