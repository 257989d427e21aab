from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from .bitboard import PASS_MOVE, Position, popcount
from .movegen_fast import legal_moves_mask, play


class InvalidMoveError(ValueError):
    """Raised when a move is not in the legal set of the position it is applied to."""


def legal_moves(position: Position) -> int:
    return legal_moves_mask(position.mover, position.opponent)


def apply_move(position: Position, move: int) -> Position:
    """Play `move` for the side to move and return the next Position.

    The result is seen from the new side to move. PASS_MOVE is only accepted
    when the mover has no legal move.
    """
    legal = legal_moves(position)
    if move == PASS_MOVE:
        if legal:
            raise InvalidMoveError("cannot pass while legal moves exist")
    elif move & (move - 1) or not move & legal:
        raise InvalidMoveError(f"illegal move mask {move:#x}")
    new_mover, new_opponent = play(position.mover, position.opponent, move)
    return Position(new_mover, new_opponent)


def is_terminal(position: Position) -> bool:
    if legal_moves_mask(position.mover, position.opponent):
        return False
    return legal_moves_mask(position.opponent, position.mover) == 0


def game_result(position: Position) -> int:
    """+1 if the mover has more discs, -1 if fewer, 0 for a draw."""
    diff = position.mover_discs - position.opponent_discs
    return (diff > 0) - (diff < 0)


@dataclass(frozen=True)
class GameState:
    position: Position
    black_to_move: bool
    ply: int = 0

    @property
    def black(self) -> int:
        return self.position.mover if self.black_to_move else self.position.opponent

    @property
    def white(self) -> int:
        return self.position.opponent if self.black_to_move else self.position.mover

    def disc_counts(self) -> Tuple[int, int]:
        return popcount(self.black), popcount(self.white)

    def legal_moves(self) -> int:
        return legal_moves(self.position)

    def must_pass(self) -> bool:
        return self.legal_moves() == 0 and not self.is_terminal()

    def is_terminal(self) -> bool:
        return is_terminal(self.position)

    def play(self, move: int) -> "GameState":
        return GameState(apply_move(self.position, move), not self.black_to_move, self.ply + 1)

    def pass_turn(self) -> "GameState":
        return self.play(PASS_MOVE)

    def result(self) -> int:
        """Game result from Black's point of view: +1, -1 or 0."""
        b, w = self.disc_counts()
        return (b > w) - (b < w)


def start_state() -> GameState:
    return GameState(Position.initial(), black_to_move=True, ply=0)
