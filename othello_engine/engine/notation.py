"""
Coordinate notation for Othello moves.

Squares use the engine's board convention: 'a1' is square 0 (least significant
bit), 'h1' is 7, 'a8' is 56 and 'h8' is 63. Move strings concatenate two-letter
coordinates, e.g. 'f5d6c3', with '--' standing for a pass.
"""

from __future__ import annotations

from .bitboard import PASS_MOVE, bit_to_sq, sq_to_bit

# Special string for pass moves (no available moves)
PASS_NOTATION = '--'


def sq_to_notation(sq: int) -> str:
    """Convert a square index (0-63) to notation (e.g. 'e4')."""
    if sq < 0 or sq > 63:
        raise ValueError(f"Invalid square: {sq}")
    file = sq % 8
    rank = sq // 8 + 1
    return f"{chr(ord('a') + file)}{rank}"


def notation_to_sq(notation: str) -> int:
    """Convert notation (e.g. 'e4', case-insensitive) to a square index."""
    if len(notation) != 2:
        raise ValueError(f"Invalid notation format: {notation}")

    file_char = notation[0].lower()
    rank_char = notation[1]
    if not file_char.isalpha() or not rank_char.isdigit():
        raise ValueError(f"Invalid notation format: {notation}")

    file = ord(file_char) - ord('a')
    rank = int(rank_char) - 1
    if file < 0 or file > 7 or rank < 0 or rank > 7:
        raise ValueError(f"Invalid notation: {notation}")
    return rank * 8 + file


def move_to_notation(move: int) -> str:
    if move == PASS_MOVE:
        return PASS_NOTATION
    if move & (move - 1):
        raise ValueError(f"Not a single-square move: {move:#x}")
    return sq_to_notation(bit_to_sq(move))


def notation_to_move(notation: str) -> int:
    if notation == PASS_NOTATION:
        return PASS_MOVE
    return sq_to_bit(notation_to_sq(notation))


def moves_to_string(moves: list[int]) -> str:
    return ''.join(move_to_notation(m) for m in moves)


def string_to_moves(moves_str: str) -> list[int]:
    """Parse a move string into move masks; raises ValueError on bad input."""
    moves_str = moves_str.strip()
    if len(moves_str) % 2:
        raise ValueError(f"Incomplete notation: {moves_str}")
    return [notation_to_move(moves_str[i:i + 2]) for i in range(0, len(moves_str), 2)]


def is_valid_notation(moves_str: str) -> bool:
    try:
        string_to_moves(moves_str)
    except ValueError:
        return False
    return True
