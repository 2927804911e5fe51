"""Stateless geometric predicates over squares and a board."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from chessrules.core.board import Board
    from chessrules.core.types import Square


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


def path_clear(board: Board, from_sq: Square, to_sq: Square) -> bool:
    """True if every square strictly between *from_sq* and *to_sq* is empty.

    The two squares must share a rank, a file or a diagonal; that is the
    caller's responsibility and is not re-checked here.
    """
    dr = _sign(to_sq[0] - from_sq[0])
    df = _sign(to_sq[1] - from_sq[1])
    rank = from_sq[0] + dr
    file = from_sq[1] + df
    while (rank, file) != (to_sq[0], to_sq[1]):
        if board[(rank, file)] is not None:
            return False
        rank += dr
        file += df
    return True


def is_straight(dr: int, df: int) -> bool:
    """Rook shape: exactly one of the deltas is zero."""
    return (dr == 0) != (df == 0)


def is_diagonal(dr: int, df: int) -> bool:
    """Bishop shape: equal non-zero absolute deltas."""
    return abs(dr) == abs(df) != 0


def is_knight_jump(dr: int, df: int) -> bool:
    return (abs(dr), abs(df)) in ((2, 1), (1, 2))


def is_king_step(dr: int, df: int) -> bool:
    return abs(dr) <= 1 and abs(df) <= 1
