"""Square type and coordinate helpers.

Board layout follows screen order, top row first::

    rank 0 -> a8 ... h8   (Black's back rank)
    rank 7 -> a1 ... h1   (White's back rank)

``file`` 0 is the a-file, 7 the h-file.
"""

from __future__ import annotations

from typing import NamedTuple

from chessrules.core.errors import OutOfBoundsSquare

BOARD_SIZE = 8
_FILES = "abcdefgh"


class Square(NamedTuple):
    """A ``(rank, file)`` coordinate pair, each axis 0-7."""

    rank: int
    file: int

    def __str__(self) -> str:
        return square_name(self)


def is_valid_square(rank: int, file: int) -> bool:
    """Check whether both coordinates fall on the board."""
    return 0 <= rank < BOARD_SIZE and 0 <= file < BOARD_SIZE


def make_square(rank: int, file: int) -> Square:
    """Create a square, rejecting coordinates outside 0-7."""
    if not (isinstance(rank, int) and isinstance(file, int)):
        raise OutOfBoundsSquare(f"Non-integer square: {(rank, file)!r}")
    if not is_valid_square(rank, file):
        raise OutOfBoundsSquare(f"Square out of bounds: {(rank, file)!r}")
    return Square(rank, file)


def to_square(value: object) -> Square:
    """Coerce a ``(rank, file)`` pair or an algebraic name like ``'e4'``."""
    if isinstance(value, str):
        return parse_square(value)
    if isinstance(value, tuple) and len(value) == 2:
        return make_square(*value)
    raise OutOfBoundsSquare(f"Not a square: {value!r}")


def square_name(sq: Square) -> str:
    """Human-readable name, e.g. ``Square(7, 0)`` -> ``'a1'``."""
    return _FILES[sq.file] + str(BOARD_SIZE - sq.rank)


def parse_square(name: str) -> Square:
    """Parse square name, e.g. ``'e4'`` -> ``Square(4, 4)``."""
    if len(name) != 2 or name[0] not in _FILES or name[1] not in "12345678":
        raise OutOfBoundsSquare(f"Invalid square name: {name!r}")
    return Square(BOARD_SIZE - int(name[1]), _FILES.index(name[0]))


ALL_SQUARES: tuple[Square, ...] = tuple(
    Square(rank, file) for rank in range(BOARD_SIZE) for file in range(BOARD_SIZE)
)


# ── Named square constants ──────────────────────────────────────────────────

A8, B8, C8, D8, E8, F8, G8, H8 = ALL_SQUARES[0:8]
A7, B7, C7, D7, E7, F7, G7, H7 = ALL_SQUARES[8:16]
A6, B6, C6, D6, E6, F6, G6, H6 = ALL_SQUARES[16:24]
A5, B5, C5, D5, E5, F5, G5, H5 = ALL_SQUARES[24:32]
A4, B4, C4, D4, E4, F4, G4, H4 = ALL_SQUARES[32:40]
A3, B3, C3, D3, E3, F3, G3, H3 = ALL_SQUARES[40:48]
A2, B2, C2, D2, E2, F2, G2, H2 = ALL_SQUARES[48:56]
A1, B1, C1, D1, E1, F1, G1, H1 = ALL_SQUARES[56:64]
