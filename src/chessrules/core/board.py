"""Board - piece placement on an 8x8 grid."""

from __future__ import annotations

from collections.abc import Iterator, Sequence

from chessrules.core.enums import Color, PieceType
from chessrules.core.piece import Piece
from chessrules.core.types import ALL_SQUARES, BOARD_SIZE, Square

_BACK_RANK = "rnbqkbnr"


class Board:
    """Mutable 8x8 grid of ``Piece | None`` indexed by :class:`Square`."""

    __slots__ = ("_grid",)

    def __init__(self) -> None:
        self._grid: list[list[Piece | None]] = [
            [None] * BOARD_SIZE for _ in range(BOARD_SIZE)
        ]

    # -- Element access -----------------------------------------------------

    def __getitem__(self, sq: Square) -> Piece | None:
        return self._grid[sq[0]][sq[1]]

    def __setitem__(self, sq: Square, piece: Piece | None) -> None:
        self._grid[sq[0]][sq[1]] = piece

    def is_empty(self, sq: Square) -> bool:
        return self[sq] is None

    # -- Query helpers ------------------------------------------------------

    def occupied(self, color: Color | None = None) -> Iterator[tuple[Square, Piece]]:
        """Yield ``(square, piece)`` for occupied squares, optionally of *color*."""
        for sq in ALL_SQUARES:
            piece = self[sq]
            if piece is not None and (color is None or piece.color == color):
                yield sq, piece

    def pieces(self, color: Color, piece_type: PieceType) -> list[Square]:
        """Squares occupied by *color*'s *piece_type*."""
        target = Piece(color, piece_type)
        return [sq for sq, piece in self.occupied(color) if piece == target]

    def king_square(self, color: Color) -> Square:
        """Return the single king square for *color*."""
        kings = self.pieces(color, PieceType.KING)
        if not kings:
            raise ValueError(f"No {color.name} king on board")
        return kings[0]

    # -- Mutation / copying -------------------------------------------------

    def copy(self) -> Board:
        b = Board()
        b._grid = [row.copy() for row in self._grid]
        return b

    def clear(self) -> None:
        self._grid = [[None] * BOARD_SIZE for _ in range(BOARD_SIZE)]

    # -- Factory ------------------------------------------------------------

    @classmethod
    def initial(cls) -> Board:
        """Standard starting position."""
        return cls.from_rows(
            [
                _BACK_RANK,
                "p" * BOARD_SIZE,
                *(["." * BOARD_SIZE] * 4),
                "P" * BOARD_SIZE,
                _BACK_RANK.upper(),
            ]
        )

    @classmethod
    def from_rows(cls, rows: Sequence[str]) -> Board:
        """Build a board from eight 8-character rows, rank 0 (a8-h8) first.

        Letters follow :meth:`Piece.from_char`; ``.`` marks an empty square.
        """
        if len(rows) != BOARD_SIZE or any(len(row) != BOARD_SIZE for row in rows):
            raise ValueError("Board needs exactly 8 rows of 8 characters")
        b = cls()
        for rank, row in enumerate(rows):
            for file, char in enumerate(row):
                if char != ".":
                    b[Square(rank, file)] = Piece.from_char(char)
        return b

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._grid == other._grid

    def __repr__(self) -> str:
        rows: list[str] = []
        for rank in range(BOARD_SIZE):
            row = []
            for file in range(BOARD_SIZE):
                p = self[Square(rank, file)]
                row.append(str(p) if p else ".")
            rows.append(f"{BOARD_SIZE - rank} {' '.join(row)}")
        rows.append("  a b c d e f g h")
        return "\n".join(rows)
