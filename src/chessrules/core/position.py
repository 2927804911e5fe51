"""Position: the full rules state (board, turn, castling flags, last move)."""

from __future__ import annotations

from dataclasses import dataclass, field

from chessrules.core.board import Board
from chessrules.core.enums import Color, PieceType
from chessrules.core.piece import Piece
from chessrules.core.types import Square

QUEENSIDE_FILE = 0
KINGSIDE_FILE = 7


def home_rank(color: Color) -> int:
    """Back rank index of *color* (7 for White, 0 for Black)."""
    return 7 if color == Color.WHITE else 0


@dataclass(slots=True)
class CastlingFlags:
    """Per-color castling bookkeeping. Flags only ever go from False to True."""

    king_moved: bool = False
    queenside_rook_moved: bool = False
    kingside_rook_moved: bool = False

    def rook_moved(self, file: int) -> bool:
        if file == QUEENSIDE_FILE:
            return self.queenside_rook_moved
        return self.kingside_rook_moved

    def mark_rook_moved(self, file: int) -> None:
        if file == QUEENSIDE_FILE:
            self.queenside_rook_moved = True
        elif file == KINGSIDE_FILE:
            self.kingside_rook_moved = True


@dataclass(slots=True)
class CastlingRights:
    """Castling flags for both colors."""

    white: CastlingFlags = field(default_factory=CastlingFlags)
    black: CastlingFlags = field(default_factory=CastlingFlags)

    def __getitem__(self, color: Color) -> CastlingFlags:
        return self.white if color == Color.WHITE else self.black

    def copy(self) -> CastlingRights:
        return CastlingRights(
            white=CastlingFlags(
                self.white.king_moved,
                self.white.queenside_rook_moved,
                self.white.kingside_rook_moved,
            ),
            black=CastlingFlags(
                self.black.king_moved,
                self.black.queenside_rook_moved,
                self.black.kingside_rook_moved,
            ),
        )

    @classmethod
    def none_available(cls) -> CastlingRights:
        """Every flag set; neither side may castle."""
        return cls(CastlingFlags(True, True, True), CastlingFlags(True, True, True))


@dataclass(frozen=True, slots=True)
class LastMove:
    """The most recently executed half-move."""

    piece: Piece
    from_sq: Square
    to_sq: Square

    @property
    def is_double_pawn_push(self) -> bool:
        return (
            self.piece.piece_type == PieceType.PAWN
            and abs(self.from_sq.rank - self.to_sq.rank) == 2
        )


class Position:
    """Board plus side to move, castling flags and the last move.

    Mutated in place by :class:`~chessrules.core.executor.MoveExecutor`;
    :meth:`copy` gives an independent snapshot.
    """

    __slots__ = ("board", "turn", "castling", "last_move")

    def __init__(
        self,
        board: Board | None = None,
        turn: Color = Color.WHITE,
        castling: CastlingRights | None = None,
        last_move: LastMove | None = None,
    ) -> None:
        self.board = board if board is not None else Board.initial()
        self.turn = turn
        self.castling = castling if castling is not None else CastlingRights()
        self.last_move = last_move

    @classmethod
    def initial(cls) -> Position:
        return cls()

    def king_square(self, color: Color) -> Square:
        return self.board.king_square(color)

    def copy(self) -> Position:
        return Position(
            board=self.board.copy(),
            turn=self.turn,
            castling=self.castling.copy(),
            last_move=self.last_move,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Position):
            return NotImplemented
        return (
            self.board == other.board
            and self.turn == other.turn
            and self.castling == other.castling
            and self.last_move == other.last_move
        )

    def __repr__(self) -> str:
        header = f"Position(turn={self.turn}, last_move={self.last_move!r})"
        return f"{header}\n{self.board!r}"
