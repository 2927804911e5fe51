"""Move legality, attack detection and legal-move enumeration.

Validation and attack detection are mutually recursive: a FULL check
simulates the move and asks :meth:`MoveValidator.is_attacked` about the
mover's king, and attack detection asks :meth:`MoveValidator.is_legal` in
``ATTACK_PROBE`` mode whether an enemy piece reaches a square. Probe mode
never simulates and never considers castling, which bounds the recursion
at one level.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from chessrules.core.enums import Color, PieceType, ValidationMode
from chessrules.core.geometry import (
    is_diagonal,
    is_king_step,
    is_knight_jump,
    is_straight,
    path_clear,
)
from chessrules.core.piece import Piece
from chessrules.core.position import KINGSIDE_FILE, QUEENSIDE_FILE, home_rank
from chessrules.core.types import ALL_SQUARES, Square

if TYPE_CHECKING:
    from chessrules.core.position import Position

_KING_HOME_FILE = 4


def pawn_direction(color: Color) -> int:
    """Rank delta of a single pawn step; White advances toward rank 0."""
    return -1 if color == Color.WHITE else 1


def pawn_start_rank(color: Color) -> int:
    return 6 if color == Color.WHITE else 1


def promotion_rank(color: Color) -> int:
    return 0 if color == Color.WHITE else 7


class MoveValidator:
    """Decides legality of single moves against a :class:`Position`.

    The validator reads the position live; the king-safety simulation
    mutates the board in place and always restores it before returning.
    """

    __slots__ = ("_position",)

    def __init__(self, position: Position) -> None:
        self._position = position

    # ── Public API ───────────────────────────────────────────────────────

    def is_legal(
        self,
        piece: Piece,
        from_sq: Square,
        to_sq: Square,
        mode: ValidationMode = ValidationMode.FULL,
    ) -> bool:
        """Whether *piece* standing on *from_sq* may move to *to_sq*."""
        target = self._position.board[to_sq]
        if target is not None and target.color == piece.color:
            return False

        if not self._shape_matches(piece, from_sq, to_sq, target, mode):
            return False

        if mode != ValidationMode.FULL:
            return True

        return self._keeps_king_safe(piece, from_sq, to_sq)

    def is_shape_valid(self, piece: Piece, from_sq: Square, to_sq: Square) -> bool:
        """Shape and occupancy legality, ignoring king safety."""
        return self.is_legal(piece, from_sq, to_sq, ValidationMode.IGNORE_KING_SAFETY)

    def is_attacked(self, square: Square, defending_color: Color) -> bool:
        """Whether any piece of the opponent of *defending_color* reaches *square*."""
        for sq, piece in self._position.board.occupied(defending_color.opposite):
            if self.is_legal(piece, sq, square, ValidationMode.ATTACK_PROBE):
                return True
        return False

    def is_in_check(self, color: Color) -> bool:
        return self.is_attacked(self._position.king_square(color), color)

    def legal_destinations(self, from_sq: Square) -> list[Square]:
        """Every square the piece on *from_sq* may legally move to."""
        piece = self._position.board[from_sq]
        if piece is None:
            return []
        return [
            to_sq for to_sq in ALL_SQUARES if self.is_legal(piece, from_sq, to_sq)
        ]

    def legal_moves(self, color: Color) -> list[tuple[Square, Square]]:
        """All legal ``(from, to)`` pairs for *color*."""
        moves: list[tuple[Square, Square]] = []
        for from_sq, _piece in list(self._position.board.occupied(color)):
            moves.extend((from_sq, to_sq) for to_sq in self.legal_destinations(from_sq))
        return moves

    def has_any_legal_move(self, color: Color) -> bool:
        for from_sq, piece in list(self._position.board.occupied(color)):
            for to_sq in ALL_SQUARES:
                if self.is_legal(piece, from_sq, to_sq):
                    return True
        return False

    # ── Shape checks ─────────────────────────────────────────────────────

    def _shape_matches(
        self,
        piece: Piece,
        from_sq: Square,
        to_sq: Square,
        target: Piece | None,
        mode: ValidationMode,
    ) -> bool:
        dr = to_sq.rank - from_sq.rank
        df = to_sq.file - from_sq.file
        board = self._position.board
        ptype = piece.piece_type

        if ptype == PieceType.PAWN:
            return self._pawn_shape(piece, from_sq, to_sq, target, mode)
        if ptype == PieceType.KNIGHT:
            return is_knight_jump(dr, df)
        if ptype == PieceType.BISHOP:
            return is_diagonal(dr, df) and path_clear(board, from_sq, to_sq)
        if ptype == PieceType.ROOK:
            return is_straight(dr, df) and path_clear(board, from_sq, to_sq)
        if ptype == PieceType.QUEEN:
            return (is_straight(dr, df) or is_diagonal(dr, df)) and path_clear(
                board, from_sq, to_sq
            )
        if ptype == PieceType.KING:
            if is_king_step(dr, df):
                return True
            if mode != ValidationMode.ATTACK_PROBE and dr == 0 and abs(df) == 2:
                return self._castling_allowed(piece, from_sq, to_sq)
        return False

    def _pawn_shape(
        self,
        piece: Piece,
        from_sq: Square,
        to_sq: Square,
        target: Piece | None,
        mode: ValidationMode,
    ) -> bool:
        """Pawn push, double push, capture and en passant shapes.

        Probe mode deliberately uses pawn attacks rather than pawn moves: a
        pawn reaches both forward diagonals whether or not they are occupied,
        and never the square ahead of it, since pushes cannot capture.
        """
        direction = pawn_direction(piece.color)
        dr = to_sq.rank - from_sq.rank
        df = to_sq.file - from_sq.file

        if mode == ValidationMode.ATTACK_PROBE:
            return dr == direction and abs(df) == 1

        board = self._position.board
        if df == 0:
            if target is not None:
                return False
            if dr == direction:
                return True
            return (
                dr == 2 * direction
                and from_sq.rank == pawn_start_rank(piece.color)
                and board[(from_sq.rank + direction, from_sq.file)] is None
            )

        if abs(df) == 1 and dr == direction:
            if target is not None:
                return True
            return self._is_en_passant(piece, from_sq, to_sq)
        return False

    def _is_en_passant(self, piece: Piece, from_sq: Square, to_sq: Square) -> bool:
        last = self._position.last_move
        if last is None or not last.is_double_pawn_push:
            return False
        victim_sq = Square(from_sq.rank, to_sq.file)
        return (
            last.piece.color != piece.color
            and last.to_sq == victim_sq
            and self._position.board[victim_sq] == last.piece
        )

    def _castling_allowed(self, king: Piece, from_sq: Square, to_sq: Square) -> bool:
        color = king.color
        flags = self._position.castling[color]
        if flags.king_moved or from_sq != (home_rank(color), _KING_HOME_FILE):
            return False

        step = 1 if to_sq.file > from_sq.file else -1
        rook_file = KINGSIDE_FILE if step > 0 else QUEENSIDE_FILE
        if flags.rook_moved(rook_file):
            return False

        board = self._position.board
        rook_sq = Square(from_sq.rank, rook_file)
        if board[rook_sq] != Piece(color, PieceType.ROOK):
            return False
        if not path_clear(board, from_sq, rook_sq):
            return False

        transit = Square(from_sq.rank, from_sq.file + step)
        return not any(
            self.is_attacked(sq, color) for sq in (from_sq, transit, to_sq)
        )

    # ── King safety ──────────────────────────────────────────────────────

    def _keeps_king_safe(self, piece: Piece, from_sq: Square, to_sq: Square) -> bool:
        """Apply the move on the live board, test the king, then restore."""
        board = self._position.board
        original_from = board[from_sq]
        original_to = board[to_sq]

        ep_sq: Square | None = None
        ep_piece: Piece | None = None
        if (
            piece.piece_type == PieceType.PAWN
            and from_sq.file != to_sq.file
            and original_to is None
        ):
            ep_sq = Square(from_sq.rank, to_sq.file)
            ep_piece = board[ep_sq]
            board[ep_sq] = None

        board[to_sq] = piece
        board[from_sq] = None
        try:
            if piece.piece_type == PieceType.KING:
                king_sq = to_sq
            else:
                king_sq = board.king_square(piece.color)
            return not self.is_attacked(king_sq, piece.color)
        finally:
            board[from_sq] = original_from
            board[to_sq] = original_to
            if ep_sq is not None:
                board[ep_sq] = ep_piece
