"""MoveExecutor: applies the side effects of an already-validated move."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from chessrules.core.enums import Color, PieceType
from chessrules.core.move_validator import promotion_rank
from chessrules.core.piece import Piece
from chessrules.core.position import KINGSIDE_FILE, QUEENSIDE_FILE, LastMove, home_rank
from chessrules.core.types import Square

if TYPE_CHECKING:
    from chessrules.core.position import Position


@dataclass(frozen=True, slots=True)
class ExecutedMove:
    """What :meth:`MoveExecutor.apply` did to the position."""

    piece: Piece
    from_sq: Square
    to_sq: Square
    captured: Piece | None = None
    is_castling: bool = False
    is_en_passant: bool = False
    promotion_pending: bool = False


class MoveExecutor:
    """Mutates a :class:`Position` for a move that passed FULL validation.

    No legality is re-checked here.
    """

    __slots__ = ("_position",)

    def __init__(self, position: Position) -> None:
        self._position = position

    def apply(self, from_sq: Square, to_sq: Square) -> ExecutedMove:
        """Apply the move; switch the turn unless a promotion is now due."""
        pos = self._position
        board = pos.board
        piece = board[from_sq]
        if piece is None:
            raise ValueError(f"No piece on {from_sq}")

        captured = board[to_sq]
        is_en_passant = False
        is_castling = False

        # (a) en passant: the victim shares the mover's rank and the target's file
        if (
            piece.piece_type == PieceType.PAWN
            and from_sq.file != to_sq.file
            and captured is None
        ):
            victim_sq = Square(from_sq.rank, to_sq.file)
            captured = board[victim_sq]
            board[victim_sq] = None
            is_en_passant = True

        # (b) castling: the rook lands on the square the king passed over
        if piece.piece_type == PieceType.KING and abs(to_sq.file - from_sq.file) == 2:
            step = 1 if to_sq.file > from_sq.file else -1
            rook_file = KINGSIDE_FILE if step > 0 else QUEENSIDE_FILE
            rook_from = Square(from_sq.rank, rook_file)
            rook_to = Square(from_sq.rank, from_sq.file + step)
            board[rook_to] = board[rook_from]
            board[rook_from] = None
            pos.castling[piece.color].mark_rook_moved(rook_from.file)
            is_castling = True

        # (c) the move itself
        board[to_sq] = piece
        board[from_sq] = None

        # (d) castling rights
        self._update_castling(piece, from_sq, to_sq, captured)

        # (e) en passant bookkeeping
        pos.last_move = LastMove(piece, from_sq, to_sq)

        # (f) promotion defers the turn switch
        promotion_pending = (
            piece.piece_type == PieceType.PAWN
            and to_sq.rank == promotion_rank(piece.color)
        )
        if not promotion_pending:
            pos.turn = pos.turn.opposite

        return ExecutedMove(
            piece=piece,
            from_sq=from_sq,
            to_sq=to_sq,
            captured=captured,
            is_castling=is_castling,
            is_en_passant=is_en_passant,
            promotion_pending=promotion_pending,
        )

    def promote(self, square: Square, piece_type: PieceType) -> Piece:
        """Replace the pawn on *square* and hand the turn to the opponent."""
        pawn = self._position.board[square]
        if pawn is None or pawn.piece_type != PieceType.PAWN:
            raise ValueError(f"No pawn to promote on {square}")
        promoted = Piece(pawn.color, piece_type)
        self._position.board[square] = promoted
        self._position.turn = pawn.color.opposite
        return promoted

    # ── Castling bookkeeping ─────────────────────────────────────────────

    def _update_castling(
        self,
        piece: Piece,
        from_sq: Square,
        to_sq: Square,
        captured: Piece | None,
    ) -> None:
        castling = self._position.castling
        if piece.piece_type == PieceType.KING:
            castling[piece.color].king_moved = True
        elif (
            piece.piece_type == PieceType.ROOK
            and from_sq.rank == home_rank(piece.color)
        ):
            castling[piece.color].mark_rook_moved(from_sq.file)

        if captured is not None and captured.piece_type == PieceType.ROOK:
            self._mark_captured_rook(captured.color, to_sq)

    def _mark_captured_rook(self, color: Color, square: Square) -> None:
        if square.rank == home_rank(color):
            self._position.castling[color].mark_rook_moved(square.file)
