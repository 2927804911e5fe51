"""Tests for GameController: the command/query surface."""

from __future__ import annotations

import logging

import pytest

from chessrules.core.board import Board
from chessrules.core.enums import Color, GameStatus, PieceType
from chessrules.core.errors import (
    GameAlreadyOver,
    InvalidMove,
    InvalidPosition,
    InvalidPromotionChoice,
    NoPendingPromotion,
    OutOfBoundsSquare,
    PromotionPending,
)
from chessrules.core.piece import Piece
from chessrules.core.position import Position
from chessrules.core.types import B8, D5, D6, E1, E2, E5, F1, G1, H1, parse_square
from chessrules.game.controller import GameController
from chessrules.game.interfaces import MoveOutcome, PendingPromotion, StatusReport

EMPTY = "........"


def _play(ctrl: GameController, *moves: str) -> MoveOutcome:
    """Helper: play ``'e2e4'``-style moves, return the last outcome."""
    outcome = None
    for move in moves:
        outcome = ctrl.submit_move(move[:2], move[2:])
    assert outcome is not None
    return outcome


def _controller(rows: list[str], turn: Color = Color.WHITE) -> GameController:
    return GameController(Position(Board.from_rows(rows), turn))


class TestNewGame:
    def test_initial_status(self) -> None:
        ctrl = GameController()
        assert ctrl.status() == StatusReport(Color.WHITE, GameStatus.IN_PROGRESS)

    def test_snapshot_is_initial_board(self) -> None:
        assert GameController().snapshot() == Board.initial()

    def test_snapshot_is_a_copy(self) -> None:
        ctrl = GameController()
        snap = ctrl.snapshot()
        snap[E2] = None
        assert ctrl.snapshot()[E2] == Piece(Color.WHITE, PieceType.PAWN)

    def test_new_game_resets(self) -> None:
        ctrl = GameController()
        _play(ctrl, "f2f3", "e7e5", "g2g4", "d8h4")
        ctrl.new_game()
        assert ctrl.status() == StatusReport(Color.WHITE, GameStatus.IN_PROGRESS)
        assert ctrl.snapshot() == Board.initial()
        assert ctrl.state.position.last_move is None
        assert ctrl.state.ply_count == 0

    def test_custom_position_is_classified(self) -> None:
        ctrl = _controller(
            [
                ".......k",
                EMPTY,
                ".....KQ.",
                EMPTY,
                EMPTY,
                EMPTY,
                EMPTY,
                EMPTY,
            ],
            Color.BLACK,
        )
        assert ctrl.status().status == GameStatus.STALEMATE

    def test_king_capture_position_is_refused(self) -> None:
        rows = ["....k...", EMPTY, EMPTY, EMPTY, EMPTY, EMPTY, EMPTY, "K...R..."]
        with pytest.raises(InvalidPosition):
            _controller(rows)

    def test_refused_new_game_keeps_current_game(self) -> None:
        ctrl = GameController()
        _play(ctrl, "e2e4")
        before = ctrl.state.position.copy()
        rows = ["....k...", EMPTY, EMPTY, EMPTY, EMPTY, EMPTY, EMPTY, "K...K..."]
        with pytest.raises(InvalidPosition):
            ctrl.new_game(Position(Board.from_rows(rows)))
        assert ctrl.state.position == before
        assert ctrl.state.ply_count == 1
        assert ctrl.status() == StatusReport(Color.BLACK, GameStatus.IN_PROGRESS)


class TestSubmitMove:
    def test_legal_move_accepted(self) -> None:
        ctrl = GameController()
        outcome = ctrl.submit_move("e2", "e4")
        assert outcome.turn == Color.BLACK
        assert outcome.status == GameStatus.IN_PROGRESS
        assert not outcome.promotion_pending
        assert ctrl.status().turn == Color.BLACK

    def test_accepts_coordinate_pairs(self) -> None:
        ctrl = GameController()
        ctrl.submit_move((6, 4), (4, 4))
        assert ctrl.snapshot()[(4, 4)] == Piece(Color.WHITE, PieceType.PAWN)

    def test_illegal_geometry(self) -> None:
        ctrl = GameController()
        with pytest.raises(InvalidMove):
            ctrl.submit_move("e2", "e5")

    def test_empty_origin(self) -> None:
        with pytest.raises(InvalidMove):
            GameController().submit_move("e4", "e5")

    def test_wrong_color(self) -> None:
        with pytest.raises(InvalidMove):
            GameController().submit_move("e7", "e5")

    def test_own_piece_on_target(self) -> None:
        with pytest.raises(InvalidMove):
            GameController().submit_move("a1", "a2")

    @pytest.mark.parametrize(
        ("from_sq", "to_sq"),
        [((8, 0), (7, 0)), ((6, 4), (6, -1)), ("e9", "e4"), ("z2", "e4"), (42, "e4")],
    )
    def test_out_of_bounds(self, from_sq: object, to_sq: object) -> None:
        with pytest.raises(OutOfBoundsSquare):
            GameController().submit_move(from_sq, to_sq)

    def test_check_reported(self) -> None:
        ctrl = GameController()
        outcome = _play(ctrl, "e2e4", "f7f6", "d1h5")
        assert outcome.status == GameStatus.CHECK
        assert ctrl.status() == StatusReport(Color.BLACK, GameStatus.CHECK)

    def test_must_answer_check(self) -> None:
        ctrl = GameController()
        _play(ctrl, "e2e4", "f7f6", "d1h5")
        with pytest.raises(InvalidMove):
            ctrl.submit_move("a7", "a6")
        outcome = ctrl.submit_move("g7", "g6")
        assert outcome.status == GameStatus.IN_PROGRESS


class TestNoMutationOnRejection:
    def test_state_unchanged(self) -> None:
        ctrl = GameController()
        _play(ctrl, "e2e4", "d7d5")
        before = ctrl.state.position.copy()
        status_before = ctrl.status()
        rejected = [
            ("e4", "e6"),
            ("d5", "d4"),
            ("e1", "g1"),
            ("a3", "a4"),
            ("b1", "d2"),
        ]
        for from_sq, to_sq in rejected:
            with pytest.raises(InvalidMove):
                ctrl.submit_move(from_sq, to_sq)
        assert ctrl.state.position == before
        assert ctrl.state.position.castling == before.castling
        assert ctrl.state.position.last_move == before.last_move
        assert ctrl.status() == status_before

    def test_pinned_piece_rejection_restores_board(self) -> None:
        rows = ["k...r...", EMPTY, EMPTY, EMPTY, EMPTY, EMPTY, "....R...", "....K..."]
        ctrl = _controller(rows)
        before = ctrl.snapshot()
        with pytest.raises(InvalidMove):
            ctrl.submit_move("e2", "a2")
        assert ctrl.snapshot() == before


class TestCastling:
    ROWS = ["r...k..r", EMPTY, EMPTY, EMPTY, EMPTY, EMPTY, EMPTY, "R...K..R"]

    def test_kingside(self) -> None:
        ctrl = _controller(self.ROWS)
        outcome = ctrl.submit_move("e1", "g1")
        assert outcome.move.is_castling
        board = ctrl.snapshot()
        assert board[G1] == Piece(Color.WHITE, PieceType.KING)
        assert board[F1] == Piece(Color.WHITE, PieceType.ROOK)
        assert board[H1] is None
        flags = ctrl.state.position.castling.white
        assert flags.king_moved
        assert flags.kingside_rook_moved
        assert not flags.queenside_rook_moved

    def test_from_standard_opening(self) -> None:
        ctrl = GameController()
        _play(ctrl, "e2e4", "e7e5", "g1f3", "b8c6", "f1c4", "g8f6")
        outcome = ctrl.submit_move("e1", "g1")
        assert outcome.move.is_castling
        assert ctrl.snapshot()[F1] == Piece(Color.WHITE, PieceType.ROOK)

    def test_not_after_king_returns(self) -> None:
        ctrl = _controller(self.ROWS)
        _play(ctrl, "e1e2", "e8e7", "e2e1", "e7e8")
        with pytest.raises(InvalidMove):
            ctrl.submit_move("e1", "g1")

    def test_not_after_rook_returns(self) -> None:
        ctrl = _controller(self.ROWS)
        _play(ctrl, "h1h2", "a8a7", "h2h1", "a7a8")
        with pytest.raises(InvalidMove):
            ctrl.submit_move("e1", "g1")
        ctrl.submit_move("e1", "c1")

    def test_through_check(self) -> None:
        rows = ["r...k..r", EMPTY, EMPTY, EMPTY, EMPTY, ".....r..", EMPTY, "R...K..R"]
        ctrl = _controller(rows)
        with pytest.raises(InvalidMove):
            ctrl.submit_move("e1", "g1")


class TestEnPassant:
    def test_capture_removes_pawn(self) -> None:
        ctrl = GameController()
        _play(ctrl, "e2e4", "a7a6", "e4e5", "d7d5")
        assert ctrl.state.position.last_move is not None
        outcome = ctrl.submit_move("e5", "d6")
        assert outcome.move.is_en_passant
        board = ctrl.snapshot()
        assert board[D5] is None
        assert board[E5] is None
        assert board[D6] == Piece(Color.WHITE, PieceType.PAWN)

    def test_expires_after_one_move(self) -> None:
        ctrl = GameController()
        _play(ctrl, "e2e4", "a7a6", "e4e5", "d7d5", "h2h3", "h7h6")
        with pytest.raises(InvalidMove):
            ctrl.submit_move("e5", "d6")


PROMO_ROWS = [EMPTY, ".P......", EMPTY, ".......k", EMPTY, EMPTY, EMPTY, "K......."]


class TestPromotion:
    def test_move_parks_in_pending(self) -> None:
        ctrl = _controller(PROMO_ROWS)
        outcome = ctrl.submit_move("b7", "b8")
        assert outcome.promotion_pending
        assert outcome.turn == Color.WHITE
        assert ctrl.pending_promotion == PendingPromotion(B8, Color.WHITE)
        assert ctrl.status().turn == Color.WHITE

    def test_other_moves_rejected_while_pending(self) -> None:
        ctrl = _controller(PROMO_ROWS)
        ctrl.submit_move("b7", "b8")
        before = ctrl.state.position.copy()
        with pytest.raises(PromotionPending):
            ctrl.submit_move("a1", "a2")
        with pytest.raises(PromotionPending):
            ctrl.submit_move("h5", "h4")
        assert ctrl.state.position == before

    def test_choose_queen(self) -> None:
        ctrl = _controller(PROMO_ROWS)
        ctrl.submit_move("b7", "b8")
        outcome = ctrl.choose_promotion(PieceType.QUEEN)
        assert outcome.promoted_to == PieceType.QUEEN
        assert outcome.turn == Color.BLACK
        assert ctrl.snapshot()[B8] == Piece(Color.WHITE, PieceType.QUEEN)
        assert ctrl.pending_promotion is None
        assert ctrl.status() == StatusReport(Color.BLACK, GameStatus.IN_PROGRESS)

    @pytest.mark.parametrize(
        "piece_type", [PieceType.ROOK, PieceType.BISHOP, PieceType.KNIGHT]
    )
    def test_under_promotion(self, piece_type: PieceType) -> None:
        ctrl = _controller(PROMO_ROWS)
        ctrl.submit_move("b7", "b8")
        ctrl.choose_promotion(piece_type)
        assert ctrl.snapshot()[B8] == Piece(Color.WHITE, piece_type)

    @pytest.mark.parametrize("piece_type", [PieceType.KING, PieceType.PAWN, 99, "Q"])
    def test_invalid_choice_keeps_pending(self, piece_type: object) -> None:
        ctrl = _controller(PROMO_ROWS)
        ctrl.submit_move("b7", "b8")
        with pytest.raises(InvalidPromotionChoice):
            ctrl.choose_promotion(piece_type)  # type: ignore[arg-type]
        assert ctrl.pending_promotion is not None
        assert ctrl.snapshot()[B8] == Piece(Color.WHITE, PieceType.PAWN)

    def test_no_pending(self) -> None:
        with pytest.raises(NoPendingPromotion):
            GameController().choose_promotion(PieceType.QUEEN)

    def test_promotion_by_capture(self) -> None:
        ctrl = _controller(["..r....."] + PROMO_ROWS[1:])
        outcome = ctrl.submit_move("b7", "c8")
        assert outcome.promotion_pending
        assert outcome.move.captured == Piece(Color.BLACK, PieceType.ROOK)

    def test_promotion_can_deliver_mate(self) -> None:
        # Black king h8 boxed by its own pawns g7/h7
        rows = [".......k", ".P....pp", EMPTY, EMPTY, EMPTY, EMPTY, EMPTY, "K......."]
        ctrl = _controller(rows)
        ctrl.submit_move("b7", "b8")
        outcome = ctrl.choose_promotion(PieceType.QUEEN)
        assert outcome.status == GameStatus.CHECKMATE
        assert outcome.is_game_over

    def test_black_promotes(self) -> None:
        rows = ["k.......", EMPTY, EMPTY, EMPTY, EMPTY, EMPTY, ".......p", "K......."]
        ctrl = _controller(rows, Color.BLACK)
        outcome = ctrl.submit_move("h2", "h1")
        assert outcome.promotion_pending
        ctrl.choose_promotion(PieceType.KNIGHT)
        assert ctrl.snapshot()[H1] == Piece(Color.BLACK, PieceType.KNIGHT)
        assert ctrl.status().turn == Color.WHITE


class TestGameOver:
    def test_fools_mate(self) -> None:
        ctrl = GameController()
        outcome = _play(ctrl, "f2f3", "e7e5", "g2g4", "d8h4")
        assert outcome.status == GameStatus.CHECKMATE
        assert ctrl.status() == StatusReport(Color.WHITE, GameStatus.CHECKMATE)

    def test_moves_refused_after_mate(self) -> None:
        ctrl = GameController()
        _play(ctrl, "f2f3", "e7e5", "g2g4", "d8h4")
        with pytest.raises(GameAlreadyOver):
            ctrl.submit_move("a2", "a3")
        with pytest.raises(GameAlreadyOver):
            ctrl.choose_promotion(PieceType.QUEEN)

    def test_stalemate_by_move(self) -> None:
        rows = [".......k", ".....K..", EMPTY, EMPTY, "......Q.", EMPTY, EMPTY, EMPTY]
        ctrl = _controller(rows)
        outcome = ctrl.submit_move("g4", "g6")
        assert outcome.status == GameStatus.STALEMATE
        assert ctrl.status() == StatusReport(Color.BLACK, GameStatus.STALEMATE)
        with pytest.raises(GameAlreadyOver):
            ctrl.submit_move("h8", "g8")

    def test_game_end_is_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        ctrl = GameController()
        with caplog.at_level(logging.INFO, logger="chessrules.game.controller"):
            _play(ctrl, "f2f3", "e7e5", "g2g4", "d8h4")
        assert any("Checkmate" in rec.getMessage() for rec in caplog.records)


class TestEvents:
    def test_move_and_status_callbacks(self) -> None:
        ctrl = GameController()
        moves: list[MoveOutcome] = []
        reports: list[StatusReport] = []
        ctrl.events.on_move.append(moves.append)
        ctrl.events.on_status_changed.append(reports.append)
        ctrl.submit_move("e2", "e4")
        assert len(moves) == 1
        assert moves[0].move.to_sq == parse_square("e4")
        assert reports == [StatusReport(Color.BLACK, GameStatus.IN_PROGRESS)]

    def test_promotion_callback(self) -> None:
        ctrl = _controller(PROMO_ROWS)
        pending: list[PendingPromotion] = []
        reports: list[StatusReport] = []
        ctrl.events.on_promotion_pending.append(pending.append)
        ctrl.events.on_status_changed.append(reports.append)
        ctrl.submit_move("b7", "b8")
        assert pending == [PendingPromotion(B8, Color.WHITE)]
        assert reports == []
        ctrl.choose_promotion(PieceType.QUEEN)
        assert len(reports) == 1

    def test_rejection_emits_nothing(self) -> None:
        ctrl = GameController()
        moves: list[MoveOutcome] = []
        ctrl.events.on_move.append(moves.append)
        with pytest.raises(InvalidMove):
            ctrl.submit_move("e2", "e5")
        assert moves == []


class TestLegalDestinations:
    def test_knight_at_start(self) -> None:
        ctrl = GameController()
        targets = set(ctrl.legal_destinations("g1"))
        assert targets == {parse_square("f3"), parse_square("h3")}

    def test_opponent_piece_has_none(self) -> None:
        assert GameController().legal_destinations("g8") == []

    def test_none_while_promotion_pending(self) -> None:
        ctrl = _controller(PROMO_ROWS)
        ctrl.submit_move("b7", "b8")
        assert ctrl.legal_destinations("a1") == []

    def test_castling_listed(self) -> None:
        ctrl = _controller(TestCastling.ROWS)
        targets = set(ctrl.legal_destinations(E1))
        expected = ("c1", "d1", "f1", "g1", "d2", "e2", "f2")
        assert targets == {parse_square(n) for n in expected}
