"""Tests for SAN generation from primitive moves."""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import chess
import pytest

from pgn_corpus.engine import (
    MoveType,
    PrimitiveMove,
    apply_move,
    legal_moves,
    new_position,
    resolve_san,
)
from pgn_corpus.notation import move_to_san

# Knights on b1 and f1 both reach d2
KNIGHTS_FEN = "4k3/8/8/8/8/8/8/1N2KN2 w - - 0 1"
# Rooks on a1 and a5 both reach a3
ROOKS_FEN = "4k3/8/8/R7/8/8/8/R3K3 w - - 0 1"
# Queens on a1, c1 and a3 all reach b2
QUEENS_FEN = "8/8/8/7k/8/Q7/6K1/Q1Q5 w - - 0 1"
CASTLING_FEN = "r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1"
PROMOTION_FEN = "3r3k/4P3/8/8/8/8/8/K7 w - - 0 1"
EN_PASSANT_FEN = "4k3/8/8/3pP3/8/8/8/4K3 w - d6 0 1"
PAWN_CAPTURES_FEN = "4k3/8/8/3p4/2P1P3/8/8/4K3 w - - 0 1"
# White pawns on b7 and g7 with empty promotion squares
PROMOTIONS_BOTH_SIDES_FEN = "r3k2r/1P4P1/8/8/8/8/1p4p1/R3K2R w KQkq - 0 1"
MIDDLEGAME_FEN = "r1bq1rk1/pp2bppp/2n1pn2/3p4/2PP4/2N1PN2/PP1B1PPP/R2QKB1R w KQ - 1 8"


def _san(fen: str, uci: str) -> str:
    board = new_position(fen)
    move = resolve_san(board, board.san(chess.Move.from_uci(uci)))
    return move_to_san(board, move)


class TestCastling:
    def test_king_side(self):
        assert _san(CASTLING_FEN, "e1g1") == "O-O"

    def test_queen_side(self):
        assert _san(CASTLING_FEN, "e1c1") == "O-O-O"

    def test_black_castling(self):
        fen = CASTLING_FEN.replace(" w ", " b ")
        assert _san(fen, "e8g8") == "O-O"
        assert _san(fen, "e8c8") == "O-O-O"


class TestPromotion:
    def test_quiet_promotion(self):
        assert _san(PROMOTION_FEN, "e7e8q") == "ee8=Q"

    def test_capture_promotion(self):
        assert _san(PROMOTION_FEN, "e7d8n") == "exd8=N"

    def test_underpromotions(self):
        assert _san(PROMOTION_FEN, "e7e8r") == "ee8=R"
        assert _san(PROMOTION_FEN, "e7e8b") == "ee8=B"

    def test_no_check_suffix(self):
        # The queen gives check along the eighth rank
        board = new_position(PROMOTION_FEN)
        assert board.san(chess.Move.from_uci("e7e8q")) == "e8=Q+"
        assert _san(PROMOTION_FEN, "e7e8q") == "ee8=Q"


class TestPawns:
    def test_push(self):
        assert _san(chess.STARTING_FEN, "e2e4") == "e4"

    def test_capture(self):
        assert _san(PAWN_CAPTURES_FEN, "c4d5") == "cxd5"
        assert _san(PAWN_CAPTURES_FEN, "e4d5") == "exd5"

    def test_en_passant(self):
        assert _san(EN_PASSANT_FEN, "e5d6") == "exd6"


class TestDisambiguation:
    def test_unambiguous_piece_move(self):
        assert _san(KNIGHTS_FEN, "b1c3") == "Nc3"

    def test_file_disambiguation(self):
        assert _san(KNIGHTS_FEN, "b1d2") == "Nbd2"
        assert _san(KNIGHTS_FEN, "f1d2") == "Nfd2"

    def test_rank_disambiguation(self):
        assert _san(ROOKS_FEN, "a1a3") == "R1a3"
        assert _san(ROOKS_FEN, "a5a3") == "R5a3"

    def test_file_and_rank_disambiguation(self):
        # a1 shares its file with a3 and its rank with c1
        assert _san(QUEENS_FEN, "a1b2") == "Qa1b2"

    def test_file_preferred_over_rank(self):
        # c1 shares a rank with a1 but no file with either rival
        assert _san(QUEENS_FEN, "c1b2") == "Qcb2"

    def test_rank_when_file_shared(self):
        assert _san(QUEENS_FEN, "a3b2") == "Q3b2"

    def test_capture_with_disambiguation(self):
        fen = "4k3/8/8/8/8/8/3p4/1N2KN2 w - - 0 1"
        assert _san(fen, "b1d2") == "Nbxd2"


class TestPurity:
    def test_board_not_mutated(self):
        board = new_position(MIDDLEGAME_FEN)
        fen = board.fen()
        for move in legal_moves(board):
            move_to_san(board, move)
        assert board.fen() == fen
        assert not board.move_stack


def _positions_from_game(sans: str) -> list[str]:
    board = new_position()
    fens = [board.fen()]
    for san in sans.split():
        apply_move(board, resolve_san(board, san))
        fens.append(board.fen())
    return fens


ROUND_TRIP_FENS = [
    chess.STARTING_FEN,
    KNIGHTS_FEN,
    ROOKS_FEN,
    QUEENS_FEN,
    CASTLING_FEN,
    PROMOTION_FEN,
    EN_PASSANT_FEN,
    MIDDLEGAME_FEN,
    PROMOTIONS_BOTH_SIDES_FEN,
    *_positions_from_game("e4 c5 Nf3 d6 d4 cxd4 Nxd4 Nf6 Nc3 a6 Be3 e5 Nb3 Be6 f3 Be7 Qd2 O-O O-O-O Nbd7"),
]


@pytest.mark.parametrize("fen", ROUND_TRIP_FENS)
def test_san_resolves_back_to_same_move(fen):
    board = new_position(fen)
    for move in legal_moves(board):
        assert resolve_san(board, move_to_san(board, move)) == move


@pytest.mark.parametrize("fen", ROUND_TRIP_FENS)
def test_san_matches_engine_without_suffix(fen):
    board = new_position(fen)
    for move in legal_moves(board):
        expected = board.san(move.to_chess_move()).rstrip("+#")
        if move.is_promotion and not move.is_capture:
            # Quiet promotions keep the source file: "ee8=Q" where python-chess says "e8=Q"
            expected = chess.FILE_NAMES[chess.square_file(move.source)] + expected
        assert move_to_san(board, move) == expected


def test_quiet_promotions_keep_source_file():
    board = new_position(PROMOTIONS_BOTH_SIDES_FEN)
    quiet = [m for m in legal_moves(board) if m.is_promotion and not m.is_capture]
    assert len(quiet) == 8
    sans = {move_to_san(board, m) for m in quiet}
    assert {"bb8=Q", "bb8=N", "gg8=Q", "gg8=R"} <= sans
    for move in quiet:
        assert resolve_san(board, move_to_san(board, move)) == move


def test_unknown_promotion_type_raises():
    board = new_position(PROMOTION_FEN)
    bogus = PrimitiveMove(chess.E7, chess.E8, MoveType(MoveType.PROMOTION | 0x40))
    with pytest.raises(ValueError):
        move_to_san(board, bogus)
