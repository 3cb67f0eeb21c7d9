"""Standard algebraic notation from primitive moves.

SAN is rebuilt from the move's squares and type classifier rather than
taken from python-chess, so the corpus never carries check or mate
suffixes and disambiguation stays minimal.
"""

from __future__ import annotations

import chess

from .engine import (
    MoveType,
    PrimitiveMove,
    promotion_piece,
    square_file,
    square_name,
    square_rank,
)

PIECE_LETTERS = {
    chess.PAWN: "",
    chess.KNIGHT: "N",
    chess.BISHOP: "B",
    chess.ROOK: "R",
    chess.QUEEN: "Q",
    chess.KING: "K",
}

KING_CASTLE_SAN = "O-O"
QUEEN_CASTLE_SAN = "O-O-O"


def file_letter(square: chess.Square) -> str:
    return chr(ord("a") + square_file(square))


def rank_digit(square: chess.Square) -> str:
    return str(square_rank(square) + 1)


def _disambiguation(board: chess.Board, move: PrimitiveMove, piece_type: chess.PieceType) -> str:
    """Smallest prefix (file, rank, or both) that singles out the source square."""
    competitors = [
        m.from_square
        for m in board.legal_moves
        if m.to_square == move.destination
        and m.from_square != move.source
        and board.piece_type_at(m.from_square) == piece_type
    ]
    if not competitors:
        return ""

    same_file = any(square_file(sq) == square_file(move.source) for sq in competitors)
    same_rank = any(square_rank(sq) == square_rank(move.source) for sq in competitors)

    if not same_file:
        return file_letter(move.source)
    if not same_rank:
        return rank_digit(move.source)
    return square_name(move.source)


def move_to_san(board: chess.Board, move: PrimitiveMove) -> str:
    """Encode a legal move at ``board`` as SAN without check/mate suffixes.

    Args:
        board: Position the move is played from (not modified)
        move: A move legal at ``board``

    Returns:
        SAN string, e.g. "Nbd2", "exd5", "ee8=Q", "exd8=N", "O-O". Promotions
        always carry the source file, so quiet ones differ from python-chess
        ("ee8=Q" vs "e8=Q"); both forms resolve to the same move.

    Raises:
        ValueError: If the classifier carries an unknown promotion encoding.
    """
    if move.is_castle:
        return KING_CASTLE_SAN if move.type == MoveType.KING_CASTLE else QUEEN_CASTLE_SAN

    destination = square_name(move.destination)
    capture = "x" if move.is_capture else ""

    if move.is_promotion:
        promoted = promotion_piece(move.type)
        return f"{file_letter(move.source)}{capture}{destination}={PIECE_LETTERS[promoted]}"

    piece_type = board.piece_type_at(move.source)

    if piece_type == chess.PAWN:
        if move.is_capture:
            return f"{file_letter(move.source)}x{destination}"
        return destination

    disambiguation = _disambiguation(board, move, piece_type)
    return f"{PIECE_LETTERS[piece_type]}{disambiguation}{capture}{destination}"
