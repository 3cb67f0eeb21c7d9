"""Thin adapter over python-chess.

python-chess owns every rule of the game: board state, legal-move
generation, SAN resolution, FEN encoding and Zobrist hashing. This module
only reshapes its API into the primitive-move view used by the corpus
pipeline (source square, destination square, move-type classifier).
"""

from __future__ import annotations

import enum
from dataclasses import dataclass

import chess
import chess.polyglot

STARTING_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"


class MoveType(enum.IntFlag):
    """Move-type classifier.

    Promotions carry the promoted piece in the low two bits
    (see PROMOTION_PIECE_MASK) and may be combined with CAPTURE.
    """

    QUIET = 0x00
    CAPTURE = 0x04
    PROMOTION = 0x08
    KING_CASTLE = 0x10
    QUEEN_CASTLE = 0x20


PROMOTION_PIECE_MASK = 0x03

# Low-bit codes for the promoted piece
_PROMOTION_CODES = {
    chess.KNIGHT: 0,
    chess.BISHOP: 1,
    chess.ROOK: 2,
    chess.QUEEN: 3,
}
_PROMOTION_PIECES = {code: piece for piece, code in _PROMOTION_CODES.items()}
_PROMOTION_BITS = int(MoveType.PROMOTION | MoveType.CAPTURE) | PROMOTION_PIECE_MASK


def promotion_type(piece_type: chess.PieceType, capture: bool = False) -> MoveType:
    """Build the classifier for a promotion to ``piece_type``."""
    move_type = MoveType.PROMOTION | _PROMOTION_CODES[piece_type]
    if capture:
        move_type |= MoveType.CAPTURE
    return MoveType(move_type)


def promotion_piece(move_type: int) -> chess.PieceType | None:
    """Return the promoted piece type, or None for a non-promotion.

    Raises:
        ValueError: If the classifier carries bits outside the promotion encoding.
    """
    if not move_type & MoveType.PROMOTION:
        return None
    if int(move_type) & ~_PROMOTION_BITS:
        raise ValueError(f"Unknown promotion type: {int(move_type):#x}")
    return _PROMOTION_PIECES[int(move_type) & PROMOTION_PIECE_MASK]


@dataclass(frozen=True)
class PrimitiveMove:
    """An engine-produced move: from-square, to-square and classifier."""

    source: chess.Square
    destination: chess.Square
    type: MoveType = MoveType.QUIET

    @property
    def is_capture(self) -> bool:
        return bool(self.type & MoveType.CAPTURE)

    @property
    def is_promotion(self) -> bool:
        return bool(self.type & MoveType.PROMOTION)

    @property
    def is_castle(self) -> bool:
        return self.type in (MoveType.KING_CASTLE, MoveType.QUEEN_CASTLE)

    def to_chess_move(self) -> chess.Move:
        return chess.Move(
            self.source,
            self.destination,
            promotion=promotion_piece(self.type),
        )

    def uci(self) -> str:
        return self.to_chess_move().uci()


def new_position(fen: str = STARTING_FEN) -> chess.Board:
    """Create a position from its FEN text.

    Raises:
        ValueError: If the FEN is malformed.
    """
    return chess.Board(fen)


def square_file(square: chess.Square) -> int:
    return chess.square_file(square)


def square_rank(square: chess.Square) -> int:
    return chess.square_rank(square)


def square_name(square: chess.Square) -> str:
    return chess.square_name(square)


def classify(board: chess.Board, move: chess.Move) -> MoveType:
    """Classify a python-chess move played from ``board``."""
    if board.is_kingside_castling(move):
        return MoveType.KING_CASTLE
    if board.is_queenside_castling(move):
        return MoveType.QUEEN_CASTLE

    capture = board.is_capture(move)
    if move.promotion:
        return promotion_type(move.promotion, capture=capture)
    return MoveType.CAPTURE if capture else MoveType.QUIET


def to_primitive(board: chess.Board, move: chess.Move) -> PrimitiveMove:
    return PrimitiveMove(move.from_square, move.to_square, classify(board, move))


def legal_moves(board: chess.Board) -> list[PrimitiveMove]:
    """All legal moves from ``board``, in the engine's generation order."""
    return [to_primitive(board, move) for move in board.legal_moves]


def resolve_san(board: chess.Board, san: str) -> PrimitiveMove:
    """Resolve SAN text to the primitive move it denotes at ``board``.

    Raises:
        ValueError: python-chess's ``InvalidMoveError``, ``IllegalMoveError``
            or ``AmbiguousMoveError`` when the text does not name exactly one
            legal move.
    """
    return to_primitive(board, board.parse_san(san))


def apply_move(board: chess.Board, move: PrimitiveMove) -> None:
    """Play ``move`` on ``board`` in place."""
    board.push(move.to_chess_move())


def encode_position(board: chess.Board) -> str:
    return board.fen()


def position_hash(board: chess.Board) -> int:
    """Zobrist hash used to compare positions for identity."""
    return chess.polyglot.zobrist_hash(board)
