"""Replay-based validation of cleaned move strings using python-chess."""

from __future__ import annotations

from dataclasses import dataclass

from .engine import STARTING_FEN, apply_move, new_position, resolve_san


@dataclass
class ReplayValidationResult:
    """Result of replaying a move string from the starting position."""

    valid: bool
    plies: int = 0  # moves applied before stopping
    token: str | None = None  # first token that failed
    error: str | None = None
    final_fen: str | None = None


def validate_move_string(
    move_string: str,
    start_fen: str = STARTING_FEN,
) -> ReplayValidationResult:
    """Replay ``move_string`` and report the first failing token, if any.

    Args:
        move_string: Cleaned, space-separated SAN tokens
        start_fen: Position to replay from

    Returns:
        ReplayValidationResult; replay stops at the first token that does
        not resolve to a legal move
    """
    board = new_position(start_fen)

    for ply, token in enumerate(move_string.split()):
        try:
            move = resolve_san(board, token)
            apply_move(board, move)
        except ValueError as e:
            return ReplayValidationResult(
                valid=False,
                plies=ply,
                token=token,
                error=f"Cannot play '{token}' at ply {ply + 1}: {e}",
                final_fen=board.fen(),
            )

    return ReplayValidationResult(
        valid=True,
        plies=len(board.move_stack),
        final_fen=board.fen(),
    )


def is_valid_move_string(move_string: str) -> bool:
    """True if every token of ``move_string`` replays legally from the start."""
    return validate_move_string(move_string).valid
