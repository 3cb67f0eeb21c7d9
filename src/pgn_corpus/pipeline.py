"""PGN → legal-move training corpus.

Pipeline:
1. Extract — cleaned move text of every game whose players are both rated
   at least MIN_RATING
2. Validate — replay each move string; failures are only reported
3. Replay — for every ply, emit the position before the move and the SAN
   of every legal move, with the move actually played first

Output line format:
    <FEN> <played_san other_san other_san ...>
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator

import chess

from .engine import (
    PrimitiveMove,
    apply_move,
    encode_position,
    legal_moves,
    new_position,
    position_hash,
    resolve_san,
)
from .errors import CorpusError, MissingLegalMoveError, UnresolvableMoveError
from .extraction import ExtractionStats, extract_move_strings
from .legality import validate_move_string
from .notation import move_to_san

logger = logging.getLogger(__name__)

MIN_RATING = 2500

_LINE_RE = re.compile(r"^<([^<>]*)> <([^<>]*)>$")


@dataclass
class CorpusRecord:
    """One training example: a position and its legal moves, played move first."""

    fen: str
    moves: list[str]

    @property
    def played(self) -> str:
        return self.moves[0]

    def to_line(self) -> str:
        return f"<{self.fen}> <{' '.join(self.moves)}>"


@dataclass
class PipelineStats:
    games_seen: int = 0
    games_extracted: int = 0
    games_invalid: int = 0
    lines_written: int = 0


def parse_corpus_line(line: str) -> CorpusRecord:
    """Parse one output line back into a CorpusRecord.

    Raises:
        ValueError: If the line is not in ``<FEN> <moves>`` form.
    """
    m = _LINE_RE.match(line.rstrip("\n"))
    if m is None:
        raise ValueError(f"Malformed corpus line: {line!r}")
    return CorpusRecord(fen=m.group(1), moves=m.group(2).split())


def read_corpus(path: Path | str) -> Iterator[CorpusRecord]:
    """Iterate the records of a corpus file, skipping blank lines."""
    with open(path, encoding="utf-8") as f:
        for line in f:
            if line.strip():
                yield parse_corpus_line(line)


def _check_san_round_trip(board: chess.Board, moves: list[PrimitiveMove], sans: list[str]) -> None:
    for move, san in zip(moves, sans):
        try:
            resolved = resolve_san(board, san)
        except ValueError as e:
            logger.warning(f"Generated SAN '{san}' does not resolve at {board.fen()}: {e}")
            continue
        if resolved != move:
            logger.warning(
                f"Generated SAN '{san}' resolves to {resolved.uci()}, expected {move.uci()}"
            )


def _check_fen_round_trip(board: chess.Board, fen: str) -> None:
    try:
        decoded = new_position(fen)
    except ValueError as e:
        logger.warning(f"Encoded FEN does not decode: {fen} ({e})")
        return
    if position_hash(decoded) != position_hash(board):
        logger.warning(f"Hash mismatch for board FEN: {fen}")


def replay_move_string(move_string: str) -> Iterator[CorpusRecord]:
    """Replay one game and yield a CorpusRecord per ply.

    Args:
        move_string: Cleaned, space-separated SAN tokens

    Yields:
        CorpusRecord for the position before each move

    Raises:
        UnresolvableMoveError: A token is not a legal move at its position.
        MissingLegalMoveError: A resolved move is absent from the legal moves.
    """
    board = new_position()

    for token in move_string.split():
        legal = legal_moves(board)

        try:
            move = resolve_san(board, token)
        except ValueError as e:
            raise UnresolvableMoveError(token, board.fen()) from e

        try:
            idx = legal.index(move)
        except ValueError as e:
            raise MissingLegalMoveError(token, board.fen()) from e

        # Played move first
        legal[0], legal[idx] = legal[idx], legal[0]

        sans = [move_to_san(board, m) for m in legal]
        _check_san_round_trip(board, legal, sans)

        fen = encode_position(board)
        _check_fen_round_trip(board, fen)

        yield CorpusRecord(fen=fen, moves=sans)

        apply_move(board, move)


def preprocess_pgn_file(
    input_path: Path | str,
    output_path: Path | str,
    min_rating: int = MIN_RATING,
) -> PipelineStats:
    """Build a legal-move corpus from a PGN file.

    Args:
        input_path: PGN file to read
        output_path: Corpus file to write (one line per ply)
        min_rating: Minimum rating of both players

    Returns:
        PipelineStats for the run

    Raises:
        CorpusError: On the first move that cannot be replayed. Lines written
            before the failure stay in ``output_path``.
    """
    stats = PipelineStats()
    extraction = ExtractionStats()

    move_strings = extract_move_strings(input_path, min_rating, stats=extraction)
    stats.games_seen = extraction.games_seen
    stats.games_extracted = len(move_strings)
    logger.info(f"Extracted {len(move_strings)} move strings with rating >= {min_rating}")

    logger.info("Validating move strings...")
    for move_string in move_strings:
        result = validate_move_string(move_string)
        if not result.valid:
            stats.games_invalid += 1
            logger.warning(f"Invalid move string: {move_string} ({result.error})")

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    logger.info(f"Writing output to {output_path}...")
    with open(output_path, "w", encoding="utf-8") as output:
        for game_index, move_string in enumerate(move_strings):
            try:
                for record in replay_move_string(move_string):
                    output.write(record.to_line() + "\n")
                    stats.lines_written += 1
            except CorpusError:
                logger.error(f"Aborting at game {game_index + 1}: {move_string}")
                raise

    logger.info(f"Done writing {stats.lines_written} lines to {output_path}")
    return stats
