"""Single-pass extraction of eligible games' move text from a PGN file.

Each game is a run of tag lines followed by one move-text line starting
with ``1.``. Move text wrapped over several physical lines is not
supported: only the first line is kept.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator

from .cleaning import clean_move_string
from .metadata import MetadataTracker, is_eligible

logger = logging.getLogger(__name__)

MOVE_TEXT_PREFIX = "1."


@dataclass
class ExtractionStats:
    """Counters for one extraction pass."""

    games_seen: int = 0
    games_eligible: int = 0

    @property
    def games_rejected(self) -> int:
        return self.games_seen - self.games_eligible


def iter_move_strings(
    lines: Iterable[str],
    min_rating: int,
    stats: ExtractionStats | None = None,
) -> Iterator[str]:
    """Yield the cleaned move text of every eligible game.

    Args:
        lines: PGN file lines
        min_rating: Minimum rating both players need
        stats: Optional counters updated as games are read

    Yields:
        One cleaned move string per eligible game, in file order
    """
    tracker = MetadataTracker()

    for line in lines:
        line = line.strip()
        if not line:
            continue

        if tracker.observe(line):
            continue

        if line.startswith(MOVE_TEXT_PREFIX):
            metadata = tracker.snapshot()
            tracker.reset()
            if stats is not None:
                stats.games_seen += 1
            if is_eligible(metadata, min_rating):
                if stats is not None:
                    stats.games_eligible += 1
                yield clean_move_string(line)


def extract_move_strings(
    pgn_path: Path | str,
    min_rating: int,
    stats: ExtractionStats | None = None,
) -> list[str]:
    """Read ``pgn_path`` and return the cleaned move strings of eligible games."""
    with open(pgn_path, encoding="utf-8", errors="replace") as f:
        move_strings = list(iter_move_strings(f, min_rating, stats=stats))

    logger.debug(f"Read {len(move_strings)} eligible games from {pgn_path}")
    return move_strings
