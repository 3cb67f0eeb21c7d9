"""PGN tag tracking and rating-based game eligibility."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Mapping

logger = logging.getLogger(__name__)

WHITE_RATING_TAG = "WhiteElo"
BLACK_RATING_TAG = "BlackElo"

_TAG_RE = re.compile(r'\[(\w+)\s+"([^"]+)"\]')
_RATING_RE = re.compile(r"\s*[+-]?\d+\s*")


def parse_tag_line(line: str) -> tuple[str, str] | None:
    """Parse a ``[Key "Value"]`` line into ``(key, value)``.

    Returns None for anything else, including empty values.
    """
    line = line.strip()
    if not (line.startswith("[") and line.endswith("]")):
        return None
    m = _TAG_RE.match(line)
    if m is None:
        return None
    return m.group(1), m.group(2)


def parse_rating(value: str | None) -> int | None:
    """Parse a rating tag value; None when absent or not an integer."""
    if value is None or not _RATING_RE.fullmatch(value):
        return None
    return int(value)


@dataclass(frozen=True)
class GameMetadata:
    """Tags of one game, with ratings parsed where possible."""

    tags: dict[str, str] = field(default_factory=dict)
    white_rating: int | None = None
    black_rating: int | None = None

    @classmethod
    def from_tags(cls, tags: Mapping[str, str]) -> GameMetadata:
        return cls(
            tags=dict(tags),
            white_rating=parse_rating(tags.get(WHITE_RATING_TAG)),
            black_rating=parse_rating(tags.get(BLACK_RATING_TAG)),
        )


class MetadataTracker:
    """Accumulates the tag lines of the game currently being read."""

    def __init__(self) -> None:
        self._tags: dict[str, str] = {}

    @property
    def tags(self) -> dict[str, str]:
        return dict(self._tags)

    def observe(self, line: str) -> bool:
        """Record ``line`` if it is a tag line. Returns True if it was."""
        parsed = parse_tag_line(line)
        if parsed is None:
            return False
        key, value = parsed
        self._tags[key] = value
        return True

    def snapshot(self) -> GameMetadata:
        return GameMetadata.from_tags(self._tags)

    def reset(self) -> None:
        self._tags = {}


def is_eligible(metadata: Mapping[str, str] | GameMetadata, min_rating: int) -> bool:
    """Check that both players are rated at least ``min_rating``.

    Args:
        metadata: Raw tag mapping or a parsed GameMetadata
        min_rating: Minimum rating required of both players

    Returns:
        False (with a warning) if either rating tag is missing or not an
        integer, otherwise whether both ratings reach ``min_rating``.
    """
    if not isinstance(metadata, GameMetadata):
        metadata = GameMetadata.from_tags(metadata)

    missing = [
        tag for tag in (WHITE_RATING_TAG, BLACK_RATING_TAG) if tag not in metadata.tags
    ]
    if missing:
        logger.warning(f"Missing rating tag(s) {', '.join(missing)} in metadata: {metadata.tags}")
        return False

    if metadata.white_rating is None or metadata.black_rating is None:
        logger.warning(f"Invalid rating in metadata: {metadata.tags}")
        return False

    return metadata.white_rating >= min_rating and metadata.black_rating >= min_rating
