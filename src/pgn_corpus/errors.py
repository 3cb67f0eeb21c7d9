"""Fatal pipeline errors."""

from __future__ import annotations


class CorpusError(Exception):
    """Base class for errors that abort corpus generation."""


class UnresolvableMoveError(CorpusError):
    """A move token could not be resolved at the current position."""

    def __init__(self, token: str, fen: str):
        self.token = token
        self.fen = fen
        super().__init__(f"Cannot resolve move '{token}' in position {fen}")


class MissingLegalMoveError(CorpusError):
    """A resolved move was not found among the enumerated legal moves."""

    def __init__(self, token: str, fen: str):
        self.token = token
        self.fen = fen
        super().__init__(f"Expected move '{token}' not found in legal moves of {fen}")
