from .cleaning import clean_move_string
from .engine import STARTING_FEN, MoveType, PrimitiveMove
from .errors import CorpusError, MissingLegalMoveError, UnresolvableMoveError
from .extraction import ExtractionStats, extract_move_strings, iter_move_strings
from .legality import ReplayValidationResult, is_valid_move_string, validate_move_string
from .metadata import GameMetadata, MetadataTracker, is_eligible
from .notation import move_to_san
from .pipeline import (
    MIN_RATING,
    CorpusRecord,
    PipelineStats,
    parse_corpus_line,
    preprocess_pgn_file,
    read_corpus,
    replay_move_string,
)

__all__ = [
    "clean_move_string",
    "STARTING_FEN",
    "MoveType",
    "PrimitiveMove",
    "CorpusError",
    "MissingLegalMoveError",
    "UnresolvableMoveError",
    "ExtractionStats",
    "extract_move_strings",
    "iter_move_strings",
    "ReplayValidationResult",
    "is_valid_move_string",
    "validate_move_string",
    "GameMetadata",
    "MetadataTracker",
    "is_eligible",
    "move_to_san",
    "MIN_RATING",
    "CorpusRecord",
    "PipelineStats",
    "parse_corpus_line",
    "preprocess_pgn_file",
    "read_corpus",
    "replay_move_string",
]
