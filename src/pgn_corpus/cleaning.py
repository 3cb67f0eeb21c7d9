"""Normalize PGN move text into a bare sequence of SAN tokens."""

from __future__ import annotations

import re

# Applied in order. Comments go first so digits and periods inside them are
# never read as move numbers. Comments do not nest: the first '}' closes one.
_CLEANING_STEPS: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"\{[^}]*\}"), ""),  # comments
    (re.compile(r"\d+\."), ""),  # move numbers
    (re.compile(r"1-0|0-1|1/2-1/2"), ""),  # results
    (re.compile(r"[.#?!*+]"), ""),  # annotations
)


def clean_move_string(move_string: str) -> str:
    """Strip comments, move numbers, results and annotation marks.

    Args:
        move_string: One line of PGN move text

    Returns:
        Space-separated SAN tokens in their original order (may be empty)

    Example:
        >>> clean_move_string("1. e4 {best} e5 2. Nf3 Nc6 1-0")
        'e4 e5 Nf3 Nc6'
    """
    for pattern, replacement in _CLEANING_STEPS:
        move_string = pattern.sub(replacement, move_string)
    return " ".join(move_string.split())
