"""Text comparison primitives."""

from __future__ import annotations

import re

from rapidfuzz.distance import Levenshtein

_NON_ALNUM = re.compile(r"[^a-z0-9]")


def normalize(value: str) -> str:
    """Return the comparison key of a string.

    Trims, lower-cases and drops every character outside `[a-z0-9]`.

    Args:
        value (str): Raw text.

    Returns:
        str: Normalized text.
    """
    return _NON_ALNUM.sub("", value.strip().lower())


def levenshtein_distance(first: str, second: str) -> int:
    """Return the unit-cost edit distance between two strings.

    Args:
        first (str): First string, compared as-is.
        second (str): Second string, compared as-is.

    Returns:
        int: Minimum number of insertions, deletions and substitutions.
    """
    return Levenshtein.distance(first, second)


def similarity_ratio(first: str, second: str) -> float:
    """Return edit distance relative to the longer string (0.0 means identical)."""
    longest = max(len(first), len(second))
    if longest == 0:
        return 0.0
    return levenshtein_distance(first, second) / longest
