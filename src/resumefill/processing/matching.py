"""Tiered matching of answers against option labels."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field

from resumefill.processing.dates import normalize_date_answer
from resumefill.processing.synonyms import is_semantic_match
from resumefill.processing.text import normalize, similarity_ratio
from resumefill.typing.enums import FieldKind, MatchTier
from resumefill.typing.models import MatchDecision, OptionMatch

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from resumefill.typing.models import FieldDescriptor

_PART_SEPARATOR = re.compile(r"[,;]")


class MatchingConstants(BaseModel):
    """Heuristic constants of the fuzzy tier."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    similarity_threshold: float = Field(default=0.3, gt=0.0, le=1.0)
    stop_words: frozenset[str] = frozenset(
        {"the", "and", "or", "but", "in", "on", "at", "to", "for", "of", "with", "by"},
    )
    min_token_length: int = 3
    containment_token_length: int = 4
    edit_distance_token_length: int = 5


DEFAULT_CONSTANTS = MatchingConstants()


def exact_match(answer: str, option_text: str, _constants: MatchingConstants = DEFAULT_CONSTANTS) -> bool:
    """Return whether normalized forms are equal or both share a synonym class."""
    answer_norm = normalize(answer)
    if answer_norm and answer_norm == normalize(option_text):
        return True
    return is_semantic_match(answer, option_text)


def partial_match(answer: str, option_text: str, _constants: MatchingConstants = DEFAULT_CONSTANTS) -> bool:
    """Return whether one normalized form contains the other.

    Empty normalized forms never match.
    """
    answer_norm = normalize(answer)
    option_norm = normalize(option_text)
    if not answer_norm or not option_norm:
        return False
    return option_norm in answer_norm or answer_norm in option_norm


def significant_tokens(text: str, constants: MatchingConstants = DEFAULT_CONSTANTS) -> list[str]:
    """Split lower-cased text on whitespace, dropping stop-words and short tokens."""
    return [
        token
        for token in text.lower().split()
        if token not in constants.stop_words and len(token) >= constants.min_token_length
    ]


def _tokens_match(first: str, second: str, constants: MatchingConstants) -> bool:
    if first == second:
        return True
    shortest = min(len(first), len(second))
    if shortest >= constants.containment_token_length and (first in second or second in first):
        return True
    return (
        shortest >= constants.edit_distance_token_length
        and similarity_ratio(first, second) < constants.similarity_threshold
    )


def fuzzy_match(answer: str, option_text: str, constants: MatchingConstants = DEFAULT_CONSTANTS) -> bool:
    """Return whether any significant token pair is equal, nested or within edit distance."""
    option_tokens = significant_tokens(option_text, constants)
    return any(
        _tokens_match(answer_token, option_token, constants)
        for answer_token in significant_tokens(answer, constants)
        for option_token in option_tokens
    )


TIERS: tuple[tuple[MatchTier, Callable[[str, str, MatchingConstants], bool]], ...] = (
    (MatchTier.EXACT, exact_match),
    (MatchTier.PARTIAL, partial_match),
    (MatchTier.FUZZY, fuzzy_match),
)


def match_option(
    answer: str,
    options: Sequence[str],
    *,
    constants: MatchingConstants = DEFAULT_CONSTANTS,
) -> OptionMatch | None:
    """Select the best option for an answer.

    Tiers are tried in order (exact, partial, fuzzy); the first tier with any
    match wins and ties go to the first option in page order.

    Args:
        answer (str): Answer text.
        options (Sequence[str]): Candidate labels.
        constants (MatchingConstants): Fuzzy tier constants.

    Returns:
        OptionMatch | None: Winning option and tier, if any.
    """
    for tier, predicate in TIERS:
        for index, option_text in enumerate(options):
            if predicate(answer, option_text, constants):
                return OptionMatch(index=index, tier=tier)
    return None


def split_answer_parts(answer: str) -> list[str]:
    """Split a multi-choice answer on `,` and `;`."""
    return [part.strip() for part in _PART_SEPARATOR.split(answer) if part.strip()]


def match_options_many(
    answer: str,
    options: Sequence[str],
    *,
    constants: MatchingConstants = DEFAULT_CONSTANTS,
) -> list[int]:
    """Select every option matched by at least one part of a multi-choice answer.

    Args:
        answer (str): Comma or semicolon separated answer.
        options (Sequence[str]): Candidate labels.
        constants (MatchingConstants): Fuzzy tier constants.

    Returns:
        list[int]: Selected option indices in page order.
    """
    parts = split_answer_parts(answer)
    return [
        index
        for index, option_text in enumerate(options)
        if any(predicate(part, option_text, constants) for part in parts for _, predicate in TIERS)
    ]


def decide(
    answer: str,
    field: FieldDescriptor,
    *,
    constants: MatchingConstants = DEFAULT_CONSTANTS,
) -> MatchDecision:
    """Turn an answer into a decision for one field.

    Fields without options are filled with the answer verbatim (dates are
    reformatted for date inputs). Checkbox fields may select several options;
    every other kind selects at most one.

    Args:
        answer (str): Answer text.
        field (FieldDescriptor): Target field.
        constants (MatchingConstants): Fuzzy tier constants.

    Returns:
        MatchDecision: Decision for the field.
    """
    if field.is_free_text:
        if field.field_kind == FieldKind.DATE:
            return MatchDecision.fill(normalize_date_answer(answer))
        return MatchDecision.fill(answer)

    if field.field_kind == FieldKind.CHECKBOX:
        indices = match_options_many(answer, field.options, constants=constants)
        return MatchDecision.select_many(indices) if indices else MatchDecision.no_match()

    match = match_option(answer, field.options, constants=constants)
    if match is None:
        return MatchDecision.no_match()
    return MatchDecision.select(match.index)
