"""Matching and default resolution helpers."""

from resumefill.processing.dates import normalize_date_answer
from resumefill.processing.defaults import SMART_DEFAULTS, SmartDefault, resolve_default
from resumefill.processing.matching import (
    DEFAULT_CONSTANTS,
    MatchingConstants,
    decide,
    match_option,
    match_options_many,
)
from resumefill.processing.synonyms import SYNONYM_CLASSES, SynonymClass, is_semantic_match
from resumefill.processing.text import levenshtein_distance, normalize, similarity_ratio

__all__ = [
    "DEFAULT_CONSTANTS",
    "SMART_DEFAULTS",
    "SYNONYM_CLASSES",
    "MatchingConstants",
    "SmartDefault",
    "SynonymClass",
    "decide",
    "is_semantic_match",
    "levenshtein_distance",
    "match_option",
    "match_options_many",
    "normalize",
    "normalize_date_answer",
    "resolve_default",
    "similarity_ratio",
]
