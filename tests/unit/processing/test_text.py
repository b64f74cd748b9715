from __future__ import annotations

import pytest

from resumefill.processing.text import levenshtein_distance, normalize, similarity_ratio


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("  Bachelor's Degree ", "bachelorsdegree"),
        ("U.S.A.", "usa"),
        ("Full-Time (40h)", "fulltime40h"),
        ("Ünïcode", "ncode"),
        ("", ""),
    ],
)
def test_normalize(raw: str, expected: str) -> None:
    assert normalize(raw) == expected


@pytest.mark.parametrize("raw", ["Yes!", "  Part-time  ", "C++ / C#", "***", "Jane Doe"])
def test_normalize_is_idempotent(raw: str) -> None:
    assert normalize(normalize(raw)) == normalize(raw)


def test_levenshtein_distance_known_values() -> None:
    assert levenshtein_distance("kitten", "sitting") == 3
    assert levenshtein_distance("", "abc") == 3
    assert levenshtein_distance("flaw", "lawn") == 2


@pytest.mark.parametrize(("first", "second"), [("bachelor", "bachelors"), ("abc", ""), ("Python", "python")])
def test_levenshtein_distance_is_symmetric(first: str, second: str) -> None:
    assert levenshtein_distance(first, second) == levenshtein_distance(second, first)


def test_levenshtein_distance_identity_and_case_sensitivity() -> None:
    assert levenshtein_distance("engineer", "engineer") == 0
    assert levenshtein_distance("Python", "python") == 1


def test_similarity_ratio() -> None:
    assert similarity_ratio("", "") == 0.0
    assert similarity_ratio("engineer", "engineer") == 0.0
    assert similarity_ratio("abcd", "abcx") == pytest.approx(0.25)
