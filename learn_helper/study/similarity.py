"""
Typo-tolerant string comparison.

Answers are compared after trimming and lowercasing. Exact matches always
pass; anything else is scored as ``1 - d / max_len`` where ``d`` is the
Damerau-Levenshtein distance (transpositions count as one edit) and
``max_len`` is the longer answer's UTF-8 byte length. The answer passes
when the score reaches the threshold.

With the default threshold of 0.8 a five-letter word tolerates one typo.
Multi-byte answers (kana, accented letters) tolerate proportionally more.
"""

from __future__ import annotations

from rapidfuzz.distance import DamerauLevenshtein

DEFAULT_THRESHOLD = 0.8


def normalize(text: str) -> str:
    """Trim surrounding whitespace and lowercase."""
    return text.strip().lower()


def similarity(expected: str, actual: str) -> float:
    """
    Normalized similarity between two answers in [0.0, 1.0].

    Two strings that are empty after normalization are identical (1.0).
    """
    expected_norm = normalize(expected)
    actual_norm = normalize(actual)

    if expected_norm == actual_norm:
        return 1.0

    max_len = max(len(expected_norm.encode("utf-8")), len(actual_norm.encode("utf-8")))
    distance = DamerauLevenshtein.distance(expected_norm, actual_norm)
    return 1.0 - distance / max_len


def is_similar(expected: str, actual: str, threshold: float) -> bool:
    """
    Check whether ``actual`` is close enough to ``expected``.

    Args:
        expected: The reference answer
        actual: The answer given by the learner
        threshold: Minimum similarity (0.0-1.0). Exact matches score 1.0.

    Returns:
        True if the normalized strings are equal or similar enough
    """
    return similarity(expected, actual) >= threshold
