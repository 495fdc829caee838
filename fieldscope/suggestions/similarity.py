# FieldScope - String Similarity
# ==============================
"""
Edit-distance based similarity between two strings.

Uses RapidFuzz's Levenshtein implementation (the O(n*m) dynamic programming
table, in C), which keeps a single comparison of field-name-length strings
well under 0.1ms.
"""

from typing import Any

from rapidfuzz.distance import Levenshtein


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def levenshtein_distance(a: Any, b: Any) -> int:
    """Minimum number of single-character edits turning a into b."""
    return Levenshtein.distance(_as_text(a), _as_text(b))


def similarity(a: Any, b: Any) -> float:
    """
    Normalized similarity in [0, 1].

    1 - distance / max(len(a), len(b)); two empty strings are identical (1.0).
    Comparison is case-sensitive; callers normalize case themselves.
    """
    a = _as_text(a)
    b = _as_text(b)

    longest = max(len(a), len(b))
    if longest == 0:
        return 1.0
    if a == b:
        return 1.0

    score = 1.0 - Levenshtein.distance(a, b) / longest
    return min(1.0, max(0.0, score))
