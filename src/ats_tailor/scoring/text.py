"""Text helpers shared by both scorers.

Matching is plain lower-cased substring containment, not word-boundary
matching: "java" matches inside "javascript". Keywords are stripped before
matching, the same way they are stripped before tier classification.
"""

from __future__ import annotations

import math


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives."""
    return math.floor(value + 0.5)


def contains(text: str, keyword: str) -> bool:
    return keyword.strip().lower() in text.lower()


def matched_keywords(text: str, keywords: list[str]) -> list[str]:
    """Keywords (input order) that occur anywhere in ``text``."""
    lowered = text.lower()
    return [k for k in keywords if k.strip().lower() in lowered]


def count_occurrences(text: str, keyword: str) -> int:
    """Count non-overlapping literal occurrences, case-insensitively."""
    needle = keyword.strip().lower()
    if not needle:
        return 0
    return text.lower().count(needle)


def percentage(part: float, whole: float) -> float:
    if whole == 0:
        return 0.0
    return part / whole * 100
