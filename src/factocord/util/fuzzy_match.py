"""Closest-name matching used when an exact lookup failed."""

from __future__ import annotations

from difflib import SequenceMatcher
from typing import Sequence, Tuple

DEFAULT_THRESHOLD = 0.5


def similarity(a: str, b: str) -> float:
    """Case-insensitive similarity ratio between two strings, from 0.0 to 1.0."""
    return SequenceMatcher(None, a.casefold(), b.casefold()).ratio()


def closest(query: str, candidates: Sequence[str], threshold: float = DEFAULT_THRESHOLD) -> Tuple[str, float] | None:
    """Return the best-scoring candidate and its score, or None.

    The best candidate is only accepted when its score is strictly above
    ``threshold``. On equal scores the earliest candidate wins, so the
    result only depends on the order of ``candidates``.
    """
    best: Tuple[str, float] | None = None
    for candidate in candidates:
        score = similarity(query, candidate)
        if best is None or score > best[1]:
            best = (candidate, score)

    if best is None or best[1] <= threshold:
        return None
    return best
