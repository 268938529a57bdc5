"""Helpers shared by the two scorers."""

import math
from typing import Iterable, Optional


def round_score(value: float) -> int:
    """Round half up to an integer (2.5 → 3), clamped to 0-100."""
    return max(0, min(100, int(math.floor(value + 0.5))))


def contains_either_way(a: str, b: str) -> bool:
    """True when a is a substring of b or b is a substring of a."""
    return a in b or b in a


def find_overlap(needle: str, haystack: Iterable[str]) -> Optional[str]:
    """Return the first haystack item overlapping needle either way."""
    for item in haystack:
        if contains_either_way(item, needle):
            return item
    return None
