"""
Result Ranker - threshold filter + stable descending sort

Both matching flows end the same way: drop anything scoring below a
threshold, then order the rest highest score first. Equal scores keep their
input order (``sorted`` is stable), so repeated calls over the same input
always render the same list. Nothing is truncated; pagination is left to
the caller.

Thresholds in use:
    - Candidate → jobs: 90 (only strong matches are shown)
    - Employer search: 1 (any non-zero match)
"""

from typing import Callable, Iterable, List, TypeVar

T = TypeVar("T")


def _score_attr(result) -> int:
    return result.score


def rank(
    results: Iterable[T],
    min_score: int,
    key: Callable[[T], int] = _score_attr,
) -> List[T]:
    """
    Filter results below min_score and sort the rest by score, descending.

    Args:
        results: Scored results in input order
        min_score: Lowest score kept (inclusive)
        key: Extracts the score from a result (defaults to ``.score``)

    Returns:
        New list; the input is not modified

    Example:
        >>> [r.score for r in rank(results, 90)]  # scores [95, 40, 100, 90]
        [100, 95, 90]
    """
    kept = [result for result in results if key(result) >= min_score]
    return sorted(kept, key=key, reverse=True)
