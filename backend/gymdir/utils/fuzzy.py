"""
Typo-tolerant term matching for gym text search.

A query matches a field when it is within an edit-distance allowance of
the whole field or of any of its words. The allowance grows with the
query length: exact for 1-2 characters, one edit for 3-5, two beyond.
Adjacent transpositions count as a single edit.
"""

import re
from typing import Optional

_WORD_RE = re.compile(r"\w+", re.UNICODE)


def auto_fuzziness(term: str) -> int:
    """Maximum edits allowed for a query term."""
    if len(term) <= 2:
        return 0
    if len(term) <= 5:
        return 1
    return 2


def edit_distance(a: str, b: str, limit: Optional[int] = None) -> int:
    """
    Optimal string alignment distance between ``a`` and ``b``.

    When ``limit`` is given the computation stops early and returns
    ``limit + 1`` once the distance is known to exceed it.
    """
    if a == b:
        return 0
    if limit is not None and abs(len(a) - len(b)) > limit:
        return limit + 1

    prev_prev: list[int] = []
    prev = list(range(len(b) + 1))
    for i in range(1, len(a) + 1):
        current = [i] + [0] * len(b)
        for j in range(1, len(b) + 1):
            cost = 0 if a[i - 1] == b[j - 1] else 1
            current[j] = min(
                prev[j] + 1,         # deletion
                current[j - 1] + 1,  # insertion
                prev[j - 1] + cost,  # substitution
            )
            if i > 1 and j > 1 and a[i - 1] == b[j - 2] and a[i - 2] == b[j - 1]:
                current[j] = min(current[j], prev_prev[j - 2] + 1)
        if limit is not None and min(current) > limit:
            return limit + 1
        prev_prev, prev = prev, current
    return prev[-1]


def match_distance(query: str, text: Optional[str]) -> Optional[int]:
    """
    Best edit distance between ``query`` and ``text`` or one of its words.

    Returns ``None`` when nothing is within the allowance. Comparison is
    case-insensitive.
    """
    if not text:
        return None
    term = query.strip().lower()
    if not term:
        return None
    allowance = auto_fuzziness(term)

    candidates = [text.lower()] + _WORD_RE.findall(text.lower())
    best: Optional[int] = None
    for candidate in candidates:
        distance = edit_distance(term, candidate, limit=allowance)
        if distance <= allowance and (best is None or distance < best):
            best = distance
            if best == 0:
                break
    return best
