"""Merge-based intersection of posting lists.

Both inputs must be ascending and duplicate-free, which is exactly the
posting-list invariant kept by the inverted index. Malformed inputs give an
unspecified result but never raise.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence


def intersect(a: Sequence[int], b: Sequence[int]) -> list[int]:
    """Return the ascending intersection of two ascending ID sequences."""
    result: list[int] = []
    i = 0
    j = 0
    len_a = len(a)
    len_b = len(b)

    while i < len_a and j < len_b:
        left = a[i]
        right = b[j]
        if left < right:
            i += 1
        elif right < left:
            j += 1
        else:
            result.append(left)
            i += 1
            j += 1

    return result


def intersect_all(lists: Iterable[Sequence[int]]) -> list[int]:
    """Intersect any number of posting lists.

    The shortest list seeds the running result so every merge is bounded by
    the smallest candidate set; folding stops as soon as the result is empty.
    """
    ordered = sorted(lists, key=len)
    if not ordered:
        return []

    result = list(ordered[0])
    for postings in ordered[1:]:
        if not result:
            break
        result = intersect(result, postings)
    return result
