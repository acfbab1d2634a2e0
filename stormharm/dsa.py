"""
Sorting utilities
=================

A stable merge sort used by the ranker. Stability matters here: aggregate
rows with equal totals must keep the order in which their groups were first
seen, in both ascending and descending mode.
"""

from __future__ import annotations
from typing import List, Callable, TypeVar

T = TypeVar("T")

def merge_sort(arr: List[T], key: Callable[[T], object] = lambda x: x, reverse: bool = False) -> List[T]:
    """Stable merge sort (returns a new list)."""
    if len(arr) <= 1:
        return arr[:]
    mid = len(arr) // 2
    left = merge_sort(arr[:mid], key=key, reverse=reverse)
    right = merge_sort(arr[mid:], key=key, reverse=reverse)
    return _merge(left, right, key=key, reverse=reverse)

def _merge(left: List[T], right: List[T], key: Callable[[T], object], reverse: bool) -> List[T]:
    """Merge two sorted runs.

    Elements of `left` came earlier in the input, so on equal keys the left
    element is taken first. This holds for `reverse=True` as well (hence
    `>=` rather than `>`), which keeps descending sorts stable.
    """
    out: List[T] = []
    # i and j are pointers into each sorted list
    i = j = 0
    while i < len(left) and j < len(right):
        a, b = key(left[i]), key(right[j])
        take_left = (a >= b) if reverse else (a <= b)
        if take_left:
            out.append(left[i]); i += 1
        else:
            out.append(right[j]); j += 1
    out.extend(left[i:])
    out.extend(right[j:])
    return out
