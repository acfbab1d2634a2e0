"""
Ranking (sort + top-N)
======================

`rank` orders aggregate rows by their total and `top` takes a prefix.
The source data has no secondary tie-break, so ties keep group order.
"""

from __future__ import annotations
from typing import List, Sequence
from .dsa import merge_sort
from .models import AggregateRow

def rank(rows: Sequence[AggregateRow], descending: bool = True) -> List[AggregateRow]:
    return merge_sort(list(rows), key=lambda r: r.total, reverse=descending)

def top(rows: Sequence[AggregateRow], n: int) -> List[AggregateRow]:
    """First `n` rows of a ranked sequence (all rows if there are fewer)."""
    if n < 0:
        raise ValueError("n must be >= 0")
    return list(rows[:n])
