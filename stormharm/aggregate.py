"""
Aggregation (event type -> summed metric)
=========================================

Events are grouped by a key field (normally `event_type`) and one numeric
metric is summed per group.

Notes:
- Labels are used exactly as they appear in the data. "TSTM WIND" and
  "THUNDERSTORM WIND" are two groups; cleaning the label taxonomy is not part
  of the analysis.
- Groups come out in first-encountered order. The ranker relies on this to
  break ties.
- Records whose metric is missing (None) are left out of the sums.
"""

from __future__ import annotations
from typing import Dict, Iterable, List
from .models import AggregateRow, StormEvent

METRICS = ("fatalities", "injuries", "property_damage", "crop_damage", "total_damage")

def aggregate(events: Iterable[StormEvent], metric: str, key: str = "event_type") -> List[AggregateRow]:
    """Sum `metric` per distinct value of `key`.

    Returns:
        One AggregateRow per group, in the order groups were first seen.
    """
    if metric not in METRICS:
        raise ValueError(f"metric must be one of: {', '.join(METRICS)}")

    # dicts keep insertion order, so this is also the encounter order
    totals: Dict[str, float] = {}
    for e in events:
        v = getattr(e, metric)
        if v is None:
            continue
        k = getattr(e, key)
        totals[k] = totals.get(k, 0) + v

    return [AggregateRow(event_type=k, total=t) for k, t in totals.items()]

def grand_total(rows: Iterable[AggregateRow]) -> float:
    return sum(r.total for r in rows)
