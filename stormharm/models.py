"""
Data model (StormEvent, AggregateRow)
=====================================

Each row of the NOAA storm database is converted into a `StormEvent` object.
We keep it immutable (`frozen=True`) so that:
- the loaded table can be shared by every analysis without copying, and
- normalization produces derived copies instead of editing records.

Aggregation folds events into `AggregateRow` values, which are also immutable.
"""

from dataclasses import dataclass
from typing import Optional

@dataclass(frozen=True)
class StormEvent:
    """One storm event record.

    Only the columns the analysis needs are carried. Damage comes as a pair
    (magnitude, exponent code); the pair is never split.
    """
    event_type: str
    fatalities: Optional[int]
    injuries: Optional[int]
    prop_dmg: Optional[float]
    prop_dmg_exp: str
    crop_dmg: Optional[float]
    crop_dmg_exp: str
    # filled in by damage.normalize_event (US$)
    property_damage: Optional[float] = None
    crop_damage: Optional[float] = None
    total_damage: Optional[float] = None

@dataclass(frozen=True)
class AggregateRow:
    """(event type, summed metric) pair."""
    event_type: str
    total: float

    def as_tuple(self):
        return (self.event_type, self.total)
