"""
Damage exponents and normalization
==================================

The storm database stores each damage figure as a magnitude plus an exponent
code (PROPDMG/PROPDMGEXP, CROPDMG/CROPDMGEXP). This module turns the pair into
a dollar amount.

Exponent table (letters are case-insensitive):

    H -> 100            K -> 1,000
    M -> 1,000,000      B -> 1,000,000,000
    0..8 -> 10          + -> 1
    - -> 0              ? -> 0
    "" -> 0             anything else -> 0

Note: this table is the community reading of the codes, not an official NOAA
rule. Digits are all treated as 10 regardless of value, and "unknown" and
"explicitly zero" both map to 0. Unknown codes are zeroed on purpose: the raw
data carries a handful of stray symbols with no documented meaning, and
dropping their damage is the chosen policy, not an error path.
"""

from __future__ import annotations
from dataclasses import replace
from typing import Iterable, List, Optional
from .models import StormEvent

EXPONENT_MULTIPLIERS = {
    "H": 100,
    "K": 1_000,
    "M": 1_000_000,
    "B": 1_000_000_000,
    "+": 1,
    "-": 0,
    "?": 0,
    "": 0,
}
EXPONENT_MULTIPLIERS.update({str(d): 10 for d in range(9)})

DEFAULT_MULTIPLIER = 0

def multiplier(code: Optional[str]) -> int:
    """Return the multiplier for an exponent code (0 for unknown codes)."""
    if code is None:
        return EXPONENT_MULTIPLIERS[""]
    return EXPONENT_MULTIPLIERS.get(code.upper(), DEFAULT_MULTIPLIER)

def normalize(magnitude: Optional[float], code: Optional[str]) -> Optional[float]:
    """Scale a raw magnitude by its exponent code.

    Magnitudes are not validated: negatives pass through and a missing
    magnitude stays missing.
    """
    if magnitude is None:
        return None
    return magnitude * multiplier(code)

def normalize_event(e: StormEvent) -> StormEvent:
    """Return a copy of `e` with property/crop/total damage filled in."""
    prop = normalize(e.prop_dmg, e.prop_dmg_exp)
    crop = normalize(e.crop_dmg, e.crop_dmg_exp)
    total = None if prop is None or crop is None else prop + crop
    return replace(e, property_damage=prop, crop_damage=crop, total_damage=total)

def normalize_events(events: Iterable[StormEvent]) -> List[StormEvent]:
    return [normalize_event(e) for e in events]
