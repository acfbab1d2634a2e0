"""
Dataset loader (CSV -> StormEvent list)
=======================================

This module reads the NOAA storm database CSV (plain, .bz2 or .gz; pandas
infers the compression from the file name) and converts each row into a
`StormEvent` object.

Key ideas:
- We try exact and normalized column names because exports differ in case
  and punctuation (EVTYPE vs evtype vs "Ev Type").
- Exponent columns are read as strings so "0" stays "0" and "" stays blank.
- Event types are kept exactly as written, including surrounding spaces;
  " TSTM WIND" and "TSTM WIND" are different labels. Exponent codes are
  stripped.
- The loader returns a list of immutable records; the file is never edited.
"""

from __future__ import annotations
from typing import List, Optional
import logging
import re
import pandas as pd
from .models import StormEvent

logger = logging.getLogger(__name__)

EVTYPE_NAMES = ("EVTYPE", "Event Type", "EVENT_TYPE")
FATALITIES_NAMES = ("FATALITIES", "Deaths", "DEATHS_DIRECT")
INJURIES_NAMES = ("INJURIES", "INJURIES_DIRECT")
PROPDMG_NAMES = ("PROPDMG", "Property Damage")
PROPDMGEXP_NAMES = ("PROPDMGEXP", "Property Damage Exp")
CROPDMG_NAMES = ("CROPDMG", "Crop Damage")
CROPDMGEXP_NAMES = ("CROPDMGEXP", "Crop Damage Exp")

def _to_int(x) -> Optional[int]:
    """Convert a cell to int, returning None if missing/invalid."""
    if pd.isna(x): return None
    try: return int(float(x))
    except (TypeError, ValueError): return None

def _to_float(x) -> Optional[float]:
    """Convert a cell to float, returning None if missing/invalid."""
    if pd.isna(x): return None
    try: return float(x)
    except (TypeError, ValueError): return None

def _to_str(x) -> str:
    if pd.isna(x): return ""
    return str(x).strip()

def _to_label(x) -> str:
    """Event type cell, kept byte-for-byte (only NA becomes "")."""
    if pd.isna(x): return ""
    return str(x)

def _norm(s: str) -> str:
    return re.sub(r"[^a-z0-9]+", "", str(s).lower())

def _col(columns: List[str], *names: str) -> str:
    for n in names:
        if n in columns:
            return n
    norm_map = {_norm(c): c for c in columns}
    for n in names:
        nn = _norm(n)
        if nn in norm_map:
            return norm_map[nn]
    raise KeyError(f"Missing required column. Tried={names}. Available={columns}")

def load_storm_csv(path: str, nrows: Optional[int] = None) -> List[StormEvent]:
    """
    Load the storm database into StormEvent records.
    Only the seven columns used by the analysis are parsed.
    """
    header = pd.read_csv(path, nrows=0)
    columns = [str(c).strip() for c in header.columns]
    raw_columns = dict(zip(columns, header.columns))

    evtype_col = _col(columns, *EVTYPE_NAMES)
    fat_col = _col(columns, *FATALITIES_NAMES)
    inj_col = _col(columns, *INJURIES_NAMES)
    prop_col = _col(columns, *PROPDMG_NAMES)
    prop_exp_col = _col(columns, *PROPDMGEXP_NAMES)
    crop_col = _col(columns, *CROPDMG_NAMES)
    crop_exp_col = _col(columns, *CROPDMGEXP_NAMES)

    wanted = [evtype_col, fat_col, inj_col, prop_col, prop_exp_col, crop_col, crop_exp_col]
    usecols = [raw_columns[c] for c in wanted]
    df = pd.read_csv(
        path,
        usecols=usecols,
        dtype={raw_columns[evtype_col]: str,
               raw_columns[prop_exp_col]: str,
               raw_columns[crop_exp_col]: str},
        keep_default_na=False,
        na_values={raw_columns[c]: [""] for c in (fat_col, inj_col, prop_col, crop_col)},
        nrows=nrows,
    )
    df.rename(columns={c: str(c).strip() for c in df.columns}, inplace=True)
    logger.info("Read %d rows from %s", len(df), path)

    events: List[StormEvent] = []
    for row in df[wanted].itertuples(index=False, name=None):
        evtype, fat, inj, prop, prop_exp, crop, crop_exp = row
        events.append(StormEvent(
            event_type=_to_label(evtype),
            fatalities=_to_int(fat),
            injuries=_to_int(inj),
            prop_dmg=_to_float(prop),
            prop_dmg_exp=_to_str(prop_exp),
            crop_dmg=_to_float(crop),
            crop_dmg_exp=_to_str(crop_exp),
        ))
    return events
