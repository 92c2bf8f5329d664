"""
Dataset loader (CSV / Excel -> RawEvent list)
=============================================

This module reads a storm events export and converts each row into a
`RawEvent` object.

Key ideas:
- We try multiple possible column names because exports differ
  (`EVTYPE` in the classic bz2 file, `event_type` in newer CSVs).
- Conversion helpers (_to_int/_to_float/_to_str) turn blanks into None/"".
- pandas infers compression from the file name, so `.csv.bz2` works as-is.
- The loader returns an immutable tuple; SIRE never edits the source file.

`CachedLoader` is an explicit, caller-owned memo: re-loading the same
unchanged file returns the already-parsed tuple.
"""

from __future__ import annotations
from typing import Dict, Optional, Tuple
import logging
import os
import re

import pandas as pd

from .models import RawEvent

logger = logging.getLogger(__name__)

EVENT_TYPE_COLS = ("EVTYPE", "event_type", "Event Type")
FATALITY_COLS = ("FATALITIES", "deaths_direct", "deaths")
INJURY_COLS = ("INJURIES", "injuries_direct", "injuries")
PROP_DMG_COLS = ("PROPDMG", "prop_dmg", "damage_property")
PROP_EXP_COLS = ("PROPDMGEXP", "prop_dmg_exp")
CROP_DMG_COLS = ("CROPDMG", "crop_dmg", "damage_crops")
CROP_EXP_COLS = ("CROPDMGEXP", "crop_dmg_exp")
DATE_COLS = ("BGN_DATE", "begin_date", "begin_date_time")
STATE_COLS = ("STATE", "state")

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

def _norm(s: str) -> str:
    return re.sub(r"[^a-z0-9]+", "", str(s).lower())

def _col(df: pd.DataFrame, *names: str) -> str:
    cols = list(df.columns)
    for n in names:
        if n in cols:
            return n
    norm_map = {_norm(c): c for c in cols}
    for n in names:
        nn = _norm(n)
        if nn in norm_map:
            return norm_map[nn]
    raise KeyError(f"Missing required column. Tried={names}. Available={cols}")

def _optional_col(df: pd.DataFrame, *names: str) -> Optional[str]:
    try:
        return _col(df, *names)
    except KeyError:
        return None

def read_frame(path: str) -> pd.DataFrame:
    """Read the raw table; Excel for .xlsx, CSV (any compression) otherwise."""
    if path.lower().endswith((".xlsx", ".xlsm")):
        df = pd.read_excel(path, engine="openpyxl")
    else:
        df = pd.read_csv(path, low_memory=False)
    df.rename(columns={c: str(c).strip() for c in df.columns}, inplace=True)
    return df

def frame_to_events(df: pd.DataFrame) -> Tuple[RawEvent, ...]:
    """Convert a DataFrame with storm-event columns into RawEvent records."""
    type_col = _col(df, *EVENT_TYPE_COLS)
    fat_col = _col(df, *FATALITY_COLS)
    inj_col = _col(df, *INJURY_COLS)
    pd_col = _col(df, *PROP_DMG_COLS)
    pe_col = _optional_col(df, *PROP_EXP_COLS)
    cd_col = _col(df, *CROP_DMG_COLS)
    ce_col = _optional_col(df, *CROP_EXP_COLS)
    date_col = _optional_col(df, *DATE_COLS)
    state_col = _optional_col(df, *STATE_COLS)

    def column(name: Optional[str]):
        return df[name] if name else [None] * len(df)

    rows = zip(
        column(type_col), column(fat_col), column(inj_col),
        column(pd_col), column(pe_col), column(cd_col), column(ce_col),
        column(date_col), column(state_col),
    )
    events = []
    for i, (etype, fat, inj, pdmg, pexp, cdmg, cexp, date, state) in enumerate(rows):
        events.append(RawEvent(
            event_id=i,
            event_type=_to_str(etype),
            fatalities=_to_int(fat),
            injuries=_to_int(inj),
            prop_dmg=_to_float(pdmg),
            prop_dmg_exp=_to_str(pexp),
            crop_dmg=_to_float(cdmg),
            crop_dmg_exp=_to_str(cexp),
            begin_date=_to_str(date),
            state=_to_str(state),
        ))
    return tuple(events)

def load_storm_events(path: str) -> Tuple[RawEvent, ...]:
    """Load a storm events file into immutable RawEvent records."""
    logger.info("Reading %s", path)
    df = read_frame(path)
    events = frame_to_events(df)
    logger.info("Loaded %d events from %s", len(events), path)
    return events

class CachedLoader:
    """Memoizes `load_storm_events` per file.

    The cache key is the absolute path plus the file's modification time,
    so editing the file forces a re-read.
    """

    def __init__(self, load=load_storm_events) -> None:
        self._load = load
        self._cache: Dict[Tuple[str, float], Tuple[RawEvent, ...]] = {}

    def __call__(self, path: str) -> Tuple[RawEvent, ...]:
        full = os.path.abspath(path)
        key = (full, os.path.getmtime(full))
        if key not in self._cache:
            # Older versions of the same file are stale
            for k in [k for k in self._cache if k[0] == full]:
                del self._cache[k]
            self._cache[key] = self._load(path)
        else:
            logger.debug("Cache hit for %s", full)
        return self._cache[key]

    def __len__(self) -> int:
        return len(self._cache)

    def clear(self) -> None:
        self._cache.clear()
