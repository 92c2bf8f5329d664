"""
Aggregator (group-by-sum per category)
======================================

Sums fatalities, injuries and scaled damage per canonical category.

- Unclassifiable rows are dropped here.
- Missing values (None) count as zero.
- Sums are taken sequentially in input order, so the same input list always
  gives bit-identical floating point totals.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Iterable, List, Sequence
import logging

from .models import CategorySummary, CleanedEvent, UNCLASSIFIABLE

logger = logging.getLogger(__name__)

@dataclass
class _Totals:
    """Mutable running sums for one category (internal only)."""
    events: int = 0
    fatalities: int = 0
    injuries: int = 0
    prop_damage_usd: float = 0.0
    crop_damage_usd: float = 0.0

    def add_event(self, e: CleanedEvent) -> None:
        self.events += 1
        self.fatalities += e.fatalities or 0
        self.injuries += e.injuries or 0
        self.prop_damage_usd += e.prop_damage_usd or 0.0
        self.crop_damage_usd += e.crop_damage_usd or 0.0

    def add_summary(self, s: CategorySummary) -> None:
        self.events += s.events
        self.fatalities += s.fatalities
        self.injuries += s.injuries
        self.prop_damage_usd += s.prop_damage_usd
        self.crop_damage_usd += s.crop_damage_usd

def _freeze(totals: Dict[str, _Totals]) -> List[CategorySummary]:
    return [
        CategorySummary(
            category=cat,
            events=t.events,
            fatalities=t.fatalities,
            injuries=t.injuries,
            prop_damage_usd=t.prop_damage_usd,
            crop_damage_usd=t.crop_damage_usd,
        )
        for cat, t in sorted(totals.items())
    ]

def aggregate(events: Iterable[CleanedEvent]) -> List[CategorySummary]:
    """Group cleaned events by category and sum their metrics.

    Returns:
        One CategorySummary per category, sorted by category name.
    """
    totals: Dict[str, _Totals] = {}
    dropped = 0
    for e in events:
        if e.category == UNCLASSIFIABLE:
            dropped += 1
            continue
        totals.setdefault(e.category, _Totals()).add_event(e)
    logger.info("Aggregated %d categories (%d unclassifiable rows dropped)", len(totals), dropped)
    return _freeze(totals)

def merge_summaries(partitions: Sequence[Sequence[CategorySummary]]) -> List[CategorySummary]:
    """Merge partial aggregates, always in the given partition order."""
    totals: Dict[str, _Totals] = {}
    for part in partitions:
        for s in part:
            totals.setdefault(s.category, _Totals()).add_summary(s)
    return _freeze(totals)
