"""
Core engine (SIRE)
==================

The engine ties the pipeline together for one report generation:

1) Load dataset -> tuple of RawEvent records (immutable)
2) Transform    -> category + scaled damage per row
3) Aggregate    -> one CategorySummary per category
4) Rank         -> health / financial views, top-N, severity

The summaries are computed once in `__post_init__` and never change; the
views are cheap to rebuild from them.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Sequence, Tuple
import logging

from .aggregate import aggregate
from .loader import load_storm_events
from .models import CategorySummary, RawEvent, UNCLASSIFIABLE
from .normalizer import normalize_event_type
from .rank import DEFAULT_TOP_N, RankedView, financial_view, health_view, severity_scores
from .transform import transform_events

logger = logging.getLogger(__name__)

SUMMARY_FIELDS = ["category", "events", "fatalities", "injuries", "prop_damage_usd", "crop_damage_usd"]

@dataclass
class StormImpactEngine:
    """Storm Impact Ranking Engine.

    The engine stores:
    - events: all RawEvent records
    - summaries: per-category totals (Unclassifiable excluded)
    - unclassified: how many rows were dropped as Unclassifiable
    """
    events: Sequence[RawEvent]
    dataset_path: Optional[str] = None
    # Stores CLI commands (for reproducibility in reports)
    command_log: List[str] = field(default_factory=list)
    summaries: List[CategorySummary] = field(init=False)
    unclassified: int = field(init=False, default=0)

    def __post_init__(self) -> None:
        cleaned = list(transform_events(self.events))
        self.unclassified = sum(1 for e in cleaned if e.category == UNCLASSIFIABLE)
        self.summaries = aggregate(cleaned)
        logger.info(
            "Engine ready: %d events, %d categories, %d unclassifiable",
            len(self.events), len(self.summaries), self.unclassified,
        )

    @classmethod
    def from_path(cls, path: str, loader: Callable[[str], Sequence[RawEvent]] = load_storm_events) -> "StormImpactEngine":
        """Load a dataset with `loader` (e.g. a CachedLoader) and build an engine."""
        return cls(events=loader(path), dataset_path=path)

    # ---------------- Views ----------------
    def health(self) -> RankedView:
        return health_view(self.summaries)

    def financial(self) -> RankedView:
        return financial_view(self.summaries)

    def view(self, name: str) -> RankedView:
        n = name.lower().strip()
        if n in ("health", "harm"):
            return self.health()
        if n in ("financial", "economic", "damage"):
            return self.financial()
        raise ValueError("view must be: health, financial")

    def top(self, name: str, n: int = DEFAULT_TOP_N) -> List[CategorySummary]:
        return self.view(name).top(n)

    def severity(self, low: float = 1.0, high: float = 10.0) -> List[Tuple[str, float]]:
        return severity_scores(self.summaries, low=low, high=high)

    # ---------------- Lookups ----------------
    def summary(self, category: str) -> Optional[CategorySummary]:
        for s in self.summaries:
            if s.category == category:
                return s
        return None

    def classify(self, label: str) -> str:
        """Canonical category for one raw label (same rules as the pipeline)."""
        return normalize_event_type(label)

    def totals(self) -> Dict[str, float]:
        """Grand totals over all classified categories."""
        return {
            "events": sum(s.events for s in self.summaries),
            "fatalities": sum(s.fatalities for s in self.summaries),
            "injuries": sum(s.injuries for s in self.summaries),
            "prop_damage_usd": sum(s.prop_damage_usd for s in self.summaries),
            "crop_damage_usd": sum(s.crop_damage_usd for s in self.summaries),
        }

    # ---------------- Output operations ----------------
    def export_csv(self, path: str) -> None:
        import csv
        with open(path, "w", newline="", encoding="utf-8") as f:
            w = csv.writer(f)
            w.writerow(SUMMARY_FIELDS)
            for s in self.summaries:
                w.writerow([s.category, s.events, s.fatalities, s.injuries,
                            s.prop_damage_usd, s.crop_damage_usd])

    def export_json(self, path: str) -> None:
        """Export the per-category summaries to a JSON file."""
        import json
        payload = [
            {
                "category": s.category,
                "events": s.events,
                "fatalities": s.fatalities,
                "injuries": s.injuries,
                "prop_damage_usd": s.prop_damage_usd,
                "crop_damage_usd": s.crop_damage_usd,
            }
            for s in self.summaries
        ]
        with open(path, "w", encoding="utf-8") as f:
            json.dump(payload, f, ensure_ascii=False, indent=2)
