"""
Ranker / filter (report views)
==============================

Two views are built from the category summaries:

- health view:    categories with any fatalities or injuries,
                  ordered by fatalities (most first)
- financial view: categories with any property or crop damage,
                  ordered by property damage (most first)

Each view is a `RankedView`: the full ordered list (for plotting) plus a
`top(n)` slice (for tables).

`severity_scores` is a presentation helper that folds fatalities,
injuries and frequency into one bounded number per category.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, List, Sequence, Tuple

from .models import CategorySummary

DEFAULT_TOP_N = 5

@dataclass(frozen=True)
class RankedView:
    """An ordered, filtered listing of category summaries."""
    name: str
    metric: str
    rows: Tuple[CategorySummary, ...]

    def __len__(self) -> int:
        return len(self.rows)

    def top(self, n: int = DEFAULT_TOP_N) -> List[CategorySummary]:
        """Return the first n rows (fewer if the view is shorter)."""
        if n < 0:
            raise ValueError("n must be >= 0")
        return list(self.rows[:n])

    def labels(self) -> List[str]:
        return [s.category for s in self.rows]

    def values(self, metric: str = "") -> List[float]:
        """Metric values in view order (defaults to the ranking metric)."""
        key = metric_key(metric or self.metric)
        return [key(s) for s in self.rows]

def metric_key(metric: str) -> Callable[[CategorySummary], float]:
    """Map a metric name (or a short alias) to a getter."""
    m = metric.lower().strip()
    if m in ("fatalities", "deaths"):
        return lambda s: s.fatalities
    if m in ("injuries", "injured"):
        return lambda s: s.injuries
    if m in ("prop_damage_usd", "property", "prop"):
        return lambda s: s.prop_damage_usd
    if m in ("crop_damage_usd", "crop", "crops"):
        return lambda s: s.crop_damage_usd
    if m in ("total_damage_usd", "damage"):
        return lambda s: s.total_damage_usd
    if m in ("events", "count", "frequency"):
        return lambda s: s.events
    raise ValueError("metric must be: fatalities, injuries, property, crop, damage, events")

def _ranked(name: str, summaries: Sequence[CategorySummary], primary: str, secondary: str) -> RankedView:
    p, q = metric_key(primary), metric_key(secondary)
    # Zero-impact categories carry nothing to rank
    kept = [s for s in summaries if p(s) > 0 or q(s) > 0]
    # Descending by primary then secondary; ties broken by name for stable output
    kept.sort(key=lambda s: s.category)
    kept.sort(key=lambda s: (p(s), q(s)), reverse=True)
    return RankedView(name=name, metric=primary, rows=tuple(kept))

def health_view(summaries: Sequence[CategorySummary]) -> RankedView:
    """Population-health view: ranked by fatalities, then injuries."""
    return _ranked("health", summaries, "fatalities", "injuries")

def financial_view(summaries: Sequence[CategorySummary]) -> RankedView:
    """Economic view: ranked by property damage, then crop damage."""
    return _ranked("financial", summaries, "prop_damage_usd", "crop_damage_usd")

def severity_scores(
    summaries: Sequence[CategorySummary],
    low: float = 1.0,
    high: float = 10.0,
) -> List[Tuple[str, float]]:
    """Combine fatalities, injuries and event frequency into one score.

    Each component is divided by its maximum over all categories, the three
    shares are averaged, and the mean is rescaled into [low, high].
    More harm (or more frequent harm) always gives a higher score.

    Returns:
        (category, score) pairs, highest score first.
    """
    if high < low:
        raise ValueError("high must be >= low")
    rows = [s for s in summaries if s.total_harmed > 0]
    if not rows:
        return []
    max_f = max(s.fatalities for s in rows) or 1
    max_i = max(s.injuries for s in rows) or 1
    max_e = max(s.events for s in rows) or 1
    out: List[Tuple[str, float]] = []
    for s in rows:
        share = (s.fatalities / max_f + s.injuries / max_i + s.events / max_e) / 3.0
        out.append((s.category, low + share * (high - low)))
    out.sort(key=lambda t: t[0])
    out.sort(key=lambda t: t[1], reverse=True)
    return out
