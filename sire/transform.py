"""
Row transformer
===============

Turns each RawEvent into a CleanedEvent:
- the free-text event type becomes a canonical category, and
- property / crop damage are scaled by their exponent codes.

Rows are independent of each other, so the output does not depend on
input order.
"""

from __future__ import annotations
from typing import Iterable, Iterator
import logging

from .exponent import scale_damage
from .models import CleanedEvent, RawEvent
from .normalizer import normalize_event_type

logger = logging.getLogger(__name__)

def transform_event(raw: RawEvent) -> CleanedEvent:
    """Clean a single record."""
    return CleanedEvent(
        event_id=raw.event_id,
        category=normalize_event_type(raw.event_type),
        fatalities=raw.fatalities,
        injuries=raw.injuries,
        prop_damage_usd=scale_damage(raw.prop_dmg, raw.prop_dmg_exp),
        crop_damage_usd=scale_damage(raw.crop_dmg, raw.crop_dmg_exp),
    )

def transform_events(rows: Iterable[RawEvent]) -> Iterator[CleanedEvent]:
    """Lazily clean a stream of records."""
    n = 0
    for raw in rows:
        n += 1
        yield transform_event(raw)
    logger.debug("Transformed %d events", n)
