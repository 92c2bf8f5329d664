"""
Data model (RawEvent / CleanedEvent / CategorySummary)
======================================================

Each row of the storm events file is converted into a `RawEvent`.
The pipeline then produces one `CleanedEvent` per row and finally one
`CategorySummary` per canonical category.

All three are immutable (`frozen=True`) so that:
- loaded records cannot be changed by the pipeline, and
- summaries handed to the report layer stay exactly as aggregated.
"""

from dataclasses import dataclass
from typing import Optional

# Sentinel categories produced by the normalizer
UNCLASSIFIABLE = "Unclassifiable"
OTHER = "Other"

@dataclass(frozen=True)
class RawEvent:
    """One storm event record, as read from the dataset.

    Damage magnitudes come with a one-character exponent code
    (`K`, `M`, ...). A missing value is stored as None.
    """
    event_id: int
    event_type: str
    fatalities: Optional[int]
    injuries: Optional[int]
    prop_dmg: Optional[float]
    prop_dmg_exp: str
    crop_dmg: Optional[float]
    crop_dmg_exp: str
    # carried through unchanged
    begin_date: str = ""
    state: str = ""

@dataclass(frozen=True)
class CleanedEvent:
    """A RawEvent with a canonical category and damage scaled to US$."""
    event_id: int
    category: str
    fatalities: Optional[int]
    injuries: Optional[int]
    prop_damage_usd: Optional[float]
    crop_damage_usd: Optional[float]

@dataclass(frozen=True)
class CategorySummary:
    """Summed impact of all events in one canonical category."""
    category: str
    events: int
    fatalities: int
    injuries: int
    prop_damage_usd: float
    crop_damage_usd: float

    @property
    def total_harmed(self) -> int:
        return self.fatalities + self.injuries

    @property
    def total_damage_usd(self) -> float:
        return self.prop_damage_usd + self.crop_damage_usd
