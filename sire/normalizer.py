"""
Event-type normalizer (rule cascade)
====================================

The EVTYPE column is typed by hand and holds several hundred spellings of
a few dozen event kinds ("TSTM WIND", "THUNDERSTORM WINDS/HAIL",
"Heavy Surf/High Surf", ...). This module collapses them into canonical
categories.

How it works:
1) `clean_label` uppercases the text and turns punctuation into single spaces.
2) `is_entry_error` rejects rows that are not events at all
   ("MONTHLY SUMMARY", "NO SEVERE WEATHER", ...).
3) `apply_cascade` runs an ordered list of (pattern, label) rules.
   A matching rule replaces the WHOLE working string with its label, and
   the next rule is tested against that new value.

Rule order matters. Specific, anchored rules come first; broad substring
rules come last and only see strings nothing earlier claimed. Some
patterns (WIND, SNOW, TORNADO, ...) appear more than once with different
labels: whichever position is reached first wins.

Patterns are case-sensitive and uppercase, so the Title-case labels are
not matched again later. The all-caps intermediate "HIGH" (from
"RECORD HIGH ...") is, and ends up in Heat.
"""

from __future__ import annotations
from dataclasses import dataclass
from functools import lru_cache, reduce
from typing import FrozenSet, List, Optional
import re

from .models import OTHER, UNCLASSIFIABLE

_NON_WORD_RE = re.compile(r"[^A-Z0-9_]+")
_SPACE_RE = re.compile(r"\s+")

# Anchored prefixes of rows that describe no event
_ENTRY_ERROR_RE = re.compile(r"^(?:SUMMARY|MONTHLY|NO |NONE|SEI|APACHE|SOUTH)|^\s*$")

@dataclass(frozen=True)
class Rule:
    """One step of the cascade: if `pattern` matches, the value becomes `label`."""
    pattern: re.Pattern
    label: str

    def apply(self, value: str) -> str:
        return self.label if self.pattern.search(value) else value

def _rule(pattern: str, label: str) -> Rule:
    return Rule(re.compile(pattern), label)

CASCADE: List[Rule] = [
    # -- anchored, specific
    _rule(r"^RECORD HIGH", "HIGH"),
    _rule(r"^AVALAN", "Avalanche"),
    _rule(r"^BLIZZARD|^GROUND BLIZZARD", "Blizzard"),
    _rule(r"^COASTAL|^TIDAL|^BEACH|^CSTL|^ASTRONOMICAL HIGH TIDE", "Coastal Flood"),
    _rule(r"^DAM ", "Dam Failure"),
    _rule(r"^FREEZING FOG|^ICE FOG", "Freezing Fog"),
    _rule(r"^DENSE FOG|^PATCHY DENSE FOG|^FOG", "Fog"),
    _rule(r"^DROUGHT|^EXCESSIVE DRY|^ABNORMALLY DRY", "Drought"),
    _rule(r"^DUST DEV", "Dust Devil"),
    _rule(r"^EXCESSIVE HEAT|^EXTREME HEAT|^RECORD HEAT|^HEAT WAVE", "Excessive Heat"),
    _rule(r"^EXTREME COLD|^EXTREME WIND ?CHILL|^RECORD COLD", "Extreme Cold"),
    _rule(r"^FLASH|^FLOOD FLASH", "Flash Flood"),
    _rule(r"^FUNNEL|^WALL CLOUD", "Funnel Cloud"),
    _rule(r"^HURRICANE|^TYPHOON", "Hurricane"),
    _rule(r"^TROPICAL STORM|^TROPICAL DEPRESSION", "Tropical Storm"),
    _rule(r"^ICE STORM|^GLAZE", "Ice Storm"),
    _rule(r"^LAKE ?EFFECT", "Lake-Effect Snow"),
    _rule(r"^LIGHTNING|^LIGNTNING|^LIGHTING", "Lightning"),
    _rule(r"^RIP CURRENT", "Rip Current"),
    _rule(r"^STORM SURGE|^STORM TIDE", "Storm Surge"),
    _rule(r"^TORN|^LANDSPOUT", "Tornado"),
    _rule(r"^WATERSPOUT|^WATER SPOUT|^WAYTERSPOUT", "Waterspout"),
    _rule(r"^VOLCANIC|^VOG", "Volcanic Ash"),
    _rule(r"^WINTER STORM", "Winter Storm"),
    _rule(r"^WINTER WEATHER|^WINTRY MIX|^WINTER MIX", "Winter Weather"),
    _rule(r"^HIGH WIND|^STRONG WIND", "High Wind"),
    _rule(r"^HEAVY SNOW|^EXCESSIVE SNOW|^RECORD SNOW|^SNOW SQUALL", "Heavy Snow"),
    # -- substring synonyms
    _rule(r"SURF|HIGH SEAS|ROUGH SEAS|HEAVY SEAS|HIGH WAVES|ROGUE WAVE|SWELLS", "High Surf"),
    _rule(r"THUNDER.*ST|TSTM|THUDERSTORM|TUNDERSTORM|THUNERSTORM", "Thunderstorm"),
    _rule(r"HAIL", "Hail"),
    _rule(r"COLD|ICE|ICY|WET|WINT|FREEZ|CHILL|COOL|FROST|HYPOTHERMIA|LOW TEMP|SLEET", "Cold"),
    _rule(r"SNOW", "Snow"),
    _rule(r"FLOOD|FLD|FLOOOD|RISING WATER|HIGH WATER", "Flood"),
    _rule(r"URBAN|SML STREAM|SMALL STREAM", "Urban Flood"),
    _rule(r"RAIN|PRECIP|SHOWER|DOWNPOUR", "Heavy Rain"),
    _rule(r"HEAT|WARM|HOT|^HIGH$|HIGH TEMP|RECORD TEMP|HYPERTHERMIA", "Heat"),
    _rule(r"MICRO|DOWNBURST|BURST", "Microburst"),
    _rule(r"DRY|DRIE|DROUGHT|LOW RAINFALL", "Drought"),
    _rule(r"SLIDE|MUD|LANDSL|ROCK ?FALL|DEBRIS|EROSION|SLUMP", "Landslide"),
    _rule(r"LOW TIDE|BLOW ?OUT TIDE", "Low Tide"),
    _rule(r"SURGE|STORM TIDE|HIGH TIDE", "Storm Surge"),
    _rule(r"TROPICAL|HURRICANE|TYPHOON|REMNANTS OF", "Hurricane"),
    # -- broad catch-alls
    _rule(r"TORNADO|TORNDAO", "Tornado"),
    _rule(r"LIGHTN|LIGNTN", "Lightning"),
    _rule(r"WIND|DUST|GUST|TURBULENCE|WND", "Wind"),
    _rule(r"FIRE|SMOKE", "Fire"),
    _rule(r"MARINE|DROWN|MISHAP|ACCIDENT|SEAS", "Marine Accident"),
    _rule(r"VOLCAN", "Volcanic Ash"),
    _rule(r"^[A-Z]{2}", OTHER),
]

# Labels the cascade can hand back (upper-case intermediates excluded)
CATEGORIES: FrozenSet[str] = frozenset(r.label for r in CASCADE if not r.label.isupper())

def clean_label(raw: Optional[str]) -> str:
    """Uppercase, trim, and reduce punctuation/whitespace runs to one space.

    Example: " Heavy Wind / High Surf   " -> "HEAVY WIND HIGH SURF"
    """
    if raw is None:
        return ""
    s = str(raw).upper().strip()
    s = _NON_WORD_RE.sub(" ", s)
    s = _SPACE_RE.sub(" ", s)
    return s.strip()

def is_entry_error(cleaned: str) -> bool:
    """True for rows like "MONTHLY SUMMARY" or blanks that are not events."""
    return _ENTRY_ERROR_RE.search(cleaned) is not None

def apply_cascade(cleaned: str, rules: Optional[List[Rule]] = None) -> str:
    """Run every rule in order over one working value."""
    return reduce(lambda value, rule: rule.apply(value), rules or CASCADE, cleaned)

@lru_cache(maxsize=None)
def normalize_event_type(raw: Optional[str]) -> str:
    """Map a raw EVTYPE string to a canonical category.

    Always returns a label from CATEGORIES or UNCLASSIFIABLE; never raises.
    Anything the cascade leaves as a non-label (e.g. text starting with a
    digit) is unclassifiable.

    Not idempotent: "SMALL STREAM" gives "Urban Flood", but feeding
    "Urban Flood" back in gives "Flood".
    """
    cleaned = clean_label(raw)
    if is_entry_error(cleaned):
        return UNCLASSIFIABLE
    out = apply_cascade(cleaned)
    return out if out in CATEGORIES else UNCLASSIFIABLE
