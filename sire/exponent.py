"""
Damage exponent codes
=====================

Storm event damage is recorded as a magnitude plus a one-character code:
`PROPDMG=25.0, PROPDMGEXP="K"` means US$ 25,000.

Codes seen in the wild include digits, `+`, `-` and `?`. Only the letter
codes below carry a meaning; everything else scales by 1.
"""

from __future__ import annotations
from typing import Optional

EXPONENT_MULTIPLIERS = {
    "H": 100,
    "T": 1_000,
    "K": 1_000,
    "M": 1_000_000,
    "B": 1_000_000_000,
}

def resolve_exponent(code: Optional[str]) -> int:
    """Return the multiplier for an exponent code (case-insensitive).

    Unknown, empty or missing codes give 1.
    """
    if not code:
        return 1
    return EXPONENT_MULTIPLIERS.get(str(code).strip().upper(), 1)

def scale_damage(magnitude: Optional[float], code: Optional[str]) -> Optional[float]:
    """Scale a damage magnitude by its exponent code.

    Scaling only happens when both parts are present; otherwise the
    magnitude is returned as-is (None stays None).
    """
    if magnitude is None:
        return None
    if code is None or not str(code).strip():
        return magnitude
    return magnitude * resolve_exponent(code)
