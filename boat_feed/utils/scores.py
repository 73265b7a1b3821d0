"""
Score helpers: decay curves and time utilities used by the scoring stage.
"""

import math
from datetime import datetime, timezone
from typing import Optional


def days_since(date_str: str, now: Optional[datetime] = None) -> Optional[float]:
    """Fractional days since an ISO date string, or None when it cannot be parsed."""
    try:
        dt = datetime.fromisoformat(date_str.replace("Z", "+00:00"))
    except (AttributeError, ValueError):
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    now = now or datetime.now(timezone.utc)
    return (now - dt).total_seconds() / 86400


def gaussian_fit(value: float, target: float, sigma: float, peak: float) -> float:
    """peak * exp(-(value - target)^2 / (2 * sigma^2)); maximal at value == target."""
    if sigma <= 0:
        return peak if value == target else 0.0
    diff = value - target
    return peak * math.exp(-(diff * diff) / (2 * sigma * sigma))


def exponential_decay(distance: float, scale: float, peak: float) -> float:
    """peak * exp(-|distance| / scale)."""
    return peak * math.exp(-abs(distance) / scale)


def rank_weighted(index: int, top: float, falloff: float) -> float:
    """Bonus for a hit at position index of a ranked list: top / (1 + index * falloff).

    Never reaches 0, so a low rank still beats an unlisted value.
    """
    return top / (1 + index * falloff)
