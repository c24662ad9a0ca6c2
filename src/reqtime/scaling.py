"""Bar chart scaling for timing output."""

from __future__ import annotations

import math

BAR_GLYPH = "█"

# (upper bound in ms, divisor); totals above the last bound use FALLBACK_DIVISOR
SCALE_STEPS: tuple[tuple[int, float], ...] = (
    (100, 1.0),
    (500, 5.0),
    (1_000, 10.0),
    (5_000, 50.0),
    (10_000, 100.0),
)
FALLBACK_DIVISOR = 1000.0


def scale_factor(total_ms: int) -> float:
    """Pick the divisor that keeps bars for ``total_ms`` a readable width."""
    for upper_bound, divisor in SCALE_STEPS:
        if total_ms <= upper_bound:
            return divisor
    return FALLBACK_DIVISOR


def event_bar(duration_ms: int, divisor: float) -> str:
    """Render a bar of ``floor(duration_ms / divisor)`` blocks."""
    return BAR_GLYPH * math.floor(duration_ms / divisor)
