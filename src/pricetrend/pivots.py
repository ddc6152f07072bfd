"""Swing pivot detection (Pine Script ``pivothigh`` / ``pivotlow`` semantics).

A bar is a pivot high when its high is strictly greater than the highs of
the ``left`` bars before it and the ``right`` bars after it; pivot lows
mirror this with strictly lower lows. Pivots are only reported where the
full window fits, i.e. for ``left <= i < n - right``.

Run these on the full aggregated sequence, not the display window, so the
result does not depend on how much history is shown.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence

from pricetrend.errors import PriceTrendError, PriceTrendErrorCode
from pricetrend.models.bar import Bar
from pricetrend.models.pivot import Pivot


def _find_pivots(
    bars: Sequence[Bar],
    left: int,
    right: int,
    price: Callable[[Bar], float],
    beats: Callable[[float, float], bool],
) -> list[Pivot]:
    if left < 0 or right < 0:
        raise PriceTrendError(
            f"Pivot window must be non-negative, got left={left} right={right}",
            code=PriceTrendErrorCode.INVALID_PERIOD,
        )

    n = len(bars)
    out: list[Pivot] = []
    for i in range(left, n - right):
        candidate = price(bars[i])
        neighbours = (
            *(bars[i - j] for j in range(1, left + 1)),
            *(bars[i + j] for j in range(1, right + 1)),
        )
        if all(beats(candidate, price(b)) for b in neighbours):
            out.append(Pivot(index=i, price=candidate))
    return out


def pivot_high(bars: Sequence[Bar], left: int = 2, right: int = 2) -> list[Pivot]:
    """Swing highs in ascending index order."""
    return _find_pivots(bars, left, right, lambda b: b.high, lambda c, o: c > o)


def pivot_low(bars: Sequence[Bar], left: int = 2, right: int = 2) -> list[Pivot]:
    """Swing lows in ascending index order."""
    return _find_pivots(bars, left, right, lambda b: b.low, lambda c, o: c < o)
