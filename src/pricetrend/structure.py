"""Market structure, trendline slope, breakout and trend label."""

from __future__ import annotations

from collections.abc import Sequence

from pricetrend.models.bar import Bar
from pricetrend.models.pivot import Pivot
from pricetrend.models.trend import Breakout, MarketStructure, TrendLabel


def market_structure(highs: Sequence[Pivot], lows: Sequence[Pivot]) -> MarketStructure:
    """Compare the last two swing highs and lows.

    Higher high + higher low is an uptrend, lower high + lower low a
    downtrend, anything else sideways. Fewer than two pivots on either side
    is reported as NOT_ENOUGH_DATA.
    """
    if len(highs) < 2 or len(lows) < 2:
        return MarketStructure.NOT_ENOUGH_DATA

    h1, h2 = highs[-2].price, highs[-1].price
    l1, l2 = lows[-2].price, lows[-1].price
    if h2 > h1 and l2 > l1:
        return MarketStructure.UPTREND
    if h2 < h1 and l2 < l1:
        return MarketStructure.DOWNTREND
    return MarketStructure.SIDEWAYS


def trendline_slope(points: Sequence[Pivot]) -> float:
    """Raw price change per bar between the last two pivots; 0 if fewer."""
    if len(points) < 2:
        return 0.0
    p1, p2 = points[-2], points[-1]
    return (p2.price - p1.price) / max(1, p2.index - p1.index)


def breakout(bars: Sequence[Bar], highs: Sequence[Pivot], lows: Sequence[Pivot]) -> Breakout:
    """Whether the last close broke the most recent swing high or low."""
    if not bars:
        return Breakout()
    last_close = bars[-1].close
    return Breakout(
        bullish=bool(highs) and last_close > highs[-1].price,
        bearish=bool(lows) and last_close < lows[-1].price,
    )


def classify_trend_label(
    structure: MarketStructure,
    low_slope: float,
    high_slope: float,
    bullish: bool,
    bearish: bool,
) -> TrendLabel:
    """Combine breakout state, structure and slopes into a single label.

    A breakout or breakdown overrides the structure read.
    """
    if bullish:
        return TrendLabel.UPTREND_BREAKOUT
    if bearish:
        return TrendLabel.DOWNTREND_BREAKDOWN
    if structure is MarketStructure.UPTREND:
        return TrendLabel.STRONG_UPTREND if low_slope > 0 else TrendLabel.UPTREND
    if structure is MarketStructure.DOWNTREND:
        return TrendLabel.STRONG_DOWNTREND if high_slope < 0 else TrendLabel.DOWNTREND
    return TrendLabel.SIDEWAYS


def _recent_mean(points: Sequence[Pivot], count: int) -> float | None:
    recent = [p.price for p in points[-count:]] if count > 0 else []
    if not recent:
        return None
    return sum(recent) / len(recent)


def resistance_level(highs: Sequence[Pivot], count: int = 3) -> float | None:
    """Average price of the last ``count`` swing highs."""
    return _recent_mean(highs, count)


def support_level(lows: Sequence[Pivot], count: int = 3) -> float | None:
    """Average price of the last ``count`` swing lows."""
    return _recent_mean(lows, count)
