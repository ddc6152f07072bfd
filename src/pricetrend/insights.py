"""Rule-based observations and metric-card classifications.

Every sentence is produced from a fixed template selected by threshold
checks on the latest indicator values and the pivot-based structure read.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass, field

from pricetrend.models.bar import Bar
from pricetrend.models.trend import MarketStructure
from pricetrend.pivots import pivot_high, pivot_low
from pricetrend.structure import (
    breakout,
    market_structure,
    resistance_level,
    support_level,
    trendline_slope,
)

NOT_ENOUGH_DATA = "Not enough data for trend analysis."


@dataclass
class InsightContext:
    """Latest indicator readings the insight rules branch on.

    Attributes:
        latest_rsi: Last RSI value, or None when undefined.
        latest_macd: Last MACD line value.
        latest_signal: Last MACD signal value.
        ema_up: Short EMAs strictly above long EMAs.
        ema_down: Short EMAs strictly below long EMAs.
        above_ema200: Last close above the long EMA.
        below_ema200: Last close below the long EMA.
        volatility: Standard deviation of returns (fraction, not percent).
        bars: Full aggregated series the trend bullets are read from.
        left: Pivot look-back.
        right: Pivot look-ahead.
        ema_periods: EMA periods, shortest first, named in the alignment text.
    """

    latest_rsi: float | None = None
    latest_macd: float | None = None
    latest_signal: float | None = None
    ema_up: bool = False
    ema_down: bool = False
    above_ema200: bool = False
    below_ema200: bool = False
    volatility: float = 0.0
    bars: Sequence[Bar] = field(default_factory=list)
    left: int = 2
    right: int = 2
    ema_periods: tuple[int, ...] = (9, 20, 50, 200)

    @property
    def has_macd(self) -> bool:
        return self.latest_macd is not None and self.latest_signal is not None


# =============================================================================
# TREND BULLETS
# =============================================================================


def trend_insights(bars: Sequence[Bar], left: int = 2, right: int = 2) -> list[str]:
    """Structure, trendline, breakout and support/resistance bullets."""
    if len(bars) < max(left, right) + 3:
        return [NOT_ENOUGH_DATA]

    highs = pivot_high(bars, left, right)
    lows = pivot_low(bars, left, right)
    structure = market_structure(highs, lows)
    low_slope = trendline_slope(lows)
    high_slope = trendline_slope(highs)
    brk = breakout(bars, highs, lows)

    insights: list[str] = []
    if structure is MarketStructure.UPTREND:
        insights.append("Market structure: Higher Highs & Higher Lows → Uptrend.")
    elif structure is MarketStructure.DOWNTREND:
        insights.append("Market structure: Lower Highs & Lower Lows → Downtrend.")
    else:
        insights.append("Market structure: Mixed → Sideways / Consolidation.")

    if low_slope > 0:
        insights.append("Swing lows form a rising trendline → buyers defending dips.")
    if high_slope < 0:
        insights.append("Swing highs form a falling trendline → sellers controlling rallies.")
    if low_slope == 0 and high_slope == 0:
        insights.append("Trendlines are flat → range-bound / sideways market.")

    if brk.bullish:
        insights.append(
            "Bullish breakout: price closed above recent swing high → potential continuation."
        )
    if brk.bearish:
        insights.append(
            "Bearish breakdown: price closed below recent swing low → "
            "potential bearish continuation."
        )

    resistance = resistance_level(highs)
    if resistance:
        insights.append(f"Nearby resistance (avg recent highs): {resistance:.2f}")
    support = support_level(lows)
    if support:
        insights.append(f"Nearby support (avg recent lows): {support:.2f}")

    return insights


# =============================================================================
# SCORING
# =============================================================================


def directional_score(ctx: InsightContext) -> int:
    """Weighted bullish/bearish tally of the latest readings."""
    score = 0
    if ctx.ema_up:
        score += 3
    if ctx.has_macd and ctx.latest_macd > ctx.latest_signal:
        score += 2
    if ctx.latest_rsi is not None and ctx.latest_rsi > 55:
        score += 1
    if ctx.above_ema200:
        score += 2
    if ctx.ema_down:
        score -= 3
    if ctx.has_macd and ctx.latest_macd < ctx.latest_signal:
        score -= 2
    if ctx.latest_rsi is not None and ctx.latest_rsi < 45:
        score -= 1
    if ctx.below_ema200:
        score -= 2
    return score


def overall_bias(score: int) -> str:
    if score >= 6:
        return "Overall: Strong Bullish bias."
    if score >= 3:
        return "Overall: Bullish bias."
    if score <= -6:
        return "Overall: Strong Bearish bias."
    if score <= -3:
        return "Overall: Bearish bias."
    return "Overall: Sideways / Neutral — wait for clearer signals."


# =============================================================================
# FULL INSIGHT LIST
# =============================================================================


def _rsi_sentence(rsi: float) -> str:
    if rsi > 80:
        return f"RSI {rsi:.2f}: Strongly overbought — high chance of pullback or consolidation."
    if rsi > 70:
        return f"RSI {rsi:.2f}: Overbought — expect possible sideways or minor pullback."
    if rsi > 50:
        return f"RSI {rsi:.2f}: Bullish momentum."
    if rsi >= 30:
        return f"RSI {rsi:.2f}: Bearish momentum / weakening."
    return f"RSI {rsi:.2f}: Oversold — bounce or reversal possible."


def _macd_sentence(m: float, s: float) -> str:
    if m > s and m > 0:
        return f"MACD {m:.4f} > Signal {s:.4f}: Bullish momentum."
    if m > s and m < 0:
        return (
            f"MACD {m:.4f} > Signal {s:.4f}: "
            "Bullish crossover but still below zero (early reversal)."
        )
    if m < s and m > 0:
        return f"MACD {m:.4f} < Signal {s:.4f}: Momentum weakening — watch for pullback."
    return f"MACD {m:.4f} < Signal {s:.4f}: Bearish momentum."


def _volatility_sentence(vol: float) -> str:
    pct = vol * 100
    if math.isnan(pct):
        pct = 0.0
    if pct < 1:
        return f"Volatility low ({pct:.2f}%) — consolidation likely."
    if pct < 2:
        return f"Volatility moderate ({pct:.2f}%)."
    return f"Volatility high ({pct:.2f}%) — expect larger moves."


def build_insights(ctx: InsightContext) -> list[str]:
    """Ordered observations ending with a single "Overall" bias sentence."""
    insights: list[str] = []

    if ctx.latest_rsi is not None:
        insights.append(_rsi_sentence(ctx.latest_rsi))

    if ctx.has_macd:
        insights.append(_macd_sentence(ctx.latest_macd, ctx.latest_signal))

    periods = [str(p) for p in ctx.ema_periods]
    if ctx.ema_up:
        insights.append(f"EMA alignment: {'>'.join(periods)} — bullish alignment.")
    elif ctx.ema_down:
        insights.append(f"EMA alignment: {'<'.join(periods)} — bearish alignment.")
    else:
        insights.append("EMA alignment: Mixed across timeframes.")

    long_ema = f"EMA{ctx.ema_periods[-1]}"
    if ctx.above_ema200:
        insights.append(f"Price is above {long_ema} — long-term bias: bullish.")
    if ctx.below_ema200:
        insights.append(f"Price is below {long_ema} — long-term bias: bearish.")

    insights.append(_volatility_sentence(ctx.volatility))
    insights.extend(trend_insights(ctx.bars, ctx.left, ctx.right))
    insights.append(overall_bias(directional_score(ctx)))
    return insights


# =============================================================================
# METRIC CARDS
# =============================================================================


def ema_status(close: float | None, ema_value: float | None) -> str:
    """Close position relative to an EMA: Above, Below or Neutral."""
    if close is None or ema_value is None:
        return "Neutral"
    if close > ema_value:
        return "Above"
    if close < ema_value:
        return "Below"
    return "Neutral"


def rsi_zone(rsi: float | None) -> str | None:
    if rsi is None:
        return None
    if rsi > 70:
        return "Overbought"
    if rsi < 30:
        return "Oversold"
    return "Neutral"


def macd_bias(macd_value: float | None, signal_value: float | None) -> str | None:
    if macd_value is None or signal_value is None:
        return None
    if macd_value > signal_value:
        return "Bullish"
    if macd_value < signal_value:
        return "Bearish"
    return "Neutral"


def volatility_level(vol: float) -> str:
    pct = vol * 100
    if pct < 1:
        return "Low"
    if pct < 2:
        return "Medium"
    return "High"


def volume_level(avg_volume: float, threshold: float = 50_000.0) -> str:
    return "High" if avg_volume > threshold else "Low"
