"""Technical indicator calculations.

All functions operate on contiguous numeric arrays and return index-aligned
lists where ``None`` marks an index that is not yet computable. Missing
values are never coerced to 0.

EMA is seeded with the simple average of the first ``period`` values
(TradingView convention) and RSI uses Wilder smoothing.
"""

from __future__ import annotations

import statistics
from collections.abc import Sequence

from pricetrend.errors import PriceTrendError, PriceTrendErrorCode
from pricetrend.models.bar import Bar
from pricetrend.models.frame import MACDResult, Series


def _check_period(period: int, name: str = "period") -> None:
    if period < 1:
        raise PriceTrendError(
            f"{name} must be >= 1, got {period}",
            code=PriceTrendErrorCode.INVALID_PERIOD,
        )


# =============================================================================
# SPARSE SERIES HELPERS
# =============================================================================


def compact(values: Sequence[float | None]) -> tuple[list[float], list[int]]:
    """Drop ``None`` entries, remembering where each kept value came from."""
    dense: list[float] = []
    indices: list[int] = []
    for i, v in enumerate(values):
        if v is not None:
            dense.append(v)
            indices.append(i)
    return dense, indices


def scatter(dense: Sequence[float | None], indices: Sequence[int], length: int) -> Series:
    """Place ``dense[j]`` at ``indices[j]`` in a ``None``-filled list of ``length``."""
    out: Series = [None] * length
    for value, idx in zip(dense, indices):
        out[idx] = value
    return out


# =============================================================================
# MOVING AVERAGES
# =============================================================================


def ema(values: Sequence[float], period: int) -> Series:
    """Exponential moving average with an SMA seed at ``period - 1``."""
    _check_period(period)
    n = len(values)
    out: Series = [None] * n
    if n < period:
        return out

    prev = sum(values[:period]) / period
    out[period - 1] = prev
    k = 2 / (period + 1)
    for i in range(period, n):
        prev = (values[i] - prev) * k + prev
        out[i] = prev
    return out


# =============================================================================
# MOMENTUM
# =============================================================================


def _rsi_value(avg_gain: float, avg_loss: float) -> float:
    if avg_loss == 0:
        return 100.0
    return 100 - 100 / (1 + avg_gain / avg_loss)


def wilder_rsi(values: Sequence[float], period: int = 14) -> Series:
    """Relative Strength Index with Wilder smoothing.

    The first value lands at index ``period``; zero average loss reads 100.
    """
    _check_period(period)
    n = len(values)
    out: Series = [None] * n
    if n <= period:
        return out

    gains = [0.0] * n
    losses = [0.0] * n
    for i in range(1, n):
        change = values[i] - values[i - 1]
        gains[i] = change if change > 0 else 0.0
        losses[i] = -change if change < 0 else 0.0

    avg_gain = sum(gains[1:period + 1]) / period
    avg_loss = sum(losses[1:period + 1]) / period
    out[period] = _rsi_value(avg_gain, avg_loss)

    for i in range(period + 1, n):
        avg_gain = (avg_gain * (period - 1) + gains[i]) / period
        avg_loss = (avg_loss * (period - 1) + losses[i]) / period
        out[i] = _rsi_value(avg_gain, avg_loss)
    return out


def macd(
    values: Sequence[float],
    fast: int = 12,
    slow: int = 26,
    signal: int = 9,
) -> MACDResult:
    """MACD (fast EMA - slow EMA), signal EMA and histogram.

    The signal EMA runs over the defined MACD values only and is scattered
    back onto their original indices.
    """
    for name, p in (("fast", fast), ("slow", slow), ("signal", signal)):
        _check_period(p, name)
    if fast >= slow:
        raise PriceTrendError(
            f"fast period ({fast}) must be shorter than slow period ({slow})",
            code=PriceTrendErrorCode.INVALID_PERIOD,
        )

    n = len(values)
    if n < slow:
        return MACDResult([None] * n, [None] * n, [None] * n)

    fast_ema = ema(values, fast)
    slow_ema = ema(values, slow)
    macd_line: Series = [
        f - s if f is not None and s is not None else None
        for f, s in zip(fast_ema, slow_ema)
    ]

    dense, indices = compact(macd_line)
    signal_line = scatter(ema(dense, signal), indices, n)

    histogram: Series = [
        m - s if m is not None and s is not None else None
        for m, s in zip(macd_line, signal_line)
    ]
    return MACDResult(macd_line, signal_line, histogram)


def ema_alignment(latest: dict[int, float | None]) -> tuple[bool, bool]:
    """Return ``(bullish, bearish)`` EMA stacking for the latest values.

    Bullish when shorter EMAs sit strictly above longer ones (9>20>50>200),
    bearish when strictly below. Any undefined EMA gives ``(False, False)``.
    """
    ordered = [latest[p] for p in sorted(latest)]
    if len(ordered) < 2 or any(v is None for v in ordered):
        return False, False
    pairs = list(zip(ordered, ordered[1:]))
    bullish = all(a > b for a, b in pairs)
    bearish = all(a < b for a, b in pairs)
    return bullish, bearish


# =============================================================================
# VOLATILITY & VOLUME
# =============================================================================


def volatility(bars: Sequence[Bar]) -> float:
    """Population standard deviation of simple close-to-close returns.

    A zero previous close is read as 1 in both the change and the divisor.
    """
    if len(bars) < 2:
        return 0.0
    returns = []
    for prev, cur in zip(bars, bars[1:]):
        base = prev.close or 1.0
        returns.append((cur.close - base) / base)
    return statistics.pstdev(returns)


def average_volume(bars: Sequence[Bar]) -> float:
    """Arithmetic mean volume; 0 for no bars."""
    if not bars:
        return 0.0
    return sum(b.volume or 0.0 for b in bars) / len(bars)
