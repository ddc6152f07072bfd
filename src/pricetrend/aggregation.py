"""Calendar bucket aggregation and display windowing.

Bars are folded into TradingView-style calendar buckets computed in UTC:
weeks start on Monday, months on the 1st, half-years on Jan 1 / Jul 1 and
years on Jan 1. Day and overall timeframes pass bars through unchanged.
"""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timedelta, timezone

from pricetrend.config import Timeframe
from pricetrend.models.bar import Bar

# Number of most recent aggregated bars shown per timeframe (None = all).
DISPLAY_CAPS: dict[Timeframe, int | None] = {
    Timeframe.DAY: 200,
    Timeframe.WEEK: 200,
    Timeframe.MONTH: 200,
    Timeframe.HALF_YEAR: 180,
    Timeframe.YEAR: 260,
    Timeframe.OVERALL: None,
}


def as_utc(ts: datetime) -> datetime:
    """Return ``ts`` as an aware UTC datetime (naive values are taken as UTC)."""
    if ts.tzinfo is None:
        return ts.replace(tzinfo=timezone.utc)
    return ts.astimezone(timezone.utc)


def bucket_start(ts: datetime, timeframe: Timeframe | str) -> datetime:
    """Start of the aggregation period containing ``ts`` (UTC midnight)."""
    timeframe = Timeframe.parse(timeframe)
    day = as_utc(ts).replace(hour=0, minute=0, second=0, microsecond=0)

    if timeframe is Timeframe.WEEK:
        return day - timedelta(days=day.weekday())
    if timeframe is Timeframe.MONTH:
        return day.replace(day=1)
    if timeframe is Timeframe.HALF_YEAR:
        return day.replace(month=1 if day.month <= 6 else 7, day=1)
    if timeframe is Timeframe.YEAR:
        return day.replace(month=1, day=1)
    return day


def next_bucket_start(key: datetime, timeframe: Timeframe | str) -> datetime:
    """Start of the bucket following ``key`` (exclusive end of its span)."""
    timeframe = Timeframe.parse(timeframe)
    key = bucket_start(key, timeframe)

    if timeframe is Timeframe.WEEK:
        return key + timedelta(weeks=1)
    if timeframe is Timeframe.MONTH:
        return _add_months(key, 1)
    if timeframe is Timeframe.HALF_YEAR:
        return _add_months(key, 6)
    if timeframe is Timeframe.YEAR:
        return key.replace(year=key.year + 1)
    return key + timedelta(days=1)


def _add_months(d: datetime, months: int) -> datetime:
    """Shift a 1st-of-month datetime forward by whole months."""
    total = d.month - 1 + months
    return d.replace(year=d.year + total // 12, month=total % 12 + 1)


def sort_bars(bars: list[Bar]) -> list[Bar]:
    """Stable sort by time ascending; ties keep input order."""
    return sorted(bars, key=lambda b: as_utc(b.time))


def aggregate(bars: list[Bar], timeframe: Timeframe | str) -> list[Bar]:
    """Fold bars into one synthetic bar per calendar bucket.

    Within a bucket: open of the first bar, close of the last, max high,
    min low, summed volume, and ``time`` set to the bucket key. Buckets are
    returned in ascending key order.
    """
    timeframe = Timeframe.parse(timeframe)
    if not bars:
        return []

    ordered = sort_bars(bars)
    if timeframe in (Timeframe.DAY, Timeframe.OVERALL):
        return ordered

    buckets: dict[datetime, Bar] = {}
    for bar in ordered:
        key = bucket_start(bar.time, timeframe)
        existing = buckets.get(key)
        if existing is None:
            buckets[key] = replace(bar, time=key, volume=bar.volume or 0.0)
        else:
            buckets[key] = replace(
                existing,
                high=max(existing.high, bar.high),
                low=min(existing.low, bar.low),
                close=bar.close,
                volume=existing.volume + (bar.volume or 0.0),
            )

    return [buckets[key] for key in sorted(buckets)]


def display_count(length: int, timeframe: Timeframe | str) -> int:
    """Number of most recent aggregated bars to display."""
    cap = DISPLAY_CAPS[Timeframe.parse(timeframe)]
    if cap is None:
        return length
    return min(cap, length)


def display_window(bars: list[Bar], timeframe: Timeframe | str) -> list[Bar]:
    """The most recent ``display_count`` bars of an aggregated sequence."""
    start = max(0, len(bars) - display_count(len(bars), timeframe))
    return bars[start:]
