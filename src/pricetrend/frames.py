"""Conversions between API records, pandas DataFrames and Bars."""

from __future__ import annotations

import numbers
from collections.abc import Iterable, Mapping
from datetime import datetime, timezone
from typing import Any

import pandas as pd

from pricetrend.errors import PriceTrendError, PriceTrendErrorCode
from pricetrend.models.bar import Bar

BAR_COLUMNS = ["time", "open", "high", "low", "close", "volume"]


def _parse_time(value: Any) -> datetime:
    """ISO string, datetime, pandas Timestamp or epoch milliseconds -> UTC datetime."""
    if isinstance(value, bool):
        raise ValueError(f"not a timestamp: {value!r}")
    if isinstance(value, numbers.Real):
        ts = pd.Timestamp(value, unit="ms", tz="UTC")
    else:
        ts = pd.Timestamp(value)
    if pd.isna(ts):
        raise ValueError(f"not a timestamp: {value!r}")
    if ts.tzinfo is None:
        ts = ts.tz_localize(timezone.utc)
    return ts.tz_convert(timezone.utc).to_pydatetime()


def bar_from_record(record: Mapping[str, Any]) -> Bar:
    """Build a Bar from a ``{time, open, high, low, close, volume}`` mapping.

    A missing or null volume is read as 0.
    """
    try:
        volume = record.get("volume")
        return Bar(
            time=_parse_time(record["time"]),
            open=float(record["open"]),
            high=float(record["high"]),
            low=float(record["low"]),
            close=float(record["close"]),
            volume=float(volume) if volume is not None and not pd.isna(volume) else 0.0,
        )
    except (KeyError, TypeError, ValueError) as e:
        raise PriceTrendError(
            f"Malformed bar record {dict(record)!r}: {e}",
            code=PriceTrendErrorCode.INVALID_RECORD,
        ) from e


def bars_from_records(records: Iterable[Mapping[str, Any]]) -> list[Bar]:
    """Convert API records (e.g. decoded JSON) into Bars, preserving order."""
    return [bar_from_record(r) for r in records]


def bars_to_df(bars: list[Bar]) -> pd.DataFrame:
    if not bars:
        return pd.DataFrame(columns=BAR_COLUMNS)

    records = [
        {
            "time": b.time,
            "open": float(b.open),
            "high": float(b.high),
            "low": float(b.low),
            "close": float(b.close),
            "volume": float(b.volume),
        }
        for b in bars
    ]
    return pd.DataFrame(records, columns=BAR_COLUMNS)


def df_to_bars(df: pd.DataFrame) -> list[Bar]:
    """Convert a DataFrame with ``time`` (or a DatetimeIndex) and OHLCV columns."""
    if "time" not in df.columns and isinstance(df.index, pd.DatetimeIndex):
        df = df.reset_index(names="time")

    missing = [c for c in BAR_COLUMNS if c not in df.columns and c != "volume"]
    if missing:
        raise PriceTrendError(
            f"DataFrame missing columns: {missing}",
            code=PriceTrendErrorCode.INVALID_RECORD,
        )
    return bars_from_records(df.to_dict("records"))
