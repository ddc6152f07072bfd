"""Tests for record / DataFrame conversion."""

import math
from datetime import datetime, timezone

import pandas as pd
import pytest

from pricetrend.errors import PriceTrendError, PriceTrendErrorCode
from pricetrend.frames import bar_from_record, bars_from_records, bars_to_df, df_to_bars

UTC = timezone.utc


class TestRecords:
    def test_iso_string(self):
        bar = bar_from_record({
            "time": "2024-01-02T00:00:00.000Z",
            "open": 100, "high": 101, "low": 99, "close": 100.5, "volume": 1200,
        })
        assert bar.time == datetime(2024, 1, 2, tzinfo=UTC)
        assert bar.close == 100.5
        assert bar.volume == 1200.0

    def test_naive_string_is_utc(self):
        bar = bar_from_record({"time": "2024-01-02", "open": 1, "high": 1, "low": 1, "close": 1})
        assert bar.time == datetime(2024, 1, 2, tzinfo=UTC)
        assert bar.time.tzinfo is not None

    def test_epoch_millis(self):
        bar = bar_from_record({"time": 1704153600000, "open": 1, "high": 1, "low": 1, "close": 1})
        assert bar.time == datetime(2024, 1, 2, tzinfo=UTC)

    def test_missing_volume_is_zero(self):
        rows = [
            {"time": "2024-01-02", "open": 1, "high": 1, "low": 1, "close": 1},
            {"time": "2024-01-03", "open": 1, "high": 1, "low": 1, "close": 1, "volume": None},
        ]
        assert [b.volume for b in bars_from_records(rows)] == [0.0, 0.0]

    def test_preserves_order(self):
        rows = [
            {"time": "2024-01-03", "open": 1, "high": 1, "low": 1, "close": 3},
            {"time": "2024-01-02", "open": 1, "high": 1, "low": 1, "close": 2},
        ]
        assert [b.close for b in bars_from_records(rows)] == [3.0, 2.0]

    @pytest.mark.parametrize(
        "record",
        [
            {"open": 1, "high": 1, "low": 1, "close": 1},
            {"time": "2024-01-02", "open": 1, "high": 1, "low": 1},
            {"time": "not a date", "open": 1, "high": 1, "low": 1, "close": 1},
            {"time": "2024-01-02", "open": "x", "high": 1, "low": 1, "close": 1},
            {"time": None, "open": 1, "high": 1, "low": 1, "close": 1},
        ],
    )
    def test_malformed(self, record):
        with pytest.raises(PriceTrendError) as exc:
            bar_from_record(record)
        assert exc.value.code == PriceTrendErrorCode.INVALID_RECORD


class TestDataFrames:
    def test_round_trip(self, daily_bars):
        df = bars_to_df(daily_bars)
        assert list(df.columns) == ["time", "open", "high", "low", "close", "volume"]
        assert len(df) == len(daily_bars)
        assert df_to_bars(df) == daily_bars

    def test_empty(self):
        df = bars_to_df([])
        assert len(df) == 0
        assert df_to_bars(df) == []

    def test_datetime_index(self):
        df = pd.DataFrame(
            {"open": [1.0], "high": [2.0], "low": [0.5], "close": [1.5], "volume": [10.0]},
            index=pd.DatetimeIndex([datetime(2024, 1, 2, tzinfo=UTC)], name="date"),
        )
        bars = df_to_bars(df)
        assert bars[0].time == datetime(2024, 1, 2, tzinfo=UTC)
        assert bars[0].close == 1.5

    def test_missing_column(self):
        df = pd.DataFrame({"time": ["2024-01-02"], "open": [1.0]})
        with pytest.raises(PriceTrendError):
            df_to_bars(df)

    def test_nan_volume_is_zero(self):
        df = pd.DataFrame({
            "time": ["2024-01-02"], "open": [1.0], "high": [1.0], "low": [1.0],
            "close": [1.0], "volume": [math.nan],
        })
        assert df_to_bars(df)[0].volume == 0.0
