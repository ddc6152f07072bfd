"""Tests for bar quality validation."""

from datetime import datetime, timedelta, timezone

from pricetrend.models.bar import Bar
from pricetrend.quality import validate_bars


def _make_bar(ts: datetime, close: float = 150.0, **kwargs) -> Bar:
    defaults = dict(
        time=ts, open=150.0, high=151.0, low=149.0,
        close=close, volume=10000.0,
    )
    defaults.update(kwargs)
    return Bar(**defaults)


class TestValidateBars:
    def test_empty(self):
        result = validate_bars([])
        assert not result.passed
        assert result.failed_checks[0].name == "not_empty"

    def test_valid(self, daily_bars):
        assert validate_bars(daily_bars).passed

    def test_unordered_is_fine(self, daily_bars):
        assert validate_bars(daily_bars[::-1]).passed

    def test_nan_detected(self):
        bars = [_make_bar(datetime(2024, 1, 15, tzinfo=timezone.utc), close=float("nan"))]
        result = validate_bars(bars)
        no_nulls = next(c for c in result.checks if c.name == "no_nulls")
        assert not no_nulls.passed

    def test_negative_volume(self):
        bars = [_make_bar(datetime(2024, 1, 15, tzinfo=timezone.utc), volume=-100.0)]
        result = validate_bars(bars)
        vol_check = next(c for c in result.checks if c.name == "volume_sanity")
        assert not vol_check.passed

    def test_close_above_high(self):
        bars = [_make_bar(datetime(2024, 1, 15, tzinfo=timezone.utc), close=152.0)]
        result = validate_bars(bars)
        ohlc_check = next(c for c in result.checks if c.name == "ohlc_consistency")
        assert not ohlc_check.passed

    def test_high_below_low(self):
        bar = Bar(
            time=datetime(2024, 1, 15, tzinfo=timezone.utc),
            open=150.0, high=149.0, low=151.0,  # high < low!
            close=150.0, volume=10000.0,
        )
        assert not validate_bars([bar]).passed

    def test_duplicate_timestamps(self):
        base = datetime(2024, 1, 15, tzinfo=timezone.utc)
        bars = [_make_bar(base), _make_bar(base + timedelta(days=1)), _make_bar(base)]
        result = validate_bars(bars)
        dup_check = next(c for c in result.checks if c.name == "timestamp_unique")
        assert not dup_check.passed
        assert "1 duplicate" in dup_check.message

    def test_naive_and_aware_same_instant_are_duplicates(self):
        bars = [
            _make_bar(datetime(2024, 1, 15)),
            _make_bar(datetime(2024, 1, 15, tzinfo=timezone.utc)),
        ]
        assert not validate_bars(bars).passed
