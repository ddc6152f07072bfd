"""Tests for data models."""

import math
from datetime import datetime, timezone

import pytest

from pricetrend.config import Timeframe
from pricetrend.errors import PriceTrendError, PriceTrendErrorCode
from pricetrend.models.bar import Bar
from pricetrend.models.frame import IndicatorFrame
from pricetrend.models.pivot import Pivot
from pricetrend.models.result import AnalysisResult
from pricetrend.models.trend import Breakout, MarketStructure, TrendLabel

T0 = datetime(2024, 1, 1, tzinfo=timezone.utc)
T1 = datetime(2024, 1, 2, tzinfo=timezone.utc)


def _frame(**overrides) -> IndicatorFrame:
    kwargs = dict(
        times=[T0, T1],
        closes=[10.0, 11.0],
        emas={2: [None, 10.5]},
        rsi=[None, None],
        macd=[None, 0.25],
        signal=[None, None],
        histogram=[None, None],
    )
    kwargs.update(overrides)
    return IndicatorFrame(**kwargs)


class TestBar:
    def test_create(self):
        bar = Bar(time=T0, open=150.0, high=151.0, low=149.0, close=150.5, volume=10000.0)
        assert bar.open == 150.0
        assert bar.volume == 10000.0

    def test_volume_defaults_zero(self):
        bar = Bar(time=T0, open=1.0, high=1.0, low=1.0, close=1.0)
        assert bar.volume == 0.0

    def test_frozen(self):
        bar = Bar(time=T0, open=150.0, high=151.0, low=149.0, close=150.5)
        with pytest.raises(AttributeError):
            bar.close = 999.0  # type: ignore[misc]


class TestPivot:
    def test_frozen_and_comparable(self):
        assert Pivot(2, 5.0) == Pivot(index=2, price=5.0)
        with pytest.raises(AttributeError):
            Pivot(2, 5.0).price = 1.0  # type: ignore[misc]


class TestTrendTypes:
    @pytest.mark.parametrize(
        "label, direction",
        [
            (TrendLabel.STRONG_UPTREND, "up"),
            (TrendLabel.UPTREND, "up"),
            (TrendLabel.UPTREND_BREAKOUT, "up"),
            (TrendLabel.STRONG_DOWNTREND, "down"),
            (TrendLabel.DOWNTREND, "down"),
            (TrendLabel.DOWNTREND_BREAKDOWN, "down"),
            (TrendLabel.SIDEWAYS, "neutral"),
        ],
    )
    def test_direction(self, label, direction):
        assert label.direction == direction

    def test_structure_values(self):
        assert MarketStructure.NOT_ENOUGH_DATA.value == "Not enough data"

    def test_breakout_defaults(self):
        assert Breakout() == Breakout(bullish=False, bearish=False)


class TestIndicatorFrame:
    def test_latest(self):
        frame = _frame()
        assert frame.latest_close == 11.0
        assert frame.latest("ema2") == 10.5
        assert frame.latest("macd") == 0.25
        assert frame.latest("rsi") is None
        assert frame.latest_emas() == {2: 10.5}
        assert len(frame) == 2

    @pytest.mark.parametrize("name", ["ema", "emaX", "ema50", "volume", "times"])
    def test_latest_unknown_name(self, name):
        assert _frame().latest(name) is None

    def test_misaligned(self):
        with pytest.raises(PriceTrendError) as exc:
            _frame(rsi=[None])
        assert exc.value.code == PriceTrendErrorCode.MISALIGNED_SERIES

    def test_misaligned_ema(self):
        with pytest.raises(PriceTrendError):
            _frame(emas={2: [1.0, 2.0, 3.0]})

    def test_empty(self):
        frame = IndicatorFrame(times=[], closes=[])
        assert frame.latest_close is None
        assert frame.latest("rsi") is None

    def test_to_frame(self):
        df = _frame().to_frame()
        assert list(df.columns) == ["close", "ema2", "rsi", "macd", "signal", "histogram"]
        assert df.index.name == "time"
        assert math.isnan(df["ema2"].iloc[0])
        assert df["ema2"].iloc[1] == 10.5
        assert df["close"].tolist() == [10.0, 11.0]


class TestAnalysisResult:
    def test_headline(self):
        result = AnalysisResult(
            timeframe=Timeframe.HALF_YEAR,
            aggregated=[],
            display=[],
            indicators=IndicatorFrame(times=[], closes=[]),
            trend_label=TrendLabel.STRONG_UPTREND,
        )
        assert result.headline == "Strong Uptrend (6MONTHS)"
        assert result.latest_close is None
