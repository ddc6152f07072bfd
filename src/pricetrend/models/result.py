"""Full analysis output for one bar sequence and timeframe."""

from __future__ import annotations

from dataclasses import dataclass, field

from pricetrend.config import Timeframe
from pricetrend.models.bar import Bar
from pricetrend.models.frame import IndicatorFrame
from pricetrend.models.pivot import Pivot
from pricetrend.models.trend import Breakout, MarketStructure, TrendLabel


@dataclass(frozen=True)
class AnalysisResult:
    """Everything the historical dashboard renders for one timeframe.

    Attributes:
        timeframe: Selected aggregation timeframe.
        aggregated: Full aggregated series (pivots are read from this).
        display: Most recent aggregated bars within the display cap.
        indicators: Indicator series aligned to ``display``.
        pivot_highs: Swing highs over ``aggregated``.
        pivot_lows: Swing lows over ``aggregated``.
        structure: Market structure from the last two pivots.
        low_slope: Slope of the swing-low trendline.
        high_slope: Slope of the swing-high trendline.
        breakout: Last close relative to the most recent pivots.
        trend_label: Final trend classification.
        ema_up: Bullish EMA alignment on the latest values.
        ema_down: Bearish EMA alignment on the latest values.
        volatility: Standard deviation of returns over ``display``.
        average_volume: Mean volume of the most recent raw bars.
        insights: Ordered observation sentences.
    """

    timeframe: Timeframe
    aggregated: list[Bar]
    display: list[Bar]
    indicators: IndicatorFrame
    pivot_highs: list[Pivot] = field(default_factory=list)
    pivot_lows: list[Pivot] = field(default_factory=list)
    structure: MarketStructure = MarketStructure.NOT_ENOUGH_DATA
    low_slope: float = 0.0
    high_slope: float = 0.0
    breakout: Breakout = field(default_factory=Breakout)
    trend_label: TrendLabel = TrendLabel.SIDEWAYS
    ema_up: bool = False
    ema_down: bool = False
    volatility: float = 0.0
    average_volume: float = 0.0
    insights: list[str] = field(default_factory=list)

    @property
    def headline(self) -> str:
        """Banner text, e.g. ``"Strong Uptrend (WEEK)"``."""
        return f"{self.trend_label.value} ({self.timeframe.value.upper()})"

    @property
    def latest_close(self) -> float | None:
        return self.indicators.latest_close
