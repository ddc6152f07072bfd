"""pricetrend: time-series aggregation and technical-indicator engine.

Calendar bucket aggregation, SMA-seeded EMA, Wilder RSI, MACD, swing
pivots, market structure and rule-based trend insights for historical
price dashboards.

Quick start::

    from pricetrend import create_analyzer_from_env, bars_from_records
    analyzer = create_analyzer_from_env()
    result = analyzer.analyze(bars_from_records(api_rows), "week")
    print(result.headline)
"""

from __future__ import annotations

import os

from pricetrend.aggregation import (
    DISPLAY_CAPS,
    aggregate,
    bucket_start,
    display_count,
    display_window,
    next_bucket_start,
)
from pricetrend.analyzer import HistoricalAnalyzer
from pricetrend.config import AnalysisConfig, Timeframe
from pricetrend.errors import PriceTrendError, PriceTrendErrorCode
from pricetrend.frames import bars_from_records, bars_to_df, df_to_bars
from pricetrend.indicators import (
    average_volume,
    compact,
    ema,
    ema_alignment,
    macd,
    scatter,
    volatility,
    wilder_rsi,
)
from pricetrend.insights import (
    InsightContext,
    build_insights,
    directional_score,
    overall_bias,
    trend_insights,
)
from pricetrend.models.bar import Bar
from pricetrend.models.frame import IndicatorFrame, MACDResult
from pricetrend.models.pivot import Pivot
from pricetrend.models.result import AnalysisResult
from pricetrend.models.trend import Breakout, MarketStructure, TrendLabel
from pricetrend.pivots import pivot_high, pivot_low
from pricetrend.quality import validate_bars
from pricetrend.structure import (
    breakout,
    classify_trend_label,
    market_structure,
    resistance_level,
    support_level,
    trendline_slope,
)

__version__ = "0.1.0"

__all__ = [
    # Analyzer
    "HistoricalAnalyzer",
    "create_analyzer_from_env",
    # Config
    "AnalysisConfig",
    "Timeframe",
    # Errors
    "PriceTrendError",
    "PriceTrendErrorCode",
    # Models
    "Bar",
    "Pivot",
    "Breakout",
    "MarketStructure",
    "TrendLabel",
    "IndicatorFrame",
    "MACDResult",
    "AnalysisResult",
    # Aggregation
    "DISPLAY_CAPS",
    "aggregate",
    "bucket_start",
    "next_bucket_start",
    "display_count",
    "display_window",
    # Indicators
    "compact",
    "scatter",
    "ema",
    "wilder_rsi",
    "macd",
    "ema_alignment",
    "volatility",
    "average_volume",
    # Pivots & structure
    "pivot_high",
    "pivot_low",
    "market_structure",
    "trendline_slope",
    "breakout",
    "classify_trend_label",
    "resistance_level",
    "support_level",
    # Insights
    "InsightContext",
    "build_insights",
    "trend_insights",
    "directional_score",
    "overall_bias",
    # Data utilities
    "validate_bars",
    "bars_from_records",
    "bars_to_df",
    "df_to_bars",
]


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise PriceTrendError(
            f"{name} must be an integer, got {raw!r}",
            code=PriceTrendErrorCode.INVALID_CONFIG,
        ) from e


def _env_ints(name: str, default: tuple[int, ...]) -> tuple[int, ...]:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return tuple(int(part) for part in raw.split(",") if part.strip())
    except ValueError as e:
        raise PriceTrendError(
            f"{name} must be comma-separated integers, got {raw!r}",
            code=PriceTrendErrorCode.INVALID_CONFIG,
        ) from e


def create_analyzer_from_env() -> HistoricalAnalyzer:
    """Zero-config factory that reads indicator settings from env vars.

    Environment variables:
        PRICETREND_EMA_PERIODS: Comma-separated EMA periods (default: "9,20,50,200").
        PRICETREND_RSI_PERIOD: RSI look-back (default: 14).
        PRICETREND_MACD: "fast,slow,signal" (default: "12,26,9").
        PRICETREND_PIVOT_LEFT: Pivot look-back bars (default: 2).
        PRICETREND_PIVOT_RIGHT: Pivot look-ahead bars (default: 2).
        PRICETREND_VOLUME_LOOKBACK: Raw bars in the average volume (default: 30).
        PRICETREND_VALIDATE: "1"/"true"/"yes" to validate input bars (default: off).
    """
    defaults = AnalysisConfig()
    macd_periods = _env_ints(
        "PRICETREND_MACD", (defaults.macd_fast, defaults.macd_slow, defaults.macd_signal),
    )
    if len(macd_periods) != 3:
        raise PriceTrendError(
            f"PRICETREND_MACD needs exactly three periods, got {macd_periods}",
            code=PriceTrendErrorCode.INVALID_CONFIG,
        )
    fast, slow, signal = macd_periods

    config = AnalysisConfig(
        ema_periods=_env_ints("PRICETREND_EMA_PERIODS", defaults.ema_periods),
        rsi_period=_env_int("PRICETREND_RSI_PERIOD", defaults.rsi_period),
        macd_fast=fast,
        macd_slow=slow,
        macd_signal=signal,
        pivot_left=_env_int("PRICETREND_PIVOT_LEFT", defaults.pivot_left),
        pivot_right=_env_int("PRICETREND_PIVOT_RIGHT", defaults.pivot_right),
        volume_lookback=_env_int("PRICETREND_VOLUME_LOOKBACK", defaults.volume_lookback),
        validate=os.getenv("PRICETREND_VALIDATE", "").strip().lower() in ("1", "true", "yes"),
    )
    return HistoricalAnalyzer(config)
