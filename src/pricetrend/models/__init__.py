"""Trend engine data models."""

from pricetrend.models.bar import Bar
from pricetrend.models.pivot import Pivot
from pricetrend.models.trend import Breakout, MarketStructure, TrendLabel
from pricetrend.models.frame import IndicatorFrame, MACDResult
from pricetrend.models.result import AnalysisResult

__all__ = [
    "Bar",
    "Pivot",
    "Breakout",
    "MarketStructure",
    "TrendLabel",
    "IndicatorFrame",
    "MACDResult",
    "AnalysisResult",
]
