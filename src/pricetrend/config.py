"""Timeframe selection and analysis configuration."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from pricetrend.errors import PriceTrendError, PriceTrendErrorCode


class Timeframe(Enum):
    """Aggregation timeframes offered by the dashboard selector."""

    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    HALF_YEAR = "6months"
    YEAR = "year"
    OVERALL = "overall"

    @classmethod
    def parse(cls, value: Timeframe | str) -> Timeframe:
        """Accept a member, its value (``"6months"``) or its name (``"half_year"``)."""
        if isinstance(value, cls):
            return value
        text = str(value).strip().lower()
        for member in cls:
            if text in (member.value, member.name.lower()):
                return member
        raise PriceTrendError(
            f"Unknown timeframe: {value!r}",
            code=PriceTrendErrorCode.INVALID_TIMEFRAME,
        )


@dataclass
class AnalysisConfig:
    """Configuration for HistoricalAnalyzer.

    Attributes:
        ema_periods: EMA periods, shortest first. Alignment is read in this order.
        rsi_period: Wilder RSI look-back.
        macd_fast: Fast EMA period for MACD.
        macd_slow: Slow EMA period for MACD.
        macd_signal: Signal EMA period applied to the MACD line.
        pivot_left: Bars before a pivot that must be strictly beyond it.
        pivot_right: Bars after a pivot that must be strictly beyond it.
        volume_lookback: Number of most recent raw bars for average volume.
        high_volume_threshold: Average volume above which liquidity reads "High".
        validate: Whether to run quality checks on input bars.
    """

    ema_periods: tuple[int, ...] = (9, 20, 50, 200)
    rsi_period: int = 14
    macd_fast: int = 12
    macd_slow: int = 26
    macd_signal: int = 9
    pivot_left: int = 2
    pivot_right: int = 2
    volume_lookback: int = 30
    high_volume_threshold: float = 50_000.0
    validate: bool = False

    def __post_init__(self) -> None:
        self.ema_periods = tuple(sorted(self.ema_periods))
        if not self.ema_periods:
            raise PriceTrendError(
                "At least one EMA period is required",
                code=PriceTrendErrorCode.INVALID_CONFIG,
            )
        periods = (
            *self.ema_periods, self.rsi_period,
            self.macd_fast, self.macd_slow, self.macd_signal,
        )
        if any(p < 1 for p in periods):
            raise PriceTrendError(
                f"Indicator periods must be >= 1, got {periods}",
                code=PriceTrendErrorCode.INVALID_CONFIG,
            )
        if self.macd_fast >= self.macd_slow:
            raise PriceTrendError(
                "macd_fast must be shorter than macd_slow",
                code=PriceTrendErrorCode.INVALID_CONFIG,
            )
        if self.pivot_left < 0 or self.pivot_right < 0:
            raise PriceTrendError(
                "Pivot left/right must be non-negative",
                code=PriceTrendErrorCode.INVALID_CONFIG,
            )
        if self.volume_lookback < 1:
            raise PriceTrendError(
                "volume_lookback must be >= 1",
                code=PriceTrendErrorCode.INVALID_CONFIG,
            )

    @property
    def long_ema_period(self) -> int:
        """Longest EMA period, used for the long-term bias (EMA200 by default)."""
        return self.ema_periods[-1]
