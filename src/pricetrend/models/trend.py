"""Market structure and trend label types."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class MarketStructure(Enum):
    """Structure read from the last two swing highs and lows."""

    UPTREND = "Uptrend"
    DOWNTREND = "Downtrend"
    SIDEWAYS = "Sideways"
    NOT_ENOUGH_DATA = "Not enough data"


class TrendLabel(Enum):
    """Final trend classification shown on the dashboard banner."""

    STRONG_UPTREND = "Strong Uptrend"
    UPTREND = "Uptrend"
    UPTREND_BREAKOUT = "Uptrend (Breakout)"
    STRONG_DOWNTREND = "Strong Downtrend"
    DOWNTREND = "Downtrend"
    DOWNTREND_BREAKDOWN = "Downtrend (Breakdown)"
    SIDEWAYS = "Sideways / Consolidation"

    @property
    def direction(self) -> str:
        """``"up"``, ``"down"`` or ``"neutral"``."""
        if "Uptrend" in self.value:
            return "up"
        if "Downtrend" in self.value:
            return "down"
        return "neutral"


@dataclass(frozen=True)
class Breakout:
    """Last close relative to the most recent swing high / low.

    Attributes:
        bullish: Close above the most recent pivot high.
        bearish: Close below the most recent pivot low.
    """

    bullish: bool = False
    bearish: bool = False
