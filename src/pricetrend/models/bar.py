"""Bar (OHLCV) data model."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class Bar:
    """Single price bar (OHLCV).

    Aggregated bars are synthesized as new instances; a source bar is never
    mutated.

    Attributes:
        time: Bar timestamp (start of period). Naive values are read as UTC.
        open: Opening price.
        high: High price.
        low: Low price.
        close: Closing price.
        volume: Traded volume.
    """

    time: datetime
    open: float
    high: float
    low: float
    close: float
    volume: float = 0.0
