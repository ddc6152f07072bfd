"""Index-aligned indicator series."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

import pandas as pd

from pricetrend.errors import PriceTrendError, PriceTrendErrorCode

Series = list[float | None]

_SERIES_NAMES = ("closes", "rsi", "macd", "signal", "histogram")


@dataclass(frozen=True)
class MACDResult:
    """MACD line, signal line and histogram, aligned to the input closes."""

    macd: Series
    signal: Series
    histogram: Series


@dataclass(frozen=True)
class IndicatorFrame:
    """Struct-of-arrays holding every indicator for a display window.

    Every series has one entry per bar in ``times``; ``None`` means the
    indicator is not yet computable at that index.

    Attributes:
        times: Bar timestamps.
        closes: Closing prices the indicators were computed on.
        emas: EMA series keyed by period.
        rsi: Wilder RSI series.
        macd: MACD line.
        signal: MACD signal line.
        histogram: MACD minus signal.
    """

    times: list[datetime]
    closes: list[float]
    emas: dict[int, Series] = field(default_factory=dict)
    rsi: Series = field(default_factory=list)
    macd: Series = field(default_factory=list)
    signal: Series = field(default_factory=list)
    histogram: Series = field(default_factory=list)

    def __post_init__(self) -> None:
        n = len(self.times)
        columns = {
            "closes": self.closes,
            "rsi": self.rsi,
            "macd": self.macd,
            "signal": self.signal,
            "histogram": self.histogram,
            **{f"ema{p}": s for p, s in self.emas.items()},
        }
        bad = [name for name, values in columns.items() if len(values) != n]
        if bad:
            raise PriceTrendError(
                f"Series not aligned to {n} bars: {', '.join(bad)}",
                code=PriceTrendErrorCode.MISALIGNED_SERIES,
            )

    def __len__(self) -> int:
        return len(self.times)

    @property
    def latest_close(self) -> float | None:
        return self.closes[-1] if self.closes else None

    def latest(self, name: str) -> float | None:
        """Last value of a series by name (``"rsi"``, ``"macd"``, ``"ema50"``...).

        Unknown names, including EMA periods that were not computed, give None.
        """
        if name.startswith("ema"):
            period = name[3:]
            values = self.emas.get(int(period), []) if period.isdigit() else []
        elif name in _SERIES_NAMES:
            values = getattr(self, name)
        else:
            values = []
        return values[-1] if values else None

    def latest_emas(self) -> dict[int, float | None]:
        return {p: (s[-1] if s else None) for p, s in sorted(self.emas.items())}

    def to_frame(self) -> pd.DataFrame:
        """Export as a DataFrame indexed by time (``None`` becomes NaN)."""
        data: dict[str, list] = {"close": list(self.closes)}
        for period, values in sorted(self.emas.items()):
            data[f"ema{period}"] = list(values)
        data["rsi"] = list(self.rsi)
        data["macd"] = list(self.macd)
        data["signal"] = list(self.signal)
        data["histogram"] = list(self.histogram)
        df = pd.DataFrame(data, index=pd.DatetimeIndex(self.times, name="time"))
        return df.astype(float)
