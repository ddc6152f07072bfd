"""Shared fixtures for pricetrend tests."""

from __future__ import annotations

import math
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

# Ensure src/ is on the path for editable-style imports
sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "src"))

from pricetrend.models.bar import Bar

BASE = datetime(2024, 1, 1, tzinfo=timezone.utc)  # a Monday

# Zig-zag closes with higher highs and higher lows (left=right=2):
# pivot highs at 2, 6, 10 and pivot lows at 4, 8.
UPTREND_CLOSES = [10, 12, 14, 12, 10, 13, 16, 13, 11, 14, 17, 15, 14]


def bars_from_closes(closes, start: datetime = BASE, volume: float = 1000.0) -> list[Bar]:
    """Daily bars with high = close + 1 and low = close - 1."""
    return [
        Bar(
            time=start + timedelta(days=i),
            open=float(c),
            high=float(c) + 1,
            low=float(c) - 1,
            close=float(c),
            volume=volume,
        )
        for i, c in enumerate(closes)
    ]


@pytest.fixture
def daily_bars() -> list[Bar]:
    """60 rising daily bars, 2024-01-01 .. 2024-02-29."""
    bars = []
    for i in range(60):
        close = 100.0 + i
        bars.append(Bar(
            time=BASE + timedelta(days=i),
            open=close - 0.5,
            high=close + 1.0,
            low=close - 1.5,
            close=close,
            volume=1000.0 + i * 10,
        ))
    return bars


@pytest.fixture
def uptrend_bars() -> list[Bar]:
    return bars_from_closes(UPTREND_CLOSES)


@pytest.fixture
def wave_bars() -> list[Bar]:
    """250 daily bars following a sine wave around 100."""
    return bars_from_closes([100 + 10 * math.sin(i / 5) for i in range(250)])


@pytest.fixture
def growth_bars() -> list[Bar]:
    """300 daily bars compounding 1% per bar."""
    return bars_from_closes([100 * 1.01 ** i for i in range(300)])
