"""Data quality validation for input bars."""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass, field

from pricetrend.aggregation import as_utc
from pricetrend.models.bar import Bar


@dataclass
class ValidationCheck:
    """Single validation check result."""

    name: str
    passed: bool
    message: str = ""


@dataclass
class ValidationResult:
    """Aggregate validation result."""

    checks: list[ValidationCheck] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return all(c.passed for c in self.checks)

    @property
    def failed_checks(self) -> list[ValidationCheck]:
        return [c for c in self.checks if not c.passed]


def validate_bars(bars: Sequence[Bar]) -> ValidationResult:
    """Run all quality checks on a sequence of bars.

    Checks:
        1. Not empty
        2. No NaN/inf OHLCV
        3. Volume sanity (non-negative)
        4. OHLC consistency (low <= open, close <= high)
        5. Unique timestamps

    Ordering is not checked; aggregation sorts its input.
    """
    result = ValidationResult()

    # 1. Not empty
    if not bars:
        result.checks.append(ValidationCheck("not_empty", False, "No bars provided"))
        return result
    result.checks.append(ValidationCheck("not_empty", True, f"{len(bars)} bars"))

    # 2. No NaN/inf
    nan_count = 0
    for b in bars:
        for val in (b.open, b.high, b.low, b.close, b.volume):
            if math.isnan(val) or math.isinf(val):
                nan_count += 1
    if nan_count:
        result.checks.append(ValidationCheck("no_nulls", False, f"{nan_count} NaN/Inf values"))
    else:
        result.checks.append(ValidationCheck("no_nulls", True))

    # 3. Volume sanity
    neg_vol = sum(1 for b in bars if b.volume < 0)
    if neg_vol:
        result.checks.append(
            ValidationCheck("volume_sanity", False, f"{neg_vol} bars with negative volume")
        )
    else:
        result.checks.append(ValidationCheck("volume_sanity", True))

    # 4. OHLC consistency
    inconsistent = sum(
        1 for b in bars
        if not (b.low <= b.open <= b.high and b.low <= b.close <= b.high)
    )
    if inconsistent:
        result.checks.append(
            ValidationCheck(
                "ohlc_consistency", False,
                f"{inconsistent} bars outside their high/low range",
            )
        )
    else:
        result.checks.append(ValidationCheck("ohlc_consistency", True))

    # 5. Duplicate timestamps
    seen: set = set()
    duplicates = 0
    for b in bars:
        ts = as_utc(b.time)
        if ts in seen:
            duplicates += 1
        seen.add(ts)
    if duplicates:
        result.checks.append(
            ValidationCheck("timestamp_unique", False, f"{duplicates} duplicate timestamps")
        )
    else:
        result.checks.append(ValidationCheck("timestamp_unique", True))

    return result
