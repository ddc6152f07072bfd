"""Error types for the trend engine."""

from __future__ import annotations

from enum import Enum


class PriceTrendErrorCode(Enum):
    """Error classification codes."""

    INVALID_PERIOD = "invalid_period"
    INVALID_TIMEFRAME = "invalid_timeframe"
    INVALID_RECORD = "invalid_record"
    INVALID_CONFIG = "invalid_config"
    MISALIGNED_SERIES = "misaligned_series"
    VALIDATION_FAILED = "validation_failed"


class PriceTrendError(Exception):
    """Raised for caller mistakes, never for insufficient data.

    Attributes:
        message: Human-readable error description.
        code: Structured error code for programmatic handling.
    """

    def __init__(
        self,
        message: str,
        code: PriceTrendErrorCode = PriceTrendErrorCode.INVALID_RECORD,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
