"""HistoricalAnalyzer: runs the full aggregation -> indicators -> trend pipeline."""

from __future__ import annotations

import logging

from pricetrend.aggregation import aggregate, as_utc, display_window, sort_bars
from pricetrend.config import AnalysisConfig, Timeframe
from pricetrend.errors import PriceTrendError, PriceTrendErrorCode
from pricetrend.indicators import (
    average_volume,
    ema,
    ema_alignment,
    macd,
    volatility,
    wilder_rsi,
)
from pricetrend.insights import (
    InsightContext,
    build_insights,
    ema_status,
    macd_bias,
    rsi_zone,
    volatility_level,
    volume_level,
)
from pricetrend.models.bar import Bar
from pricetrend.models.frame import IndicatorFrame
from pricetrend.models.result import AnalysisResult
from pricetrend.pivots import pivot_high, pivot_low
from pricetrend.quality import validate_bars
from pricetrend.structure import (
    breakout,
    classify_trend_label,
    market_structure,
    trendline_slope,
)

logger = logging.getLogger(__name__)


class HistoricalAnalyzer:
    """Stateless orchestrator: validate -> aggregate -> window -> indicators -> trend.

    Every call recomputes from the given bars; nothing is cached between
    calls, so one instance can serve any number of (bars, timeframe) pairs.

    Usage::

        from pricetrend import HistoricalAnalyzer, Timeframe
        result = HistoricalAnalyzer().analyze(bars, Timeframe.WEEK)
        print(result.headline)
    """

    def __init__(self, config: AnalysisConfig | None = None) -> None:
        self.config = config or AnalysisConfig()

    # ---------------------------------------------------------- indicators

    def compute_indicators(self, bars: list[Bar]) -> IndicatorFrame:
        """Indicator series over a (display-windowed) bar sequence."""
        cfg = self.config
        closes = [b.close for b in bars]
        macd_result = macd(closes, cfg.macd_fast, cfg.macd_slow, cfg.macd_signal)
        return IndicatorFrame(
            times=[as_utc(b.time) for b in bars],
            closes=closes,
            emas={p: ema(closes, p) for p in cfg.ema_periods},
            rsi=wilder_rsi(closes, cfg.rsi_period),
            macd=macd_result.macd,
            signal=macd_result.signal,
            histogram=macd_result.histogram,
        )

    # ------------------------------------------------------------- analyze

    def analyze(self, bars: list[Bar], timeframe: Timeframe | str = Timeframe.DAY) -> AnalysisResult:
        """Compute every dashboard output for ``bars`` at ``timeframe``.

        Raises:
            PriceTrendError: If validation is enabled and the bars fail it.
        """
        cfg = self.config
        timeframe = Timeframe.parse(timeframe)

        if cfg.validate:
            report = validate_bars(bars)
            if not report.passed:
                msgs = "; ".join(c.message for c in report.failed_checks)
                logger.warning("Bar validation failed: %s", msgs)
                raise PriceTrendError(
                    f"Validation failed: {msgs}",
                    code=PriceTrendErrorCode.VALIDATION_FAILED,
                )

        aggregated = aggregate(bars, timeframe)
        display = display_window(aggregated, timeframe)
        frame = self.compute_indicators(display)
        logger.debug(
            "Aggregated %d bars into %d %s buckets, displaying %d",
            len(bars), len(aggregated), timeframe.value, len(display),
        )

        latest_close = frame.latest_close
        long_ema = frame.latest(f"ema{cfg.long_ema_period}")
        ema_up, ema_down = ema_alignment(frame.latest_emas())
        above = latest_close is not None and long_ema is not None and latest_close > long_ema
        below = latest_close is not None and long_ema is not None and latest_close < long_ema

        vol = volatility(display)
        avg_vol = average_volume(sort_bars(bars)[-cfg.volume_lookback:])

        highs = pivot_high(aggregated, cfg.pivot_left, cfg.pivot_right)
        lows = pivot_low(aggregated, cfg.pivot_left, cfg.pivot_right)
        structure = market_structure(highs, lows)
        low_slope = trendline_slope(lows)
        high_slope = trendline_slope(highs)
        brk = breakout(aggregated, highs, lows)
        label = classify_trend_label(structure, low_slope, high_slope, brk.bullish, brk.bearish)
        logger.debug(
            "%d pivot highs, %d pivot lows, structure=%s label=%s",
            len(highs), len(lows), structure.value, label.value,
        )

        insights = build_insights(InsightContext(
            latest_rsi=frame.latest("rsi"),
            latest_macd=frame.latest("macd"),
            latest_signal=frame.latest("signal"),
            ema_up=ema_up,
            ema_down=ema_down,
            above_ema200=above,
            below_ema200=below,
            volatility=vol,
            bars=aggregated,
            left=cfg.pivot_left,
            right=cfg.pivot_right,
            ema_periods=cfg.ema_periods,
        ))

        return AnalysisResult(
            timeframe=timeframe,
            aggregated=aggregated,
            display=display,
            indicators=frame,
            pivot_highs=highs,
            pivot_lows=lows,
            structure=structure,
            low_slope=low_slope,
            high_slope=high_slope,
            breakout=brk,
            trend_label=label,
            ema_up=ema_up,
            ema_down=ema_down,
            volatility=vol,
            average_volume=avg_vol,
            insights=insights,
        )

    # -------------------------------------------------------- metric cards

    def metric_cards(self, result: AnalysisResult) -> dict[str, object]:
        """Card-level classifications for the dashboard header."""
        frame = result.indicators
        close = frame.latest_close
        return {
            "ema_status": {p: ema_status(close, v) for p, v in frame.latest_emas().items()},
            "rsi_zone": rsi_zone(frame.latest("rsi")),
            "macd_bias": macd_bias(frame.latest("macd"), frame.latest("signal")),
            "volatility_level": volatility_level(result.volatility),
            "volume_level": volume_level(
                result.average_volume, self.config.high_volume_threshold,
            ),
        }
