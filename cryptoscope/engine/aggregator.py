"""Indicator aggregation into one immutable bundle per candle series.

IndicatorBundle is a frozen dataclass describing the latest point of a
series. Each call recomputes everything from the series it is given; no
state is carried between calls.
"""

from __future__ import annotations

import contextvars
from collections.abc import Mapping, Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Any

import structlog

from cryptoscope.config import IndicatorConfig
from cryptoscope.engine.momentum import RSI_NEUTRAL, rsi
from cryptoscope.engine.moving_average import ema
from cryptoscope.engine.series import extract_closes
from cryptoscope.engine.trend import MACDResult, macd
from cryptoscope.engine.volatility import BollingerBands, bollinger
from cryptoscope.market.types import Candle

log = structlog.get_logger()


@dataclass(frozen=True)
class IndicatorBundle:
    """Indicator snapshot for the last element of a price series.

    Fields that lack enough history carry their sentinel: 0.0 everywhere
    except rsi, which is 50.0. ema50/ema200 hold the fast/slow trend EMAs
    (periods 50 and 200 unless configured otherwise).
    """

    rsi: float = RSI_NEUTRAL
    macd: MACDResult = field(default_factory=MACDResult)
    bollinger: BollingerBands = field(default_factory=BollingerBands)
    ema50: float = 0.0
    ema200: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        """Serialize with the consumer-facing (camelCase) field names."""
        return {
            "rsi": self.rsi,
            "macd": {
                "macdLine": self.macd.macd_line,
                "signalLine": self.macd.signal_line,
                "histogram": self.macd.histogram,
            },
            "bollinger": {
                "upper": self.bollinger.upper,
                "middle": self.bollinger.middle,
                "lower": self.bollinger.lower,
            },
            "ema50": self.ema50,
            "ema200": self.ema200,
        }


def compute_indicators(
    closes: Sequence[float],
    settings: IndicatorConfig | None = None,
) -> IndicatorBundle:
    """Run every engine over one closing-price series."""
    cfg = settings if settings is not None else IndicatorConfig()
    return IndicatorBundle(
        rsi=rsi(closes, cfg.rsi_period),
        macd=macd(closes, cfg.macd_fast, cfg.macd_slow, cfg.macd_signal),
        bollinger=bollinger(
            closes,
            cfg.bollinger_period,
            cfg.bollinger_multiplier,
        ),
        ema50=ema(closes, cfg.ema_fast),
        ema200=ema(closes, cfg.ema_slow),
    )


def aggregate(
    candles: Sequence[Candle],
    settings: IndicatorConfig | None = None,
) -> IndicatorBundle:
    """Extract closes once and compute the full indicator bundle."""
    closes = extract_closes(candles)
    bundle = compute_indicators(closes, settings)
    log.debug(
        "indicators_computed",
        candle_count=len(closes),
        rsi=bundle.rsi,
        macd_histogram=bundle.macd.histogram,
    )
    return bundle


def aggregate_many(
    candles_by_symbol: Mapping[str, Sequence[Candle]],
    settings: IndicatorConfig | None = None,
    max_workers: int | None = None,
) -> dict[str, IndicatorBundle]:
    """Compute bundles for several symbols on a thread pool.

    Symbols are independent; the result keeps the input key order.
    """
    if not candles_by_symbol:
        return {}

    symbols = list(candles_by_symbol)
    workers = max_workers or min(len(symbols), 5)
    with ThreadPoolExecutor(max_workers=workers) as executor:
        # Workers log with the caller's bound run context
        futures = [
            executor.submit(
                contextvars.copy_context().run,
                aggregate,
                candles_by_symbol[symbol],
                settings,
            )
            for symbol in symbols
        ]
        results = {
            symbol: future.result() for symbol, future in zip(symbols, futures)
        }

    log.info("indicators_computed_batch", symbol_count=len(results))
    return results
