"""MACD: difference of two EMAs, its signal EMA and the histogram."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from cryptoscope.engine.moving_average import check_period, ema_series


@dataclass(frozen=True)
class MACDResult:
    """Latest MACD values. All 0.0 when there is not enough data."""

    macd_line: float = 0.0
    signal_line: float = 0.0
    histogram: float = 0.0


def macd_line_series(
    prices: Sequence[float],
    fast: int = 12,
    slow: int = 26,
) -> list[float]:
    """Pointwise fast EMA - slow EMA, same length as the input.

    Indices before slow-1 are 0.0: the slow EMA is not valid there, and
    subtracting its zero sentinel would give a meaningless value.
    """
    fast_ema = ema_series(prices, fast)
    slow_ema = ema_series(prices, slow)
    return [
        0.0 if i < slow - 1 else f - s
        for i, (f, s) in enumerate(zip(fast_ema, slow_ema))
    ]


def macd(
    prices: Sequence[float],
    fast: int = 12,
    slow: int = 26,
    signal: int = 9,
) -> MACDResult:
    """MACD of the latest price.

    The signal line is an EMA of the MACD line's valid suffix (from index
    slow-1 on), so its own SMA seed starts where the MACD line becomes
    valid, not at the start of the price series.

    Returns an all-zero result when len(prices) < slow + signal.
    """
    check_period(fast, "fast")
    check_period(slow, "slow")
    check_period(signal, "signal")
    if len(prices) < slow + signal:
        return MACDResult()

    valid_line = macd_line_series(prices, fast, slow)[slow - 1 :]
    signal_series = ema_series(valid_line, signal)

    current_macd = valid_line[-1]
    current_signal = signal_series[-1]
    return MACDResult(
        macd_line=current_macd,
        signal_line=current_signal,
        histogram=current_macd - current_signal,
    )
