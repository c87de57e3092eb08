"""Bollinger Bands over a trailing window."""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass

from cryptoscope.engine.moving_average import sma


@dataclass(frozen=True)
class BollingerBands:
    """Latest band values. All 0.0 when there is not enough data."""

    upper: float = 0.0
    middle: float = 0.0
    lower: float = 0.0


def bollinger(
    prices: Sequence[float],
    period: int = 20,
    multiplier: float = 2.0,
) -> BollingerBands:
    """SMA +/- multiplier * standard deviation of the last `period` prices.

    Uses the population variance (divide by period, not period - 1), the
    charting-platform convention.
    """
    middle = sma(prices, period)
    if len(prices) < period:
        return BollingerBands()

    window = prices[-period:]
    variance = sum((p - middle) ** 2 for p in window) / period
    std_dev = math.sqrt(variance)
    return BollingerBands(
        upper=middle + multiplier * std_dev,
        middle=middle,
        lower=middle - multiplier * std_dev,
    )
