"""Simple and exponential moving averages over a closing-price series.

Short input never raises: values that cannot be computed yet are the
sentinel 0.0, so callers can render a "not enough data" state without
special-casing exceptions. An invalid period (< 1) is a programming error
and raises ValueError.

EMA series are seeded with the SMA of the first `period` values rather
than with the first value. This is what charting platforms do, and the
two seeding schemes never fully reconverge over a finite window.
"""

from __future__ import annotations

from collections.abc import Sequence

INSUFFICIENT_DATA = 0.0


def check_period(period: int, name: str = "period") -> None:
    """Raise ValueError unless period >= 1."""
    if period < 1:
        raise ValueError(f"{name} must be >= 1, got {period}")


def sma(series: Sequence[float], period: int) -> float:
    """Mean of the last `period` values, or 0.0 if the series is shorter."""
    check_period(period)
    if len(series) < period:
        return INSUFFICIENT_DATA
    return sum(series[-period:]) / period


def ema_series(series: Sequence[float], period: int) -> list[float]:
    """Full EMA series, same length as the input.

    Index period-1 holds the SMA of the first `period` values; every later
    index i is (series[i] - ema[i-1]) * k + ema[i-1] with k = 2/(period+1).
    Indices before period-1 hold 0.0. If the series is shorter than
    `period` the whole result is 0.0.
    """
    check_period(period)
    n = len(series)
    result = [INSUFFICIENT_DATA] * n
    if n < period:
        return result

    k = 2 / (period + 1)
    prev = sum(series[:period]) / period
    result[period - 1] = prev
    for i in range(period, n):
        prev = (series[i] - prev) * k + prev
        result[i] = prev
    return result


def ema(series: Sequence[float], period: int) -> float:
    """Latest EMA value, or 0.0 if the series is shorter than `period`."""
    values = ema_series(series, period)
    if not values:
        return INSUFFICIENT_DATA
    return values[-1]
