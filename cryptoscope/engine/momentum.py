"""Relative Strength Index with Wilder smoothing."""

from __future__ import annotations

from collections.abc import Sequence

from cryptoscope.engine.moving_average import check_period

RSI_NEUTRAL = 50.0
RSI_MAX = 100.0


def rsi(prices: Sequence[float], period: int = 14) -> float:
    """RSI of the latest price, in [0, 100].

    The first `period` transitions seed the average gain/loss as plain
    means. Every later transition is folded in with Wilder's recurrence
    avg = (avg * (period - 1) + x) / period, in order.

    Returns 50.0 when there are fewer than period + 1 prices, and exactly
    100.0 when the smoothed average loss is zero.
    """
    check_period(period)
    if len(prices) < period + 1:
        return RSI_NEUTRAL

    gains = 0.0
    losses = 0.0
    for i in range(1, period + 1):
        change = prices[i] - prices[i - 1]
        if change > 0:
            gains += change
        else:
            losses -= change

    avg_gain = gains / period
    avg_loss = losses / period

    for i in range(period + 1, len(prices)):
        change = prices[i] - prices[i - 1]
        gain = change if change > 0 else 0.0
        loss = -change if change < 0 else 0.0
        avg_gain = (avg_gain * (period - 1) + gain) / period
        avg_loss = (avg_loss * (period - 1) + loss) / period

    if avg_loss == 0:
        return RSI_MAX

    rs = avg_gain / avg_loss
    return 100 - 100 / (1 + rs)
