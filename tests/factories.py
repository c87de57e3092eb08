"""Shared test factories for creating domain objects.

Provides make_candle() and candles_from_closes() with sensible defaults
so tests can focus on the values they care about.
"""

from __future__ import annotations

from collections.abc import Iterable
from decimal import Decimal

from cryptoscope.market.types import Candle

# Default open time: 2026-02-10T15:00:00Z
_DEFAULT_OPEN_TIME = 1_770_735_600_000
_HOUR_MS = 60 * 60 * 1000


def make_candle(
    *,
    open_time: int = _DEFAULT_OPEN_TIME,
    open: Decimal = Decimal("150.00"),
    high: Decimal = Decimal("151.00"),
    low: Decimal = Decimal("149.00"),
    close: Decimal = Decimal("150.50"),
    volume: Decimal = Decimal("1000"),
    close_time: int | None = None,
) -> Candle:
    """Create a one-hour Candle with sensible defaults."""
    if close_time is None:
        close_time = open_time + _HOUR_MS - 1
    return Candle(
        open_time=open_time,
        open=open,
        high=high,
        low=low,
        close=close,
        volume=volume,
        close_time=close_time,
    )


def candles_from_closes(
    closes: Iterable[float | int | str],
    *,
    start_time: int = _DEFAULT_OPEN_TIME,
    step_ms: int = _HOUR_MS,
) -> list[Candle]:
    """Create contiguous candles whose closes are the given values."""
    candles: list[Candle] = []
    for i, value in enumerate(closes):
        close = Decimal(str(value))
        candles.append(
            make_candle(
                open_time=start_time + i * step_ms,
                open=close,
                high=close + Decimal("1"),
                low=close - Decimal("1"),
                close=close,
                close_time=start_time + (i + 1) * step_ms - 1,
            )
        )
    return candles
