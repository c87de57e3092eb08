"""Synthetic candle series for demos and tests.

Deterministic: the same arguments always produce the same candles, so
indicator output over them is reproducible.
"""

from __future__ import annotations

import math
from datetime import UTC, datetime
from decimal import Decimal

from cryptoscope.market.klines import to_decimal
from cryptoscope.market.types import Candle, Interval
from cryptoscope.utils.time import to_epoch_ms

DEFAULT_START_TIME_MS = to_epoch_ms(datetime(2024, 1, 1, tzinfo=UTC))

_QUANT = Decimal("0.01")


def generate_candles(
    count: int,
    *,
    interval: Interval = Interval.ONE_HOUR,
    base_price: float = 100.0,
    amplitude: float = 10.0,
    cycle_length: float = 50.0,
    drift: float = 0.0,
    start_time_ms: int = DEFAULT_START_TIME_MS,
) -> list[Candle]:
    """Generate contiguous candles with sinusoidal closes.

    close[i] = base_price + amplitude * sin(2*pi*i / cycle_length) + drift * i

    Each candle opens at the previous close (the first opens at its own
    close). High/low sit slightly outside the open/close range. Prices
    are rounded to cents.
    """
    if count < 0:
        raise ValueError(f"count must be >= 0, got {count}")
    if cycle_length <= 0:
        raise ValueError(f"cycle_length must be > 0, got {cycle_length}")

    step = interval.duration_ms
    candles: list[Candle] = []
    prev_close: Decimal | None = None

    for i in range(count):
        raw = base_price + amplitude * math.sin(2 * math.pi * i / cycle_length)
        close = to_decimal(raw + drift * i).quantize(_QUANT)
        open_ = prev_close if prev_close is not None else close
        wick = (abs(close - open_) / 2 + _QUANT).quantize(_QUANT)
        open_time = start_time_ms + i * step
        candles.append(
            Candle(
                open_time=open_time,
                open=open_,
                high=max(open_, close) + wick,
                low=min(open_, close) - wick,
                close=close,
                volume=Decimal(1000 + (i % 24) * 25),
                close_time=open_time + step - 1,
            )
        )
        prev_close = close

    return candles
