"""Market data value types.

Frozen dataclasses for value objects. Prices and volumes use Decimal
(exchanges send them as strings); timestamps are epoch milliseconds.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum

from cryptoscope.utils.time import from_epoch_ms

_INTERVAL_LABELS: dict[str, str] = {
    "15m": "15 Minutes",
    "1h": "1 Hour",
    "4h": "4 Hours",
    "1d": "1 Day",
}

_INTERVAL_MS: dict[str, int] = {
    "15m": 15 * 60 * 1000,
    "1h": 60 * 60 * 1000,
    "4h": 4 * 60 * 60 * 1000,
    "1d": 24 * 60 * 60 * 1000,
}


class Interval(str, Enum):
    """Supported candle intervals, using exchange interval codes."""

    FIFTEEN_MINUTES = "15m"
    ONE_HOUR = "1h"
    FOUR_HOURS = "4h"
    ONE_DAY = "1d"

    @property
    def label(self) -> str:
        """Human-readable name, e.g. "4 Hours"."""
        return _INTERVAL_LABELS[self.value]

    @property
    def duration_ms(self) -> int:
        return _INTERVAL_MS[self.value]


@dataclass(frozen=True)
class Candle:
    """OHLCV candle (kline) for one interval.

    close_time is the last millisecond covered by the candle, so
    close_time == open_time + interval - 1 for exchange klines.
    """

    open_time: int
    open: Decimal
    high: Decimal
    low: Decimal
    close: Decimal
    volume: Decimal
    close_time: int

    @property
    def open_datetime(self) -> datetime:
        return from_epoch_ms(self.open_time)

    @property
    def close_datetime(self) -> datetime:
        return from_epoch_ms(self.close_time)
