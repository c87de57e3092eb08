"""Market data error hierarchy.

All loader-related exceptions inherit from MarketDataError, enabling
clean exception handling at the CLI boundary.
"""

from __future__ import annotations


class MarketDataError(Exception):
    """Base exception for all market data errors."""


class KlineFormatError(MarketDataError):
    """A kline row could not be converted to a Candle.

    Stores the zero-based row index when the row came from a batch.
    """

    def __init__(self, message: str, index: int | None = None) -> None:
        self.index = index
        self.message = message
        if index is None:
            super().__init__(message)
        else:
            super().__init__(f"Kline {index}: {message}")
