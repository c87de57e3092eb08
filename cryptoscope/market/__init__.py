"""Market data boundary.

Re-exports the public types, loaders and errors for convenient imports:
    from cryptoscope.market import Candle, load_candles, MarketDataError
"""

from cryptoscope.market.errors import KlineFormatError, MarketDataError
from cryptoscope.market.fake import generate_candles
from cryptoscope.market.klines import (
    load_candles,
    parse_kline,
    parse_klines,
    to_decimal,
)
from cryptoscope.market.types import Candle, Interval

__all__ = [
    "Candle",
    "Interval",
    "KlineFormatError",
    "MarketDataError",
    "generate_candles",
    "load_candles",
    "parse_kline",
    "parse_klines",
    "to_decimal",
]
