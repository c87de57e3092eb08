"""Engine layer: closing-price extraction and indicator calculation."""

from cryptoscope.engine.aggregator import (
    IndicatorBundle,
    aggregate,
    aggregate_many,
    compute_indicators,
)
from cryptoscope.engine.momentum import rsi
from cryptoscope.engine.moving_average import ema, ema_series, sma
from cryptoscope.engine.series import extract_closes
from cryptoscope.engine.trend import MACDResult, macd, macd_line_series
from cryptoscope.engine.volatility import BollingerBands, bollinger

__all__ = [
    "BollingerBands",
    "IndicatorBundle",
    "MACDResult",
    "aggregate",
    "aggregate_many",
    "bollinger",
    "compute_indicators",
    "ema",
    "ema_series",
    "extract_closes",
    "macd",
    "macd_line_series",
    "rsi",
    "sma",
]
