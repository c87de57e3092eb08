"""Closing-price extraction: the Decimal -> float boundary for the engine."""

from __future__ import annotations

from collections.abc import Iterable

from cryptoscope.market.types import Candle


def extract_closes(candles: Iterable[Candle]) -> list[float]:
    """Project candles onto their closing prices, preserving order and length."""
    return [float(c.close) for c in candles]
