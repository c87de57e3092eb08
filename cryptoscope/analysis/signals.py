"""Read-only interpretation of an indicator bundle at a given price.

Pure functions, no I/O. Classifications are what a dashboard badge or a
downstream prediction prompt would show next to the raw numbers.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from cryptoscope.config import SignalConfig
from cryptoscope.engine.aggregator import IndicatorBundle
from cryptoscope.engine.trend import MACDResult
from cryptoscope.engine.volatility import BollingerBands


class RsiState(str, Enum):
    OVERBOUGHT = "overbought"
    OVERSOLD = "oversold"
    NEUTRAL = "neutral"


class Bias(str, Enum):
    """Momentum direction from the MACD histogram."""

    BULLISH = "bullish"
    BEARISH = "bearish"


class BandPosition(str, Enum):
    ABOVE_UPPER = "above_upper"
    BELOW_LOWER = "below_lower"
    INSIDE = "inside"


class EmaPosition(str, Enum):
    ABOVE = "above"
    BELOW = "below"


@dataclass(frozen=True)
class MarketSummary:
    """Interpretation of one bundle at one price."""

    price: float
    rsi_state: RsiState
    macd_bias: Bias
    band_position: BandPosition
    ema50_position: EmaPosition
    ema200_position: EmaPosition


def rsi_state(
    rsi: float,
    overbought: float = 70.0,
    oversold: float = 30.0,
) -> RsiState:
    if rsi > overbought:
        return RsiState.OVERBOUGHT
    if rsi < oversold:
        return RsiState.OVERSOLD
    return RsiState.NEUTRAL


def macd_bias(macd: MACDResult) -> Bias:
    """Bullish only on a strictly positive histogram."""
    return Bias.BULLISH if macd.histogram > 0 else Bias.BEARISH


def band_position(price: float, bands: BollingerBands) -> BandPosition:
    """Where `price` sits relative to the bands.

    All-zero bands mean the window was not filled yet; that reads as
    INSIDE rather than a breakout above a band at 0.
    """
    if bands.middle == 0.0:
        return BandPosition.INSIDE
    if price > bands.upper:
        return BandPosition.ABOVE_UPPER
    if price < bands.lower:
        return BandPosition.BELOW_LOWER
    return BandPosition.INSIDE


def ema_position(price: float, ema: float) -> EmaPosition:
    """ABOVE only when price is strictly above the EMA.

    An EMA of 0.0 is the insufficient-data sentinel, so any positive price
    reads as ABOVE; callers that care check the EMA for 0.0 first.
    """
    return EmaPosition.ABOVE if price > ema else EmaPosition.BELOW


def summarize(
    bundle: IndicatorBundle,
    price: float,
    settings: SignalConfig | None = None,
) -> MarketSummary:
    """Classify every indicator in the bundle against `price`."""
    cfg = settings if settings is not None else SignalConfig()
    return MarketSummary(
        price=price,
        rsi_state=rsi_state(bundle.rsi, cfg.rsi_overbought, cfg.rsi_oversold),
        macd_bias=macd_bias(bundle.macd),
        band_position=band_position(price, bundle.bollinger),
        ema50_position=ema_position(price, bundle.ema50),
        ema200_position=ema_position(price, bundle.ema200),
    )
