"""Analysis layer: interpretation of indicator bundles."""

from cryptoscope.analysis.signals import (
    BandPosition,
    Bias,
    EmaPosition,
    MarketSummary,
    RsiState,
    band_position,
    ema_position,
    macd_bias,
    rsi_state,
    summarize,
)

__all__ = [
    "BandPosition",
    "Bias",
    "EmaPosition",
    "MarketSummary",
    "RsiState",
    "band_position",
    "ema_position",
    "macd_bias",
    "rsi_state",
    "summarize",
]
