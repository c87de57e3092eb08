"""Pydantic Settings configuration models.

3-tier config hierarchy (lowest to highest priority):
1. Pydantic defaults (in code below)
2. .env file (loaded by Pydantic Settings)
3. Environment variables (e.g., CRYPTOSCOPE_INDICATORS__RSI_PERIOD=21)
"""

from __future__ import annotations

import re
from typing import Self

from pydantic import BaseModel, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from cryptoscope.market.types import Interval

VALID_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})
VALID_LOG_FORMATS = frozenset({"console", "json"})
MAX_KLINE_LIMIT = 1000


class IndicatorConfig(BaseModel):
    """Indicator periods.

    Defaults follow the conventions of mainstream charting tools.
    """

    rsi_period: int = Field(default=14, ge=1, le=500)
    macd_fast: int = Field(default=12, ge=1, le=500)
    macd_slow: int = Field(default=26, ge=1, le=500)
    macd_signal: int = Field(default=9, ge=1, le=500)
    bollinger_period: int = Field(default=20, ge=1, le=500)
    bollinger_multiplier: float = Field(default=2.0, gt=0.0, le=10.0)
    ema_fast: int = Field(default=50, ge=1, le=1000)
    ema_slow: int = Field(default=200, ge=1, le=1000)

    @model_validator(mode="after")
    def validate_ordering(self) -> Self:
        if self.macd_fast >= self.macd_slow:
            raise ValueError(
                f"macd_fast ({self.macd_fast}) must be less than "
                f"macd_slow ({self.macd_slow})"
            )
        if self.ema_fast >= self.ema_slow:
            raise ValueError(
                f"ema_fast ({self.ema_fast}) must be less than "
                f"ema_slow ({self.ema_slow})"
            )
        return self


class SignalConfig(BaseModel):
    """Thresholds used when interpreting an indicator bundle."""

    rsi_overbought: float = Field(default=70.0, gt=0.0, lt=100.0)
    rsi_oversold: float = Field(default=30.0, gt=0.0, lt=100.0)

    @model_validator(mode="after")
    def validate_thresholds(self) -> Self:
        if self.rsi_oversold >= self.rsi_overbought:
            raise ValueError(
                f"rsi_oversold ({self.rsi_oversold}) must be below "
                f"rsi_overbought ({self.rsi_overbought})"
            )
        return self


class AppConfig(BaseSettings):
    """Top-level application configuration.

    Env var examples:
        CRYPTOSCOPE_LOG_LEVEL=DEBUG
        CRYPTOSCOPE_INTERVAL=4h
        CRYPTOSCOPE_INDICATORS__BOLLINGER_MULTIPLIER=2.5
        CRYPTOSCOPE_WATCHLIST='["BTCUSDT","ETHUSDT"]'
    """

    model_config = SettingsConfigDict(
        env_prefix="CRYPTOSCOPE_",
        env_nested_delimiter="__",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_level: str = "INFO"
    log_format: str = "console"
    interval: str = Interval.ONE_HOUR.value
    kline_limit: int = Field(default=MAX_KLINE_LIMIT, ge=1, le=MAX_KLINE_LIMIT)
    indicators: IndicatorConfig = IndicatorConfig()
    signals: SignalConfig = SignalConfig()
    watchlist: list[str] = Field(
        default=["BTCUSDT", "ETHUSDT", "SOLUSDT", "BNBUSDT"],
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        v = v.upper()
        if v not in VALID_LOG_LEVELS:
            raise ValueError(
                f"log_level must be one of {sorted(VALID_LOG_LEVELS)}, got {v}"
            )
        return v

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        v = v.lower()
        if v not in VALID_LOG_FORMATS:
            raise ValueError(
                f"log_format must be one of {sorted(VALID_LOG_FORMATS)}, got {v}"
            )
        return v

    @field_validator("interval")
    @classmethod
    def validate_interval(cls, v: str) -> str:
        valid = [i.value for i in Interval]
        if v not in valid:
            raise ValueError(f"interval must be one of {valid}, got {v}")
        return v

    @field_validator("watchlist")
    @classmethod
    def validate_watchlist(cls, v: list[str]) -> list[str]:
        if len(v) == 0:
            raise ValueError("Watchlist must not be empty")
        for symbol in v:
            if not re.match(r"^[A-Z0-9]{2,20}$", symbol):
                raise ValueError(f"Invalid symbol: {symbol}")
        return v
