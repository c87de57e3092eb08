"""Tests for configuration system."""

from __future__ import annotations

from unittest.mock import patch

import pytest
from pydantic import ValidationError

from cryptoscope.config import AppConfig, IndicatorConfig, SignalConfig


class TestDefaultConfig:
    """Test that default configuration loads correctly."""

    def test_default_config_loads(self) -> None:
        config = AppConfig()
        assert config.log_level == "INFO"
        assert config.log_format == "console"
        assert config.interval == "1h"
        assert config.kline_limit == 1000

    def test_default_indicator_periods(self) -> None:
        ind = AppConfig().indicators
        assert ind.rsi_period == 14
        assert (ind.macd_fast, ind.macd_slow, ind.macd_signal) == (12, 26, 9)
        assert ind.bollinger_period == 20
        assert ind.bollinger_multiplier == 2.0
        assert (ind.ema_fast, ind.ema_slow) == (50, 200)

    def test_default_signal_thresholds(self) -> None:
        signals = AppConfig().signals
        assert signals.rsi_overbought == 70.0
        assert signals.rsi_oversold == 30.0

    def test_default_watchlist(self) -> None:
        assert AppConfig().watchlist == ["BTCUSDT", "ETHUSDT", "SOLUSDT", "BNBUSDT"]


class TestIndicatorValidation:
    def test_zero_period_rejected(self) -> None:
        with pytest.raises(ValidationError):
            IndicatorConfig(rsi_period=0)

    def test_non_positive_multiplier_rejected(self) -> None:
        with pytest.raises(ValidationError):
            IndicatorConfig(bollinger_multiplier=0)

    def test_macd_fast_must_be_below_slow(self) -> None:
        with pytest.raises(ValidationError, match="macd_fast"):
            IndicatorConfig(macd_fast=26, macd_slow=12)

    def test_ema_fast_must_be_below_slow(self) -> None:
        with pytest.raises(ValidationError, match="ema_fast"):
            IndicatorConfig(ema_fast=200, ema_slow=50)


class TestSignalValidation:
    def test_oversold_must_be_below_overbought(self) -> None:
        with pytest.raises(ValidationError):
            SignalConfig(rsi_overbought=40.0, rsi_oversold=60.0)

    def test_threshold_bounds(self) -> None:
        with pytest.raises(ValidationError):
            SignalConfig(rsi_overbought=100.0)


class TestAppValidation:
    def test_log_level_case_insensitive(self) -> None:
        assert AppConfig(log_level="debug").log_level == "DEBUG"

    def test_invalid_log_level(self) -> None:
        with pytest.raises(ValidationError):
            AppConfig(log_level="VERBOSE")

    def test_invalid_log_format(self) -> None:
        with pytest.raises(ValidationError):
            AppConfig(log_format="xml")

    def test_invalid_interval(self) -> None:
        with pytest.raises(ValidationError):
            AppConfig(interval="3m")

    def test_kline_limit_bounds(self) -> None:
        with pytest.raises(ValidationError):
            AppConfig(kline_limit=1001)

    def test_empty_watchlist(self) -> None:
        with pytest.raises(ValidationError):
            AppConfig(watchlist=[])

    def test_invalid_symbol(self) -> None:
        with pytest.raises(ValidationError):
            AppConfig(watchlist=["btc-usdt"])


class TestEnvOverrides:
    def test_top_level_env(self) -> None:
        with patch.dict("os.environ", {"CRYPTOSCOPE_LOG_LEVEL": "WARNING"}):
            assert AppConfig().log_level == "WARNING"

    def test_nested_env(self) -> None:
        env = {
            "CRYPTOSCOPE_INDICATORS__RSI_PERIOD": "21",
            "CRYPTOSCOPE_INDICATORS__BOLLINGER_MULTIPLIER": "2.5",
        }
        with patch.dict("os.environ", env):
            config = AppConfig()
        assert config.indicators.rsi_period == 21
        assert config.indicators.bollinger_multiplier == 2.5
        assert config.indicators.macd_slow == 26

    def test_watchlist_json_env(self) -> None:
        with patch.dict("os.environ", {"CRYPTOSCOPE_WATCHLIST": '["XRPUSDT"]'}):
            assert AppConfig().watchlist == ["XRPUSDT"]
