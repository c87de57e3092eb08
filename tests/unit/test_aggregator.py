"""Tests for closing-price extraction and IndicatorBundle aggregation."""

from __future__ import annotations

import json
from dataclasses import FrozenInstanceError
from decimal import Decimal

import pytest

from cryptoscope.config import IndicatorConfig
from cryptoscope.engine.aggregator import (
    IndicatorBundle,
    aggregate,
    aggregate_many,
    compute_indicators,
)
from cryptoscope.engine.momentum import rsi
from cryptoscope.engine.moving_average import ema
from cryptoscope.engine.series import extract_closes
from cryptoscope.engine.trend import MACDResult, macd
from cryptoscope.engine.volatility import BollingerBands, bollinger
from cryptoscope.market.fake import generate_candles
from tests.factories import candles_from_closes, make_candle


class TestExtractCloses:
    def test_preserves_order_and_length(self) -> None:
        candles = candles_from_closes(["3.5", "1.25", "2"])
        assert extract_closes(candles) == [3.5, 1.25, 2.0]

    def test_values_are_float(self) -> None:
        closes = extract_closes([make_candle(close=Decimal("150.50"))])
        assert isinstance(closes[0], float)

    def test_empty(self) -> None:
        assert extract_closes([]) == []


class TestIndicatorBundle:
    def test_is_frozen(self) -> None:
        bundle = IndicatorBundle()
        with pytest.raises(FrozenInstanceError):
            bundle.rsi = 10.0  # type: ignore[misc]

    def test_default_values_are_sentinels(self) -> None:
        bundle = IndicatorBundle()
        assert bundle.rsi == 50.0
        assert bundle.macd == MACDResult(0.0, 0.0, 0.0)
        assert bundle.bollinger == BollingerBands(0.0, 0.0, 0.0)
        assert bundle.ema50 == 0.0
        assert bundle.ema200 == 0.0

    def test_to_dict_contract_shape(self) -> None:
        bundle = IndicatorBundle(
            rsi=61.5,
            macd=MACDResult(macd_line=1.5, signal_line=1.0, histogram=0.5),
            bollinger=BollingerBands(upper=110.0, middle=100.0, lower=90.0),
            ema50=101.0,
            ema200=98.0,
        )
        assert bundle.to_dict() == {
            "rsi": 61.5,
            "macd": {"macdLine": 1.5, "signalLine": 1.0, "histogram": 0.5},
            "bollinger": {"upper": 110.0, "middle": 100.0, "lower": 90.0},
            "ema50": 101.0,
            "ema200": 98.0,
        }

    def test_to_dict_is_json_serializable(self) -> None:
        assert json.loads(json.dumps(IndicatorBundle().to_dict()))["rsi"] == 50.0


class TestAggregate:
    def test_empty_series_is_all_sentinels(self) -> None:
        assert aggregate([]) == IndicatorBundle()

    def test_short_series_carries_per_field_sentinels(self) -> None:
        """30 candles: RSI and Bollinger compute, MACD and EMAs do not."""
        candles = candles_from_closes([100 + i for i in range(30)])
        bundle = aggregate(candles)
        assert bundle.rsi == 100.0
        assert bundle.bollinger.middle != 0.0
        assert bundle.macd == MACDResult()
        assert bundle.ema50 == 0.0
        assert bundle.ema200 == 0.0

    def test_matches_individual_engines(self, sine_closes: list[float]) -> None:
        bundle = compute_indicators(sine_closes)
        assert bundle.rsi == rsi(sine_closes, 14)
        assert bundle.macd == macd(sine_closes, 12, 26, 9)
        assert bundle.bollinger == bollinger(sine_closes, 20, 2.0)
        assert bundle.ema50 == ema(sine_closes, 50)
        assert bundle.ema200 == ema(sine_closes, 200)

    def test_custom_settings(self, sine_closes: list[float]) -> None:
        settings = IndicatorConfig(rsi_period=7, ema_fast=10, ema_slow=30)
        bundle = compute_indicators(sine_closes, settings)
        assert bundle.rsi == rsi(sine_closes, 7)
        assert bundle.ema50 == ema(sine_closes, 10)
        assert bundle.ema200 == ema(sine_closes, 30)

    def test_sinusoidal_thousand_candles(self) -> None:
        candles = generate_candles(1000, base_price=100.0, amplitude=10.0, drift=0.01)
        closes = extract_closes(candles)
        bundle = aggregate(candles)

        assert bundle.ema50 != bundle.ema200
        assert bundle.ema50 == ema(closes, 50)
        assert bundle.ema200 == ema(closes, 200)
        assert 0.0 <= bundle.rsi <= 100.0
        for n in range(15, len(closes) + 1):
            assert 0.0 <= rsi(closes[:n]) <= 100.0

    def test_deterministic(self) -> None:
        candles = generate_candles(500, drift=0.05)
        assert aggregate(candles) == aggregate(candles)

    def test_does_not_mutate_input(self) -> None:
        candles = generate_candles(300)
        snapshot = list(candles)
        aggregate(candles)
        assert candles == snapshot


class TestAggregateMany:
    def test_one_bundle_per_symbol_in_order(self) -> None:
        data = {
            "ETHUSDT": generate_candles(400, base_price=2500.0, amplitude=80.0),
            "BTCUSDT": generate_candles(400, base_price=60000.0, amplitude=900.0),
            "SOLUSDT": generate_candles(10),
        }
        result = aggregate_many(data, max_workers=2)
        assert list(result) == ["ETHUSDT", "BTCUSDT", "SOLUSDT"]
        for symbol, candles in data.items():
            assert result[symbol] == aggregate(candles)

    def test_empty_mapping(self) -> None:
        assert aggregate_many({}) == {}
