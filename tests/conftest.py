"""Shared test fixtures for cryptoscope."""

from __future__ import annotations

import math
import os

import pytest


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Drop CRYPTOSCOPE_* variables so every test sees code defaults."""
    for key in list(os.environ):
        if key.startswith("CRYPTOSCOPE_"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture
def sine_closes() -> list[float]:
    """1000 closes on a sinusoid with a slow upward drift."""
    return [
        100.0 + 10.0 * math.sin(2 * math.pi * i / 50) + 0.02 * i
        for i in range(1000)
    ]
