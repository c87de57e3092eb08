"""Kline (candle) parsing and candle file loading.

All string/float-to-Decimal conversion happens here: this is the Decimal
boundary for market data. Exchange REST responses encode prices as
strings inside positional rows:

    [openTime, "open", "high", "low", "close", "volume", closeTime, ...]

Trailing fields (quote volume, trade count, ...) are ignored.
"""

from __future__ import annotations

import json
from collections.abc import Iterable, Mapping, Sequence
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any

import pandas as pd
import structlog

from cryptoscope.market.errors import KlineFormatError, MarketDataError
from cryptoscope.market.types import Candle
from cryptoscope.utils.time import from_epoch_ms

log = structlog.get_logger()

# Contract key -> position in the exchange row
_ROW_FIELDS: tuple[str, ...] = (
    "openTime",
    "open",
    "high",
    "low",
    "close",
    "volume",
    "closeTime",
)

# CSV column -> contract key
_CSV_COLUMNS: dict[str, str] = {
    "open_time": "openTime",
    "open": "open",
    "high": "high",
    "low": "low",
    "close": "close",
    "volume": "volume",
    "close_time": "closeTime",
}


def to_decimal(value: float | int | str) -> Decimal:
    """Convert a float, int or string to Decimal safely.

    For string values (REST payloads): Decimal(str_value) directly.
    For float values: Decimal(str(float_value)) to avoid IEEE 754 noise.

    Raises:
        ValueError: If the value is not a finite number.
    """
    if isinstance(value, bool):
        raise ValueError(f"not a number: {value!r}")
    try:
        result = Decimal(value) if isinstance(value, (str, int)) else Decimal(str(value))
    except (InvalidOperation, TypeError) as e:
        raise ValueError(f"not a number: {value!r}") from e
    if not result.is_finite():
        raise ValueError(f"not a finite number: {value!r}")
    return result


def _to_millis(value: Any) -> int:
    if isinstance(value, bool):
        raise ValueError(f"not a timestamp: {value!r}")
    if isinstance(value, int):
        millis = value
    else:
        try:
            millis = int(to_decimal(value))
        except ValueError as e:
            raise ValueError(f"not a timestamp: {value!r}") from e
    # Must be representable as a datetime for the report's "as of" line
    try:
        from_epoch_ms(millis)
    except OverflowError as e:
        raise ValueError(f"timestamp out of range: {value!r}") from e
    return millis


def parse_kline(raw: Sequence[Any] | Mapping[str, Any]) -> Candle:
    """Convert one exchange row or contract-keyed mapping into a Candle.

    Raises:
        KlineFormatError: Row too short, key missing, or a non-numeric field.
    """
    if isinstance(raw, Mapping):
        missing = [k for k in _ROW_FIELDS if k not in raw]
        if missing:
            raise KlineFormatError(f"missing fields: {', '.join(missing)}")
        values = [raw[k] for k in _ROW_FIELDS]
    elif isinstance(raw, Sequence) and not isinstance(raw, str):
        if len(raw) < len(_ROW_FIELDS):
            raise KlineFormatError(
                f"expected at least {len(_ROW_FIELDS)} fields, got {len(raw)}"
            )
        values = list(raw[: len(_ROW_FIELDS)])
    else:
        raise KlineFormatError(f"unsupported kline type: {type(raw).__name__}")

    open_time, open_, high, low, close, volume, close_time = values
    try:
        return Candle(
            open_time=_to_millis(open_time),
            open=to_decimal(open_),
            high=to_decimal(high),
            low=to_decimal(low),
            close=to_decimal(close),
            volume=to_decimal(volume),
            close_time=_to_millis(close_time),
        )
    except ValueError as e:
        raise KlineFormatError(str(e)) from e


def parse_klines(rows: Iterable[Sequence[Any] | Mapping[str, Any]]) -> list[Candle]:
    """Parse rows in order. No filtering, no sorting.

    Raises:
        KlineFormatError: With the index of the first bad row.
    """
    candles: list[Candle] = []
    for index, row in enumerate(rows):
        try:
            candles.append(parse_kline(row))
        except KlineFormatError as e:
            raise KlineFormatError(e.message, index=index) from e
    return candles


def load_candles(path: str | Path) -> list[Candle]:
    """Load candles from a .json or .csv file, oldest first as stored.

    JSON files hold a list of exchange rows or contract-keyed objects.
    CSV files need the columns open_time, open, high, low, close,
    volume, close_time.

    Raises:
        MarketDataError: Missing file, unsupported suffix or unreadable content.
        KlineFormatError: A row could not be parsed.
    """
    path = Path(path)
    if not path.is_file():
        raise MarketDataError(f"Candle file not found: {path}")

    suffix = path.suffix.lower()
    if suffix == ".json":
        rows = _read_json_rows(path)
    elif suffix == ".csv":
        rows = _read_csv_rows(path)
    else:
        raise MarketDataError(
            f"Unsupported candle file type {suffix!r} (expected .json or .csv)"
        )

    candles = parse_klines(rows)
    log.info("candles_loaded", path=str(path), candle_count=len(candles))
    return candles


def _read_json_rows(path: Path) -> list[Any]:
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise MarketDataError(f"Invalid JSON in {path}: {e}") from e
    if not isinstance(payload, list):
        raise MarketDataError(f"Expected a JSON list of klines in {path}")
    return payload


def _read_csv_rows(path: Path) -> list[dict[str, Any]]:
    try:
        frame = pd.read_csv(path, dtype=str)
    except pd.errors.EmptyDataError as e:
        raise MarketDataError(f"Empty CSV file: {path}") from e
    except pd.errors.ParserError as e:
        raise MarketDataError(f"Invalid CSV in {path}: {e}") from e

    missing = [c for c in _CSV_COLUMNS if c not in frame.columns]
    if missing:
        raise MarketDataError(
            f"CSV {path} is missing columns: {', '.join(missing)}"
        )

    frame = frame[list(_CSV_COLUMNS)].rename(columns=_CSV_COLUMNS)
    return frame.to_dict(orient="records")
