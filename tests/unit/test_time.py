"""Tests for UTC helpers."""

from __future__ import annotations

from datetime import UTC, datetime

from cryptoscope.utils.time import (
    format_timestamp,
    from_epoch_ms,
    to_epoch_ms,
)


class TestFormatTimestamp:
    def test_format_timestamp_z_suffix(self) -> None:
        dt = datetime(2026, 2, 14, 12, 30, 45, 123456, tzinfo=UTC)
        assert format_timestamp(dt) == "2026-02-14T12:30:45.123456Z"

    def test_format_naive_as_utc(self) -> None:
        dt = datetime(2026, 2, 14, 12, 30, 45)
        assert format_timestamp(dt) == "2026-02-14T12:30:45.000000Z"


class TestEpochMillis:
    def test_from_epoch_ms(self) -> None:
        assert from_epoch_ms(0) == datetime(1970, 1, 1, tzinfo=UTC)
        assert from_epoch_ms(1_704_067_200_000) == datetime(2024, 1, 1, tzinfo=UTC)

    def test_keeps_milliseconds(self) -> None:
        dt = from_epoch_ms(1_704_067_200_999)
        assert dt.microsecond == 999_000

    def test_to_epoch_ms(self) -> None:
        assert to_epoch_ms(datetime(2024, 1, 1, tzinfo=UTC)) == 1_704_067_200_000

    def test_to_epoch_ms_naive_is_utc(self) -> None:
        assert to_epoch_ms(datetime(2024, 1, 1)) == 1_704_067_200_000

    def test_close_time_millisecond(self) -> None:
        ms = 1_704_070_799_999
        assert to_epoch_ms(from_epoch_ms(ms)) == ms
