"""Tests for LiveSplit duration and attempt timestamp parsing."""

from __future__ import annotations

from datetime import datetime

import pytest

from analysis.errors import LivesplitError, TimestampParseError
from analysis.timestamps import (
    MILLISECONDS_PER_DAY,
    MILLISECONDS_PER_HOUR,
    milliseconds_between,
    parse_attempt_datetime,
    parse_timestamp,
)

pytestmark = pytest.mark.unit


@pytest.mark.parametrize(
    ("raw_value", "expected"),
    [
        ("00:00:00", 0),
        ("00:01:02.3450000", 62_345),
        ("01:00:00.0000000", 3_600_000),
        ("  00:00:05  ", 5_000),
        ("00:00:01.5", 1_500),
        ("00:00:01.9999999", 1_999),
        ("1.02:00:00.0000000", MILLISECONDS_PER_DAY + 2 * MILLISECONDS_PER_HOUR),
        ("2.00:00:00", 2 * MILLISECONDS_PER_DAY),
        ("23:59:59.9990000", MILLISECONDS_PER_DAY - 1),
    ],
)
def test_parse_timestamp_returns_milliseconds(raw_value: str, expected: int) -> None:
    """Parse TimeSpan-style tokens into whole milliseconds."""

    assert parse_timestamp(raw_value) == expected


@pytest.mark.parametrize("raw_value", ["", "garbage", "1:2:3", "00:61:00", "24:00:00", "00:00:00.12345678"])
def test_parse_timestamp_rejects_malformed_tokens(raw_value: str) -> None:
    """Reject tokens whose clock component does not match `HH:mm:ss`."""

    with pytest.raises(TimestampParseError) as excinfo:
        parse_timestamp(raw_value)

    assert excinfo.value.raw_value == raw_value
    assert isinstance(excinfo.value, LivesplitError)


def test_parse_attempt_datetime_uses_month_first_format() -> None:
    """Attempt timestamps are `MM/dd/yyyy HH:mm:ss`."""

    assert parse_attempt_datetime("02/03/2024 04:05:06") == datetime(2024, 2, 3, 4, 5, 6)


def test_parse_attempt_datetime_rejects_other_formats() -> None:
    """Fail fast on ISO or otherwise unrecognized timestamps."""

    with pytest.raises(TimestampParseError):
        parse_attempt_datetime("2024-02-03T04:05:06")


def test_milliseconds_between_tolerates_negative_spans() -> None:
    """Subtracting a later start yields a negative millisecond count."""

    start = datetime(2024, 1, 1, 12, 0, 0)
    end = datetime(2024, 1, 1, 11, 59, 58)

    assert milliseconds_between(start, end) == -2_000
    assert milliseconds_between(end, start) == 2_000
