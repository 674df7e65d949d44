"""Tests for duration and percentage formatting."""

from __future__ import annotations

import pytest

from analysis.dto import Invalid
from analysis.units import format_duration_ms, format_percentage

pytestmark = pytest.mark.unit


@pytest.mark.parametrize(
    ("milliseconds", "expected"),
    [
        (0, "0 seconds"),
        (999, "0 seconds"),
        (1_000, "1 second"),
        (3_723_000, "1 hour, 2 minutes and 3 seconds"),
        (300_000, "5 minutes"),
        (90_061_000, "1 day, 1 hour, 1 minute and 1 second"),
        (-82_800_000, "-23 hours"),
    ],
)
def test_format_duration_ms(milliseconds: int, expected: str) -> None:
    """Humanize durations with an `and` before the last unit."""

    assert format_duration_ms(milliseconds) == expected


def test_invalid_values_render_explicitly() -> None:
    """The invalid sentinel and missing values render as `invalid`."""

    assert format_duration_ms(Invalid.INVALID) == "invalid"
    assert format_duration_ms(None) == "invalid"
    assert format_percentage(Invalid.INVALID) == "invalid"
    assert format_percentage(42) == "42%"
