"""Timestamp parsing for LiveSplit duration and attempt tokens.

LiveSplit stores elapsed times as .NET `TimeSpan` strings (`1.02:03:04.5670000`)
and attempt boundaries as `MM/dd/yyyy HH:mm:ss` datetimes. Both are parsed here
without consulting the wall clock or the local timezone.
"""

from __future__ import annotations

import re
from datetime import datetime
from typing import Final

from .errors import TimestampParseError

MILLISECONDS_PER_SECOND: Final[int] = 1000
MILLISECONDS_PER_MINUTE: Final[int] = 60 * MILLISECONDS_PER_SECOND
MILLISECONDS_PER_HOUR: Final[int] = 60 * MILLISECONDS_PER_MINUTE
MILLISECONDS_PER_DAY: Final[int] = 24 * MILLISECONDS_PER_HOUR

ATTEMPT_DATETIME_FORMAT: Final[str] = "%m/%d/%Y %H:%M:%S"

_DAY_PREFIX_RE = re.compile(r"^(?P<days>[0-9]+)\.")
_FRACTION_SUFFIX_RE = re.compile(r"\.[0-9]+$")
_CLOCK_RE = re.compile(
    r"^(?P<hours>[0-9]{1,2}):(?P<minutes>[0-9]{2}):(?P<seconds>[0-9]{2})\.(?P<fraction>[0-9]{1,7})$"
)
_EMPTY_FRACTION: Final[str] = ".0000000"


def parse_timestamp(raw_value: str) -> int:
    """Parse a LiveSplit duration token into milliseconds.

    Args:
        raw_value: Token such as `00:01:02.3450000`, `1.02:00:00` or `00:00:05`.

    Returns:
        Elapsed time in whole milliseconds. Sub-millisecond digits are truncated.

    Raises:
        TimestampParseError: When the clock component is not `HH:mm:ss[.fffffff]`.
    """

    timestamp = raw_value.strip()
    day_duration = 0

    day_match = _DAY_PREFIX_RE.match(timestamp)
    if day_match is not None:
        day_duration = int(day_match.group("days")) * MILLISECONDS_PER_DAY
        timestamp = timestamp[day_match.end():]

    if _FRACTION_SUFFIX_RE.search(timestamp) is None:
        timestamp += _EMPTY_FRACTION

    clock = _CLOCK_RE.match(timestamp)
    if clock is None:
        raise TimestampParseError(raw_value=raw_value, expected="[d.]HH:mm:ss[.fffffff]")

    hours = int(clock.group("hours"))
    minutes = int(clock.group("minutes"))
    seconds = int(clock.group("seconds"))
    if hours > 23 or minutes > 59 or seconds > 59:
        raise TimestampParseError(raw_value=raw_value, expected="[d.]HH:mm:ss[.fffffff]")

    milliseconds = int(clock.group("fraction")[:3].ljust(3, "0"))

    return (
        day_duration
        + hours * MILLISECONDS_PER_HOUR
        + minutes * MILLISECONDS_PER_MINUTE
        + seconds * MILLISECONDS_PER_SECOND
        + milliseconds
    )


def parse_attempt_datetime(raw_value: str) -> datetime:
    """Parse an attempt `started`/`ended` attribute into a naive datetime.

    Raises:
        TimestampParseError: When the value is not `MM/dd/yyyy HH:mm:ss`.
    """

    try:
        return datetime.strptime(raw_value.strip(), ATTEMPT_DATETIME_FORMAT)
    except ValueError as exc:
        raise TimestampParseError(raw_value=raw_value, expected="MM/dd/yyyy HH:mm:ss") from exc


def milliseconds_between(start: datetime, end: datetime) -> int:
    """Return `end - start` in whole milliseconds (may be negative)."""

    delta = end - start
    return (delta.days * 86_400 + delta.seconds) * MILLISECONDS_PER_SECOND + delta.microseconds // 1000
