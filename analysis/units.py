"""Formatting helpers for durations and ratios.

Durations are humanized in long form, e.g.
`1 day, 2 hours, 3 minutes and 4 seconds`. Sub-second remainders are dropped.
"""

from __future__ import annotations

from typing import Final

from .dto import Invalid

INVALID_DISPLAY: Final[str] = "invalid"

_UNITS: Final[tuple[tuple[str, int], ...]] = (
    ("day", 86_400),
    ("hour", 3_600),
    ("minute", 60),
    ("second", 1),
)


def format_duration_ms(milliseconds: int | Invalid | None) -> str:
    """Humanize a millisecond duration.

    Args:
        milliseconds: Duration in milliseconds. Negative values are prefixed
            with `-`. None and `Invalid.INVALID` render as `invalid`.

    Returns:
        A string like `2 hours, 5 minutes and 1 second`, or `0 seconds`.
    """

    if milliseconds is None or milliseconds is Invalid.INVALID:
        return INVALID_DISPLAY

    sign = "-" if milliseconds < 0 else ""
    remaining = abs(int(milliseconds)) // 1000

    parts: list[str] = []
    for label, size in _UNITS:
        amount, remaining = divmod(remaining, size)
        if amount:
            parts.append(f"{amount} {label}{'' if amount == 1 else 's'}")

    if not parts:
        return "0 seconds"
    if len(parts) == 1:
        return f"{sign}{parts[0]}"
    return f"{sign}{', '.join(parts[:-1])} and {parts[-1]}"


def format_percentage(value: int | Invalid) -> str:
    """Render a floored percentage, or `invalid` for the sentinel."""

    if value is Invalid.INVALID:
        return INVALID_DISPLAY
    return f"{value}%"
