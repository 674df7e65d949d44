"""Attempt extraction, segment-time correlation, and death attribution.

Each step returns freshly built `Attempt` objects; inputs are never mutated.
Per-attempt work is independent of every other attempt and only reads the
shared segment chain.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import replace
from types import MappingProxyType

from .document import AttemptNode, SegmentNode
from .dto import Attempt, Segment
from .errors import StructuralError, TimestampParseError
from .timestamps import milliseconds_between, parse_attempt_datetime, parse_timestamp

logger = logging.getLogger(__name__)


def calculate_attempt_duration(node: AttemptNode) -> int:
    """Compute an attempt's duration in milliseconds.

    Args:
        node: Attempt record from the document.

    Returns:
        `ended - started - pause_time` in milliseconds, or 0 when the attempt
        has no end timestamp. Zero and negative results are returned as-is.

    Raises:
        TimestampParseError: When a timestamp or the pause token is malformed,
            or when an ended attempt has no start timestamp.
    """

    if not node.ended:
        return 0
    if not node.started:
        raise TimestampParseError(
            raw_value=node.ended,
            expected=f"a `started` timestamp on attempt {node.attempt_id}",
        )

    duration = milliseconds_between(
        parse_attempt_datetime(node.started),
        parse_attempt_datetime(node.ended),
    )
    if node.pause_time is not None and node.pause_time.strip():
        duration -= parse_timestamp(node.pause_time)
    return duration


def extract_attempts(nodes: Iterable[AttemptNode]) -> dict[str, Attempt]:
    """Build the partial attempt collection keyed by attempt identity.

    Completion and death attribution are left undetermined.

    Raises:
        StructuralError: When an attempt has no identity.
        TimestampParseError: When an attempt timestamp is malformed.
    """

    attempts: dict[str, Attempt] = {}
    for position, node in enumerate(nodes):
        attempt_id = (node.attempt_id or "").strip()
        if not attempt_id:
            raise StructuralError(f"Attempt #{position + 1} has no id attribute.", node="Attempt")
        if attempt_id in attempts:
            logger.warning("Duplicate attempt id %s; keeping the later record.", attempt_id)
        attempts[attempt_id] = Attempt(
            id=attempt_id,
            total_duration=calculate_attempt_duration(node),
            has_ended=bool(node.ended),
        )
    return attempts


def correlate_segment_times(
    segment_ids: Mapping[int, str],
    nodes: Sequence[SegmentNode],
    attempts: Mapping[str, Attempt],
) -> dict[str, Attempt]:
    """Populate each attempt's per-segment time mapping.

    Args:
        segment_ids: Position -> segment identity side-table from
            `segment_ids_by_position`.
        nodes: Segment declarations carrying their history entries.
        attempts: Partial attempts keyed by identity.

    Returns:
        A new mapping of attempts with `segment_times` populated. History
        entries citing an unknown attempt are ignored.

    Raises:
        StructuralError: When a segment node has no assigned identity.
    """

    times: dict[str, dict[str, int | None]] = {attempt_id: {} for attempt_id in attempts}
    ignored = 0
    for position, node in enumerate(nodes):
        segment_id = segment_ids.get(position)
        if segment_id is None:
            raise StructuralError(f"Segment #{position + 1} has no assigned identity.", node="Segment")
        for entry in node.history:
            attempt_times = times.get(entry.attempt_id.strip())
            if attempt_times is None:
                ignored += 1
                continue
            token = entry.time_token
            attempt_times[segment_id] = parse_timestamp(token) if token is not None else None

    if ignored:
        logger.debug("Ignored %d segment history entries for unknown attempts.", ignored)

    return {
        attempt_id: replace(attempt, segment_times=MappingProxyType(times[attempt_id]))
        for attempt_id, attempt in attempts.items()
    }


def attribute_death(attempt: Attempt, segments: Sequence[Segment]) -> Attempt:
    """Determine an attempt's last reached segment, completion, and death segment.

    Args:
        attempt: Attempt with populated `segment_times`.
        segments: Segment chain ordered by index.

    Returns:
        A copy of the attempt with attribution fields filled in.
    """

    segments_by_id = {segment.id: segment for segment in segments}
    last_reached: Segment | None = None
    for segment_id, time in attempt.segment_times.items():
        segment = segments_by_id.get(segment_id)
        if time is None or segment is None:
            continue
        if last_reached is None or segment.index > last_reached.index:
            last_reached = segment

    if last_reached is None:
        return replace(
            attempt,
            last_recorded_segment_id=None,
            death_segment_id=segments[0].id,
            is_complete=False,
        )

    if last_reached.is_last_segment:
        return replace(
            attempt,
            last_recorded_segment_id=last_reached.id,
            death_segment_id=None,
            is_complete=True,
        )

    return replace(
        attempt,
        last_recorded_segment_id=last_reached.id,
        death_segment_id=last_reached.next_segment_id,
        is_complete=False,
    )


def attribute_deaths(attempts: Mapping[str, Attempt], segments: Sequence[Segment]) -> dict[str, Attempt]:
    """Apply `attribute_death` to every attempt independently."""

    return {attempt_id: attribute_death(attempt, segments) for attempt_id, attempt in attempts.items()}
