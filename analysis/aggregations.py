"""Aggregation helpers for the Analysis Engine.

This module folds attributed attempts and segments into summary statistics
without introducing Django dependencies. Every helper builds a fresh result
and leaves its inputs untouched.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import replace
from typing import Final

from .dto import Attempt, Invalid, LivesplitAnalysis, PercentileDeathPoint, RunSummary, Segment

PERCENTILES: Final[tuple[float, ...]] = (0.50, 0.75, 0.90, 0.95)


def count_deaths_by_segment(attempts: Iterable[Attempt]) -> Counter[str]:
    """Count attempts per death segment identity.

    Complete attempts have no death segment and are not counted.
    """

    counts: Counter[str] = Counter()
    for attempt in attempts:
        if attempt.death_segment_id is not None:
            counts[attempt.death_segment_id] += 1
    return counts


def merge_death_counts(partials: Iterable[Mapping[str, int]]) -> Counter[str]:
    """Combine per-segment death counts computed over disjoint attempt sets."""

    merged: Counter[str] = Counter()
    for partial in partials:
        merged.update(partial)
    return merged


def apply_death_totals(segments: Sequence[Segment], counts: Mapping[str, int]) -> tuple[Segment, ...]:
    """Return copies of `segments` with `total_deaths` populated from `counts`."""

    return tuple(replace(segment, total_deaths=counts.get(segment.id, 0)) for segment in segments)


def total_duration(attempts: Iterable[Attempt]) -> int:
    """Sum attempt durations in milliseconds."""

    return sum(attempt.total_duration for attempt in attempts)


def longest_duration(attempts: Iterable[Attempt]) -> int | None:
    """Return the largest attempt duration, or None when there are no attempts."""

    return max((attempt.total_duration for attempt in attempts), default=None)


def completed_run_count(attempts: Iterable[Attempt]) -> int:
    """Count complete attempts."""

    return sum(1 for attempt in attempts if attempt.is_complete)


def find_personal_best(attempts: Iterable[Attempt]) -> Attempt | None:
    """Return the complete attempt with the smallest duration.

    Ties resolve to the earliest attempt in document order. Returns None when
    no attempt is complete.
    """

    best: Attempt | None = None
    for attempt in attempts:
        if not attempt.is_complete:
            continue
        if best is None or attempt.total_duration < best.total_duration:
            best = attempt
    return best


def calculate_percentiles(
    segments: Sequence[Segment],
    run_count: int,
    *,
    targets: Sequence[float] = PERCENTILES,
) -> tuple[PercentileDeathPoint, ...]:
    """Resolve percentile death points.

    Args:
        segments: Segments ordered by index with `total_deaths` applied.
        run_count: Total number of attempts.
        targets: Ascending target fractions.

    Returns:
        One point per target. A target resolves to the first segment at which
        the running death fraction strictly exceeds it; targets never exceeded
        (or any target when `run_count` is 0) resolve to None.
    """

    points: list[PercentileDeathPoint] = []
    for target in targets:
        resolved: str | None = None
        if run_count > 0:
            running = 0
            for segment in segments:
                running += segment.total_deaths
                if running / run_count > target:
                    resolved = segment.id
                    break
        points.append(PercentileDeathPoint(percentile=target, segment_id=resolved))
    return tuple(points)


def dedupe_percentiles(points: Iterable[PercentileDeathPoint]) -> tuple[PercentileDeathPoint, ...]:
    """Drop points that resolve to the same segment as the preceding point."""

    deduped: list[PercentileDeathPoint] = []
    previous: str | None = None
    for point in points:
        if deduped and point.segment_id == previous:
            continue
        deduped.append(point)
        previous = point.segment_id
    return tuple(deduped)


def ratio(numerator: float, denominator: float) -> float | Invalid:
    """Return `numerator / denominator`, or `Invalid.INVALID` for a zero denominator."""

    if denominator == 0:
        return Invalid.INVALID
    return numerator / denominator


def floored_percentage(numerator: int, denominator: int) -> int | Invalid:
    """Return `floor(numerator / denominator * 100)` or `Invalid.INVALID`."""

    value = ratio(numerator * 100, denominator)
    if value is Invalid.INVALID:
        return value
    return int(value // 1)


def average_duration(attempts: Iterable[Attempt], *, include_unended: bool = True) -> int | Invalid:
    """Compute the floored mean attempt duration in milliseconds.

    Args:
        attempts: Attempts to average.
        include_unended: Whether attempts without an end timestamp (duration 0)
            take part in the average.

    Returns:
        Mean duration, or `Invalid.INVALID` when no attempts take part.
    """

    selected = [attempt for attempt in attempts if include_unended or attempt.has_ended]
    value = ratio(total_duration(selected), len(selected))
    if value is Invalid.INVALID:
        return value
    return int(value // 1)


def most_deadly_segment(segments: Iterable[Segment]) -> Segment | None:
    """Return the segment with the most deaths (earliest on ties), None if nobody died."""

    best: Segment | None = None
    for segment in segments:
        if segment.total_deaths <= 0:
            continue
        if best is None or segment.total_deaths > best.total_deaths:
            best = segment
    return best


def death_counts_by_segment_name(segments: Iterable[Segment]) -> tuple[tuple[str, int], ...]:
    """Return `(name, deaths)` pairs in segment order, merging repeated names."""

    counts: dict[str, int] = {}
    for segment in segments:
        counts[segment.name] = counts.get(segment.name, 0) + segment.total_deaths
    return tuple(counts.items())


def summarize(analysis: LivesplitAnalysis) -> RunSummary:
    """Build headline statistics for an analyzed document.

    Args:
        analysis: Result model returned by `analyze_livesplit`.

    Returns:
        RunSummary. Every ratio is `Invalid.INVALID` when there are no attempts.
    """

    run_count = analysis.run_count
    first_segment = analysis.segments[0] if analysis.segments else None
    deaths_before_first_split = first_segment.total_deaths if first_segment is not None else 0
    deadliest = most_deadly_segment(analysis.segments)

    return RunSummary(
        attempt_count=run_count,
        completed_run_count=analysis.completed_run_count,
        completed_run_percentage=floored_percentage(analysis.completed_run_count, run_count),
        average_duration=average_duration(analysis.attempts),
        deaths_before_first_split=deaths_before_first_split,
        deaths_before_first_split_percentage=floored_percentage(deaths_before_first_split, run_count),
        most_deadly_segment_id=deadliest.id if deadliest is not None else None,
        most_deadly_segment_percentage=floored_percentage(
            deadliest.total_deaths if deadliest is not None else 0,
            run_count,
        ),
        death_counts_by_segment_name=death_counts_by_segment_name(analysis.segments),
    )
