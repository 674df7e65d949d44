"""DTO types returned by the Analysis Engine.

DTOs are plain data containers used to transport analysis results to the CLI
and the JSON endpoint. They intentionally avoid any Django dependencies.
Cross-references between attempts and segments are by identity only.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType

UNNAMED_SEGMENT = "<Unnamed>"


class Invalid(Enum):
    """Sentinel for ratios whose denominator is zero."""

    INVALID = "invalid"


@dataclass(frozen=True, slots=True)
class Segment:
    """A named checkpoint in the run.

    Attributes:
        id: Identity assigned while building the segment chain.
        name: Display name, `<Unnamed>` when the document has none.
        index: Zero-based position in document order.
        next_segment_id: Identity of the following segment, None for the last.
        is_last_segment: True only for the terminal segment.
        total_deaths: Attempts whose death segment is this one.
    """

    id: str
    name: str
    index: int
    next_segment_id: str | None
    is_last_segment: bool
    total_deaths: int = 0


@dataclass(frozen=True, slots=True)
class Attempt:
    """One recorded playthrough, complete or abandoned.

    Attributes:
        id: Attempt identity from the document.
        segment_times: Segment id -> elapsed milliseconds, None when the entry
            exists without a time. Segments never reached are missing.
        total_duration: Wall time minus pause time in milliseconds, 0 when the
            attempt has no end timestamp.
        has_ended: Whether the attempt recorded an end timestamp.
        last_recorded_segment_id: Furthest segment with a recorded time.
        death_segment_id: Segment the attempt failed to reach, None if complete.
        is_complete: True iff the last recorded segment is the terminal one.
    """

    id: str
    segment_times: Mapping[str, int | None] = field(
        default_factory=lambda: MappingProxyType({}),
        hash=False,
    )
    total_duration: int = 0
    has_ended: bool = False
    last_recorded_segment_id: str | None = None
    death_segment_id: str | None = None
    is_complete: bool = False


@dataclass(frozen=True, slots=True)
class PercentileDeathPoint:
    """The earliest segment by which a fraction of all attempts has died.

    Attributes:
        percentile: Target fraction (e.g. 0.5).
        segment_id: Resolved segment, or None when the target is never exceeded.
    """

    percentile: float
    segment_id: str | None


@dataclass(frozen=True)
class LivesplitAnalysis:
    """Result model for one analyzed document.

    Attributes:
        segments: Segments ordered by index, with death totals applied.
        attempts: Attempts in document order.
        run_count: Number of attempts.
        total_duration: Sum of attempt durations (ms).
        longest_attempt_duration: Largest attempt duration, None with no attempts.
        personal_best: Complete attempt with the smallest duration, if any.
        completed_run_count: Number of complete attempts.
        percentiles: Percentile death points in ascending target order.
        game_name: Game name from the document, if any.
        category_name: Category name from the document, if any.
        declared_attempt_count: LiveSplit's own `AttemptCount` counter, if any.
            It can exceed `run_count` when older history was discarded.
    """

    segments: tuple[Segment, ...]
    attempts: tuple[Attempt, ...]
    run_count: int
    total_duration: int
    longest_attempt_duration: int | None
    personal_best: Attempt | None
    completed_run_count: int
    percentiles: tuple[PercentileDeathPoint, ...] = ()
    game_name: str | None = None
    category_name: str | None = None
    declared_attempt_count: int | None = None

    def segment_by_id(self, segment_id: str | None) -> Segment | None:
        """Return the segment with the given identity, if present."""

        if segment_id is None:
            return None
        for segment in self.segments:
            if segment.id == segment_id:
                return segment
        return None

    def attempt_by_id(self, attempt_id: str) -> Attempt | None:
        """Return the attempt with the given identity, if present."""

        for attempt in self.attempts:
            if attempt.id == attempt_id:
                return attempt
        return None


@dataclass(frozen=True)
class RunSummary:
    """Headline statistics derived from a `LivesplitAnalysis`.

    Percentages are floored integers; every ratio is `Invalid.INVALID` when
    the document has no attempts.
    """

    attempt_count: int
    completed_run_count: int
    completed_run_percentage: int | Invalid
    average_duration: int | Invalid
    deaths_before_first_split: int
    deaths_before_first_split_percentage: int | Invalid
    most_deadly_segment_id: str | None
    most_deadly_segment_percentage: int | Invalid
    death_counts_by_segment_name: tuple[tuple[str, int], ...] = ()
