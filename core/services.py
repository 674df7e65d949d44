"""Service-layer functions for the core app.

Services in `core` coordinate Django configuration and I/O (uploads, files)
with the pure parsing/analysis modules, and shape results for the CLI and the
JSON endpoint.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from django.conf import settings

from analysis.aggregations import dedupe_percentiles, summarize
from analysis.document import LivesplitDocument
from analysis.dto import Attempt, Invalid, LivesplitAnalysis, RunSummary
from analysis.engine import analyze_livesplit
from analysis.units import format_duration_ms
from core.parsers.livesplit import read_livesplit_document, read_livesplit_file


@dataclass(frozen=True)
class LivesplitReport:
    """An analyzed document together with its headline summary."""

    analysis: LivesplitAnalysis
    summary: RunSummary


def analyze_livesplit_content(content: bytes | str, *, require_attempts: bool | None = None) -> LivesplitReport:
    """Read, analyze, and summarize LiveSplit file content.

    Args:
        content: Raw `.lss` file content.
        require_attempts: Reject documents with no attempts. Defaults to the
            `TIMELOSS_REQUIRE_ATTEMPTS` setting.

    Returns:
        LivesplitReport for the document.

    Raises:
        LivesplitError: When the content cannot be read or analyzed.
    """

    return _analyze_document(read_livesplit_document(content), require_attempts=require_attempts)


def analyze_livesplit_path(path: Path | str, *, require_attempts: bool | None = None) -> LivesplitReport:
    """Read a `.lss` file from disk and analyze it."""

    return _analyze_document(read_livesplit_file(path), require_attempts=require_attempts)


def _analyze_document(document: LivesplitDocument, *, require_attempts: bool | None) -> LivesplitReport:
    """Analyze a read document, defaulting `require_attempts` from settings."""

    if require_attempts is None:
        require_attempts = settings.TIMELOSS_REQUIRE_ATTEMPTS
    analysis = analyze_livesplit(document, require_attempts=require_attempts)
    return LivesplitReport(analysis=analysis, summary=summarize(analysis))


def analysis_payload(report: LivesplitReport) -> dict[str, Any]:
    """Serialize a report into a JSON-friendly dict.

    `Invalid.INVALID` values are rendered as the string `"invalid"`.
    """

    analysis = report.analysis
    summary = report.summary
    personal_best = analysis.personal_best

    return {
        "game_name": analysis.game_name,
        "category_name": analysis.category_name,
        "declared_attempt_count": analysis.declared_attempt_count,
        "summary": {
            "attempt_count": summary.attempt_count,
            "completed_run_count": summary.completed_run_count,
            "completed_run_percentage": _json_value(summary.completed_run_percentage),
            "total_duration_ms": analysis.total_duration,
            "average_duration_ms": _json_value(summary.average_duration),
            "longest_attempt_duration_ms": analysis.longest_attempt_duration,
            "personal_best_id": personal_best.id if personal_best is not None else None,
            "personal_best_duration_ms": personal_best.total_duration if personal_best is not None else None,
            "deaths_before_first_split": summary.deaths_before_first_split,
            "deaths_before_first_split_percentage": _json_value(summary.deaths_before_first_split_percentage),
            "most_deadly_segment_id": summary.most_deadly_segment_id,
            "most_deadly_segment_percentage": _json_value(summary.most_deadly_segment_percentage),
        },
        "humanized": {
            "total_duration": format_duration_ms(analysis.total_duration),
            "average_duration": format_duration_ms(summary.average_duration),
            "longest_duration": format_duration_ms(analysis.longest_attempt_duration),
            "personal_best_duration": format_duration_ms(
                personal_best.total_duration if personal_best is not None else None
            ),
        },
        "segments": [
            {
                "id": segment.id,
                "name": segment.name,
                "index": segment.index,
                "next_segment_id": segment.next_segment_id,
                "is_last_segment": segment.is_last_segment,
                "total_deaths": segment.total_deaths,
            }
            for segment in analysis.segments
        ],
        "attempts": [_attempt_payload(attempt) for attempt in analysis.attempts],
        "percentiles": [
            {"percentile": point.percentile, "segment_id": point.segment_id}
            for point in analysis.percentiles
        ],
        "percentile_death_points": [
            {"percentile": point.percentile, "segment_id": point.segment_id}
            for point in dedupe_percentiles(analysis.percentiles)
            if point.segment_id is not None
        ],
    }


def _attempt_payload(attempt: Attempt) -> dict[str, Any]:
    """Serialize a single attempt."""

    return {
        "id": attempt.id,
        "segment_times": dict(attempt.segment_times),
        "total_duration_ms": attempt.total_duration,
        "has_ended": attempt.has_ended,
        "last_recorded_segment_id": attempt.last_recorded_segment_id,
        "death_segment_id": attempt.death_segment_id,
        "is_complete": attempt.is_complete,
    }


def _json_value(value: int | float | Invalid) -> int | float | str:
    """Render the invalid sentinel as a string and pass numbers through."""

    if value is Invalid.INVALID:
        return value.value
    return value
