"""Orchestration entry points for the Analysis Engine.

The Analysis Engine is a pure, non-Django module that accepts an in-memory
`LivesplitDocument` and returns DTOs. It must not import Django or perform I/O.
"""

from __future__ import annotations

import logging

from .aggregations import (
    apply_death_totals,
    calculate_percentiles,
    completed_run_count,
    count_deaths_by_segment,
    find_personal_best,
    longest_duration,
    total_duration,
)
from .attempts import attribute_deaths, correlate_segment_times, extract_attempts
from .document import LivesplitDocument
from .dto import LivesplitAnalysis
from .errors import DegenerateInputError
from .segments import build_segments, segment_ids_by_position

logger = logging.getLogger(__name__)


def analyze_livesplit(document: LivesplitDocument, *, require_attempts: bool = False) -> LivesplitAnalysis:
    """Analyze a LiveSplit document and return the result model.

    Args:
        document: Read-only document produced by `core.parsers.livesplit`.
        require_attempts: Raise instead of returning a result with no attempts.

    Returns:
        LivesplitAnalysis with segments, attributed attempts, and aggregates.

    Raises:
        StructuralError: When the document declares no segments or an attempt
            has no identity.
        TimestampParseError: When any time token is malformed.
        DegenerateInputError: When `require_attempts` is set and the document
            has no attempts.
    """

    segments = build_segments(document.segments)
    partial_attempts = extract_attempts(document.attempts)
    if require_attempts and not partial_attempts:
        raise DegenerateInputError("The document does not contain any attempts.")

    timed_attempts = correlate_segment_times(segment_ids_by_position(segments), document.segments, partial_attempts)
    attempts = tuple(attribute_deaths(timed_attempts, segments).values())

    segments = apply_death_totals(segments, count_deaths_by_segment(attempts))
    run_count = len(attempts)
    completed = completed_run_count(attempts)

    logger.info(
        "Analyzed LiveSplit document: %d segments, %d attempts, %d completed.",
        len(segments),
        run_count,
        completed,
    )

    return LivesplitAnalysis(
        segments=segments,
        attempts=attempts,
        run_count=run_count,
        total_duration=total_duration(attempts),
        longest_attempt_duration=longest_duration(attempts),
        personal_best=find_personal_best(attempts),
        completed_run_count=completed,
        percentiles=calculate_percentiles(segments, run_count),
        game_name=document.game_name,
        category_name=document.category_name,
        declared_attempt_count=document.declared_attempt_count,
    )
