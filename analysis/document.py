"""Read-only document model consumed by the Analysis Engine.

These dataclasses hold the untrusted raw strings found in a LiveSplit file.
They are produced by `core.parsers.livesplit` and never mutated; parsing into
typed values happens inside the engine.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class SegmentHistoryEntry:
    """One recorded per-attempt time for a segment.

    Attributes:
        attempt_id: Attempt identity cited by the entry.
        game_time: Raw `GameTime` text if present.
        real_time: Raw `RealTime` text if present.
    """

    attempt_id: str
    game_time: str | None = None
    real_time: str | None = None

    @property
    def time_token(self) -> str | None:
        """Return the preferred time token (game time over real time)."""

        if self.game_time is not None:
            return self.game_time
        return self.real_time


@dataclass(frozen=True, slots=True)
class SegmentNode:
    """A segment declaration in document order.

    Attributes:
        name: Raw segment name, or None when the node has no name.
        history: Per-attempt completion-time entries for this segment.
    """

    name: str | None
    history: tuple[SegmentHistoryEntry, ...] = ()


@dataclass(frozen=True, slots=True)
class AttemptNode:
    """An attempt record from the attempt history.

    Attributes:
        attempt_id: Attempt identity (the `id` attribute).
        started: Raw start timestamp.
        ended: Raw end timestamp, or None when the attempt never ended.
        pause_time: Raw pause duration token, or None when absent.
    """

    attempt_id: str
    started: str | None
    ended: str | None = None
    pause_time: str | None = None


@dataclass(frozen=True, slots=True)
class LivesplitDocument:
    """A fully materialized LiveSplit run-history document."""

    segments: tuple[SegmentNode, ...]
    attempts: tuple[AttemptNode, ...] = ()
    game_name: str | None = None
    category_name: str | None = None
    declared_attempt_count: int | None = None
