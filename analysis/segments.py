"""Segment chain construction.

Segments are assigned index-derived identities in document order and linked to
their successor. Identities live in an explicit side-table rather than on the
document nodes, so the input document stays untouched.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import replace

from .document import SegmentNode
from .dto import UNNAMED_SEGMENT, Segment
from .errors import StructuralError


def segment_id_for_index(index: int) -> str:
    """Return the identity assigned to the segment at `index`."""

    return f"segment-{index}"


def build_segments(nodes: Sequence[SegmentNode]) -> tuple[Segment, ...]:
    """Build the ordered segment chain for a document.

    Args:
        nodes: Segment declarations in document order.

    Returns:
        Segments ordered by index. Each links to the next one; the final one
        is flagged as the terminal segment.

    Raises:
        StructuralError: When the document declares no segments.
    """

    if not nodes:
        raise StructuralError("The document does not declare any segments.", node="Segment")

    last_index = len(nodes) - 1
    segments: list[Segment] = []
    for index, node in enumerate(nodes):
        segment = Segment(
            id=segment_id_for_index(index),
            name=_segment_name(node.name),
            index=index,
            next_segment_id=None,
            is_last_segment=index == last_index,
        )
        if segments:
            segments[-1] = replace(segments[-1], next_segment_id=segment.id)
        segments.append(segment)
    return tuple(segments)


def segment_ids_by_position(segments: Sequence[Segment]) -> dict[int, str]:
    """Return the position -> identity side-table for a segment chain."""

    return {segment.index: segment.id for segment in segments}


def _segment_name(raw_name: str | None) -> str:
    """Return a trimmed display name, or the placeholder when empty."""

    if raw_name is None:
        return UNNAMED_SEGMENT
    cleaned = raw_name.strip()
    return cleaned or UNNAMED_SEGMENT
