"""LiveSplit `.lss` reading utilities.

This module turns raw file content into the read-only `LivesplitDocument`
consumed by the Analysis Engine. It only extracts raw strings:

- Missing optional fields (segment names, pause times, time elements) become
  None rather than errors.
- Typed parsing of time tokens happens in `analysis`, never here.
"""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ElementTree
from pathlib import Path

from analysis.document import AttemptNode, LivesplitDocument, SegmentHistoryEntry, SegmentNode
from analysis.errors import LivesplitError, StructuralError

logger = logging.getLogger(__name__)

ROOT_TAG = "Run"


class DocumentParseError(LivesplitError):
    """Raised when file content is not well-formed XML."""


def read_livesplit_file(path: Path | str) -> LivesplitDocument:
    """Read and parse a LiveSplit file from disk."""

    return read_livesplit_document(Path(path).read_bytes())


def read_livesplit_document(content: bytes | str) -> LivesplitDocument:
    """Parse LiveSplit XML content into a `LivesplitDocument`.

    Args:
        content: Raw file content. Bytes are decoded according to the XML
            declaration.

    Returns:
        LivesplitDocument holding segments and attempts in document order.

    Raises:
        DocumentParseError: When the content is not well-formed XML.
        StructuralError: When the root element is not `<Run>`.
    """

    try:
        root = ElementTree.fromstring(content)
    except ElementTree.ParseError as exc:
        raise DocumentParseError(f"The file is not valid XML: {exc}.") from exc

    if root.tag != ROOT_TAG:
        raise StructuralError(
            f"Expected a <{ROOT_TAG}> root element, found <{root.tag}>.",
            node=ROOT_TAG,
        )

    segments = tuple(_read_segment(element) for element in root.iter("Segment"))
    attempts = tuple(_read_attempt(element) for element in root.iterfind(".//AttemptHistory/Attempt"))
    logger.debug("Read LiveSplit document with %d segments and %d attempts.", len(segments), len(attempts))

    return LivesplitDocument(
        segments=segments,
        attempts=attempts,
        game_name=_child_text(root, "GameName"),
        category_name=_child_text(root, "CategoryName"),
        declared_attempt_count=_parse_int(_child_text(root, "AttemptCount")),
    )


def _read_segment(element: ElementTree.Element) -> SegmentNode:
    """Extract a segment name and its per-attempt history entries."""

    history = tuple(
        SegmentHistoryEntry(
            attempt_id=time.get("id", ""),
            game_time=_child_text(time, "GameTime"),
            real_time=_child_text(time, "RealTime"),
        )
        for time in element.iterfind("SegmentHistory/Time")
    )
    return SegmentNode(name=_child_text(element, "Name"), history=history)


def _read_attempt(element: ElementTree.Element) -> AttemptNode:
    """Extract the raw attributes of an attempt record."""

    return AttemptNode(
        attempt_id=element.get("id", ""),
        started=_parse_text(element.get("started")),
        ended=_parse_text(element.get("ended")),
        pause_time=_child_text(element, "PauseTime"),
    )


def _child_text(element: ElementTree.Element, tag: str) -> str | None:
    """Return the trimmed text of a direct child, or None when absent or empty."""

    child = element.find(tag)
    if child is None:
        return None
    return _parse_text(child.text)


def _parse_text(value: str | None) -> str | None:
    """Return a trimmed string, or None when empty."""

    if value is None:
        return None
    cleaned = value.strip()
    if not cleaned:
        return None
    return cleaned


def _parse_int(value: str | None) -> int | None:
    """Parse a base-10 integer if possible."""

    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        return None
