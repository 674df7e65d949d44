"""Error types raised by the LiveSplit analysis engine.

Callers catch `LivesplitError` and surface its message to the user. The engine
never prints or exits on its own.
"""

from __future__ import annotations


class LivesplitError(ValueError):
    """Base class for every failure raised while analyzing a LiveSplit file."""


class StructuralError(LivesplitError):
    """Raised when a required node class is missing from the document."""

    def __init__(self, message: str, *, node: str) -> None:
        """Initialize the error.

        Args:
            message: Human-readable description of the problem.
            node: Name of the missing or malformed node (e.g. `Segment`).
        """

        super().__init__(message)
        self.node = node


class TimestampParseError(LivesplitError):
    """Raised when a duration or absolute-time token cannot be parsed."""

    def __init__(self, *, raw_value: str, expected: str) -> None:
        """Initialize the error.

        Args:
            raw_value: Offending token as found in the document.
            expected: Description of the expected format.
        """

        super().__init__(f"Could not parse timestamp {raw_value!r}: expected {expected}.")
        self.raw_value = raw_value
        self.expected = expected


class DegenerateInputError(LivesplitError):
    """Raised when a document has no attempts and the caller requires some."""
