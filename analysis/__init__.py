"""Pure analysis package for timeloss.

This package contains deterministic, testable computations that operate on
in-memory inputs and return DTOs. It must not import Django or perform any
I/O.
"""

from .aggregations import summarize
from .engine import analyze_livesplit

__all__ = ["analyze_livesplit", "summarize"]
