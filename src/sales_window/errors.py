from __future__ import annotations

"""Failure taxonomy shared by reader, extractor and aggregator.

Each failure reported to the user carries a distinct UPPER_SNAKE ``kind`` so the
CLI and the JSON Lines error log can classify it without parsing the message.
Concrete subclasses live next to the code that raises them.
"""

__all__ = [
    "ReportError",
]


class ReportError(Exception):
    """Base class for failures that end the current user action."""

    kind: str = "REPORT_ERROR"
