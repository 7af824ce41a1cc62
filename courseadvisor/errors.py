"""
Error types surfaced to callers.

Every failure the advisor reports is an AdvisorError with a short machine
readable ``kind`` and a human readable ``message``. Unrecognised lines are
NOT errors; the extractors simply skip them.
"""

from __future__ import annotations


class AdvisorError(Exception):
    """Base class for all structured advisor failures."""

    kind = "AdvisorError"

    def __init__(self, message: str, kind: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        if kind is not None:
            self.kind = kind

    def __str__(self) -> str:
        return f"{self.kind}: {self.message}"


class MissingInputError(AdvisorError):
    """A required input collection (or the persisted data file) is absent."""

    kind = "MissingInput"


class SourceDecodeError(AdvisorError):
    """A source document could not be read or decoded into text/rows."""

    kind = "SourceDecodeError"
