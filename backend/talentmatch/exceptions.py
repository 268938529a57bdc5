"""
Exception hierarchy for the matching service.

Scoring itself never raises on bad data (the normalizer substitutes
defaults). These exceptions cover the record store and the HTTP boundary.
"""

from typing import Any, Optional


class TalentMatchError(Exception):
    """Base class for all talentmatch errors."""


class RecordStoreError(TalentMatchError):
    """A lookup against the record store failed."""

    def __init__(self, message: str, details: Any = None):
        super().__init__(message)
        self.details = details


class CandidateNotFoundError(RecordStoreError):
    """No candidate profile exists for the requested id."""


class RecordFetchError(RecordStoreError):
    """The record store could not be queried."""


class MatchingAPIError(TalentMatchError):
    """
    Error surfaced to HTTP callers as ``{"error": ..., "details": ...}``.

    Attributes:
        status_code: HTTP status to respond with
        error: Short human-readable message
        details: Optional diagnostic payload from the failing collaborator
    """

    def __init__(self, status_code: int, error: str, details: Optional[Any] = None):
        super().__init__(error)
        self.status_code = status_code
        self.error = error
        self.details = details

    def to_dict(self) -> dict:
        body = {"error": self.error}
        if self.details is not None:
            body["details"] = self.details
        return body
