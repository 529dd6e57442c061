"""
Domain-specific exception hierarchy for the meetsync engine.
"""

from __future__ import annotations

from typing import Optional


class MeetSyncError(Exception):
    """Base class for all application-level errors."""


class InvalidTimeZone(MeetSyncError):
    """Raised when a poll or response names an unrecognized time zone."""

    def __init__(self, timezone_name: object, participant_id: Optional[str] = None):
        self.timezone_name = timezone_name
        self.participant_id = participant_id
        super().__init__(f"Unrecognized time zone: {timezone_name!r}")


class AvailabilityLengthMismatch(MeetSyncError):
    """Raised when an availability vector does not match the poll's slot count."""

    def __init__(self, participant_id: str, expected: int, actual: int):
        self.participant_id = participant_id
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Response from {participant_id!r} has {actual} availability "
            f"entries, poll has {expected} time slots"
        )


class PollNotFound(MeetSyncError):
    """Raised when a poll id is unknown to the repository."""

    def __init__(self, poll_id: str):
        self.poll_id = poll_id
        super().__init__(f"Poll not found: {poll_id!r}")


class MalformedResponse(MeetSyncError):
    """Raised when a submitted response cannot be read at all."""

    def __init__(self, participant_id: str, details: str):
        self.participant_id = participant_id
        self.details = details
        super().__init__(f"Response {participant_id!r} is malformed: {details}")
