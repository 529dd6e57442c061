"""
Domain layer - Pure business logic without external dependencies.
"""

from .aggregator import Aggregation, RejectedResponse, SlotTally, aggregate
from .analytics import AnalyticsReport, AnalyticsReporter, ParticipantSummary
from .exceptions import (
    AvailabilityLengthMismatch,
    InvalidTimeZone,
    MalformedResponse,
    MeetSyncError,
    PollNotFound,
)
from .models import Location, ParticipantResponse, Poll, TimeSlot
from .ranker import SlotRanker, SlotScore
from .suggestions import suggest_time_slots
from .time_normalizer import from_instant, to_instant, to_local
from .working_hours import ScoreBand, WorkingHoursScorer

__all__ = [
    "Aggregation",
    "AnalyticsReport",
    "AnalyticsReporter",
    "AvailabilityLengthMismatch",
    "InvalidTimeZone",
    "Location",
    "MalformedResponse",
    "MeetSyncError",
    "ParticipantResponse",
    "ParticipantSummary",
    "Poll",
    "PollNotFound",
    "RejectedResponse",
    "ScoreBand",
    "SlotRanker",
    "SlotScore",
    "SlotTally",
    "TimeSlot",
    "WorkingHoursScorer",
    "aggregate",
    "from_instant",
    "suggest_time_slots",
    "to_instant",
    "to_local",
]
