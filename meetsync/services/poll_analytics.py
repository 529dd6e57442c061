"""
Application service for poll submissions and analytics.

The service coordinates poll storage via a repository adapter and delegates
the actual aggregation and ranking to the domain-level
``AnalyticsReporter``. Storage is injected through a simple protocol, so the
in-memory repository and a database-backed one are interchangeable.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Protocol

from ..adapters.json_contract import report_to_payload
from ..domain.aggregator import validate_response
from ..domain.analytics import AnalyticsReport, AnalyticsReporter
from ..domain.models import ParticipantResponse, Poll

logger = logging.getLogger(__name__)


class PollRepositoryProtocol(Protocol):
    """Protocol describing the poll storage behaviour needed by the service."""

    def save_poll(self, poll: Poll) -> None:
        """Store a new poll."""

    def get_poll(self, poll_id: str) -> Poll:
        """Return a poll or raise PollNotFound."""

    def save_response(self, poll_id: str, response: ParticipantResponse) -> None:
        """Store a response, replacing the participant's previous one."""

    def list_responses(self, poll_id: str) -> List[ParticipantResponse]:
        """Return a snapshot of the poll's current responses."""


class PollAnalyticsService:
    """
    Orchestrates response submission and analytics retrieval.
    """

    def __init__(
        self,
        repository: PollRepositoryProtocol,
        reporter: AnalyticsReporter | None = None,
    ) -> None:
        self._repository = repository
        self._reporter = reporter or AnalyticsReporter()

    def create_poll(self, poll: Poll) -> Poll:
        self._repository.save_poll(poll)
        logger.info("Created poll %s with %d time slots", poll.id, poll.slot_count)
        return poll

    def submit_response(self, poll_id: str, response: ParticipantResponse) -> ParticipantResponse:
        """
        Validate and store a participant's availability.

        Raises:
            PollNotFound: If the poll does not exist
            InvalidTimeZone: If the response's zone is unknown
            AvailabilityLengthMismatch: If the vector does not match the poll
        """
        poll = self._repository.get_poll(poll_id)
        validate_response(poll, response)
        self._repository.save_response(poll_id, response)
        logger.info("Stored response from %s for poll %s", response.participant_id, poll_id)
        return response

    def get_analytics(self, poll_id: str) -> AnalyticsReport:
        """Compute analytics over the poll's current response snapshot."""
        poll = self._repository.get_poll(poll_id)
        responses = self._repository.list_responses(poll_id)
        return self._reporter.summarize(poll, responses)

    def get_analytics_payload(self, poll_id: str) -> Dict[str, Any]:
        """Analytics shaped for a JSON API response."""
        report = self.get_analytics(poll_id)
        return report_to_payload(self._repository.get_poll(poll_id), report)
