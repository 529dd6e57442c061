"""
Folding participant availability into per-slot vote counts.

Responses are screened first: a response with an unknown time zone or an
availability vector of the wrong length is excluded as a whole and
reported back, never partially counted.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Dict, Iterable, List, Tuple

from .exceptions import AvailabilityLengthMismatch, MeetSyncError
from .models import ParticipantResponse, Poll
from .time_normalizer import resolve_timezone

logger = logging.getLogger(__name__)

_OLDEST = datetime.min.replace(tzinfo=timezone.utc)


@dataclass(frozen=True)
class RejectedResponse:
    """A response left out of the computation, and why."""
    participant_id: str
    name: str
    error: MeetSyncError

    @property
    def reason(self) -> str:
        return type(self.error).__name__

    @property
    def message(self) -> str:
        return str(self.error)


@dataclass(frozen=True)
class SlotTally:
    """Votes collected by one slot."""
    slot_index: int
    vote_count: int
    voter_names: Tuple[str, ...]


@dataclass(frozen=True)
class Aggregation:
    """
    Result of folding a response snapshot over a poll.

    ``slots`` is keyed by slot index in ascending order.
    ``accepted`` holds the responses that were counted, ordered by
    participant id.
    """
    slots: Dict[int, SlotTally]
    accepted: Tuple[ParticipantResponse, ...]
    rejected: Tuple[RejectedResponse, ...]


def validate_response(poll: Poll, response: ParticipantResponse) -> None:
    """
    Check a response against a poll.

    Raises:
        InvalidTimeZone: If the response's zone is unknown
        AvailabilityLengthMismatch: If the vector length differs from the slot count
    """
    if len(response.availability) != poll.slot_count:
        raise AvailabilityLengthMismatch(
            participant_id=response.participant_id,
            expected=poll.slot_count,
            actual=len(response.availability),
        )
    try:
        resolve_timezone(response.timezone)
    except MeetSyncError as exc:
        exc.participant_id = response.participant_id
        raise


def latest_responses(responses: Iterable[ParticipantResponse]) -> List[ParticipantResponse]:
    """
    Keep one response per participant: the most recently submitted one.

    Missing timestamps count as oldest. Equal timestamps are settled on the
    response content, so the choice never depends on input order.
    """
    latest: Dict[str, ParticipantResponse] = {}

    for response in responses:
        current = latest.get(response.participant_id)
        if current is not None:
            if _precedence(response) <= _precedence(current):
                continue
            logger.debug("Response from %s superseded by a resubmission", response.participant_id)
        latest[response.participant_id] = response

    return sorted(latest.values(), key=lambda r: r.participant_id)


def screen_responses(
    poll: Poll,
    responses: Iterable[ParticipantResponse],
) -> Tuple[List[ParticipantResponse], List[RejectedResponse]]:
    """Split a snapshot into countable responses and rejected ones."""
    accepted: List[ParticipantResponse] = []
    rejected: List[RejectedResponse] = []

    for response in latest_responses(responses):
        try:
            validate_response(poll, response)
        except MeetSyncError as exc:
            logger.warning("Excluding response from %s: %s", response.participant_id, exc)
            rejected.append(
                RejectedResponse(
                    participant_id=response.participant_id,
                    name=response.name,
                    error=exc,
                )
            )
            continue
        accepted.append(response)

    return accepted, rejected


def aggregate(poll: Poll, responses: Iterable[ParticipantResponse]) -> Aggregation:
    """
    Count, for every slot, the participants who marked it available.

    Args:
        poll: The poll defining the slots
        responses: Snapshot of submitted responses, in any order

    Returns:
        Aggregation with one tally per slot and the rejected responses
    """
    accepted, rejected = screen_responses(poll, responses)

    voters: List[List[str]] = [[] for _ in poll.time_slots]
    for response in accepted:
        for index, available in enumerate(response.availability):
            if available:
                voters[index].append(response.name)

    slots = {
        index: SlotTally(
            slot_index=index,
            vote_count=len(names),
            voter_names=tuple(names),
        )
        for index, names in enumerate(voters)
    }

    return Aggregation(slots=slots, accepted=tuple(accepted), rejected=tuple(rejected))


def _submitted(response: ParticipantResponse) -> datetime:
    if response.submitted_at is None:
        return _OLDEST
    if response.submitted_at.tzinfo is None:
        return response.submitted_at.replace(tzinfo=timezone.utc)
    return response.submitted_at


def _precedence(response: ParticipantResponse) -> tuple:
    location = response.location
    return (
        _submitted(response),
        response.availability,
        response.timezone,
        response.name,
        location.display_name if location else "",
    )
