"""
Summary statistics over a poll's ranked slots.
"""

from collections import Counter
from dataclasses import dataclass
from typing import Dict, Iterable, Tuple

from .aggregator import RejectedResponse, SlotTally, aggregate
from .models import ParticipantResponse, Poll
from .ranker import SlotRanker, SlotScore

BEST_SLOT_COUNT = 3


@dataclass(frozen=True)
class ParticipantSummary:
    """How much of the poll one participant can make."""
    participant_id: str
    name: str
    timezone: str
    location: str
    available_count: int
    slot_count: int


@dataclass(frozen=True)
class AnalyticsReport:
    """Everything a poll-analytics endpoint needs to answer."""
    total_responses: int
    best_slots: Tuple[SlotScore, ...]
    timezone_distribution: Dict[str, int]
    all_slot_scores: Tuple[SlotScore, ...]
    slot_tallies: Tuple[SlotTally, ...]
    participants: Tuple[ParticipantSummary, ...]
    rejected: Tuple[RejectedResponse, ...]


class AnalyticsReporter:
    """Runs aggregation and ranking and shapes the result for consumers."""

    def __init__(self, ranker: SlotRanker | None = None, best_slot_count: int = BEST_SLOT_COUNT):
        if best_slot_count <= 0:
            raise ValueError("best_slot_count must be greater than zero")
        self.ranker = ranker or SlotRanker()
        self.best_slot_count = best_slot_count

    def summarize(
        self,
        poll: Poll,
        responses: Iterable[ParticipantResponse],
        rejected: Iterable[RejectedResponse] = (),
    ) -> AnalyticsReport:
        """
        Build the analytics report for a response snapshot.

        Rejected responses are listed in the report and otherwise ignored,
        including in ``total_responses`` and the time zone distribution.
        ``rejected`` carries responses turned away before they could be
        parsed; they are listed after the ones screened out here.
        """
        aggregation = aggregate(poll, responses)
        ranking = self.ranker.rank(poll, aggregation, aggregation.accepted)

        # Zones are counted verbatim; equal offsets today can diverge later
        zones = Counter(response.timezone for response in aggregation.accepted)

        participants = tuple(
            ParticipantSummary(
                participant_id=response.participant_id,
                name=response.name,
                timezone=response.timezone,
                location=response.location.display_name if response.location else "",
                available_count=response.available_count,
                slot_count=poll.slot_count,
            )
            for response in aggregation.accepted
        )

        return AnalyticsReport(
            total_responses=len(aggregation.accepted),
            best_slots=tuple(ranking[:self.best_slot_count]),
            timezone_distribution={zone: zones[zone] for zone in sorted(zones)},
            all_slot_scores=tuple(ranking),
            slot_tallies=tuple(aggregation.slots.values()),
            participants=participants,
            rejected=aggregation.rejected + tuple(rejected),
        )
