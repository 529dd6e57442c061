"""
Ranking of poll slots by votes and working-hours fitness.

This is the heart of the application - pure domain logic without any
external dependencies (no API calls, no database, no I/O).
"""

import math
from dataclasses import dataclass
from typing import List, Sequence

from .aggregator import Aggregation
from .models import ParticipantResponse, Poll, TimeSlot
from .working_hours import WorkingHoursScorer

NEUTRAL_FITNESS = 0.5


@dataclass(frozen=True)
class SlotScore:
    """
    Derived score of one slot. Recomputed on every query, never stored.
    """
    slot_index: int
    vote_count: int
    working_hours_fitness: float
    composite_score: float
    rank: int


class SlotRanker:
    """
    Orders slots best first.

    Algorithm:
    1. Fitness of a slot is the mean working-hours score of its start
       instant over every counted participant, whether or not they voted
       for it
    2. composite = vote count + fitness, so votes always dominate and
       fitness only separates slots with equal votes
    3. Sort by composite descending, then by slot index ascending
    4. Number the result 1..N
    """

    def __init__(
        self,
        scorer: WorkingHoursScorer | None = None,
        neutral_fitness: float = NEUTRAL_FITNESS,
    ):
        self.scorer = scorer or WorkingHoursScorer()
        self.neutral_fitness = neutral_fitness

    def rank(
        self,
        poll: Poll,
        aggregation: Aggregation,
        responses: Sequence[ParticipantResponse],
    ) -> List[SlotScore]:
        """
        Rank every slot of a poll.

        Args:
            poll: The poll defining the slots
            aggregation: Vote tallies for the poll
            responses: Participants to evaluate fitness against. Only those
                the aggregation accepted are scored, in their accepted form

        Returns:
            One SlotScore per slot, best first
        """
        wanted = {response.participant_id for response in responses}
        participants = [r for r in aggregation.accepted if r.participant_id in wanted]
        entries = []

        for index, slot in enumerate(poll.time_slots):
            votes = aggregation.slots[index].vote_count
            fitness = self.slot_fitness(slot, poll.reference_timezone, participants)
            entries.append((index, votes, fitness, votes + fitness))

        entries.sort(key=lambda entry: (-entry[3], entry[0]))

        return [
            SlotScore(
                slot_index=index,
                vote_count=votes,
                working_hours_fitness=fitness,
                composite_score=composite,
                rank=position,
            )
            for position, (index, votes, fitness, composite) in enumerate(entries, start=1)
        ]

    def slot_fitness(
        self,
        slot: TimeSlot,
        reference_timezone: str,
        participants: Sequence[ParticipantResponse],
    ) -> float:
        """Average working-hours score of a slot across participants."""
        if not participants:
            return self.neutral_fitness

        start = slot.start_instant(reference_timezone)
        scores = [self.scorer.score(start, p.timezone) for p in participants]

        # fsum keeps the mean independent of participant order
        return math.fsum(scores) / len(scores)
