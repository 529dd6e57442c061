"""
Scoring of how reasonable an instant is for a participant's local day.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Sequence, Tuple

from .time_normalizer import to_local


@dataclass(frozen=True)
class ScoreBand:
    """
    A range of local hours [start_hour, end_hour) sharing one score.
    """
    start_hour: int
    end_hour: int
    score: float

    def __post_init__(self):
        if not 0 <= self.start_hour < self.end_hour <= 24:
            raise ValueError(
                f"Invalid band hours {self.start_hour}-{self.end_hour}: "
                f"need 0 <= start < end <= 24"
            )
        if not 0.0 <= self.score <= 1.0:
            raise ValueError(f"Band score must be between 0 and 1, got {self.score}")

    def contains(self, hour: int) -> bool:
        return self.start_hour <= hour < self.end_hour


DEFAULT_BANDS: Tuple[ScoreBand, ...] = (
    ScoreBand(9, 17, 1.0),
    ScoreBand(7, 9, 0.6),
    ScoreBand(17, 19, 0.6),
    ScoreBand(19, 22, 0.3),
    ScoreBand(6, 7, 0.3),
)


class WorkingHoursScorer:
    """
    Maps the local hour of an instant onto a penalty curve.

    Only the hour of day matters. Weekends are scored like any other day;
    the ranking deliberately has no notion of a working week.
    Hours not covered by any band score 0.0.
    """

    def __init__(self, bands: Sequence[ScoreBand] = DEFAULT_BANDS):
        ordered = sorted(bands, key=lambda band: band.start_hour)
        for previous, current in zip(ordered, ordered[1:]):
            if current.start_hour < previous.end_hour:
                raise ValueError(
                    f"Score bands overlap: {previous.start_hour}-{previous.end_hour} "
                    f"and {current.start_hour}-{current.end_hour}"
                )
        self.bands: Tuple[ScoreBand, ...] = tuple(ordered)

    def score_hour(self, hour: int) -> float:
        for band in self.bands:
            if band.contains(hour):
                return band.score
        return 0.0

    def score(self, instant: datetime, timezone_name: str) -> float:
        """
        Score an instant for a participant living in ``timezone_name``.

        Returns:
            Float in [0, 1], 1.0 meaning core working hours
        """
        return self.score_hour(to_local(instant, timezone_name).hour)
