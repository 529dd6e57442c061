"""
Domain models for polls, candidate time slots and participant responses.
"""

from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Optional, Tuple

from pendulum import DateTime

from .time_normalizer import resolve_timezone, to_instant, to_local


@dataclass(frozen=True)
class TimeSlot:
    """
    A candidate meeting time, expressed in the poll's reference time zone.

    Invariant: start_time must be before end_time.
    """
    date: date
    start_time: time
    end_time: time

    def __post_init__(self):
        if self.start_time >= self.end_time:
            raise ValueError(
                f"Start time {self.start_time} must be before end time {self.end_time}"
            )

    def key(self) -> Tuple[date, time, time]:
        return (self.date, self.start_time, self.end_time)

    def start_instant(self, timezone_name: str) -> DateTime:
        return to_instant(self.date, self.start_time, timezone_name)

    def end_instant(self, timezone_name: str) -> DateTime:
        return to_instant(self.date, self.end_time, timezone_name)

    def in_timezone(self, reference_timezone: str, timezone_name: str) -> Tuple[DateTime, DateTime]:
        """
        Show the slot on another zone's wall clock.

        Args:
            reference_timezone: Zone the slot is defined in
            timezone_name: Zone of the viewer

        Returns:
            (start, end) as DateTimes in ``timezone_name``
        """
        return (
            to_local(self.start_instant(reference_timezone), timezone_name),
            to_local(self.end_instant(reference_timezone), timezone_name),
        )

    def __str__(self) -> str:
        return (
            f"{self.date.isoformat()} "
            f"{self.start_time.strftime('%H:%M')} - {self.end_time.strftime('%H:%M')}"
        )


@dataclass(frozen=True)
class Location:
    """Where a participant is, as reported by the client."""
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    display_name: str = ""

    def __post_init__(self):
        if self.latitude is not None and not -90.0 <= self.latitude <= 90.0:
            raise ValueError(f"Latitude must be between -90 and 90, got {self.latitude}")
        if self.longitude is not None and not -180.0 <= self.longitude <= 180.0:
            raise ValueError(f"Longitude must be between -180 and 180, got {self.longitude}")


@dataclass(frozen=True)
class Poll:
    """
    A poll owns an ordered sequence of time slots.

    The position of a slot in ``time_slots`` is its identity for the whole
    engine, so the sequence is never re-sorted.
    """
    id: str
    title: str
    time_slots: Tuple[TimeSlot, ...]
    reference_timezone: str = "UTC"
    created_at: Optional[datetime] = None

    def __post_init__(self):
        object.__setattr__(self, "time_slots", tuple(self.time_slots))

        seen = set()
        for index, slot in enumerate(self.time_slots):
            if slot.key() in seen:
                raise ValueError(f"Duplicate time slot at index {index}: {slot}")
            seen.add(slot.key())

        # Rejects the poll outright when its anchor zone is unknown
        resolve_timezone(self.reference_timezone)

    @property
    def slot_count(self) -> int:
        return len(self.time_slots)


@dataclass(frozen=True)
class ParticipantResponse:
    """
    One participant's answer to a poll.

    ``availability[i]`` refers to ``poll.time_slots[i]``.
    """
    participant_id: str
    name: str
    timezone: str
    availability: Tuple[bool, ...]
    location: Optional[Location] = None
    submitted_at: Optional[datetime] = None

    def __post_init__(self):
        object.__setattr__(self, "availability", tuple(bool(v) for v in self.availability))

    @property
    def available_count(self) -> int:
        return sum(self.availability)

