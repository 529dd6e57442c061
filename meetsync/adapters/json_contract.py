"""
JSON boundary for poll snapshots and analytics payloads.

Inputs use the camelCase shape served by the poll API. A few spellings
from older clients are accepted too: ``timezone`` for ``timeZone``, a plain
string location, and responses embedded under ``poll.participants``.

Older clients also send no ``participantId``. Their ``id`` is generated anew
for every submission, so the participant name identifies them instead and a
resubmission replaces the earlier answer. ``id`` is used only when a
response has no name.
"""

import datetime as dt
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError, field_serializer, model_validator
from pydantic.alias_generators import to_camel

from ..domain.aggregator import RejectedResponse
from ..domain.analytics import AnalyticsReport
from ..domain.exceptions import MalformedResponse
from ..domain.models import Location, ParticipantResponse, Poll, TimeSlot

logger = logging.getLogger(__name__)


class ContractModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class TimeSlotIn(ContractModel):
    date: dt.date
    start_time: dt.time
    end_time: dt.time

    def to_domain(self) -> TimeSlot:
        return TimeSlot(date=self.date, start_time=self.start_time, end_time=self.end_time)


class LocationIn(ContractModel):
    lat: Optional[float] = Field(default=None, ge=-90.0, le=90.0)
    lng: Optional[float] = Field(default=None, ge=-180.0, le=180.0)
    display_name: str = ""

    def to_domain(self) -> Location:
        return Location(latitude=self.lat, longitude=self.lng, display_name=self.display_name)


class ResponseIn(ContractModel):
    participant_id: Optional[str] = None
    id: Optional[str] = None
    name: str = ""
    time_zone: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("timeZone", "timezone", "time_zone"),
    )
    location: Optional[Union[LocationIn, str]] = None
    availability: List[bool]
    submitted_at: Optional[dt.datetime] = None

    @model_validator(mode="after")
    def validate_identity(self) -> "ResponseIn":
        if not (self.participant_id or self.id or self.name):
            raise ValueError("A response needs a participantId, name or id")
        return self

    def to_domain(self, default_timezone: str = "UTC") -> ParticipantResponse:
        participant_id = self.participant_id or self.name or self.id

        if isinstance(self.location, str):
            location = Location(display_name=self.location)
        elif self.location is not None:
            location = self.location.to_domain()
        else:
            location = None

        return ParticipantResponse(
            participant_id=participant_id,
            name=self.name or participant_id,
            timezone=self.time_zone if self.time_zone is not None else default_timezone,
            availability=tuple(self.availability),
            location=location,
            submitted_at=self.submitted_at,
        )


class PollIn(ContractModel):
    id: str
    title: str = ""
    time_slots: List[TimeSlotIn] = Field(default_factory=list)
    reference_time_zone: str = "UTC"
    created_at: Optional[dt.datetime] = Field(
        default=None,
        validation_alias=AliasChoices("createdAt", "created", "created_at"),
    )
    participants: List[Any] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def lift_settings_timezone(cls, data: Any) -> Any:
        """Older polls keep their zone under ``settings.timezone``."""
        if isinstance(data, dict) and "referenceTimeZone" not in data and "reference_time_zone" not in data:
            settings = data.get("settings")
            if isinstance(settings, dict) and settings.get("timezone"):
                data = {**data, "referenceTimeZone": settings["timezone"]}
        return data

    def to_domain(self) -> Poll:
        return Poll(
            id=self.id,
            title=self.title,
            time_slots=tuple(slot.to_domain() for slot in self.time_slots),
            reference_timezone=self.reference_time_zone,
            created_at=self.created_at,
        )


class SnapshotIn(ContractModel):
    poll: PollIn
    responses: Optional[List[Any]] = None


Snapshot = Tuple[Poll, List[ParticipantResponse], List[RejectedResponse]]


def parse_snapshot(data: Mapping[str, Any], default_timezone: str = "UTC") -> Snapshot:
    """
    Parse a ``{"poll": ..., "responses": [...]}`` document.

    Each response is validated on its own. One that cannot be read is
    returned as a rejection instead of failing the whole snapshot.

    Returns:
        The poll, the readable responses, and the unreadable ones

    Raises:
        pydantic.ValidationError: If the poll itself is malformed
        ValueError: If the poll violates a model invariant
        InvalidTimeZone: If the poll's reference zone is unknown
    """
    snapshot = SnapshotIn.model_validate(data)
    raw_responses = snapshot.responses if snapshot.responses is not None else snapshot.poll.participants

    poll = snapshot.poll.to_domain()
    responses: List[ParticipantResponse] = []
    rejected: List[RejectedResponse] = []

    for index, raw in enumerate(raw_responses):
        try:
            responses.append(parse_response(raw, default_timezone))
        except ValueError as exc:
            rejected.append(_unreadable(index, raw, exc))

    return poll, responses, rejected


def parse_response(data: Mapping[str, Any], default_timezone: str = "UTC") -> ParticipantResponse:
    """Parse a single submitted response."""
    return ResponseIn.model_validate(data).to_domain(default_timezone)


def load_snapshot(path: Path, default_timezone: str = "UTC") -> Snapshot:
    """
    Load a poll snapshot from a JSON file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file is not valid JSON or the poll is invalid
    """
    if not path.exists():
        raise FileNotFoundError(f"Snapshot file not found: {path}")

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {path}: {exc}") from exc

    if not isinstance(data, dict):
        raise ValueError("Snapshot file must contain an object at the root level.")

    return parse_snapshot(data, default_timezone)


def _unreadable(index: int, raw: Any, exc: ValueError) -> RejectedResponse:
    name = ""
    participant_id = f"#{index}"
    if isinstance(raw, dict):
        name = raw.get("name") if isinstance(raw.get("name"), str) else ""
        for key in ("participantId", "participant_id", "name", "id"):
            if isinstance(raw.get(key), str) and raw[key]:
                participant_id = raw[key]
                break

    if isinstance(exc, ValidationError):
        details = "; ".join(
            f"{'.'.join(str(part) for part in error['loc']) or 'response'}: {error['msg']}"
            for error in exc.errors()
        )
    else:
        details = str(exc)

    logger.warning("Skipping unreadable response %s: %s", participant_id, details)
    return RejectedResponse(
        participant_id=participant_id,
        name=name or participant_id,
        error=MalformedResponse(participant_id, details),
    )


class SlotScoreOut(ContractModel):
    slot_index: int
    vote_count: int
    working_hours_fitness: float
    composite_score: float
    rank: int


class BestSlotOut(SlotScoreOut):
    date: dt.date
    start_time: dt.time
    end_time: dt.time

    @field_serializer("start_time", "end_time")
    def serialize_time(self, value: dt.time) -> str:
        return value.strftime("%H:%M")


class SlotTallyOut(ContractModel):
    slot_index: int
    vote_count: int
    voter_names: List[str]


class ParticipantOut(ContractModel):
    participant_id: str
    name: str
    time_zone: str
    location: str
    available_count: int
    slot_count: int


class RejectedOut(ContractModel):
    participant_id: str
    name: str
    reason: str
    message: str


class AnalyticsOut(ContractModel):
    total_responses: int
    best_time_slots: List[BestSlotOut]
    timezone_distribution: Dict[str, int]
    all_slot_scores: List[SlotScoreOut]
    slot_tallies: List[SlotTallyOut]
    participants: List[ParticipantOut]
    rejected_responses: List[RejectedOut]


def report_to_payload(poll: Poll, report: AnalyticsReport) -> Dict[str, Any]:
    """Shape an analytics report as a JSON-ready dict with camelCase keys."""
    best = []
    for score in report.best_slots:
        slot = poll.time_slots[score.slot_index]
        best.append(
            BestSlotOut(
                slot_index=score.slot_index,
                vote_count=score.vote_count,
                working_hours_fitness=score.working_hours_fitness,
                composite_score=score.composite_score,
                rank=score.rank,
                date=slot.date,
                start_time=slot.start_time,
                end_time=slot.end_time,
            )
        )

    payload = AnalyticsOut(
        total_responses=report.total_responses,
        best_time_slots=best,
        timezone_distribution=report.timezone_distribution,
        all_slot_scores=[
            SlotScoreOut(
                slot_index=score.slot_index,
                vote_count=score.vote_count,
                working_hours_fitness=score.working_hours_fitness,
                composite_score=score.composite_score,
                rank=score.rank,
            )
            for score in report.all_slot_scores
        ],
        slot_tallies=[
            SlotTallyOut(
                slot_index=tally.slot_index,
                vote_count=tally.vote_count,
                voter_names=list(tally.voter_names),
            )
            for tally in report.slot_tallies
        ],
        participants=[
            ParticipantOut(
                participant_id=participant.participant_id,
                name=participant.name,
                time_zone=participant.timezone,
                location=participant.location,
                available_count=participant.available_count,
                slot_count=participant.slot_count,
            )
            for participant in report.participants
        ],
        rejected_responses=[
            RejectedOut(
                participant_id=rejected.participant_id,
                name=rejected.name,
                reason=rejected.reason,
                message=rejected.message,
            )
            for rejected in report.rejected
        ],
    )
    return payload.model_dump(by_alias=True, mode="json")
