"""
Tests for the analytics reporter.
"""

from datetime import date, time

import pytest

from meetsync.domain.aggregator import RejectedResponse
from meetsync.domain.analytics import AnalyticsReporter
from meetsync.domain.exceptions import MalformedResponse
from meetsync.domain.models import Location, ParticipantResponse, Poll, TimeSlot


def _poll(hours) -> Poll:
    slots = [
        TimeSlot(date=date(2024, 11, 25), start_time=time(hour, 0), end_time=time(hour, 30))
        for hour in hours
    ]
    return Poll(id="poll", title="Sync", time_slots=slots, reference_timezone="UTC")


def _response(participant_id, availability, timezone="UTC", location=None):
    return ParticipantResponse(
        participant_id=participant_id,
        name=participant_id.title(),
        timezone=timezone,
        availability=availability,
        location=location,
    )


class TestAnalyticsReporter:
    """Tests for AnalyticsReporter."""

    def test_best_slots_are_top_of_ranking(self):
        """Test that the best slots are the first three ranked slots."""
        poll = _poll([9, 10, 11, 12, 13])
        responses = [
            _response("anna", [False, True, True, False, True]),
            _response("ben", [False, False, True, True, True]),
        ]

        report = AnalyticsReporter().summarize(poll, responses)

        assert [s.slot_index for s in report.best_slots] == [2, 4, 1]
        assert report.best_slots == report.all_slot_scores[:3]
        assert len(report.all_slot_scores) == 5

    def test_fewer_slots_than_best_count(self):
        """Test that short polls return all their slots as best."""
        report = AnalyticsReporter().summarize(_poll([9, 10]), [])

        assert len(report.best_slots) == 2

    def test_custom_best_slot_count(self):
        """Test configurable number of best slots."""
        report = AnalyticsReporter(best_slot_count=1).summarize(_poll([9, 10, 11]), [])

        assert [s.slot_index for s in report.best_slots] == [0]

    def test_invalid_best_slot_count(self):
        """Test that a non-positive best slot count is rejected."""
        with pytest.raises(ValueError):
            AnalyticsReporter(best_slot_count=0)

    def test_timezone_distribution_is_verbatim(self):
        """Test that zones sharing an offset are still counted separately."""
        responses = [
            _response("anna", [True], timezone="America/New_York"),
            _response("ben", [True], timezone="America/Toronto"),
            _response("carl", [False], timezone="America/New_York"),
        ]

        report = AnalyticsReporter().summarize(_poll([15]), responses)

        assert report.timezone_distribution == {"America/New_York": 2, "America/Toronto": 1}
        assert list(report.timezone_distribution) == ["America/New_York", "America/Toronto"]

    def test_rejected_responses_reported_not_counted(self):
        """Test that invalid responses are listed and left out of totals."""
        responses = [
            _response("anna", [True, True]),
            _response("ben", [True]),
            _response("carl", [True, False], timezone="Bogus/Zone"),
        ]

        report = AnalyticsReporter().summarize(_poll([9, 10]), responses)

        assert report.total_responses == 1
        assert report.timezone_distribution == {"UTC": 1}
        assert {(r.participant_id, r.reason) for r in report.rejected} == {
            ("ben", "AvailabilityLengthMismatch"),
            ("carl", "InvalidTimeZone"),
        }

    def test_participant_summaries(self):
        """Test per-participant availability counts and locations."""
        responses = [
            _response("anna", [True, False, True], location=Location(52.52, 13.405, "Berlin")),
            _response("ben", [False, False, False]),
        ]

        report = AnalyticsReporter().summarize(_poll([9, 10, 11]), responses)

        anna, ben = report.participants
        assert (anna.name, anna.location, anna.available_count, anna.slot_count) == ("Anna", "Berlin", 2, 3)
        assert (ben.location, ben.available_count) == ("", 0)

    def test_slot_tallies_follow_poll_order(self):
        """Test that tallies are reported per slot in poll order."""
        responses = [_response("anna", [False, True]), _response("ben", [True, True])]

        report = AnalyticsReporter().summarize(_poll([9, 10]), responses)

        assert [t.slot_index for t in report.slot_tallies] == [0, 1]
        assert report.slot_tallies[1].voter_names == ("Anna", "Ben")

    def test_empty_poll(self):
        """Test that an empty poll reports responses but no slots."""
        responses = [_response("anna", []), _response("ben", [])]

        report = AnalyticsReporter().summarize(_poll([]), responses)

        assert report.best_slots == ()
        assert report.all_slot_scores == ()
        assert report.total_responses == 2
        assert report.rejected == ()

    def test_duplicate_responses_rank_the_same_in_any_order(self):
        """Test that a participant answering twice does not make the ranking order-dependent."""
        poll = _poll([9, 10])
        first = _response("x", [True, False])
        second = _response("x", [False, True])

        forward = AnalyticsReporter().summarize(poll, [first, second])
        backward = AnalyticsReporter().summarize(poll, [second, first])

        assert forward.all_slot_scores == backward.all_slot_scores
        assert forward.participants == backward.participants

    def test_boundary_rejections_are_reported(self):
        """Test that responses rejected before parsing finished are listed too."""
        unreadable = RejectedResponse(
            participant_id="#1",
            name="",
            error=MalformedResponse("#1", "location.lat: Input should be less than or equal to 90"),
        )

        report = AnalyticsReporter().summarize(
            _poll([9, 10]),
            [_response("anna", [True, True]), _response("ben", [True])],
            rejected=[unreadable],
        )

        assert report.total_responses == 1
        assert [(r.participant_id, r.reason) for r in report.rejected] == [
            ("ben", "AvailabilityLengthMismatch"),
            ("#1", "MalformedResponse"),
        ]
