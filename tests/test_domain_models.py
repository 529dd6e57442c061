"""
Tests for domain models.
"""

from datetime import date, time

import pytest

from meetsync.domain.exceptions import InvalidTimeZone
from meetsync.domain.models import Location, ParticipantResponse, Poll, TimeSlot
from meetsync.domain.suggestions import suggest_time_slots


class TestTimeSlot:
    """Tests for TimeSlot model."""

    def test_create_valid_slot(self):
        """Test creating a valid time slot."""
        slot = TimeSlot(date=date(2024, 1, 15), start_time=time(9, 0), end_time=time(11, 0))

        assert slot.key() == (date(2024, 1, 15), time(9, 0), time(11, 0))
        assert str(slot) == "2024-01-15 09:00 - 11:00"

    def test_invalid_slot_raises_error(self):
        """Test that a slot ending before it starts raises ValueError."""
        with pytest.raises(ValueError, match="Start time .* must be before end time"):
            TimeSlot(date=date(2024, 1, 15), start_time=time(11, 0), end_time=time(9, 0))

    def test_start_instant(self):
        """Test anchoring a slot in a zone."""
        slot = TimeSlot(date=date(2024, 1, 15), start_time=time(9, 0), end_time=time(11, 0))

        assert slot.start_instant("Europe/Berlin").in_timezone("UTC").hour == 8
        assert slot.end_instant("Europe/Berlin").in_timezone("UTC").hour == 10


class TestPoll:
    """Tests for Poll model."""

    def test_slots_keep_their_order(self):
        """Test that slots are stored as given, not sorted."""
        late = TimeSlot(date=date(2024, 1, 16), start_time=time(9, 0), end_time=time(10, 0))
        early = TimeSlot(date=date(2024, 1, 15), start_time=time(9, 0), end_time=time(10, 0))

        poll = Poll(id="p", title="", time_slots=[late, early])

        assert poll.time_slots == (late, early)
        assert poll.slot_count == 2

    def test_duplicate_slots_rejected(self):
        """Test that the same slot twice raises ValueError."""
        slot = TimeSlot(date=date(2024, 1, 15), start_time=time(9, 0), end_time=time(10, 0))

        with pytest.raises(ValueError, match="Duplicate time slot at index 1"):
            Poll(id="p", title="", time_slots=[slot, slot])

    def test_overlapping_slots_allowed(self):
        """Test that overlapping but distinct slots are fine."""
        first = TimeSlot(date=date(2024, 1, 15), start_time=time(9, 0), end_time=time(11, 0))
        second = TimeSlot(date=date(2024, 1, 15), start_time=time(10, 0), end_time=time(12, 0))

        assert Poll(id="p", title="", time_slots=[first, second]).slot_count == 2

    def test_unknown_reference_timezone_rejected(self):
        """Test that a poll cannot be anchored to an unknown zone."""
        with pytest.raises(InvalidTimeZone):
            Poll(id="p", title="", time_slots=[], reference_timezone="Moon/Base")


class TestParticipantResponse:
    """Tests for ParticipantResponse model."""

    def test_availability_is_tuple_of_bools(self):
        """Test that availability is frozen into a tuple."""
        response = ParticipantResponse(
            participant_id="a", name="A", timezone="UTC", availability=[1, 0, True]
        )

        assert response.availability == (True, False, True)
        assert response.available_count == 2

    def test_location_ranges(self):
        """Test coordinate validation."""
        assert Location(latitude=37.77, longitude=-122.42).display_name == ""
        with pytest.raises(ValueError, match="Latitude"):
            Location(latitude=91.0, longitude=0.0)
        with pytest.raises(ValueError, match="Longitude"):
            Location(latitude=0.0, longitude=-181.0)


class TestSuggestions:
    """Tests for suggested time slots."""

    def test_weekday_and_weekend_hours(self):
        """Test that weekends get later hours than weekdays."""
        # Friday
        slots = suggest_time_slots(date(2024, 1, 12), days=3)

        assert [slot.date for slot in slots] == [date(2024, 1, 13), date(2024, 1, 14), date(2024, 1, 15)]
        assert (slots[0].start_time, slots[0].end_time) == (time(10, 0), time(18, 0))
        assert (slots[1].start_time, slots[1].end_time) == (time(10, 0), time(18, 0))
        assert (slots[2].start_time, slots[2].end_time) == (time(9, 0), time(17, 0))

    def test_default_five_days(self):
        """Test the default suggestion window."""
        assert len(suggest_time_slots(date(2024, 1, 15))) == 5

    def test_invalid_days(self):
        """Test that a non-positive window raises ValueError."""
        with pytest.raises(ValueError):
            suggest_time_slots(date(2024, 1, 15), days=0)
