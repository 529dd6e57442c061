"""
Tests for the working-hours scorer.
"""

import pendulum
import pytest

from meetsync.domain.working_hours import ScoreBand, WorkingHoursScorer


class TestWorkingHoursScorer:
    """Tests for WorkingHoursScorer."""

    @pytest.mark.parametrize(
        "hour, expected",
        [
            (9, 1.0), (12, 1.0), (16, 1.0),
            (7, 0.6), (8, 0.6), (17, 0.6), (18, 0.6),
            (6, 0.3), (19, 0.3), (21, 0.3),
            (22, 0.0), (23, 0.0), (0, 0.0), (5, 0.0),
        ],
    )
    def test_default_curve(self, hour, expected):
        """Test the default penalty curve at band edges."""
        assert WorkingHoursScorer().score_hour(hour) == expected

    def test_score_uses_participant_local_time(self):
        """Test that the instant is read on the participant's clock."""
        scorer = WorkingHoursScorer()
        instant = pendulum.datetime(2024, 1, 15, 15, 0, tz="UTC")

        assert scorer.score(instant, "America/New_York") == 1.0   # 10:00
        assert scorer.score(instant, "Asia/Tokyo") == 0.0         # 00:00
        assert scorer.score(instant, "Asia/Kolkata") == 0.3       # 20:30

    def test_weekend_is_not_special(self):
        """Test that a Saturday morning scores like any other morning."""
        saturday = pendulum.datetime(2024, 1, 13, 10, 0, tz="UTC")

        assert WorkingHoursScorer().score(saturday, "UTC") == 1.0

    def test_custom_bands(self):
        """Test a custom curve; uncovered hours score zero."""
        scorer = WorkingHoursScorer(bands=[ScoreBand(10, 14, 0.8)])

        assert scorer.score_hour(10) == 0.8
        assert scorer.score_hour(14) == 0.0

    def test_overlapping_bands_rejected(self):
        """Test that overlapping bands raise ValueError."""
        with pytest.raises(ValueError, match="overlap"):
            WorkingHoursScorer(bands=[ScoreBand(9, 17, 1.0), ScoreBand(16, 18, 0.5)])

    def test_invalid_band(self):
        """Test band validation."""
        with pytest.raises(ValueError):
            ScoreBand(17, 9, 1.0)
        with pytest.raises(ValueError):
            ScoreBand(9, 17, 1.5)
