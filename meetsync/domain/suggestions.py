"""
Default candidate slots for a new poll.
"""

from datetime import date, time, timedelta
from typing import List

from .models import TimeSlot

WEEKDAY_HOURS = (time(9, 0), time(17, 0))
WEEKEND_HOURS = (time(10, 0), time(18, 0))


def suggest_time_slots(today: date, days: int = 5) -> List[TimeSlot]:
    """
    Propose one all-day slot for each of the ``days`` days after ``today``.

    Weekdays get 09:00-17:00, Saturdays and Sundays 10:00-18:00.
    """
    if days <= 0:
        raise ValueError(f"days must be greater than zero, got {days}")

    suggestions: List[TimeSlot] = []
    for offset in range(1, days + 1):
        day = today + timedelta(days=offset)
        start, end = WEEKEND_HOURS if day.weekday() >= 5 else WEEKDAY_HOURS
        suggestions.append(TimeSlot(date=day, start_time=start, end_time=end))

    return suggestions
