"""
Conversion between poll wall-clock times and absolute instants.

Offsets are resolved for the date being converted, never for "today", so a
poll whose slots straddle a daylight-saving change is handled correctly.

Edge policy for wall-clock times that do not map to exactly one instant:

- a time inside a spring-forward gap resolves to the first valid instant
  after the gap (02:30 in a zone jumping 02:00 -> 03:00 becomes 03:00)
- a time inside a fall-back overlap resolves to the earlier instant
"""

from __future__ import annotations

import logging
from datetime import date, datetime, time, timezone
from typing import Tuple
from zoneinfo import ZoneInfoNotFoundError

import pendulum
from pendulum import DateTime

from .exceptions import InvalidTimeZone

logger = logging.getLogger(__name__)


def resolve_timezone(timezone_name: str):
    """
    Look up a time zone by its IANA identifier.

    Raises:
        InvalidTimeZone: If the identifier is empty or unknown
    """
    if not isinstance(timezone_name, str) or not timezone_name.strip():
        raise InvalidTimeZone(timezone_name)

    try:
        return pendulum.timezone(timezone_name)
    except (ValueError, ZoneInfoNotFoundError) as exc:
        raise InvalidTimeZone(timezone_name) from exc


def is_valid_timezone(timezone_name: str) -> bool:
    """Check whether a time zone identifier is recognized."""
    try:
        resolve_timezone(timezone_name)
    except InvalidTimeZone:
        return False
    return True


def to_instant(day: date, local_time: time, timezone_name: str) -> DateTime:
    """
    Convert a wall-clock (date, time) in a zone to an absolute instant.

    Args:
        day: Calendar date of the wall-clock time
        local_time: Time of day, minute precision
        timezone_name: IANA zone the wall-clock time is expressed in

    Returns:
        Timezone-aware DateTime in ``timezone_name``

    Raises:
        InvalidTimeZone: If the zone is unknown
    """
    zone = resolve_timezone(timezone_name)
    wall = datetime(day.year, day.month, day.day, local_time.hour, local_time.minute)

    # fold=0 selects the earlier instant inside an overlap
    instant = wall.replace(tzinfo=zone, fold=0).astimezone(timezone.utc)

    if _wall_clock(instant, zone) != wall:
        instant = _end_of_gap(wall, zone)
        logger.debug(
            "%s %s does not exist in %s, moved to %s",
            day.isoformat(),
            local_time.strftime("%H:%M"),
            timezone_name,
            instant.isoformat(),
        )

    return pendulum.from_timestamp(instant.timestamp(), tz=zone)


def to_local(instant: datetime, timezone_name: str) -> DateTime:
    """Express an absolute instant as wall-clock time in a zone."""
    zone = resolve_timezone(timezone_name)
    return pendulum.instance(instant).in_timezone(zone)


def from_instant(instant: datetime, timezone_name: str) -> Tuple[date, time]:
    """Convert an absolute instant back to a wall-clock (date, time) pair."""
    local = to_local(instant, timezone_name)
    return local.date(), local.time()


def _wall_clock(instant: datetime, zone) -> datetime:
    return instant.astimezone(zone).replace(tzinfo=None)


def _end_of_gap(wall: datetime, zone) -> datetime:
    """
    Find the instant at which the clock jumps over ``wall``.

    Inside a gap, fold=1 applies the post-transition offset and lands
    before the transition, fold=0 applies the pre-transition offset and
    lands after it. Bisect between the two on whole seconds.
    """
    low = int(wall.replace(tzinfo=zone, fold=1).timestamp())
    high = int(wall.replace(tzinfo=zone, fold=0).timestamp())

    while high - low > 1:
        middle = (low + high) // 2
        probe = datetime.fromtimestamp(middle, tz=timezone.utc)
        if _wall_clock(probe, zone) > wall:
            high = middle
        else:
            low = middle

    return datetime.fromtimestamp(high, tz=timezone.utc)
