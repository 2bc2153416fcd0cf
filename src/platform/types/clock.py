"""Facility clock: the single source of "now" for seat status decisions."""

from datetime import datetime
from typing import Callable
import zoneinfo


Clock = Callable[[], datetime]


def facility_clock(*, tz_name: str) -> Clock:
    """Return a clock yielding timezone-aware datetimes in the facility's timezone."""
    tz = zoneinfo.ZoneInfo(tz_name)

    def now() -> datetime:
        return datetime.now(tz)

    return now
