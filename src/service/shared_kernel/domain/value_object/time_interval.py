"""
Time Interval Value Object

A half-open booking window [start, end) on one calendar date, in minutes since
midnight. "24:00" is accepted as an end time so late shifts can run to midnight.
"""

from datetime import date as Date, datetime, time, tzinfo
import re
from typing import Optional

import attrs

from src.platform.exception.exceptions import DomainError, InvalidIntervalError


MINUTES_PER_DAY = 24 * 60
END_OF_DAY = '24:00'

_CLOCK_TIME_PATTERN = re.compile(r'([01]\d|2[0-3]):([0-5]\d)')


def parse_clock_time(value: str, *, allow_end_of_day: bool = False) -> int:
    """Parse a 24-hour "HH:MM" string into minutes since midnight."""
    if allow_end_of_day and value == END_OF_DAY:
        return MINUTES_PER_DAY
    match = _CLOCK_TIME_PATTERN.fullmatch(value or '')
    if not match:
        raise DomainError(f'Invalid time "{value}", expected HH:MM (24-hour)')
    return int(match.group(1)) * 60 + int(match.group(2))


def format_clock_time(minutes: int) -> str:
    return f'{minutes // 60:02d}:{minutes % 60:02d}'


def parse_iso_date(value: str | Date) -> Date:
    if isinstance(value, Date):
        return value
    try:
        return Date.fromisoformat(value)
    except (TypeError, ValueError):
        raise DomainError(f'Invalid date "{value}", expected YYYY-MM-DD')


@attrs.define(frozen=True)
class TimeInterval:
    date: Date
    start_minute: int
    end_minute: int

    def __attrs_post_init__(self) -> None:
        if not 0 <= self.start_minute < MINUTES_PER_DAY:
            raise DomainError(f'Start minute out of range: {self.start_minute}')
        if not 0 < self.end_minute <= MINUTES_PER_DAY:
            raise DomainError(f'End minute out of range: {self.end_minute}')
        if self.end_minute <= self.start_minute:
            raise InvalidIntervalError(
                f'End time {format_clock_time(self.end_minute)} must be after '
                f'start time {format_clock_time(self.start_minute)}'
            )

    @classmethod
    def parse(cls, *, date: str | Date, start_time: str, end_time: str) -> 'TimeInterval':
        return cls(
            date=parse_iso_date(date),
            start_minute=parse_clock_time(start_time),
            end_minute=parse_clock_time(end_time, allow_end_of_day=True),
        )

    @property
    def start_time(self) -> str:
        return format_clock_time(self.start_minute)

    @property
    def end_time(self) -> str:
        return format_clock_time(self.end_minute)

    @property
    def sort_key(self) -> tuple[Date, int, int]:
        return (self.date, self.start_minute, self.end_minute)

    def overlaps(self, other: 'TimeInterval') -> bool:
        """[s1,e1) and [s2,e2) on the same date overlap iff s1 < e2 and s2 < e1"""
        return (
            self.date == other.date
            and self.start_minute < other.end_minute
            and other.start_minute < self.end_minute
        )

    def start_datetime(self, tz: Optional[tzinfo] = None) -> datetime:
        start = time(hour=self.start_minute // 60, minute=self.start_minute % 60)
        return datetime.combine(self.date, start, tzinfo=tz)

    def __str__(self) -> str:
        return f'{self.date.isoformat()} {self.start_time}-{self.end_time}'
