"""Shift Id Enum"""

from enum import StrEnum


class ShiftId(StrEnum):
    MORNING = 'morning'
    EVENING = 'evening'
    LATE_EVENING = 'lateEvening'
    FULL_DAY_1 = 'fullDay1'
    FULL_DAY_2 = 'fullDay2'
