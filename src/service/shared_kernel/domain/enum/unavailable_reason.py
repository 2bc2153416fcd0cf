"""Unavailable Reason Enum"""

from enum import StrEnum


class UnavailableReason(StrEnum):
    """Why an advisory availability check said no"""

    SEAT_OCCUPIED = 'SeatOccupied'
    SEAT_UNDER_MAINTENANCE = 'SeatUnderMaintenance'
    INTERVAL_OVERLAP = 'IntervalOverlap'
