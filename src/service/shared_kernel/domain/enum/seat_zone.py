"""Seat Zone Enum"""

from enum import StrEnum


class SeatZone(StrEnum):
    """Bank of the seat chart a seat sits in. Layout only, never booking rules."""

    LEFT = 'left'
    RIGHT = 'right'
