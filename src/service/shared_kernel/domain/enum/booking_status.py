"""Booking Status Enum"""

from enum import StrEnum


class BookingStatus(StrEnum):
    ACTIVE = 'active'
    COMPLETED = 'completed'
    CANCELLED = 'cancelled'
