"""Seat Status Enum"""

from enum import StrEnum


class SeatStatus(StrEnum):
    AVAILABLE = 'available'
    OCCUPIED = 'occupied'
    PRE_BOOKED = 'pre-booked'
    RESERVED = 'reserved'
    MAINTENANCE = 'maintenance'

    @property
    def requires_occupant(self) -> bool:
        """occupied, pre-booked and reserved seats always name who holds them"""
        return self in (SeatStatus.OCCUPIED, SeatStatus.PRE_BOOKED, SeatStatus.RESERVED)
