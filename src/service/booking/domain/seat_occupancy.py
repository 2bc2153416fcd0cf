"""
Seat Occupancy

A booked seat's status is not set by hand; it follows from the seat's active
bookings. The earliest-starting active booking decides it:

    starts at or before now → occupied     (student is in the seat)
    starts later            → pre-booked   (held for the student)
    no active booking       → available
"""

from datetime import datetime
from typing import Iterable, List, Optional

import attrs

from src.service.booking.domain.booking_entity import Booking
from src.service.shared_kernel.domain.enum import SeatStatus
from src.service.shared_kernel.domain.value_object import StudentRef, TimeInterval


@attrs.define(frozen=True)
class SeatOccupancy:
    status: SeatStatus
    occupant: Optional[StudentRef] = None


def sort_bookings(bookings: Iterable[Booking]) -> List[Booking]:
    return sorted(bookings, key=lambda b: b.interval.sort_key)


def derive_seat_occupancy(bookings: Iterable[Booking], *, now: datetime) -> SeatOccupancy:
    active = sort_bookings(b for b in bookings if b.is_active)
    if not active:
        return SeatOccupancy(status=SeatStatus.AVAILABLE)

    first = active[0]
    started = first.interval.start_datetime(now.tzinfo) <= now
    return SeatOccupancy(
        status=SeatStatus.OCCUPIED if started else SeatStatus.PRE_BOOKED,
        occupant=first.student,
    )


def find_conflict(bookings: Iterable[Booking], interval: TimeInterval) -> Optional[Booking]:
    """First active booking (by start) whose interval overlaps the given one"""
    for booking in sort_bookings(bookings):
        if booking.is_active and booking.overlaps(interval):
            return booking
    return None
