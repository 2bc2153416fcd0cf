"""
In-memory Booking Repository

Stands in for the booking backend. Each call first yields to the event loop
(optionally sleeping SIMULATED_BACKEND_LATENCY_SECONDS) so callers see the same
suspension points a remote store would have; the mutation after the checkpoint
runs without interruption.
"""

from typing import List, Optional

import anyio

from src.platform.exception.exceptions import BookingConflictError, BookingNotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.booking.app.interface.i_booking_repo import IBookingRepo
from src.service.booking.domain.booking_entity import Booking
from src.service.booking.domain.seat_occupancy import find_conflict, sort_bookings
from src.service.shared_kernel.domain.enum import BookingStatus


class InMemoryBookingRepoImpl(IBookingRepo):
    def __init__(self, *, latency_seconds: float = 0.0) -> None:
        self.latency_seconds = latency_seconds
        self._bookings: dict[str, Booking] = {}

    async def _round_trip(self) -> None:
        await anyio.sleep(self.latency_seconds)

    @Logger.io
    async def create_booking(self, *, booking: Booking) -> Booking:
        await self._round_trip()

        same_seat = (b for b in self._bookings.values() if b.seat_id == booking.seat_id)
        existing = find_conflict(same_seat, booking.interval)
        if existing is not None:
            raise BookingConflictError(
                f'Seat {booking.seat_id} already booked {existing.interval} '
                f'(booking {existing.id})'
            )

        self._bookings[booking.id] = booking
        Logger.base.info(
            f'📝 [BOOKING-REPO] Stored booking {booking.id} seat={booking.seat_id} '
            f'{booking.interval} student={booking.student_id}'
        )
        return booking

    @Logger.io
    async def update_booking(self, *, booking: Booking) -> Booking:
        await self._round_trip()

        if booking.id not in self._bookings:
            raise BookingNotFoundError(booking.id)
        self._bookings[booking.id] = booking
        return booking

    async def get_by_id(self, *, booking_id: str) -> Optional[Booking]:
        await self._round_trip()
        return self._bookings.get(booking_id)

    async def list_active_for_seat(self, *, seat_id: str) -> List[Booking]:
        await self._round_trip()
        return sort_bookings(
            b for b in self._bookings.values() if b.seat_id == seat_id and b.is_active
        )

    async def list_bookings(
        self,
        *,
        seat_id: Optional[str] = None,
        student_id: Optional[str] = None,
        status: Optional[BookingStatus] = None,
    ) -> List[Booking]:
        await self._round_trip()
        return sort_bookings(
            b
            for b in self._bookings.values()
            if (seat_id is None or b.seat_id == seat_id)
            and (student_id is None or b.student_id == student_id)
            and (status is None or b.status == status)
        )
