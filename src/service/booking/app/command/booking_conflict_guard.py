"""
Booking Conflict Guard

The only writer of authoritative seat state for booked seats. Every booking
commit, cancellation and completion goes through here, serialised per seat, so
the overlap check and the write it guards can never interleave with another
request for the same seat.

Commit sequence (all under the seat's lock):
1. Re-read seat + active bookings; reject maintenance / reserved / overlap
2. Work out the seat's next status and validate it (no mutation yet)
3. Persist the booking (the only await after the checks)
4. Replace the seat in the store and publish SeatStatusChanged

If step 3 fails nothing was changed. Step 4 is synchronous, so readers see
either the old seat or the new one.
"""

from collections.abc import Iterable
from typing import Optional

import anyio
from opentelemetry import trace

from src.platform.exception.exceptions import (
    BookingConflictError,
    BookingNotFoundError,
    ConflictError,
    DomainError,
)
from src.platform.logging.loguru_io import Logger
from src.platform.types import Clock
from src.service.booking.app.interface.i_booking_repo import IBookingRepo
from src.service.booking.domain.booking_entity import Booking
from src.service.booking.domain.seat_occupancy import (
    SeatOccupancy,
    derive_seat_occupancy,
    find_conflict,
)
from src.service.seat_map.app.interface.i_seat_state_store import ISeatStateStore
from src.service.seat_map.domain.seat_entity import Seat, validate_seat_state
from src.service.shared_kernel.app.interface import ISeatStatusBus
from src.service.shared_kernel.domain.domain_event import SeatStatusChangedEvent
from src.service.shared_kernel.domain.enum import BookingStatus, SeatStatus
from src.service.shared_kernel.domain.value_object import StudentRef


OVERRIDABLE_STATUSES = frozenset(
    {SeatStatus.AVAILABLE, SeatStatus.RESERVED, SeatStatus.MAINTENANCE}
)


class BookingConflictGuard:
    def __init__(
        self,
        *,
        seat_state_store: ISeatStateStore,
        booking_repo: IBookingRepo,
        seat_status_bus: ISeatStatusBus,
        clock: Clock,
    ) -> None:
        self.seat_state_store = seat_state_store
        self.booking_repo = booking_repo
        self.seat_status_bus = seat_status_bus
        self.clock = clock
        self.tracer = trace.get_tracer(__name__)
        self._seat_locks: dict[str, anyio.Lock] = {}

    def _lock_for(self, seat_id: str) -> anyio.Lock:
        """
        Raises:
            SeatNotFoundError: unknown seat; no lock is created for it
        """
        self.seat_state_store.get(seat_id)
        lock = self._seat_locks.get(seat_id)
        if lock is None:
            lock = self._seat_locks[seat_id] = anyio.Lock()
        return lock

    def _next_occupancy(self, seat_id: str, bookings: Iterable[Booking]) -> SeatOccupancy:
        occupancy = derive_seat_occupancy(bookings, now=self.clock())
        validate_seat_state(seat_id=seat_id, status=occupancy.status, occupant=occupancy.occupant)
        return occupancy

    def _apply(self, seat_id: str, occupancy: SeatOccupancy) -> Seat:
        current = self.seat_state_store.get(seat_id)
        if current.has_state(occupancy.status, occupancy.occupant):
            return current
        seat = self.seat_state_store.set_status(seat_id, occupancy.status, occupancy.occupant)
        self._publish(seat)
        return seat

    def _publish(self, seat: Seat) -> None:
        report = self.seat_status_bus.publish(
            SeatStatusChangedEvent(seat_id=seat.id, status=seat.status, occupant=seat.occupant)
        )
        if report.failed:
            Logger.base.warning(
                f'⚠️ [CONFLICT-GUARD] {report.failed} subscriber(s) failed on {seat.id}'
            )

    @Logger.io
    async def commit(self, *, booking: Booking) -> Seat:
        """
        Atomically check and record a booking

        Returns:
            The seat in its new state

        Raises:
            SeatNotFoundError: unknown seat
            BookingConflictError: seat under maintenance / reserved, or an
                overlapping active booking exists; nothing changed
        """
        seat_id = booking.seat_id
        with self.tracer.start_as_current_span(
            'conflict_guard.commit',
            attributes={'seat.id': seat_id, 'booking.id': booking.id},
        ):
            async with self._lock_for(seat_id):
                seat = self.seat_state_store.get(seat_id)
                if seat.status == SeatStatus.MAINTENANCE:
                    raise BookingConflictError(f'Seat {seat.number} is under maintenance')
                if seat.status == SeatStatus.RESERVED:
                    raise BookingConflictError(f'Seat {seat.number} is reserved')

                active = await self.booking_repo.list_active_for_seat(seat_id=seat_id)
                existing = find_conflict(active, booking.interval)
                if existing is not None:
                    Logger.base.warning(
                        f'🚫 [CONFLICT-GUARD] {seat_id} {booking.interval} overlaps '
                        f'booking {existing.id} ({existing.interval})'
                    )
                    raise BookingConflictError()

                occupancy = self._next_occupancy(seat_id, [*active, booking])

                await self.booking_repo.create_booking(booking=booking)

                Logger.base.info(
                    f'✅ [CONFLICT-GUARD] Committed booking {booking.id} on {seat_id} '
                    f'{booking.interval}'
                )
                return self._apply(seat_id, occupancy)

    @Logger.io
    async def release(self, *, booking_id: str, to_status: BookingStatus) -> Booking:
        """
        End an active booking (cancelled or completed) and recompute its seat

        Raises:
            BookingNotFoundError: unknown booking
            DomainError: booking is not active, or to_status is not a final status
        """
        if to_status == BookingStatus.ACTIVE:
            raise DomainError('A booking can only be released to cancelled or completed')

        booking = await self.booking_repo.get_by_id(booking_id=booking_id)
        if booking is None:
            raise BookingNotFoundError(booking_id)

        seat_id = booking.seat_id
        with self.tracer.start_as_current_span(
            'conflict_guard.release',
            attributes={'seat.id': seat_id, 'booking.id': booking_id, 'to_status': to_status},
        ):
            async with self._lock_for(seat_id):
                # re-read under the lock; a concurrent release may have won
                booking = await self.booking_repo.get_by_id(booking_id=booking_id)
                if booking is None:
                    raise BookingNotFoundError(booking_id)
                if to_status == BookingStatus.CANCELLED:
                    ended = booking.cancel()
                else:
                    ended = booking.complete()

                active = await self.booking_repo.list_active_for_seat(seat_id=seat_id)
                remaining = [b for b in active if b.id != booking_id]
                occupancy = self._next_occupancy(seat_id, remaining)

                await self.booking_repo.update_booking(booking=ended)

                Logger.base.info(
                    f'🔓 [CONFLICT-GUARD] Booking {booking_id} on {seat_id} → {to_status}'
                )
                self._apply(seat_id, occupancy)
                return ended

    @Logger.io
    async def override_status(
        self, *, seat_id: str, status: SeatStatus, occupant: Optional[StudentRef] = None
    ) -> Seat:
        """
        Administrative hold / maintenance / release of a seat with no active bookings

        Raises:
            DomainError: status cannot be set by hand (occupied / pre-booked)
            ConflictError: the seat still has active bookings
            InvalidTransitionError: occupant missing for reserved, or given otherwise
        """
        if status not in OVERRIDABLE_STATUSES:
            raise DomainError(f'Seat status {status} follows from bookings and cannot be set')

        async with self._lock_for(seat_id):
            active = await self.booking_repo.list_active_for_seat(seat_id=seat_id)
            if active:
                raise ConflictError(
                    f'Seat {seat_id} has {len(active)} active booking(s); '
                    'cancel or complete them first'
                )

            current = self.seat_state_store.get(seat_id)
            if current.has_state(status, occupant):
                return current
            seat = self.seat_state_store.set_status(seat_id, status, occupant)
            self._publish(seat)
            return seat

