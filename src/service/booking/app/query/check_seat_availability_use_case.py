"""
Check Seat Availability Use Case (advisory)

Answers "can this seat be booked for this slot?" while the user is filling in
the booking form. The answer can go stale the moment it is returned; only the
Booking Conflict Guard decides at submit time.

Decision order:
1. end <= start                        → InvalidIntervalError (raised, nothing fetched)
2. seat under maintenance              → Unavailable(SeatUnderMaintenance)
3. an active booking overlaps the slot → Unavailable(IntervalOverlap)
4. seat held with no booking behind it
   (reserved, or state not yet backed) → Unavailable(SeatOccupied)
5. otherwise                           → Available
   (an occupied / pre-booked seat can still be booked for a later,
   non-overlapping slot)
"""

from typing import Optional, Self

import anyio
import attrs
from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace

from src.platform.config.core_setting import Settings
from src.platform.config.di import Container
from src.platform.exception.exceptions import OperationTimeoutError
from src.platform.logging.loguru_io import Logger
from src.service.booking.app.interface.i_booking_repo import IBookingRepo
from src.service.booking.domain.seat_occupancy import find_conflict
from src.service.seat_map.app.interface.i_seat_state_store import ISeatStateStore
from src.service.shared_kernel.domain.enum import SeatStatus, UnavailableReason
from src.service.shared_kernel.domain.value_object import TimeInterval, get_shift


@attrs.define(frozen=True)
class AvailabilityResult:
    seat_id: str
    available: bool
    reason: Optional[UnavailableReason] = None
    message: Optional[str] = None
    conflicting_booking_id: Optional[str] = None

    @classmethod
    def ok(cls, seat_id: str) -> 'AvailabilityResult':
        return cls(seat_id=seat_id, available=True)

    @classmethod
    def unavailable(
        cls,
        seat_id: str,
        reason: UnavailableReason,
        message: str,
        conflicting_booking_id: Optional[str] = None,
    ) -> 'AvailabilityResult':
        return cls(
            seat_id=seat_id,
            available=False,
            reason=reason,
            message=message,
            conflicting_booking_id=conflicting_booking_id,
        )


class CheckSeatAvailabilityUseCase:
    def __init__(
        self,
        *,
        seat_state_store: ISeatStateStore,
        booking_repo: IBookingRepo,
        timeout: Optional[float] = None,
    ) -> None:
        self.seat_state_store = seat_state_store
        self.booking_repo = booking_repo
        self.timeout = timeout
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    @inject
    def depends(
        cls,
        seat_state_store: ISeatStateStore = Depends(Provide[Container.seat_state_store]),
        booking_repo: IBookingRepo = Depends(Provide[Container.booking_repo]),
        config: Settings = Depends(Provide[Container.config_service]),
    ) -> Self:
        return cls(
            seat_state_store=seat_state_store,
            booking_repo=booking_repo,
            timeout=config.AVAILABILITY_CHECK_TIMEOUT_SECONDS,
        )

    async def check(
        self,
        *,
        seat_id: str,
        date: str,
        start_time: str,
        end_time: str,
        shift: Optional[str] = None,
    ) -> AvailabilityResult:
        """
        Raises:
            InvalidIntervalError: end time is not after start time
            DomainError: malformed date / time or unknown shift
            SeatNotFoundError: unknown seat id
            OperationTimeoutError: no answer within the configured timeout
        """
        interval = TimeInterval.parse(date=date, start_time=start_time, end_time=end_time)
        if shift:
            get_shift(shift)
        if self.timeout is None:
            return await self.check_interval(seat_id=seat_id, interval=interval)

        try:
            with anyio.fail_after(self.timeout):
                return await self.check_interval(seat_id=seat_id, interval=interval)
        except TimeoutError:
            raise OperationTimeoutError(
                f'Availability check for {seat_id} timed out after {self.timeout}s'
            )

    @Logger.io
    async def check_interval(self, *, seat_id: str, interval: TimeInterval) -> AvailabilityResult:
        with self.tracer.start_as_current_span(
            'use_case.check_seat_availability',
            attributes={'seat.id': seat_id, 'interval': str(interval)},
        ) as span:
            seat = self.seat_state_store.get(seat_id)

            if seat.status == SeatStatus.MAINTENANCE:
                result = AvailabilityResult.unavailable(
                    seat_id,
                    UnavailableReason.SEAT_UNDER_MAINTENANCE,
                    f'Seat {seat.number} is under maintenance',
                )
            else:
                active = await self.booking_repo.list_active_for_seat(seat_id=seat_id)
                conflict = find_conflict(active, interval)
                if conflict is not None:
                    result = AvailabilityResult.unavailable(
                        seat_id,
                        UnavailableReason.INTERVAL_OVERLAP,
                        f'Seat {seat.number} is booked {conflict.interval.start_time}-'
                        f'{conflict.interval.end_time} on {conflict.date}',
                        conflicting_booking_id=conflict.id,
                    )
                elif seat.status.requires_occupant and not active:
                    result = AvailabilityResult.unavailable(
                        seat_id,
                        UnavailableReason.SEAT_OCCUPIED,
                        f'Seat {seat.number} is {seat.status}',
                    )
                else:
                    result = AvailabilityResult.ok(seat_id)

            span.set_attribute('availability.available', result.available)
            if result.reason:
                span.set_attribute('availability.reason', result.reason.value)

            Logger.base.info(
                f'🔍 [AVAILABILITY] {seat_id} {interval}: '
                + ('available' if result.available else f'unavailable ({result.reason})')
            )
            return result
