from typing import List, Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import BookingNotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.booking.app.interface.i_booking_repo import IBookingRepo
from src.service.booking.domain.booking_entity import Booking
from src.service.shared_kernel.domain.enum import BookingStatus


class ListBookingsUseCase:
    def __init__(self, *, booking_repo: IBookingRepo) -> None:
        self.booking_repo = booking_repo

    @classmethod
    @inject
    def depends(
        cls,
        booking_repo: IBookingRepo = Depends(Provide[Container.booking_repo]),
    ) -> Self:
        return cls(booking_repo=booking_repo)

    @Logger.io
    async def list_bookings(
        self,
        *,
        seat_id: Optional[str] = None,
        student_id: Optional[str] = None,
        status: Optional[BookingStatus] = None,
    ) -> List[Booking]:
        return await self.booking_repo.list_bookings(
            seat_id=seat_id, student_id=student_id, status=status
        )

    @Logger.io
    async def get_booking(self, *, booking_id: str) -> Booking:
        booking = await self.booking_repo.get_by_id(booking_id=booking_id)
        if booking is None:
            raise BookingNotFoundError(booking_id)
        return booking
