from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.booking.app.command.booking_conflict_guard import BookingConflictGuard
from src.service.booking.domain.booking_entity import Booking
from src.service.shared_kernel.domain.enum import BookingStatus


class CompleteBookingUseCase:
    def __init__(self, *, conflict_guard: BookingConflictGuard) -> None:
        self.conflict_guard = conflict_guard

    @classmethod
    @inject
    def depends(
        cls,
        conflict_guard: BookingConflictGuard = Depends(Provide[Container.booking_conflict_guard]),
    ) -> Self:
        return cls(conflict_guard=conflict_guard)

    @Logger.io
    async def execute(self, *, booking_id: str) -> Booking:
        """Student checked out: active → completed"""
        return await self.conflict_guard.release(
            booking_id=booking_id, to_status=BookingStatus.COMPLETED
        )
