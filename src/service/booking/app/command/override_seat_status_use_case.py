from typing import Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import DomainError
from src.platform.logging.loguru_io import Logger
from src.service.booking.app.command.booking_conflict_guard import BookingConflictGuard
from src.service.seat_map.domain.seat_entity import Seat
from src.service.shared_kernel.domain.enum import SeatStatus
from src.service.shared_kernel.domain.value_object import StudentRef


class OverrideSeatStatusUseCase:
    """
    Administrative seat status change

    - maintenance: take the seat out of service
    - reserved: hold the seat for a student outside the booking flow
    - available: lift either of the above
    """

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
    async def execute(
        self,
        *,
        seat_id: str,
        status: SeatStatus,
        student_id: Optional[str] = None,
        student_name: Optional[str] = None,
    ) -> Seat:
        occupant: Optional[StudentRef] = None
        if status == SeatStatus.RESERVED:
            if not student_id:
                raise DomainError('A reserved seat needs the student it is held for')
            occupant = StudentRef(id=student_id, name=student_name)
        elif student_id:
            raise DomainError(f'A seat set to {status} cannot name a student')

        return await self.conflict_guard.override_status(
            seat_id=seat_id, status=status, occupant=occupant
        )
