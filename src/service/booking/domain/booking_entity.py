from datetime import datetime, timezone
from typing import Optional

import attrs
import uuid_utils

from src.platform.exception.exceptions import DomainError
from src.platform.logging.loguru_io import Logger
from src.service.shared_kernel.domain.enum import BookingStatus, ShiftId
from src.service.shared_kernel.domain.value_object import StudentRef, TimeInterval


@attrs.define(frozen=True)
class Booking:
    id: str
    student: StudentRef
    seat_id: str
    interval: TimeInterval
    shift: ShiftId
    status: BookingStatus = BookingStatus.ACTIVE
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    @Logger.io
    def create(
        cls,
        *,
        student: StudentRef,
        seat_id: str,
        interval: TimeInterval,
        shift: ShiftId,
        notes: Optional[str] = None,
    ) -> 'Booking':
        if not student.id:
            raise DomainError('Student is required')
        if not seat_id:
            raise DomainError('Seat is required')

        now = datetime.now(timezone.utc)
        return cls(
            id=str(uuid_utils.uuid7()),
            student=student,
            seat_id=seat_id,
            interval=interval,
            shift=shift,
            notes=notes or None,
            created_at=now,
            updated_at=now,
        )

    @property
    def is_active(self) -> bool:
        return self.status == BookingStatus.ACTIVE

    @property
    def student_id(self) -> str:
        return self.student.id

    @property
    def date(self) -> str:
        return self.interval.date.isoformat()

    @property
    def start_time(self) -> str:
        return self.interval.start_time

    @property
    def end_time(self) -> str:
        return self.interval.end_time

    def overlaps(self, interval: TimeInterval) -> bool:
        return self.interval.overlaps(interval)

    def _transition(self, status: BookingStatus) -> 'Booking':
        if not self.is_active:
            raise DomainError(f'Booking {self.id} is already {self.status}')
        return attrs.evolve(self, status=status, updated_at=datetime.now(timezone.utc))

    def cancel(self) -> 'Booking':
        return self._transition(BookingStatus.CANCELLED)

    def complete(self) -> 'Booking':
        return self._transition(BookingStatus.COMPLETED)
