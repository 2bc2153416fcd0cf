"""
Booking Draft

What the booking form holds while the user is still typing, and the candidate
booking it turns into once every field passes local checks.
"""

from typing import Optional

import attrs

from src.platform.exception.exceptions import CustomBaseError, DraftValidationError
from src.service.shared_kernel.domain.enum import ShiftId
from src.service.shared_kernel.domain.value_object import (
    StudentRef,
    TimeInterval,
    parse_clock_time,
    parse_iso_date,
)


@attrs.define(frozen=True)
class BookingDraft:
    student_id: str = ''
    student_name: Optional[str] = None
    seat_id: str = ''
    date: str = ''
    start_time: str = ''
    end_time: str = ''
    shift: str = ''
    notes: Optional[str] = None

    def edit(self, **changes: Optional[str]) -> 'BookingDraft':
        return attrs.evolve(self, **changes)


@attrs.define(frozen=True)
class CandidateBooking:
    student: StudentRef
    seat_id: str
    interval: TimeInterval
    shift: ShiftId
    notes: Optional[str] = None

    @classmethod
    def from_draft(cls, draft: BookingDraft) -> 'CandidateBooking':
        """
        Raises:
            DraftValidationError: one message per failing field
        """
        errors: dict[str, str] = {}

        if not draft.student_id.strip():
            errors['student_id'] = 'Student is required'
        if not draft.seat_id.strip():
            errors['seat_id'] = 'Seat is required'

        shift: Optional[ShiftId] = None
        try:
            shift = ShiftId(draft.shift)
        except ValueError:
            errors['shift'] = f'Unknown shift: {draft.shift}' if draft.shift else 'Select a shift'

        date = start = end = None
        try:
            date = parse_iso_date(draft.date)
        except CustomBaseError as e:
            errors['date'] = e.message
        try:
            start = parse_clock_time(draft.start_time)
        except CustomBaseError as e:
            errors['start_time'] = e.message
        try:
            end = parse_clock_time(draft.end_time, allow_end_of_day=True)
        except CustomBaseError as e:
            errors['end_time'] = e.message

        if start is not None and end is not None and end <= start:
            errors['end_time'] = 'End time must be after start time'

        if errors:
            raise DraftValidationError(errors)

        assert date is not None and start is not None and end is not None and shift is not None
        return cls(
            student=StudentRef(id=draft.student_id.strip(), name=draft.student_name or None),
            seat_id=draft.seat_id.strip(),
            interval=TimeInterval(date=date, start_minute=start, end_minute=end),
            shift=shift,
            notes=draft.notes or None,
        )
