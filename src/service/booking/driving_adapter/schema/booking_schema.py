from datetime import datetime
from typing import Dict, Optional

from pydantic import BaseModel

from src.service.booking.domain.booking_entity import Booking
from src.service.booking.domain.submission_state import SubmissionOutcome
from src.service.shared_kernel.domain.value_object import Shift


class BookingCreateRequest(BaseModel):
    model_config = {
        'json_schema_extra': {
            'example': {
                'student_id': 'stu-42',
                'student_name': 'Asha',
                'seat_id': 'S-12',
                'date': '2024-04-15',
                'start_time': '09:00',
                'end_time': '11:00',
                'shift': 'morning',
                'notes': 'Near the window please',
            }
        },
    }

    # Plain strings: the submission flow reports field errors itself
    student_id: str = ''
    student_name: Optional[str] = None
    seat_id: str = ''
    date: str = ''
    start_time: str = ''
    end_time: str = ''
    shift: str = ''
    notes: Optional[str] = None


class BookingResponse(BaseModel):
    model_config = {
        'json_schema_extra': {
            'example': {
                'id': '01936d8f-5e73-7c4e-a9c5-123456789abc',  # UUID7
                'student_id': 'stu-42',
                'student_name': 'Asha',
                'seat_id': 'S-12',
                'date': '2024-04-15',
                'start_time': '09:00',
                'end_time': '11:00',
                'shift': 'morning',
                'status': 'active',
                'notes': None,
                'created_at': '2024-04-14T10:30:00Z',
                'updated_at': '2024-04-14T10:30:00Z',
            }
        },
    }

    id: str
    student_id: str
    student_name: Optional[str] = None
    seat_id: str
    date: str
    start_time: str
    end_time: str
    shift: str
    status: str
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_booking(cls, booking: Booking) -> 'BookingResponse':
        return cls(
            id=booking.id,
            student_id=booking.student_id,
            student_name=booking.student.name,
            seat_id=booking.seat_id,
            date=booking.date,
            start_time=booking.start_time,
            end_time=booking.end_time,
            shift=booking.shift.value,
            status=booking.status.value,
            notes=booking.notes,
            created_at=booking.created_at,
            updated_at=booking.updated_at,
        )


class SubmissionResponse(BaseModel):
    state: str
    booking: Optional[BookingResponse] = None
    rejection_reason: Optional[str] = None
    field_errors: Dict[str, str] = {}
    message: Optional[str] = None
    retryable: bool = False

    @classmethod
    def from_outcome(cls, outcome: SubmissionOutcome) -> 'SubmissionResponse':
        return cls(
            state=outcome.state.value,
            booking=BookingResponse.from_booking(outcome.booking) if outcome.booking else None,
            rejection_reason=outcome.rejection_reason.value if outcome.rejection_reason else None,
            field_errors=outcome.field_errors,
            message=outcome.message,
            retryable=outcome.retryable,
        )


class ShiftResponse(BaseModel):
    id: str
    name: str
    start_time: str
    end_time: str

    @classmethod
    def from_shift(cls, shift: Shift) -> 'ShiftResponse':
        return cls(
            id=shift.id.value, name=shift.name, start_time=shift.start_time, end_time=shift.end_time
        )
