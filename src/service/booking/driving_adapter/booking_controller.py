from typing import List, Optional

from fastapi import APIRouter, Depends, Response, status
from opentelemetry import trace

from src.platform.logging.loguru_io import Logger
from src.service.booking.app.command.booking_submission_flow import BookingSubmissionFlow
from src.service.booking.app.command.cancel_booking_use_case import CancelBookingUseCase
from src.service.booking.app.command.complete_booking_use_case import CompleteBookingUseCase
from src.service.booking.app.query.list_bookings_use_case import ListBookingsUseCase
from src.service.booking.domain.submission_state import SubmissionOutcome, SubmissionState
from src.service.booking.driving_adapter.schema.booking_schema import (
    BookingCreateRequest,
    BookingResponse,
    SubmissionResponse,
)
from src.service.shared_kernel.domain.enum import BookingStatus


router = APIRouter()
tracer = trace.get_tracer(__name__)


def _status_code_for(outcome: SubmissionOutcome) -> int:
    if outcome.state == SubmissionState.COMMITTED:
        return status.HTTP_201_CREATED
    if outcome.state == SubmissionState.REJECTED:
        return status.HTTP_409_CONFLICT
    if outcome.retryable:
        return status.HTTP_504_GATEWAY_TIMEOUT
    return status.HTTP_400_BAD_REQUEST


@router.post('', status_code=status.HTTP_201_CREATED)
@Logger.io
async def create_booking(
    request: BookingCreateRequest,
    response: Response,
    flow: BookingSubmissionFlow = Depends(BookingSubmissionFlow.depends),
) -> SubmissionResponse:
    with tracer.start_as_current_span('controller.create_booking') as span:
        span.set_attribute('seat.id', request.seat_id)
        span.set_attribute('student.id', request.student_id)

        flow.edit(**request.model_dump())
        outcome = await flow.submit()

        response.status_code = _status_code_for(outcome)
        if outcome.booking:
            span.set_attribute('booking.id', outcome.booking.id)
        return SubmissionResponse.from_outcome(outcome)


@router.get('', response_model=List[BookingResponse])
@Logger.io
async def list_bookings(
    seat_id: Optional[str] = None,
    student_id: Optional[str] = None,
    booking_status: Optional[BookingStatus] = None,
    use_case: ListBookingsUseCase = Depends(ListBookingsUseCase.depends),
) -> List[BookingResponse]:
    bookings = await use_case.list_bookings(
        seat_id=seat_id, student_id=student_id, status=booking_status
    )
    return [BookingResponse.from_booking(b) for b in bookings]


@router.get('/{booking_id}')
@Logger.io
async def get_booking(
    booking_id: str,
    use_case: ListBookingsUseCase = Depends(ListBookingsUseCase.depends),
) -> BookingResponse:
    return BookingResponse.from_booking(await use_case.get_booking(booking_id=booking_id))


@router.patch('/{booking_id}/cancel', status_code=status.HTTP_200_OK)
@Logger.io
async def cancel_booking(
    booking_id: str,
    use_case: CancelBookingUseCase = Depends(CancelBookingUseCase.depends),
) -> BookingResponse:
    booking = await use_case.execute(booking_id=booking_id)
    return BookingResponse.from_booking(booking)


@router.patch('/{booking_id}/complete', status_code=status.HTTP_200_OK)
@Logger.io
async def complete_booking(
    booking_id: str,
    use_case: CompleteBookingUseCase = Depends(CompleteBookingUseCase.depends),
) -> BookingResponse:
    booking = await use_case.execute(booking_id=booking_id)
    return BookingResponse.from_booking(booking)
