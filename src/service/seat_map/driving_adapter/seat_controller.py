from collections.abc import AsyncIterator
from typing import List, Optional

import anyio
from fastapi import APIRouter, Depends, status
from opentelemetry import trace
import orjson
from sse_starlette.sse import EventSourceResponse

from src.platform.config.di import container
from src.platform.logging.loguru_io import Logger
from src.service.booking.app.command.override_seat_status_use_case import (
    OverrideSeatStatusUseCase,
)
from src.service.booking.app.query.check_seat_availability_use_case import (
    CheckSeatAvailabilityUseCase,
)
from src.service.seat_map.app.query.list_seats_use_case import ListSeatsUseCase
from src.service.seat_map.driving_adapter.schema.seat_schema import (
    AvailabilityCheckRequest,
    AvailabilityCheckResponse,
    SeatResponse,
    SeatRowPairResponse,
    SeatStatsResponse,
    SeatStatusOverrideRequest,
)
from src.service.seat_map.driving_adapter.seat_status_stream import open_seat_status_stream
from src.service.shared_kernel.domain.domain_event import SEAT_STATUS_CHANNEL
from src.service.shared_kernel.domain.enum import SeatStatus, SeatZone


router = APIRouter()
tracer = trace.get_tracer(__name__)


@router.get('', response_model=List[SeatResponse])
@Logger.io
async def list_seats(
    seat_status: Optional[SeatStatus] = None,
    zone: Optional[SeatZone] = None,
    use_case: ListSeatsUseCase = Depends(ListSeatsUseCase.depends),
) -> List[SeatResponse]:
    return [
        SeatResponse.from_seat(seat) for seat in use_case.list_seats(status=seat_status, zone=zone)
    ]


@router.get('/stats')
@Logger.io
async def get_seat_stats(
    use_case: ListSeatsUseCase = Depends(ListSeatsUseCase.depends),
) -> SeatStatsResponse:
    return SeatStatsResponse.from_stats(use_case.get_stats())


@router.get('/layout', response_model=List[SeatRowPairResponse])
@Logger.io
async def get_seat_layout(
    use_case: ListSeatsUseCase = Depends(ListSeatsUseCase.depends),
) -> List[SeatRowPairResponse]:
    return [SeatRowPairResponse.from_pair(pair) for pair in use_case.get_layout()]


# ============================ SSE Endpoint ============================


@router.get('/stream', status_code=status.HTTP_200_OK)
async def stream_seat_status() -> EventSourceResponse:
    """
    SSE feed of seat transitions for one seat map client

    Flow:
    1. Client connects → current seat map sent as one "snapshot" event
    2. Each transition applied to the client's seat map copy pushed as a
       "seat_status_changed" event
    3. Client disconnects → seat map view unmounted
    """
    bus = container.seat_status_bus()
    store = container.seat_state_store()
    buffer_size = container.config_service().SSE_STREAM_BUFFER_SIZE
    Logger.base.info(f'📡 [SSE] Client subscribing to {SEAT_STATUS_CHANNEL}')

    async def event_generator() -> AsyncIterator[dict[str, str]]:
        async with open_seat_status_stream(
            bus=bus, seats=store.list(), buffer_size=buffer_size
        ) as stream:
            snapshot = [
                SeatResponse.from_seat(seat).model_dump(mode='json')
                for seat in stream.view.store.list()
            ]
            yield {'event': 'snapshot', 'data': orjson.dumps(snapshot).decode()}

            try:
                async for event_data in stream.updates:
                    yield {
                        'event': 'seat_status_changed',
                        'data': orjson.dumps(event_data).decode(),
                    }
            except anyio.get_cancelled_exc_class():
                Logger.base.info('🔌 [SSE] Client disconnected')
                raise

    return EventSourceResponse(event_generator())


@router.get('/{seat_id}')
@Logger.io
async def get_seat(
    seat_id: str,
    use_case: ListSeatsUseCase = Depends(ListSeatsUseCase.depends),
) -> SeatResponse:
    return SeatResponse.from_seat(use_case.get_seat(seat_id=seat_id))


@router.post('/{seat_id}/availability')
@Logger.io
async def check_seat_availability(
    seat_id: str,
    request: AvailabilityCheckRequest,
    use_case: CheckSeatAvailabilityUseCase = Depends(CheckSeatAvailabilityUseCase.depends),
) -> AvailabilityCheckResponse:
    with tracer.start_as_current_span('controller.check_seat_availability') as span:
        span.set_attribute('seat.id', seat_id)
        result = await use_case.check(
            seat_id=seat_id,
            date=request.date,
            start_time=request.start_time,
            end_time=request.end_time,
            shift=request.shift,
        )
        return AvailabilityCheckResponse(
            seat_id=result.seat_id,
            available=result.available,
            reason=result.reason.value if result.reason else None,
            message=result.message,
            conflicting_booking_id=result.conflicting_booking_id,
        )


@router.put('/{seat_id}/status')
@Logger.io
async def override_seat_status(
    seat_id: str,
    request: SeatStatusOverrideRequest,
    use_case: OverrideSeatStatusUseCase = Depends(OverrideSeatStatusUseCase.depends),
) -> SeatResponse:
    seat = await use_case.execute(
        seat_id=seat_id,
        status=SeatStatus(request.status),
        student_id=request.student_id,
        student_name=request.student_name,
    )
    return SeatResponse.from_seat(seat)
