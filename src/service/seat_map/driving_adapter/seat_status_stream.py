"""
Seat Status Stream

Bridges the synchronous seat status bus to one SSE client. Each client is a
mounted SeatMapView with its own seat state copy; every change applied to that
copy is pushed into a bounded memory stream without waiting, so a slow browser
can never stall a publish. Events that do not fit are dropped for that client
only.
"""

from collections.abc import AsyncIterator, Iterable
from contextlib import asynccontextmanager
from typing import Any

import anyio
from anyio.streams.memory import MemoryObjectReceiveStream
import attrs

from src.platform.logging.loguru_io import Logger
from src.service.seat_map.app.seat_map_view import SeatMapView
from src.service.seat_map.domain.seat_entity import Seat
from src.service.shared_kernel.app.interface import ISeatStatusBus
from src.service.shared_kernel.domain.domain_event import SeatStatusChangedEvent


@attrs.define(frozen=True)
class SeatStatusStream:
    view: SeatMapView
    updates: MemoryObjectReceiveStream[dict[str, Any]]


@asynccontextmanager
async def open_seat_status_stream(
    *,
    bus: ISeatStatusBus,
    seats: Iterable[Seat],
    buffer_size: int,
    client_name: str = 'sse-client',
) -> AsyncIterator[SeatStatusStream]:
    send_stream, receive_stream = anyio.create_memory_object_stream[dict[str, Any]](
        max_buffer_size=buffer_size
    )

    def forward(event: SeatStatusChangedEvent) -> None:
        try:
            send_stream.send_nowait(event.to_dict())
        except anyio.WouldBlock:
            Logger.base.warning(
                f'⚠️ [SSE] {client_name} buffer full, dropped update for {event.seat_id}'
            )

    view = SeatMapView(name=client_name, seats=seats, bus=bus, on_change=forward)
    view.mount()
    try:
        async with receive_stream:
            yield SeatStatusStream(view=view, updates=receive_stream)
    finally:
        view.unmount()
        send_stream.close()
        Logger.base.info(f'🔌 [SSE] {client_name} stream closed')
