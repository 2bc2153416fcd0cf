"""
Unit tests for the per-client SSE bridge

Test Focus:
1. Published transitions arrive on the client stream as dicts
2. The client's seat map view mirrors committed bookings
3. A full buffer drops events for that client without failing the publish
4. Leaving the context unmounts the view
"""

from collections.abc import Callable

from anyio import fail_after
import pytest

from src.service.booking.app.command.booking_conflict_guard import BookingConflictGuard
from src.service.booking.domain.booking_entity import Booking
from src.service.seat_map.driven_adapter.in_memory_seat_state_store import (
    InMemorySeatStateStore,
)
from src.service.seat_map.driving_adapter.seat_status_stream import open_seat_status_stream
from src.service.shared_kernel.domain.domain_event import SeatStatusChangedEvent
from src.service.shared_kernel.domain.enum import SeatStatus
from src.service.shared_kernel.driven_adapter.seat_status_bus_impl import SeatStatusBusImpl


def maintenance(seat_id: str) -> SeatStatusChangedEvent:
    return SeatStatusChangedEvent(seat_id=seat_id, status=SeatStatus.MAINTENANCE)


@pytest.mark.unit
class TestSeatStatusStream:
    @pytest.mark.asyncio
    async def test_forwards_published_events(
        self, seat_status_bus: SeatStatusBusImpl, seat_state_store: InMemorySeatStateStore
    ) -> None:
        async with open_seat_status_stream(
            bus=seat_status_bus, seats=seat_state_store.list(), buffer_size=5
        ) as stream:
            seat_status_bus.publish(maintenance('S-1'))

            with fail_after(1.0):
                received = await stream.updates.receive()

        assert received['seat_id'] == 'S-1'
        assert received['status'] == 'maintenance'
        assert received['occupant'] is None

    @pytest.mark.asyncio
    async def test_view_follows_committed_booking(
        self,
        seat_status_bus: SeatStatusBusImpl,
        seat_state_store: InMemorySeatStateStore,
        conflict_guard: BookingConflictGuard,
        make_booking: Callable[..., Booking],
    ) -> None:
        booking = make_booking(start='09:00', end='11:00')

        async with open_seat_status_stream(
            bus=seat_status_bus, seats=seat_state_store.list(), buffer_size=5
        ) as stream:
            assert stream.view.is_mounted
            assert stream.view.store.get('S-12').status == SeatStatus.AVAILABLE

            await conflict_guard.commit(booking=booking)

            with fail_after(1.0):
                received = await stream.updates.receive()

            mirrored = stream.view.store.get('S-12')
            assert mirrored.status == SeatStatus.OCCUPIED
            assert mirrored.occupant == booking.student
            assert mirrored == seat_state_store.get('S-12')

        assert received['seat_id'] == 'S-12'
        assert received['status'] == 'occupied'
        assert not stream.view.is_mounted

    @pytest.mark.asyncio
    async def test_repeated_event_is_not_forwarded_twice(
        self, seat_status_bus: SeatStatusBusImpl, seat_state_store: InMemorySeatStateStore
    ) -> None:
        async with open_seat_status_stream(
            bus=seat_status_bus, seats=seat_state_store.list(), buffer_size=5
        ) as stream:
            seat_status_bus.publish(maintenance('S-1'))
            seat_status_bus.publish(maintenance('S-1'))

            assert stream.view.applied_events == 1
            assert stream.updates.statistics().current_buffer_used == 1

    @pytest.mark.asyncio
    async def test_full_buffer_drops_without_failing_publish(
        self, seat_status_bus: SeatStatusBusImpl, seat_state_store: InMemorySeatStateStore
    ) -> None:
        async with open_seat_status_stream(
            bus=seat_status_bus, seats=seat_state_store.list(), buffer_size=1
        ) as stream:
            first = seat_status_bus.publish(maintenance('S-1'))
            second = seat_status_bus.publish(maintenance('S-2'))

            with fail_after(1.0):
                received = await stream.updates.receive()

        assert first.failed == second.failed == 0
        assert received['seat_id'] == 'S-1'

    @pytest.mark.asyncio
    async def test_unmounts_on_exit(
        self, seat_status_bus: SeatStatusBusImpl, seat_state_store: InMemorySeatStateStore
    ) -> None:
        async with open_seat_status_stream(
            bus=seat_status_bus, seats=seat_state_store.list(), buffer_size=5
        ):
            assert seat_status_bus.subscriber_count == 1

        assert seat_status_bus.subscriber_count == 0
        assert seat_status_bus.publish(maintenance('S-1')).delivered == 0
