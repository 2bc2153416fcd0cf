"""
Unit tests for the booking command / query use cases

The conflict guard is mocked: these tests cover what each use case asks
the guard to do, not the guard itself.
"""

from collections.abc import Callable
from unittest.mock import AsyncMock

import pytest

from src.platform.exception.exceptions import BookingNotFoundError, DomainError
from src.service.booking.app.command.cancel_booking_use_case import CancelBookingUseCase
from src.service.booking.app.command.complete_booking_use_case import CompleteBookingUseCase
from src.service.booking.app.command.override_seat_status_use_case import (
    OverrideSeatStatusUseCase,
)
from src.service.booking.app.query.list_bookings_use_case import ListBookingsUseCase
from src.service.booking.domain.booking_entity import Booking
from src.service.booking.driven_adapter.in_memory_booking_repo_impl import (
    InMemoryBookingRepoImpl,
)
from src.service.shared_kernel.domain.enum import BookingStatus, SeatStatus
from src.service.shared_kernel.domain.value_object import StudentRef


BookingFactory = Callable[..., Booking]


@pytest.fixture
def mock_guard() -> AsyncMock:
    return AsyncMock()


@pytest.mark.unit
class TestCancelAndComplete:
    @pytest.mark.asyncio
    async def test_cancel_releases_as_cancelled(self, mock_guard: AsyncMock) -> None:
        use_case = CancelBookingUseCase(conflict_guard=mock_guard)

        await use_case.execute(booking_id='b-1')

        mock_guard.release.assert_awaited_once_with(
            booking_id='b-1', to_status=BookingStatus.CANCELLED
        )

    @pytest.mark.asyncio
    async def test_complete_releases_as_completed(self, mock_guard: AsyncMock) -> None:
        use_case = CompleteBookingUseCase(conflict_guard=mock_guard)

        await use_case.execute(booking_id='b-1')

        mock_guard.release.assert_awaited_once_with(
            booking_id='b-1', to_status=BookingStatus.COMPLETED
        )


@pytest.mark.unit
class TestOverrideSeatStatus:
    @pytest.mark.asyncio
    async def test_reserved_carries_student(self, mock_guard: AsyncMock) -> None:
        use_case = OverrideSeatStatusUseCase(conflict_guard=mock_guard)

        await use_case.execute(
            seat_id='S-3', status=SeatStatus.RESERVED, student_id='stu-7', student_name='Li'
        )

        mock_guard.override_status.assert_awaited_once_with(
            seat_id='S-3',
            status=SeatStatus.RESERVED,
            occupant=StudentRef(id='stu-7', name='Li'),
        )

    @pytest.mark.asyncio
    async def test_reserved_without_student_is_rejected(self, mock_guard: AsyncMock) -> None:
        use_case = OverrideSeatStatusUseCase(conflict_guard=mock_guard)

        with pytest.raises(DomainError, match='needs the student'):
            await use_case.execute(seat_id='S-3', status=SeatStatus.RESERVED)

        mock_guard.override_status.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_maintenance_cannot_name_student(self, mock_guard: AsyncMock) -> None:
        use_case = OverrideSeatStatusUseCase(conflict_guard=mock_guard)

        with pytest.raises(DomainError, match='cannot name a student'):
            await use_case.execute(
                seat_id='S-3', status=SeatStatus.MAINTENANCE, student_id='stu-7'
            )

    @pytest.mark.asyncio
    async def test_maintenance_has_no_occupant(self, mock_guard: AsyncMock) -> None:
        use_case = OverrideSeatStatusUseCase(conflict_guard=mock_guard)

        await use_case.execute(seat_id='S-3', status=SeatStatus.MAINTENANCE)

        mock_guard.override_status.assert_awaited_once_with(
            seat_id='S-3', status=SeatStatus.MAINTENANCE, occupant=None
        )


@pytest.mark.unit
class TestListBookings:
    @pytest.mark.asyncio
    async def test_filters_by_seat_student_and_status(
        self, booking_repo: InMemoryBookingRepoImpl, make_booking: BookingFactory
    ) -> None:
        mine = make_booking(seat_id='S-1', student_id='stu-1')
        other_seat = make_booking(seat_id='S-2', student_id='stu-1')
        other_student = make_booking(seat_id='S-1', start='13:00', end='14:00', student_id='stu-2')
        for booking in (mine, other_seat, other_student):
            await booking_repo.create_booking(booking=booking)
        await booking_repo.update_booking(booking=other_seat.cancel())
        use_case = ListBookingsUseCase(booking_repo=booking_repo)

        by_seat = await use_case.list_bookings(seat_id='S-1')
        by_student = await use_case.list_bookings(student_id='stu-1')
        cancelled = await use_case.list_bookings(status=BookingStatus.CANCELLED)

        assert [b.id for b in by_seat] == [mine.id, other_student.id]
        assert {b.id for b in by_student} == {mine.id, other_seat.id}
        assert [b.id for b in cancelled] == [other_seat.id]

    @pytest.mark.asyncio
    async def test_get_unknown_booking(self, booking_repo: InMemoryBookingRepoImpl) -> None:
        use_case = ListBookingsUseCase(booking_repo=booking_repo)

        with pytest.raises(BookingNotFoundError):
            await use_case.get_booking(booking_id='missing')
