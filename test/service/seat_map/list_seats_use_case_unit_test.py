import pytest

from src.service.seat_map.app.query.list_seats_use_case import ListSeatsUseCase
from src.service.seat_map.driven_adapter.in_memory_seat_state_store import (
    InMemorySeatStateStore,
)
from src.service.shared_kernel.domain.enum import SeatStatus, SeatZone
from src.service.shared_kernel.domain.value_object import StudentRef


@pytest.fixture
def use_case(seat_state_store: InMemorySeatStateStore) -> ListSeatsUseCase:
    return ListSeatsUseCase(seat_state_store=seat_state_store)


@pytest.mark.unit
class TestListSeatsUseCase:
    def test_stats_count_every_status(
        self, use_case: ListSeatsUseCase, seat_state_store: InMemorySeatStateStore
    ) -> None:
        student = StudentRef(id='stu-1')
        seat_state_store.set_status('S-1', SeatStatus.OCCUPIED, student)
        seat_state_store.set_status('S-2', SeatStatus.PRE_BOOKED, student)
        seat_state_store.set_status('S-3', SeatStatus.RESERVED, student)
        seat_state_store.set_status('S-4', SeatStatus.MAINTENANCE)

        stats = use_case.get_stats()

        assert stats == {
            'total': 98,
            'available': 94,
            'occupied': 1,
            'pre-booked': 1,
            'reserved': 1,
            'maintenance': 1,
            'occupancy_rate': round(3 / 98, 4),
        }

    def test_list_by_zone(self, use_case: ListSeatsUseCase) -> None:
        left = use_case.list_seats(zone=SeatZone.LEFT)

        assert len(left) == 14 * 3
        assert all(s.column <= 3 for s in left)

    def test_layout_has_seven_joined_rows(self, use_case: ListSeatsUseCase) -> None:
        layout = use_case.get_layout()

        assert len(layout) == 7
        assert all(len(pair.rows) == 2 for pair in layout)
