from typing import Iterable, List, Optional, Self

from src.platform.exception.exceptions import SeatNotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.seat_map.app.interface.i_seat_state_store import ISeatStateStore
from src.service.seat_map.domain.seat_entity import Seat
from src.service.seat_map.domain.seat_layout import SeatLayoutGeometry, generate_seat_layout
from src.service.shared_kernel.domain.domain_event import SeatStatusChangedEvent
from src.service.shared_kernel.domain.enum import SeatStatus, SeatZone
from src.service.shared_kernel.domain.value_object import StudentRef


class InMemorySeatStateStore(ISeatStateStore):
    """Seat collection for one rendered seat map, keyed by seat id in layout order"""

    def __init__(self, seats: Iterable[Seat], *, name: str = 'seat-map') -> None:
        self.name = name
        self._seats: dict[str, Seat] = {}
        for seat in seats:
            if seat.id in self._seats:
                raise ValueError(f'Duplicate seat id in layout: {seat.id}')
            self._seats[seat.id] = seat

    @classmethod
    def from_geometry(
        cls, *, geometry: SeatLayoutGeometry, id_prefix: str = 'S-', name: str = 'authoritative'
    ) -> Self:
        return cls(generate_seat_layout(geometry, id_prefix=id_prefix), name=name)

    def __len__(self) -> int:
        return len(self._seats)

    def get(self, seat_id: str) -> Seat:
        try:
            return self._seats[seat_id]
        except KeyError:
            raise SeatNotFoundError(seat_id)

    def contains(self, seat_id: str) -> bool:
        return seat_id in self._seats

    @Logger.io
    def set_status(
        self, seat_id: str, status: SeatStatus, occupant: Optional[StudentRef] = None
    ) -> Seat:
        current = self.get(seat_id)
        updated = current.with_status(status, occupant)
        self._seats[seat_id] = updated

        Logger.base.info(
            f'💺 [SEAT-STORE:{self.name}] {seat_id} {current.status} → {updated.status}'
            + (f' (student {occupant.id})' if occupant else '')
        )
        return updated

    def list(
        self, *, status: Optional[SeatStatus] = None, zone: Optional[SeatZone] = None
    ) -> List[Seat]:
        return [
            seat
            for seat in self._seats.values()
            if (status is None or seat.status == status) and (zone is None or seat.zone == zone)
        ]

    def apply_event(self, event: SeatStatusChangedEvent) -> bool:
        if self.get(event.seat_id).has_state(event.status, event.occupant):
            Logger.base.debug(
                f'💺 [SEAT-STORE:{self.name}] {event.seat_id} already {event.status}, skipping'
            )
            return False
        self.set_status(event.seat_id, event.status, event.occupant)
        return True
