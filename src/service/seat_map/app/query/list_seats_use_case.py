"""
Seat Map Query Use Case

Read side of the authoritative seat map: seat listing, single seat lookup,
the chart grouped into joined rows, and occupancy stats for the dashboard.
"""

from typing import List, Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.seat_map.app.interface.i_seat_state_store import ISeatStateStore
from src.service.seat_map.domain.seat_entity import Seat
from src.service.seat_map.domain.seat_layout import (
    SeatRowPair,
    group_row_pairs,
    group_rows,
)
from src.service.shared_kernel.domain.enum import SeatStatus, SeatZone


class ListSeatsUseCase:
    def __init__(self, *, seat_state_store: ISeatStateStore) -> None:
        self.seat_state_store = seat_state_store

    @classmethod
    @inject
    def depends(
        cls,
        seat_state_store: ISeatStateStore = Depends(Provide[Container.seat_state_store]),
    ) -> Self:
        return cls(seat_state_store=seat_state_store)

    @Logger.io
    def list_seats(
        self, *, status: Optional[SeatStatus] = None, zone: Optional[SeatZone] = None
    ) -> List[Seat]:
        return self.seat_state_store.list(status=status, zone=zone)

    @Logger.io
    def get_seat(self, *, seat_id: str) -> Seat:
        return self.seat_state_store.get(seat_id)

    def get_layout(self) -> List[SeatRowPair]:
        return group_row_pairs(group_rows(self.seat_state_store.list()))

    @Logger.io
    def get_stats(self) -> dict:
        """
        Returns:
            {
                "total": 98,
                "available": 90, "occupied": 3, "pre-booked": 2,
                "reserved": 1, "maintenance": 2,
                "occupancy_rate": 0.0816
            }
        """
        seats = self.seat_state_store.list()
        counts = {status.value: 0 for status in SeatStatus}
        for seat in seats:
            counts[seat.status.value] += 1

        total = len(seats)
        in_use = sum(counts[status] for status in SeatStatus if status.requires_occupant)
        stats = {'total': total, **counts}
        stats['occupancy_rate'] = round(in_use / total, 4) if total else 0.0

        Logger.base.info(f'📊 [SEAT-MAP] {in_use}/{total} seats in use')
        return stats
