"""
Seat Map View

One independently rendered seat map (dashboard tile, booking dialog, kiosk).
Each view owns its own seat state copy and keeps it current by subscribing to
the seat status bus while mounted.

Lifecycle:
    view = SeatMapView(name='dashboard', seats=store.list(), bus=bus)
    with view:             # mount → subscribe
        ...                # events applied to view.store
                           # unmount → unsubscribe, no more handler calls

on_change, when given, is called with every event that changed this copy.
"""

from collections.abc import Callable
from types import TracebackType
from typing import Iterable, Optional, Self

from src.platform.exception.exceptions import DomainError
from src.platform.logging.loguru_io import Logger
from src.service.seat_map.domain.seat_entity import Seat
from src.service.seat_map.driven_adapter.in_memory_seat_state_store import (
    InMemorySeatStateStore,
)
from src.service.shared_kernel.app.interface import ISeatStatusBus, Subscription
from src.service.shared_kernel.domain.domain_event import SeatStatusChangedEvent


class SeatMapView:
    def __init__(
        self,
        *,
        name: str,
        seats: Iterable[Seat],
        bus: ISeatStatusBus,
        on_change: Optional[Callable[[SeatStatusChangedEvent], None]] = None,
    ) -> None:
        self.name = name
        self.store = InMemorySeatStateStore(seats, name=name)
        self._bus = bus
        self._on_change = on_change
        self._subscription: Optional[Subscription] = None
        self.applied_events = 0

    @property
    def is_mounted(self) -> bool:
        return self._subscription is not None

    def mount(self) -> Self:
        if self._subscription is not None:
            raise DomainError(f'Seat map view {self.name} is already mounted')
        self._subscription = self._bus.subscribe(self._on_seat_status_changed, name=self.name)
        Logger.base.info(f'🗺️ [SEAT-MAP-VIEW] {self.name} mounted')
        return self

    def unmount(self) -> None:
        if self._subscription is None:
            return
        self._bus.unsubscribe(self._subscription)
        self._subscription = None
        Logger.base.info(f'🗺️ [SEAT-MAP-VIEW] {self.name} unmounted')

    def __enter__(self) -> Self:
        return self.mount()

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.unmount()

    def _on_seat_status_changed(self, event: SeatStatusChangedEvent) -> None:
        if self._subscription is None:
            Logger.base.warning(
                f'⚠️ [SEAT-MAP-VIEW] {self.name} received {event.seat_id} after unmount'
            )
            return
        if not self.store.contains(event.seat_id):
            Logger.base.debug(f'[SEAT-MAP-VIEW] {self.name} does not show seat {event.seat_id}')
            return
        if self.store.apply_event(event):
            self.applied_events += 1
            if self._on_change is not None:
                self._on_change(event)
