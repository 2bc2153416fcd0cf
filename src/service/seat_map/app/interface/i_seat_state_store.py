"""
Seat State Store Port

Holds the seat collection for one seat map. Every mutation is synchronous and
atomic: a seat is replaced as a whole, so readers never see half a transition.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from src.service.seat_map.domain.seat_entity import Seat
from src.service.shared_kernel.domain.domain_event import SeatStatusChangedEvent
from src.service.shared_kernel.domain.enum import SeatStatus, SeatZone
from src.service.shared_kernel.domain.value_object import StudentRef


class ISeatStateStore(ABC):
    @abstractmethod
    def get(self, seat_id: str) -> Seat:
        """
        Raises:
            SeatNotFoundError: unknown seat id
        """
        pass

    @abstractmethod
    def contains(self, seat_id: str) -> bool:
        pass

    @abstractmethod
    def set_status(
        self, seat_id: str, status: SeatStatus, occupant: Optional[StudentRef] = None
    ) -> Seat:
        """
        Move a seat to a new status

        Raises:
            SeatNotFoundError: unknown seat id
            InvalidTransitionError: status and occupant disagree; nothing is changed
        """
        pass

    @abstractmethod
    def list(
        self, *, status: Optional[SeatStatus] = None, zone: Optional[SeatZone] = None
    ) -> List[Seat]:
        """Seats in layout order, optionally only those with the given status / zone"""
        pass

    @abstractmethod
    def apply_event(self, event: SeatStatusChangedEvent) -> bool:
        """
        Mirror a published seat transition

        Returns:
            False when the seat is already in that state (no-op), True otherwise
        """
        pass
