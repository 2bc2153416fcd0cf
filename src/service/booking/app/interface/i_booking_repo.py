from abc import ABC, abstractmethod
from typing import List, Optional

from src.service.booking.domain.booking_entity import Booking
from src.service.shared_kernel.domain.enum import BookingStatus


class IBookingRepo(ABC):
    """Booking persistence. Every call may suspend (network round trip)."""

    @abstractmethod
    async def create_booking(self, *, booking: Booking) -> Booking:
        """
        Raises:
            BookingConflictError: an active booking on the same seat overlaps
        """
        pass

    @abstractmethod
    async def update_booking(self, *, booking: Booking) -> Booking:
        """
        Raises:
            BookingNotFoundError: unknown booking id
        """
        pass

    @abstractmethod
    async def get_by_id(self, *, booking_id: str) -> Optional[Booking]:
        pass

    @abstractmethod
    async def list_active_for_seat(self, *, seat_id: str) -> List[Booking]:
        pass

    @abstractmethod
    async def list_bookings(
        self,
        *,
        seat_id: Optional[str] = None,
        student_id: Optional[str] = None,
        status: Optional[BookingStatus] = None,
    ) -> List[Booking]:
        pass
