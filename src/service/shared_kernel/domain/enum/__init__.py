"""Shared Kernel Enums"""

from src.service.shared_kernel.domain.enum.booking_status import BookingStatus
from src.service.shared_kernel.domain.enum.seat_status import SeatStatus
from src.service.shared_kernel.domain.enum.seat_zone import SeatZone
from src.service.shared_kernel.domain.enum.shift_id import ShiftId
from src.service.shared_kernel.domain.enum.unavailable_reason import UnavailableReason

__all__ = ['BookingStatus', 'SeatStatus', 'SeatZone', 'ShiftId', 'UnavailableReason']
