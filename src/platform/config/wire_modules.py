"""
Wire Modules Configuration

Defines the modules that need dependency injection wiring.
Shared between production and test environments.
"""

from types import ModuleType

from src.service.booking.app.command import (
    booking_submission_flow,
    cancel_booking_use_case,
    complete_booking_use_case,
    override_seat_status_use_case,
)
from src.service.booking.app.query import (
    check_seat_availability_use_case,
    list_bookings_use_case,
)
from src.service.seat_map.app.query import list_seats_use_case


WIRE_MODULES: list[ModuleType] = [
    booking_submission_flow,
    cancel_booking_use_case,
    complete_booking_use_case,
    override_seat_status_use_case,
    check_seat_availability_use_case,
    list_bookings_use_case,
    list_seats_use_case,
]
