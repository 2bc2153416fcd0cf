"""Shared Kernel Interfaces"""

from src.service.shared_kernel.app.interface.i_seat_status_bus import (
    HandlerFailure,
    ISeatStatusBus,
    PublishReport,
    SeatStatusHandler,
    Subscription,
)

__all__ = [
    'HandlerFailure',
    'ISeatStatusBus',
    'PublishReport',
    'SeatStatusHandler',
    'Subscription',
]
