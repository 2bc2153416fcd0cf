"""Shared Kernel Domain Events"""

from src.service.shared_kernel.domain.domain_event.seat_status_changed_event import (
    SEAT_STATUS_CHANNEL,
    SeatStatusChangedEvent,
)

__all__ = ['SEAT_STATUS_CHANNEL', 'SeatStatusChangedEvent']
