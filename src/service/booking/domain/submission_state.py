from enum import StrEnum
from typing import Optional

import attrs

from src.service.booking.domain.booking_entity import Booking


class SubmissionState(StrEnum):
    DRAFT = 'Draft'
    VALIDATING = 'Validating'
    AWAITING_AVAILABILITY_CONFIRMATION = 'AwaitingAvailabilityConfirmation'
    SUBMITTING = 'Submitting'
    COMMITTED = 'Committed'
    REJECTED = 'Rejected'

    @property
    def is_final(self) -> bool:
        return self in (SubmissionState.COMMITTED, SubmissionState.REJECTED)


class RejectionReason(StrEnum):
    SEAT_OCCUPIED = 'SeatOccupied'
    SEAT_UNDER_MAINTENANCE = 'SeatUnderMaintenance'
    INTERVAL_OVERLAP = 'IntervalOverlap'
    BOOKING_CONFLICT = 'BookingConflict'


@attrs.define(frozen=True)
class SubmissionOutcome:
    """Where one submit() attempt left the flow"""

    state: SubmissionState
    booking: Optional[Booking] = None
    rejection_reason: Optional[RejectionReason] = None
    field_errors: dict[str, str] = attrs.field(factory=dict)
    message: Optional[str] = None
    retryable: bool = False

    @property
    def committed(self) -> bool:
        return self.state == SubmissionState.COMMITTED
