"""
Seat Status Changed Event

Published on the seat status bus after every committed seat transition
(booking, cancellation, completion, administrative override). Seat map views
apply it to their own copy of the seat state.
"""

from datetime import datetime, timezone
from typing import Any, Optional

import attrs

from src.service.shared_kernel.domain.enum.seat_status import SeatStatus
from src.service.shared_kernel.domain.value_object.student_ref import StudentRef


SEAT_STATUS_CHANNEL = 'seat-status-changed'


@attrs.define(frozen=True)
class SeatStatusChangedEvent:
    seat_id: str
    status: SeatStatus
    occupant: Optional[StudentRef] = None
    occurred_at: datetime = attrs.field(
        factory=lambda: datetime.now(timezone.utc), eq=False
    )

    def to_dict(self) -> dict[str, Any]:
        return {
            'seat_id': self.seat_id,
            'status': self.status.value,
            'occupant': self.occupant.to_dict() if self.occupant else None,
            'occurred_at': self.occurred_at.isoformat(),
        }
