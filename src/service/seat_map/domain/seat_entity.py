from typing import Optional

import attrs

from src.platform.exception.exceptions import InvalidTransitionError
from src.service.shared_kernel.domain.enum import SeatStatus, SeatZone
from src.service.shared_kernel.domain.value_object import StudentRef


def validate_seat_state(
    *, seat_id: str, status: SeatStatus, occupant: Optional[StudentRef]
) -> None:
    """
    occupant is present iff status is occupied, pre-booked or reserved

    Raises:
        InvalidTransitionError: status and occupant disagree
    """
    if status.requires_occupant and occupant is None:
        raise InvalidTransitionError(f'Seat {seat_id} cannot be {status} without an occupant')
    if not status.requires_occupant and occupant is not None:
        raise InvalidTransitionError(
            f'Seat {seat_id} cannot be {status} while held by student {occupant.id}'
        )


@attrs.define(frozen=True)
class Seat:
    id: str
    number: str
    zone: SeatZone
    row: int
    column: int
    status: SeatStatus = SeatStatus.AVAILABLE
    occupant: Optional[StudentRef] = None

    def __attrs_post_init__(self) -> None:
        validate_seat_state(seat_id=self.id, status=self.status, occupant=self.occupant)

    @property
    def is_available(self) -> bool:
        return self.status == SeatStatus.AVAILABLE

    def with_status(self, status: SeatStatus, occupant: Optional[StudentRef] = None) -> 'Seat':
        """Return the seat in its new state, checked before anything is replaced."""
        return attrs.evolve(self, status=status, occupant=occupant)

    def has_state(self, status: SeatStatus, occupant: Optional[StudentRef]) -> bool:
        return self.status == status and self.occupant == occupant
