"""
Shift Value Object

Shifts are a fixed catalog of named time ranges shown on the booking form.
A booking records its shift as a label; availability is decided by the
explicit start/end times alone.
"""

import attrs

from src.platform.exception.exceptions import DomainError
from src.service.shared_kernel.domain.enum.shift_id import ShiftId


@attrs.define(frozen=True)
class Shift:
    id: ShiftId
    name: str
    start_time: str
    end_time: str


SHIFT_CATALOG: dict[ShiftId, Shift] = {
    shift.id: shift
    for shift in (
        Shift(ShiftId.MORNING, 'Morning (07:00 AM - 02:00 PM)', '07:00', '14:00'),
        Shift(ShiftId.EVENING, 'Evening (02:00 PM - 10:00 PM)', '14:00', '22:00'),
        Shift(ShiftId.LATE_EVENING, 'Late Evening (02:00 PM - 12:00 AM)', '14:00', '24:00'),
        Shift(ShiftId.FULL_DAY_1, 'Full Day (07:00 AM - 10:00 PM)', '07:00', '22:00'),
        Shift(ShiftId.FULL_DAY_2, 'Full Day (07:00 AM - 12:00 AM)', '07:00', '24:00'),
    )
}


def get_shift(shift_id: str | ShiftId) -> Shift:
    try:
        return SHIFT_CATALOG[ShiftId(shift_id)]
    except ValueError:
        raise DomainError(f'Unknown shift: {shift_id}')


def list_shifts() -> list[Shift]:
    return list(SHIFT_CATALOG.values())
