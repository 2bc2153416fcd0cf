"""Shared Kernel Value Objects"""

from src.service.shared_kernel.domain.value_object.shift import (
    SHIFT_CATALOG,
    Shift,
    get_shift,
    list_shifts,
)
from src.service.shared_kernel.domain.value_object.student_ref import StudentRef
from src.service.shared_kernel.domain.value_object.time_interval import (
    TimeInterval,
    format_clock_time,
    parse_clock_time,
    parse_iso_date,
)

__all__ = [
    'SHIFT_CATALOG',
    'Shift',
    'StudentRef',
    'TimeInterval',
    'format_clock_time',
    'get_shift',
    'list_shifts',
    'parse_clock_time',
    'parse_iso_date',
]
