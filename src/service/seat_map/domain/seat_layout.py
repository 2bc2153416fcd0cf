"""
Seat Layout Generator

Builds the physical seat chart: R rows, each a left bank and a right bank.
Seats are numbered in serpentine order, the way the chart on the wall reads:
odd rows count right-to-left, even rows left-to-right, and the count carries
on from one row to the next.

    2 rows x (2 + 2):      row 1 ->  4 3 | 2 1
                           row 2 ->  5 6 | 7 8
"""

from typing import TYPE_CHECKING, Iterable, List

import attrs

from src.platform.exception.exceptions import ConfigurationError
from src.service.seat_map.domain.seat_entity import Seat
from src.service.shared_kernel.domain.enum import SeatZone

if TYPE_CHECKING:
    from src.platform.config.core_setting import Settings


@attrs.define(frozen=True)
class SeatLayoutGeometry:
    rows: int
    left_width: int
    right_width: int

    def __attrs_post_init__(self) -> None:
        if self.rows <= 0:
            raise ConfigurationError(f'Seat layout needs at least one row, got {self.rows}')
        if self.left_width <= 0 or self.right_width <= 0:
            raise ConfigurationError(
                f'Seat layout zone widths must be positive, '
                f'got left={self.left_width} right={self.right_width}'
            )

    @classmethod
    def from_settings(cls, *, settings: 'Settings') -> 'SeatLayoutGeometry':
        return cls(
            rows=settings.LAYOUT_ROWS,
            left_width=settings.LAYOUT_LEFT_WIDTH,
            right_width=settings.LAYOUT_RIGHT_WIDTH,
        )

    @property
    def seats_per_row(self) -> int:
        return self.left_width + self.right_width

    @property
    def total_seats(self) -> int:
        return self.rows * self.seats_per_row


def serpentine_number(*, row: int, column: int, seats_per_row: int) -> int:
    """1-based row/column (column counted from the left) → seat count"""
    offset = (row - 1) * seats_per_row
    if row % 2 == 1:
        return offset + (seats_per_row - column + 1)
    return offset + column


def generate_seat_layout(geometry: SeatLayoutGeometry, *, id_prefix: str = 'S-') -> List[Seat]:
    """
    Seats in grid order (row by row, left to right), all available.

    Pure: the same geometry always yields the same ids and numbers.
    """
    width = geometry.seats_per_row
    pad = len(str(geometry.total_seats))
    seats: List[Seat] = []
    for row in range(1, geometry.rows + 1):
        for column in range(1, width + 1):
            count = serpentine_number(row=row, column=column, seats_per_row=width)
            seats.append(
                Seat(
                    id=f'{id_prefix}{count}',
                    number=str(count).zfill(pad),
                    zone=SeatZone.LEFT if column <= geometry.left_width else SeatZone.RIGHT,
                    row=row,
                    column=column,
                )
            )
    return seats


@attrs.define(frozen=True)
class SeatRow:
    row_number: int
    left_seats: List[Seat]
    right_seats: List[Seat]


@attrs.define(frozen=True)
class SeatRowPair:
    """Two physical rows drawn back to back as one "joined" row on the chart"""

    joined_row_number: int
    rows: List[SeatRow]


def group_rows(seats: Iterable[Seat]) -> List[SeatRow]:
    by_row: dict[int, List[Seat]] = {}
    for seat in seats:
        by_row.setdefault(seat.row, []).append(seat)

    rows = []
    for row_number in sorted(by_row):
        row_seats = sorted(by_row[row_number], key=lambda s: s.column)
        rows.append(
            SeatRow(
                row_number=row_number,
                left_seats=[s for s in row_seats if s.zone == SeatZone.LEFT],
                right_seats=[s for s in row_seats if s.zone == SeatZone.RIGHT],
            )
        )
    return rows


def group_row_pairs(rows: List[SeatRow]) -> List[SeatRowPair]:
    return [
        SeatRowPair(joined_row_number=index // 2 + 1, rows=rows[index : index + 2])
        for index in range(0, len(rows), 2)
    ]
