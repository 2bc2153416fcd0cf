"""
Unit tests for the seat layout generator

Test Focus:
1. Serpentine numbering (odd rows right-to-left, even rows left-to-right)
2. Determinism: same geometry, same ids and numbers
3. Zones, padding and row grouping
4. Invalid geometry raises ConfigurationError
"""

import pytest

from src.platform.exception.exceptions import ConfigurationError
from src.service.seat_map.domain.seat_layout import (
    SeatLayoutGeometry,
    generate_seat_layout,
    group_row_pairs,
    group_rows,
    serpentine_number,
)
from src.service.shared_kernel.domain.enum import SeatStatus, SeatZone


@pytest.mark.unit
class TestSerpentineNumbering:
    def test_two_rows_of_four(self) -> None:
        seats = generate_seat_layout(SeatLayoutGeometry(rows=2, left_width=2, right_width=2))

        row_1 = [int(s.number) for s in seats if s.row == 1]
        row_2 = [int(s.number) for s in seats if s.row == 2]

        assert row_1 == [4, 3, 2, 1]
        assert row_2 == [5, 6, 7, 8]

    def test_third_row_runs_right_to_left_again(self) -> None:
        seats = generate_seat_layout(SeatLayoutGeometry(rows=3, left_width=1, right_width=2))

        assert [s.id for s in seats if s.row == 3] == ['S-9', 'S-8', 'S-7']

    def test_serpentine_number_matches_generated_ids(self) -> None:
        geometry = SeatLayoutGeometry(rows=4, left_width=3, right_width=4)

        for seat in generate_seat_layout(geometry):
            count = serpentine_number(row=seat.row, column=seat.column, seats_per_row=7)
            assert seat.id == f'S-{count}'

    def test_facility_chart_has_98_seats_and_s12_in_row_2(self) -> None:
        geometry = SeatLayoutGeometry(rows=14, left_width=3, right_width=4)
        seats = generate_seat_layout(geometry)

        assert len(seats) == geometry.total_seats == 98
        s12 = next(s for s in seats if s.id == 'S-12')
        assert (s12.row, s12.column, s12.zone) == (2, 5, SeatZone.RIGHT)

    def test_ids_are_unique_and_cover_every_count(self) -> None:
        seats = generate_seat_layout(SeatLayoutGeometry(rows=14, left_width=3, right_width=4))

        assert sorted(int(s.id.removeprefix('S-')) for s in seats) == list(range(1, 99))


@pytest.mark.unit
class TestLayoutProperties:
    def test_same_geometry_gives_same_numbers(self) -> None:
        geometry = SeatLayoutGeometry(rows=5, left_width=3, right_width=4)

        first = [(s.id, s.number) for s in generate_seat_layout(geometry)]
        second = [(s.id, s.number) for s in generate_seat_layout(geometry)]

        assert first == second

    def test_numbers_are_padded_to_total_width(self) -> None:
        seats = generate_seat_layout(SeatLayoutGeometry(rows=14, left_width=3, right_width=4))

        assert {len(s.number) for s in seats} == {2}
        assert next(s for s in seats if s.id == 'S-1').number == '01'

    def test_all_seats_start_available_without_occupant(self) -> None:
        seats = generate_seat_layout(SeatLayoutGeometry(rows=2, left_width=3, right_width=4))

        assert all(s.status == SeatStatus.AVAILABLE and s.occupant is None for s in seats)

    def test_zone_follows_left_width(self) -> None:
        seats = generate_seat_layout(SeatLayoutGeometry(rows=1, left_width=3, right_width=4))

        assert [s.zone for s in seats] == [SeatZone.LEFT] * 3 + [SeatZone.RIGHT] * 4

    def test_custom_id_prefix(self) -> None:
        seats = generate_seat_layout(
            SeatLayoutGeometry(rows=1, left_width=1, right_width=1), id_prefix='A-'
        )

        assert [s.id for s in seats] == ['A-2', 'A-1']


@pytest.mark.unit
class TestRowGrouping:
    def test_group_rows_splits_banks(self) -> None:
        seats = generate_seat_layout(SeatLayoutGeometry(rows=2, left_width=3, right_width=4))

        rows = group_rows(reversed(seats))

        assert [r.row_number for r in rows] == [1, 2]
        assert [s.column for s in rows[0].left_seats] == [1, 2, 3]
        assert [s.column for s in rows[0].right_seats] == [4, 5, 6, 7]

    def test_group_row_pairs_joins_consecutive_rows(self) -> None:
        seats = generate_seat_layout(SeatLayoutGeometry(rows=3, left_width=1, right_width=1))

        pairs = group_row_pairs(group_rows(seats))

        assert [p.joined_row_number for p in pairs] == [1, 2]
        assert [r.row_number for r in pairs[0].rows] == [1, 2]
        assert [r.row_number for r in pairs[1].rows] == [3]


@pytest.mark.unit
class TestInvalidGeometry:
    @pytest.mark.parametrize(
        'rows,left_width,right_width',
        [(0, 3, 4), (-1, 3, 4), (14, 0, 4), (14, 3, 0), (14, -2, 4)],
    )
    def test_rejects_non_positive_dimensions(
        self, rows: int, left_width: int, right_width: int
    ) -> None:
        with pytest.raises(ConfigurationError):
            SeatLayoutGeometry(rows=rows, left_width=left_width, right_width=right_width)
