from typing import List, Literal, Optional

from pydantic import BaseModel

from src.service.seat_map.domain.seat_entity import Seat
from src.service.seat_map.domain.seat_layout import SeatRow, SeatRowPair
from src.service.shared_kernel.domain.enum import SeatStatus, SeatZone


class OccupantResponse(BaseModel):
    id: str
    name: Optional[str] = None


class SeatResponse(BaseModel):
    model_config = {
        'json_schema_extra': {
            'example': {
                'id': 'S-12',
                'number': '12',
                'zone': 'right',
                'row': 2,
                'column': 5,
                'status': 'occupied',
                'occupant': {'id': 'stu-42', 'name': 'Asha'},
            }
        },
    }

    id: str
    number: str
    zone: SeatZone
    row: int
    column: int
    status: SeatStatus
    occupant: Optional[OccupantResponse] = None

    @classmethod
    def from_seat(cls, seat: Seat) -> 'SeatResponse':
        return cls(
            id=seat.id,
            number=seat.number,
            zone=seat.zone,
            row=seat.row,
            column=seat.column,
            status=seat.status,
            occupant=(
                OccupantResponse(id=seat.occupant.id, name=seat.occupant.name)
                if seat.occupant
                else None
            ),
        )


class SeatRowResponse(BaseModel):
    row_number: int
    left_seats: List[SeatResponse]
    right_seats: List[SeatResponse]

    @classmethod
    def from_row(cls, row: SeatRow) -> 'SeatRowResponse':
        return cls(
            row_number=row.row_number,
            left_seats=[SeatResponse.from_seat(s) for s in row.left_seats],
            right_seats=[SeatResponse.from_seat(s) for s in row.right_seats],
        )


class SeatRowPairResponse(BaseModel):
    joined_row_number: int
    rows: List[SeatRowResponse]

    @classmethod
    def from_pair(cls, pair: SeatRowPair) -> 'SeatRowPairResponse':
        return cls(
            joined_row_number=pair.joined_row_number,
            rows=[SeatRowResponse.from_row(row) for row in pair.rows],
        )


class SeatStatsResponse(BaseModel):
    model_config = {
        'json_schema_extra': {
            'example': {
                'total': 98,
                'available': 90,
                'occupied': 3,
                'pre_booked': 2,
                'reserved': 1,
                'maintenance': 2,
                'occupancy_rate': 0.0612,
            }
        },
    }

    total: int
    available: int
    occupied: int
    pre_booked: int
    reserved: int
    maintenance: int
    occupancy_rate: float

    @classmethod
    def from_stats(cls, stats: dict) -> 'SeatStatsResponse':
        return cls(
            total=stats['total'],
            available=stats[SeatStatus.AVAILABLE],
            occupied=stats[SeatStatus.OCCUPIED],
            pre_booked=stats[SeatStatus.PRE_BOOKED],
            reserved=stats[SeatStatus.RESERVED],
            maintenance=stats[SeatStatus.MAINTENANCE],
            occupancy_rate=stats['occupancy_rate'],
        )


class AvailabilityCheckRequest(BaseModel):
    model_config = {
        'json_schema_extra': {
            'example': {
                'date': '2024-04-15',
                'start_time': '09:00',
                'end_time': '11:00',
                'shift': 'morning',
            }
        },
    }

    date: str
    start_time: str
    end_time: str
    shift: Optional[str] = None


class AvailabilityCheckResponse(BaseModel):
    seat_id: str
    available: bool
    reason: Optional[Literal['SeatOccupied', 'SeatUnderMaintenance', 'IntervalOverlap']] = None
    message: Optional[str] = None
    conflicting_booking_id: Optional[str] = None


class SeatStatusOverrideRequest(BaseModel):
    model_config = {
        'json_schema_extra': {
            'example': {'status': 'reserved', 'student_id': 'stu-7', 'student_name': 'Ravi'}
        },
    }

    status: Literal['available', 'reserved', 'maintenance']
    student_id: Optional[str] = None
    student_name: Optional[str] = None
