from typing import List

from fastapi import APIRouter

from src.service.booking.driving_adapter.schema.booking_schema import ShiftResponse
from src.service.shared_kernel.domain.value_object import get_shift, list_shifts


router = APIRouter()


@router.get('', response_model=List[ShiftResponse])
async def list_all_shifts() -> List[ShiftResponse]:
    return [ShiftResponse.from_shift(shift) for shift in list_shifts()]


@router.get('/{shift_id}')
async def get_one_shift(shift_id: str) -> ShiftResponse:
    return ShiftResponse.from_shift(get_shift(shift_id))
