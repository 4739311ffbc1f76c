"""GET /v1/rooms/occupancy - Occupancy derived from resident assignments"""

from typing import List

from fastapi import APIRouter, Depends

from pg_ledger.api.dependencies import get_billing_service
from pg_ledger.api.v1.schemas import RoomOccupancyItem
from pg_ledger.services.billing_service import BillingService

router = APIRouter()


@router.get("/rooms/occupancy", response_model=List[RoomOccupancyItem])
def get_room_occupancy(service: BillingService = Depends(get_billing_service)):
    """Active and upcoming residents per room, recomputed on every request"""
    return [RoomOccupancyItem.from_occupancy(item) for item in service.room_occupancy()]
