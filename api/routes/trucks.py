"""Truck endpoints."""
from decimal import Decimal
from typing import List, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict

from api.deps import get_account_id, get_load_service
from models import TruckType
from services.load_service import LoadService

router = APIRouter()


class TruckResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    truck_number: str
    truck_type: TruckType
    truck_length: Decimal
    carrying_capacity: Decimal
    driver_name: str
    driver_phone: str
    owner_name: str
    contact_person: Optional[str]
    is_active: bool


@router.get("/trucks/available", response_model=List[TruckResponse])
async def list_available_trucks(
    account_id: str = Depends(get_account_id),
    service: LoadService = Depends(get_load_service),
):
    """Trucks that can take a new load."""
    return service.available_trucks(account_id)
