"""Load endpoints."""
from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict, Field

from api.deps import get_account_id, get_load_service
from models import LoadStatus, PaymentDirection, PaymentMethod, TransactionType
from services.load_service import LoadService, NewLoad, PaymentRequest

router = APIRouter()


class LoadCreate(BaseModel):
    load_provider_id: int
    loading_location: str
    unloading_location: str
    material_description: str
    material_weight: Decimal
    freight_amount: Decimal
    truck_freight_amount: Optional[Decimal] = None


class LoadResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    load_provider_id: int
    truck_id: Optional[int]
    loading_location: str
    unloading_location: str
    material_description: str
    material_weight: Decimal
    freight_amount: Decimal
    truck_freight_amount: Optional[Decimal]
    profit_amount: Optional[Decimal]
    status: LoadStatus
    assigned_at: Optional[datetime]
    loading_completed_at: Optional[datetime]
    delivery_completed_at: Optional[datetime]
    completed_at: Optional[datetime]
    created_at: Optional[datetime]


class AssignTruckRequest(BaseModel):
    truck_id: Optional[int] = None


class StatusUpdateRequest(BaseModel):
    status: Optional[LoadStatus] = Field(
        default=None,
        description="Target status; omit to move to the next one",
    )


class CompleteLoadRequest(BaseModel):
    reason: str


class PaymentCreate(BaseModel):
    direction: PaymentDirection
    amount: Decimal
    payment_method: PaymentMethod
    payment_details: Optional[str] = None
    notes: Optional[str] = None
    upi_id: Optional[str] = None
    bank_name: Optional[str] = None
    account_number: Optional[str] = None
    ifsc_code: Optional[str] = None


class TransactionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    load_id: int
    payment_direction: PaymentDirection
    transaction_type: TransactionType
    payment_sequence: int
    amount: Decimal
    payment_method: PaymentMethod
    party_name: Optional[str]
    payment_details: Optional[str]
    notes: Optional[str]
    transaction_date: datetime


class PaymentResponse(BaseModel):
    transaction: TransactionResponse
    totals: dict
    load_completed: bool


@router.get("/loads/profit-preview")
async def preview_profit(
    freight_amount: Decimal,
    truck_freight_amount: Optional[Decimal] = None,
):
    """Profit for a load that is being filled in; nothing is saved."""
    return {"expected_profit": LoadService.preview_profit(freight_amount, truck_freight_amount)}


@router.post("/loads", response_model=LoadResponse, status_code=201)
async def create_load(
    payload: LoadCreate,
    account_id: str = Depends(get_account_id),
    service: LoadService = Depends(get_load_service),
):
    """Create a pending load."""
    return service.create_load(account_id, NewLoad(**payload.model_dump()))


@router.get("/loads", response_model=List[LoadResponse])
async def list_loads(
    status: Optional[LoadStatus] = None,
    load_provider_id: Optional[int] = None,
    skip: int = 0,
    limit: Optional[int] = None,
    account_id: str = Depends(get_account_id),
    service: LoadService = Depends(get_load_service),
):
    """List the account's loads, newest first."""
    return service.list_loads(
        account_id, status=status, load_provider_id=load_provider_id, skip=skip, limit=limit
    )


@router.get("/loads/{load_id}", response_model=LoadResponse)
async def get_load(
    load_id: int,
    account_id: str = Depends(get_account_id),
    service: LoadService = Depends(get_load_service),
):
    """Get load by ID."""
    return service.get_load(account_id, load_id)


@router.get("/loads/{load_id}/katha")
async def get_katha(
    load_id: int,
    account_id: str = Depends(get_account_id),
    service: LoadService = Depends(get_load_service),
):
    """Katha card: totals and the transaction timeline."""
    return service.get_katha(account_id, load_id).to_dict()


@router.post("/loads/{load_id}/assign", response_model=LoadResponse)
async def assign_truck(
    load_id: int,
    payload: AssignTruckRequest,
    account_id: str = Depends(get_account_id),
    service: LoadService = Depends(get_load_service),
):
    """Assign an available truck to a pending load."""
    return service.assign_truck(account_id, load_id, payload.truck_id)


@router.post("/loads/{load_id}/status", response_model=LoadResponse)
async def advance_status(
    load_id: int,
    payload: StatusUpdateRequest,
    account_id: str = Depends(get_account_id),
    service: LoadService = Depends(get_load_service),
):
    """Move a load one step along its shipping status."""
    return service.advance_status(account_id, load_id, payload.status)


@router.post("/loads/{load_id}/payments", response_model=PaymentResponse, status_code=201)
async def record_payment(
    load_id: int,
    payload: PaymentCreate,
    account_id: str = Depends(get_account_id),
    service: LoadService = Depends(get_load_service),
):
    """Record a payment received from the provider or paid to the truck."""
    result = service.record_payment(
        account_id,
        load_id,
        PaymentRequest(
            direction=payload.direction.value,
            amount=payload.amount,
            payment_method=payload.payment_method.value,
            payment_details=payload.payment_details,
            notes=payload.notes,
            upi_id=payload.upi_id,
            bank_name=payload.bank_name,
            account_number=payload.account_number,
            ifsc_code=payload.ifsc_code,
        ),
    )
    return PaymentResponse(
        transaction=TransactionResponse.model_validate(result.transaction),
        totals=result.totals.to_dict(),
        load_completed=result.load_completed,
    )


@router.post("/loads/{load_id}/complete", response_model=LoadResponse)
async def complete_load(
    load_id: int,
    payload: CompleteLoadRequest,
    account_id: str = Depends(get_account_id),
    service: LoadService = Depends(get_load_service),
):
    """Close a load by hand, e.g. one that never had truck freight agreed."""
    return service.complete_load(account_id, load_id, payload.reason)
