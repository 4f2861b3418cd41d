"""Record Routes — appointments, clinical records and billing entries under /api.

Invariants:
    - Fields that were never set are omitted from responses (exclude_none)
"""

from fastapi import APIRouter, Body, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from records_api.infrastructure.database import get_db
from records_api.schemas.records import (
    AppointmentResponse, BillingEntryResponse, ClinicalRecordResponse,
)
from records_api.services import handle_records

router = APIRouter(prefix="/api", tags=["records"])


@router.get(
    "/appointments", response_model=list[AppointmentResponse],
    response_model_exclude_none=True,
)
async def list_appointments(db: AsyncSession = Depends(get_db)):
    return await handle_records.list_appointments(db)


@router.post(
    "/appointments", response_model=AppointmentResponse,
    response_model_exclude_none=True, status_code=status.HTTP_201_CREATED,
)
async def create_appointment(
    payload: dict = Body(default_factory=dict),
    db: AsyncSession = Depends(get_db),
):
    return await handle_records.create_appointment(payload, db)


@router.post(
    "/records", response_model=ClinicalRecordResponse,
    response_model_exclude_none=True, status_code=status.HTTP_201_CREATED,
)
async def create_clinical_record(
    payload: dict = Body(default_factory=dict),
    db: AsyncSession = Depends(get_db),
):
    return await handle_records.create_clinical_record(payload, db)


@router.post(
    "/billings", response_model=BillingEntryResponse,
    response_model_exclude_none=True, status_code=status.HTTP_201_CREATED,
)
async def create_billing_entry(
    payload: dict = Body(default_factory=dict),
    db: AsyncSession = Depends(get_db),
):
    return await handle_records.create_billing_entry(payload, db)
