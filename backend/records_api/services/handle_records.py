"""Record Handlers — create appointments, clinical records and billing entries; list appointments.

Invariants:
    - Create = validate required fields → persist → return the stored row (with _id)
    - Validation failures and store failures on create share one 400 message per entity
    - Connectivity failures stay 500 (DatabaseUnavailableError)
    - Omitted appointment status becomes DEFAULT_APPOINTMENT_STATUS
"""

import logging

from pydantic.alias_generators import to_snake
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from records_api.core.domain_types import DEFAULT_APPOINTMENT_STATUS
from records_api.core.errors import (
    DatabaseError, DatabaseUnavailableError, DependencyError, ValidationError,
)
from records_api.core.validation import (
    APPOINTMENT, BILLING_ENTRY, CLINICAL_RECORD, EntityRules,
    ensure_valid, extract_fields, parse_iso_date,
)
from records_api.db.base import Base
from records_api.infrastructure.database import translate_errors
from records_api.models.appointment import Appointment
from records_api.models.billing_entry import BillingEntry
from records_api.models.clinical_record import ClinicalRecord

logger = logging.getLogger(__name__)

APPOINTMENT_CREATE_FAILED = "Error creating appointment"
CLINICAL_RECORD_CREATE_FAILED = "Error creating medical record"
BILLING_CREATE_FAILED = "Error creating billing record"
APPOINTMENT_LIST_FAILED = "Error fetching appointments"


def _to_columns(fields: dict) -> dict:
    """camelCase payload keys → snake_case ORM attributes."""
    return {to_snake(name): value for name, value in fields.items()}


async def _create(
    db: AsyncSession,
    record: Base,
    rules: EntityRules,
    message: str,
) -> Base:
    try:
        with translate_errors(f"{rules.entity} insert"):
            db.add(record)
            await db.commit()
    except DatabaseUnavailableError as e:
        raise DependencyError(message, e.code) from e
    except DatabaseError as e:
        await db.rollback()
        logger.warning(f"Failed to create {rules.entity}: {e.message}")
        raise ValidationError(message) from e
    logger.info(f"Created {rules.entity} {record.id}")
    return record


async def create_appointment(payload: dict, db: AsyncSession) -> Appointment:
    ensure_valid(payload, APPOINTMENT, APPOINTMENT_CREATE_FAILED)
    values = _to_columns(extract_fields(payload, APPOINTMENT))
    values["date"] = parse_iso_date(values["date"])
    values.setdefault("status", DEFAULT_APPOINTMENT_STATUS)
    return await _create(
        db, Appointment(**values), APPOINTMENT, APPOINTMENT_CREATE_FAILED,
    )


async def list_appointments(db: AsyncSession) -> list[Appointment]:
    """Every appointment, unfiltered and unpaginated."""
    try:
        with translate_errors("list appointments"):
            result = await db.execute(select(Appointment))
            return list(result.scalars().all())
    except DependencyError as e:
        raise DependencyError(APPOINTMENT_LIST_FAILED, e.code) from e


async def create_clinical_record(payload: dict, db: AsyncSession) -> ClinicalRecord:
    ensure_valid(payload, CLINICAL_RECORD, CLINICAL_RECORD_CREATE_FAILED)
    values = _to_columns(extract_fields(payload, CLINICAL_RECORD))
    return await _create(
        db, ClinicalRecord(**values), CLINICAL_RECORD, CLINICAL_RECORD_CREATE_FAILED,
    )


async def create_billing_entry(payload: dict, db: AsyncSession) -> BillingEntry:
    ensure_valid(payload, BILLING_ENTRY, BILLING_CREATE_FAILED)
    values = _to_columns(extract_fields(payload, BILLING_ENTRY))
    return await _create(
        db, BillingEntry(**values), BILLING_ENTRY, BILLING_CREATE_FAILED,
    )
