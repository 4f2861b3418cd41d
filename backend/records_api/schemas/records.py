"""Record Schemas — camelCase response documents for appointments, records, billings.

Invariants:
    - Generated identifier serialized as "_id"
    - Field names camelCase on the wire, snake_case on the ORM (alias_generator)
"""

import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class RecordDocument(BaseModel):
    """Base for record responses built from ORM rows."""
    model_config = ConfigDict(
        from_attributes=True, populate_by_name=True, alias_generator=to_camel,
    )

    id: str = Field(alias="_id")
    patient_name: str
    patient_id: str | None = None


class AppointmentResponse(RecordDocument):
    date: datetime.date
    time: str | None = None
    doctor: str | None = None
    reason: str | None = None
    status: str
    notes: str | None = None


class ClinicalRecordResponse(RecordDocument):
    date_of_birth: str | None = None
    condition: str
    treatment: str | None = None
    medications: str | None = None
    notes: str | None = None


class BillingEntryResponse(RecordDocument):
    service_type: str | None = None
    amount: float
    payment_method: str
    insurance_provider: str | None = None
    insurance_policy_number: str | None = None
    billing_address: str | None = None
