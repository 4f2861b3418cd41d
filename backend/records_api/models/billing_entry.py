"""BillingEntry ORM — a charge against a patient and how it is paid."""

from sqlalchemy import String, Float
from sqlalchemy.orm import Mapped, mapped_column

from records_api.core.domain_types import new_record_id
from records_api.db.base import Base


class BillingEntry(Base):
    __tablename__ = "billings"

    id: Mapped[str] = mapped_column(
        String(32), primary_key=True, default=new_record_id,
    )
    patient_name: Mapped[str] = mapped_column(String(255), nullable=False)
    patient_id: Mapped[str | None] = mapped_column(String(64), nullable=True)
    service_type: Mapped[str | None] = mapped_column(String(255), nullable=True)
    amount: Mapped[float] = mapped_column(Float, nullable=False)
    payment_method: Mapped[str] = mapped_column(String(64), nullable=False)
    insurance_provider: Mapped[str | None] = mapped_column(String(255), nullable=True)
    insurance_policy_number: Mapped[str | None] = mapped_column(String(128), nullable=True)
    billing_address: Mapped[str | None] = mapped_column(String(512), nullable=True)
