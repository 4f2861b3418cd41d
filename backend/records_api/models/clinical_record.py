"""ClinicalRecord ORM — condition, treatment and medication notes for a patient."""

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from records_api.core.domain_types import new_record_id
from records_api.db.base import Base


class ClinicalRecord(Base):
    __tablename__ = "medical_records"

    id: Mapped[str] = mapped_column(
        String(32), primary_key=True, default=new_record_id,
    )
    patient_name: Mapped[str] = mapped_column(String(255), nullable=False)
    patient_id: Mapped[str | None] = mapped_column(String(64), nullable=True)
    date_of_birth: Mapped[str | None] = mapped_column(String(32), nullable=True)
    condition: Mapped[str] = mapped_column(Text, nullable=False)
    treatment: Mapped[str | None] = mapped_column(Text, nullable=True)
    medications: Mapped[str | None] = mapped_column(Text, nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
