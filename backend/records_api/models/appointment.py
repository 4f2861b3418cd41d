"""Appointment ORM — a scheduled visit. status defaults to "Scheduled"."""

import datetime

from sqlalchemy import String, Text, Date
from sqlalchemy.orm import Mapped, mapped_column

from records_api.core.domain_types import DEFAULT_APPOINTMENT_STATUS, new_record_id
from records_api.db.base import Base


class Appointment(Base):
    __tablename__ = "appointments"

    id: Mapped[str] = mapped_column(
        String(32), primary_key=True, default=new_record_id,
    )
    patient_name: Mapped[str] = mapped_column(String(255), nullable=False)
    patient_id: Mapped[str | None] = mapped_column(String(64), nullable=True)
    date: Mapped[datetime.date] = mapped_column(Date, nullable=False)
    time: Mapped[str | None] = mapped_column(String(32), nullable=True)
    doctor: Mapped[str | None] = mapped_column(String(255), nullable=True)
    reason: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(
        String(32), nullable=False, default=DEFAULT_APPOINTMENT_STATUS,
    )
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
