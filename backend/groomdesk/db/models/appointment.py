"""Module: appointment."""

import uuid
from datetime import date, datetime, time

from sqlalchemy import Date, DateTime, ForeignKey, Integer, Numeric, String, Time, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from groomdesk.core.enums import AppointmentStatus
from groomdesk.db.base import Base

# Grooming/boarding booking for one pet. Rows are never deleted; cancelling is a status change.
class Appointment(Base):
    __tablename__ = "appointments"

    appointment_id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    customer_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.user_id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    pet_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("pets.pet_id"),
        nullable=False
    )
    service_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid,
        ForeignKey("services.service_id", ondelete="SET NULL"),
        nullable=True
    )
    groomer_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid,
        ForeignKey("groomers.groomer_id", ondelete="SET NULL"),
        nullable=True
    )

    appointment_date: Mapped[date] = mapped_column(Date, nullable=False)
    start_time: Mapped[time] = mapped_column(Time, nullable=False)
    end_time: Mapped[time | None] = mapped_column(Time, nullable=True)
    service_type: Mapped[str] = mapped_column(String, nullable=False)
    status: Mapped[str] = mapped_column(String, nullable=False, default=AppointmentStatus.PENDING.value)
    notes: Mapped[str | None] = mapped_column(String, nullable=True)

    # Price snapshot taken at booking; never recomputed from the service.
    total_price: Mapped[float | None] = mapped_column(Numeric(10, 2), nullable=True)
    discount_applied: Mapped[float | None] = mapped_column(Numeric(10, 2), nullable=True)
    estimated_wait_minutes: Mapped[int | None] = mapped_column(Integer, nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
        nullable=False
    )
