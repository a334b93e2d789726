"""Module: service_history."""

import uuid
from datetime import date, datetime

from sqlalchemy import Date, DateTime, ForeignKey, Integer, Numeric, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from groomdesk.db.base import Base


# One row per completed appointment: what was paid and the points it earned.
class ServiceHistory(Base):
    __tablename__ = "service_history"

    history_id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

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
    appointment_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid,
        ForeignKey("appointments.appointment_id", ondelete="SET NULL"),
        unique=True,
        nullable=True
    )

    service_name: Mapped[str] = mapped_column(String, nullable=False)
    service_date: Mapped[date] = mapped_column(Date, nullable=False)
    amount_paid: Mapped[float] = mapped_column(Numeric(10, 2), nullable=False)
    loyalty_points_earned: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, nullable=False)
