"""Module: dashboard."""

from datetime import date

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from groomdesk.core.access import SessionContext
from groomdesk.db.models.appointment import Appointment
from groomdesk.db.models.pet import Pet
from groomdesk.db.models.profile import Profile
from groomdesk.db.models.service import Service
from groomdesk.db.models.service_history import ServiceHistory
from groomdesk.services.appointments import format_rows, joined_select

UPCOMING_PREVIEW_LIMIT = 5


def _count(db: Session, column) -> int:
    return int(db.execute(select(func.count(column))).scalar_one() or 0)


def customer_summary(db: Session, ctx: SessionContext, today: date | None = None) -> dict:
    today = today or date.today()

    pet_count = db.execute(
        select(func.count(Pet.pet_id)).where(Pet.owner_id == ctx.user_id)
    ).scalar_one()

    # Date-based, not status-based: anything dated today or later.
    upcoming_rows = db.execute(
        joined_select()
        .where(Appointment.customer_id == ctx.user_id, Appointment.appointment_date >= today)
        .order_by(Appointment.appointment_date.asc(), Appointment.start_time.asc())
        .limit(UPCOMING_PREVIEW_LIMIT)
    ).all()

    total_spent = db.execute(
        select(func.coalesce(func.sum(ServiceHistory.amount_paid), 0)).where(
            ServiceHistory.customer_id == ctx.user_id
        )
    ).scalar_one()

    loyalty_points = db.execute(
        select(Profile.loyalty_points).where(Profile.user_id == ctx.user_id)
    ).scalar_one_or_none()

    upcoming = format_rows(upcoming_rows)
    return {
        "pet_count": int(pet_count or 0),
        "upcoming_appointments": len(upcoming),
        "loyalty_points": int(loyalty_points or 0),
        "total_spent": float(total_spent or 0),
        "recent_appointments": upcoming,
        "loyalty_card_number": ctx.profile.loyalty_card_number if ctx.profile else None,
    }


def admin_summary(db: Session) -> dict:
    return {
        "customer_count": _count(db, Profile.profile_id),
        "pet_count": _count(db, Pet.pet_id),
        "appointment_count": _count(db, Appointment.appointment_id),
        "service_count": _count(db, Service.service_id),
    }
