"""Module: appointments.

Booking, customer cancellation, admin edits and the joined read models used by
the customer and back-office appointment lists.

No overlap or double-booking detection happens here: any slot from
``TIME_SLOTS`` may be booked on any open day regardless of existing bookings.
"""

import logging
import uuid
from datetime import date, datetime, time, timedelta
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.orm import Session

from groomdesk.core.access import SessionContext
from groomdesk.core.config import settings
from groomdesk.core.enums import AppointmentStatus, Role, ServiceType
from groomdesk.core.errors import NotFound, ValidationFailed
from groomdesk.db.models.appointment import Appointment
from groomdesk.db.models.groomer import Groomer
from groomdesk.db.models.pet import Pet
from groomdesk.db.models.profile import Profile
from groomdesk.db.models.service import Service
from groomdesk.db.models.service_history import ServiceHistory
from groomdesk.db.store import committing
from groomdesk.services import catalog
from groomdesk.services.audit import record_admin_action
from groomdesk.services.lifecycle import check_transition, final_price, partition_appointments

logger = logging.getLogger(__name__)

# Fixed daily slots offered at booking time (lunch hour excluded).
TIME_SLOTS = [
    "09:00", "09:30", "10:00", "10:30", "11:00", "11:30",
    "13:00", "13:30", "14:00", "14:30", "15:00", "15:30", "16:00", "16:30",
]

# date.weekday() value for Sunday.
CLOSED_WEEKDAY = 6


def _money(value) -> float | None:
    return float(value) if value is not None else None


def _hhmm(value: time | None) -> str | None:
    return value.strftime("%H:%M") if value is not None else None


def _end_time(start: time, duration_minutes: int) -> time | None:
    end = datetime.combine(date.min, start) + timedelta(minutes=duration_minutes)
    # Bookings running past midnight get no end time.
    if end.date() != date.min:
        return None
    return end.time()


def _check_slot(appointment_date: date, start_time: time) -> None:
    # Mirrors what the booking calendar lets a customer pick.
    if appointment_date < date.today():
        raise ValidationFailed("Appointment date cannot be in the past")
    if appointment_date.weekday() == CLOSED_WEEKDAY:
        raise ValidationFailed("We are closed on Sundays")
    if start_time.second or start_time.microsecond or _hhmm(start_time) not in TIME_SLOTS:
        raise ValidationFailed("Start time must be one of the offered time slots")


def format_appointment(appointment: Appointment, pet_name=None, pet_species=None,
                       service_name=None, service_duration=None, groomer_name=None) -> dict:
    return {
        "id": str(appointment.appointment_id),
        "customer_id": str(appointment.customer_id),
        "pet_id": str(appointment.pet_id),
        "service_id": str(appointment.service_id) if appointment.service_id else None,
        "groomer_id": str(appointment.groomer_id) if appointment.groomer_id else None,
        "appointment_date": appointment.appointment_date,
        "start_time": _hhmm(appointment.start_time),
        "end_time": _hhmm(appointment.end_time),
        "service_type": appointment.service_type,
        "status": appointment.status,
        "notes": appointment.notes,
        "total_price": _money(appointment.total_price),
        "discount_applied": _money(appointment.discount_applied),
        "final_price": final_price(appointment.total_price, appointment.discount_applied),
        "estimated_wait_minutes": appointment.estimated_wait_minutes,
        "pet_name": pet_name,
        "pet_species": pet_species,
        "service_name": service_name,
        "service_duration_minutes": service_duration,
        "groomer_name": groomer_name,
        "created_at": appointment.created_at,
    }


def joined_select():
    return (
        select(
            Appointment,
            Pet.name.label("pet_name"),
            Pet.species.label("pet_species"),
            Service.name.label("service_name"),
            Service.duration_minutes.label("service_duration"),
            Groomer.name.label("groomer_name"),
        )
        .select_from(Appointment)
        .outerjoin(Pet, Pet.pet_id == Appointment.pet_id)
        .outerjoin(Service, Service.service_id == Appointment.service_id)
        .outerjoin(Groomer, Groomer.groomer_id == Appointment.groomer_id)
    )


def format_rows(rows) -> list[dict]:
    out = []
    for row in rows:
        out.append(
            format_appointment(
                row.Appointment,
                pet_name=row.pet_name,
                pet_species=row.pet_species,
                service_name=row.service_name,
                service_duration=row.service_duration,
                groomer_name=row.groomer_name,
            )
        )
    return out


def _load_joined(db: Session, appointment_id: uuid.UUID) -> dict:
    row = db.execute(joined_select().where(Appointment.appointment_id == appointment_id)).first()
    if row is None:
        raise NotFound("Appointment not found")
    return format_rows([row])[0]


def book_appointment(
    db: Session,
    ctx: SessionContext,
    pet_id: uuid.UUID | None,
    service_id: uuid.UUID | None,
    service_type: str | None,
    appointment_date: date | None,
    start_time: time | None,
    groomer_id: uuid.UUID | None = None,
    notes: str | None = None,
) -> dict:
    """Create a pending appointment priced at the service's minimum price."""
    if not all([pet_id, service_id, service_type, appointment_date, start_time]):
        raise ValidationFailed("Please fill in all required fields")
    try:
        service_type_value = ServiceType(service_type).value
    except ValueError:
        raise ValidationFailed("service_type must be one of: pick-up, home-service, walk-in")
    _check_slot(appointment_date, start_time)

    # The pet's owner is not matched against the booking customer.
    pet = db.execute(select(Pet).where(Pet.pet_id == pet_id)).scalar_one_or_none()
    if not pet:
        raise NotFound("Pet not found")

    service = catalog.get_service(db, service_id)
    if not service.is_active:
        raise ValidationFailed("Service is not available for booking")

    if groomer_id:
        groomer = catalog.get_groomer(db, groomer_id)
        if not groomer.is_available:
            raise ValidationFailed("Groomer is not available")

    with committing(db, "book appointment"):
        appointment = Appointment(
            customer_id=ctx.user_id,
            pet_id=pet.pet_id,
            service_id=service.service_id,
            groomer_id=groomer_id,
            service_type=service_type_value,
            appointment_date=appointment_date,
            start_time=start_time,
            end_time=_end_time(start_time, service.duration_minutes),
            status=AppointmentStatus.PENDING.value,
            notes=(notes or "").strip() or None,
            total_price=service.price_min,
            discount_applied=None,
        )
        db.add(appointment)

    logger.info(
        "Appointment %s booked by %s for %s %s",
        appointment.appointment_id, ctx.user_id, appointment_date, _hhmm(start_time),
    )
    return _load_joined(db, appointment.appointment_id)


def cancel_appointment(db: Session, ctx: SessionContext, appointment_id: uuid.UUID) -> dict:
    """Customer cancellation: own appointment only, and only while pending."""
    appointment = db.execute(
        select(Appointment).where(
            Appointment.appointment_id == appointment_id,
            Appointment.customer_id == ctx.user_id,
        )
    ).scalar_one_or_none()
    if not appointment:
        raise NotFound("Appointment not found")

    check_transition(
        AppointmentStatus(appointment.status), AppointmentStatus.CANCELLED, Role.CUSTOMER
    )

    with committing(db, "cancel appointment"):
        appointment.status = AppointmentStatus.CANCELLED.value

    logger.info("Appointment %s cancelled by customer %s", appointment_id, ctx.user_id)
    return _load_joined(db, appointment_id)


def record_completion(db: Session, appointment: Appointment) -> None:
    already = db.execute(
        select(ServiceHistory.history_id).where(ServiceHistory.appointment_id == appointment.appointment_id)
    ).first()
    if already:
        return

    paid = final_price(appointment.total_price, appointment.discount_applied) or 0.0
    paid = max(paid, 0.0)
    points = int(paid // settings.loyalty_spend_per_point) if settings.loyalty_spend_per_point > 0 else 0

    service_name = None
    if appointment.service_id:
        service_name = db.execute(
            select(Service.name).where(Service.service_id == appointment.service_id)
        ).scalar_one_or_none()

    db.add(
        ServiceHistory(
            customer_id=appointment.customer_id,
            pet_id=appointment.pet_id,
            appointment_id=appointment.appointment_id,
            service_name=service_name or "Service",
            service_date=appointment.appointment_date,
            amount_paid=Decimal(str(paid)),
            loyalty_points_earned=points,
        )
    )

    profile = db.execute(
        select(Profile).where(Profile.user_id == appointment.customer_id)
    ).scalar_one_or_none()
    if profile is not None and points:
        profile.loyalty_points = int(profile.loyalty_points or 0) + points


def admin_update_appointment(
    db: Session,
    ctx: SessionContext,
    appointment_id: uuid.UUID,
    status: str,
    total_price: float | None,
    discount_applied: float | None = None,
) -> dict:
    """Overwrite status, price and discount. The final price is returned, not stored."""
    try:
        requested = AppointmentStatus(status)
    except ValueError:
        raise ValidationFailed(
            "status must be one of: " + ", ".join(s.value for s in AppointmentStatus)
        )
    discount = 0 if discount_applied is None else discount_applied
    if total_price is not None and total_price < 0:
        raise ValidationFailed("Total price must not be negative")
    if discount < 0:
        raise ValidationFailed("Discount must not be negative")
    if total_price is not None and discount > total_price:
        raise ValidationFailed("Discount must not exceed the total price")

    appointment = db.execute(
        select(Appointment).where(Appointment.appointment_id == appointment_id)
    ).scalar_one_or_none()
    if not appointment:
        raise NotFound("Appointment not found")

    current = AppointmentStatus(appointment.status)
    check_transition(current, requested, Role.ADMIN)

    before = {
        "status": appointment.status,
        "total_price": _money(appointment.total_price),
        "discount_applied": _money(appointment.discount_applied),
    }
    after = {"status": requested.value, "total_price": total_price, "discount_applied": discount}

    with committing(db, "update appointment"):
        appointment.status = requested.value
        appointment.total_price = Decimal(str(total_price)) if total_price is not None else None
        appointment.discount_applied = Decimal(str(discount))
        if requested == AppointmentStatus.COMPLETED and current != AppointmentStatus.COMPLETED:
            record_completion(db, appointment)
        record_admin_action(db, ctx, "update", "appointments", appointment_id, before, after)

    logger.info("Appointment %s updated by admin %s: %s", appointment_id, ctx.user_id, after)
    return _load_joined(db, appointment_id)


def list_customer_appointments(db: Session, ctx: SessionContext) -> dict:
    rows = db.execute(
        joined_select()
        .where(Appointment.customer_id == ctx.user_id)
        .order_by(Appointment.appointment_date.desc(), Appointment.start_time.desc())
    ).all()
    upcoming, past = partition_appointments(format_rows(rows))
    return {"upcoming": upcoming, "past": past}


def list_all_appointments(db: Session, status: str | None = None, limit: int = 500, offset: int = 0) -> list[dict]:
    stmt = joined_select().order_by(Appointment.appointment_date.desc(), Appointment.start_time.desc())
    if status:
        stmt = stmt.where(Appointment.status == status)
    rows = db.execute(stmt.offset(offset).limit(limit)).all()
    return format_rows(rows)


def get_customer_appointment(db: Session, ctx: SessionContext, appointment_id: uuid.UUID) -> dict:
    row = db.execute(
        joined_select().where(
            Appointment.appointment_id == appointment_id,
            Appointment.customer_id == ctx.user_id,
        )
    ).first()
    if row is None:
        raise NotFound("Appointment not found")
    return format_rows([row])[0]


def booking_options(db: Session, ctx: SessionContext) -> dict:
    """Everything the booking form needs, returned only once every read is done."""
    pets = db.execute(
        select(Pet.pet_id, Pet.name, Pet.species)
        .where(Pet.owner_id == ctx.user_id)
        .order_by(Pet.name.asc())
    ).all()
    return {
        "pets": [{"id": str(p.pet_id), "name": p.name, "species": p.species} for p in pets],
        "services": catalog.list_services(db, active_only=True),
        "groomers": catalog.list_groomers(db, available_only=True),
        "service_types": [t.value for t in ServiceType],
        "time_slots": list(TIME_SLOTS),
    }
