"""Module: appointments."""

from datetime import date, time

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy.orm import Session

from groomdesk.api.v1.routes.deps import customer_session, get_db, parse_uuid
from groomdesk.core.access import SessionContext
from groomdesk.core.enums import ServiceType
from groomdesk.services import appointments as appointment_service


# Every field is optional at the schema level so a missing one is reported
# as a single "fill in all required fields" validation failure.
class BookingPayload(BaseModel):
    pet_id: str | None = None
    service_id: str | None = None
    groomer_id: str | None = None
    service_type: ServiceType = ServiceType.WALK_IN
    appointment_date: date | None = None
    start_time: time | None = None
    notes: str | None = None


router = APIRouter()


@router.get("/booking-options", summary="Pets, services, groomers and time slots for the booking form")
def booking_options(ctx: SessionContext = Depends(customer_session), db: Session = Depends(get_db)):
    return appointment_service.booking_options(db, ctx)


@router.get("", summary="Caller's appointments split into upcoming and past")
def list_my_appointments(ctx: SessionContext = Depends(customer_session), db: Session = Depends(get_db)):
    return appointment_service.list_customer_appointments(db, ctx)


@router.post("", status_code=201, summary="Book an appointment")
def book_appointment(
    payload: BookingPayload,
    ctx: SessionContext = Depends(customer_session),
    db: Session = Depends(get_db),
):
    return appointment_service.book_appointment(
        db,
        ctx,
        pet_id=parse_uuid(payload.pet_id, "pet_id") if payload.pet_id else None,
        service_id=parse_uuid(payload.service_id, "service_id") if payload.service_id else None,
        groomer_id=parse_uuid(payload.groomer_id, "groomer_id") if payload.groomer_id else None,
        service_type=payload.service_type.value,
        appointment_date=payload.appointment_date,
        start_time=payload.start_time,
        notes=payload.notes,
    )


@router.get("/{appointment_id}", summary="Get one of the caller's appointments")
def get_appointment(
    appointment_id: str,
    ctx: SessionContext = Depends(customer_session),
    db: Session = Depends(get_db),
):
    return appointment_service.get_customer_appointment(db, ctx, parse_uuid(appointment_id, "appointment_id"))


@router.patch("/{appointment_id}/cancel", summary="Cancel a pending appointment")
def cancel_appointment(
    appointment_id: str,
    ctx: SessionContext = Depends(customer_session),
    db: Session = Depends(get_db),
):
    return appointment_service.cancel_appointment(db, ctx, parse_uuid(appointment_id, "appointment_id"))
