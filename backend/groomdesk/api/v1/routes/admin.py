"""Module: admin.

Back-office endpoints. Every route here requires the admin capability.
"""

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, Field
from sqlalchemy import desc, select
from sqlalchemy.orm import Session

from groomdesk.api.v1.routes.deps import admin_session, get_db, parse_uuid
from groomdesk.core.access import SessionContext
from groomdesk.core.enums import AppointmentStatus, ServiceCategory
from groomdesk.db.models.audit_log import AdminAuditLog
from groomdesk.services import appointments as appointment_service
from groomdesk.services import catalog, dashboard

router = APIRouter()


class AppointmentAdminUpdate(BaseModel):
    status: AppointmentStatus
    total_price: float | None = None
    discount_applied: float | None = None


class ServicePayload(BaseModel):
    name: str
    category: ServiceCategory = ServiceCategory.GROOMING
    price_min: float
    price_max: float
    duration_minutes: int = Field(gt=0)
    description: str | None = None
    is_active: bool = True


# -------------------------
# Dashboard
# -------------------------

@router.get("/stats", summary="Customer, pet, appointment and service counts")
def admin_stats(ctx: SessionContext = Depends(admin_session), db: Session = Depends(get_db)):
    return dashboard.admin_summary(db)


# -------------------------
# Appointments
# -------------------------

@router.get("/appointments", summary="All appointments, newest date first")
def list_appointments(
    status: AppointmentStatus | None = Query(default=None),
    limit: int = 500,
    offset: int = 0,
    ctx: SessionContext = Depends(admin_session),
    db: Session = Depends(get_db),
):
    return appointment_service.list_all_appointments(
        db, status=status.value if status else None, limit=limit, offset=offset
    )


@router.patch("/appointments/{appointment_id}", summary="Set status, price and discount")
def update_appointment(
    appointment_id: str,
    payload: AppointmentAdminUpdate,
    ctx: SessionContext = Depends(admin_session),
    db: Session = Depends(get_db),
):
    return appointment_service.admin_update_appointment(
        db,
        ctx,
        parse_uuid(appointment_id, "appointment_id"),
        status=payload.status.value,
        total_price=payload.total_price,
        discount_applied=payload.discount_applied,
    )


# -------------------------
# Services
# -------------------------

@router.get("/services", summary="All services including inactive")
def list_services(ctx: SessionContext = Depends(admin_session), db: Session = Depends(get_db)):
    return catalog.list_services(db, active_only=False)


@router.post("/services", status_code=201, summary="Create a service")
def create_service(
    payload: ServicePayload,
    ctx: SessionContext = Depends(admin_session),
    db: Session = Depends(get_db),
):
    fields = payload.model_dump()
    fields["category"] = payload.category.value
    return catalog.create_service(db, ctx, **fields)


@router.put("/services/{service_id}", summary="Update a service")
def update_service(
    service_id: str,
    payload: ServicePayload,
    ctx: SessionContext = Depends(admin_session),
    db: Session = Depends(get_db),
):
    fields = payload.model_dump()
    fields["category"] = payload.category.value
    return catalog.update_service(db, ctx, parse_uuid(service_id, "service_id"), **fields)


@router.delete("/services/{service_id}", status_code=204, summary="Delete a service (requires confirm=true)")
def delete_service(
    service_id: str,
    confirm: bool = False,
    ctx: SessionContext = Depends(admin_session),
    db: Session = Depends(get_db),
):
    catalog.delete_service(db, ctx, parse_uuid(service_id, "service_id"), confirmed=confirm)


# -------------------------
# Groomers / audit
# -------------------------

@router.get("/groomers", summary="All groomers including unavailable")
def list_groomers(ctx: SessionContext = Depends(admin_session), db: Session = Depends(get_db)):
    return catalog.list_groomers(db, available_only=False)


@router.get("/audit-log", summary="Recent back-office changes")
def audit_log(
    limit: int = 100,
    table_name: str | None = None,
    ctx: SessionContext = Depends(admin_session),
    db: Session = Depends(get_db),
):
    stmt = select(AdminAuditLog).order_by(desc(AdminAuditLog.created_at)).limit(limit)
    if table_name:
        stmt = stmt.where(AdminAuditLog.table_name == table_name)

    out = []
    for entry in db.execute(stmt).scalars().all():
        out.append(
            {
                "id": str(entry.audit_id),
                "admin_id": str(entry.admin_id) if entry.admin_id else None,
                "action": entry.action,
                "table_name": entry.table_name,
                "record_id": entry.record_id,
                "old_values": entry.old_values,
                "new_values": entry.new_values,
                "created_at": entry.created_at,
            }
        )
    return out
