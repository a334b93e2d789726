"""Module: catalog.

Service catalog (grooming/boarding offerings) and groomer roster.
"""

import logging
import uuid

from sqlalchemy import select
from sqlalchemy.orm import Session

from groomdesk.core.access import SessionContext
from groomdesk.core.enums import ServiceCategory
from groomdesk.core.errors import NotFound, ValidationFailed
from groomdesk.db.models.groomer import Groomer
from groomdesk.db.models.service import Service
from groomdesk.db.store import committing
from groomdesk.services.audit import record_admin_action

logger = logging.getLogger(__name__)


def format_duration(minutes: int) -> str:
    if minutes < 60:
        return f"{minutes} min"
    hours, mins = divmod(minutes, 60)
    if mins == 0:
        return "1 hour" if hours == 1 else f"{hours} hours"
    return f"{hours}h {mins}m"


def format_service(service: Service) -> dict:
    return {
        "id": str(service.service_id),
        "name": service.name,
        "description": service.description,
        "category": service.category,
        "price_min": float(service.price_min),
        "price_max": float(service.price_max),
        "duration_minutes": service.duration_minutes,
        "duration_label": format_duration(service.duration_minutes),
        "is_active": bool(service.is_active),
    }


def format_groomer(groomer: Groomer) -> dict:
    return {
        "id": str(groomer.groomer_id),
        "name": groomer.name,
        "specialty": groomer.specialty,
        "photo_url": groomer.photo_url,
        "is_available": bool(groomer.is_available),
    }


def _validated_fields(
    name: str,
    category: str,
    price_min: float,
    price_max: float,
    duration_minutes: int,
    description: str | None,
    is_active: bool,
) -> dict:
    cleaned_name = (name or "").strip()
    if not cleaned_name:
        raise ValidationFailed("Service name is required")
    try:
        category_value = ServiceCategory(category).value
    except ValueError:
        raise ValidationFailed("Category must be 'grooming' or 'boarding'")
    if price_min is None or price_max is None:
        raise ValidationFailed("Both price_min and price_max are required")
    if price_min < 0 or price_max < 0:
        raise ValidationFailed("Prices must not be negative")
    if price_min > price_max:
        raise ValidationFailed("price_min must not exceed price_max")
    if duration_minutes is None or duration_minutes <= 0:
        raise ValidationFailed("duration_minutes must be a positive integer")

    return {
        "name": cleaned_name,
        "category": category_value,
        "price_min": price_min,
        "price_max": price_max,
        "duration_minutes": int(duration_minutes),
        "description": (description or "").strip() or None,
        "is_active": True if is_active is None else bool(is_active),
    }


def get_service(db: Session, service_id: uuid.UUID) -> Service:
    service = db.execute(select(Service).where(Service.service_id == service_id)).scalar_one_or_none()
    if not service:
        raise NotFound("Service not found")
    return service


def list_services(db: Session, active_only: bool = True, category: str | None = None) -> list[dict]:
    stmt = select(Service).order_by(Service.category.asc(), Service.name.asc())
    if active_only:
        stmt = stmt.where(Service.is_active.is_(True))
    if category:
        stmt = stmt.where(Service.category == category)
    return [format_service(s) for s in db.execute(stmt).scalars().all()]


def group_by_category(services: list[dict]) -> dict[str, list[dict]]:
    grouped: dict[str, list[dict]] = {c.value: [] for c in ServiceCategory}
    for service in services:
        grouped.setdefault(service["category"], []).append(service)
    return grouped


def create_service(db: Session, ctx: SessionContext, **fields) -> dict:
    values = _validated_fields(**fields)
    with committing(db, "create service"):
        service = Service(**values)
        db.add(service)
        db.flush()
        record_admin_action(db, ctx, "create", "services", service.service_id, None, format_service(service))

    logger.info("Service %s created by %s", service.service_id, ctx.user_id)
    db.refresh(service)
    return format_service(service)


def update_service(db: Session, ctx: SessionContext, service_id: uuid.UUID, **fields) -> dict:
    values = _validated_fields(**fields)
    service = get_service(db, service_id)
    before = format_service(service)

    with committing(db, "update service"):
        for key, value in values.items():
            setattr(service, key, value)
        db.flush()
        record_admin_action(db, ctx, "update", "services", service.service_id, before, format_service(service))

    db.refresh(service)
    logger.info("Service %s updated by %s", service.service_id, ctx.user_id)
    return format_service(service)


def delete_service(db: Session, ctx: SessionContext, service_id: uuid.UUID, confirmed: bool) -> None:
    if not confirmed:
        raise ValidationFailed("Deleting a service must be confirmed")
    service = get_service(db, service_id)
    before = format_service(service)

    with committing(db, "delete service"):
        db.delete(service)
        record_admin_action(db, ctx, "delete", "services", service_id, before, None)

    logger.info("Service %s deleted by %s", service_id, ctx.user_id)


def get_groomer(db: Session, groomer_id: uuid.UUID) -> Groomer:
    groomer = db.execute(select(Groomer).where(Groomer.groomer_id == groomer_id)).scalar_one_or_none()
    if not groomer:
        raise NotFound("Groomer not found")
    return groomer


def list_groomers(db: Session, available_only: bool = True) -> list[dict]:
    stmt = select(Groomer).order_by(Groomer.name.asc())
    if available_only:
        stmt = stmt.where(Groomer.is_available.is_(True))
    return [format_groomer(g) for g in db.execute(stmt).scalars().all()]
