"""Module: services."""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from groomdesk.api.v1.routes.deps import get_db
from groomdesk.core.enums import ServiceCategory
from groomdesk.services import catalog

router = APIRouter()


# Public catalog: active services only, ordered by category.
@router.get("", summary="List bookable services")
def list_services(
    category: ServiceCategory | None = Query(default=None),
    db: Session = Depends(get_db),
):
    return catalog.list_services(db, active_only=True, category=category.value if category else None)


@router.get("/by-category", summary="Active services grouped as grooming/boarding")
def services_by_category(db: Session = Depends(get_db)):
    return catalog.group_by_category(catalog.list_services(db, active_only=True))
