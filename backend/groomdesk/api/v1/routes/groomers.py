"""Module: groomers."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from groomdesk.api.v1.routes.deps import get_db
from groomdesk.services import catalog

router = APIRouter()


@router.get("", summary="List groomers currently taking bookings")
def list_groomers(db: Session = Depends(get_db)):
    return catalog.list_groomers(db, available_only=True)
