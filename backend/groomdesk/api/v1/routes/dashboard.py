"""Module: dashboard."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from groomdesk.api.v1.routes.deps import customer_session, get_db
from groomdesk.core.access import SessionContext
from groomdesk.services import dashboard

router = APIRouter()


@router.get("", summary="Customer overview: pets, upcoming visits, loyalty, spend")
def customer_dashboard(ctx: SessionContext = Depends(customer_session), db: Session = Depends(get_db)):
    return dashboard.customer_summary(db, ctx)
