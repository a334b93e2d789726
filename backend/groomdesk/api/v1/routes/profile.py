"""Module: profile."""

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy.orm import Session

from groomdesk.api.v1.routes.auth import ProfilePayload, as_profile_payload
from groomdesk.api.v1.routes.deps import customer_session, get_db
from groomdesk.core.access import SessionContext
from groomdesk.services import identity

router = APIRouter()


class ProfileUpdatePayload(BaseModel):
    full_name: str
    phone: str | None = None
    address: str | None = None


@router.get("", response_model=ProfilePayload, summary="Re-read the caller's profile")
def get_profile(ctx: SessionContext = Depends(customer_session), db: Session = Depends(get_db)):
    return as_profile_payload(identity.refresh_profile(db, ctx))


@router.put("", response_model=ProfilePayload, summary="Update contact details")
def update_profile(
    payload: ProfileUpdatePayload,
    ctx: SessionContext = Depends(customer_session),
    db: Session = Depends(get_db),
):
    snapshot = identity.update_profile(db, ctx, payload.full_name, payload.phone, payload.address)
    return as_profile_payload(snapshot)
