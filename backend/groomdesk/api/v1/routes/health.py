"""Module: health."""

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.orm import Session

from groomdesk.api.v1.routes.deps import get_db

router = APIRouter()

# Endpoint: liveness plus a trivial round trip to the database.
@router.get("")
def health(db: Session = Depends(get_db)):
    db.execute(text("SELECT 1"))
    return {"status": "ok", "database": "ok"}
