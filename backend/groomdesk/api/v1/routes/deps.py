"""Module: deps."""

import uuid
from typing import Generator

from fastapi import Depends, Header
from sqlalchemy.orm import Session

from groomdesk.core.access import Capability, SessionContext, authorize
from groomdesk.core.errors import NotAuthenticated, ValidationFailed
from groomdesk.db.session import SessionLocal
from groomdesk.services.identity import resolve_session


# Dependency provider: one DB session per request lifecycle.
def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def _get_token_value(authorization: str | None) -> str | None:
    if not authorization:
        return None

    parts = authorization.split(" ", 1)
    if len(parts) != 2 or parts[0].lower() != "bearer":
        raise NotAuthenticated("Invalid Authorization header")

    return parts[1].strip()


# Resolve the caller; None for anonymous requests or unknown tokens.
def get_session_context(
    authorization: str | None = Header(default=None),
    db: Session = Depends(get_db),
) -> SessionContext | None:
    return resolve_session(db, _get_token_value(authorization))


def require(*capabilities: Capability):
    """Build a dependency that admits only sessions holding one of ``capabilities``."""

    def _guard(ctx: SessionContext | None = Depends(get_session_context)) -> SessionContext:
        return authorize(ctx, *capabilities)

    return _guard


customer_session = require(Capability.CUSTOMER)
admin_session = require(Capability.ADMIN)


# Validate and coerce UUID inputs from query/path payloads.
def parse_uuid(value: str, field_name: str = "id") -> uuid.UUID:
    try:
        return uuid.UUID(value)
    except ValueError:
        raise ValidationFailed(f"Invalid {field_name} (must be UUID)")
