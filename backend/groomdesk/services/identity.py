"""Module: identity.

Sign-up/sign-in/sign-out and per-request session resolution. The resolved
``SessionContext`` is handed explicitly to every operation that needs to know
who is calling.
"""

import logging
import uuid

from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from groomdesk.core.access import ProfileSnapshot, SessionContext, capabilities_for
from groomdesk.core.config import settings
from groomdesk.core.enums import Role
from groomdesk.core.errors import Conflict, NotAuthenticated, NotFound, StoreError, ValidationFailed
from groomdesk.core.security import (
    hash_password,
    new_loyalty_card_number,
    new_session_token,
    verify_password,
)
from groomdesk.db.models.auth_session import AuthSession
from groomdesk.db.models.profile import Profile
from groomdesk.db.models.user import User
from groomdesk.db.models.user_role import UserRole
from groomdesk.db.store import committing

logger = logging.getLogger(__name__)


def normalize_email(value: str) -> str:
    return value.strip().lower()


def _snapshot(profile: Profile | None) -> ProfileSnapshot | None:
    if profile is None:
        return None
    return ProfileSnapshot(
        profile_id=profile.profile_id,
        full_name=profile.full_name,
        phone=profile.phone,
        address=profile.address,
        loyalty_card_number=profile.loyalty_card_number,
        loyalty_points=int(profile.loyalty_points or 0),
    )


def load_profile(db: Session, user_id: uuid.UUID) -> Profile | None:
    return db.execute(select(Profile).where(Profile.user_id == user_id)).scalar_one_or_none()


def load_role(db: Session, user_id: uuid.UUID) -> Role:
    # No role row means a plain customer.
    raw = db.execute(select(UserRole.role).where(UserRole.user_id == user_id)).scalar_one_or_none()
    try:
        return Role(raw) if raw else Role.CUSTOMER
    except ValueError:
        logger.warning("Unknown role %r for user %s, treating as customer", raw, user_id)
        return Role.CUSTOMER


def build_context(db: Session, user: User, token: str) -> SessionContext:
    # Profile and role are independent lookups; the context is ready once both return.
    profile = load_profile(db, user.user_id)
    role = load_role(db, user.user_id)
    return SessionContext(
        user_id=user.user_id,
        email=user.email,
        role=role,
        token=token,
        profile=_snapshot(profile),
        capabilities=capabilities_for(role),
    )


def _generate_card_number(db: Session) -> str:
    while True:
        candidate = new_loyalty_card_number(settings.loyalty_card_prefix)
        taken = db.execute(
            select(Profile.profile_id).where(Profile.loyalty_card_number == candidate)
        ).first()
        if not taken:
            return candidate


def _email_taken(db: Session, normalized_email: str) -> bool:
    return db.execute(
        select(User.user_id).where(func.lower(User.email) == normalized_email)
    ).first() is not None


def _open_session(db: Session, user: User) -> str:
    token = new_session_token()
    db.add(AuthSession(token=token, user_id=user.user_id))
    return token


def sign_up(db: Session, email: str, password: str, full_name: str) -> SessionContext:
    normalized_email = normalize_email(email)
    full_name = (full_name or "").strip()
    if not normalized_email or not full_name:
        raise ValidationFailed("Email and full name are required")
    if len(password or "") < settings.min_password_length:
        raise ValidationFailed(
            f"Password must be at least {settings.min_password_length} characters"
        )

    if _email_taken(db, normalized_email):
        raise Conflict("Email already registered")

    try:
        with committing(db, "create account"):
            user = User(email=normalized_email, password_hash=hash_password(password))
            db.add(user)
            db.flush()

            db.add(
                Profile(
                    user_id=user.user_id,
                    full_name=full_name,
                    loyalty_card_number=_generate_card_number(db),
                    loyalty_points=0,
                )
            )
            db.add(UserRole(user_id=user.user_id, role=Role.CUSTOMER.value))
            token = _open_session(db, user)
    except StoreError as exc:
        # Lost a race with a concurrent sign-up for the same address.
        if isinstance(exc.__cause__, IntegrityError) and _email_taken(db, normalized_email):
            raise Conflict("Email already registered") from exc
        raise

    logger.info("New customer account %s", user.user_id)
    return build_context(db, user, token)


def sign_in(db: Session, email: str, password: str) -> SessionContext:
    normalized_email = normalize_email(email)
    user = db.execute(
        select(User).where(func.lower(User.email) == normalized_email)
    ).scalar_one_or_none()

    if not user or not verify_password(password, user.password_hash):
        raise NotAuthenticated("Invalid email or password")

    with committing(db, "sign in"):
        token = _open_session(db, user)

    logger.info("User %s signed in", user.user_id)
    return build_context(db, user, token)


def sign_out(db: Session, ctx: SessionContext) -> None:
    with committing(db, "sign out"):
        db.execute(delete(AuthSession).where(AuthSession.token == ctx.token))
    logger.info("User %s signed out", ctx.user_id)


def resolve_session(db: Session, token: str | None) -> SessionContext | None:
    """Return the context for a bearer token, or None when it is unknown."""
    if not token:
        return None
    row = db.execute(
        select(User)
        .join(AuthSession, AuthSession.user_id == User.user_id)
        .where(AuthSession.token == token)
    ).scalar_one_or_none()
    if row is None:
        return None
    return build_context(db, row, token)


def refresh_profile(db: Session, ctx: SessionContext) -> ProfileSnapshot:
    profile = load_profile(db, ctx.user_id)
    if profile is None:
        raise NotFound("Profile not found")
    return _snapshot(profile)


def update_profile(
    db: Session,
    ctx: SessionContext,
    full_name: str,
    phone: str | None = None,
    address: str | None = None,
) -> ProfileSnapshot:
    cleaned_name = (full_name or "").strip()
    if not cleaned_name:
        raise ValidationFailed("Full name is required")

    profile = load_profile(db, ctx.user_id)
    if profile is None:
        raise NotFound("Profile not found")

    with committing(db, "update profile"):
        profile.full_name = cleaned_name
        profile.phone = (phone or "").strip() or None
        profile.address = (address or "").strip() or None

    db.refresh(profile)
    return _snapshot(profile)


def grant_role(db: Session, email: str, role: Role) -> uuid.UUID:
    user = db.execute(
        select(User).where(func.lower(User.email) == normalize_email(email))
    ).scalar_one_or_none()
    if user is None:
        raise NotFound(f"No account for {email}")

    assignment = db.execute(select(UserRole).where(UserRole.user_id == user.user_id)).scalar_one_or_none()
    with committing(db, "assign role"):
        if assignment is None:
            db.add(UserRole(user_id=user.user_id, role=role.value))
        else:
            assignment.role = role.value

    logger.info("User %s is now %s", user.user_id, role.value)
    return user.user_id
