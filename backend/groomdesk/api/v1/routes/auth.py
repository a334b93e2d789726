"""Module: auth."""

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy.orm import Session

from groomdesk.api.v1.routes.deps import customer_session, get_db, get_session_context
from groomdesk.core.access import ProfileSnapshot, SessionContext
from groomdesk.services import identity

router = APIRouter()


class LoginRequest(BaseModel):
    email: str
    password: str


class RegisterRequest(BaseModel):
    email: str
    password: str
    full_name: str


class ProfilePayload(BaseModel):
    id: str
    full_name: str
    phone: str | None = None
    address: str | None = None
    loyalty_card_number: str | None = None
    loyalty_points: int = 0


class SessionPayload(BaseModel):
    user_id: str
    email: str
    role: str
    is_admin: bool
    profile: ProfilePayload | None = None


class LoginResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    session: SessionPayload


def as_profile_payload(profile: ProfileSnapshot | None) -> ProfilePayload | None:
    if profile is None:
        return None
    return ProfilePayload(
        id=str(profile.profile_id),
        full_name=profile.full_name,
        phone=profile.phone,
        address=profile.address,
        loyalty_card_number=profile.loyalty_card_number,
        loyalty_points=profile.loyalty_points,
    )


def _as_session_payload(ctx: SessionContext) -> SessionPayload:
    return SessionPayload(
        user_id=str(ctx.user_id),
        email=ctx.email,
        role=ctx.role.value,
        is_admin=ctx.is_admin,
        profile=as_profile_payload(ctx.profile),
    )


def _as_login_response(ctx: SessionContext) -> LoginResponse:
    return LoginResponse(access_token=ctx.token, session=_as_session_payload(ctx))


@router.post("/register", response_model=LoginResponse, status_code=201)
def register(payload: RegisterRequest, db: Session = Depends(get_db)):
    ctx = identity.sign_up(db, payload.email, payload.password, payload.full_name)
    return _as_login_response(ctx)


@router.post("/login", response_model=LoginResponse)
def login(payload: LoginRequest, db: Session = Depends(get_db)):
    ctx = identity.sign_in(db, payload.email, payload.password)
    return _as_login_response(ctx)


@router.post("/logout", status_code=204)
def logout(ctx: SessionContext = Depends(customer_session), db: Session = Depends(get_db)):
    identity.sign_out(db, ctx)


# Current session, or an anonymous marker the portal uses to decide where to redirect.
@router.get("/session")
def current_session(ctx: SessionContext | None = Depends(get_session_context)):
    if ctx is None:
        return {"authenticated": False, "session": None}
    return {"authenticated": True, "session": _as_session_payload(ctx)}


@router.get("/me", response_model=SessionPayload)
def me(ctx: SessionContext = Depends(customer_session)):
    return _as_session_payload(ctx)
