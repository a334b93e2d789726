"""Module: access.

Request-scoped identity and the one capability guard every route goes through.
"""

import uuid
from dataclasses import dataclass, field
from enum import Enum

from groomdesk.core.enums import Role
from groomdesk.core.errors import AccessDenied, NotAuthenticated


class Capability(str, Enum):
    CUSTOMER = "customer"
    ADMIN = "admin"


# Capabilities granted to each role. Admins can also use the customer portal.
ROLE_CAPABILITIES: dict[Role, frozenset[Capability]] = {
    Role.CUSTOMER: frozenset({Capability.CUSTOMER}),
    Role.ADMIN: frozenset({Capability.CUSTOMER, Capability.ADMIN}),
}


@dataclass(frozen=True)
class ProfileSnapshot:
    profile_id: uuid.UUID
    full_name: str
    phone: str | None
    address: str | None
    loyalty_card_number: str | None
    loyalty_points: int


@dataclass(frozen=True)
class SessionContext:
    """Resolved identity for one request: who is calling, their profile and role."""

    user_id: uuid.UUID
    email: str
    role: Role
    token: str
    profile: ProfileSnapshot | None = None
    capabilities: frozenset[Capability] = field(default=frozenset())

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN


def capabilities_for(role: Role) -> frozenset[Capability]:
    return ROLE_CAPABILITIES.get(role, frozenset())


def is_allowed(ctx: SessionContext | None, required: set[Capability] | frozenset[Capability]) -> bool:
    if ctx is None:
        return False
    return bool(ctx.capabilities & set(required))


def authorize(ctx: SessionContext | None, *required: Capability) -> SessionContext:
    """Allow the call when the session holds any of ``required``; raise otherwise."""
    if ctx is None:
        raise NotAuthenticated("Sign in required")
    if not is_allowed(ctx, set(required)):
        raise AccessDenied("Insufficient permissions for this operation")
    return ctx
