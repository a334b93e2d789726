"""Module: lifecycle.

Appointment status rules.

Business order::

    pending -> confirmed | cancelled
    confirmed -> in-progress | cancelled
    in-progress -> completed | cancelled
    completed, cancelled: terminal

Customers may only cancel a pending appointment. Admins may set any status
from any status; moves outside the business order are allowed but logged.
"""

import logging
from decimal import Decimal

from groomdesk.core.enums import AppointmentStatus, Role
from groomdesk.core.errors import TransitionRejected

logger = logging.getLogger(__name__)

LIFECYCLE: dict[AppointmentStatus, frozenset[AppointmentStatus]] = {
    AppointmentStatus.PENDING: frozenset({AppointmentStatus.CONFIRMED, AppointmentStatus.CANCELLED}),
    AppointmentStatus.CONFIRMED: frozenset({AppointmentStatus.IN_PROGRESS, AppointmentStatus.CANCELLED}),
    AppointmentStatus.IN_PROGRESS: frozenset({AppointmentStatus.COMPLETED, AppointmentStatus.CANCELLED}),
    AppointmentStatus.COMPLETED: frozenset(),
    AppointmentStatus.CANCELLED: frozenset(),
}

CLOSED_STATUSES = frozenset({AppointmentStatus.COMPLETED, AppointmentStatus.CANCELLED})

CUSTOMER_TRANSITIONS = frozenset({(AppointmentStatus.PENDING, AppointmentStatus.CANCELLED)})


def follows_lifecycle(current: AppointmentStatus, requested: AppointmentStatus) -> bool:
    return requested in LIFECYCLE[current]


def can_transition(current: AppointmentStatus, requested: AppointmentStatus, role: Role) -> bool:
    if role == Role.ADMIN:
        return True
    return (current, requested) in CUSTOMER_TRANSITIONS


def check_transition(current: AppointmentStatus, requested: AppointmentStatus, role: Role) -> None:
    if not can_transition(current, requested, role):
        logger.info("Rejected %s move %s -> %s", role.value, current.value, requested.value)
        raise TransitionRejected(current.value, requested.value, role.value)
    if role == Role.ADMIN and current != requested and not follows_lifecycle(current, requested):
        # TODO: decide with the business whether admins should be held to LIFECYCLE.
        logger.warning(
            "Admin override outside lifecycle: %s -> %s", current.value, requested.value
        )


def is_upcoming(status: str | AppointmentStatus) -> bool:
    return AppointmentStatus(status) not in CLOSED_STATUSES


def partition_appointments(rows: list[dict]) -> tuple[list[dict], list[dict]]:
    """Split rows into (upcoming, past) by status; every row lands in exactly one."""
    upcoming, past = [], []
    for row in rows:
        (upcoming if is_upcoming(row["status"]) else past).append(row)
    return upcoming, past


def final_price(total_price, discount) -> float | None:
    # Display-only figure; never stored.
    if total_price is None:
        return None
    return float(Decimal(str(total_price)) - Decimal(str(discount or 0)))
