"""Module: errors.

Domain error kinds raised by the service layer. Each kind maps to exactly
one HTTP status in ``groomdesk.main``; services never raise HTTPException.
"""


class DomainError(Exception):
    status_code = 400

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


# Required field missing or malformed, reported before any store call.
class ValidationFailed(DomainError):
    status_code = 400


class NotFound(DomainError):
    status_code = 404


class Conflict(DomainError):
    status_code = 409


class TransitionRejected(DomainError):
    """A status change the acting role is not allowed to make."""

    status_code = 409

    def __init__(self, current: str, requested: str, role: str):
        super().__init__(
            f"Cannot move appointment from '{current}' to '{requested}' as {role}"
        )
        self.current = current
        self.requested = requested
        self.role = role


class NotAuthenticated(DomainError):
    status_code = 401


class AccessDenied(DomainError):
    status_code = 403


class StoreError(DomainError):
    """Any failed read/write against the database; message stays generic."""

    status_code = 500
