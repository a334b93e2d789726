# backend/groomdesk/db/models/__init__.py

from groomdesk.db.models.user import User
from groomdesk.db.models.profile import Profile
from groomdesk.db.models.user_role import UserRole
from groomdesk.db.models.auth_session import AuthSession

from groomdesk.db.models.pet import Pet
from groomdesk.db.models.service import Service
from groomdesk.db.models.groomer import Groomer
from groomdesk.db.models.appointment import Appointment
from groomdesk.db.models.service_history import ServiceHistory
from groomdesk.db.models.audit_log import AdminAuditLog
