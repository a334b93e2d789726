"""Module: api."""

# backend/groomdesk/api/v1/api.py
from fastapi import APIRouter

# Core operational routes (health/auth).
from groomdesk.api.v1.routes.health import router as health_router
from groomdesk.api.v1.routes.auth import router as auth_router

# Customer portal routes.
from groomdesk.api.v1.routes.profile import router as profile_router
from groomdesk.api.v1.routes.pets import router as pets_router
from groomdesk.api.v1.routes.services import router as services_router
from groomdesk.api.v1.routes.groomers import router as groomers_router
from groomdesk.api.v1.routes.appointments import router as appointments_router
from groomdesk.api.v1.routes.dashboard import router as dashboard_router

# Back-office routes.
from groomdesk.api.v1.routes.admin import router as admin_router


api_router = APIRouter()

# Register operational endpoints first for service-level concerns.
api_router.include_router(health_router, prefix="/health", tags=["health"])
api_router.include_router(auth_router, prefix="/auth", tags=["auth"])

# Register portal endpoints consumed by the booking UI.
api_router.include_router(profile_router, prefix="/profile", tags=["profile"])
api_router.include_router(pets_router, prefix="/pets", tags=["pets"])
api_router.include_router(services_router, prefix="/services", tags=["services"])
api_router.include_router(groomers_router, prefix="/groomers", tags=["groomers"])
api_router.include_router(appointments_router, prefix="/appointments", tags=["appointments"])
api_router.include_router(dashboard_router, prefix="/dashboard", tags=["dashboard"])

api_router.include_router(admin_router, prefix="/admin", tags=["admin"])
