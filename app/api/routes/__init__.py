"""
API Routes package.
"""
from fastapi import APIRouter

from app.api.routes.admin import router as admin_router
from app.api.routes.applications import router as applications_router
from app.api.routes.auth import router as auth_router
from app.api.routes.employer import router as employer_router
from app.api.routes.health import router as health_router
from app.api.routes.jobs import router as jobs_router
from app.api.routes.wallet import router as wallet_router

# Main API router
api_router = APIRouter()

# Include all routers
api_router.include_router(health_router)
api_router.include_router(auth_router)
api_router.include_router(wallet_router)
api_router.include_router(jobs_router)
api_router.include_router(applications_router)
api_router.include_router(employer_router)
api_router.include_router(admin_router)

__all__ = [
    "api_router",
    "admin_router",
    "applications_router",
    "auth_router",
    "employer_router",
    "health_router",
    "jobs_router",
    "wallet_router",
]
